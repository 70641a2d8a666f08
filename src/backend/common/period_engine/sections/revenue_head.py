from __future__ import annotations

from decimal import Decimal
from typing import List

from ..buckets import REVENUE_HEAD_TABLE
from ..context import ReportContext
from ..models import FileRecord, LedgerEntry, LedgerSource
from ..registry import register_section
from ..results import LedgerStats, LedgerTable, Metric
from ..section import ReportSection

REVENUE_HEAD_BUCKET = "Revenue Head"


def _entry(entry: FileRecord, **kwargs) -> LedgerEntry:
    return LedgerEntry(
        file_no=entry.file_no,
        applicant_name=entry.applicant_name,
        site_names=entry.site_names(),
        purposes=entry.purposes(),
        **kwargs,
    )


def scan_revenue_head(ctx: ReportContext) -> Metric:
    """Remittances tagged for the revenue account plus revenue-head amounts from payments.

    These are raw sub-records, not sites, so nothing is deduplicated.
    """
    account = ctx.policy.revenue_head_account
    entries: List[LedgerEntry] = []
    for entry in ctx.snapshot.files:
        for rd in entry.remittances:
            if rd.account == account and ctx.in_window(rd.date):
                entries.append(
                    _entry(
                        entry,
                        source=LedgerSource.DIRECT_REMITTANCE,
                        account=rd.account,
                        amount=rd.amount or Decimal("0"),
                        date=rd.date,
                    )
                )
        for pd in entry.payments:
            amount = pd.revenue_head or Decimal("0")
            if amount > 0 and ctx.in_window(pd.date):
                entries.append(
                    _entry(
                        entry,
                        source=LedgerSource.FROM_PAYMENT,
                        account=account,
                        amount=amount,
                        date=pd.date,
                    )
                )
    total = sum((e.amount for e in entries), Decimal("0"))
    return Metric.of(entries, amount=total)


@register_section
class REVENUE_HEAD(ReportSection):
    section_id = "REVENUE-HEAD"
    section_title = "Revenue head credits"
    table_ids = (REVENUE_HEAD_TABLE,)

    def build(self, ctx: ReportContext) -> List[LedgerTable]:
        credit = scan_revenue_head(ctx)
        return [
            LedgerTable(
                table_id=REVENUE_HEAD_TABLE,
                title="Revenue Head - Credit Details",
                buckets={REVENUE_HEAD_BUCKET: LedgerStats(credit=credit, balance=credit.amount)},
            )
        ]
