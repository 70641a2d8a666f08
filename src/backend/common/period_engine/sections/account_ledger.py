from __future__ import annotations

from decimal import Decimal
from typing import List

from ..buckets import ACCOUNT_LEDGER_TABLE
from ..context import ReportContext
from ..models import LedgerEntry, LedgerSource
from ..registry import register_section
from ..results import LedgerStats, LedgerTable, Metric
from ..section import ReportSection
from .revenue_head import scan_revenue_head


def _total(entries: List[LedgerEntry]) -> Decimal:
    return sum((e.amount for e in entries), Decimal("0"))


@register_section
class ACCOUNT_LEDGER(ReportSection):
    section_id = "ACCOUNT-LEDGER"
    section_title = "Credits, withdrawals and balances per account"
    table_ids = (ACCOUNT_LEDGER_TABLE,)

    def build(self, ctx: ReportContext) -> List[LedgerTable]:
        accounts = list(ctx.policy.bank_accounts)
        credits = {name: [] for name in accounts}
        debits = {name: [] for name in accounts}

        for entry in ctx.snapshot.files:
            context = dict(
                file_no=entry.file_no,
                applicant_name=entry.applicant_name,
                site_names=entry.site_names(),
                purposes=entry.purposes(),
            )
            for rd in entry.remittances:
                if rd.account in credits and ctx.in_window(rd.date):
                    credits[rd.account].append(
                        LedgerEntry(
                            source=LedgerSource.DIRECT_REMITTANCE,
                            account=rd.account,
                            amount=rd.amount or Decimal("0"),
                            date=rd.date,
                            **context,
                        )
                    )
            for pd in entry.payments:
                amount = pd.debit_amount()
                if pd.account in debits and amount > 0 and ctx.in_window(pd.date):
                    debits[pd.account].append(
                        LedgerEntry(
                            source=LedgerSource.FROM_PAYMENT,
                            account=pd.account,
                            amount=amount,
                            date=pd.date,
                            **context,
                        )
                    )

        buckets = {}
        for name in accounts:
            credit = Metric.of(credits[name], amount=_total(credits[name]))
            debit = Metric.of(debits[name], amount=_total(debits[name]))
            buckets[name] = LedgerStats(credit=credit, debit=debit, balance=credit.amount - debit.amount)

        revenue = scan_revenue_head(ctx)
        buckets[ctx.policy.revenue_head_account] = LedgerStats(credit=revenue, balance=revenue.amount)

        return [LedgerTable(table_id=ACCOUNT_LEDGER_TABLE, title="Finance Overview", buckets=buckets)]
