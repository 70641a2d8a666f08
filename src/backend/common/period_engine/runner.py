from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from .buckets import ACCOUNT_LEDGER_TABLE
from .config import ReportPolicy
from .context import ReportContext
from .models import FileSnapshot, ReportWindow
from .registry import registry
from .results import LedgerTable, PeriodReport

logger = logging.getLogger(__name__)


class PeriodReportRunner:
    def __init__(self, sections: Optional[Iterable] = None):
        self._sections = list(sections) if sections is not None else registry.create()

    def run(self, ctx: ReportContext, *, section_ids: Optional[set[str]] = None) -> PeriodReport:
        if section_ids is not None:
            unknown = sorted(set(section_ids) - {s.section_id for s in self._sections})
            if unknown:
                raise ValueError(f"Unknown report section(s): {', '.join(unknown)}")
        tables = {}
        for section in self._sections:
            if section_ids is not None and section.section_id not in section_ids:
                continue
            for table in section.build(ctx):
                if table.table_id in tables:
                    raise ValueError(f"Table '{table.table_id}' produced by more than one section.")
                tables[table.table_id] = table

        grand_total = Decimal("0")
        ledger = tables.get(ACCOUNT_LEDGER_TABLE)
        if isinstance(ledger, LedgerTable):
            grand_total = ledger.total_balance

        report = PeriodReport(
            window=ctx.window,
            tables=tables,
            grand_total=grand_total,
            files_scanned=len(ctx.snapshot.files),
            sites_scanned=ctx.snapshot.site_count(),
        )
        logger.info(
            "Built period report %s: %d tables over %d files / %d sites",
            ctx.window.label(),
            len(tables),
            report.files_scanned,
            report.sites_scanned,
        )
        return report


def build_period_report(
    snapshot: FileSnapshot,
    window: Optional[ReportWindow],
    policy: ReportPolicy,
    *,
    section_ids: Optional[set[str]] = None,
) -> PeriodReport:
    """Reconcile `snapshot` over `window`.

    A missing window is a caller error and fails fast; the engine has no
    "all time" mode.
    """
    if window is None:
        raise ValueError("A report window (start and end dates) is required to build a period report.")
    ctx = ReportContext(window=window, snapshot=snapshot, policy=policy)
    return PeriodReportRunner().run(ctx, section_ids=section_ids)
