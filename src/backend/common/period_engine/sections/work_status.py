from __future__ import annotations

from typing import Dict, List

from ..buckets import WORK_STATUS_TABLE
from ..context import ReportContext
from ..dedupe import OccurrenceSet
from ..registry import register_section
from ..results import Metric, WorkStatusRow, WorkStatusTable
from ..section import ReportSection

TOTAL_ROW = "Total No. of Works/Files"


@register_section
class WORK_STATUS_BY_SERVICE(ReportSection):
    """Current work status of every site, by service.

    This is a point-in-time view of the snapshot; the report window does not apply.
    """

    section_id = "WORK-STATUS-BY-SERVICE"
    section_title = "Work status by service"
    table_ids = (WORK_STATUS_TABLE,)

    def build(self, ctx: ReportContext) -> List[WorkStatusTable]:
        purposes = list(ctx.policy.work_status_purposes)
        grid: Dict[str, Dict[str, OccurrenceSet]] = {
            status: {p: OccurrenceSet() for p in purposes} for status in ctx.policy.work_statuses
        }

        for occ in ctx.occurrences():
            row = grid.get(occ.site.work_status or "")
            if row is None or occ.site.purpose not in row:
                continue
            row[occ.site.purpose].add(occ)

        column_totals = {p: OccurrenceSet() for p in purposes}
        buckets = {}
        for status, row in grid.items():
            row_total = OccurrenceSet()
            for purpose, cell in row.items():
                row_total = row_total.union(cell)
                column_totals[purpose] = column_totals[purpose].union(cell)
            buckets[status] = WorkStatusRow(
                cells={p: Metric.of(cell) for p, cell in row.items()},
                total=Metric.of(row_total),
            )

        grand = OccurrenceSet()
        for cell in column_totals.values():
            grand = grand.union(cell)
        buckets[TOTAL_ROW] = WorkStatusRow(
            cells={p: Metric.of(cell) for p, cell in column_totals.items()},
            total=Metric.of(grand),
        )
        return [WorkStatusTable(table_id=WORK_STATUS_TABLE, title="Work Status by Service", buckets=buckets)]
