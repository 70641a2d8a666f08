from __future__ import annotations

import logging
from typing import Dict, List

from ..accumulator import ProgressAccumulator
from ..buckets import SERVICE_SUMMARY_TABLE, progress_buckets
from ..context import ReportContext
from ..flatten import flatten_sites
from ..models import SiteOccurrence
from ..registry import register_section
from ..results import TOTAL_BUCKET, ProgressTable, bucket_key
from ..section import ReportSection

logger = logging.getLogger(__name__)


def completed_sites_in_window(ctx: ReportContext) -> List[SiteOccurrence]:
    """Independent scan of every site whose completion date falls in the window."""
    return [
        occ
        for occ in flatten_sites(ctx.snapshot.files)
        if ctx.in_window(occ.site.completion_date)
    ]


@register_section
class SITE_PROGRESS(ReportSection):
    section_id = "SITE-PROGRESS"
    section_title = "Site progress by application type, diameter and service"
    table_ids = (SERVICE_SUMMARY_TABLE,)

    def build(self, ctx: ReportContext) -> List[ProgressTable]:
        policy = ctx.policy
        accumulators: Dict[str, ProgressAccumulator] = {}
        titles: Dict[str, str] = {}

        for well in policy.well_tables:
            columns = [*well.diameters, TOTAL_BUCKET]
            keys = [bucket_key(app, col) for app in policy.application_types for col in columns]
            accumulators[well.table_id] = ProgressAccumulator(ctx.window, policy, keys)
            titles[well.table_id] = well.title
        accumulators[SERVICE_SUMMARY_TABLE] = ProgressAccumulator(
            ctx.window, policy, policy.service_purposes
        )
        titles[SERVICE_SUMMARY_TABLE] = "Other Services - Progress Summary"

        for occ in ctx.occurrences():
            for ref in progress_buckets(occ, policy):
                accumulators[ref.table_id].add(ref.key, occ)

        # The completion scan reaches sites already seen above; keyed sets collapse them.
        for occ in completed_sites_in_window(ctx):
            for ref in progress_buckets(occ, policy):
                accumulators[ref.table_id].add_completed(ref.key, occ)

        tables = []
        for table_id, acc in accumulators.items():
            buckets = acc.finalize()
            logger.debug("Progress table %s: %d buckets", table_id, len(buckets))
            tables.append(ProgressTable(table_id=table_id, title=titles[table_id], buckets=buckets))
        return tables
