from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from ..buckets import completion_bucket, financial_buckets, financial_table_id
from ..context import ReportContext
from ..dedupe import OccurrenceSet
from ..models import FileEntry, Sector, SiteOccurrence
from ..registry import register_section
from ..results import TOTAL_BUCKET, FinancialStats, FinancialTable, Metric
from ..section import ReportSection

logger = logging.getLogger(__name__)

_TITLES = {
    Sector.PRIVATE: "Financial Summary - Private Applications",
    Sector.GOVERNMENT: "Financial Summary - Government Applications",
}


@dataclass
class _PurposeRollup:
    applications: OccurrenceSet = field(default_factory=OccurrenceSet)
    completed: OccurrenceSet = field(default_factory=OccurrenceSet)

    def to_stats(self) -> FinancialStats:
        remitted = sum((e.amount for e in self.applications), Decimal("0"))
        paid = sum(
            (occ.site.total_expenditure or Decimal("0") for occ in self.completed),
            Decimal("0"),
        )
        return FinancialStats(
            applications=Metric.of(self.applications, amount=remitted),
            completed=Metric.of(self.completed, amount=paid),
        )


class FinancialRollup:
    """Remittance and payment totals for one sector, keyed by purpose."""

    def __init__(self, purposes: Iterable[str] = ()):
        self._purposes: Dict[str, _PurposeRollup] = {p: _PurposeRollup() for p in purposes}

    def _get(self, purpose: str) -> _PurposeRollup:
        if purpose not in self._purposes:
            self._purposes[purpose] = _PurposeRollup()
        return self._purposes[purpose]

    def add_application(self, purpose: str, entry: FileEntry) -> bool:
        return self._get(purpose).applications.add(entry)

    def add_completion(self, purpose: str, occurrence: SiteOccurrence) -> bool:
        return self._get(purpose).completed.add(occurrence)

    def finalize(self) -> Dict[str, FinancialStats]:
        buckets = {purpose: rollup.to_stats() for purpose, rollup in self._purposes.items()}
        total = _PurposeRollup()
        for rollup in self._purposes.values():
            total.applications = total.applications.union(rollup.applications)
            total.completed = total.completed.union(rollup.completed)
        buckets[TOTAL_BUCKET] = total.to_stats()
        return buckets


@register_section
class FINANCIAL_SUMMARY(ReportSection):
    section_id = "FINANCIAL-SUMMARY"
    section_title = "Remittances and payments by purpose, private vs government"
    table_ids = tuple(financial_table_id(s) for s in Sector)

    def build(self, ctx: ReportContext) -> List[FinancialTable]:
        policy = ctx.policy
        rollups = {financial_table_id(s): FinancialRollup(policy.service_purposes) for s in Sector}

        for entry in ctx.snapshot.files:
            first = entry.first_remittance
            for ref in financial_buckets(entry, policy, ctx.window):
                rollups[ref.table_id].add_application(
                    ref.key,
                    FileEntry(
                        file_no=entry.file_no,
                        applicant_name=entry.applicant_name,
                        application_type=entry.application_type,
                        purpose=ref.key,
                        amount=first.amount or Decimal("0"),
                        date=first.date,
                    ),
                )

        for occ in ctx.occurrences():
            if not ctx.in_window(occ.site.completion_date):
                continue
            ref = completion_bucket(occ, policy)
            if ref is not None:
                rollups[ref.table_id].add_completion(ref.key, occ)

        tables = []
        for sector in Sector:
            table_id = financial_table_id(sector)
            buckets = rollups[table_id].finalize()
            logger.debug("Financial table %s: %d buckets", table_id, len(buckets))
            tables.append(
                FinancialTable(
                    table_id=table_id,
                    title=_TITLES[sector],
                    sector=sector.value,
                    buckets=buckets,
                )
            )
        return tables
