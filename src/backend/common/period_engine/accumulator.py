from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, NamedTuple

from .config import ReportPolicy
from .dedupe import OccurrenceSet
from .models import ReportWindow, SiteOccurrence
from .results import Metric, ProgressStats
from .temporal import is_within_window, was_active_before

logger = logging.getLogger(__name__)


class Memberships(NamedTuple):
    current_applications: bool
    previous_balance: bool
    completed: bool
    to_be_refunded: bool


def evaluate_memberships(
    occurrence: SiteOccurrence,
    window: ReportWindow,
    policy: ReportPolicy,
) -> Memberships:
    remitted_at = occurrence.first_remittance_date
    completed_at = occurrence.site.completion_date
    return Memberships(
        current_applications=is_within_window(remitted_at, window.start, window.end),
        previous_balance=was_active_before(remitted_at, completed_at, window.start),
        completed=is_within_window(completed_at, window.start, window.end),
        to_be_refunded=policy.is_refund_status(occurrence.site.work_status),
    )


@dataclass
class _BucketSets:
    previous_balance: OccurrenceSet = field(default_factory=OccurrenceSet)
    current_applications: OccurrenceSet = field(default_factory=OccurrenceSet)
    to_be_refunded: OccurrenceSet = field(default_factory=OccurrenceSet)
    completed: OccurrenceSet = field(default_factory=OccurrenceSet)

    def finalize(self) -> ProgressStats:
        opened = self.previous_balance.union(self.current_applications)
        total = opened.difference(self.to_be_refunded)
        balance = total.difference(self.completed)
        return ProgressStats(
            previous_balance=Metric.of(self.previous_balance),
            current_applications=Metric.of(self.current_applications),
            to_be_refunded=Metric.of(self.to_be_refunded),
            total_applications=Metric.of(total),
            completed=Metric.of(self.completed),
            balance=Metric.of(balance),
        )


class ProgressAccumulator:
    """Keyed reconciliation sets for the buckets of one progress table.

    Totals and balances are derived with set operations over natural keys when the
    table is finalized; they are never adjusted with counter arithmetic.
    """

    def __init__(self, window: ReportWindow, policy: ReportPolicy, bucket_keys: Iterable[str] = ()):
        self._window = window
        self._policy = policy
        self._buckets: Dict[str, _BucketSets] = {}
        for key in bucket_keys:
            self.ensure(key)

    def ensure(self, key: str) -> _BucketSets:
        sets = self._buckets.get(key)
        if sets is None:
            sets = _BucketSets()
            self._buckets[key] = sets
        return sets

    def add(self, key: str, occurrence: SiteOccurrence) -> Memberships:
        sets = self.ensure(key)
        flags = evaluate_memberships(occurrence, self._window, self._policy)
        if flags.current_applications:
            sets.current_applications.add(occurrence)
        if flags.previous_balance:
            sets.previous_balance.add(occurrence)
        if flags.completed:
            sets.completed.add(occurrence)
        if flags.to_be_refunded:
            sets.to_be_refunded.add(occurrence)
        return flags

    def add_completed(self, key: str, occurrence: SiteOccurrence) -> bool:
        """Record a site found by the completed-in-window pre-pass."""
        return self.ensure(key).completed.add(occurrence)

    def finalize(self) -> Dict[str, ProgressStats]:
        out = {key: sets.finalize() for key, sets in self._buckets.items()}
        logger.debug("Finalized %d progress buckets", len(out))
        return out
