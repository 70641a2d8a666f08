from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .config import ReportPolicy
from .flatten import flatten_sites
from .models import FileSnapshot, ReportWindow, SiteOccurrence
from .temporal import is_within_window, was_active_before


@dataclass(frozen=True)
class ReportContext:
    window: ReportWindow
    snapshot: FileSnapshot
    policy: ReportPolicy

    def __post_init__(self):
        # Window bounds are local days; aware dates are moved into the reporting zone.
        object.__setattr__(self, "snapshot", self.snapshot.localized(self.policy.zone()))

    def occurrences(self) -> List[SiteOccurrence]:
        return flatten_sites(self.snapshot.files)

    def in_window(self, value) -> bool:
        return is_within_window(value, self.window.start, self.window.end)

    def active_before(self, first_activity, completion) -> bool:
        return was_active_before(first_activity, completion, self.window.start)
