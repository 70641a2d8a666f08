from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from .context import ReportContext


class ReportSection(ABC):
    section_id: str
    section_title: str
    # Tables the section always produces; policy-driven tables are checked when the report is built.
    table_ids: Tuple[str, ...] = ()

    def __init__(self):
        if not getattr(self, "section_id", None):
            raise ValueError("ReportSection must define section_id")

    @abstractmethod
    def build(self, ctx: ReportContext) -> List:  # pragma: no cover
        """Return the report tables this section produces."""
        raise NotImplementedError
