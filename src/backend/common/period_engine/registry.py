from __future__ import annotations

from typing import Dict, Iterable, Optional, Type

from .section import ReportSection


class SectionRegistry:
    """Report sections by id, together with the table ids each one owns."""

    def __init__(self):
        self._sections: Dict[str, Type[ReportSection]] = {}
        self._table_owners: Dict[str, str] = {}

    def register(self, section_cls: Type[ReportSection]) -> None:
        section_id = getattr(section_cls, "section_id", None)
        if not section_id:
            raise ValueError("Section class missing section_id")
        if section_id in self._sections:
            raise ValueError(f"Duplicate section_id registered: {section_id}")
        table_ids = tuple(getattr(section_cls, "table_ids", ()) or ())
        for table_id in table_ids:
            owner = self._table_owners.get(table_id)
            if owner is not None:
                raise ValueError(f"Table '{table_id}' is already produced by section {owner}; cannot register {section_id}.")
        self._sections[section_id] = section_cls
        for table_id in table_ids:
            self._table_owners[table_id] = section_id

    def create(self, section_ids: Optional[Iterable[str]] = None) -> list[ReportSection]:
        """Instantiate sections in registration order, optionally limited to `section_ids`."""
        if section_ids is None:
            return [cls() for cls in self._sections.values()]
        wanted = set(section_ids)
        unknown = sorted(wanted - set(self._sections))
        if unknown:
            raise ValueError(f"Unknown report section(s): {', '.join(unknown)}")
        return [cls() for sid, cls in self._sections.items() if sid in wanted]

    def get(self, section_id: str) -> Type[ReportSection]:
        return self._sections[section_id]

    def ids(self) -> Iterable[str]:
        return self._sections.keys()


registry = SectionRegistry()


def register_section(section_cls: Type[ReportSection]) -> Type[ReportSection]:
    registry.register(section_cls)
    return section_cls
