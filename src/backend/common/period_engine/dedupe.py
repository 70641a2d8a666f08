from __future__ import annotations

from typing import Dict, Hashable, Iterable, Iterator, List

from .models import SiteKey, SiteOccurrence


def natural_key(occurrence: SiteOccurrence) -> SiteKey:
    return occurrence.natural_key


def dedupe_occurrences(occurrences: Iterable[SiteOccurrence]) -> List[SiteOccurrence]:
    """Collapse occurrences sharing (file_no, site name, purpose); the first one seen wins."""
    return OccurrenceSet(occurrences).records()


class OccurrenceSet:
    """Insertion-ordered set of records keyed by their `natural_key`.

    Membership, union and difference all compare keys, never object identity, so
    the same site reached through two scan passes counts once.
    """

    def __init__(self, records: Iterable = ()):
        self._items: Dict[Hashable, object] = {}
        for record in records:
            self.add(record)

    def add(self, record) -> bool:
        key = record.natural_key
        if key in self._items:
            return False
        self._items[key] = record
        return True

    def __contains__(self, record) -> bool:
        return record.natural_key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator:
        return iter(self._items.values())

    def keys(self) -> set:
        return set(self._items)

    def records(self) -> list:
        return list(self._items.values())

    def union(self, other: "OccurrenceSet") -> "OccurrenceSet":
        out = OccurrenceSet(self)
        for record in other:
            out.add(record)
        return out

    def difference(self, other: "OccurrenceSet") -> "OccurrenceSet":
        excluded = other.keys()
        return OccurrenceSet(r for k, r in self._items.items() if k not in excluded)

    def intersection(self, other: "OccurrenceSet") -> "OccurrenceSet":
        kept = other.keys()
        return OccurrenceSet(r for k, r in self._items.items() if k in kept)
