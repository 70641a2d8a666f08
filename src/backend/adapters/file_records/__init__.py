"""Adapters from stored file documents to engine snapshots (no I/O)."""

from .dates import normalize_date
from .documents import file_snapshot_from_documents

__all__ = [
    "file_snapshot_from_documents",
    "normalize_date",
]
