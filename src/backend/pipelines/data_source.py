from __future__ import annotations

import json
import logging
from datetime import tzinfo
from pathlib import Path
from typing import Protocol

from adapters.file_records import file_snapshot_from_documents
from common.period_engine.models import FileSnapshot

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    def load_snapshot(self) -> FileSnapshot:
        """Return every file record the report should cover."""
        ...


def get_data_source(
    name: str,
    *,
    snapshot_path: Path | None = None,
    tz: tzinfo | None = None,
) -> DataSource:
    """Resolve a data source implementation by name (fixtures)."""
    source = (name or "").strip().lower()
    if source in ("fixtures", ""):
        if snapshot_path is None:
            raise ValueError("The fixtures data source requires a snapshot path.")
        return FixturesDataSource(snapshot_path, tz=tz)
    raise ValueError(f"Unknown data source '{name}' (expected 'fixtures').")


class FixturesDataSource:
    """Reads file documents exported as JSON."""

    def __init__(self, snapshot_path: Path, *, tz: tzinfo | None = None) -> None:
        self._snapshot_path = Path(snapshot_path)
        self._tz = tz

    def load_snapshot(self) -> FileSnapshot:
        with self._snapshot_path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
        snapshot = file_snapshot_from_documents(payload, source=str(self._snapshot_path), tz=self._tz)
        logger.info("Loaded %d files from %s", len(snapshot.files), self._snapshot_path)
        return snapshot
