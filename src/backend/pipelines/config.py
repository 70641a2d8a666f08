from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from common.period_engine.config import default_policy_path


load_dotenv()


@dataclass(frozen=True)
class ReportSettings:
    data_source: str
    snapshot_path: Path | None
    policy_path: Path
    output_dir: Path
    log_level: str


def get_report_settings() -> ReportSettings:
    """
    Load report runner settings from environment variables.

    Reads:
      DATA_SOURCE, REPORT_SNAPSHOT_PATH, REPORT_POLICY_PATH,
      REPORT_OUTPUT_DIR, LOG_LEVEL
    """
    snapshot = os.getenv("REPORT_SNAPSHOT_PATH", "").strip()
    policy = os.getenv("REPORT_POLICY_PATH", "").strip()
    return ReportSettings(
        data_source=os.getenv("DATA_SOURCE", "fixtures").strip().lower(),
        snapshot_path=Path(snapshot) if snapshot else None,
        policy_path=Path(policy) if policy else default_policy_path(),
        output_dir=Path(os.getenv("REPORT_OUTPUT_DIR", ".").strip() or "."),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def require_snapshot_path(settings: ReportSettings) -> Path:
    if settings.snapshot_path is None:
        raise ValueError("Missing required environment variable: REPORT_SNAPSHOT_PATH")
    return settings.snapshot_path
