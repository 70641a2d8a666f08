from __future__ import annotations

import json
from datetime import tzinfo
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .models import Sector
from .temporal import DEFAULT_TIMEZONE, reporting_zone

SERVICE_PURPOSES = [
    "BWC",
    "TWC",
    "FPW",
    "BW Dev",
    "TW Dev",
    "FPW Dev",
    "MWSS",
    "MWSS Ext",
    "Pumping Scheme",
    "MWSS Pump Reno",
    "HPS",
    "HPR",
    "ARS",
]

APPLICATION_TYPES = [
    "Private_Domestic",
    "Private_Irrigation",
    "Private_Institution",
    "Private_Industry",
    "LSGD",
    "Government_Institution",
    "Government_Water_Authority",
    "Government_PMKSY",
    "Government_Others",
    "Collector_MPLAD",
    "Collector_MLASDF",
    "Collector_MLA_Asset_Development_Fund",
    "Collector_DRW",
    "Collector_SC/ST",
    "Collector_ARWSS",
    "Collector_Others",
    "GWBDWS",
    "Other_Schemes",
]

WORK_STATUSES = [
    "Under Process",
    "Addl. AS Awaited",
    "To be Refunded",
    "Awaiting Dept. Rig",
    "To be Tendered",
    "TS Pending",
    "Tendered",
    "Selection Notice Issued",
    "Work Order Issued",
    "Work in Progress",
    "Work Failed",
    "Work Completed",
]


class WellTablePolicy(BaseModel):
    table_id: str
    title: str = ""
    purpose: str
    diameters: List[str] = Field(default_factory=list)


def _default_well_tables() -> List[WellTablePolicy]:
    return [
        WellTablePolicy(
            table_id="bwc_progress",
            title="BWC - Progress Report",
            purpose="BWC",
            diameters=["110 mm (4.5”)", "150 mm (6”)"],
        ),
        WellTablePolicy(
            table_id="twc_progress",
            title="TWC - Progress Report",
            purpose="TWC",
            diameters=["150 mm (6”)", "200 mm (8”)"],
        ),
    ]


class ReportPolicy(BaseModel):
    """Department-configurable inputs to the period report.

    `refund_statuses` has no default: which work statuses count as "to be refunded"
    is a department decision and must be supplied by the caller.
    """

    refund_statuses: List[str]
    revenue_head_account: str = "RevenueHead"
    bank_accounts: List[str] = Field(default_factory=lambda: ["SBI", "STSB"])
    well_tables: List[WellTablePolicy] = Field(default_factory=_default_well_tables)
    service_purposes: List[str] = Field(default_factory=lambda: list(SERVICE_PURPOSES))
    application_types: List[str] = Field(default_factory=lambda: list(APPLICATION_TYPES))
    private_application_types: List[str] = Field(
        default_factory=lambda: [
            "Private_Domestic",
            "Private_Irrigation",
            "Private_Institution",
            "Private_Industry",
        ]
    )
    work_statuses: List[str] = Field(default_factory=lambda: list(WORK_STATUSES))
    # ARS has its own register and is left out of the status matrix.
    work_status_purposes: List[str] = Field(default_factory=lambda: [p for p in SERVICE_PURPOSES if p != "ARS"])
    # IANA zone whose calendar days the window covers.
    timezone: str = DEFAULT_TIMEZONE

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            reporting_zone(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown reporting timezone: {value!r}") from exc
        return value

    @model_validator(mode="after")
    def _unique_table_ids(self) -> "ReportPolicy":
        ids = [t.table_id for t in self.well_tables]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate well table ids: {ids}")
        return self

    def sector_for(self, application_type: Optional[str]) -> Optional[Sector]:
        if not application_type:
            return None
        if application_type in self.private_application_types:
            return Sector.PRIVATE
        return Sector.GOVERNMENT

    def is_refund_status(self, work_status: Optional[str]) -> bool:
        return bool(work_status) and work_status in self.refund_statuses

    def zone(self) -> tzinfo:
        return reporting_zone(self.timezone)


def load_report_policy(path: Path) -> ReportPolicy:
    """Load a policy from a YAML or JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Report policy file {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Report policy file {path} must contain a mapping.")
    return ReportPolicy.model_validate(raw.get("policy", raw))


def default_policy_path() -> Path:
    return Path(__file__).resolve().parents[4] / "config" / "report_policy.yaml"
