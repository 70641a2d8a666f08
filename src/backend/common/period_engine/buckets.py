from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .config import ReportPolicy
from .models import FileRecord, ReportWindow, Sector, SiteOccurrence
from .results import TOTAL_BUCKET, bucket_key
from .temporal import is_within_window

SERVICE_SUMMARY_TABLE = "service_summary"
REVENUE_HEAD_TABLE = "revenue_head"
ACCOUNT_LEDGER_TABLE = "account_ledger"
WORK_STATUS_TABLE = "work_status"


def financial_table_id(sector: Sector) -> str:
    return f"finance_{sector.value}"


@dataclass(frozen=True)
class BucketRef:
    table_id: str
    key: str


def progress_buckets(occurrence: SiteOccurrence, policy: ReportPolicy) -> List[BucketRef]:
    """Route a site to every progress bucket it belongs to.

    Well tables and the service summary are independent views: a BWC site with a
    recognised diameter lands in both.
    """
    refs: List[BucketRef] = []
    site = occurrence.site
    app_type = occurrence.application_type
    for table in policy.well_tables:
        if site.purpose != table.purpose or not app_type:
            continue
        if site.diameter and site.diameter in table.diameters:
            refs.append(BucketRef(table.table_id, bucket_key(app_type, site.diameter)))
            refs.append(BucketRef(table.table_id, bucket_key(app_type, TOTAL_BUCKET)))
    if site.purpose and site.purpose in policy.service_purposes:
        refs.append(BucketRef(SERVICE_SUMMARY_TABLE, site.purpose))
    return refs


def financial_buckets(
    entry: FileRecord,
    policy: ReportPolicy,
    window: ReportWindow,
) -> List[BucketRef]:
    """Buckets a file's first remittance is attributed to.

    One file fans out to every service purpose among its sites, so the same
    remittance is counted under each of them.
    """
    sector = policy.sector_for(entry.application_type)
    first = entry.first_remittance
    if sector is None or first is None:
        return []
    if not is_within_window(first.date, window.start, window.end):
        return []
    table_id = financial_table_id(sector)
    return [
        BucketRef(table_id, purpose)
        for purpose in entry.purposes()
        if purpose in policy.service_purposes
    ]


def completion_bucket(occurrence: SiteOccurrence, policy: ReportPolicy) -> BucketRef | None:
    sector = policy.sector_for(occurrence.application_type)
    purpose = occurrence.site.purpose
    if sector is None or not purpose or purpose not in policy.service_purposes:
        return None
    return BucketRef(financial_table_id(sector), purpose)
