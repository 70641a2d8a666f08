import os
import sys


# Put `src/backend` on sys.path when this folder is run on its own.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import date, datetime
from decimal import Decimal

import pytest

from common.period_engine.config import ReportPolicy
from common.period_engine.context import ReportContext
from common.period_engine.models import (
    FileRecord,
    FileSnapshot,
    PaymentRecord,
    RemittanceRecord,
    ReportWindow,
    SiteRecord,
)
from common.period_engine.runner import build_period_report

BWC_SMALL = "110 mm (4.5”)"
BWC_LARGE = "150 mm (6”)"


@pytest.fixture
def window() -> ReportWindow:
    return ReportWindow(start=date(2024, 4, 1), end=date(2024, 6, 30))


@pytest.fixture
def policy() -> ReportPolicy:
    return ReportPolicy(refund_statuses=["To be Refunded"])


@pytest.fixture
def make_site():
    def _make(
        *,
        name: str = "Site A",
        purpose: str | None = "BWC",
        diameter: str | None = BWC_SMALL,
        work_status: str | None = "Work in Progress",
        completion_date: datetime | None = None,
        total_expenditure=None,
    ) -> SiteRecord:
        return SiteRecord(
            name=name,
            purpose=purpose,
            diameter=diameter,
            work_status=work_status,
            completion_date=completion_date,
            total_expenditure=Decimal(str(total_expenditure)) if total_expenditure is not None else None,
        )

    return _make


@pytest.fixture
def make_file(make_site):
    def _make(
        *,
        file_no: str = "GWD/1/2024",
        applicant_name: str = "Applicant",
        application_type: str | None = "Private_Domestic",
        sites=None,
        remitted_at: datetime | None = None,
        remitted_amount=None,
        remittances=None,
        payments=None,
    ) -> FileRecord:
        if remittances is None:
            remittances = []
            if remitted_at is not None or remitted_amount is not None:
                remittances.append(
                    RemittanceRecord(
                        date=remitted_at,
                        amount=Decimal(str(remitted_amount)) if remitted_amount is not None else None,
                        account="SBI",
                    )
                )
        return FileRecord(
            file_no=file_no,
            applicant_name=applicant_name,
            application_type=application_type,
            sites=list(sites) if sites is not None else [make_site()],
            remittances=list(remittances),
            payments=list(payments or []),
        )

    return _make


@pytest.fixture
def make_snapshot():
    def _make(*files: FileRecord) -> FileSnapshot:
        return FileSnapshot(files=tuple(files), source="test")

    return _make


@pytest.fixture
def make_ctx(window, policy):
    def _make(snapshot: FileSnapshot, *, report_window: ReportWindow | None = None) -> ReportContext:
        return ReportContext(window=report_window or window, snapshot=snapshot, policy=policy)

    return _make


@pytest.fixture
def make_report(window, policy):
    def _make(*files: FileRecord, report_window: ReportWindow | None = None):
        snapshot = FileSnapshot(files=tuple(files), source="test")
        return build_period_report(snapshot, report_window or window, policy)

    return _make


@pytest.fixture
def remittance():
    def _make(amount, when: datetime | None, account: str | None = "SBI") -> RemittanceRecord:
        return RemittanceRecord(amount=Decimal(str(amount)) if amount is not None else None, date=when, account=account)

    return _make


@pytest.fixture
def payment():
    def _make(when: datetime | None, *, account: str | None = "SBI", **amounts) -> PaymentRecord:
        return PaymentRecord(
            date=when,
            account=account,
            **{k: Decimal(str(v)) for k, v in amounts.items()},
        )

    return _make
