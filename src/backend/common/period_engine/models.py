from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from decimal import Decimal
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from .temporal import to_local_naive


class Sector(str, Enum):
    PRIVATE = "private"
    GOVERNMENT = "government"


class LedgerSource(str, Enum):
    DIRECT_REMITTANCE = "Direct Remittance"
    FROM_PAYMENT = "From Payment"


class RemittanceRecord(BaseModel):
    amount: Optional[Decimal] = None
    date: Optional[datetime] = None
    account: Optional[str] = None


class PaymentRecord(BaseModel):
    date: Optional[datetime] = None
    account: Optional[str] = None
    revenue_head: Optional[Decimal] = None
    contractors_payment: Optional[Decimal] = None
    gst: Optional[Decimal] = None
    income_tax: Optional[Decimal] = None
    kbcwb: Optional[Decimal] = None
    refund_to_party: Optional[Decimal] = None

    def debit_amount(self) -> Decimal:
        parts = (
            self.contractors_payment,
            self.gst,
            self.income_tax,
            self.kbcwb,
            self.refund_to_party,
        )
        return sum((p or Decimal("0") for p in parts), Decimal("0"))


class SiteRecord(BaseModel):
    name: str = ""
    purpose: Optional[str] = None
    diameter: Optional[str] = None
    work_status: Optional[str] = None
    completion_date: Optional[datetime] = None
    total_expenditure: Optional[Decimal] = None


class FileRecord(BaseModel):
    file_no: str
    applicant_name: str = ""
    application_type: Optional[str] = None
    sites: List[SiteRecord] = Field(default_factory=list)
    remittances: List[RemittanceRecord] = Field(default_factory=list)
    payments: List[PaymentRecord] = Field(default_factory=list)

    @property
    def first_remittance(self) -> Optional[RemittanceRecord]:
        # Entry order is the order the department recorded them in.
        return self.remittances[0] if self.remittances else None

    def site_names(self) -> List[str]:
        return [s.name or "N/A" for s in self.sites]

    def purposes(self) -> List[str]:
        out: List[str] = []
        for site in self.sites:
            if site.purpose and site.purpose not in out:
                out.append(site.purpose)
        return out

    def localized(self, tz: tzinfo) -> "FileRecord":
        sites = [_localize(s, "completion_date", tz) for s in self.sites]
        remittances = [_localize(r, "date", tz) for r in self.remittances]
        payments = [_localize(p, "date", tz) for p in self.payments]
        unchanged = all(
            new is old
            for new, old in zip(
                [*sites, *remittances, *payments],
                [*self.sites, *self.remittances, *self.payments],
            )
        )
        if unchanged:
            return self
        return self.model_copy(update={"sites": sites, "remittances": remittances, "payments": payments})


def _localize(record: BaseModel, field: str, tz: tzinfo):
    value = getattr(record, field)
    if value is None or value.tzinfo is None:
        return record
    return record.model_copy(update={field: to_local_naive(value, tz)})


class FileSnapshot(BaseModel):
    """All file records the engine reports over.

    Dates are compared as naive local times; `localized` rewrites any
    timezone-aware value into the reporting zone first.
    """

    files: Tuple[FileRecord, ...] = ()
    source: str = ""

    def site_count(self) -> int:
        return sum(len(f.sites) for f in self.files)

    def localized(self, tz: tzinfo) -> "FileSnapshot":
        files = tuple(f.localized(tz) for f in self.files)
        if all(new is old for new, old in zip(files, self.files)):
            return self
        return self.model_copy(update={"files": files})


class ReportWindow(BaseModel):
    start: date
    end: date

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "ReportWindow":
        if self.end < self.start:
            raise ValueError(
                f"Report window end ({self.end.isoformat()}) precedes start ({self.start.isoformat()})."
            )
        return self

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def end_at(self) -> datetime:
        return datetime.combine(self.end, time.max)

    def label(self) -> str:
        return f"{self.start.isoformat()}_{self.end.isoformat()}"


SiteKey = Tuple[str, str, str]


class SiteOccurrence(BaseModel):
    """One site with the owning file's context attached."""

    record_type: Literal["site"] = "site"
    site: SiteRecord
    file_no: str
    applicant_name: str = ""
    application_type: Optional[str] = None
    first_remittance_date: Optional[datetime] = None
    first_remittance_amount: Optional[Decimal] = None

    @property
    def natural_key(self) -> SiteKey:
        return (self.file_no, self.site.name, self.site.purpose or "")


class FileEntry(BaseModel):
    """A file counted under one purpose of a financial summary."""

    record_type: Literal["file"] = "file"
    file_no: str
    applicant_name: str = ""
    application_type: Optional[str] = None
    purpose: str
    amount: Decimal = Decimal("0")
    date: Optional[datetime] = None

    @property
    def natural_key(self) -> Tuple[str, str]:
        return (self.file_no, self.purpose)


class LedgerEntry(BaseModel):
    """A single credit or debit line backing an account total."""

    record_type: Literal["ledger"] = "ledger"
    file_no: str
    applicant_name: str = ""
    site_names: List[str] = Field(default_factory=list)
    purposes: List[str] = Field(default_factory=list)
    source: LedgerSource
    account: Optional[str] = None
    amount: Decimal = Decimal("0")
    date: Optional[datetime] = None
