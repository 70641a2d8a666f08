from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Dict, Iterable, Iterator, List, Literal, Tuple, Union

from pydantic import BaseModel, Field, model_validator

from .models import FileEntry, LedgerEntry, ReportWindow, SiteOccurrence

DrilldownRecord = Annotated[
    Union[SiteOccurrence, FileEntry, LedgerEntry],
    Field(discriminator="record_type"),
]

TOTAL_BUCKET = "Total"
KEY_SEPARATOR = "::"


def bucket_key(*parts: str) -> str:
    return KEY_SEPARATOR.join(parts)


class Metric(BaseModel):
    """A displayed number together with the exact records that produced it."""

    count: int = 0
    amount: Decimal = Decimal("0")
    records: List[DrilldownRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _count_matches_records(self) -> "Metric":
        if self.count != len(self.records):
            raise ValueError(f"Metric count {self.count} does not match {len(self.records)} records.")
        return self

    @classmethod
    def of(cls, records: Iterable[DrilldownRecord], *, amount: Decimal = Decimal("0")) -> "Metric":
        items = list(records)
        return cls(count=len(items), amount=amount, records=items)


class MetricGroup(BaseModel):
    def metric(self, name: str) -> Metric:
        value = getattr(self, name, None) if name in type(self).model_fields else None
        if not isinstance(value, Metric):
            raise KeyError(f"Unknown metric '{name}' for {type(self).__name__}.")
        return value

    def metrics(self) -> Iterator[Tuple[str, Metric]]:
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, Metric):
                yield name, value


class ProgressStats(MetricGroup):
    previous_balance: Metric = Field(default_factory=Metric)
    current_applications: Metric = Field(default_factory=Metric)
    to_be_refunded: Metric = Field(default_factory=Metric)
    total_applications: Metric = Field(default_factory=Metric)
    completed: Metric = Field(default_factory=Metric)
    balance: Metric = Field(default_factory=Metric)


class FinancialStats(MetricGroup):
    applications: Metric = Field(default_factory=Metric)
    completed: Metric = Field(default_factory=Metric)

    @property
    def total_remittance(self) -> Decimal:
        return self.applications.amount

    @property
    def total_payment(self) -> Decimal:
        return self.completed.amount


class LedgerStats(MetricGroup):
    """Credits and debits for one account.

    `balance` is derived (credit.amount - debit.amount) rather than a counted
    metric; its records are the credit and debit lists.
    """

    credit: Metric = Field(default_factory=Metric)
    debit: Metric = Field(default_factory=Metric)
    balance: Decimal = Decimal("0")


class WorkStatusRow(MetricGroup):
    cells: Dict[str, Metric] = Field(default_factory=dict)
    total: Metric = Field(default_factory=Metric)

    def metric(self, name: str) -> Metric:
        if name == "total" or name == TOTAL_BUCKET:
            return self.total
        if name not in self.cells:
            raise KeyError(f"Unknown work status column '{name}'.")
        return self.cells[name]

    def metrics(self) -> Iterator[Tuple[str, Metric]]:
        yield from self.cells.items()
        yield TOTAL_BUCKET, self.total


class _TableBase(BaseModel):
    table_id: str
    title: str = ""

    def metric(self, bucket: str, name: str) -> Metric:
        buckets = getattr(self, "buckets")
        if bucket not in buckets:
            raise KeyError(f"Unknown bucket '{bucket}' in table '{self.table_id}'.")
        return buckets[bucket].metric(name)

    def iter_metrics(self) -> Iterator[Tuple[str, str, Metric]]:
        for key, group in getattr(self, "buckets").items():
            for name, metric in group.metrics():
                yield key, name, metric


class ProgressTable(_TableBase):
    kind: Literal["progress"] = "progress"
    buckets: Dict[str, ProgressStats] = Field(default_factory=dict)


class FinancialTable(_TableBase):
    kind: Literal["financial"] = "financial"
    sector: str = ""
    buckets: Dict[str, FinancialStats] = Field(default_factory=dict)


class LedgerTable(_TableBase):
    kind: Literal["ledger"] = "ledger"
    buckets: Dict[str, LedgerStats] = Field(default_factory=dict)

    @property
    def total_balance(self) -> Decimal:
        return sum((b.balance for b in self.buckets.values()), Decimal("0"))


class WorkStatusTable(_TableBase):
    kind: Literal["work_status"] = "work_status"
    buckets: Dict[str, WorkStatusRow] = Field(default_factory=dict)


ReportTable = Annotated[
    Union[ProgressTable, FinancialTable, LedgerTable, WorkStatusTable],
    Field(discriminator="kind"),
]


class PeriodReport(BaseModel):
    """Every table of one report run.

    `grand_total` is the sum of the account ledger balances; drill into the
    `account_ledger` table's credit and debit metrics for the records behind it.
    """

    window: ReportWindow
    tables: Dict[str, ReportTable] = Field(default_factory=dict)
    grand_total: Decimal = Decimal("0")
    files_scanned: int = 0
    sites_scanned: int = 0

    def table(self, table_id: str):
        if table_id not in self.tables:
            raise KeyError(f"Unknown report table '{table_id}'.")
        return self.tables[table_id]

    def drilldown(self, table_id: str, bucket: str, metric: str) -> Metric:
        return self.table(table_id).metric(bucket, metric)

    def iter_metrics(self) -> Iterator[Tuple[str, str, str, Metric]]:
        for table_id, table in self.tables.items():
            for key, name, metric in table.iter_metrics():
                yield table_id, key, name, metric
