from __future__ import annotations

import logging
from datetime import tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from common.period_engine.models import (
    FileRecord,
    FileSnapshot,
    PaymentRecord,
    RemittanceRecord,
    SiteRecord,
)

from .dates import normalize_date

logger = logging.getLogger(__name__)


def file_snapshot_from_documents(
    payload: Any,
    *,
    source: str = "documents",
    tz: tzinfo | None = None,
) -> FileSnapshot:
    """
    Build a FileSnapshot from stored file documents.

    Supported shapes:
      [ {...}, {...} ]
      {"files": [ ... ]}
      {"documents": [ ... ]}

    Each document uses the department's field names:
      {
        "fileNo": "...", "applicantName": "...", "applicationType": "...",
        "siteDetails": [{"nameOfSite", "purpose", "diameter", "workStatus",
                         "dateOfCompletion", "totalExpenditure"}],
        "remittanceDetails": [{"amountRemitted", "dateOfRemittance", "remittedAccount"}],
        "paymentDetails": [{"dateOfPayment", "paymentAccount", "revenueHead",
                            "contractorsPayment", "gst", "incomeTax", "kbcwb",
                            "refundToParty"}]
      }

    Documents that are not objects, or lack a file number, are skipped with a
    warning. Unreadable dates and amounts become None. Timestamps are read as
    wall-clock time in `tz`, the reporting zone by default.
    """
    files: list[FileRecord] = []
    for index, doc in enumerate(_select_documents(payload)):
        if not isinstance(doc, dict):
            logger.warning("Skipping document %d: expected an object, got %s", index, type(doc).__name__)
            continue
        file_no = _text(doc.get("fileNo"))
        if not file_no:
            logger.warning("Skipping document %d: missing fileNo", index)
            continue
        files.append(
            FileRecord(
                file_no=file_no,
                applicant_name=_text(doc.get("applicantName")),
                application_type=_text(doc.get("applicationType")) or None,
                sites=[_site(s, tz) for s in _objects(doc.get("siteDetails"), file_no, "siteDetails")],
                remittances=[
                    _remittance(r, tz) for r in _objects(doc.get("remittanceDetails"), file_no, "remittanceDetails")
                ],
                payments=[_payment(p, tz) for p in _objects(doc.get("paymentDetails"), file_no, "paymentDetails")],
            )
        )
    logger.debug("Parsed %d file documents from %s", len(files), source)
    return FileSnapshot(files=tuple(files), source=source)


def _select_documents(payload: Any) -> Iterable[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("files", "documents"):
            if isinstance(payload.get(key), list):
                return payload[key]
    raise ValueError("File documents payload must be a list or an object with a 'files' list.")


def _objects(value: Any, file_no: str, field: str) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    out = []
    for item in value:
        if isinstance(item, dict):
            out.append(item)
        else:
            logger.warning("File %s: skipping non-object entry in %s", file_no, field)
    return out


def _site(raw: dict[str, Any], tz: tzinfo | None) -> SiteRecord:
    return SiteRecord(
        name=_text(raw.get("nameOfSite")),
        purpose=_text(raw.get("purpose")) or None,
        diameter=_text(raw.get("diameter")) or None,
        work_status=_text(raw.get("workStatus")) or None,
        completion_date=normalize_date(raw.get("dateOfCompletion"), tz),
        total_expenditure=_parse_decimal(raw.get("totalExpenditure")),
    )


def _remittance(raw: dict[str, Any], tz: tzinfo | None) -> RemittanceRecord:
    return RemittanceRecord(
        amount=_parse_decimal(raw.get("amountRemitted")),
        date=normalize_date(raw.get("dateOfRemittance"), tz),
        account=_text(raw.get("remittedAccount")) or None,
    )


def _payment(raw: dict[str, Any], tz: tzinfo | None) -> PaymentRecord:
    return PaymentRecord(
        date=normalize_date(raw.get("dateOfPayment"), tz),
        account=_text(raw.get("paymentAccount")) or None,
        revenue_head=_parse_decimal(raw.get("revenueHead")),
        contractors_payment=_parse_decimal(raw.get("contractorsPayment")),
        gst=_parse_decimal(raw.get("gst")),
        income_tax=_parse_decimal(raw.get("incomeTax")),
        kbcwb=_parse_decimal(raw.get("kbcwb")),
        refund_to_party=_parse_decimal(raw.get("refundToParty")),
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_decimal(value: Any) -> Decimal | None:
    if value in (None, "") or isinstance(value, bool):
        return None
    try:
        out = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        return None
    return out if out.is_finite() else None
