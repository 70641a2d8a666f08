from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ValidationError

from adapters.file_records import file_snapshot_from_documents
from common.period_engine import (
    FileSnapshot,
    Metric,
    PeriodReport,
    ReportPolicy,
    ReportWindow,
    build_period_report,
    load_report_policy,
)
from common.period_engine.config import default_policy_path


router = APIRouter(prefix="/reports", tags=["reports"])


class PeriodReportRequest(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None
    # Either raw file documents or an already-normalized snapshot.
    documents: Optional[list[Any]] = None
    snapshot: Optional[FileSnapshot] = None
    policy: Optional[ReportPolicy] = None


class DrilldownRequest(PeriodReportRequest):
    table_id: str
    bucket: str
    metric: str


def _policy_for(request: PeriodReportRequest) -> ReportPolicy:
    if request.policy is not None:
        return request.policy
    configured = os.getenv("REPORT_POLICY_PATH", "").strip()
    path = Path(configured) if configured else default_policy_path()
    try:
        return load_report_policy(path)
    except (OSError, ValueError) as exc:
        raise HTTPException(status_code=500, detail=f"Report policy unavailable: {exc}") from exc


def _snapshot_for(request: PeriodReportRequest, policy: ReportPolicy) -> FileSnapshot:
    if request.snapshot is not None:
        return request.snapshot
    if request.documents is not None:
        return file_snapshot_from_documents(request.documents, source="request", tz=policy.zone())
    raise HTTPException(status_code=400, detail="Provide either 'documents' or 'snapshot'.")


def _window_for(request: PeriodReportRequest) -> ReportWindow | None:
    if request.start is None and request.end is None:
        return None
    if request.start is None or request.end is None:
        raise HTTPException(status_code=400, detail="Both 'start' and 'end' are required.")
    try:
        return ReportWindow(start=request.start, end=request.end)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.errors()[0]["msg"]) from exc


def _build(request: PeriodReportRequest) -> PeriodReport:
    window = _window_for(request)
    policy = _policy_for(request)
    snapshot = _snapshot_for(request, policy)
    try:
        return build_period_report(snapshot, window, policy)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/period")
def period_report(request: PeriodReportRequest):
    return _build(request).model_dump(mode="json")


@router.post("/period/drilldown")
def period_report_drilldown(request: DrilldownRequest):
    report = _build(request)
    try:
        metric: Metric = report.drilldown(request.table_id, request.bucket, request.metric)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0]) if exc.args else "Not found.") from exc
    return metric.model_dump(mode="json")
