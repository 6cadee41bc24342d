"""
Crowd-sourced report endpoints (smoothness, congestion, construction, ...)
Reports live in the in-memory store for the lifetime of the process
"""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from typing import Any, Dict
import logging

from models import Report
from services.report_store import ReportStore, get_report_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])

REQUIRED_FIELDS = ("lat", "lng", "type")


def serialize_report(report: Report) -> Dict[str, Any]:
    return report.model_dump(exclude_none=True)


@router.get("")
async def list_reports(store: ReportStore = Depends(get_report_store)):
    """Get every active report"""
    return [serialize_report(report) for report in store.list()]


@router.post("")
async def create_report(payload: Dict[str, Any] = Body(...), store: ReportStore = Depends(get_report_store)):
    """Submit a report; lat, lng and type are required"""
    missing = [name for name in REQUIRED_FIELDS if payload.get(name) in (None, "")]
    if missing:
        return JSONResponse(status_code=400, content={"error": "Invalid report data",
                                                      "missing": missing})

    try:
        report = Report.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Rejected report: {e.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid report data"})

    report = store.add(report)
    logger.info(f"New report received: {report.type} at ({report.lat:.4f}, {report.lng:.4f})")

    return {"success": True, "report": serialize_report(report)}


@router.delete("/{report_id}")
async def delete_report(report_id: str, store: ReportStore = Depends(get_report_store)):
    """Delete a report by id"""
    try:
        deleted = store.remove(int(report_id))
    except ValueError:
        deleted = None

    if deleted is None:
        return JSONResponse(status_code=404, content={"error": "Report not found"})

    logger.info(f"Report deleted: {deleted.type} (ID: {deleted.id})")
    return {"success": True, "deletedReport": serialize_report(deleted)}
