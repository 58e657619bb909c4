"""
Reports Module

This module exposes the aggregated performance views: per-user daily
summaries, dashboard figures and the downloadable report.

Features:
- User/day summaries
- Dashboard statistics
- Report export (xls, csv, json)
- Optional date filter

Dependencies:
- FastAPI for routing
- MongoDB for storage (via EntryStore)
- pandas for CSV export

Author: Annotation Tracker Team
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import Response
from pymongo.errors import PyMongoError
from typing import Optional
import logging

from annotation_tracker.shared.models import TIME_SLOTS
from annotation_tracker.features.entries.store import EntryStore, get_entry_store
from .aggregation import summarize, dashboard_stats
from .export import (
    EXPORT_MEDIA_TYPES,
    export_table,
    export_filename,
    render_csv,
    render_html
)

router = APIRouter(
    prefix="/reports",
    tags=["reports"]
)

logger = logging.getLogger(__name__)

async def load_entries(store: EntryStore, entry_date: Optional[str]) -> list:
    try:
        return await store.find_for_report(entry_date)
    except PyMongoError:
        logger.exception("Error loading entries for report")
        raise HTTPException(status_code=500, detail="Failed to fetch entries")

@router.get("/summary")
async def get_summary(
    date: Optional[str] = Query(None),
    store: EntryStore = Depends(get_entry_store)
):
    """
    Per-user daily summaries.

    Args:
        date (Optional[str]): Restrict to one work date
        store (EntryStore): Entry store

    Returns:
        list: One summary per (userName, date, location)
    """
    entries = await load_entries(store, date)
    return [summary.model_dump(by_alias=True) for summary in summarize(entries)]

@router.get("/stats")
async def get_stats(
    date: Optional[str] = Query(None),
    store: EntryStore = Depends(get_entry_store)
):
    """Dashboard figures: entries, active users, users below 500, low hourly entries."""
    entries = await load_entries(store, date)
    return dashboard_stats(entries).model_dump(by_alias=True)

@router.get("/export")
async def export_report(
    format: str = Query("xls", pattern="^(xls|csv|json)$"),
    date: Optional[str] = Query(None),
    store: EntryStore = Depends(get_entry_store)
):
    """
    Download the performance report.

    Args:
        format (str): "xls" (HTML table), "csv" or "json"
        date (Optional[str]): Restrict to one work date
        store (EntryStore): Entry store

    Returns:
        Response: Report file, or the structured table for "json"

    Notes:
        - Summaries are recomputed from the stored entries on every call
        - Slot columns follow the fixed working-day slot order
    """
    entries = await load_entries(store, date)
    table = export_table(summarize(entries), entries, TIME_SLOTS)
    logger.info(f"Exporting {len(table.rows)} report rows as {format}")

    if format == "json":
        return table.model_dump(mode="json")

    content = render_csv(table) if format == "csv" else render_html(table)
    filename = export_filename(format)
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
