"""
Entry Management Module

This module handles hourly annotation entries: submission, listing,
lookup by date, counting and bulk deletion.

Features:
- Entry submission
- Paginated listing
- Date lookup
- Entry count
- Clear all entries

Data Model:
- Entry structure (see models.py)
- Server-assigned id and timestamp

Dependencies:
- FastAPI for routing
- MongoDB for storage
- Pydantic for validation

Author: Annotation Tracker Team
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from pymongo.errors import PyMongoError
from typing import Optional
import logging

from .models import EntryCreate
from .store import EntryStore, get_entry_store

router = APIRouter(
    prefix="/entries",
    tags=["entries"]
)

logger = logging.getLogger(__name__)

@router.get("")
async def get_entries(
    limit: Optional[int] = Query(None, ge=0),
    skip: int = Query(0, ge=0),
    store: EntryStore = Depends(get_entry_store)
):
    """
    Retrieve entries, newest first.

    Args:
        limit (Optional[int]): Maximum number of entries, 0/None for all
        skip (int): Number of entries to skip
        store (EntryStore): Entry store

    Returns:
        list: Entries sorted by timestamp descending

    Raises:
        HTTPException: For database errors
    """
    try:
        return await store.find_all(limit=limit, skip=skip)
    except PyMongoError:
        logger.exception("Error fetching entries")
        raise HTTPException(status_code=500, detail="Failed to fetch entries")

@router.get("/count")
async def count_entries(store: EntryStore = Depends(get_entry_store)):
    """Return the number of stored entries."""
    try:
        return {"count": await store.count()}
    except PyMongoError:
        logger.exception("Error counting entries")
        raise HTTPException(status_code=500, detail="Failed to count entries")

@router.get("/{entry_date}")
async def get_entries_by_date(
    entry_date: str,
    store: EntryStore = Depends(get_entry_store)
):
    """
    Retrieve entries recorded for one work date.

    Args:
        entry_date (str): Date string, matched exactly (YYYY-MM-DD)
        store (EntryStore): Entry store

    Returns:
        list: Matching entries
    """
    try:
        return await store.find_by_date(entry_date)
    except PyMongoError:
        logger.exception(f"Error fetching entries for {entry_date}")
        raise HTTPException(status_code=500, detail="Failed to fetch entries")

@router.post("")
async def create_entry(
    entry: EntryCreate,
    store: EntryStore = Depends(get_entry_store)
):
    """
    Create a new entry.

    Args:
        entry (EntryCreate): Validated entry data
        store (EntryStore): Entry store

    Returns:
        dict: Success flag and the stored entry with id and timestamp

    Raises:
        HTTPException: For database errors

    Notes:
        - Validation failures are turned into 400 responses by the
          registered RequestValidationError handler
        - Timestamp defaults to the current UTC time
    """
    try:
        saved = await store.insert(entry.to_document())
        return {"success": True, "entry": saved}
    except PyMongoError:
        logger.exception("Error saving entry")
        raise HTTPException(status_code=500, detail="Failed to save entry")

@router.delete("")
async def delete_entries(store: EntryStore = Depends(get_entry_store)):
    """
    Delete every entry in the collection.

    Returns:
        dict: Success flag and number of deleted entries
    """
    try:
        deleted_count = await store.delete_all()
        return {"success": True, "deletedCount": deleted_count}
    except PyMongoError:
        logger.exception("Error deleting entries")
        raise HTTPException(status_code=500, detail="Failed to delete entries")
