"""routes/filter.py -- Ledger search (POST /transactions:filter)"""
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter

from app.models import FilterRequest
from app.utils.filters import filter_by_date_range, search_rows
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/transactions:filter", response_model=List[Dict[str, Any]])
def filter_transactions(body: FilterRequest):
    """
    Applies the table header filters to already-loaded rows.

    Text search runs first (over `columns`, or every field when omitted),
    then the inclusive date range on `field`. With no search term and no
    bounds the rows come back unchanged.
    """
    rows = body.transactions

    if body.search:
        rows = search_rows(rows, body.search, body.columns)

    if body.startDate is not None or body.endDate is not None:
        rows = filter_by_date_range(rows, body.startDate, body.endDate, body.field)

    logger.debug("Filter kept %d of %d rows", len(rows), len(body.transactions))
    return rows
