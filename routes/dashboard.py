"""routes/dashboard.py -- Dashboard views (POST /rewards:dashboard)"""
from __future__ import annotations

from fastapi import APIRouter

from app.models import (
    DashboardResponse,
    DateRangeRequest,
    MonthlyRewardOut,
    TotalRewardOut,
)
from app.pipeline import process

router = APIRouter()


@router.post("/rewards:dashboard", response_model=DashboardResponse)
def dashboard(body: DateRangeRequest) -> DashboardResponse:
    """
    Receives raw transactions and an optional inclusive date range.
    Returns the three dashboard tables: monthly rewards, total rewards and
    the enriched transaction ledger sorted oldest first.
    """
    monthly, total, ledger = process(
        transactions=body.transactions,
        start_date=body.startDate,
        end_date=body.endDate,
    )

    return DashboardResponse(
        monthlyRewards=[MonthlyRewardOut.from_data(r) for r in monthly],
        totalRewards=[TotalRewardOut.from_data(r) for r in total],
        transactions=ledger,
    )
