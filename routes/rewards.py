"""
routes/rewards.py -- Aggregated reward tables
  POST /rewards:monthly -- points per customer per calendar month
  POST /rewards:total   -- points per customer across all transactions

Both endpoints enrich the raw transactions first; the only difference is
which aggregator runs over the enriched list.
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter

from app.models import MonthlyRewardOut, RewardsRequest, TotalRewardOut
from app.utils.logger import get_logger
from app.utils.rewards import (
    compute_rewards_points_for_transactions,
    get_monthly_rewards,
    get_total_rewards,
)

router = APIRouter()
logger = get_logger(__name__)


@router.post("/rewards:monthly", response_model=List[MonthlyRewardOut])
def monthly_rewards(body: RewardsRequest) -> List[MonthlyRewardOut]:
    """Monthly totals, sorted by year then month."""
    enriched = compute_rewards_points_for_transactions(body.transactions)
    rows = get_monthly_rewards(enriched)
    logger.debug("Monthly rewards: %d rows", len(rows))
    return [MonthlyRewardOut.from_data(r) for r in rows]


@router.post("/rewards:total", response_model=List[TotalRewardOut])
def total_rewards(body: RewardsRequest) -> List[TotalRewardOut]:
    """All-time totals, one row per customer in first-seen order."""
    enriched = compute_rewards_points_for_transactions(body.transactions)
    rows = get_total_rewards(enriched)
    logger.debug("Total rewards: %d customers", len(rows))
    return [TotalRewardOut.from_data(r) for r in rows]
