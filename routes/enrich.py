"""routes/enrich.py -- Transaction enricher (POST /transactions:enrich)"""
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter

from app.models import RewardsRequest
from app.utils.rewards import compute_rewards_points_for_transactions

router = APIRouter()


@router.post("/transactions:enrich", response_model=List[Dict[str, Any]])
def enrich_transactions(body: RewardsRequest):
    """
    Receives raw transactions, returns them in the same order with a
    rewardPoints field added. Does not validate prices (see /transactions:validator).
    """
    return compute_rewards_points_for_transactions(body.transactions)
