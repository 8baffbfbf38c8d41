"""routes/validator.py -- Transaction validator (POST /transactions:validator)"""
from __future__ import annotations

from fastapi import APIRouter

from app.models import InvalidTransactionOut, RewardsRequest, ValidatorResponse
from app.utils.validator import validate

router = APIRouter()


@router.post("/transactions:validator", response_model=ValidatorResponse)
def validate_transactions(body: RewardsRequest):
    """
    Strict check of raw transactions.
    Checks: customer -> date -> price -> negative -> duplicate id.
    Returns valid and invalid lists; each invalid entry carries its message.
    """
    valid, invalid_pairs = validate(body.transactions)

    return ValidatorResponse(
        valid=valid,
        invalid=[
            InvalidTransactionOut(transaction=t, message=msg) for t, msg in invalid_pairs
        ],
    )
