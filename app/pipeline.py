"""
pipeline.py -- Master orchestration function.

process(transactions, start_date=None, end_date=None)
  Runs: filter_by_date_range -> enrich -> {monthly, total} and -> sort_by_date

Critical rules implemented here:
  - Date filtering happens BEFORE enrichment and only when a bound is given.
  - Enrichment runs ONCE; all three views are built from the same list.
  - Every view is recomputed from scratch on each call -- no caching.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from app import config
from app.models import MonthlyRewardData, TotalRewardData
from app.utils.filters import filter_by_date_range
from app.utils.logger import get_logger
from app.utils.rewards import (
    compute_rewards_points_for_transactions,
    get_monthly_rewards,
    get_total_rewards,
    sort_by_date,
)

logger = get_logger(__name__)


def process(
    transactions: Any,
    start_date: Optional[str | datetime] = None,
    end_date: Optional[str | datetime] = None,
) -> tuple[list[MonthlyRewardData], list[TotalRewardData], list[dict]]:
    """
    Full dashboard pipeline.

    Steps:
      1. filter:  keep transactions inside [start_date, end_date] (skipped
                  when both bounds are empty)
      2. enrich:  add rewardPoints (numpy vectorized)
      3. monthly: points per customer per month, sorted by (year, month)
      4. total:   points per customer, first-seen order
      5. sort:    enriched ledger, oldest purchase first

    Returns:
        monthly      -- list of MonthlyRewardData
        total        -- list of TotalRewardData
        transactions -- enriched transactions sorted by purchaseDate
    """
    data = transactions if isinstance(transactions, list) else []

    # Step 1: filter
    if start_date or end_date:
        received = len(data)
        data = filter_by_date_range(data, start_date, end_date, config.DATE_FIELD)
        logger.debug("Date filter kept %d of %d transactions", len(data), received)

    # Step 2: enrich
    enriched = compute_rewards_points_for_transactions(data)

    # Steps 3-5: independent views over the same enriched list
    monthly = get_monthly_rewards(enriched)
    total = get_total_rewards(enriched)
    ledger = sort_by_date(enriched)

    logger.info(
        "Built dashboard: %d transactions, %d monthly rows, %d customers",
        len(ledger),
        len(monthly),
        len(total),
    )
    return monthly, total, ledger
