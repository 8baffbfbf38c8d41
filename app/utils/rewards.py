"""
utils/rewards.py -- Reward points calculation and aggregation.

reward_points(prices_array)                       -> numpy array of whole points
calculate_reward_points(price)                    -> int points for one price
compute_rewards_points_for_transactions(txns)     -> new dicts with rewardPoints
get_monthly_rewards(enriched)                     -> [MonthlyRewardData] by (year, month)
get_total_rewards(enriched)                       -> [TotalRewardData] first-seen order
sort_by_date(txns)                                -> new list, ascending purchaseDate

Tier rules (REWARD_CONFIG, lower=50 upper=100 multiplier=2):
  price <= 50        ->  0
  50 < price <= 100  ->  floor(price - 50)
  price > 100        ->  floor(price - 100) * 2 + 50
  non-finite or negative price -> 0

Nothing here raises on malformed data: non-list input gives [], bad
prices give 0 points, unparseable dates are ordered last.
"""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date
from typing import Any

import numpy as np

from app import config
from app.models import MonthlyRewardData, TotalRewardData
from app.utils.dates import parse_date, to_timestamp

REWARD_FIELD = "rewardPoints"


# JS Number() accepts plain decimal literals, Infinity and 0x/0o/0b integers
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INFINITY = re.compile(r"([+-]?)Infinity")
_PREFIXED = re.compile(r"0([xXoObB])([0-9a-zA-Z]+)", re.ASCII)
_BASES = {"x": 16, "o": 8, "b": 2}


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _parse_price_text(text: str) -> float:
    if _DECIMAL.fullmatch(text):
        return float(text)
    match = _INFINITY.fullmatch(text)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    match = _PREFIXED.fullmatch(text)
    if match:
        try:
            return _int_to_float(int(match.group(2), _BASES[match.group(1).lower()]))
        except ValueError:
            return math.nan
    return math.nan


def coerce_price(price: object) -> float:
    """
    Coerce a JSON-ish price to float the way a JS client would.

    None / blank string -> 0.0, bool -> 0.0 / 1.0, numeric string -> value,
    ints too large for a float -> +/-inf, anything else -> nan.
    """
    if price is None:
        return 0.0
    if isinstance(price, bool):
        return float(price)
    if isinstance(price, int):
        return _int_to_float(price)
    if isinstance(price, float):
        return price
    if isinstance(price, str):
        text = price.strip()
        if not text:
            return 0.0
        return _parse_price_text(text)
    return math.nan


def reward_points(prices: np.ndarray) -> np.ndarray:
    """
    Return reward points for each price (numpy vectorized).

    Points come back as whole-number floats; callers convert with int(),
    which is exact and unbounded where an int64 cast would wrap.
    """
    lower = config.REWARD_CONFIG["lower"]
    upper = config.REWARD_CONFIG["upper"]
    multiplier = config.REWARD_CONFIG["multiplier"]

    usable = np.isfinite(prices) & (prices >= 0)
    safe = np.where(usable, prices, 0.0)

    with np.errstate(over="ignore"):
        points = np.where(
            safe <= lower,
            0.0,
            np.where(
                safe <= upper,
                np.floor(safe - lower),
                np.floor(safe - upper) * multiplier + (upper - lower),
            ),
        )
    # doubling the largest finite prices overflows to inf
    return np.minimum(points, np.finfo(np.float64).max)


def calculate_reward_points(price: object) -> int:
    """Points earned for a single purchase price; 0 for invalid input."""
    prices = np.array([coerce_price(price)], dtype=np.float64)
    return int(reward_points(prices)[0])


def compute_rewards_points_for_transactions(transactions: object) -> list[dict]:
    """
    Enrich each transaction with a rewardPoints field.

    Returns new dicts in input order; the input list and its records are
    left untouched. Records that are not mappings come back as
    {"rewardPoints": 0}. Missing price counts as 0.
    """
    if not isinstance(transactions, list):
        return []
    if not transactions:
        return []

    records = [dict(t) if isinstance(t, Mapping) else {} for t in transactions]
    prices_arr = np.array(
        [coerce_price(r.get("price")) for r in records], dtype=np.float64
    )
    points_arr = reward_points(prices_arr)

    for i, r in enumerate(records):
        r[REWARD_FIELD] = int(points_arr[i])
    return records


def _points_of(record: Mapping) -> int:
    """rewardPoints of an enriched record; missing/falsy/garbage -> 0."""
    value = record.get(REWARD_FIELD)
    if not value or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)) and math.isfinite(value):
        return int(value)
    return 0


def _key_part(value: object) -> object:
    """Make a customerId usable inside a dict key (JSON lists/objects are not)."""
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


def _following_month(year: int, month_number: int) -> date | None:
    # month_number is 1-indexed, so this is the first day of the NEXT month
    # (Jan 2024 -> 2024-02-01, Dec 2024 -> 2025-01-01). Pinned by tests.
    try:
        return date(year + month_number // 12, month_number % 12 + 1, 1)
    except ValueError:
        # December of year 9999 has no following month
        return None


def get_monthly_rewards(transactions: object) -> list[MonthlyRewardData]:
    """
    Aggregate reward points per customer per calendar month.

    Groups on the composite key (customerId, year, month). Output is sorted
    by year then month ascending; groups in the same month keep the order in
    which they were first seen. Transactions whose purchaseDate cannot be
    parsed are grouped per customer with year/month/monthDate set to None
    and placed after every dated group.
    """
    if not isinstance(transactions, list):
        return []

    groups: dict[tuple, MonthlyRewardData] = {}
    for txn in transactions:
        record = txn if isinstance(txn, Mapping) else {}
        customer_id = record.get("customerId")
        purchased = parse_date(record.get("purchaseDate"))

        if purchased is None:
            year, month_number, month_date = None, None, None
        else:
            year, month_number = purchased.year, purchased.month
            month_date = _following_month(year, month_number)

        key = (_key_part(customer_id), year, month_number)
        group = groups.get(key)
        if group is None:
            group = MonthlyRewardData(
                customer_id=customer_id,
                customer_name=record.get("customerName"),
                month_date=month_date,
                month_number=month_number,
                year=year,
            )
            groups[key] = group

        group.monthly_reward_points += _points_of(record)

    # sorted() is stable, so insertion order survives among equal keys
    return sorted(
        groups.values(),
        key=lambda g: (g.year is None, g.year or 0, g.month_number or 0),
    )


def get_total_rewards(transactions: object) -> list[TotalRewardData]:
    """Aggregate all-time reward points per customer, in first-seen order."""
    if not isinstance(transactions, list):
        return []

    totals: dict[Any, TotalRewardData] = {}
    for txn in transactions:
        record = txn if isinstance(txn, Mapping) else {}
        customer_id = record.get("customerId")

        key = _key_part(customer_id)
        total = totals.get(key)
        if total is None:
            total = TotalRewardData(customer_id, record.get("customerName"))
            totals[key] = total

        total.total_reward_points += _points_of(record)

    return list(totals.values())


def sort_by_date(transactions: object) -> list:
    """
    Return a new list sorted by purchaseDate, oldest first.

    Uses a stable argsort so equal dates keep their input order. Unparseable
    dates become nan, which numpy orders after every real timestamp.
    """
    if not isinstance(transactions, list):
        return []
    if not transactions:
        return []

    stamps = [
        to_timestamp(t.get("purchaseDate")) if isinstance(t, Mapping) else None
        for t in transactions
    ]
    ts_arr = np.array(
        [math.nan if s is None else s for s in stamps], dtype=np.float64
    )
    order = np.argsort(ts_arr, kind="stable")
    return [transactions[i] for i in order]
