"""
utils/filters.py -- Table filters for the transactions ledger.

filter_by_date_range(data, start, end, field) -> records inside [start, end]
search_rows(data, term, fields)               -> records whose text contains term

Both return a new list holding the original record objects; inputs are
never mutated. Bad arguments give [] rather than raising.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Iterable, List, Optional

import numpy as np

from app.utils.dates import to_timestamp


def _bound(value: object) -> Optional[float]:
    """Empty or unparseable bounds are treated as absent."""
    if not value:
        return None
    return to_timestamp(value)


def _field_timestamp(item: object, field_name: str) -> float:
    if not isinstance(item, Mapping):
        return np.nan
    value = item.get(field_name)
    if not value:
        return np.nan
    ts = to_timestamp(value)
    return np.nan if ts is None else ts


def filter_by_date_range(
    data: object,
    start_date: object,
    end_date: object,
    field_name: str,
) -> list:
    """
    Keep records whose `field_name` date falls inside the inclusive range.

    Either bound may be None/empty, giving an open-ended range; with no
    bounds every record with a parseable date is kept. Records with a
    missing or unparseable date are always dropped.
    """
    if not isinstance(data, list) or not field_name:
        return []
    if not data:
        return []

    start = _bound(start_date)
    end = _bound(end_date)

    ts_arr = np.array(
        [_field_timestamp(item, field_name) for item in data], dtype=np.float64
    )
    keep = ~np.isnan(ts_arr)

    # nan rows are already excluded by `keep`
    with np.errstate(invalid="ignore"):
        if start is not None:
            keep &= ts_arr >= start
        if end is not None:
            keep &= ts_arr <= end

    return [item for item, ok in zip(data, keep) if ok]


def _cell_text(value: object) -> str:
    """Render a cell the way the dashboard displays it (JS String())."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        # 75.0 -> "75"; JS switches to exponent notation from 1e21
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def search_rows(
    data: object,
    term: object,
    fields: Optional[Iterable[str]] = None,
) -> List:
    """
    Case-insensitive substring search across the given fields.

    With fields=None every value of the record is searched. An empty term
    matches everything; a whitespace-only term is matched literally.
    """
    if not isinstance(data, list):
        return []

    needle = _cell_text(term).lower()
    if not needle:
        return list(data)

    field_list = list(fields) if fields is not None else None
    result = []
    for row in data:
        if not isinstance(row, Mapping):
            continue
        values = (
            [row.get(f) for f in field_list] if field_list is not None else row.values()
        )
        if any(needle in _cell_text(v).lower() for v in values):
            result.append(row)
    return result
