"""
utils/validator.py -- Strict transaction validation (opt-in).

The reward core silently defaults bad data to zero / exclusion. Callers that
want to see what was wrong run validate() first.

validate(transactions)
  Rule order (first failing rule wins per record):
    1. not an object          -> MSG_NOT_OBJECT
    2. missing customerId     -> MSG_CUSTOMER
    3. unparseable date       -> MSG_DATE
    4. non-numeric price      -> MSG_PRICE
    5. negative price         -> MSG_NEGATIVE
    6. duplicate id           -> MSG_DUPLICATE  (key = transactionId, when present)

  Returns: (valid: list[dict], invalid: list[tuple[object, str]])
"""
from __future__ import annotations

import math
from collections.abc import Mapping

from app.utils.dates import parse_date
from app.utils.rewards import coerce_price

MSG_NOT_OBJECT = "Transaction must be an object"
MSG_CUSTOMER = "Customer id is required"
MSG_DATE = "Invalid purchase date"
MSG_PRICE = "Price must be a number"
MSG_NEGATIVE = "Negative prices are not allowed"
MSG_DUPLICATE = "Duplicate transaction"


def validate(
    transactions: list,
) -> tuple[list[dict], list[tuple[object, str]]]:
    """
    Validate transactions in one pass using a hash set for duplicate detection.

    Returns:
        valid   -- records that passed all checks
        invalid -- list of (record, error_message) for failed ones
    """
    valid: list[dict] = []
    invalid: list[tuple[object, str]] = []
    seen: set = set()

    for txn in transactions:
        # Rule 1 -- shape
        if not isinstance(txn, Mapping):
            invalid.append((txn, MSG_NOT_OBJECT))
            continue

        # Rule 2 -- customer
        customer_id = txn.get("customerId")
        if customer_id is None or customer_id == "":
            invalid.append((txn, MSG_CUSTOMER))
            continue

        # Rule 3 -- date
        if parse_date(txn.get("purchaseDate")) is None:
            invalid.append((txn, MSG_DATE))
            continue

        # Rule 4 / 5 -- price (absent price is allowed and earns nothing)
        price = coerce_price(txn.get("price"))
        if not math.isfinite(price):
            invalid.append((txn, MSG_PRICE))
            continue
        if price < 0:
            invalid.append((txn, MSG_NEGATIVE))
            continue

        # Rule 6 -- duplicate
        txn_id = txn.get("transactionId")
        if txn_id is not None:
            key = txn_id
            try:
                hash(key)
            except TypeError:
                key = repr(txn_id)
            if key in seen:
                invalid.append((txn, MSG_DUPLICATE))
                continue
            seen.add(key)

        valid.append(dict(txn))

    return valid, invalid
