"""
app/config.py -- Service-wide constants.

Reward tiers live in a config dict (same pattern as the returns strategies):
  REWARD_CONFIG = {"lower": 50, "upper": 100, "multiplier": 2}

Runtime settings come from the environment with sensible defaults.
"""
from __future__ import annotations

import os
from typing import Any

# All routes are registered under this prefix
API_PREFIX = "/loyalty/v1"

# Field the dashboard filters and sorts on
DATE_FIELD = "purchaseDate"

# 1 point per dollar in (lower, upper], 2 points per dollar above upper
REWARD_CONFIG: dict[str, Any] = {"lower": 50, "upper": 100, "multiplier": 2}

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "5477"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")
