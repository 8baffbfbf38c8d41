"""
Pydantic models for the Loyalty Rewards API.
Request bodies stay lenient about transaction shape -- the reward core
tolerates missing or malformed fields and degrades to zero / exclusion.
Date-range bounds are the only values parsed and checked at this layer.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, GetJsonSchemaHandler, field_validator, model_validator
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema as _pcs

from app import config
from app.utils.dates import parse_date


def _parse_bound(v: object) -> datetime:
    """Parse a date-range bound; ISO-8601 date or datetime."""
    dt = parse_date(v)
    if dt is None:
        raise ValueError("Invalid date format. Expected: YYYY-MM-DD")
    return dt


class _DateFieldType:
    """
    Custom Pydantic type that:
      - At runtime: validates and stores a naive UTC datetime (via parse_date)
      - In OpenAPI/Swagger: shows as a plain string with a calendar-date example
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        return _pcs.no_info_plain_validator_function(
            _parse_bound,
            serialization=_pcs.plain_serializer_function_ser_schema(
                lambda v: v.isoformat() if isinstance(v, datetime) else str(v),
                info_arg=False,
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: Any, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "example": "2024-01-31",
            "description": "Format: YYYY-MM-DD (inclusive bound)",
        }


DateField = _DateFieldType


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class RewardsRequest(BaseModel):
    """Raw transactions exactly as the data source delivers them."""
    transactions: Optional[List[Dict[str, Any]]] = Field(default=None, validate_default=True)

    @field_validator("transactions", mode="before")
    @classmethod
    def check_txns(cls, v: object) -> object:
        if v is None:
            raise ValueError("Transactions list is required")
        return v


class DateRangeRequest(RewardsRequest):
    startDate: Optional[DateField] = None
    endDate: Optional[DateField] = None

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def blank_is_none(cls, v: object) -> object:
        # The dashboard's reset button sends empty strings
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @model_validator(mode="after")
    def check_order(self) -> "DateRangeRequest":
        if self.startDate is not None and self.endDate is not None and self.startDate > self.endDate:
            raise ValueError("Invalid date range: start must be before end")
        return self


class FilterRequest(DateRangeRequest):
    field: str = config.DATE_FIELD
    search: str = ""
    columns: Optional[List[str]] = None

    @field_validator("field")
    @classmethod
    def check_field(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Date field name must not be empty")
        return v


# ---------------------------------------------------------------------------
# Response / output models
# ---------------------------------------------------------------------------

class MonthlyRewardOut(BaseModel):
    customerId: Any = None
    customerName: Any = None
    monthlyRewardPoints: int
    monthDate: Optional[date] = None
    monthNumber: Optional[int] = None
    year: Optional[int] = None

    @classmethod
    def from_data(cls, r: "MonthlyRewardData") -> "MonthlyRewardOut":
        return cls(
            customerId=r.customer_id,
            customerName=r.customer_name,
            monthlyRewardPoints=r.monthly_reward_points,
            monthDate=r.month_date,
            monthNumber=r.month_number,
            year=r.year,
        )


class TotalRewardOut(BaseModel):
    customerId: Any = None
    customerName: Any = None
    totalRewardPoints: int

    @classmethod
    def from_data(cls, r: "TotalRewardData") -> "TotalRewardOut":
        return cls(
            customerId=r.customer_id,
            customerName=r.customer_name,
            totalRewardPoints=r.total_reward_points,
        )


class DashboardResponse(BaseModel):
    monthlyRewards: List[MonthlyRewardOut]
    totalRewards: List[TotalRewardOut]
    transactions: List[Dict[str, Any]]


class InvalidTransactionOut(BaseModel):
    transaction: Any = None
    message: str


class ValidatorResponse(BaseModel):
    valid: List[Dict[str, Any]]
    invalid: List[InvalidTransactionOut]


# ---------------------------------------------------------------------------
# Internal data containers (not Pydantic, for speed inside the aggregators)
# ---------------------------------------------------------------------------

class MonthlyRewardData:
    """Accumulator for one (customer, year, month) group."""

    __slots__ = (
        "customer_id",
        "customer_name",
        "monthly_reward_points",
        "month_date",
        "month_number",
        "year",
    )

    def __init__(
        self,
        customer_id: Any,
        customer_name: Any,
        month_date: Optional[date],
        month_number: Optional[int],
        year: Optional[int],
        monthly_reward_points: int = 0,
    ) -> None:
        self.customer_id = customer_id
        self.customer_name = customer_name
        self.month_date = month_date
        self.month_number = month_number
        self.year = year
        self.monthly_reward_points = monthly_reward_points


class TotalRewardData:
    """Accumulator for one customer's all-time points."""

    __slots__ = ("customer_id", "customer_name", "total_reward_points")

    def __init__(self, customer_id: Any, customer_name: Any, total_reward_points: int = 0) -> None:
        self.customer_id = customer_id
        self.customer_name = customer_name
        self.total_reward_points = total_reward_points
