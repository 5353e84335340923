# cloakroom/pricing/schemas.py
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator

from cloakroom.ticket.enums import ItemType


class Rounding(str, Enum):
    CEIL = "CEIL"
    FLOOR = "FLOOR"
    ROUND = "ROUND"


class PricingBase(BaseModel):
    hourly: dict[ItemType, float] = Field(default_factory=dict)
    min_hours: float = Field(default=1, ge=0)
    rounding: Rounding = Rounding.CEIL

    @field_validator("hourly", mode="before")
    @classmethod
    def upper_item_types(cls, v):
        if isinstance(v, dict):
            return {k.strip().upper() if isinstance(k, str) else k: rate for k, rate in v.items()}
        return v

    @field_validator("hourly")
    @classmethod
    def non_negative_rates(cls, v: dict[ItemType, float] | None) -> dict[ItemType, float] | None:
        for item_type, rate in (v or {}).items():
            if rate < 0:
                raise ValueError(f"rate for {item_type.value} must be >= 0")
        return v


class PricingUpdate(PricingBase):
    """Partial update: omitted fields keep their stored value, rates merge per item type."""

    hourly: dict[ItemType, float] | None = None
    min_hours: float | None = Field(default=None, ge=0)
    rounding: Rounding | None = None


class PricingConfig(PricingBase):
    updated_at: datetime | None = None


class QuoteRequest(BaseModel):
    item_type: ItemType
    quantity: int = Field(..., ge=1)
    minutes_elapsed: float = Field(..., ge=0)


class ChargeOut(BaseModel):
    rate: float
    hours_billed: float
    total: float
    warnings: list[str] = []
