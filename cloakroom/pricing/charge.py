"""Time-based charge computation.

Everything here is pure: no I/O, no clock, no logging. Callers pass the
pricing config in effect and decide what to do with ``rate_missing``.
"""
import math
from dataclasses import dataclass
from datetime import datetime

from cloakroom.core.clock import as_utc
from cloakroom.pricing.schemas import PricingConfig, Rounding
from cloakroom.ticket.enums import ItemType


@dataclass(frozen=True)
class ChargeResult:
    rate: float
    hours_billed: float
    total: float
    rate_missing: bool = False


def elapsed_minutes(start: datetime, end: datetime) -> float:
    """Minutes between two timestamps, partial minute kept, never negative."""
    seconds = (as_utc(end) - as_utc(start)).total_seconds()
    return max(0.0, seconds / 60)


def round_hours(raw_hours: float, rounding: Rounding) -> float:
    if rounding == Rounding.FLOOR:
        return math.floor(raw_hours)
    if rounding == Rounding.ROUND:
        # half away from zero; the builtin round() is half-to-even
        return math.copysign(math.floor(abs(raw_hours) + 0.5), raw_hours)
    return math.ceil(raw_hours)


def compute_charge(
    item_type: ItemType | str,
    quantity: int,
    minutes_elapsed: float,
    pricing: PricingConfig,
) -> ChargeResult:
    """Return the rate, billed hours and total for a stay of ``minutes_elapsed``.

    A missing rate bills at zero and sets ``rate_missing``; it never raises,
    so a bad rate table cannot block handing an item back.
    """
    try:
        key = ItemType(item_type)
    except ValueError:
        key = None
    rate = pricing.hourly.get(key) if key is not None else None
    rate_missing = rate is None
    if rate_missing:
        rate = 0.0

    minutes = max(0.0, minutes_elapsed)
    raw_hours = minutes / 60
    if math.isfinite(raw_hours):
        hours_billed = max(pricing.min_hours, round_hours(raw_hours, pricing.rounding))
    else:
        hours_billed = pricing.min_hours

    total = rate * quantity * hours_billed
    return ChargeResult(rate=rate, hours_billed=hours_billed, total=total, rate_missing=rate_missing)
