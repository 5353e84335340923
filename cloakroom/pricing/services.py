# cloakroom/pricing/services.py
from datetime import datetime
from sqlalchemy.orm import Session

from cloakroom.core.logging import get_logger
from cloakroom.pricing.charge import ChargeResult
from cloakroom.pricing.models import CURRENT_ID, PricingSetting
from cloakroom.pricing.schemas import PricingConfig, PricingUpdate, Rounding
from cloakroom.ticket.enums import ItemType

logger = get_logger(__name__)

DEFAULT_HOURLY = {ItemType.BOLSA: 5.0, ItemType.MOCHILA: 8.0, ItemType.MALETA: 12.0}
DEFAULT_MIN_HOURS = 1.0
DEFAULT_ROUNDING = Rounding.CEIL


def default_pricing() -> PricingConfig:
    return PricingConfig(hourly=dict(DEFAULT_HOURLY), min_hours=DEFAULT_MIN_HOURS, rounding=DEFAULT_ROUNDING)


def read_pricing(db: Session) -> PricingConfig:
    row = db.get(PricingSetting, CURRENT_ID)
    if not row:
        return default_pricing()
    return PricingConfig(
        hourly=row.hourly or {},
        min_hours=row.min_hours,
        rounding=row.rounding,
        updated_at=row.updated_at,
    )


def save_pricing(db: Session, payload: PricingUpdate, now: datetime) -> PricingConfig:
    data = read_pricing(db).model_dump(mode="json", exclude={"updated_at"})
    for field, value in payload.model_dump(mode="json", exclude_unset=True).items():
        if value is None:
            continue
        if field == "hourly":
            data["hourly"].update(value)
        else:
            data[field] = value

    row = db.get(PricingSetting, CURRENT_ID)
    if not row:
        row = PricingSetting(id=CURRENT_ID)
        db.add(row)
    row.hourly = data["hourly"]
    row.min_hours = data["min_hours"]
    row.rounding = data["rounding"]
    row.updated_at = now
    db.commit()
    db.refresh(row)
    logger.info("pricing saved", extra={"hourly": data["hourly"], "min_hours": data["min_hours"], "rounding": data["rounding"]})
    return read_pricing(db)


def charge_warnings(item_type: ItemType | str, charge: ChargeResult) -> list[str]:
    if not charge.rate_missing:
        return []
    label = item_type.value if isinstance(item_type, ItemType) else str(item_type)
    logger.warning("hourly rate missing, billed at zero", extra={"item_type": label})
    return [f"No hourly rate configured for {label}; billed at 0"]
