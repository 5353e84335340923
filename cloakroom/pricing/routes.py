# cloakroom/pricing/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from cloakroom.core.clock import Clock, get_clock
from cloakroom.core.database import get_db
from cloakroom.pricing import services as pricing_service
from cloakroom.pricing.charge import compute_charge
from cloakroom.pricing.schemas import ChargeOut, PricingConfig, PricingUpdate, QuoteRequest

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.get("/", response_model=PricingConfig)
def current(db: Session = Depends(get_db)):
    return pricing_service.read_pricing(db)


@router.put("/", response_model=PricingConfig)
def update(payload: PricingUpdate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return pricing_service.save_pricing(db, payload, clock())


@router.post("/quote", response_model=ChargeOut)
def quote(payload: QuoteRequest, db: Session = Depends(get_db)):
    pricing = pricing_service.read_pricing(db)
    charge = compute_charge(payload.item_type, payload.quantity, payload.minutes_elapsed, pricing)
    return ChargeOut(
        rate=charge.rate,
        hours_billed=charge.hours_billed,
        total=charge.total,
        warnings=pricing_service.charge_warnings(payload.item_type, charge),
    )
