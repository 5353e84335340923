# cloakroom/ticket/schemas.py
from datetime import datetime
from pydantic import BaseModel, Field

from cloakroom.pricing.schemas import ChargeOut
from cloakroom.ticket.enums import ItemType, TicketStatus

class TicketBase(BaseModel):
    branch_id: int
    item_type: ItemType
    quantity: int = Field(..., ge=1)
    notes: str | None = None

class TicketCreate(TicketBase):
    pass

class TicketCreated(BaseModel):
    id: int
    token: str

class TicketOut(TicketBase):
    id: int
    token: str
    notes: str = ""
    status: TicketStatus
    created_at: datetime
    closed_at: datetime | None = None
    price_at_close: float | None = None
    hours_billed: float | None = None
    paid: bool
    created_by: str | None = None
    closed_by: str | None = None

    model_config = {"from_attributes": True}

class ChargeView(ChargeOut):
    minutes_elapsed: int
    # True while the ticket is ACTIVE: the amount keeps growing
    estimated: bool
    rate: float | None = None

class TicketDetail(BaseModel):
    ticket: TicketOut
    charge: ChargeView

class CloseResult(BaseModel):
    id: int
    token: str
    status: TicketStatus
    closed_at: datetime
    hours_billed: float
    price_at_close: float
    warnings: list[str] = []

class TicketSummary(BaseModel):
    active_count: int
    closed_count: int
    revenue_total: float
    revenue_recent: float
    recent_closed: list[TicketOut]

class PublicTicketOut(BaseModel):
    token: str
    status: TicketStatus
    item_type: ItemType
    quantity: int
    created_at: datetime
    closed_at: datetime | None = None
    branch_name: str | None = None
    branch_address: str | None = None
    branch_maps_url: str | None = None
    charge: ChargeView
