# cloakroom/ticket/routes.py
from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session
from cloakroom.branch.services import get_branch
from cloakroom.core.clock import Clock, get_clock
from cloakroom.core.database import get_db
from cloakroom.core.errors import ValidationError
from cloakroom.pricing.services import read_pricing
from cloakroom.ticket import services as ticket_service
from cloakroom.ticket.enums import normalize_status
from cloakroom.ticket.schemas import (
    CloseResult,
    PublicTicketOut,
    TicketCreate,
    TicketCreated,
    TicketDetail,
    TicketOut,
    TicketSummary,
)

router = APIRouter(prefix="/tickets", tags=["Tickets"])
public_router = APIRouter(prefix="/public", tags=["Public"])


def _detail(db: Session, ticket, clock: Clock) -> TicketDetail:
    charge = ticket_service.ticket_charge(ticket, read_pricing(db), clock())
    return TicketDetail(ticket=TicketOut.model_validate(ticket), charge=charge)


@router.post("/", response_model=TicketCreated, status_code=201)
def create(
    ticket: TicketCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    x_operator_id: str | None = Header(default=None),
):
    return ticket_service.create_ticket(
        db,
        branch_id=ticket.branch_id,
        item_type=ticket.item_type,
        quantity=ticket.quantity,
        notes=ticket.notes,
        created_by=x_operator_id,
        clock=clock,
    )


@router.get("/", response_model=list[TicketOut])
def list_by_status(
    status: str = Query(default="ACTIVE", description="ACTIVE or CLOSED (synonyms such as DELIVERED accepted)"),
    limit: int | None = Query(default=None, description="Maximum number of tickets, newest first"),
    db: Session = Depends(get_db),
):
    canonical = normalize_status(status)
    if canonical is None:
        raise ValidationError(f"unknown status: {status}")
    return ticket_service.list_by_status(db, canonical, limit)


@router.get("/summary", response_model=TicketSummary)
def summary(recent: int = Query(default=10, ge=1, le=100), db: Session = Depends(get_db)):
    return ticket_service.summarize(db, recent)


@router.get("/by-token/{token}", response_model=TicketDetail)
def get_by_token(token: str, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    ticket = ticket_service.find_by_token(db, token)
    return _detail(db, ticket, clock)


@router.get("/{ticket_id}", response_model=TicketDetail)
def get(ticket_id: int, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    ticket = ticket_service.get_ticket(db, ticket_id)
    return _detail(db, ticket, clock)


@router.post("/{ticket_id}/close", response_model=CloseResult)
def close(
    ticket_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    x_operator_id: str | None = Header(default=None),
):
    return ticket_service.close_ticket(db, ticket_id, operator_id=x_operator_id, clock=clock)


@public_router.get("/tickets/{token}", response_model=PublicTicketOut)
def public_lookup(token: str, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    """Customer-facing view reached from the QR link on the receipt."""
    ticket = ticket_service.find_by_token(db, token)
    branch = get_branch(db, ticket.branch_id)
    return PublicTicketOut(
        token=ticket.token,
        status=ticket.status,
        item_type=ticket.item_type,
        quantity=ticket.quantity,
        created_at=ticket.created_at,
        closed_at=ticket.closed_at,
        branch_name=branch.name if branch else None,
        branch_address=branch.address if branch else None,
        branch_maps_url=(branch.maps_url or None) if branch else None,
        charge=ticket_service.ticket_charge(ticket, read_pricing(db), clock()),
    )
