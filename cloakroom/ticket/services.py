# cloakroom/ticket/services.py
"""Ticket lifecycle: check-in, lookup, check-out and listing.

A ticket starts ACTIVE and moves to CLOSED exactly once. The close is a
conditional write on the stored status, so of two racing check-outs only one
freezes a price; the other gets AlreadyClosedError.
"""
from datetime import datetime

from sqlalchemy.orm import Session

from cloakroom.branch.services import is_branch_active
from cloakroom.core.clock import Clock, utcnow
from cloakroom.core.config import get_settings
from cloakroom.core.errors import (
    AlreadyClosedError,
    GenerationExhaustedError,
    NotFoundError,
    ValidationError,
)
from cloakroom.core.logging import get_logger
from cloakroom.pricing.charge import compute_charge, elapsed_minutes
from cloakroom.pricing.schemas import PricingConfig
from cloakroom.pricing.services import charge_warnings, read_pricing
from cloakroom.ticket import repository
from cloakroom.ticket import tokens
from cloakroom.ticket.enums import ItemType, TicketStatus
from cloakroom.ticket.models import Ticket
from cloakroom.ticket.schemas import ChargeView, CloseResult, TicketCreated, TicketOut, TicketSummary

logger = get_logger(__name__)


def create_ticket(
    db: Session,
    *,
    branch_id: int,
    item_type: ItemType | str,
    quantity: int,
    notes: str | None = None,
    created_by: str | None = None,
    clock: Clock = utcnow,
) -> TicketCreated:
    if quantity is None or quantity < 1:
        raise ValidationError("quantity must be >= 1")
    try:
        item_type = ItemType(item_type)
    except ValueError:
        raise ValidationError(f"unknown item type: {item_type}")
    if not is_branch_active(db, branch_id):
        raise ValidationError(f"branch {branch_id} is unknown or inactive")

    settings = get_settings()
    for attempt in range(1, settings.TOKEN_MAX_ATTEMPTS + 1):
        ticket = Ticket(
            token=tokens.generate_token(settings.TOKEN_LENGTH),
            branch_id=branch_id,
            item_type=item_type.value,
            quantity=quantity,
            notes=notes or "",
            status=TicketStatus.ACTIVE.value,
            created_at=clock(),
            paid=False,
            created_by=created_by,
        )
        try:
            repository.insert(db, ticket)
        except repository.DuplicateTokenError:
            logger.warning("token collision, drawing a new one", extra={"attempt": attempt})
            continue
        logger.info("ticket created", extra={"ticket_id": ticket.id, "branch_id": branch_id, "item_type": item_type.value})
        return TicketCreated(id=ticket.id, token=ticket.token)

    logger.error("token generation exhausted", extra={"attempts": settings.TOKEN_MAX_ATTEMPTS})
    raise GenerationExhaustedError(
        f"no unique token after {settings.TOKEN_MAX_ATTEMPTS} attempts; check TOKEN_LENGTH"
    )


def find_by_token(db: Session, raw_token: str | None) -> Ticket:
    token = tokens.normalize_token(raw_token)
    if not tokens.is_well_formed(token):
        raise ValidationError("malformed token")
    ticket = repository.get_by_token(db, token)
    if not ticket:
        raise NotFoundError("Ticket not found")
    return ticket


def get_ticket(db: Session, ticket_id: int) -> Ticket:
    ticket = repository.get_by_id(db, ticket_id)
    if not ticket:
        raise NotFoundError("Ticket not found")
    return ticket


def close_ticket(
    db: Session,
    ticket_id: int,
    operator_id: str | None = None,
    clock: Clock = utcnow,
) -> CloseResult:
    ticket = get_ticket(db, ticket_id)
    if ticket.status != TicketStatus.ACTIVE.value:
        raise AlreadyClosedError("Ticket already closed")

    pricing = read_pricing(db)
    now = clock()
    minutes = elapsed_minutes(ticket.created_at, now)
    charge = compute_charge(ticket.item_type, ticket.quantity, minutes, pricing)
    warnings = charge_warnings(ticket.item_type, charge)

    closed = repository.conditional_update(
        db,
        ticket_id,
        TicketStatus.ACTIVE,
        {
            "status": TicketStatus.CLOSED.value,
            "closed_at": now,
            "price_at_close": charge.total,
            "hours_billed": charge.hours_billed,
            "paid": True,
            "closed_by": operator_id,
        },
    )
    if not closed:
        logger.warning("close lost to a concurrent close", extra={"ticket_id": ticket_id})
        raise AlreadyClosedError("Ticket already closed")

    logger.info(
        "ticket closed",
        extra={"ticket_id": ticket_id, "hours_billed": charge.hours_billed, "price_at_close": charge.total},
    )
    return CloseResult(
        id=ticket_id,
        token=ticket.token,
        status=TicketStatus.CLOSED,
        closed_at=now,
        hours_billed=charge.hours_billed,
        price_at_close=charge.total,
        warnings=warnings,
    )


def list_by_status(db: Session, status: TicketStatus, limit: int | None = None) -> list[Ticket]:
    settings = get_settings()
    if limit is None:
        limit = settings.DEFAULT_LIST_LIMIT
    if limit < 1 or limit > settings.MAX_LIST_LIMIT:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_LIST_LIMIT}")
    status = TicketStatus(status)
    return repository.query_by_status(db, status, repository.ORDER_FIELDS[status], limit)


def ticket_charge(ticket: Ticket, pricing: PricingConfig, now: datetime) -> ChargeView:
    """Live estimate for an ACTIVE ticket, the frozen amount for a CLOSED one."""
    if ticket.status == TicketStatus.CLOSED.value:
        return ChargeView(
            rate=None,
            hours_billed=ticket.hours_billed,
            total=ticket.price_at_close,
            minutes_elapsed=int(elapsed_minutes(ticket.created_at, ticket.closed_at)),
            estimated=False,
        )
    minutes = elapsed_minutes(ticket.created_at, now)
    charge = compute_charge(ticket.item_type, ticket.quantity, minutes, pricing)
    return ChargeView(
        rate=charge.rate,
        hours_billed=charge.hours_billed,
        total=charge.total,
        minutes_elapsed=int(minutes),
        estimated=True,
        warnings=charge_warnings(ticket.item_type, charge),
    )


def summarize(db: Session, recent_closed_limit: int = 10) -> TicketSummary:
    recent = list_by_status(db, TicketStatus.CLOSED, recent_closed_limit)
    return TicketSummary(
        active_count=repository.count_by_status(db, TicketStatus.ACTIVE),
        closed_count=repository.count_by_status(db, TicketStatus.CLOSED),
        revenue_total=repository.revenue_total(db),
        revenue_recent=sum(t.price_at_close or 0 for t in recent),
        recent_closed=[TicketOut.model_validate(t) for t in recent],
    )
