# cloakroom/ticket/repository.py
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from cloakroom.ticket.enums import TicketStatus
from cloakroom.ticket.models import Ticket

ORDER_FIELDS = {
    TicketStatus.ACTIVE: Ticket.created_at,
    TicketStatus.CLOSED: Ticket.closed_at,
}

class DuplicateTokenError(Exception):
    """Another ticket already holds this token."""

def is_token_conflict(error: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed: tickets.token"
    # Postgres: duplicate key value violates unique constraint "ix_tickets_token"
    message = str(error.orig).lower()
    return "unique" in message and "token" in message

def insert(db: Session, ticket: Ticket) -> Ticket:
    """Persist a new ticket.

    Raises DuplicateTokenError when the token is taken; any other integrity
    failure propagates as IntegrityError. The session is rolled back either way.
    """
    db.add(ticket)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_token_conflict(e):
            raise DuplicateTokenError(ticket.token) from e
        raise
    db.refresh(ticket)
    return ticket

def get_by_id(db: Session, ticket_id: int) -> Ticket | None:
    return db.get(Ticket, ticket_id)

def get_by_token(db: Session, token: str) -> Ticket | None:
    return db.query(Ticket).filter(Ticket.token == token).first()

def conditional_update(db: Session, ticket_id: int, expected_status: TicketStatus, values: dict) -> bool:
    """Apply ``values`` only if the stored status still equals ``expected_status``.

    Single UPDATE ... WHERE status = :expected; returns False when no row matched.
    """
    stmt = (
        update(Ticket)
        .where(Ticket.id == ticket_id, Ticket.status == expected_status.value)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    if result.rowcount != 1:
        db.rollback()
        return False
    db.commit()
    return True

def query_by_status(db: Session, status: TicketStatus, order_field, limit: int) -> list[Ticket]:
    return (
        db.query(Ticket)
        .filter(Ticket.status == status.value)
        .order_by(order_field.desc(), Ticket.id.desc())
        .limit(limit)
        .all()
    )

def count_by_status(db: Session, status: TicketStatus) -> int:
    return db.scalar(select(func.count()).select_from(Ticket).where(Ticket.status == status.value)) or 0

def revenue_total(db: Session) -> float:
    total = db.scalar(
        select(func.coalesce(func.sum(Ticket.price_at_close), 0)).where(Ticket.status == TicketStatus.CLOSED.value)
    )
    return float(total or 0)
