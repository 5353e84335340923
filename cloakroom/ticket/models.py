# cloakroom/ticket/models.py
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String
from cloakroom.core.database import Base
from cloakroom.ticket.enums import TicketStatus

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(32), unique=True, index=True, nullable=False)
    branch_id = Column(Integer, ForeignKey("branches.id"), index=True, nullable=False)
    item_type = Column(String(16), nullable=False)
    quantity = Column(Integer, nullable=False)
    notes = Column(String, nullable=False, default="")
    status = Column(String(16), default=TicketStatus.ACTIVE.value, index=True, nullable=False)

    created_at = Column(DateTime(timezone=True), index=True, nullable=False)
    closed_at = Column(DateTime(timezone=True), index=True, nullable=True)
    # frozen at close, never recomputed
    price_at_close = Column(Float, nullable=True)
    hours_billed = Column(Float, nullable=True)
    paid = Column(Boolean, default=False, nullable=False)

    created_by = Column(String, nullable=True)
    closed_by = Column(String, nullable=True)

    def __repr__(self):
        return f"<Ticket(token='{self.token}', status='{self.status}')>"
