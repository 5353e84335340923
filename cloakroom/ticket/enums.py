# cloakroom/ticket/enums.py
from enum import Enum


class ItemType(str, Enum):
    BOLSA = "BOLSA"        # bag
    MOCHILA = "MOCHILA"    # backpack
    MALETA = "MALETA"      # suitcase


class TicketStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


_STATUS_SYNONYMS = {
    "ACTIVE": TicketStatus.ACTIVE,
    "OPEN": TicketStatus.ACTIVE,
    "ABIERTO": TicketStatus.ACTIVE,
    "ACTIVO": TicketStatus.ACTIVE,
    "CLOSED": TicketStatus.CLOSED,
    "DELIVERED": TicketStatus.CLOSED,
    "DONE": TicketStatus.CLOSED,
    "ENTREGADO": TicketStatus.CLOSED,
}


def normalize_status(value: str | None) -> TicketStatus | None:
    """Map loose status labels (as typed in links and legacy exports) to TicketStatus.

    Returns None for unknown labels. Only the HTTP layer calls this.
    """
    if value is None:
        return None
    return _STATUS_SYNONYMS.get(value.strip().upper())
