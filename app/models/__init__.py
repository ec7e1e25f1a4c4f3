"""Exports all models for easy access."""

from .base import Base, BaseModel
from .recording import Recording, RecordingRole
from .ticket import CLAIMABLE_STATUSES, Ticket, TicketStatus
from .ticket_error import TicketError

__all__ = [
    "Base",
    "BaseModel",
    "Ticket",
    "TicketStatus",
    "CLAIMABLE_STATUSES",
    "Recording",
    "RecordingRole",
    "TicketError",
]
