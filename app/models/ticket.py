"""Ticket model for incidents built from uploaded call recordings."""

import enum
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import ARRAY, Enum as EnumType
from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class TicketStatus(enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


# Statuses a processing run may start from.
CLAIMABLE_STATUSES = (TicketStatus.PENDING, TicketStatus.FAILED)


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Ticket(BaseModel):
    __tablename__ = "tickets"

    storage_path: Mapped[str] = mapped_column(
        String, nullable=False, comment="Storage prefix holding the recordings."
    )
    incident_time: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False
    )
    status: Mapped[TicketStatus] = mapped_column(
        EnumType(TicketStatus, name="ticket_status", values_callable=_enum_values),
        nullable=False,
        default=TicketStatus.PENDING,
        index=True,
    )
    transcription: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Fields extracted from the combined transcript.
    branch: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    customer_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    category: Mapped[Optional[list[str]]] = mapped_column(ARRAY(String), nullable=True)
    category_other: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    issue_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    issue_status: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    issue_status_other: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    action_taken: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    customer_care_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    resolution_feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    order_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    order_type_other: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    ticket_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    ticket_type_other: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    table_no: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    token_no: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    bill_no: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    waiter_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    captain_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    staff_responsible: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    ai_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    preventive_action: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    columns_field: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONB, nullable=True, comment="Raw extraction payload as returned by the model."
    )

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, status='{self.status.value}')>"
