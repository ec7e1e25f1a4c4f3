"""Recording model: one uploaded call audio file of a ticket."""

import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Enum as EnumType
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class RecordingRole(enum.Enum):
    CUSTOMER = "Customer"
    MANAGER = "Manager"
    OTHER = "Other"


class Recording(BaseModel):
    __tablename__ = "recordings"

    ticket_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[RecordingRole] = mapped_column(
        EnumType(
            RecordingRole,
            name="recording_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
    )
    recording_time: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False
    )
    # Written once by the processor; a later run reuses it instead of re-transcribing.
    transcription: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Recording(id={self.id}, ticket_id={self.ticket_id}, file_name='{self.file_name}')>"
