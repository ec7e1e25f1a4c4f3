import uuid
from typing import Any, TypedDict

from app.models.recording import Recording


class TicketState(TypedDict, total=False):
    """The state carried between the processing steps of one ticket."""

    ticket_id: uuid.UUID
    storage_path: str
    recordings: list[Recording]
    transcripts: list[str]
    combined_transcript: str
    raw_fields: dict[str, Any]  # extraction payload exactly as the model returned it
    ticket_fields: dict[str, Any]
