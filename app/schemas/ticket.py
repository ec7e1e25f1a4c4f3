"""Pydantic schemas for tickets and their recordings."""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.recording import RecordingRole
from app.models.ticket import TicketStatus


class RecordingResponse(BaseModel):
    """Serialized Recording row."""

    id: uuid.UUID
    ticket_id: uuid.UUID
    file_name: str
    role: RecordingRole
    recording_time: datetime
    transcription: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TicketErrorResponse(BaseModel):
    id: uuid.UUID
    ticket_id: uuid.UUID
    error_message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TicketResponse(BaseModel):
    """Serialized Ticket row, including whatever fields extraction has filled."""

    id: uuid.UUID
    created_at: datetime
    storage_path: str
    incident_time: datetime
    status: TicketStatus
    transcription: Optional[str] = None
    branch: Optional[str] = None
    customer_name: Optional[str] = None
    category: Optional[List[str]] = None
    category_other: Optional[str] = None
    issue_details: Optional[str] = None
    issue_status: Optional[str] = None
    issue_status_other: Optional[str] = None
    action_taken: Optional[str] = None
    customer_care_notes: Optional[str] = None
    resolution_feedback: Optional[str] = None
    order_type: Optional[str] = None
    order_type_other: Optional[str] = None
    ticket_type: Optional[str] = None
    ticket_type_other: Optional[str] = None
    table_no: Optional[str] = None
    token_no: Optional[str] = None
    bill_no: Optional[str] = None
    waiter_name: Optional[str] = None
    captain_name: Optional[str] = None
    staff_responsible: Optional[str] = None
    ai_summary: Optional[str] = None
    preventive_action: Optional[str] = None
    columns_field: Optional[dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


class RetryResponse(BaseModel):
    ticket_id: uuid.UUID
    task_id: str = Field(..., description="The ID of the background processing task.")


class ClearErrorsResponse(BaseModel):
    ticket_id: uuid.UUID
    deleted: int
