"""Payloads of the storage / database webhook triggers."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class StorageObject(BaseModel):
    """Descriptor of an object written to the recordings bucket."""

    name: str = Field(..., description="Object path inside the bucket.")


class TicketRecord(BaseModel):
    id: uuid.UUID
    storage_path: str


class ProcessTicketRequest(BaseModel):
    """Database webhook body sent when a ticket row is inserted."""

    record: TicketRecord


class AppendToSheetRequest(BaseModel):
    file_name: Optional[str] = Field(default=None, alias="fileName")
