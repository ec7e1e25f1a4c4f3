from typing import List

from pydantic import BaseModel, Field


class IncidentUploadResponse(BaseModel):
    """Response schema for a new incident upload."""

    storage_path: str = Field(..., description="Prefix holding the uploaded recordings.")
    manifest_path: str = Field(..., description="Path of the manifest that triggers ingestion.")
    files: List[str] = Field(..., description="Stored object names, in call order.")
