"""Schema of the incident_details.json manifest written next to the recordings."""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.models.recording import RecordingRole

MANIFEST_FILE_NAME = "incident_details.json"


def from_unix(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class ManifestFile(BaseModel):
    file_name: str = Field(..., alias="fileName", min_length=1)
    role: RecordingRole
    date_unix: float = Field(..., alias="dateUNIX")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def recording_time(self) -> datetime:
        return from_unix(self.date_unix)


class IncidentManifest(BaseModel):
    incident_time: float = Field(..., alias="incidentTime")
    files: List[ManifestFile] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def incident_datetime(self) -> datetime:
        return from_unix(self.incident_time)
