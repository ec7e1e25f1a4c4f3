"""Client-side submission of a new incident: recordings first, manifest last."""

import json
import posixpath
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from uuid_extensions import uuid7

from app.models.recording import RecordingRole
from app.schemas.manifest import MANIFEST_FILE_NAME, IncidentManifest, ManifestFile
from app.services.storage import StorageGateway
from app.utils.logging_config import logger


@dataclass(frozen=True)
class PickedRecording:
    """An audio file chosen by the user, with its speaker role and capture time."""

    file_name: str
    role: RecordingRole
    recorded_at: datetime
    content: bytes
    content_type: Optional[str] = None


@dataclass(frozen=True)
class SubmittedIncident:
    storage_path: str
    manifest_path: str
    manifest: IncidentManifest


def stored_file_name(index: int, role: RecordingRole, file_name: str) -> str:
    return f"{index}_{role.value}_{posixpath.basename(file_name)}"


async def submit_incident(
    recordings: Sequence[PickedRecording],
    storage: StorageGateway,
    storage_path: Optional[str] = None,
) -> SubmittedIncident:
    """
    Uploads the recordings under a fresh prefix, then writes incident_details.json.

    Files are numbered from 1 in capture-time order. The manifest goes last
    because its arrival is what creates the ticket.
    """
    if not recordings:
        raise ValueError("An incident needs at least one recording")

    storage_path = storage_path or f"incidents/{uuid7()}"
    ordered = sorted(recordings, key=lambda r: r.recorded_at)

    files = []
    for index, recording in enumerate(ordered, start=1):
        name = stored_file_name(index, recording.role, recording.file_name)
        await storage.upload(
            f"{storage_path}/{name}", recording.content, recording.content_type
        )
        files.append(
            ManifestFile(
                file_name=name,
                role=recording.role,
                date_unix=int(recording.recorded_at.timestamp()),
            )
        )

    manifest = IncidentManifest(
        incident_time=int(ordered[0].recorded_at.timestamp()), files=files
    )
    manifest_path = f"{storage_path}/{MANIFEST_FILE_NAME}"
    await storage.upload(
        manifest_path,
        json.dumps(manifest.model_dump(mode="json", by_alias=True)).encode("utf-8"),
        "application/json",
    )
    logger.info(f"Submitted incident {storage_path} with {len(files)} recording(s)")
    return SubmittedIncident(
        storage_path=storage_path, manifest_path=manifest_path, manifest=manifest
    )
