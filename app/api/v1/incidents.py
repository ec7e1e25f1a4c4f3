"""API endpoint for submitting a new incident's recordings."""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.deps import get_storage
from app.models.recording import RecordingRole
from app.schemas.incident import IncidentUploadResponse
from app.services.storage import StorageGateway
from app.services.uploads import PickedRecording, submit_incident
from app.settings import settings
from app.utils.file_validator import read_limited, validate_audio

router = APIRouter()


@router.post(
    "",
    status_code=201,
    response_model=IncidentUploadResponse,
    summary="Upload the recordings of a new incident",
    description=(
        "Accepts audio files with one role and one capture time (unix seconds) "
        "per file, stores them and writes the incident manifest that creates the ticket."
    ),
)
async def upload_incident(
    files: List[UploadFile] = File(...),
    roles: List[RecordingRole] = Form(...),
    recorded_at: List[int] = Form(...),
    storage: StorageGateway = Depends(get_storage),
) -> IncidentUploadResponse:
    if not (len(files) == len(roles) == len(recorded_at)):
        raise HTTPException(
            status_code=400,
            detail="files, roles and recorded_at must have the same number of entries.",
        )

    recordings = []
    for upload, role, timestamp in zip(files, roles, recorded_at):
        validate_audio(upload)
        content = await read_limited(upload, settings.MAX_UPLOAD_SIZE)
        recordings.append(
            PickedRecording(
                file_name=upload.filename or "recording",
                role=role,
                recorded_at=datetime.fromtimestamp(timestamp, tz=timezone.utc),
                content=content,
                content_type=upload.content_type,
            )
        )

    incident = await submit_incident(recordings, storage)
    return IncidentUploadResponse(
        storage_path=incident.storage_path,
        manifest_path=incident.manifest_path,
        files=[f.file_name for f in incident.manifest.files],
    )
