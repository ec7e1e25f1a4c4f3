"""Upload validation utilities."""

from fastapi import HTTPException, UploadFile

from app.services.gemini import AUDIO_MIME_TYPES

GENERIC_CONTENT_TYPES = {None, "", "application/octet-stream"}


def validate_audio(file: UploadFile) -> None:
    """
    Validates that an uploaded file is an audio recording.

    Mobile pickers often send a generic content type, in which case the file
    extension decides.

    Raises:
        HTTPException: If the file is not audio.
    """
    content_type = file.content_type
    if content_type and content_type.startswith("audio/"):
        return

    file_name = (file.filename or "").lower()
    known_extension = any(file_name.endswith(ext) for ext in AUDIO_MIME_TYPES) or (
        file_name.endswith((".mp3", ".wav", ".flac"))
    )
    if content_type in GENERIC_CONTENT_TYPES and known_extension:
        return

    raise HTTPException(
        status_code=400,
        detail=f"Invalid file type for '{file.filename}'. Only audio recordings are accepted.",
    )


async def read_limited(file: UploadFile, max_size: int) -> bytes:
    """
    Reads an upload fully, refusing anything larger than max_size bytes.

    Raises:
        HTTPException: 413 if the file is too large.
    """
    chunks = []
    total_size = 0
    while chunk := await file.read(4096):
        total_size += len(chunk)
        if total_size > max_size:
            raise HTTPException(
                status_code=413,
                detail=f"'{file.filename}' exceeds the {max_size // (1024 * 1024)}MB limit.",
            )
        chunks.append(chunk)
    return b"".join(chunks)
