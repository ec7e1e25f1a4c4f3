"""Building the combined, call-labelled transcript of a ticket."""

import re
from typing import Sequence

from app.models.recording import Recording, RecordingRole

# Manager recordings carry the manager's name and phone: manager_<Name>_0091<digits>
MANAGER_FILE_PATTERN = re.compile(r"manager_(?P<name>.+?)_0091")


def role_label(role: RecordingRole, file_name: str) -> str:
    """
    Human-readable speaker role for a recording.

    >>> role_label(RecordingRole.MANAGER, "manager_John_Doe_00919876543210.m4a")
    'Manager John Doe'
    """
    if role is RecordingRole.MANAGER:
        match = MANAGER_FILE_PATTERN.search(file_name)
        if match:
            name = match.group("name").replace("_", " ").strip()
            if name:
                return f"Manager {name}"
    return role.value


def combine_transcripts(
    recordings: Sequence[Recording], transcripts: Sequence[str]
) -> str:
    """One block per call, numbered from 1 in the order given."""
    blocks = [
        f"Call {index}: Role: {role_label(recording.role, recording.file_name)}\n"
        f"Transcription:\n{transcript}\n\n"
        for index, (recording, transcript) in enumerate(
            zip(recordings, transcripts), start=1
        )
    ]
    return "".join(blocks).strip()
