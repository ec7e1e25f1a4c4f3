"""
Ticket Ingestion: turns an uploaded incident manifest into ticket and recording rows.
"""

import json
import posixpath
from dataclasses import dataclass
from typing import Optional

from app.models.ticket import Ticket
from app.schemas.manifest import MANIFEST_FILE_NAME, IncidentManifest
from app.services.storage import StorageGateway
from app.services.ticket_store import TicketStore
from app.utils.logging_config import logger


@dataclass(frozen=True)
class IngestionResult:
    message: str
    ticket: Optional[Ticket] = None


def is_manifest(object_name: str) -> bool:
    return posixpath.basename(object_name) == MANIFEST_FILE_NAME


def manifest_storage_path(object_name: str) -> str:
    """The manifest's parent directory, which prefixes every recording of the incident."""
    return posixpath.dirname(object_name)


async def create_ticket_from_manifest(
    storage_path: str, manifest: IncidentManifest, store: TicketStore
) -> Ticket:
    """
    Inserts a pending ticket and one recording row per manifest file.

    The two inserts are not atomic: if the recordings insert fails the ticket
    row stays behind without recordings.
    """
    ticket = await store.create_ticket(
        storage_path=storage_path, incident_time=manifest.incident_datetime
    )
    if manifest.files:
        await store.add_recordings(
            ticket.id,
            [(f.file_name, f.role, f.recording_time) for f in manifest.files],
        )
    logger.info(
        f"Ticket {ticket.id} created with {len(manifest.files)} recording(s)"
    )
    return ticket


async def ingest_storage_object(
    object_name: str, storage: StorageGateway, store: TicketStore
) -> IngestionResult:
    """
    Handles a storage notification. Anything but an incident manifest is ignored.

    Raises:
        StorageException: If the manifest cannot be downloaded.
        ValueError: If the manifest is not valid JSON or does not match the schema.
    """
    if not is_manifest(object_name):
        return IngestionResult(message="Not an incident details file, skipping.")

    storage_path = manifest_storage_path(object_name)
    raw = await storage.download(object_name)
    manifest = IncidentManifest.model_validate(json.loads(raw))

    stored = set(await storage.list_names(storage_path))
    missing = [f.file_name for f in manifest.files if f.file_name not in stored]
    if missing:
        logger.warning(
            f"Manifest {object_name} references files not in storage: {missing}"
        )

    ticket = await create_ticket_from_manifest(storage_path, manifest, store)
    return IngestionResult(
        message=f"Ticket {ticket.id} and recordings created", ticket=ticket
    )
