import json
from datetime import datetime, timezone

import pytest

from app.models import RecordingRole, TicketStatus
from app.services.ingestion import (
    ingest_storage_object,
    is_manifest,
    manifest_storage_path,
)


def _put_manifest(storage, path, manifest):
    storage.objects[path] = json.dumps(manifest).encode("utf-8")


def test_manifest_detection():
    assert is_manifest("incidents/abc/incident_details.json")
    assert is_manifest("incident_details.json")
    assert not is_manifest("incidents/abc/1_Customer_a.m4a")
    assert not is_manifest("incidents/abc/incident_details.json.bak")


def test_manifest_storage_path_is_parent_directory():
    assert manifest_storage_path("incidents/abc/incident_details.json") == "incidents/abc"
    assert manifest_storage_path("a/b/c/incident_details.json") == "a/b/c"


@pytest.mark.asyncio
async def test_ingest_creates_pending_ticket_with_recordings(store, storage):
    _put_manifest(
        storage,
        "incidents/abc/incident_details.json",
        {
            "incidentTime": 1700000000,
            "files": [{"fileName": "1_Customer_a.m4a", "role": "Customer", "dateUNIX": 1700000000}],
        },
    )
    storage.objects["incidents/abc/1_Customer_a.m4a"] = b"audio"

    result = await ingest_storage_object("incidents/abc/incident_details.json", storage, store)

    ticket = result.ticket
    assert ticket is not None
    assert result.message == f"Ticket {ticket.id} and recordings created"
    assert ticket.storage_path == "incidents/abc"
    assert ticket.status == TicketStatus.PENDING
    assert ticket.incident_time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    recordings = await store.list_recordings(ticket.id)
    assert len(recordings) == 1
    assert recordings[0].file_name == "1_Customer_a.m4a"
    assert recordings[0].role == RecordingRole.CUSTOMER
    assert recordings[0].recording_time == ticket.incident_time
    assert recordings[0].transcription is None


@pytest.mark.asyncio
async def test_non_manifest_object_is_skipped(store, storage):
    result = await ingest_storage_object("incidents/abc/1_Customer_a.m4a", storage, store)

    assert result.ticket is None
    assert result.message == "Not an incident details file, skipping."
    assert storage.downloads == []
    assert store.tickets == {}


@pytest.mark.asyncio
async def test_malformed_manifest_creates_nothing(store, storage):
    storage.objects["incidents/abc/incident_details.json"] = b"{not json"

    with pytest.raises(ValueError):
        await ingest_storage_object("incidents/abc/incident_details.json", storage, store)

    assert store.tickets == {}
    assert store.recordings == {}


@pytest.mark.asyncio
async def test_manifest_with_unknown_role_is_rejected(store, storage):
    _put_manifest(
        storage,
        "incidents/abc/incident_details.json",
        {
            "incidentTime": 1700000000,
            "files": [{"fileName": "a.m4a", "role": "Chef", "dateUNIX": 1700000000}],
        },
    )

    with pytest.raises(ValueError):
        await ingest_storage_object("incidents/abc/incident_details.json", storage, store)
    assert store.tickets == {}


@pytest.mark.asyncio
async def test_missing_manifest_object_propagates(store, storage):
    with pytest.raises(Exception, match="Object not found"):
        await ingest_storage_object("incidents/gone/incident_details.json", storage, store)
    assert store.tickets == {}


@pytest.mark.asyncio
async def test_manifest_without_files_creates_empty_ticket(store, storage):
    _put_manifest(
        storage, "x/y/incident_details.json", {"incidentTime": 1700000000, "files": []}
    )

    result = await ingest_storage_object("x/y/incident_details.json", storage, store)

    assert result.ticket.storage_path == "x/y"
    assert await store.list_recordings(result.ticket.id) == []
    assert "add_recordings" not in store.calls


@pytest.mark.asyncio
async def test_recordings_missing_from_storage_still_create_ticket(store, storage):
    _put_manifest(
        storage,
        "incidents/abc/incident_details.json",
        {
            "incidentTime": 1700000000,
            "files": [
                {"fileName": "1_Customer_a.m4a", "role": "Customer", "dateUNIX": 1700000000},
                {"fileName": "2_Manager_b.m4a", "role": "Manager", "dateUNIX": 1700000060},
            ],
        },
    )

    result = await ingest_storage_object("incidents/abc/incident_details.json", storage, store)

    recordings = await store.list_recordings(result.ticket.id)
    assert [r.file_name for r in recordings] == ["1_Customer_a.m4a", "2_Manager_b.m4a"]
