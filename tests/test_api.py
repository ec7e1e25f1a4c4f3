"""
Tests for API endpoints.

The app is exercised through httpx with every outside dependency
(database, storage, Gemini, Celery, Google Sheets) overridden by fakes.
"""

import json
import uuid
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_processor, get_sheets_client, get_storage, get_ticket_store
from app.api.v1.tickets import get_retry_dispatcher
from app.main import app
from app.models import RecordingRole, TicketStatus

T0 = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


class FakeSheets:
    def __init__(self):
        self.rows = []

    async def append_row(self, values, sheet_range):
        self.rows.append((values, sheet_range))
        return {"updates": {"updatedRows": 1}}


@pytest.fixture
def sheets():
    return FakeSheets()


@pytest.fixture
def dispatched():
    return []


@pytest_asyncio.fixture
async def client(store, storage, processor, sheets, dispatched):
    def dispatch(ticket_id):
        dispatched.append(ticket_id)
        return "task-123"

    app.dependency_overrides[get_ticket_store] = lambda: store
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_processor] = lambda: processor
    app.dependency_overrides[get_sheets_client] = lambda: sheets
    app.dependency_overrides[get_retry_dispatcher] = lambda: dispatch

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.mark.asyncio
class TestFunctionsAPI:
    async def test_create_ticket_from_manifest(self, client, store, storage):
        storage.objects["incidents/abc/incident_details.json"] = json.dumps(
            {
                "incidentTime": 1700000000,
                "files": [
                    {"fileName": "1_Customer_a.m4a", "role": "Customer", "dateUNIX": 1700000000}
                ],
            }
        ).encode()

        response = await client.post(
            "/functions/create-ticket-from-storage",
            json={"name": "incidents/abc/incident_details.json"},
        )

        assert response.status_code == 200
        (ticket,) = store.tickets.values()
        assert response.json() == {"message": f"Ticket {ticket.id} and recordings created"}

    async def test_create_ticket_ignores_other_objects(self, client, store):
        response = await client.post(
            "/functions/create-ticket-from-storage",
            json={"name": "incidents/abc/1_Customer_a.m4a"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Not an incident details file, skipping."}
        assert store.tickets == {}

    async def test_create_ticket_reports_bad_manifest(self, client, store, storage):
        storage.objects["incidents/abc/incident_details.json"] = b"not json"

        response = await client.post(
            "/functions/create-ticket-from-storage",
            json={"name": "incidents/abc/incident_details.json"},
        )

        assert response.status_code == 500
        assert "error" in response.json()
        assert store.tickets == {}

    async def test_process_ticket_success(self, client, store, storage):
        ticket = store.seed_ticket(storage_path="incidents/abc")
        store.seed_recording(ticket, "1_Customer_a.m4a", T0)
        storage.objects["incidents/abc/1_Customer_a.m4a"] = b"audio"

        response = await client.post(
            "/functions/process-ticket",
            json={"record": {"id": str(ticket.id), "storage_path": "incidents/abc"}},
        )

        assert response.status_code == 200
        assert response.json() == {"message": f"Successfully processed ticket {ticket.id}"}
        assert store.tickets[ticket.id].status == TicketStatus.DONE

    async def test_process_ticket_failure_is_reported_with_200(self, client, store):
        ticket = store.seed_ticket(storage_path="incidents/empty")

        response = await client.post(
            "/functions/process-ticket",
            json={"record": {"id": str(ticket.id), "storage_path": "incidents/empty"}},
        )

        assert response.status_code == 200
        assert response.json() == {"error": f"No recordings found for ticket {ticket.id}"}
        assert store.tickets[ticket.id].status == TicketStatus.FAILED
        assert store.errors_for(ticket.id) == [f"No recordings found for ticket {ticket.id}"]

    async def test_process_ticket_rejects_malformed_body(self, client):
        response = await client.post("/functions/process-ticket", json={"record": {}})
        assert response.status_code == 422

    async def test_append_to_sheet(self, client, sheets):
        response = await client.post(
            "/functions/append-to-sheet", json={"fileName": "incidents/abc/1_Customer_a.m4a"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"updates": {"updatedRows": 1}}}
        ((values, sheet_range),) = sheets.rows
        assert values[1] == "incidents/abc/1_Customer_a.m4a"
        assert sheet_range == "Sheet1!A1"

    async def test_append_to_sheet_requires_file_name(self, client, sheets):
        response = await client.post("/functions/append-to-sheet", json={})

        assert response.status_code == 500
        assert response.json() == {"error": "fileName is required in the request body"}
        assert sheets.rows == []

    async def test_append_to_sheet_without_configuration(self, client):
        app.dependency_overrides[get_sheets_client] = lambda: None

        response = await client.post("/functions/append-to-sheet", json={"fileName": "a.m4a"})

        assert response.status_code == 500
        assert response.json() == {"error": "Missing environment variables"}


@pytest.mark.asyncio
class TestTicketsAPI:
    async def test_list_tickets_newest_first(self, client, store):
        older = store.seed_ticket(status=TicketStatus.DONE)
        newer = store.seed_ticket(status=TicketStatus.PENDING)

        response = await client.get("/api/v1/tickets")

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [str(newer.id), str(older.id)]
        assert response.json()[0]["status"] == "pending"

    async def test_get_unknown_ticket_is_404(self, client):
        response = await client.get(f"/api/v1/tickets/{uuid.uuid4()}")
        assert response.status_code == 404

    async def test_list_recordings(self, client, store):
        ticket = store.seed_ticket()
        store.seed_recording(ticket, "2_Manager_b.m4a", T0.replace(minute=20), RecordingRole.MANAGER)
        store.seed_recording(ticket, "1_Customer_a.m4a", T0)

        response = await client.get(f"/api/v1/tickets/{ticket.id}/recordings")

        assert response.status_code == 200
        assert [(r["file_name"], r["role"]) for r in response.json()] == [
            ("1_Customer_a.m4a", "Customer"),
            ("2_Manager_b.m4a", "Manager"),
        ]

    async def test_list_errors_newest_first(self, client, store):
        ticket = store.seed_ticket(status=TicketStatus.FAILED)
        store.seed_error(ticket, "first")
        store.seed_error(ticket, "second")

        response = await client.get(f"/api/v1/tickets/{ticket.id}/errors")

        assert [e["error_message"] for e in response.json()] == ["second", "first"]

    async def test_retry_failed_ticket(self, client, store, dispatched):
        ticket = store.seed_ticket(status=TicketStatus.FAILED)

        response = await client.post(f"/api/v1/tickets/{ticket.id}/retry")

        assert response.status_code == 202
        assert response.json() == {"ticket_id": str(ticket.id), "task_id": "task-123"}
        assert dispatched == [ticket.id]

    async def test_retry_requires_failed_status(self, client, store, dispatched):
        ticket = store.seed_ticket(status=TicketStatus.DONE)

        response = await client.post(f"/api/v1/tickets/{ticket.id}/retry")

        assert response.status_code == 409
        assert dispatched == []

    async def test_clear_errors(self, client, store):
        ticket = store.seed_ticket(status=TicketStatus.FAILED)
        store.seed_error(ticket, "one")
        store.seed_error(ticket, "two")

        response = await client.delete(f"/api/v1/tickets/{ticket.id}/errors")

        assert response.status_code == 200
        assert response.json() == {"ticket_id": str(ticket.id), "deleted": 2}
        assert store.errors_for(ticket.id) == []


@pytest.mark.asyncio
class TestIncidentsAPI:
    async def test_upload_incident(self, client, storage):
        response = await client.post(
            "/api/v1/incidents",
            data={"roles": ["Manager", "Customer"], "recorded_at": ["1700000300", "1700000000"]},
            files=[
                ("files", ("manager_Ravi_0091.m4a", b"audio-2", "audio/mp4")),
                ("files", ("call.m4a", b"audio-1", "application/octet-stream")),
            ],
        )

        assert response.status_code == 201
        body = response.json()
        assert body["files"] == ["1_Customer_call.m4a", "2_Manager_manager_Ravi_0091.m4a"]
        assert body["manifest_path"] == f"{body['storage_path']}/incident_details.json"
        assert storage.uploads[-1] == body["manifest_path"]
        assert storage.objects[f"{body['storage_path']}/1_Customer_call.m4a"] == b"audio-1"

    async def test_upload_rejects_non_audio(self, client, storage):
        response = await client.post(
            "/api/v1/incidents",
            data={"roles": ["Customer"], "recorded_at": ["1700000000"]},
            files=[("files", ("notes.pdf", b"%PDF", "application/pdf"))],
        )

        assert response.status_code == 400
        assert storage.uploads == []

    async def test_upload_rejects_mismatched_fields(self, client, storage):
        response = await client.post(
            "/api/v1/incidents",
            data={"roles": ["Customer", "Manager"], "recorded_at": ["1700000000"]},
            files=[("files", ("a.m4a", b"audio", "audio/mp4"))],
        )

        assert response.status_code == 400
        assert storage.uploads == []
