"""
Trigger endpoints called by Supabase storage / database webhooks.

They answer with a JSON envelope, `{"message": ...}` or `{"error": ...}`,
instead of FastAPI's default error bodies.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_processor, get_sheets_client, get_storage, get_ticket_store
from app.schemas.functions import AppendToSheetRequest, ProcessTicketRequest, StorageObject
from app.services.ingestion import ingest_storage_object
from app.services.processor import TicketProcessor
from app.services.sheets import GoogleSheetsClient, sheet_timestamp
from app.services.storage import StorageGateway
from app.services.ticket_store import TicketStore
from app.settings import settings
from app.utils.logging_config import logger

router = APIRouter()


@router.post(
    "/create-ticket-from-storage",
    summary="Create a ticket from an uploaded incident manifest",
)
async def create_ticket_from_storage(
    storage_object: StorageObject,
    storage: StorageGateway = Depends(get_storage),
    store: TicketStore = Depends(get_ticket_store),
) -> JSONResponse:
    try:
        result = await ingest_storage_object(storage_object.name, storage, store)
    except Exception as e:
        logger.error(f"Error in create-ticket-from-storage: {e}", exc_info=True)
        return JSONResponse({"error": str(e)}, status_code=500)
    return JSONResponse({"message": result.message}, status_code=200)


@router.post(
    "/process-ticket",
    summary="Transcribe and analyze the recordings of a ticket",
    description=(
        "Always answers 200 once the request is understood. A failed run is "
        "reported in the body and recorded on the ticket, so the webhook is "
        "never retried automatically."
    ),
)
async def process_ticket(
    payload: ProcessTicketRequest,
    processor: TicketProcessor = Depends(get_processor),
) -> JSONResponse:
    result = await processor.process(payload.record.id, payload.record.storage_path)
    if result.error:
        return JSONResponse({"error": result.error}, status_code=200)
    return JSONResponse({"message": result.message}, status_code=200)


@router.post("/append-to-sheet", summary="Append a file name to the tracking sheet")
async def append_to_sheet(
    payload: AppendToSheetRequest,
    sheets: Optional[GoogleSheetsClient] = Depends(get_sheets_client),
) -> JSONResponse:
    try:
        if sheets is None:
            raise ValueError("Missing environment variables")
        if not payload.file_name:
            raise ValueError("fileName is required in the request body")
        now = sheet_timestamp(datetime.now(timezone.utc), settings.SHEET_TIMEZONE)
        data = await sheets.append_row([now, payload.file_name], settings.SHEET_RANGE)
    except Exception as e:
        logger.error(f"Error in append-to-sheet: {e}", exc_info=True)
        return JSONResponse({"error": str(e)}, status_code=500)
    return JSONResponse({"success": True, "data": data})
