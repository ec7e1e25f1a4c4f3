"""Dependencies for API endpoints."""

from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Depends

from app.config.db import SessionLocal
from app.config.supabase import supabase_admin
from app.pipeline.services import PipelineServices
from app.services.gemini import GeminiExtractor, GeminiTranscriber
from app.services.processor import TicketProcessor
from app.services.sheets import GoogleSheetsClient
from app.services.storage import StorageGateway
from app.services.ticket_store import TicketStore
from app.settings import settings


def get_ticket_store() -> TicketStore:
    return TicketStore(SessionLocal)


async def get_storage() -> StorageGateway:
    return StorageGateway(await supabase_admin(), settings.RECORDINGS_BUCKET)


@lru_cache
def get_transcriber() -> GeminiTranscriber:
    return GeminiTranscriber(
        api_key=settings.GOOGLE_API_KEY,
        model=settings.GEMINI_MODEL,
        default_mime_type=settings.DEFAULT_AUDIO_MIME_TYPE,
    )


@lru_cache
def get_extractor() -> GeminiExtractor:
    return GeminiExtractor(api_key=settings.GOOGLE_API_KEY, model=settings.GEMINI_MODEL)


def get_processor(
    store: TicketStore = Depends(get_ticket_store),
    storage: StorageGateway = Depends(get_storage),
    transcriber: GeminiTranscriber = Depends(get_transcriber),
    extractor: GeminiExtractor = Depends(get_extractor),
) -> TicketProcessor:
    return TicketProcessor(
        PipelineServices(
            store=store, storage=storage, transcriber=transcriber, extractor=extractor
        )
    )


async def get_sheets_client() -> AsyncGenerator[Optional[GoogleSheetsClient], None]:
    """Yields None when the service account or spreadsheet id is not configured."""
    if not settings.GOOGLE_SERVICE_ACCOUNT_JSON or not settings.SPREADSHEET_ID:
        yield None
        return
    client = GoogleSheetsClient(
        settings.GOOGLE_SERVICE_ACCOUNT_JSON, settings.SPREADSHEET_ID
    )
    try:
        yield client
    finally:
        await client.aclose()
