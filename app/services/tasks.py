"""
Background processing of tickets retried from the client.
"""

import asyncio
import uuid

from app.config.db import create_task_engine, session_factory
from app.config.supabase import new_supabase_admin
from app.pipeline.services import PipelineServices
from app.services.gemini import GeminiExtractor, GeminiTranscriber
from app.services.processor import TicketProcessor
from app.services.storage import StorageGateway
from app.services.ticket_store import TicketStore
from app.settings import settings
from app.utils.logging_config import setup_logging
from app.worker import celery_app

logger = setup_logging()


async def _process_ticket(ticket_id: uuid.UUID) -> dict:
    engine = create_task_engine()
    try:
        store = TicketStore(session_factory(engine))
        ticket = await store.get_ticket(ticket_id)
        if ticket is None:
            logger.error(f"Ticket {ticket_id} not found, nothing to process")
            return {"error": f"Ticket {ticket_id} not found"}

        services = PipelineServices(
            store=store,
            storage=StorageGateway(await new_supabase_admin(), settings.RECORDINGS_BUCKET),
            transcriber=GeminiTranscriber(
                api_key=settings.GOOGLE_API_KEY,
                model=settings.GEMINI_MODEL,
                default_mime_type=settings.DEFAULT_AUDIO_MIME_TYPE,
            ),
            extractor=GeminiExtractor(
                api_key=settings.GOOGLE_API_KEY, model=settings.GEMINI_MODEL
            ),
        )
        result = await TicketProcessor(services).process(ticket.id, ticket.storage_path)
    finally:
        await engine.dispose()

    if result.error:
        return {"error": result.error}
    return {"message": result.message}


@celery_app.task(name="process_ticket")
def process_ticket(ticket_id: str) -> dict:
    """
    Celery task re-running the processing pipeline for one ticket.

    No autoretry: a failed run is recorded on the ticket and waits for the user.
    """
    logger.info(f"Starting processing task for ticket_id: {ticket_id}")
    return asyncio.run(_process_ticket(uuid.UUID(ticket_id)))
