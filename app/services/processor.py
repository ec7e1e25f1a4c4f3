"""Ticket Processor: runs the transcription/extraction pipeline for one ticket."""

import enum
import uuid
from dataclasses import dataclass
from typing import Optional

from app.models.ticket import TicketStatus
from app.pipeline.constructor import runnable
from app.pipeline.services import PipelineServices
from app.utils.logging_config import logger


class ProcessingOutcome(enum.Enum):
    DONE = "done"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ProcessingResult:
    ticket_id: uuid.UUID
    outcome: ProcessingOutcome
    message: str
    error: Optional[str] = None


class TicketProcessor:
    """
    Moves a ticket through pending/failed -> processing -> done | failed.

    Failures never escape `process`: they are written to the ticket as the
    failed status plus a new TicketError row, and returned as a result.
    """

    def __init__(self, services: PipelineServices):
        self.services = services

    async def process(self, ticket_id: uuid.UUID, storage_path: str) -> ProcessingResult:
        store = self.services.store
        claimed = False
        try:
            claimed = await store.claim_for_processing(ticket_id)
            if not claimed:
                logger.info(f"Ticket {ticket_id} is not pending or failed; skipping run")
                return ProcessingResult(
                    ticket_id=ticket_id,
                    outcome=ProcessingOutcome.SKIPPED,
                    message=f"Ticket {ticket_id} is already being processed or done",
                )

            logger.info(f"Processing ticket {ticket_id} from {storage_path}")
            await runnable.ainvoke(
                {"ticket_id": ticket_id, "storage_path": storage_path},
                config=self.services.as_config(),
            )
        except Exception as e:
            logger.exception(f"Failed to process ticket {ticket_id}: {e}")
            await self._record_failure(ticket_id, str(e) or type(e).__name__, claimed)
            return ProcessingResult(
                ticket_id=ticket_id,
                outcome=ProcessingOutcome.FAILED,
                message=f"Failed to process ticket {ticket_id}",
                error=str(e) or type(e).__name__,
            )

        logger.info(f"Successfully processed ticket {ticket_id}")
        return ProcessingResult(
            ticket_id=ticket_id,
            outcome=ProcessingOutcome.DONE,
            message=f"Successfully processed ticket {ticket_id}",
        )

    async def _record_failure(
        self, ticket_id: uuid.UUID, error_message: str, claimed: bool
    ) -> None:
        store = self.services.store
        # Only a claimed run may move the ticket to failed; otherwise the row
        # could jump straight from pending or done.
        try:
            if claimed:
                await store.update_ticket(ticket_id, status=TicketStatus.FAILED)
            await store.add_error(ticket_id, error_message)
        except Exception as e:
            logger.error(
                f"Could not record failure for ticket {ticket_id}: {e}", exc_info=True
            )
