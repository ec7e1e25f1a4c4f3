"""Nodes that merge the transcripts, extract ticket fields and close the ticket."""

from langchain_core.runnables import RunnableConfig

from app.models.ticket import TicketStatus
from app.pipeline.fields import normalize_nulls, to_ticket_columns
from app.pipeline.services import services_from
from app.pipeline.state import TicketState
from app.pipeline.transcript import combine_transcripts as build_combined_transcript
from app.utils.logging_config import logger


class EmptyTranscriptError(RuntimeError):
    """Raised when every call transcript is blank."""


async def combine_transcripts(state: TicketState, config: RunnableConfig) -> dict:
    """
    Join the per-call transcripts and store the result on the ticket right away,
    so a failed extraction never costs another round of transcription.
    """
    logger.info("---NODE: COMBINE TRANSCRIPTS---")
    services = services_from(config)
    ticket_id = state["ticket_id"]
    transcripts = state["transcripts"]

    if not any(transcript.strip() for transcript in transcripts):
        raise EmptyTranscriptError(
            f"Combined transcript for ticket {ticket_id} is empty; nothing to analyze"
        )

    combined = build_combined_transcript(state["recordings"], transcripts)
    await services.store.update_ticket(ticket_id, transcription=combined)
    return {"combined_transcript": combined}


async def extract_fields(state: TicketState, config: RunnableConfig) -> dict:
    logger.info("---NODE: EXTRACT FIELDS---")
    services = services_from(config)

    raw_fields = await services.extractor.extract(state["combined_transcript"])
    # columns_field keeps the model output as returned; only the columns are cleaned.
    return {
        "raw_fields": raw_fields,
        "ticket_fields": to_ticket_columns(normalize_nulls(raw_fields)),
    }


async def finalize(state: TicketState, config: RunnableConfig) -> dict:
    logger.info("---NODE: FINALIZE---")
    services = services_from(config)

    await services.store.update_ticket(
        state["ticket_id"],
        **state["ticket_fields"],
        columns_field=state["raw_fields"],
        status=TicketStatus.DONE,
    )
    return {}
