"""Nodes that load a ticket's recordings and transcribe them one by one."""

from langchain_core.runnables import RunnableConfig

from app.pipeline.services import services_from
from app.pipeline.state import TicketState
from app.utils.logging_config import logger


class NoRecordingsError(RuntimeError):
    """Raised when a ticket has no recording rows to process."""


async def load_recordings(state: TicketState, config: RunnableConfig) -> dict:
    """
    Fetch the ticket's recordings in call order.

    Raises:
        NoRecordingsError: If the ticket has no recordings.
    """
    logger.info("---NODE: LOAD RECORDINGS---")
    services = services_from(config)
    ticket_id = state["ticket_id"]

    recordings = list(await services.store.list_recordings(ticket_id))
    if not recordings:
        raise NoRecordingsError(f"No recordings found for ticket {ticket_id}")

    logger.info(f"Ticket {ticket_id} has {len(recordings)} recording(s)")
    return {"recordings": recordings}


async def transcribe_recordings(state: TicketState, config: RunnableConfig) -> dict:
    """
    Transcribe each recording sequentially, oldest call first.

    A recording that already carries a transcription is reused as-is, so a retry
    only pays for the calls a previous run did not finish. Each new transcript
    is written back before moving on to the next file.
    """
    logger.info("---NODE: TRANSCRIBE RECORDINGS---")
    services = services_from(config)
    storage_path = state["storage_path"]

    transcripts: list[str] = []
    for recording in state["recordings"]:
        if recording.transcription is not None:
            logger.info(f"Reusing stored transcription for {recording.file_name}")
            transcripts.append(recording.transcription)
            continue

        audio = await services.storage.download(f"{storage_path}/{recording.file_name}")
        transcription = await services.transcriber.transcribe(audio, recording.file_name)
        await services.store.set_recording_transcription(recording.id, transcription)
        recording.transcription = transcription
        transcripts.append(transcription)

    return {"transcripts": transcripts}
