from dataclasses import dataclass

from langchain_core.runnables import RunnableConfig

from app.services.gemini import GeminiExtractor, GeminiTranscriber
from app.services.storage import StorageGateway
from app.services.ticket_store import TicketStore


@dataclass(frozen=True)
class PipelineServices:
    """External collaborators of one processing run, injected through the graph config."""

    store: TicketStore
    storage: StorageGateway
    transcriber: GeminiTranscriber
    extractor: GeminiExtractor

    def as_config(self) -> RunnableConfig:
        return {"configurable": {"services": self}}


def services_from(config: RunnableConfig) -> PipelineServices:
    try:
        return config["configurable"]["services"]
    except KeyError:
        raise RuntimeError(
            "Pipeline services missing from the run config. Invoke the graph through TicketProcessor."
        ) from None
