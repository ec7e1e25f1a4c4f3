"""Polling view of the ticket list, as shown by the client application."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

from app.models import Recording, Ticket, TicketError, TicketStatus
from app.services.ticket_store import TicketStore
from app.utils.logging_config import logger


def merge_tickets(current: Sequence[Ticket], incoming: Sequence[Ticket]) -> list[Ticket]:
    """
    Next list state in the incoming (store) order.

    A ticket whose id and status are unchanged keeps its previous object, so a
    renderer can skip rows that did not move.
    """
    if not current:
        return list(incoming)
    existing = {ticket.id: ticket for ticket in current}
    merged = []
    for ticket in incoming:
        previous = existing.get(ticket.id)
        if previous is not None and previous.status == ticket.status:
            merged.append(previous)
        else:
            merged.append(ticket)
    return merged


@dataclass
class TicketDetails:
    """Lazily loaded extras of an expanded ticket row."""

    recordings: list[Recording] = field(default_factory=list)
    errors: list[TicketError] = field(default_factory=list)
    recordings_loaded: bool = False


class TicketFeed:
    """
    Client-side ticket list.

    `retry` is whatever re-invokes the processor for a ticket (an HTTP call,
    a queued task); the feed only tracks what the user sees.
    """

    def __init__(
        self,
        store: TicketStore,
        retry: Callable[[Ticket], Awaitable[Any]],
    ):
        self._store = store
        self._retry = retry
        self.tickets: list[Ticket] = []
        self._details: dict[uuid.UUID, TicketDetails] = {}

    def get(self, ticket_id: uuid.UUID) -> Optional[Ticket]:
        return next((t for t in self.tickets if t.id == ticket_id), None)

    async def refresh(self) -> list[Ticket]:
        incoming = await self._store.list_tickets()
        self.tickets = merge_tickets(self.tickets, incoming)
        return self.tickets

    async def expand(self, ticket_id: uuid.UUID) -> TicketDetails:
        """
        Recordings are fetched on first expansion only; the error log is fetched
        each time a failed ticket is expanded.
        """
        details = self._details.setdefault(ticket_id, TicketDetails())
        if not details.recordings_loaded:
            details.recordings = list(await self._store.list_recordings(ticket_id))
            details.recordings_loaded = True

        ticket = self.get(ticket_id)
        if ticket is not None and ticket.status == TicketStatus.FAILED:
            details.errors = list(await self._store.list_errors(ticket_id))
        else:
            details.errors = []
        return details

    async def retry(self, ticket_id: uuid.UUID) -> Any:
        ticket = self.get(ticket_id)
        if ticket is None:
            raise KeyError(f"Ticket {ticket_id} is not in the feed")
        # Hide the old errors right away; the stored log is left untouched.
        if ticket_id in self._details:
            self._details[ticket_id].errors = []
        logger.info(f"Retrying ticket {ticket_id}")
        return await self._retry(ticket)

    async def clear_errors(self, ticket_id: uuid.UUID) -> int:
        deleted = await self._store.clear_errors(ticket_id)
        if ticket_id in self._details:
            self._details[ticket_id].errors = []
        return deleted
