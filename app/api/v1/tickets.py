"""API endpoints backing the ticket list of the client application."""

import uuid
from typing import Callable, List

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_ticket_store
from app.models.ticket import Ticket, TicketStatus
from app.schemas.ticket import (
    ClearErrorsResponse,
    RecordingResponse,
    RetryResponse,
    TicketErrorResponse,
    TicketResponse,
)
from app.services.tasks import process_ticket
from app.services.ticket_store import TicketStore
from app.utils.logging_config import logger

router = APIRouter()


def get_retry_dispatcher() -> Callable[[uuid.UUID], str]:
    """Queues a processing run and returns the task id."""

    def dispatch(ticket_id: uuid.UUID) -> str:
        task = process_ticket.delay(str(ticket_id))  # pyright: ignore[reportFunctionMemberAccess]
        return task.id

    return dispatch


async def get_ticket_or_404(
    ticket_id: uuid.UUID, store: TicketStore = Depends(get_ticket_store)
) -> Ticket:
    ticket = await store.get_ticket(ticket_id)
    if ticket is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found.")
    return ticket


@router.get("", response_model=List[TicketResponse], summary="List tickets, newest first")
async def list_tickets(store: TicketStore = Depends(get_ticket_store)):
    return await store.list_tickets()


@router.get("/{ticket_id}", response_model=TicketResponse)
async def get_ticket(ticket: Ticket = Depends(get_ticket_or_404)):
    return ticket


@router.get("/{ticket_id}/recordings", response_model=List[RecordingResponse])
async def list_recordings(
    ticket: Ticket = Depends(get_ticket_or_404),
    store: TicketStore = Depends(get_ticket_store),
):
    return await store.list_recordings(ticket.id)


@router.get(
    "/{ticket_id}/errors",
    response_model=List[TicketErrorResponse],
    summary="Error log of a ticket, newest first",
)
async def list_errors(
    ticket: Ticket = Depends(get_ticket_or_404),
    store: TicketStore = Depends(get_ticket_store),
):
    return await store.list_errors(ticket.id)


@router.post(
    "/{ticket_id}/retry",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=RetryResponse,
    summary="Re-run processing for a failed ticket",
)
async def retry_ticket(
    ticket: Ticket = Depends(get_ticket_or_404),
    dispatch: Callable[[uuid.UUID], str] = Depends(get_retry_dispatcher),
) -> RetryResponse:
    if ticket.status != TicketStatus.FAILED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Only failed tickets can be retried (status is '{ticket.status.value}').",
        )
    task_id = dispatch(ticket.id)
    logger.info(f"Queued retry of ticket {ticket.id} as task {task_id}")
    return RetryResponse(ticket_id=ticket.id, task_id=task_id)


@router.delete("/{ticket_id}/errors", response_model=ClearErrorsResponse)
async def clear_errors(
    ticket: Ticket = Depends(get_ticket_or_404),
    store: TicketStore = Depends(get_ticket_store),
) -> ClearErrorsResponse:
    deleted = await store.clear_errors(ticket.id)
    return ClearErrorsResponse(ticket_id=ticket.id, deleted=deleted)
