"""Ticket Store: reads and writes for tickets, recordings and ticket errors."""

import uuid
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models import (
    CLAIMABLE_STATUSES,
    Recording,
    RecordingRole,
    Ticket,
    TicketError,
    TicketStatus,
)
from app.utils.logging_config import logger


class TicketStore:
    """
    Async repository over the ticket tables.

    Every call runs in its own short session and commits before returning, so
    each write is visible to pollers as soon as the awaited call completes.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_ticket(self, storage_path: str, incident_time: datetime) -> Ticket:
        async with self._session_factory() as session:
            ticket = Ticket(
                storage_path=storage_path,
                incident_time=incident_time,
                status=TicketStatus.PENDING,
            )
            session.add(ticket)
            await session.commit()
            logger.info(f"Created ticket {ticket.id} for {storage_path}")
            return ticket

    async def add_recordings(
        self,
        ticket_id: uuid.UUID,
        entries: Iterable[tuple[str, RecordingRole, datetime]],
    ) -> list[Recording]:
        """Inserts one row per (file_name, role, recording_time) entry."""
        async with self._session_factory() as session:
            recordings = [
                Recording(
                    ticket_id=ticket_id,
                    file_name=file_name,
                    role=role,
                    recording_time=recording_time,
                    transcription=None,
                )
                for file_name, role, recording_time in entries
            ]
            session.add_all(recordings)
            await session.commit()
            return recordings

    async def get_ticket(self, ticket_id: uuid.UUID) -> Optional[Ticket]:
        async with self._session_factory() as session:
            return await session.get(Ticket, ticket_id)

    async def list_tickets(self) -> Sequence[Ticket]:
        """All tickets, newest first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(Ticket).order_by(Ticket.created_at.desc())
            )
            return result.scalars().all()

    async def list_recordings(self, ticket_id: uuid.UUID) -> Sequence[Recording]:
        """Recordings of a ticket in call order (ascending recording_time)."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(Recording)
                .where(Recording.ticket_id == ticket_id)
                .order_by(Recording.recording_time.asc(), Recording.file_name.asc())
            )
            return result.scalars().all()

    async def set_recording_transcription(
        self, recording_id: uuid.UUID, transcription: str
    ) -> None:
        async with self._session_factory() as session:
            await session.execute(
                update(Recording)
                .where(Recording.id == recording_id)
                .values(transcription=transcription)
            )
            await session.commit()

    async def claim_for_processing(self, ticket_id: uuid.UUID) -> bool:
        """
        Moves a pending or failed ticket to processing.

        Returns False when no row matched, i.e. the ticket is unknown or another
        run already owns it.
        """
        async with self._session_factory() as session:
            result = await session.execute(
                update(Ticket)
                .where(Ticket.id == ticket_id)
                .where(Ticket.status.in_(CLAIMABLE_STATUSES))
                .values(status=TicketStatus.PROCESSING)
                .returning(Ticket.id)
            )
            claimed = result.scalar_one_or_none() is not None
            await session.commit()
            return claimed

    async def update_ticket(self, ticket_id: uuid.UUID, **values: Any) -> None:
        async with self._session_factory() as session:
            await session.execute(
                update(Ticket).where(Ticket.id == ticket_id).values(**values)
            )
            await session.commit()

    async def add_error(self, ticket_id: uuid.UUID, error_message: str) -> TicketError:
        async with self._session_factory() as session:
            error = TicketError(ticket_id=ticket_id, error_message=error_message)
            session.add(error)
            await session.commit()
            return error

    async def list_errors(self, ticket_id: uuid.UUID) -> Sequence[TicketError]:
        """Error log of a ticket, newest first."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TicketError)
                .where(TicketError.ticket_id == ticket_id)
                .order_by(TicketError.created_at.desc())
            )
            return result.scalars().all()

    async def clear_errors(self, ticket_id: uuid.UUID) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(TicketError).where(TicketError.ticket_id == ticket_id)
            )
            await session.commit()
            return result.rowcount
