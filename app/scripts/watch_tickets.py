"""
Console view of the ticket list.

    python -m app.scripts.watch_tickets              # poll and print status changes
    python -m app.scripts.watch_tickets show <id>    # recordings and error log
    python -m app.scripts.watch_tickets retry <id>
    python -m app.scripts.watch_tickets clear-errors <id>
"""

import argparse
import asyncio
import uuid

from app.config.db import SessionLocal
from app.models import Ticket
from app.services.tasks import process_ticket
from app.services.ticket_feed import TicketFeed
from app.services.ticket_store import TicketStore
from app.settings import settings
from app.utils.logging_config import logger


async def queue_retry(ticket: Ticket) -> str:
    task = process_ticket.delay(str(ticket.id))
    return task.id


async def watch(feed: TicketFeed) -> None:
    seen: dict[uuid.UUID, Ticket] = {}
    while True:
        for ticket in await feed.refresh():
            # Unchanged rows come back as the very same object.
            if seen.get(ticket.id) is not ticket:
                logger.info(f"{ticket.id} {ticket.status.value:<10} {ticket.storage_path}")
            seen[ticket.id] = ticket
        await asyncio.sleep(settings.POLL_INTERVAL_SECONDS)


async def show(feed: TicketFeed, ticket_id: uuid.UUID) -> None:
    await feed.refresh()
    details = await feed.expand(ticket_id)
    for recording in details.recordings:
        logger.info(f"- {recording.file_name} ({recording.role.value})")
    for error in details.errors:
        logger.info(f"! {error.created_at:%Y-%m-%d %H:%M:%S} {error.error_message}")


async def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("command", nargs="?", default="watch",
                        choices=["watch", "show", "retry", "clear-errors"])
    parser.add_argument("ticket_id", nargs="?", type=uuid.UUID)
    args = parser.parse_args()

    feed = TicketFeed(TicketStore(SessionLocal), retry=queue_retry)
    if args.command == "watch":
        await watch(feed)
        return
    if args.ticket_id is None:
        parser.error(f"{args.command} needs a ticket id")

    if args.command == "show":
        await show(feed, args.ticket_id)
    elif args.command == "retry":
        await feed.refresh()
        task_id = await feed.retry(args.ticket_id)
        logger.info(f"Queued retry task {task_id}")
    else:
        deleted = await feed.clear_errors(args.ticket_id)
        logger.info(f"Deleted {deleted} error(s)")


if __name__ == "__main__":
    asyncio.run(main())
