"""create tickets, recordings and ticket_errors

Revision ID: 3b1f7c2d9a10
Revises:
Create Date: 2025-09-14 11:02:41.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3b1f7c2d9a10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ticket_status = postgresql.ENUM(
    "pending", "processing", "done", "failed", name="ticket_status", create_type=False
)
recording_role = postgresql.ENUM(
    "Customer", "Manager", "Other", name="recording_role", create_type=False
)


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
            comment="The unique identifier for the row.",
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            comment="The time the row was inserted.",
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            comment="The time the row was last written.",
        ),
    ]


def upgrade() -> None:
    """Creates the ticket tables and their enum types."""
    ticket_status.create(op.get_bind(), checkfirst=True)
    recording_role.create(op.get_bind(), checkfirst=True)

    text_columns = [
        "branch",
        "customer_name",
        "category_other",
        "issue_details",
        "issue_status",
        "issue_status_other",
        "action_taken",
        "customer_care_notes",
        "resolution_feedback",
        "order_type",
        "order_type_other",
        "ticket_type",
        "ticket_type_other",
        "table_no",
        "token_no",
        "bill_no",
        "waiter_name",
        "captain_name",
        "staff_responsible",
        "ai_summary",
        "preventive_action",
    ]
    op.create_table(
        "tickets",
        *_base_columns(),
        sa.Column("storage_path", sa.String(), nullable=False),
        sa.Column("incident_time", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("status", ticket_status, nullable=False, server_default="pending"),
        sa.Column("transcription", sa.Text(), nullable=True),
        sa.Column("category", postgresql.ARRAY(sa.String()), nullable=True),
        *[sa.Column(name, sa.Text(), nullable=True) for name in text_columns],
        sa.Column("columns_field", postgresql.JSONB(), nullable=True),
    )
    op.create_index("ix_tickets_status", "tickets", ["status"])
    op.create_index("ix_tickets_created_at", "tickets", ["created_at"])

    op.create_table(
        "recordings",
        *_base_columns(),
        sa.Column(
            "ticket_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("tickets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("role", recording_role, nullable=False),
        sa.Column("recording_time", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("transcription", sa.Text(), nullable=True),
    )
    op.create_index("ix_recordings_ticket_id", "recordings", ["ticket_id"])
    op.create_index("ix_recordings_created_at", "recordings", ["created_at"])

    op.create_table(
        "ticket_errors",
        *_base_columns(),
        sa.Column(
            "ticket_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("tickets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("error_message", sa.Text(), nullable=False),
    )
    op.create_index("ix_ticket_errors_ticket_id", "ticket_errors", ["ticket_id"])
    op.create_index("ix_ticket_errors_created_at", "ticket_errors", ["created_at"])


def downgrade() -> None:
    """Drops the ticket tables and their enum types."""
    op.drop_table("ticket_errors")
    op.drop_table("recordings")
    op.drop_table("tickets")
    recording_role.drop(op.get_bind(), checkfirst=True)
    ticket_status.drop(op.get_bind(), checkfirst=True)
