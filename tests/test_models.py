import uuid

from app.models import Recording, Ticket, TicketError, TicketStatus


def _default_id(model) -> uuid.UUID:
    # Column defaults are wrapped to accept an execution context.
    return model.__table__.c.id.default.arg(None)


def test_primary_keys_are_time_ordered_uuids():
    ids = [_default_id(model) for model in (Ticket, Recording, TicketError, Ticket)]

    assert all(isinstance(value, uuid.UUID) and value.version == 7 for value in ids)
    assert ids == sorted(ids)


def test_status_column_stores_enum_values():
    status_type = Ticket.__table__.c.status.type

    assert status_type.name == "ticket_status"
    assert status_type.enums == [status.value for status in TicketStatus]
