# app/ticket/repository.py
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import false
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidId
from app.core.identifiers import is_valid_id
from app.ticket.models import Ticket, TicketAssignment
from app.ticket.schemas import as_utc

# wire name -> column; anything else matches no ticket
FILTERABLE_FIELDS = {
    "id": Ticket.id,
    "title": Ticket.title,
    "description": Ticket.description,
    "type": Ticket.type,
    "venue": Ticket.venue,
    "status": Ticket.status,
    "priority": Ticket.priority,
    "dueDate": Ticket.due_date,
    "createdBy": Ticket.created_by,
}

_datetime_adapter = TypeAdapter(datetime)


def to_naive_utc(value: datetime) -> datetime:
    return as_utc(value).replace(tzinfo=None)


def create_ticket(db: Session, fields: Mapping[str, Any]) -> Ticket:
    data = dict(fields)
    data["due_date"] = to_naive_utc(data["due_date"])
    db_ticket = Ticket(**data)
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    return db_ticket


def find_by_id(db: Session, ticket_id: str) -> Ticket | None:
    if not is_valid_id(ticket_id):
        raise InvalidId("Invalid ticket id")
    return db.get(Ticket, ticket_id)


def _condition(field: str, value: str):
    if field == "assignedUsers":
        return Ticket.assignments.any(TicketAssignment.user_id == value)
    if field == "dueDate":
        try:
            return Ticket.due_date == to_naive_utc(_datetime_adapter.validate_python(value))
        except PydanticValidationError:
            return false()
    column = FILTERABLE_FIELDS.get(field)
    if column is None:
        return false()
    return column == value


def find_by_filter(db: Session, filters: Mapping[str, str]) -> list[Ticket]:
    """Exact-match lookup; every filter entry must hold."""
    query = db.query(Ticket)
    for field, value in filters.items():
        query = query.filter(_condition(field, value))
    return query.all()


def save(db: Session, ticket: Ticket) -> Ticket:
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    return ticket
