# app/ticket/services.py
import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequest, InvalidId, NotFound
from app.core.identifiers import is_valid_id
from app.core.validation import parse_payload
from app.ticket import repository
from app.ticket.models import MAX_ASSIGNEES, Ticket, TicketAssignment
from app.ticket.schemas import TicketAnalyticsOut, TicketCreate, TicketDetailOut, TicketOut
from app.user import repository as user_repository

logger = logging.getLogger("app")


def create_ticket(db: Session, payload: Any) -> Ticket:
    data = parse_payload(TicketCreate, payload)

    # createdBy is taken as given; it is not matched against the caller
    try:
        creator = user_repository.find_by_id(db, data.created_by)
    except InvalidId:
        creator = None
    if creator is None:
        raise BadRequest("created by not a valid user id")

    ticket = repository.create_ticket(db, data.model_dump())
    logger.info(f"Created ticket {ticket.id} by {ticket.created_by}")
    return ticket


def assign_user(db: Session, ticket_id: str, user_id: Any) -> dict:
    """
    Append ``user_id`` to the ticket's assignees.

    The checks run in a fixed order and the first failure is reported:
    ids well formed, ticket exists, ticket not closed, user not already
    assigned, assignee limit not reached, user exists.
    """
    if not is_valid_id(ticket_id):
        raise BadRequest("Invalid ticket id")
    if not is_valid_id(user_id):
        raise BadRequest("Invalid user id")

    ticket = repository.find_by_id(db, ticket_id)
    if ticket is None:
        raise NotFound("Ticket not found")

    if ticket.status == "closed":
        logger.warning(f"Refused assignment to closed ticket {ticket_id}")
        raise BadRequest("Cannot assign users to a closed ticket")

    assigned = ticket.assigned_user_ids
    if user_id in assigned:
        raise BadRequest("User already assigned")
    if len(assigned) >= MAX_ASSIGNEES:
        raise BadRequest("User assignment limit reached")

    if user_repository.find_by_id(db, user_id) is None:
        raise BadRequest("assigned user not a valid user id")

    ticket.assignments.append(TicketAssignment(user_id=user_id, position=len(assigned)))
    try:
        repository.save(db, ticket)
    except IntegrityError:
        # a concurrent request assigned the same user first
        db.rollback()
        raise BadRequest("User already assigned")

    logger.info(f"Assigned user {user_id} to ticket {ticket_id}")
    return {"message": "User assigned successfully"}


def get_ticket_details(db: Session, ticket_id: str) -> TicketDetailOut:
    if not is_valid_id(ticket_id):
        raise BadRequest("Invalid ticket id")

    ticket = repository.find_by_id(db, ticket_id)
    if ticket is None:
        raise NotFound("Ticket not found")
    return TicketDetailOut.model_validate(ticket)


def get_analytics(db: Session, filters: Mapping[str, str]) -> TicketAnalyticsOut:
    """Status counts over every ticket matching ``filters`` (not scoped to the caller)."""
    tickets = repository.find_by_filter(db, filters)
    counts = Counter(t.status for t in tickets)
    return TicketAnalyticsOut(
        totalTickets=len(tickets),
        closedTickets=counts["closed"],
        openTickets=counts["open"],
        inProgressTickets=counts["in-progress"],
        tickets=[TicketOut.model_validate(t) for t in tickets],
    )
