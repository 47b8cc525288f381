# app/ticket/routes.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.ticket.schemas import (
    AssignUserIn,
    MessageOut,
    TicketAnalyticsOut,
    TicketDetailOut,
    TicketOut,
)
from app.ticket import services as ticket_service

router = APIRouter(
    prefix="/tickets",
    tags=["Tickets"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", response_model=TicketOut, status_code=201)
def create(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    return ticket_service.create_ticket(db, payload)


# must stay above /{ticket_id}
@router.get("/analytics", response_model=TicketAnalyticsOut)
def analytics(request: Request, db: Session = Depends(get_db)):
    return ticket_service.get_analytics(db, dict(request.query_params))


@router.post("/{ticket_id}/assign", response_model=MessageOut)
def assign(
    ticket_id: str,
    payload: AssignUserIn | None = None,
    db: Session = Depends(get_db),
):
    user_id = payload.userId if payload else None
    return ticket_service.assign_user(db, ticket_id, user_id)


@router.get("/{ticket_id}", response_model=TicketDetailOut)
def get(ticket_id: str, db: Session = Depends(get_db)):
    return ticket_service.get_ticket_details(db, ticket_id)
