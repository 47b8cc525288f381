# app/ticket/models.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.identifiers import new_id
from app.user.models import User

TICKET_TYPES = ("concert", "conference", "sports")
TICKET_STATUSES = ("open", "in-progress", "closed")
TICKET_PRIORITIES = ("low", "medium", "high")

MAX_ASSIGNEES = 5


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(100), index=True, nullable=False)
    description = Column(String(500), nullable=False)
    type = Column(String, nullable=False)
    venue = Column(String(100), nullable=False)
    status = Column(String, default="open", index=True, nullable=False)
    priority = Column(String, nullable=False)
    # naive UTC
    due_date = Column(DateTime, nullable=False)
    created_by = Column(String(32), ForeignKey("users.id"), nullable=False)

    assignments = relationship(
        "TicketAssignment",
        order_by="TicketAssignment.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def assigned_user_ids(self) -> list[str]:
        return [a.user_id for a in self.assignments]

    @property
    def assigned_users(self):
        return [a.user for a in self.assignments]


class TicketAssignment(Base):
    __tablename__ = "ticket_assignees"
    __table_args__ = (UniqueConstraint("ticket_id", "user_id"),)

    id = Column(Integer, primary_key=True)
    ticket_id = Column(String(32), ForeignKey("tickets.id"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    position = Column(Integer, nullable=False)

    user = relationship(User, lazy="joined")
