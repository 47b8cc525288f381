# app/ticket/schemas.py
import re
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Literal

from pydantic import AliasChoices, BaseModel, Field, computed_field, field_serializer, field_validator
from pydantic_core import PydanticCustomError

from app.core.validation import Schema

TicketType = Literal["concert", "conference", "sports"]
TicketStatus = Literal["open", "in-progress", "closed"]
TicketPriority = Literal["low", "medium", "high"]

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        # beyond the representable UTC range; clamp to the nearest end
        edge = datetime.max if value.utcoffset() < timedelta(0) else datetime.min
        return edge.replace(tzinfo=timezone.utc)


class TicketCreate(Schema):
    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=5, max_length=500)
    type: TicketType
    venue: str = Field(min_length=3, max_length=100)
    status: TicketStatus
    priority: TicketPriority
    due_date: datetime = Field(alias="dueDate")
    created_by: str = Field(alias="createdBy", min_length=1)

    MESSAGES: ClassVar[dict[str, dict[str, str]]] = {
        "title": {
            "missing": "Title is required",
            "string_type": "Title should be a type of text",
            "string_too_short": "Title should have at least 3 characters",
            "string_too_long": "Title should have at most 100 characters",
        },
        "description": {
            "missing": "Description is required",
            "string_type": "Description should be a type of text",
            "string_too_short": "Description should have at least 5 characters",
            "string_too_long": "Description should have at most 500 characters",
        },
        "type": {
            "missing": "Type is required",
            "literal_error": "Type must be one of: concert, conference, sports",
        },
        "venue": {
            "missing": "Venue is required",
            "string_type": "Venue should be a type of text",
            "string_too_short": "Venue should have at least 3 characters",
            "string_too_long": "Venue should have at most 100 characters",
        },
        "status": {
            "missing": "Status is required",
            "literal_error": "Status must be one of: open, in-progress, closed",
        },
        "priority": {
            "missing": "Priority is required",
            "literal_error": "Priority must be one of: low, medium, high",
        },
        "dueDate": {
            "missing": "Due date is required",
            "date_greater": "Due date must be in the future",
            "date": "Due date must be a valid date",
        },
        "createdBy": {
            "missing": "Created By is required",
            "string_type": "Created By should be a type of text",
            "string_too_short": "Created By is not allowed to be empty",
        },
    }

    @field_validator("due_date", mode="before")
    @classmethod
    def accept_plain_dates(cls, value: Any) -> Any:
        if isinstance(value, str) and _DATE_ONLY.match(value):
            return f"{value}T00:00:00Z"
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_in_future(cls, value: datetime) -> datetime:
        value = as_utc(value)
        if value <= utc_now():
            raise PydanticCustomError("date_greater", "Due date must be in the future")
        return value


class AssignUserIn(BaseModel):
    userId: Any = None


class TicketBaseOut(BaseModel):
    id: str
    title: str
    description: str
    type: str
    venue: str
    status: str
    priority: str
    dueDate: datetime = Field(validation_alias=AliasChoices("due_date", "dueDate"))
    createdBy: str = Field(validation_alias=AliasChoices("created_by", "createdBy"))

    model_config = {"from_attributes": True}

    @field_serializer("dueDate")
    def serialize_due_date(self, value: datetime) -> str:
        return as_utc(value).isoformat().replace("+00:00", "Z")


class TicketOut(TicketBaseOut):
    assignedUsers: list[str] = Field(
        validation_alias=AliasChoices("assigned_user_ids", "assignedUsers")
    )


class AssigneeOut(BaseModel):
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class TicketStatistics(BaseModel):
    totalAssigned: int
    status: str


class TicketDetailOut(TicketBaseOut):
    assignedUsers: list[AssigneeOut] = Field(
        validation_alias=AliasChoices("assigned_users", "assignedUsers")
    )

    @computed_field
    @property
    def statistics(self) -> TicketStatistics:
        return TicketStatistics(totalAssigned=len(self.assignedUsers), status=self.status)


class TicketAnalyticsOut(BaseModel):
    totalTickets: int
    closedTickets: int
    openTickets: int
    inProgressTickets: int
    tickets: list[TicketOut]


class MessageOut(BaseModel):
    message: str
