# app/user/schemas.py
import re
from typing import Annotated, ClassVar

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from app.core.validation import Schema

PASSWORD_RULES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)


def check_email(value: str) -> str:
    """Validate the syntax but keep the address exactly as submitted."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("value_error", "Invalid email format")
    return value


Email = Annotated[str, AfterValidator(check_email)]

EMAIL_MESSAGES = {
    "missing": "Email is required",
    "string_type": "Email should be a type of text",
    "value_error": "Invalid email format",
}


class UserRegister(Schema):
    name: str = Field(min_length=3, max_length=30)
    email: Email
    password: str = Field(min_length=8, max_length=20)

    MESSAGES: ClassVar[dict[str, dict[str, str]]] = {
        "name": {
            "missing": "Name is required",
            "string_type": "Name should be a type of text",
            "string_too_short": "Name should have at least 3 characters",
            "string_too_long": "Name should have at most 30 characters",
        },
        "email": EMAIL_MESSAGES,
        "password": {
            "missing": "Password is required",
            "string_type": "Password should be a type of text",
            "string_too_short": "Password should have at least 8 characters",
            "string_too_long": "Password should have at most 20 characters",
            "string_pattern": (
                "Password must contain at least one uppercase letter, one lowercase "
                "letter, one number, and one special character"
            ),
        },
    }

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        # every pattern must match on its own
        for rule in PASSWORD_RULES:
            if not rule.search(value):
                raise PydanticCustomError("string_pattern", "Password is too weak")
        return value


class UserLogin(Schema):
    email: Email
    password: str = Field(min_length=1)

    MESSAGES: ClassVar[dict[str, dict[str, str]]] = {
        "email": EMAIL_MESSAGES,
        "password": {
            "missing": "Password is required",
            "string_type": "Password should be a type of text",
            "string_too_short": "Password is not allowed to be empty",
        },
    }


class UserOut(BaseModel):
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class TokenOut(BaseModel):
    token: str
