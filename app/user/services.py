# app/user/services.py
import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.exceptions import Unauthorized
from app.core.security import create_access_token, hash_password, verify_password
from app.core.validation import parse_payload
from app.user import repository
from app.user.models import User
from app.user.schemas import UserLogin, UserRegister

logger = logging.getLogger("app")


def register_user(db: Session, payload: Any) -> User:
    data = parse_payload(UserRegister, payload)
    user = repository.create_user(db, data.name, data.email, hash_password(data.password))
    logger.info(f"Registered user {user.id}")
    return user


def login_user(db: Session, payload: Any) -> str:
    """Check credentials and return a fresh bearer token."""
    data = parse_payload(UserLogin, payload)
    user = repository.find_by_email(db, data.email)
    if user is None or not verify_password(data.password, user.password):
        logger.info("Failed login attempt")
        raise Unauthorized("Invalid email or password")
    return create_access_token(user.id)
