# app/core/security.py
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from app.core.config import get_settings
from app.core.exceptions import Unauthorized

logger = logging.getLogger("app")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    A fresh salt is generated on every call, so hashing the same password
    twice gives two different strings that both verify.
    """
    salt = bcrypt.gensalt(rounds=get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Password verification failed: {e}")
        return False


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.JWT_EXPIRES_DAYS))
    payload = {"sub": user_id, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Verify a bearer token and return the user id it was issued for.

    Raises:
        Unauthorized: bad signature, malformed token, expired token or no subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise Unauthorized("Not authorized, token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected invalid token: {e}")
        raise Unauthorized("Not authorized, token failed")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise Unauthorized("Not authorized, token failed")
    return user_id
