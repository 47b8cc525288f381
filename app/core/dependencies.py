# app/core/dependencies.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import InvalidId, Unauthorized
from app.core.security import decode_access_token
from app.user import repository as user_repository
from app.user.models import User

# missing headers are reported as 401 by get_current_user, not 403
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the acting user from the ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authorized, no token")

    user_id = decode_access_token(credentials.credentials)
    try:
        user = user_repository.find_by_id(db, user_id)
    except InvalidId:
        raise Unauthorized("Not authorized, token failed")
    if user is None:
        raise Unauthorized("Not authorized, user not found")
    return user
