# app/user/repository.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import Conflict, InvalidId
from app.core.identifiers import is_valid_id
from app.user.models import User


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def find_by_id(db: Session, user_id: str) -> User | None:
    if not is_valid_id(user_id):
        raise InvalidId("Invalid user id")
    return db.get(User, user_id)


def create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    if find_by_email(db, email) is not None:
        raise Conflict("User already exists")

    db_user = User(name=name, email=email, password=password_hash)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.rollback()
        raise Conflict("User already exists")
    db.refresh(db_user)
    return db_user
