# app/user/routes.py
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.user import services as user_service
from app.user.schemas import TokenOut, UserOut

router = APIRouter(tags=["Users"])


@router.post("/users", response_model=UserOut, status_code=201)
def register(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    return user_service.register_user(db, payload)


@router.post("/auth/login", response_model=TokenOut)
def login(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    return {"token": user_service.login_user(db, payload)}
