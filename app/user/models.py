# app/user/models.py
from sqlalchemy import Column, String
from app.core.database import Base
from app.core.identifiers import new_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(30), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash, never the plain text
    password = Column(String, nullable=False)
