import uuid
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from taskboard.timeutils import utc_now


class User(SQLModel, table=True):
    """Registered account. Owns projects; never deleted through the API."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=50)
    email: str = Field(index=True, unique=True, max_length=255)
    password_hash: str

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
