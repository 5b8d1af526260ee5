import uuid
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from taskboard.timeutils import utc_now


class Project(SQLModel, table=True):
    """
    Project model - groups tasks together.

    Each project belongs to exactly one user. Its tasks are found by
    querying Task.project_id rather than through a stored list.
    """

    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=100)
    description: str = Field(default="", max_length=500)

    owner_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
