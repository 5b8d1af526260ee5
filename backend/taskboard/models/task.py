import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from taskboard.timeutils import utc_now


class TaskStatus(str, Enum):
    """Task workflow state. Any state may move to any other."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Task(SQLModel, table=True):
    """
    Task model.

    Key fields:
    - project_id: The parent project; ownership is checked through it
    - created_by: The user who created the task
    - due_date: UTC instant; drives the derived is_overdue flag
    """

    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(index=True, max_length=200)
    description: str = Field(default="", max_length=1000)
    due_date: datetime = Field(index=True, sa_type=DateTime(timezone=True))
    status: TaskStatus = Field(default=TaskStatus.TODO)

    # Foreign keys
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)
    created_by: uuid.UUID = Field(foreign_key="users.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
