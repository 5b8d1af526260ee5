import uuid
from typing import Annotated

from pydantic import StringConstraints, field_validator

from taskboard.schemas.base import APIModel, UTCDateTime


ProjectName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
ProjectDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]


class ProjectCreate(APIModel):
    """Schema for creating a new project."""
    name: ProjectName
    description: ProjectDescription | None = None


class ProjectUpdate(APIModel):
    """Schema for updating a project. Only fields present in the body change."""
    name: ProjectName | None = None
    description: ProjectDescription | None = None

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("Project name cannot be empty")
        return value


class ProjectRead(APIModel):
    """Schema for reading a project with its derived statistics."""
    id: uuid.UUID
    name: str
    description: str
    owner_id: uuid.UUID
    tasks: list[uuid.UUID] = []
    total_tasks: int = 0
    completed_tasks: int = 0
    completion_percentage: int = 0
    created_at: UTCDateTime
    updated_at: UTCDateTime
