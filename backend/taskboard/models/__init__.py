from taskboard.models.user import User
from taskboard.models.project import Project
from taskboard.models.task import Task, TaskStatus

__all__ = [
    "User",
    "Project",
    "Task",
    "TaskStatus",
]
