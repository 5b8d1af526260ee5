from taskboard.schemas.base import MessageResponse
from taskboard.schemas.user import UserRegister, UserLogin, UserRead, AuthResponse
from taskboard.schemas.project import ProjectCreate, ProjectUpdate, ProjectRead
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskRead, OverdueTaskRead

__all__ = [
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "UserRead",
    "AuthResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectRead",
    "TaskCreate",
    "TaskUpdate",
    "TaskRead",
    "OverdueTaskRead",
]
