"""
Task routes for the Taskboard API.

Tasks live under a project: every route re-checks that the project belongs
to the caller before touching any task. The cross-project overdue listing is
served from a separate router mounted at /tasks.
"""

import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from taskboard.auth import get_current_user
from taskboard.database import get_session
from taskboard.models import Project, Task, TaskStatus, User
from taskboard.routes.projects import get_owned_project
from taskboard.schemas import MessageResponse, OverdueTaskRead, TaskCreate, TaskUpdate, TaskRead
from taskboard.exceptions import NotFoundError
from taskboard.logging_config import get_logger
from taskboard.timeutils import utc_now

logger = get_logger(__name__)

router = APIRouter()
overdue_router = APIRouter()


async def get_project_task(
    session: AsyncSession,
    project: Project,
    task_id: uuid.UUID,
) -> Task:
    """
    Load a task that belongs to exactly this project.

    Raises:
        NotFoundError: If no such task exists under the project.
    """
    result = await session.execute(
        select(Task).where(Task.id == task_id, Task.project_id == project.id)
    )
    task = result.scalars().first()
    if task is None:
        logger.debug(f"Task {task_id} not found in project={project.id}")
        raise NotFoundError("Task")
    return task


@router.get("/{project_id}/tasks", response_model=list[TaskRead])
async def list_tasks(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[TaskRead]:
    """List a project's tasks, newest first."""
    project = await get_owned_project(session, project_id, current_user)

    result = await session.execute(
        select(Task)
        .where(Task.project_id == project.id)
        .order_by(Task.created_at.desc())
    )
    tasks = list(result.scalars().all())

    logger.debug(f"Listed {len(tasks)} tasks for project={project_id}")

    return [TaskRead.model_validate(task) for task in tasks]


@router.get("/{project_id}/tasks/{task_id}", response_model=TaskRead)
async def get_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskRead:
    """Get a task by ID."""
    project = await get_owned_project(session, project_id, current_user)
    task = await get_project_task(session, project, task_id)
    return TaskRead.model_validate(task)


@router.post("/{project_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    project_id: uuid.UUID,
    task_in: TaskCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskRead:
    """
    Create a new task in the project.

    Status defaults to "To Do" when not provided.
    """
    project = await get_owned_project(session, project_id, current_user)

    task = Task(
        title=task_in.title,
        description=task_in.description or "",
        due_date=task_in.due_date,
        status=task_in.status,
        project_id=project.id,
        created_by=current_user.id,
    )
    session.add(task)
    await session.flush()
    await session.refresh(task)
    await session.commit()

    logger.info(f"Created task: id={task.id} title='{task.title}' project={task.project_id}")

    return TaskRead.model_validate(task)


@router.put("/{project_id}/tasks/{task_id}", response_model=TaskRead)
async def update_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    task_in: TaskUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskRead:
    """
    Update a task.

    Any subset of fields may be sent; status can move between any two states.
    """
    project = await get_owned_project(session, project_id, current_user)
    task = await get_project_task(session, project, task_id)

    update_data = task_in.model_dump(exclude_unset=True)
    if "description" in update_data and update_data["description"] is None:
        update_data["description"] = ""

    logger.info(f"Updating task {task_id}: {update_data}")

    for field, value in update_data.items():
        setattr(task, field, value)

    task.updated_at = utc_now()
    await session.flush()
    await session.refresh(task)
    await session.commit()
    return TaskRead.model_validate(task)


@router.delete("/{project_id}/tasks/{task_id}", response_model=MessageResponse)
async def delete_task(
    project_id: uuid.UUID,
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Delete a task. It disappears from the project's task list with it."""
    project = await get_owned_project(session, project_id, current_user)
    task = await get_project_task(session, project, task_id)

    logger.info(f"Deleting task {task_id}: '{task.title}'")

    await session.delete(task)
    await session.flush()
    await session.commit()

    return MessageResponse(message="Task deleted successfully")


@overdue_router.get("/overdue", response_model=list[OverdueTaskRead])
async def list_overdue_tasks(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[OverdueTaskRead]:
    """
    List overdue tasks across all of the caller's projects.

    A task is overdue when its due date is before now and it is not Done.
    Results are ordered by due date, oldest first.
    """
    now = utc_now()
    result = await session.execute(
        select(Task, Project.name)
        .join(Project, Task.project_id == Project.id)
        .where(
            Project.owner_id == current_user.id,
            Task.due_date < now,
            Task.status != TaskStatus.DONE,
        )
        .order_by(Task.due_date.asc())
    )
    rows = result.all()

    logger.debug(f"Found {len(rows)} overdue tasks for user={current_user.id}")

    return [
        OverdueTaskRead(**task.model_dump(), project_name=project_name)
        for task, project_name in rows
    ]
