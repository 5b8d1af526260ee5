"""
Project routes for the Taskboard API.

Every query is scoped to the authenticated owner; a project owned by someone
else is reported exactly like a missing one.
"""

import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from taskboard.auth import get_current_user
from taskboard.database import get_session
from taskboard.models import Project, Task, User
from taskboard.schemas import MessageResponse, ProjectCreate, ProjectUpdate, ProjectRead
from taskboard.services.stats import ProjectStats, load_project_stats
from taskboard.exceptions import NotFoundError
from taskboard.logging_config import get_logger
from taskboard.timeutils import utc_now

logger = get_logger(__name__)

router = APIRouter()


async def get_owned_project(
    session: AsyncSession,
    project_id: uuid.UUID,
    owner: User,
) -> Project:
    """
    Load a project owned by the given user.

    Raises:
        NotFoundError: If the project does not exist or belongs to another user.
    """
    result = await session.execute(
        select(Project).where(Project.id == project_id, Project.owner_id == owner.id)
    )
    project = result.scalars().first()
    if project is None:
        logger.debug(f"Project {project_id} not found for user={owner.id}")
        raise NotFoundError("Project")
    return project


def to_project_read(project: Project, stats: ProjectStats | None = None) -> ProjectRead:
    """Attach derived statistics to a project row."""
    stats = stats or ProjectStats()
    return ProjectRead(
        **project.model_dump(),
        tasks=stats.task_ids,
        total_tasks=stats.total_tasks,
        completed_tasks=stats.completed_tasks,
        completion_percentage=stats.completion_percentage,
    )


async def _project_with_stats(session: AsyncSession, project: Project) -> ProjectRead:
    stats = await load_project_stats(session, [project.id])
    return to_project_read(project, stats[project.id])


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[ProjectRead]:
    """List the caller's projects, newest first, with task statistics."""
    result = await session.execute(
        select(Project)
        .where(Project.owner_id == current_user.id)
        .order_by(Project.created_at.desc())
    )
    projects = list(result.scalars().all())
    stats = await load_project_stats(session, [project.id for project in projects])

    logger.debug(f"Listed {len(projects)} projects for user={current_user.id}")

    return [to_project_read(project, stats[project.id]) for project in projects]


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Get a project by ID."""
    project = await get_owned_project(session, project_id, current_user)
    return await _project_with_stats(session, project)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Create a new, empty project owned by the caller."""
    project = Project(
        name=project_in.name,
        description=project_in.description or "",
        owner_id=current_user.id,
    )
    session.add(project)
    await session.flush()
    await session.refresh(project)
    await session.commit()

    logger.info(f"Created project: id={project.id} name='{project.name}' owner={current_user.id}")

    return to_project_read(project)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Update a project. Only fields present in the request body change."""
    project = await get_owned_project(session, project_id, current_user)

    update_data = project_in.model_dump(exclude_unset=True)
    if "description" in update_data and update_data["description"] is None:
        update_data["description"] = ""

    logger.info(f"Updating project {project_id}: {update_data}")

    for field, value in update_data.items():
        setattr(project, field, value)

    project.updated_at = utc_now()
    await session.flush()
    await session.refresh(project)
    await session.commit()
    return await _project_with_stats(session, project)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """
    Delete a project and all its tasks.

    Tasks go first so no task is ever left pointing at a missing project.
    Both statements share one transaction that is committed only after the
    project row is gone; if the second step fails nothing is committed and
    the tasks survive.
    """
    project = await get_owned_project(session, project_id, current_user)

    logger.info(f"Deleting project {project_id}: '{project.name}'")

    result = await session.execute(delete(Task).where(Task.project_id == project.id))
    logger.debug(f"Deleted {result.rowcount} tasks of project {project_id}")

    await session.delete(project)
    await session.flush()
    await session.commit()

    return MessageResponse(message="Project deleted successfully")
