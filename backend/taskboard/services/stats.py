"""
Derived task statistics.

Nothing here is persisted:
- Project completion is recomputed from task statuses on every read
- A task is overdue when its due date has passed and it is not Done
"""

import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from taskboard.models import Task, TaskStatus
from taskboard.timeutils import to_utc, utc_now


@dataclass
class ProjectStats:
    """Task counts and the task ids of a single project, newest first."""

    task_ids: list[uuid.UUID] = field(default_factory=list)
    total_tasks: int = 0
    completed_tasks: int = 0

    @property
    def completion_percentage(self) -> int:
        return completion_percentage(self.completed_tasks, self.total_tasks)


def completion_percentage(completed: int, total: int) -> int:
    """
    Percentage of completed tasks, rounded half up to a whole number.

    Returns 0 for a project with no tasks.
    """
    if total <= 0:
        return 0
    # Integer form of floor(completed / total * 100 + 0.5)
    return (200 * completed + total) // (2 * total)


def project_stats(statuses: Iterable[TaskStatus]) -> ProjectStats:
    """Build counts from a sequence of task statuses."""
    stats = ProjectStats()
    for task_status in statuses:
        stats.total_tasks += 1
        if task_status == TaskStatus.DONE:
            stats.completed_tasks += 1
    return stats


def is_overdue(due_date: datetime, status: TaskStatus, now: datetime | None = None) -> bool:
    """True when the due date is strictly in the past and the task is not Done."""
    if now is None:
        now = utc_now()
    return to_utc(due_date) < to_utc(now) and status != TaskStatus.DONE


async def load_project_stats(
    session: AsyncSession,
    project_ids: list[uuid.UUID],
) -> dict[uuid.UUID, ProjectStats]:
    """
    Fetch statistics for several projects with one query.

    Every requested id gets an entry, so projects without tasks map to
    zeroed stats.
    """
    rows_by_project: dict[uuid.UUID, list[tuple[uuid.UUID, TaskStatus]]] = defaultdict(list)

    if project_ids:
        query = (
            select(Task.project_id, Task.id, Task.status)
            .where(Task.project_id.in_(project_ids))
            .order_by(Task.created_at.desc())
        )
        rows = await session.execute(query)
        for project_id, task_id, task_status in rows.all():
            rows_by_project[project_id].append((task_id, task_status))

    result = {}
    for project_id in project_ids:
        project_rows = rows_by_project.get(project_id, [])
        stats = project_stats(task_status for _, task_status in project_rows)
        stats.task_ids = [task_id for task_id, _ in project_rows]
        result[project_id] = stats
    return result
