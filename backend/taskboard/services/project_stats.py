from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from taskboard.schemas.projects import PriorityCounts, ProjectStats, StatusCounts

if TYPE_CHECKING:
    from collections.abc import Iterable

    from taskboard.models.tasks import Task


def compute_project_stats(tasks: Iterable[Task]) -> ProjectStats:
    """Aggregate counts and hour totals from a project's tasks.

    Derived entirely from ``tasks``; nothing is read from stored totals.
    """
    task_list = list(tasks)
    by_status = Counter(task.status for task in task_list)
    by_priority = Counter(task.priority for task in task_list)
    return ProjectStats(
        total_tasks=len(task_list),
        tasks_by_status=StatusCounts(
            todo=by_status["todo"],
            in_progress=by_status["in-progress"],
            review=by_status["review"],
            done=by_status["done"],
        ),
        tasks_by_priority=PriorityCounts(
            low=by_priority["low"],
            medium=by_priority["medium"],
            high=by_priority["high"],
            urgent=by_priority["urgent"],
        ),
        total_estimated_hours=sum(task.estimated_hours or 0 for task in task_list),
        total_actual_hours=sum(task.actual_hours or 0 for task in task_list),
    )
