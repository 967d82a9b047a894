"""Reconcile completed tasks against forecast placeholders."""

import logging
from datetime import date
from typing import List, Sequence

from .classifier import SetStatus, apply_action
from .policy import DEFAULT_POLICY, Policy
from .status import TaskStatus
from .task import MaintenanceTask

logger = logging.getLogger(__name__)


def is_smart_match(
    candidate: MaintenanceTask, completed: MaintenanceTask, tolerance: float
) -> bool:
    """
    Does an active forecast placeholder correspond to a completed task?

    Same title (case-insensitive), same category, and due mileages no more
    than the tolerance apart. Without a due mileage on both sides there is
    nothing to compare, so no match.
    """
    if candidate.id == completed.id:
        return False
    if not candidate.is_forecast or candidate.archived:
        return False
    if candidate.title.casefold() != completed.title.casefold():
        return False
    if candidate.category != completed.category:
        return False
    if candidate.due_mileage is None or completed.due_mileage is None:
        return False
    return abs(candidate.due_mileage - completed.due_mileage) <= tolerance


def smart_match_and_archive(
    tasks: Sequence[MaintenanceTask],
    completed: MaintenanceTask,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """
    Archive every placeholder matching a completed task, in place.

    All matches are archived in a single pass, not only the first. Only the
    status and archived flag of a placeholder change. Returns the archived
    placeholders.
    """
    if completed.status != TaskStatus.COMPLETED:
        return []
    archived = []
    for task in tasks:
        if is_smart_match(task, completed, policy.match_tolerance):
            task.status = TaskStatus.COMPLETED
            task.archived = True
            archived.append(task)
    if archived:
        logger.info(
            "Archived %d forecast placeholder(s) for %r", len(archived), completed.title
        )
    return archived


def find_task(tasks: Sequence[MaintenanceTask], task_id: str) -> MaintenanceTask:
    for task in tasks:
        if task.id == task_id:
            return task
    raise KeyError(f"No task with id '{task_id}'")


def complete_task(
    tasks: Sequence[MaintenanceTask],
    task_id: str,
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> List[MaintenanceTask]:
    """Mark a task Completed and archive the placeholders it supersedes."""
    task = apply_action(find_task(tasks, task_id), SetStatus(TaskStatus.COMPLETED), today)
    return smart_match_and_archive(tasks, task, policy)
