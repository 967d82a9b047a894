"""
Status classification for maintenance tasks.

Status changes are requested with one of three actions:
- SetStatus(status): an explicit caller/user decision
- Toggle(): flip between Completed and the task's derived active status
- Recompute(): re-derive Upcoming/Overdue from the due date

Completed and Skipped are never left except by SetStatus or Toggle.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Union

from .calculations import is_past
from .status import TaskStatus
from .task import MaintenanceTask


@dataclass(frozen=True)
class SetStatus:
    status: TaskStatus


@dataclass(frozen=True)
class Toggle:
    pass


@dataclass(frozen=True)
class Recompute:
    pass


StatusAction = Union[SetStatus, Toggle, Recompute]


def initial_status(
    due_date: Optional[date],
    due_mileage: Optional[float],
    today: date,
    requested: Optional[TaskStatus] = None,
) -> TaskStatus:
    """Status for a newly created task."""
    if requested is not None:
        return requested
    if is_past(due_date, today):
        return TaskStatus.OVERDUE
    if due_date is not None or due_mileage is not None:
        return TaskStatus.UPCOMING
    return TaskStatus.IN_PROGRESS


def active_status(task: MaintenanceTask, today: date) -> TaskStatus:
    """Status of a task that is not finished, derived from its due date."""
    if task.due_date is None:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.OVERDUE if is_past(task.due_date, today) else TaskStatus.UPCOMING


def _reopen(task: MaintenanceTask, today: date) -> None:
    task.completed_date = None
    task.status = active_status(task, today)


def apply_action(
    task: MaintenanceTask, action: StatusAction, today: date
) -> MaintenanceTask:
    """Apply a status action to a task in place and return it."""
    if isinstance(action, Recompute):
        # Undated tasks keep whatever status they were given
        if not task.status.is_terminal and task.due_date is not None:
            task.status = active_status(task, today)
    elif isinstance(action, Toggle):
        if task.status == TaskStatus.COMPLETED:
            _reopen(task, today)
        else:
            task.status = TaskStatus.COMPLETED
            task.completed_date = today
    elif isinstance(action, SetStatus):
        if not isinstance(action.status, TaskStatus):
            raise TypeError(f"SetStatus needs a TaskStatus, got {action.status!r}")
        if action.status == TaskStatus.COMPLETED:
            task.status = TaskStatus.COMPLETED
            task.completed_date = task.completed_date or today
        elif action.status in (TaskStatus.SKIPPED, TaskStatus.IN_PROGRESS):
            task.status = action.status
            task.completed_date = None
        else:
            _reopen(task, today)
    else:
        raise TypeError(f"Unknown status action: {action!r}")
    return task


def classify_schedule(
    tasks: Iterable[MaintenanceTask], today: date
) -> List[MaintenanceTask]:
    """Recompute the status of every task and return them as a list."""
    return [apply_action(task, Recompute(), today) for task in tasks]


def new_task(
    title: str,
    category: str,
    today: date,
    due_date: Optional[date] = None,
    due_mileage: Optional[float] = None,
    status: Optional[TaskStatus] = None,
    **fields,
) -> MaintenanceTask:
    """Create a user-entered task with its initial status."""
    resolved = initial_status(due_date, due_mileage, today, status)
    task = MaintenanceTask(
        title=title,
        category=category,
        status=resolved,
        creation_date=today,
        due_date=due_date,
        due_mileage=due_mileage,
        **fields,
    )
    if resolved != TaskStatus.COMPLETED:
        task.completed_date = None
    elif task.completed_date is None:
        task.completed_date = today
    return task
