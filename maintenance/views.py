"""Read-only views over a schedule: grouping, reminders and due estimates."""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from .policy import DEFAULT_POLICY, Policy
from .status import TaskStatus
from .task import MaintenanceTask


def active_tasks(tasks: Sequence[MaintenanceTask]) -> List[MaintenanceTask]:
    return [t for t in tasks if t.is_active]


def archived_tasks(tasks: Sequence[MaintenanceTask]) -> List[MaintenanceTask]:
    return [t for t in tasks if not t.is_active]


def group_tasks(
    tasks: Sequence[MaintenanceTask],
    status: Optional[TaskStatus] = None,
    category: Optional[str] = None,
) -> Dict[str, List[MaintenanceTask]]:
    """
    Group active tasks for display.

    A forecast placeholder appears both in its status group and in
    "forecasted". Archived placeholders are left out entirely.
    """
    filtered = [
        t
        for t in active_tasks(tasks)
        if (status is None or t.status == status)
        and (category is None or t.category == category)
    ]
    return {
        "completed": [t for t in filtered if t.status == TaskStatus.COMPLETED],
        "upcoming": [t for t in filtered if t.status == TaskStatus.UPCOMING],
        "overdue": [t for t in filtered if t.status == TaskStatus.OVERDUE],
        "forecasted": [t for t in filtered if t.is_forecast],
    }


@dataclass
class Reminder:
    """A task worth telling the owner about."""

    task: MaintenanceTask
    kind: str  # "upcoming" or "overdue"
    distance_remaining: Optional[float] = None


def due_reminders(
    tasks: Sequence[MaintenanceTask],
    current_mileage: float,
    policy: Policy = DEFAULT_POLICY,
) -> List[Reminder]:
    """Overdue tasks, then upcoming tasks within the reminder window."""
    reminders = []
    candidates = active_tasks(tasks)
    for task in candidates:
        if task.status == TaskStatus.OVERDUE:
            remaining = None
            if task.due_mileage is not None:
                remaining = task.due_mileage - current_mileage
            reminders.append(Reminder(task, "overdue", remaining))
    upcoming = []
    for task in candidates:
        if task.status != TaskStatus.UPCOMING or task.due_mileage is None:
            continue
        remaining = task.due_mileage - current_mileage
        if 0 < remaining <= policy.reminder_window:
            upcoming.append(Reminder(task, "upcoming", remaining))
    upcoming.sort(key=lambda r: r.distance_remaining)
    return reminders + upcoming


def estimate_due_date(
    task: MaintenanceTask,
    current_mileage: float,
    today: date,
    policy: Policy = DEFAULT_POLICY,
) -> Optional[date]:
    """
    Due date for a mileage-only task at the assumed daily distance.

    Tasks that already have a due date or a completed date keep what they have.
    """
    if task.due_date is not None or task.completed_date is not None:
        return task.due_date
    if task.due_mileage is None:
        return None
    remaining = task.due_mileage - current_mileage
    if remaining <= 0:
        return today
    return today + timedelta(days=math.ceil(remaining / policy.daily_distance))
