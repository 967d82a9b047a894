"""Merge derived tasks into an existing schedule."""

from dataclasses import replace
from datetime import date
from typing import List, Sequence

from .classifier import classify_schedule
from .task import MaintenanceTask, new_task_id


def merge_schedule(
    existing: Sequence[MaintenanceTask], derived: Sequence[MaintenanceTask]
) -> List[MaintenanceTask]:
    """
    Append derived tasks whose (title, category, due_mileage) key is new.

    Existing order is preserved and new tasks keep their source order.
    Merging the same derived tasks again adds nothing. A new task whose id is
    already taken is appended as a copy with a fresh id.
    """
    seen = {task.key for task in existing}
    ids = {task.id for task in existing}
    merged = list(existing)
    for task in derived:
        if task.key in seen:
            continue
        if task.id in ids:
            task = replace(task, id=new_task_id())
        seen.add(task.key)
        ids.add(task.id)
        merged.append(task)
    return merged


def upsert_task(
    tasks: Sequence[MaintenanceTask], task: MaintenanceTask, today: date
) -> List[MaintenanceTask]:
    """
    Replace the task with the same id, or append it as a new task.

    The whole schedule is reclassified afterwards.
    """
    if not task.id:
        task.id = new_task_id()
    updated = list(tasks)
    for index, current in enumerate(updated):
        if current.id == task.id:
            # creation_date is set once
            task.creation_date = current.creation_date
            updated[index] = task
            break
    else:
        updated.append(task)
    return classify_schedule(updated, today)
