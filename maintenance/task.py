"""MaintenanceTask dataclass for schedule entries."""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from .status import Importance, TaskStatus


def new_task_id() -> str:
    """Opaque, never-reused task identifier."""
    return str(uuid.uuid4())


@dataclass
class MaintenanceTask:
    """One entry in a vehicle's maintenance schedule."""

    title: str
    category: str
    status: TaskStatus
    creation_date: date
    id: str = field(default_factory=new_task_id)
    due_date: Optional[date] = None
    due_mileage: Optional[float] = None
    completed_date: Optional[date] = None
    is_recurring: bool = False
    recurrence_interval: Optional[str] = None
    is_forecast: bool = False
    archived: bool = False
    importance: Importance = Importance.RECOMMENDED
    urgency: Optional[str] = None
    notes: Optional[str] = None
    cost: Optional[float] = None

    @property
    def key(self) -> Tuple[str, str, Optional[float]]:
        """Semantic identity used to deduplicate derived tasks."""
        return (self.title, self.category, self.due_mileage)

    @property
    def is_active(self) -> bool:
        """Archived forecast placeholders are kept for history only."""
        return not (self.is_forecast and self.archived)

    @property
    def is_dated(self) -> bool:
        return self.due_date is not None or self.due_mileage is not None
