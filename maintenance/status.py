"""Status and importance enums for maintenance tasks."""

from enum import Enum
from typing import Optional


class TaskStatus(Enum):
    """Lifecycle status of a maintenance task."""

    UPCOMING = "Upcoming"
    OVERDUE = "Overdue"
    COMPLETED = "Completed"
    SKIPPED = "Skipped"
    IN_PROGRESS = "In Progress"

    @property
    def is_terminal(self) -> bool:
        """Completed and Skipped are only ever left by an explicit action."""
        return self in (TaskStatus.COMPLETED, TaskStatus.SKIPPED)

    @classmethod
    def parse(cls, value: str) -> "TaskStatus":
        """Accept either the value ("In Progress") or the name ("in_progress")."""
        name = value.strip().upper().replace("-", "_").replace(" ", "_")
        for status in cls:
            if value == status.value or name == status.name:
                return status
        raise ValueError(f"Unknown task status '{value}'")


class Importance(Enum):
    REQUIRED = "Required"
    RECOMMENDED = "Recommended"
    OPTIONAL = "Optional"


def importance_for(urgency: Optional[str]) -> Importance:
    """Map a catalog urgency (Low/Medium/High) to task importance."""
    level = (urgency or "").strip().lower()
    if level == "high":
        return Importance.REQUIRED
    if level == "medium":
        return Importance.RECOMMENDED
    return Importance.OPTIONAL
