"""BaselineTask class for manufacturer catalog entries."""

import logging
from typing import Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class BaselineTask:
    """A recommended maintenance item with a distance and/or time interval."""

    def __init__(
            self,
            item: str,
            category: str = "Other",
            interval_distance: Optional[float] = None,
            interval_months: Optional[float] = None,
            urgency: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.item = item
        self.category = category or "Other"
        self.interval_distance = interval_distance
        self.interval_months = interval_months
        self.urgency = urgency
        self.notes = notes

    @property
    def distance(self) -> Optional[float]:
        """Distance interval, or None when unset or zero."""
        return self.interval_distance or None

    @property
    def months(self) -> Optional[float]:
        """Month interval, or None when unset or zero."""
        return self.interval_months or None

    @property
    def is_recurring(self) -> bool:
        return self.distance is not None or self.months is not None

    def recurrence_interval(self, unit: str = "mi") -> Optional[str]:
        """Human-readable summary, e.g. '5000 mi / 6 months'."""
        parts = []
        if self.distance:
            parts.append(f"{_format_number(self.distance)} {unit}")
        if self.months:
            parts.append(f"{_format_number(self.months)} months")
        return " / ".join(parts) if parts else None

    def problems(self) -> List[str]:
        """Reasons this entry cannot be scheduled. Empty when usable."""
        found = []
        if not isinstance(self.item, str) or not self.item.strip():
            found.append("missing item name")
        for name in ("interval_distance", "interval_months"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                found.append(f"{name} is not a number: {value!r}")
            elif value < 0:
                found.append(f"{name} is negative: {value!r}")
        return found

    def __repr__(self) -> str:
        return (
            f"BaselineTask({self.item!r}, {self.category!r}, "
            f"interval_distance={self.interval_distance!r}, "
            f"interval_months={self.interval_months!r})"
        )


def require_catalog(catalog) -> Sequence:
    """Fail fast unless the catalog is a list or tuple of entries."""
    if not isinstance(catalog, (list, tuple)):
        raise TypeError(
            f"Baseline catalog must be a list or tuple, got {type(catalog).__name__}"
        )
    return catalog


def usable_entries(catalog: Sequence) -> Iterator[BaselineTask]:
    """Yield catalog entries that can be scheduled, logging the ones skipped."""
    for index, entry in enumerate(require_catalog(catalog)):
        if not isinstance(entry, BaselineTask):
            logger.warning(
                "Skipping catalog entry %d: expected BaselineTask, got %s",
                index,
                type(entry).__name__,
            )
            continue
        problems = entry.problems()
        if problems:
            logger.warning(
                "Skipping catalog entry %d (%r): %s", index, entry.item, "; ".join(problems)
            )
            continue
        yield entry
