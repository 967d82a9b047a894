"""Tunable constants for due-date and forecast calculations."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .catalog import generic_catalog

_YAML_KEYS = {
    "annualDistance": "annual_distance",
    "horizon": "horizon",
    "matchTolerance": "match_tolerance",
    "reminderWindow": "reminder_window",
    "dailyDistance": "daily_distance",
    "overdueGraceMonths": "overdue_grace_months",
    "distanceUnit": "distance_unit",
}


@dataclass(frozen=True)
class Policy:
    """
    Assumptions the engine makes about how a vehicle is driven.

    annual_distance is an assumed usage rate, not a property of the vehicle;
    it only converts a remaining distance into an approximate number of months.
    """

    annual_distance: float = 12000
    horizon: float = 20000
    match_tolerance: float = 500
    reminder_window: float = 1000
    daily_distance: float = 40
    overdue_grace_months: int = 1
    distance_unit: str = "mi"

    def __post_init__(self):
        for f in fields(self):
            if f.name == "distance_unit":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Policy.{f.name} must be a number, got {value!r}")
            if value <= 0:
                raise ValueError(f"Policy.{f.name} must be positive, got {value!r}")
        # The generic catalog must fit inside the horizon for the local forecast
        shortest = min(entry.distance for entry in generic_catalog())
        if self.horizon < shortest:
            raise ValueError(
                f"Policy.horizon must be at least {shortest:g}, got {self.horizon!r}"
            )

    @classmethod
    def from_dict(cls, dct: Optional[Dict[str, Any]]) -> "Policy":
        """Build a policy from the camelCase ``policy:`` section of a vehicle file."""
        if not dct:
            return cls()
        unknown = sorted(set(dct) - set(_YAML_KEYS))
        if unknown:
            raise ValueError(f"Unknown policy keys: {', '.join(unknown)}")
        return cls(**{_YAML_KEYS[k]: v for k, v in dct.items()})

    def to_dict(self) -> Dict[str, Any]:
        """Serialize only the values that differ from the defaults."""
        default = Policy()
        return {
            yaml_key: getattr(self, attr)
            for yaml_key, attr in _YAML_KEYS.items()
            if getattr(self, attr) != getattr(default, attr)
        }


DEFAULT_POLICY = Policy()
