"""Domain models for job visits and fleet vehicles."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Optional

COMPLEXITY_LEVELS = ("SIMPLE", "STANDARD", "COMPLEX", "CRITICAL")

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidInputError(ValueError):
    """Raised when a job, vehicle or clock value cannot be routed."""


def parse_clock(value: str) -> int:
    """Convert an ``HH:MM`` wall-clock string to minutes since midnight."""

    match = _CLOCK_PATTERN.match(str(value).strip())
    if not match:
        raise InvalidInputError(f"Invalid clock value {value!r}; expected HH:MM.")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidInputError(f"Invalid clock value {value!r}; expected HH:MM.")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``. Hours are not wrapped at 24."""

    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _require_finite(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number, got {value!r}.")


def _require_coordinates(owner: str, latitude: float, longitude: float) -> None:
    _require_finite(f"{owner} latitude", latitude)
    _require_finite(f"{owner} longitude", longitude)
    if not -90.0 <= latitude <= 90.0:
        raise InvalidInputError(f"{owner} latitude {latitude} is outside [-90, 90].")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidInputError(f"{owner} longitude {longitude} is outside [-180, 180].")


@dataclass(slots=True, frozen=True)
class TimeWindow:
    """Earliest/latest local service times for a job (informational only)."""

    earliest: str
    latest: str

    def __post_init__(self) -> None:
        if parse_clock(self.earliest) > parse_clock(self.latest):
            raise InvalidInputError(
                f"Time window earliest {self.earliest} is after latest {self.latest}."
            )


@dataclass(slots=True, frozen=True)
class JobLocation:
    """A geocoded job visit awaiting assignment to a route."""

    job_id: str
    address: str
    latitude: float
    longitude: float
    estimated_duration: int
    priority: int
    job_type: str = "SERVICE_CALL"
    complexity: str = "STANDARD"
    time_window: Optional[TimeWindow] = None
    required_skills: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.job_id:
            raise InvalidInputError("Job id must be a non-empty string.")
        owner = f"Job {self.job_id}"
        _require_coordinates(owner, self.latitude, self.longitude)
        duration = self.estimated_duration
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise InvalidInputError(
                f"{owner} estimated_duration must be a positive whole number of minutes, got {duration!r}."
            )
        if isinstance(self.priority, bool) or not isinstance(self.priority, int) or not 1 <= self.priority <= 5:
            raise InvalidInputError(f"{owner} priority must be an integer 1-5, got {self.priority!r}.")


@dataclass(slots=True, frozen=True)
class Vehicle:
    """A fleet vehicle starting and ending its day at a home base."""

    id: str
    vehicle_number: str
    vehicle_name: str
    capacity: int
    home_base_lat: float
    home_base_lng: float
    hourly_operating_cost: float
    mileage_rate: float
    vehicle_class: str = "TRUCK"

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidInputError("Vehicle id must be a non-empty string.")
        owner = f"Vehicle {self.id}"
        _require_coordinates(f"{owner} home base", self.home_base_lat, self.home_base_lng)
        for name in ("capacity", "hourly_operating_cost", "mileage_rate"):
            value = getattr(self, name)
            _require_finite(f"{owner} {name}", value)
            if value < 0:
                raise InvalidInputError(f"{owner} {name} must be non-negative, got {value}.")

    @property
    def home_base(self) -> tuple[float, float]:
        return (self.home_base_lat, self.home_base_lng)
