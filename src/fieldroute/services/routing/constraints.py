"""Route feasibility checks."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import JobLocation
from ...schemas.settings import OptimizationSettings

ROUGH_TRAVEL_MINUTES_PER_STOP = 30


def estimated_route_minutes(route: Sequence[JobLocation]) -> int:
    """Service minutes plus a flat travel allowance per stop."""

    return sum(job.estimated_duration for job in route) + len(route) * ROUGH_TRAVEL_MINUTES_PER_STOP


def validate_route(route: Sequence[JobLocation], settings: OptimizationSettings) -> bool:
    if len(route) > settings.max_stops_per_route:
        return False
    if estimated_route_minutes(route) > settings.max_route_minutes and not settings.allow_overtime_routes:
        return False
    return True


def route_violations(
    total_distance: float,
    total_duration: float,
    settings: OptimizationSettings,
) -> dict[str, float]:
    """Overruns on a built route. Reported only; routes are not rejected for them."""

    violations: dict[str, float] = {}
    if total_distance > settings.max_route_distance:
        violations["distance_miles"] = round(total_distance - settings.max_route_distance, 2)
    if total_duration > settings.max_route_minutes:
        violations["duration_min"] = float(total_duration - settings.max_route_minutes)
    return violations
