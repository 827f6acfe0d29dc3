"""Nearest-neighbor route construction."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import JobLocation
from ...schemas.settings import OptimizationSettings
from ..geospatial import haversine_miles


def nearest_neighbor_route(
    start: tuple[float, float],
    jobs: Sequence[JobLocation],
    settings: OptimizationSettings,
) -> list[JobLocation]:
    """Greedy visit order from ``start`` weighted by distance and priority.

    At each step the unvisited job with the lowest
    ``distance_weight * miles + priority_weighting * (6 - priority)`` is taken;
    on ties the earliest candidate wins.
    """
    remaining = list(jobs)
    route: list[JobLocation] = []
    current_lat, current_lng = start

    def composite_score(job: JobLocation) -> float:
        distance = haversine_miles(current_lat, current_lng, job.latitude, job.longitude)
        return distance * settings.distance_weight + (6 - job.priority) * settings.priority_weighting

    while remaining:
        best_index = min(range(len(remaining)), key=lambda idx: composite_score(remaining[idx]))
        best_job = remaining.pop(best_index)
        route.append(best_job)
        current_lat, current_lng = best_job.latitude, best_job.longitude

    return route
