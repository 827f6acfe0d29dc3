"""2-opt local search over a constructed visit order."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import JobLocation, Vehicle
from ..geospatial import distance_matrix, haversine_miles

# Reversals must shorten the tour by more than this many miles to be kept.
IMPROVEMENT_EPSILON = 1e-9

logger = logging.getLogger(__name__)


def route_distance(route: Sequence[JobLocation], vehicle: Vehicle) -> float:
    """Closed-tour miles: home base, every stop in order, back to home base."""

    if not route:
        return 0.0

    total = 0.0
    prev_lat, prev_lng = vehicle.home_base
    for job in route:
        total += haversine_miles(prev_lat, prev_lng, job.latitude, job.longitude)
        prev_lat, prev_lng = job.latitude, job.longitude
    total += haversine_miles(prev_lat, prev_lng, vehicle.home_base_lat, vehicle.home_base_lng)
    return total


def two_opt(route: Sequence[JobLocation], vehicle: Vehicle) -> list[JobLocation]:
    """First-improvement 2-opt on the closed tour through the vehicle's home base.

    Segments ``route[i..j]`` with ``1 <= i < n - 2`` and ``j >= i + 2`` are
    reversed whenever that strictly shortens the tour; full passes repeat until
    one pass keeps nothing. The first stop is never moved. Only the two edges
    at the segment ends change, so each candidate costs O(1) against a
    precomputed distance matrix.
    """
    if len(route) < 4:
        return list(route)

    home = 0
    matrix = distance_matrix([vehicle.home_base, *((job.latitude, job.longitude) for job in route)])
    order = list(range(1, len(route) + 1))
    n = len(order)

    passes = 0
    improved = True
    while improved:
        improved = False
        passes += 1
        for i in range(1, n - 2):
            for j in range(i + 2, n):
                before = order[i - 1]
                after = order[j + 1] if j + 1 < n else home
                delta = (
                    matrix[before, order[j]]
                    + matrix[order[i], after]
                    - matrix[before, order[i]]
                    - matrix[order[j], after]
                )
                if delta < -IMPROVEMENT_EPSILON:
                    order[i : j + 1] = order[i : j + 1][::-1]
                    improved = True

    logger.debug(f"2-opt converged after {passes} passes on {n} stops")
    return [route[node - 1] for node in order]
