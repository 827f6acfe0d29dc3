"""Route optimization pipeline across a fleet."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Sequence

from ...config import settings as app_settings
from ...models.domain import InvalidInputError, JobLocation, Vehicle, parse_clock
from ...schemas.settings import OptimizationSettings
from .clustering import cluster_jobs
from .constraints import validate_route
from .construction import nearest_neighbor_route
from .improvement import two_opt
from .models import OptimizedRoute
from .prioritizer import prioritize_jobs
from .timing import build_timed_route
from .travel import TravelTimeEstimator

logger = logging.getLogger(__name__)


def _coerce_route_date(route_date: date | str) -> date:
    if isinstance(route_date, date):
        return route_date
    try:
        return date.fromisoformat(str(route_date))
    except ValueError as exc:
        raise InvalidInputError(f"Invalid route date {route_date!r}; expected YYYY-MM-DD.") from exc


def _deduplicate(jobs: Sequence[JobLocation]) -> list[JobLocation]:
    seen: set[str] = set()
    unique: list[JobLocation] = []
    for job in jobs:
        if job.job_id in seen:
            logger.warning(f"Duplicate job id {job.job_id} ignored; keeping first occurrence")
            continue
        seen.add(job.job_id)
        unique.append(job)
    return unique


class RouteOptimizer:
    """First-fit assignment of prioritized job clusters to vehicles.

    Vehicles are visited in the given order and, for each, every cluster in
    priority order. Each (vehicle, cluster) pair gets at most one route built
    from the cluster's still-unassigned jobs; a vehicle can therefore collect
    several routes across clusters. No rebalancing happens between vehicles.
    """

    def __init__(
        self,
        settings: OptimizationSettings | None = None,
        travel: TravelTimeEstimator | None = None,
        *,
        cluster_radius_miles: float | None = None,
        shrink_factor: float | None = None,
    ) -> None:
        self.settings = settings or OptimizationSettings()
        self.travel = travel or TravelTimeEstimator()
        self.cluster_radius_miles = cluster_radius_miles or app_settings.cluster_radius_miles
        self.shrink_factor = shrink_factor or app_settings.route_shrink_factor
        if not 0 < self.shrink_factor < 1:
            raise ValueError("shrink_factor must be between 0 and 1")

    def optimize_routes(
        self,
        jobs: Sequence[JobLocation],
        vehicles: Sequence[Vehicle],
        route_date: date | str,
        start_time: str = "08:00",
    ) -> list[OptimizedRoute]:
        route_day = _coerce_route_date(route_date)
        parse_clock(start_time)

        if not jobs or not vehicles:
            logger.info(f"Nothing to route for {route_day}: {len(jobs)} jobs, {len(vehicles)} vehicles")
            return []

        sorted_jobs = prioritize_jobs(_deduplicate(jobs))
        clusters = cluster_jobs(sorted_jobs, self.cluster_radius_miles)
        logger.info(
            f"Optimizing {len(sorted_jobs)} jobs in {len(clusters)} clusters "
            f"across {len(vehicles)} vehicles for {route_day}"
        )

        routes: list[OptimizedRoute] = []
        assigned: set[str] = set()

        for vehicle in vehicles:
            for cluster in clusters:
                available = [job for job in cluster if job.job_id not in assigned]
                if not available:
                    continue

                route = self.create_route(vehicle, available, route_day, start_time)
                if route is None or not route.stops:
                    continue

                routes.append(route)
                assigned.update(route.job_ids)

        logger.info(
            f"Built {len(routes)} routes covering {len(assigned)}/{len(sorted_jobs)} jobs "
            f"({self.travel.fallback_calls} fallback travel estimates)"
        )
        return routes

    def feasible_sequence(self, vehicle: Vehicle, jobs: Sequence[JobLocation]) -> list[JobLocation]:
        """Construct, improve and validate; shrink the candidate list until a route fits.

        Candidates start as the first ``max_stops_per_route`` jobs and are cut
        to ``floor(len * shrink_factor)`` after each failed validation. The
        list strictly shrinks, so the loop ends with a feasible sequence or an
        empty list.
        """
        candidates = list(jobs[: self.settings.max_stops_per_route])

        attempt = 0
        while candidates:
            attempt += 1
            sequence = nearest_neighbor_route(vehicle.home_base, candidates, self.settings)
            sequence = two_opt(sequence, vehicle)
            if validate_route(sequence, self.settings):
                return sequence
            logger.debug(
                f"Vehicle {vehicle.id}: {len(candidates)} jobs infeasible on attempt {attempt}, shrinking"
            )
            candidates = candidates[: math.floor(len(candidates) * self.shrink_factor)]

        logger.debug(f"Vehicle {vehicle.id}: no feasible route for cluster of {len(jobs)} jobs")
        return []

    def create_route(
        self,
        vehicle: Vehicle,
        jobs: Sequence[JobLocation],
        route_date: date,
        start_time: str,
    ) -> OptimizedRoute | None:
        sequence = self.feasible_sequence(vehicle, jobs)
        if not sequence:
            return None
        return build_timed_route(vehicle, sequence, route_date, start_time, self.settings, self.travel)


def optimize_routes(
    jobs: Sequence[JobLocation],
    vehicles: Sequence[Vehicle],
    route_date: date | str,
    start_time: str = "08:00",
    *,
    settings: OptimizationSettings | None = None,
    travel: TravelTimeEstimator | None = None,
) -> list[OptimizedRoute]:
    """Convenience wrapper around :class:`RouteOptimizer`."""

    return RouteOptimizer(settings, travel).optimize_routes(jobs, vehicles, route_date, start_time)
