"""Timed schedule construction for an ordered route."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Sequence

from ...models.domain import JobLocation, Vehicle, format_clock, parse_clock
from ...schemas.settings import OptimizationSettings
from .constraints import route_violations
from .models import OptimizedRoute, OptimizedStop
from .scoring import optimization_score
from .travel import TravelTimeEstimator

LUNCH_WINDOW_START = 12 * 60
LUNCH_WINDOW_END = 13 * 60

logger = logging.getLogger(__name__)


def _round_minutes(value: float) -> int:
    return math.floor(value + 0.5)


def _round_cents(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def build_timed_route(
    vehicle: Vehicle,
    jobs: Sequence[JobLocation],
    route_date: date,
    start_time: str,
    settings: OptimizationSettings,
    travel: TravelTimeEstimator,
) -> OptimizedRoute:
    """Walk ``jobs`` from the vehicle's home base and stamp arrival/departure times.

    Outbound legs are inflated by the traffic multiplier and the travel buffer;
    the return leg only by the traffic multiplier. A lunch break is added when
    the clock sits inside 12:00-13:00 at a stop past the route midpoint. That
    check runs at every such stop, so more than one break can be added.
    """
    start_minutes = parse_clock(start_time)
    buffer_factor = 1 + settings.travel_buffer_percent / 100

    stops: list[OptimizedStop] = []
    current_time = start_minutes
    current_lat, current_lng = vehicle.home_base
    total_distance = 0.0
    total_cost = 0.0

    for index, job in enumerate(jobs):
        leg = travel.estimate(current_lat, current_lng, job.latitude, job.longitude, vehicle.vehicle_class)
        travel_minutes = _round_minutes(leg.duration_minutes * settings.traffic_multiplier * buffer_factor)

        current_time += travel_minutes
        arrival = format_clock(current_time)

        if LUNCH_WINDOW_START <= current_time <= LUNCH_WINDOW_END and index > len(jobs) / 2:
            logger.debug(f"Lunch break before job {job.job_id} on vehicle {vehicle.id} at {arrival}")
            current_time += settings.lunch_break_duration

        departure = format_clock(current_time + job.estimated_duration)
        stops.append(
            OptimizedStop(
                job_id=job.job_id,
                stop_order=index + 1,
                address=job.address,
                latitude=job.latitude,
                longitude=job.longitude,
                estimated_arrival=arrival,
                estimated_departure=departure,
                estimated_duration=job.estimated_duration,
                travel_time_from_previous=travel_minutes,
                distance_from_previous=leg.distance_miles,
            )
        )

        current_time += job.estimated_duration
        current_lat, current_lng = job.latitude, job.longitude
        total_distance += leg.distance_miles
        total_cost += (
            leg.distance_miles * vehicle.mileage_rate
            + (travel_minutes + job.estimated_duration) / 60 * vehicle.hourly_operating_cost
        )

    return_leg = travel.estimate(
        current_lat, current_lng, vehicle.home_base_lat, vehicle.home_base_lng, vehicle.vehicle_class
    )
    total_distance += return_leg.distance_miles
    current_time += _round_minutes(return_leg.duration_minutes * settings.traffic_multiplier)

    total_duration = current_time - start_minutes
    return OptimizedRoute(
        vehicle_id=vehicle.id,
        route_date=route_date,
        stops=stops,
        total_distance=_round_cents(total_distance),
        total_duration=total_duration,
        total_cost=_round_cents(total_cost),
        optimization_score=optimization_score(stops, total_distance, total_duration, settings),
        start_time=format_clock(start_minutes),
        end_time=format_clock(current_time),
        constraint_violations=route_violations(total_distance, total_duration, settings),
    )
