"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal


@dataclass(slots=True, frozen=True)
class TravelEstimate:
    distance_miles: float
    duration_minutes: float
    source: Literal["provider", "fallback"] = "provider"


@dataclass(slots=True)
class OptimizedStop:
    job_id: str
    stop_order: int
    address: str
    latitude: float
    longitude: float
    estimated_arrival: str
    estimated_departure: str
    estimated_duration: int
    travel_time_from_previous: int
    distance_from_previous: float


@dataclass(slots=True)
class OptimizedRoute:
    vehicle_id: str
    route_date: date
    stops: List[OptimizedStop]
    total_distance: float
    total_duration: int
    total_cost: float
    optimization_score: int
    start_time: str
    end_time: str
    constraint_violations: dict[str, float] = field(default_factory=dict)

    @property
    def job_ids(self) -> list[str]:
        return [stop.job_id for stop in self.stops]
