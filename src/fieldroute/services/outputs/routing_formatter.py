"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from typing import Sequence

from ..routing.models import OptimizedRoute


def routes_to_json(routes: Sequence[OptimizedRoute], summary: dict, metadata: dict | None = None) -> dict:
    return {
        "summary": summary,
        "metadata": metadata or {},
        "routes": [
            {
                "vehicle_id": route.vehicle_id,
                "route_date": route.route_date.isoformat(),
                "start_time": route.start_time,
                "end_time": route.end_time,
                "total_distance": route.total_distance,
                "total_duration": route.total_duration,
                "total_cost": route.total_cost,
                "optimization_score": route.optimization_score,
                "constraint_violations": route.constraint_violations,
                "stops": [asdict(stop) for stop in route.stops],
            }
            for route in routes
        ],
    }


def routes_to_csv(routes: Sequence[OptimizedRoute]) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "vehicle_id",
        "route_date",
        "stop_order",
        "job_id",
        "address",
        "latitude",
        "longitude",
        "estimated_arrival",
        "estimated_departure",
        "estimated_duration",
        "travel_time_from_previous",
        "distance_from_previous",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route in routes:
        for stop in route.stops:
            writer.writerow(
                {
                    "vehicle_id": route.vehicle_id,
                    "route_date": route.route_date.isoformat(),
                    **asdict(stop),
                }
            )
    return buffer.getvalue()
