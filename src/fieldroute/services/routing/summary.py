"""Run-level summaries of optimized routes."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import JobLocation
from .models import OptimizedRoute


def unassigned_jobs(jobs: Sequence[JobLocation], routes: Sequence[OptimizedRoute]) -> list[JobLocation]:
    assigned_ids = {stop.job_id for route in routes for stop in route.stops}
    return [job for job in jobs if job.job_id not in assigned_ids]


def summarize_routes(routes: Sequence[OptimizedRoute], jobs: Sequence[JobLocation]) -> dict:
    total_routes = len(routes)
    total_jobs = len(jobs)
    assigned = sum(len(route.stops) for route in routes)
    total_distance = sum(route.total_distance for route in routes)
    total_duration = sum(route.total_duration for route in routes)
    total_cost = sum(route.total_cost for route in routes)
    avg_score = sum(route.optimization_score for route in routes) / total_routes if total_routes else 0.0

    return {
        "total_routes": total_routes,
        "total_jobs": total_jobs,
        "assigned_jobs": assigned,
        "unassigned_jobs": total_jobs - assigned,
        "assignment_rate": assigned / total_jobs * 100 if total_jobs else 0.0,
        "total_distance": round(total_distance, 2),
        "total_duration": total_duration,
        "total_cost": round(total_cost, 2),
        "avg_optimization_score": round(avg_score, 2),
        "avg_jobs_per_route": assigned / total_routes if total_routes else 0.0,
        "avg_distance_per_route": total_distance / total_routes if total_routes else 0.0,
    }
