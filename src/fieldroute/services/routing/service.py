"""Routing orchestration service."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Sequence

from ...config import settings
from ...data.settings_repository import get_optimization_settings
from ...models.domain import JobLocation, TimeWindow, Vehicle
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    JobLocationModel,
    OptimizedRouteModel,
    RoutingRequest,
    RoutingResponse,
    RoutingSummaryModel,
    VehicleModel,
)
from ...schemas.settings import OptimizationSettings
from ..estimates import estimate_job_duration
from ..outputs.routing_formatter import routes_to_csv, routes_to_json
from .optimizer import RouteOptimizer
from .osrm_client import OSRMClient
from .summary import summarize_routes, unassigned_jobs
from .travel import TravelTimeEstimator

logger = logging.getLogger(__name__)


def _to_job(model: JobLocationModel) -> JobLocation:
    duration = model.estimated_duration or estimate_job_duration(model.job_type, model.complexity)
    window = TimeWindow(model.time_window.earliest, model.time_window.latest) if model.time_window else None
    return JobLocation(
        job_id=model.id,
        address=model.address,
        latitude=model.latitude,
        longitude=model.longitude,
        estimated_duration=duration,
        priority=model.priority,
        job_type=model.job_type.upper(),
        complexity=model.complexity.upper(),
        time_window=window,
        required_skills=tuple(model.required_skills),
    )


def _to_vehicle(model: VehicleModel) -> Vehicle:
    return Vehicle(
        id=model.id,
        vehicle_number=model.vehicle_number or model.id,
        vehicle_name=model.vehicle_name or model.id,
        capacity=model.capacity,
        home_base_lat=model.home_base_lat,
        home_base_lng=model.home_base_lng,
        hourly_operating_cost=model.hourly_operating_cost,
        mileage_rate=model.mileage_rate,
        vehicle_class=model.vehicle_class.upper(),
    )


def resolve_settings(payload: RoutingRequest) -> tuple[OptimizationSettings, str]:
    """Explicit settings win over a named profile; the profile falls back to the default name."""
    if payload.settings is not None:
        return payload.settings, "request"
    profile = payload.settings_profile or settings.default_settings_profile
    return get_optimization_settings(profile), profile


def build_travel_estimator() -> TravelTimeEstimator:
    provider = None
    if settings.osrm_base_url:
        provider = OSRMClient()
    else:
        logger.info("OSRM not configured; travel times use the Haversine fallback.")
    return TravelTimeEstimator(provider)


def _persist_run(payload: RoutingRequest, routes: Sequence, summary: dict, metadata: dict) -> str:
    run_dir = FileStorage().save_route_run(
        payload.route_date,
        routes_to_json(routes, summary, metadata),
        routes_to_csv(routes),
    )
    logger.info(f"Saved routing outputs to {run_dir}")
    return str(run_dir)


def optimize_routes(payload: RoutingRequest, travel: TravelTimeEstimator | None = None) -> RoutingResponse:
    jobs = [_to_job(job) for job in payload.jobs]
    vehicles = [_to_vehicle(vehicle) for vehicle in payload.vehicles]
    optimization_settings, profile = resolve_settings(payload)
    travel = travel or build_travel_estimator()

    optimizer = RouteOptimizer(optimization_settings, travel)
    routes = optimizer.optimize_routes(jobs, vehicles, payload.route_date, payload.start_time)

    summary = summarize_routes(routes, jobs)
    metadata: dict = {
        "settings_profile": profile,
        "settings": optimization_settings.model_dump(),
        "travel": travel.stats(),
        "start_time": payload.start_time,
    }
    if payload.persist:
        metadata["output_dir"] = _persist_run(payload, routes, summary, metadata)

    return RoutingResponse(
        route_date=payload.route_date,
        summary=RoutingSummaryModel(**summary),
        routes=[OptimizedRouteModel(**asdict(route)) for route in routes],
        unassigned_jobs=[job.job_id for job in unassigned_jobs(jobs, routes)],
        metadata=metadata,
    )
