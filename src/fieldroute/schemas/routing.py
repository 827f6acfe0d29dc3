"""Routing request/response schemas."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..config import settings as app_settings
from .settings import OptimizationSettings

CLOCK_PATTERN = r"^\d{1,2}:\d{2}$"


class TimeWindowModel(BaseModel):
    earliest: str = Field(..., pattern=CLOCK_PATTERN)
    latest: str = Field(..., pattern=CLOCK_PATTERN)


class JobLocationModel(BaseModel):
    id: str = Field(..., min_length=1)
    address: str = ""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    estimated_duration: Optional[int] = Field(
        default=None,
        gt=0,
        description="Minutes on site. Estimated from job type and complexity when omitted.",
    )
    priority: int = Field(default=3, ge=1, le=5)
    job_type: str = "SERVICE_CALL"
    complexity: str = "STANDARD"
    time_window: Optional[TimeWindowModel] = None
    required_skills: List[str] = Field(default_factory=list)


class VehicleModel(BaseModel):
    id: str = Field(..., min_length=1)
    vehicle_number: str = ""
    vehicle_name: str = ""
    capacity: int = Field(default=1000, ge=0)
    home_base_lat: float = Field(default=44.9778, ge=-90, le=90)
    home_base_lng: float = Field(default=-93.2650, ge=-180, le=180)
    hourly_operating_cost: float = Field(default=25.0, ge=0)
    mileage_rate: float = Field(default=0.65, ge=0)
    vehicle_class: str = "TRUCK"


class RoutingRequest(BaseModel):
    route_date: date
    start_time: str = Field(default_factory=lambda: app_settings.default_start_time, pattern=CLOCK_PATTERN)
    jobs: List[JobLocationModel] = Field(default_factory=list)
    vehicles: List[VehicleModel] = Field(default_factory=list)
    settings_profile: Optional[str] = Field(
        default=None,
        description="Named settings profile to load from the settings store.",
    )
    settings: Optional[OptimizationSettings] = Field(
        default=None,
        description="Explicit settings; take precedence over the named profile.",
    )
    persist: bool = False


class OptimizedStopModel(BaseModel):
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


class OptimizedRouteModel(BaseModel):
    vehicle_id: str
    route_date: date
    stops: List[OptimizedStopModel]
    total_distance: float
    total_duration: int
    total_cost: float
    optimization_score: int
    start_time: str
    end_time: str
    constraint_violations: Dict[str, float] = Field(default_factory=dict)


class RoutingSummaryModel(BaseModel):
    total_routes: int
    total_jobs: int
    assigned_jobs: int
    unassigned_jobs: int
    assignment_rate: float
    total_distance: float
    total_duration: int
    total_cost: float
    avg_optimization_score: float
    avg_jobs_per_route: float
    avg_distance_per_route: float


class RoutingResponse(BaseModel):
    route_date: date
    summary: RoutingSummaryModel
    routes: List[OptimizedRouteModel]
    unassigned_jobs: List[str]
    metadata: Dict[str, Any] = Field(default_factory=dict)
