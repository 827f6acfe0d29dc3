"""Optimization settings profile schema."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class OptimizationSettings(BaseModel):
    """Tunable knobs for one optimization run.

    Defaults match the built-in ``default`` profile used when the settings
    store has nothing to offer. ``max_route_minutes`` is the working-day
    ceiling in minutes.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    max_stops_per_route: int = Field(default=8, ge=1)
    max_route_minutes: int = Field(
        default=480,
        ge=1,
        validation_alias=AliasChoices("max_route_minutes", "max_route_hours", "maxRouteHours"),
        description="Minutes. Stored rows may still name it max_route_hours.",
    )
    max_route_distance: float = Field(default=100.0, ge=0.0, description="Miles.")
    break_duration: int = Field(default=30, ge=0)
    lunch_break_duration: int = Field(default=60, ge=0)
    travel_buffer_percent: float = Field(default=15.0, ge=0.0)
    traffic_multiplier: float = Field(default=1.3, ge=0.0)
    priority_weighting: float = Field(default=2.0, ge=0.0)
    distance_weight: float = Field(default=0.4, ge=0.0)
    time_weight: float = Field(default=0.4, ge=0.0)
    cost_weight: float = Field(default=0.2, ge=0.0)
    allow_overtime_routes: bool = False


DEFAULT_OPTIMIZATION_SETTINGS = OptimizationSettings()
