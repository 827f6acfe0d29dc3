"""Travel-time lookups with a Haversine fallback."""

from __future__ import annotations

import logging
from typing import Protocol

from ...config import settings
from ..geospatial import fallback_travel, haversine_miles
from .models import TravelEstimate

logger = logging.getLogger(__name__)


class TravelTimeProvider(Protocol):
    def travel_time(
        self,
        from_lat: float,
        from_lng: float,
        to_lat: float,
        to_lng: float,
        *,
        vehicle_class: str | None = None,
        timeout: float | None = None,
    ) -> TravelEstimate:
        ...


class TravelTimeEstimator:
    """Wraps an optional provider and never lets its failures escape.

    Any provider error (timeouts included) is replaced with the straight-line
    estimate at the fallback speed. After ``failure_threshold`` consecutive
    failures the provider is skipped for the rest of this estimator's life.
    """

    def __init__(
        self,
        provider: TravelTimeProvider | None = None,
        *,
        timeout: float | None = None,
        failure_threshold: int | None = None,
        fallback_speed_mph: float | None = None,
    ) -> None:
        self.provider = provider
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.failure_threshold = failure_threshold or settings.travel_provider_failure_threshold
        self.fallback_speed_mph = fallback_speed_mph or settings.fallback_speed_mph
        self.consecutive_failures = 0
        self.provider_calls = 0
        self.fallback_calls = 0

    @property
    def provider_available(self) -> bool:
        return self.provider is not None and self.consecutive_failures < self.failure_threshold

    def estimate(
        self,
        from_lat: float,
        from_lng: float,
        to_lat: float,
        to_lng: float,
        vehicle_class: str | None = None,
    ) -> TravelEstimate:
        if self.provider_available:
            try:
                result = self.provider.travel_time(
                    from_lat,
                    from_lng,
                    to_lat,
                    to_lng,
                    vehicle_class=vehicle_class,
                    timeout=self.timeout,
                )
                if not (result.distance_miles >= 0 and result.duration_minutes >= 0):
                    raise ValueError(f"Provider returned invalid travel values: {result}")
                self.consecutive_failures = 0
                self.provider_calls += 1
                return result
            except Exception as e:
                self.consecutive_failures += 1
                logger.warning(f"Travel-time provider failed ({e}); using Haversine fallback.")
                if not self.provider_available:
                    logger.warning(
                        f"Travel-time provider failed {self.consecutive_failures} times in a row; "
                        f"remaining legs use the fallback estimate."
                    )

        self.fallback_calls += 1
        distance = haversine_miles(from_lat, from_lng, to_lat, to_lng)
        return fallback_travel(distance, self.fallback_speed_mph)

    def stats(self) -> dict:
        return {
            "provider_configured": self.provider is not None,
            "provider_calls": self.provider_calls,
            "fallback_calls": self.fallback_calls,
        }
