"""HTTP client for interacting with OSRM services."""

from __future__ import annotations

import logging
import time

import httpx

from ...config import settings
from .models import TravelEstimate

METERS_PER_MILE = 1609.344

logger = logging.getLogger(__name__)


class OSRMClient:
    """Travel-time provider backed by the OSRM ``route`` endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        vehicle_profiles: dict[str, str] | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self.vehicle_profiles = {
            key.upper(): value
            for key, value in (vehicle_profiles if vehicle_profiles is not None else settings.osrm_vehicle_profiles).items()
        }

    def _get_client(self, timeout: float) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
            limits=httpx.Limits(max_connections=1, max_keepalive_connections=0),
        )

    def profile_for(self, vehicle_class: str | None) -> str:
        if vehicle_class:
            return self.vehicle_profiles.get(vehicle_class.upper(), self.profile)
        return self.profile

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
        """Driving distance (miles) and duration (minutes) for a single leg."""

        coordinate_str = f"{from_lng},{from_lat};{to_lng},{to_lat}"
        params = {"overview": "false", "steps": "false"}
        url = f"{self.base_url}/route/v1/{self.profile_for(vehicle_class)}/{coordinate_str}"

        client = self._get_client(timeout if timeout is not None else self.timeout)
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return _parse_route_response(response.json())
                except httpx.TimeoutException as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"OSRM route request timed out after {self.max_retries} retries: {e}")
                        raise
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM route timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except (httpx.ConnectError, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(
                            f"Failed to connect to OSRM service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
                except httpx.HTTPStatusError:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    time.sleep(self.backoff_seconds * attempt)
        finally:
            client.close()


def _parse_route_response(data: dict) -> TravelEstimate:
    if data.get("code") != "Ok":
        error_msg = data.get("message", "Unknown OSRM route error")
        raise ValueError(f"OSRM route request failed: {error_msg}")
    routes = data.get("routes") or []
    if not routes:
        raise ValueError("OSRM route response contained no routes.")
    leg = routes[0]
    distance_m = leg.get("distance")
    duration_s = leg.get("duration")
    if distance_m is None or duration_s is None:
        raise ValueError("OSRM route response missing distance/duration.")
    return TravelEstimate(
        distance_miles=float(distance_m) / METERS_PER_MILE,
        duration_minutes=float(duration_s) / 60.0,
        source="provider",
    )


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM service health by routing between two nearby points.

    Public OSRM endpoints may not have a /health endpoint, so we test
    connectivity with a minimal route request instead.
    """
    base = base_url or settings.osrm_base_url
    if not base:
        return False
    try:
        client = OSRMClient(base_url=base, timeout=5.0, max_retries=0)
        client.travel_time(44.9778, -93.2650, 44.9537, -93.0900)
        return True
    except (httpx.HTTPError, ConnectionError, ValueError) as e:
        logger.info(f"OSRM health check failed: {e}")
        return False
