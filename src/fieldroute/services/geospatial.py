"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..config import settings
from .routing.models import TravelEstimate

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def haversine_miles_many(lat: float, lon: float, lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """Distances in miles from one coordinate to arrays of coordinates."""

    phi1 = np.radians(lat)
    phi2 = np.radians(lats)
    d_phi = np.radians(lats - lat)
    d_lambda = np.radians(lons - lon)

    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distance_matrix(points: Sequence[tuple[float, float]]) -> np.ndarray:
    """Symmetric pairwise Haversine matrix (miles) for (lat, lon) points."""

    coords = np.asarray(points, dtype=float).reshape(-1, 2)
    lats = coords[:, 0]
    lons = coords[:, 1]
    phi = np.radians(lats)
    d_phi = phi[:, None] - phi[None, :]
    d_lambda = np.radians(lons[:, None] - lons[None, :])

    a = np.sin(d_phi / 2) ** 2 + np.cos(phi)[:, None] * np.cos(phi)[None, :] * np.sin(d_lambda / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def fallback_duration_minutes(distance_miles: float, speed_mph: float | None = None) -> int:
    """Straight-line travel time at a constant average speed, rounded to whole minutes."""

    speed = speed_mph or settings.fallback_speed_mph
    if speed <= 0:
        raise ValueError("speed_mph must be positive")
    return math.floor(distance_miles / speed * 60 + 0.5)


def fallback_travel(distance_miles: float, speed_mph: float | None = None) -> TravelEstimate:
    """Travel estimate used whenever the external provider cannot answer."""

    return TravelEstimate(
        distance_miles=distance_miles,
        duration_minutes=fallback_duration_minutes(distance_miles, speed_mph),
        source="fallback",
    )
