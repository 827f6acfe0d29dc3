"""Service-duration estimates for jobs without an explicit duration."""

from __future__ import annotations

import math

BASE_MINUTES_BY_JOB_TYPE = {
    "SERVICE_CALL": 60,
    "INSTALLATION": 180,
    "MAINTENANCE": 90,
    "REPAIR": 120,
    "INSPECTION": 45,
    "EMERGENCY": 90,
}
DEFAULT_BASE_MINUTES = 90

COMPLEXITY_MULTIPLIERS = {
    "SIMPLE": 0.8,
    "STANDARD": 1.0,
    "COMPLEX": 1.5,
    "CRITICAL": 2.0,
}


def estimate_job_duration(job_type: str | None, complexity: str | None) -> int:
    """Minutes on site for a job type, scaled by complexity."""

    base = BASE_MINUTES_BY_JOB_TYPE.get((job_type or "").upper(), DEFAULT_BASE_MINUTES)
    multiplier = COMPLEXITY_MULTIPLIERS.get((complexity or "").upper(), 1.0)
    return math.floor(base * multiplier + 0.5)
