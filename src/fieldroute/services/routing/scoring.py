"""Route quality score."""

from __future__ import annotations

import math
from typing import Sized

from ...schemas.settings import OptimizationSettings

# Cost is not measured yet; every route gets this fixed cost sub-score.
BASELINE_COST_SCORE = 80


def optimization_score(
    stops: Sized,
    total_distance: float,
    total_duration: float,
    settings: OptimizationSettings,
) -> int:
    """0-100 score from average miles and minutes per stop (higher is better)."""

    if len(stops) == 0:
        return 100

    avg_distance_per_stop = total_distance / len(stops)
    avg_time_per_stop = total_duration / len(stops)

    # Penalties start after 5 miles and 60 minutes per stop.
    distance_score = max(0.0, 100 - (avg_distance_per_stop - 5) * 10)
    time_score = max(0.0, 100 - (avg_time_per_stop - 60) * 2)

    score = (
        distance_score * settings.distance_weight
        + time_score * settings.time_weight
        + BASELINE_COST_SCORE * settings.cost_weight
    )
    return math.floor(min(100.0, max(0.0, score)) + 0.5)
