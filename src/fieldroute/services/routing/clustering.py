"""Seed-radius geographic clustering of jobs."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ...config import settings
from ...models.domain import JobLocation
from ..geospatial import haversine_miles_many


def cluster_jobs(
    jobs: Sequence[JobLocation],
    radius_miles: float | None = None,
) -> list[list[JobLocation]]:
    """Group jobs around seed jobs in a single greedy pass.

    Each unprocessed job, taken in input order, seeds a cluster that absorbs
    every other unprocessed job within ``radius_miles`` of the seed. Membership
    depends only on distance to the seed, so the result depends on input order.
    Clusters are returned by descending total priority; ties keep seed order.
    """
    if not jobs:
        return []

    radius = radius_miles if radius_miles is not None else settings.cluster_radius_miles
    lats = np.array([job.latitude for job in jobs], dtype=float)
    lons = np.array([job.longitude for job in jobs], dtype=float)
    processed = np.zeros(len(jobs), dtype=bool)

    clusters: list[list[JobLocation]] = []
    for index, seed in enumerate(jobs):
        if processed[index]:
            continue
        processed[index] = True

        distances = haversine_miles_many(seed.latitude, seed.longitude, lats, lons)
        members = np.flatnonzero(~processed & (distances <= radius))
        processed[members] = True

        clusters.append([seed, *(jobs[int(member)] for member in members)])

    clusters.sort(key=lambda cluster: sum(job.priority for job in cluster), reverse=True)
    return clusters
