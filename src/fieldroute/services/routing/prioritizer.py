"""Job ordering ahead of geographic grouping."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import JobLocation

COMPLEXITY_ORDER = {"SIMPLE": 1, "STANDARD": 2, "COMPLEX": 3, "CRITICAL": 4}
DEFAULT_COMPLEXITY_RANK = 2


def complexity_rank(complexity: str | None) -> int:
    return COMPLEXITY_ORDER.get(complexity or "", DEFAULT_COMPLEXITY_RANK)


def _priority_key(job: JobLocation) -> tuple[int, int, int]:
    has_window = 0 if job.time_window is not None else 1
    return (-job.priority, has_window, complexity_rank(job.complexity))


def prioritize_jobs(jobs: Sequence[JobLocation]) -> list[JobLocation]:
    """Highest priority first, then time-windowed jobs, then simpler jobs.

    The sort is stable, so equal jobs keep their input order.
    """
    return sorted(jobs, key=_priority_key)
