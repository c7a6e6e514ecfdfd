"""Per-category qualifying cutoff times for both systems."""

from __future__ import annotations

from typing import Mapping, Sequence

from .models import GradedRecord


def legacy_cutoffs(qualifiers: Sequence[GradedRecord]) -> dict[str, float]:
    """2025 cutoff: slowest raw time among each category's qualifiers.

    Categories without qualifiers are absent (reported as null).
    """
    cutoffs: dict[str, float] = {}
    for q in qualifiers:
        current = cutoffs.get(q.category)
        if current is None or q.raw_time_seconds > current:
            cutoffs[q.category] = q.raw_time_seconds
    return cutoffs


def pool_boundary(pool: Sequence[GradedRecord]) -> float | None:
    """Graded time of the last finisher admitted through the performance pool."""
    if not pool:
        return None
    return max(r.graded_time_seconds for r in pool)


def merit_cutoffs(
    winners: Mapping[str, GradedRecord],
    pool: Sequence[GradedRecord],
) -> dict[str, float]:
    """2026 cutoff: the slower of two ways into Kona for each category.

    1. The category winner's raw time.
    2. The pool boundary (graded) converted back to this category's
       raw-time scale: boundary / multiplier.

    With an empty pool only path 1 exists.
    """
    boundary = pool_boundary(pool)
    cutoffs: dict[str, float] = {}
    for category, winner in winners.items():
        winner_time = float(winner.raw_time_seconds)
        if boundary is None:
            cutoffs[category] = winner_time
        else:
            cutoffs[category] = max(winner_time, boundary / winner.multiplier)
    return cutoffs


def round_cutoff(seconds: float | None) -> int | None:
    """Whole-second cutoff for reports."""
    if seconds is None:
        return None
    return int(round(seconds))
