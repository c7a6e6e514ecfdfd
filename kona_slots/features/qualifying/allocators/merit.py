"""
2026 Merit Allocation (age-graded performance pool)

Rules:
1. "First we offer a slot to all age group winners" (fastest raw time).
2. The remaining slots form a single performance pool with no gender
   split: it rolls down the list of non-winners ordered by age-graded
   time until the pool is used up.

When winners alone outnumber the total, every winner still qualifies
and the pool is empty.
"""

from __future__ import annotations

import logging
from typing import Sequence

from kona_slots.shared.constants import SYSTEM_2026
from kona_slots.features.qualifying.cutoffs import merit_cutoffs
from kona_slots.features.qualifying.models import GradedRecord, SlotAllocation, SystemResult

from .base import QualificationAllocator, graded_time_key, select_category_winners

logger = logging.getLogger(__name__)


class MeritAllocator(QualificationAllocator):
    """Single-pool, age-graded allocation introduced for 2026."""

    @property
    def system(self) -> str:
        return SYSTEM_2026

    @property
    def description(self) -> str:
        return (
            "Category winners first, then the fastest age-graded times "
            "regardless of category or gender"
        )

    def allocate(
        self,
        records: Sequence[GradedRecord],
        slots: SlotAllocation
    ) -> SystemResult:
        winners = select_category_winners(records)
        winner_positions = {w.position for w in winners.values()}

        pool_slots = max(0, slots.total_slots - len(winners))
        if len(winners) > slots.total_slots:
            logger.warning(
                "%s: %d category winners exceed %d total slots, all winners kept",
                self.system, len(winners), slots.total_slots,
            )

        roll_down = sorted(
            (r for r in records if r.position not in winner_positions),
            key=graded_time_key,
        )
        pool = roll_down[:pool_slots]

        result = SystemResult(
            system=self.system,
            winners=winners,
            performance_pool_slots=pool_slots,
        )
        result.qualifiers.extend(winners.values())
        result.qualifiers.extend(pool)
        result.unused_slots = pool_slots - len(pool)
        result.cutoff_times = merit_cutoffs(winners, pool)
        return result
