"""
2025 Legacy Allocation (gendered proportional)

Rules:
1. Every category winner (fastest raw time) gets a slot.
2. Each winner uses one slot from its gender's pool. Winners are
   never displaced, even when they outnumber the pool.
3. What is left of each pool is shared between that gender's categories
   in proportion to their number of finishers, using largest-remainder
   (Hamilton) apportionment.
4. Inside a category, extra slots go to the fastest non-winners by raw time.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from kona_slots.shared.constants import SYSTEM_2025, Gender
from kona_slots.features.qualifying.cutoffs import legacy_cutoffs
from kona_slots.features.qualifying.models import GradedRecord, SlotAllocation, SystemResult

from .base import QualificationAllocator, group_by_category, raw_time_key, select_category_winners

logger = logging.getLogger(__name__)


def hamilton_apportion(counts: Mapping[str, int], seats: int) -> dict[str, int]:
    """Split `seats` between groups proportionally to `counts`.

    Each group gets floor(count / total * seats); the shortfall goes one
    seat at a time to the largest fractional remainders. Equal remainders
    are served in the order the groups appear in `counts`.

    Integer arithmetic keeps the result exact:
        share = count * seats / total
        floor = (count * seats) // total
        remainder numerator = (count * seats) % total

    Example:
        >>> hamilton_apportion({"M30-34": 12, "M35-39": 7, "M40-44": 1}, 5)
        {'M30-34': 3, 'M35-39': 2, 'M40-44': 0}
    """
    total = sum(counts.values())
    if seats <= 0 or total <= 0:
        return {group: 0 for group in counts}

    allocation: dict[str, int] = {}
    remainders: list[tuple[int, int, str]] = []
    for order, (group, count) in enumerate(counts.items()):
        base, remainder = divmod(count * seats, total)
        allocation[group] = base
        remainders.append((-remainder, order, group))

    shortfall = seats - sum(allocation.values())
    for _, _, group in sorted(remainders)[:shortfall]:
        allocation[group] += 1

    return allocation


class LegacyAllocator(QualificationAllocator):
    """Gender-split proportional allocation used through 2025."""

    @property
    def system(self) -> str:
        return SYSTEM_2025

    @property
    def description(self) -> str:
        return (
            "Category winners first, then each gender's remaining slots "
            "shared proportionally by category size"
        )

    def allocate(
        self,
        records: Sequence[GradedRecord],
        slots: SlotAllocation
    ) -> SystemResult:
        if not slots.is_gendered:
            raise ValueError("2025 allocation requires men_slots and women_slots")

        groups = group_by_category(records)
        winners = select_category_winners(records)
        result = SystemResult(system=self.system, winners=winners)
        result.qualifiers.extend(winners.values())

        pools = {
            Gender.MALE.value: slots.men_slots,
            Gender.FEMALE.value: slots.women_slots,
        }

        for gender, pool in pools.items():
            gender_groups = {
                category: members
                for category, members in groups.items()
                if winners[category].gender == gender
            }
            if not gender_groups:
                continue

            remaining = pool - len(gender_groups)
            if remaining < 0:
                logger.warning(
                    "%s: %d %s category winners exceed %d slots, all winners kept",
                    self.system, len(gender_groups), gender, pool,
                )
            if remaining <= 0:
                continue

            extra_slots = hamilton_apportion(
                {category: len(members) for category, members in gender_groups.items()},
                remaining,
            )

            for category, extra in extra_slots.items():
                if extra <= 0:
                    continue
                winner = winners[category]
                contenders = sorted(
                    (r for r in gender_groups[category] if r.position != winner.position),
                    key=raw_time_key,
                )
                picked = contenders[:extra]
                result.qualifiers.extend(picked)
                result.unused_slots += extra - len(picked)

        if result.unused_slots:
            logger.warning(
                "%s: %d allocated slots had no eligible finisher",
                self.system, result.unused_slots,
            )

        result.cutoff_times = legacy_cutoffs(result.qualifiers)
        return result
