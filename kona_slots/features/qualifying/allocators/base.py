"""
Base Allocator

Abstract base class for qualification slot allocation systems,
plus the category-winner rule both systems share.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from kona_slots.features.qualifying.models import GradedRecord, SlotAllocation, SystemResult


def raw_time_key(record: GradedRecord) -> tuple:
    """Ascending raw time, ties broken by input order."""
    return (record.raw_time_seconds, record.position)


def graded_time_key(record: GradedRecord) -> tuple:
    """Ascending graded time, ties broken by input order."""
    return (record.graded_time_seconds, record.position)


def group_by_category(records: Sequence[GradedRecord]) -> Dict[str, List[GradedRecord]]:
    """
    Group records by category, categories in first-seen order.

    Always returns a new dict of new lists, so callers may sort or
    mutate their copy freely.
    """
    groups: Dict[str, List[GradedRecord]] = {}
    for record in records:
        groups.setdefault(record.category, []).append(record)
    return groups


def select_category_winners(records: Sequence[GradedRecord]) -> Dict[str, GradedRecord]:
    """
    Category winner = fastest raw time in the category.

    On an exact tie the finisher that appears first in the input wins.
    """
    return {
        category: min(members, key=raw_time_key)
        for category, members in group_by_category(records).items()
    }


class QualificationAllocator(ABC):
    """
    Abstract base class for allocation systems.

    Each allocator turns the graded finisher field of one race and a
    slot configuration into a SystemResult. Allocators hold no state
    between calls and never modify the records they are given.
    """

    @property
    @abstractmethod
    def system(self) -> str:
        """Report key for this system ("system_2025" / "system_2026")."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description of the rules."""
        pass

    @abstractmethod
    def allocate(
        self,
        records: Sequence[GradedRecord],
        slots: SlotAllocation
    ) -> SystemResult:
        """
        Select qualifiers and compute per-category cutoffs.

        Args:
            records: Graded finishers (post-exclusion), in input order
            slots: Slot configuration for this system

        Returns:
            SystemResult with qualifiers, winners and cutoff times
        """
        pass
