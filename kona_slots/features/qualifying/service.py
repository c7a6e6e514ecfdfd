"""
Qualifying Analyzer

Orchestrates the qualification comparison for one race:
- Time normalization (age grading, exclusions)
- 2025 legacy allocation
- 2026 merit allocation
- Per-category comparison and deltas

This is the main entry point for slot analysis.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from kona_slots.config import settings
from kona_slots.shared.constants import Gender

from .allocators import LegacyAllocator, MeritAllocator
from .cutoffs import round_cutoff
from .loader import default_standard_table
from .models import FinisherRecord, GradedRecord, SlotAllocation, SystemResult
from .schemas import (
    AnalysisReport,
    AthleteResult,
    CategoryComparison,
    CategorySystemBreakdown,
    CountDifference,
    SystemChanges,
    SystemTotals,
)
from .standards import StandardTable, TimeNormalizer

logger = logging.getLogger(__name__)

MEN = Gender.MALE.value
WOMEN = Gender.FEMALE.value


class QualifyingAnalyzer:
    """
    Compares the 2025 and 2026 allocation systems over one finisher list.

    Usage:
        analyzer = QualifyingAnalyzer(StandardTable.kona_2026())
        report = analyzer.analyze(
            records,
            legacy_slots=SlotAllocation(total_slots=40, men_slots=30, women_slots=10),
            merit_slots=SlotAllocation(total_slots=40),
        )
        if report is None:
            ...  # no analysis available
    """

    def __init__(
        self,
        table: Optional[StandardTable] = None,
        round_cutoffs: Optional[bool] = None,
        include_detailed_results: Optional[bool] = None,
    ):
        """
        Args:
            table: Standard table; defaults to default_standard_table()
            round_cutoffs: Whole-second cutoffs (default from settings)
            include_detailed_results: Attach per-athlete rows (default from settings)
        """
        self.table = table if table is not None else default_standard_table()
        self.normalizer = TimeNormalizer(self.table)
        self.legacy = LegacyAllocator()
        self.merit = MeritAllocator()
        self.round_cutoffs = (
            round_cutoffs if round_cutoffs is not None else settings.cutoff_rounding
        )
        self.include_detailed_results = (
            include_detailed_results
            if include_detailed_results is not None
            else settings.include_detailed_results
        )

    def describe_systems(self) -> dict[str, str]:
        """Rule summary per system, keyed like the report ("system_2025", ...)."""
        return {
            allocator.system: allocator.description
            for allocator in (self.legacy, self.merit)
        }

    def analyze(
        self,
        records: Sequence[FinisherRecord],
        legacy_slots: Optional[SlotAllocation],
        merit_slots: Optional[SlotAllocation],
        race_name: Optional[str] = None,
    ) -> Optional[AnalysisReport]:
        """
        Run both systems and build the comparison report.

        Returns None (no analysis available) when the finisher list is
        empty, when no record can be graded, or when a slot
        configuration is missing.
        """
        label = race_name or "race"

        if not records:
            logger.info("No analysis for %s: empty finisher list", label)
            return None
        if legacy_slots is None or merit_slots is None or not legacy_slots.is_gendered:
            logger.info("No analysis for %s: missing slot configuration", label)
            return None

        normalized = self.normalizer.normalize(records)
        graded = normalized.graded
        if not graded:
            logger.info(
                "No analysis for %s: none of %d records could be graded",
                label, len(records),
            )
            return None

        # Same read-only field for both systems
        result_2025 = self.legacy.allocate(graded, legacy_slots)
        result_2026 = self.merit.allocate(graded, merit_slots)

        totals_2025 = _system_totals(result_2025)
        totals_2026 = _system_totals(result_2026)

        report = AnalysisReport(
            race_name=race_name,
            total_participants=len(graded),
            men_participants=sum(1 for r in graded if r.gender == MEN),
            women_participants=sum(1 for r in graded if r.gender == WOMEN),
            excluded_count=len(normalized.excluded),
            total_slots=legacy_slots.total_slots,
            total_slots_2026=merit_slots.total_slots,
            system_2025=totals_2025,
            system_2026=totals_2026,
            changes=SystemChanges(
                men_difference=totals_2026.men_qualified - totals_2025.men_qualified,
                women_difference=totals_2026.women_qualified - totals_2025.women_qualified,
                total_difference=totals_2026.total_qualified - totals_2025.total_qualified,
            ),
            age_group_analysis=self._category_table(graded, result_2025, result_2026),
            detailed_results=(
                self._detailed_results(graded, result_2025, result_2026)
                if self.include_detailed_results
                else []
            ),
        )

        logger.info(
            "Analyzed %s: %d participants (%d excluded), 2025=%d, 2026=%d qualifiers",
            label,
            report.total_participants,
            report.excluded_count,
            totals_2025.total_qualified,
            totals_2026.total_qualified,
        )
        return report

    def _category_table(
        self,
        graded: Sequence[GradedRecord],
        result_2025: SystemResult,
        result_2026: SystemResult,
    ) -> dict[str, CategoryComparison]:
        """Per-category comparison over the union of both systems' categories."""
        participants: dict[str, int] = {}
        for r in graded:
            participants[r.category] = participants.get(r.category, 0) + 1

        categories = (
            set(participants)
            | {q.category for q in result_2025.qualifiers}
            | {q.category for q in result_2026.qualifiers}
        )

        table: dict[str, CategoryComparison] = {}
        for category in sorted(categories, key=self.table.sort_key):
            before = self._breakdown(result_2025, category)
            after = self._breakdown(result_2026, category)
            table[category] = CategoryComparison(
                participants=participants.get(category, 0),
                system_2025=before,
                system_2026=after,
                difference=CountDifference(
                    men=after.men - before.men,
                    women=after.women - before.women,
                    total=after.total - before.total,
                ),
            )
        return table

    def _breakdown(self, result: SystemResult, category: str) -> CategorySystemBreakdown:
        men = result.count(gender=MEN, category=category)
        women = result.count(gender=WOMEN, category=category)
        cutoff = result.cutoff_times.get(category)
        return CategorySystemBreakdown(
            men=men,
            women=women,
            total=men + women,
            cutoff_time_seconds=round_cutoff(cutoff) if self.round_cutoffs else cutoff,
        )

    @staticmethod
    def _detailed_results(
        graded: Sequence[GradedRecord],
        result_2025: SystemResult,
        result_2026: SystemResult,
    ) -> list[AthleteResult]:
        """Per-athlete rows in finish order. Flags are by record, not by name."""
        qualified_2025 = result_2025.qualifier_positions()
        qualified_2026 = result_2026.qualifier_positions()

        rows = []
        for r in sorted(graded, key=lambda r: (r.place, r.position)):
            rows.append(
                AthleteResult(
                    place=r.place,
                    name=r.name,
                    age_group=r.category,
                    country=r.record.country,
                    raw_time_seconds=r.raw_time_seconds,
                    age_standard=r.multiplier,
                    age_graded_time_seconds=int(round(r.graded_time_seconds)),
                    qualified_2025=r.position in qualified_2025,
                    qualified_2026=r.position in qualified_2026,
                )
            )
        return rows


def _system_totals(result: SystemResult) -> SystemTotals:
    men = result.count(gender=MEN)
    women = result.count(gender=WOMEN)
    return SystemTotals(
        men_qualified=men,
        women_qualified=women,
        total_qualified=len(result.qualifiers),
    )


def analyze_race(
    records: Sequence[FinisherRecord],
    legacy_slots: Optional[SlotAllocation],
    merit_slots: Optional[SlotAllocation],
    race_name: Optional[str] = None,
    table: Optional[StandardTable] = None,
) -> Optional[AnalysisReport]:
    """Convenience wrapper: one-off analysis with a fresh analyzer."""
    return QualifyingAnalyzer(table).analyze(records, legacy_slots, merit_slots, race_name)
