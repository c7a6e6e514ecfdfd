"""Trends across races: aggregate many AnalysisReports."""

from __future__ import annotations

import logging
from typing import Iterable

from kona_slots.shared.constants import Gender

from .schemas import (
    AnalysisReport,
    CategoryTrend,
    SystemChanges,
    TrendSystemTotals,
    TrendsReport,
)
from .standards import gender_of

logger = logging.getLogger(__name__)

TOP_CHANGES = 5


def _percentage(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole else 0


def _system_totals(men: int, women: int) -> TrendSystemTotals:
    total = men + women
    return TrendSystemTotals(
        men_qualified=men,
        women_qualified=women,
        total_qualified=total,
        men_percentage=_percentage(men, total),
        women_percentage=_percentage(women, total),
    )


def rank_category_changes(
    trends: Iterable[CategoryTrend],
    limit: int = TOP_CHANGES,
) -> tuple[list[CategoryTrend], list[CategoryTrend], list[CategoryTrend]]:
    """Order categories by slot difference and pick the biggest movers.

    Returns (all by difference descending, top gainers, top losers).
    Equal differences keep their incoming order. Losers are listed
    biggest loss first.
    """
    ordered = sorted(trends, key=lambda t: -t.difference)
    gainers = [t for t in ordered if t.difference > 0][:limit]
    losers = [t for t in ordered if t.difference < 0][-limit:][::-1]
    return ordered, gainers, losers


def aggregate_trends(reports: Iterable[AnalysisReport | None]) -> TrendsReport | None:
    """Sum participants, slots and qualifiers over races.

    Reports without participants or slots are skipped. Returns None when
    no usable report is left.

    Average cutoffs per category only count races where that category
    had a cutoff.
    """
    valid = [r for r in reports if r is not None and r.total_participants > 0 and r.total_slots > 0]
    if not valid:
        logger.info("No valid race analyses for trends")
        return None

    men_2025 = sum(r.system_2025.men_qualified for r in valid)
    women_2025 = sum(r.system_2025.women_qualified for r in valid)
    men_2026 = sum(r.system_2026.men_qualified for r in valid)
    women_2026 = sum(r.system_2026.women_qualified for r in valid)

    trends: dict[str, CategoryTrend] = {}
    cutoff_sums: dict[str, list[float]] = {}  # category → [sum25, n25, sum26, n26]

    for report in valid:
        for category, data in report.age_group_analysis.items():
            trend = trends.setdefault(category, CategoryTrend(category=category))
            trend.participant_count += data.participants
            gender = gender_of(category)
            if gender == Gender.MALE.value:
                trend.men_participants += data.participants
            elif gender == Gender.FEMALE.value:
                trend.women_participants += data.participants
            trend.slots_2025 += data.system_2025.total
            trend.slots_2026 += data.system_2026.total
            trend.men_slots_2025 += data.system_2025.men
            trend.women_slots_2025 += data.system_2025.women
            trend.men_slots_2026 += data.system_2026.men
            trend.women_slots_2026 += data.system_2026.women
            trend.difference += data.difference.total

            sums = cutoff_sums.setdefault(category, [0.0, 0, 0.0, 0])
            if data.system_2025.cutoff_time_seconds is not None:
                sums[0] += data.system_2025.cutoff_time_seconds
                sums[1] += 1
            if data.system_2026.cutoff_time_seconds is not None:
                sums[2] += data.system_2026.cutoff_time_seconds
                sums[3] += 1

    for category, (sum_25, n_25, sum_26, n_26) in cutoff_sums.items():
        trend = trends[category]
        trend.avg_cutoff_2025 = round(sum_25 / n_25) if n_25 else None
        trend.avg_cutoff_2026 = round(sum_26 / n_26) if n_26 else None
        if trend.slots_2025:
            trend.percentage_change = _percentage(trend.difference, trend.slots_2025)

    ordered, gainers, losers = rank_category_changes(trends.values())

    total_participants = sum(r.total_participants for r in valid)
    total_men = sum(r.men_participants for r in valid)
    total_women = sum(r.women_participants for r in valid)

    logger.info(
        "Trends over %d races: %d categories gained slots, %d lost",
        len(valid), sum(t.difference > 0 for t in ordered), sum(t.difference < 0 for t in ordered),
    )

    return TrendsReport(
        total_races=len(valid),
        total_participants=total_participants,
        total_men_participants=total_men,
        total_women_participants=total_women,
        total_slots=sum(r.total_slots for r in valid),
        men_percentage=_percentage(total_men, total_participants),
        women_percentage=_percentage(total_women, total_participants),
        system_2025=_system_totals(men_2025, women_2025),
        system_2026=_system_totals(men_2026, women_2026),
        changes=SystemChanges(
            men_difference=men_2026 - men_2025,
            women_difference=women_2026 - women_2025,
            total_difference=(men_2026 + women_2026) - (men_2025 + women_2025),
        ),
        age_group_trends={t.category: t for t in ordered},
        top_gainers=gainers,
        top_losers=losers,
    )
