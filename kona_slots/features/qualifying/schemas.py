"""
Qualification analysis schemas.

Pydantic schemas for the analysis report. The report is plain data:
callers store it or serialize it with model_dump_json() as is.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union


class SystemTotals(BaseModel):
    """Qualifier counts for one system."""
    model_config = ConfigDict(frozen=True)

    men_qualified: int
    women_qualified: int
    total_qualified: int


class CategorySystemBreakdown(BaseModel):
    """One category under one system."""
    model_config = ConfigDict(frozen=True)

    men: int
    women: int
    total: int
    cutoff_time_seconds: Optional[Union[int, float]] = Field(
        default=None,
        description="Slowest qualifying time, null if nobody qualified"
    )


class CountDifference(BaseModel):
    """2026 minus 2025."""
    model_config = ConfigDict(frozen=True)

    men: int
    women: int
    total: int


class CategoryComparison(BaseModel):
    """Both systems side by side for one category."""
    model_config = ConfigDict(frozen=True)

    participants: int
    system_2025: CategorySystemBreakdown
    system_2026: CategorySystemBreakdown
    difference: CountDifference


class SystemChanges(BaseModel):
    """Race-level qualifier changes, 2026 minus 2025."""
    model_config = ConfigDict(frozen=True)

    men_difference: int
    women_difference: int
    total_difference: int


class AthleteResult(BaseModel):
    """Per-athlete row of the detailed results."""
    model_config = ConfigDict(frozen=True)

    place: int
    name: str
    age_group: str
    country: Optional[str] = None
    raw_time_seconds: int
    age_standard: float
    age_graded_time_seconds: int
    qualified_2025: bool
    qualified_2026: bool


class AnalysisReport(BaseModel):
    """Complete comparison of both systems for one race."""
    model_config = ConfigDict(frozen=True)

    race_name: Optional[str] = None
    total_participants: int
    men_participants: int
    women_participants: int
    excluded_count: int = 0
    total_slots: int = Field(..., description="2025 total slot count")
    total_slots_2026: int
    system_2025: SystemTotals
    system_2026: SystemTotals
    changes: SystemChanges
    age_group_analysis: Dict[str, CategoryComparison] = Field(default_factory=dict)
    detailed_results: List[AthleteResult] = Field(default_factory=list)


class TrendSystemTotals(SystemTotals):
    """Qualifier counts for one system summed over races, with gender shares."""
    model_config = ConfigDict(frozen=True)

    men_percentage: int = 0
    women_percentage: int = 0


class CategoryTrend(BaseModel):
    """One category aggregated over many races."""

    category: str
    participant_count: int = 0
    men_participants: int = 0
    women_participants: int = 0
    slots_2025: int = 0
    slots_2026: int = 0
    men_slots_2025: int = 0
    women_slots_2025: int = 0
    men_slots_2026: int = 0
    women_slots_2026: int = 0
    difference: int = 0
    percentage_change: int = Field(
        default=0,
        description="Slot change relative to 2025 in percent, 0 without 2025 slots"
    )
    avg_cutoff_2025: Optional[float] = None
    avg_cutoff_2026: Optional[float] = None


class TrendsReport(BaseModel):
    """Aggregate of many race reports."""

    total_races: int
    total_participants: int
    total_men_participants: int
    total_women_participants: int
    total_slots: int
    men_percentage: int
    women_percentage: int
    system_2025: TrendSystemTotals
    system_2026: TrendSystemTotals
    changes: SystemChanges
    age_group_trends: Dict[str, CategoryTrend] = Field(
        default_factory=dict,
        description="Categories ordered by slot difference, biggest gain first"
    )
    top_gainers: List[CategoryTrend] = Field(default_factory=list)
    top_losers: List[CategoryTrend] = Field(
        default_factory=list,
        description="Biggest loss first"
    )
