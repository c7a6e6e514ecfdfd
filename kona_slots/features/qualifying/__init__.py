"""
Qualification slot analysis module.

Usage:
    from kona_slots.features.qualifying import QualifyingAnalyzer, SlotAllocation
    from kona_slots.features.qualifying.allocators import LegacyAllocator, MeritAllocator

Components:
- TimeNormalizer / StandardTable: age grading and exclusions
- LegacyAllocator: 2025 gendered proportional system
- MeritAllocator: 2026 age-graded performance pool
- QualifyingAnalyzer: side-by-side comparison report
- aggregate_trends: multi-race summary
"""

from .models import CatalogRace, FinisherRecord, GradedRecord, SlotAllocation, SystemResult
from .schemas import AnalysisReport, CategoryComparison, TrendsReport
from .standards import StandardTable, TimeNormalizer, gender_of, normalize_category
from .allocators import LegacyAllocator, MeritAllocator, hamilton_apportion
from .cutoffs import legacy_cutoffs, merit_cutoffs
from .service import QualifyingAnalyzer, analyze_race
from .trends import aggregate_trends
from .loader import (
    default_standard_table,
    load_finishers,
    load_race_catalog,
    load_standard_table,
)

__all__ = [
    # Models
    "CatalogRace",
    "FinisherRecord",
    "GradedRecord",
    "SlotAllocation",
    "SystemResult",
    # Schemas
    "AnalysisReport",
    "CategoryComparison",
    "TrendsReport",
    # Standards
    "StandardTable",
    "TimeNormalizer",
    "gender_of",
    "normalize_category",
    # Allocators
    "LegacyAllocator",
    "MeritAllocator",
    "hamilton_apportion",
    "legacy_cutoffs",
    "merit_cutoffs",
    # Service
    "QualifyingAnalyzer",
    "analyze_race",
    "aggregate_trends",
    # Loading
    "load_finishers",
    "load_race_catalog",
    "load_standard_table",
    "default_standard_table",
]
