"""
Qualification slot allocators.

Every consumer (analyzer, trends, scripts) goes through these two
implementations; nothing else re-derives the allocation rules.

Components:
- LegacyAllocator: 2025 gendered proportional system
- MeritAllocator: 2026 age-graded performance pool
- hamilton_apportion: largest-remainder seat split
"""

from .base import (
    QualificationAllocator,
    group_by_category,
    select_category_winners,
    raw_time_key,
    graded_time_key,
)
from .legacy import LegacyAllocator, hamilton_apportion
from .merit import MeritAllocator

__all__ = [
    # Base
    "QualificationAllocator",
    "group_by_category",
    "select_category_winners",
    "raw_time_key",
    "graded_time_key",
    # Systems
    "LegacyAllocator",
    "MeritAllocator",
    "hamilton_apportion",
]
