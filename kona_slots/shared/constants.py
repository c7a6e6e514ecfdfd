"""
Unified constants for genders, categories and qualification standards.

This module provides a single source of truth for category naming
and the age-grading multipliers used by the 2026 system.
"""

from enum import Enum


class Gender(str, Enum):
    """
    Gender codes as they appear as the first character of a category.

    Used in:
    - Category parsing (M30-34 -> MALE)
    - Legacy gendered slot pools
    - Report breakdowns
    """
    MALE = "M"
    FEMALE = "F"


ACCEPTED_GENDER_CODES: frozenset[str] = frozenset(g.value for g in Gender)


# Kona Standard multipliers for age-graded times (2026 system).
# 1.0 marks the reference category (M30-34).
# F80-84 and F85-89 are TBD (no finishers in past 5 editions), so
# those categories cannot be graded and are excluded from analysis.
KONA_STANDARDS_2026: dict[str, float] = {
    "M18-24": 0.9698, "F18-24": 0.8567,
    "M25-29": 0.9921, "F25-29": 0.8961,
    "M30-34": 1.0000, "F30-34": 0.8977,
    "M35-39": 0.9895, "F35-39": 0.8866,
    "M40-44": 0.9683, "F40-44": 0.8707,
    "M45-49": 0.9401, "F45-49": 0.8501,
    "M50-54": 0.9002, "F50-54": 0.8125,
    "M55-59": 0.8667, "F55-59": 0.7778,
    "M60-64": 0.8262, "F60-64": 0.7218,
    "M65-69": 0.7552, "F65-69": 0.6828,
    "M70-74": 0.6876, "F70-74": 0.6439,
    "M75-79": 0.6768, "F75-79": 0.5521,
    "M80-84": 0.5555,
    "M85-89": 0.5416,
}


# System labels used as report keys
SYSTEM_2025 = "system_2025"
SYSTEM_2026 = "system_2026"
