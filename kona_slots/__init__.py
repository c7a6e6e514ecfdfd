"""
Kona Slots

Compares the 2025 (gendered proportional) and 2026 (age-graded merit)
qualifying slot allocation systems over a race's finisher list.
"""

__version__ = "0.1.0"
