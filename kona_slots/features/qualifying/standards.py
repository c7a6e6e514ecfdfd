"""
Age-grading standards and time normalization.

The StandardTable maps a category ("M30-34") to a multiplier in (0, 1].
TimeNormalizer applies it to each finisher and drops everything that
cannot be graded:
- unparsed time (0 / None)
- category without a recognised gender prefix
- category missing from the table
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

from kona_slots.shared.constants import ACCEPTED_GENDER_CODES, KONA_STANDARDS_2026

from .models import ExcludedRecord, FinisherRecord, GradedRecord, NormalizedField

logger = logging.getLogger(__name__)


def gender_of(category: str | None) -> str | None:
    """Gender code from a category's first character, None if not accepted."""
    if not category:
        return None
    code = category[0].upper()
    return code if code in ACCEPTED_GENDER_CODES else None


def normalize_category(category: str | None, gender: str | None = None) -> str | None:
    """Build the gender-prefixed category key.

    "M30-34", any gender  → "M30-34"
    "30-34",  gender "F"  → "F30-34"
    "30-34",  no gender   → None
    """
    if not category:
        return None
    category = category.strip()
    if gender_of(category):
        return category[0].upper() + category[1:]
    if gender and gender.strip().upper() in ACCEPTED_GENDER_CODES:
        return f"{gender.strip().upper()}{category}"
    return None


class StandardTable(Mapping):
    """Immutable category → multiplier table.

    Several tables can coexist (e.g. future rule revisions); nothing
    reads a global one.
    """

    def __init__(self, multipliers: Mapping[str, float], name: str = "custom"):
        for category, value in multipliers.items():
            if not 0 < value <= 1:
                raise ValueError(
                    f"Multiplier for {category} must be in (0, 1], got {value}"
                )
        self.name = name
        self._multipliers = MappingProxyType(dict(multipliers))
        self._order = {c: i for i, c in enumerate(self._multipliers)}

    @classmethod
    def kona_2026(cls) -> "StandardTable":
        """The official 2026 Kona Standard table."""
        return cls(KONA_STANDARDS_2026, name="kona_2026")

    def __getitem__(self, category: str) -> float:
        return self._multipliers[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._multipliers)

    def __len__(self) -> int:
        return len(self._multipliers)

    def __repr__(self) -> str:
        return f"StandardTable(name={self.name!r}, categories={len(self)})"

    def multiplier(self, category: str) -> float | None:
        return self._multipliers.get(category)

    def sort_key(self, category: str) -> tuple[int, str]:
        """Order categories as listed in the table, unknown ones last."""
        return (self._order.get(category, len(self._order)), category)


class TimeNormalizer:
    """Converts finisher records into graded records using one StandardTable."""

    def __init__(self, table: StandardTable):
        self.table = table

    def grade(
        self,
        raw_time_seconds: int | None,
        category: str | None,
        gender: str | None = None,
    ) -> float | None:
        """Graded time, or None when the record has to be excluded."""
        category, reason = self._check(raw_time_seconds, category, gender)
        if reason:
            return None
        return raw_time_seconds * self.table[category]

    def normalize(self, records: Sequence[FinisherRecord]) -> NormalizedField:
        """Grade every record, keeping input order.

        Excluded records are returned separately and never reach the
        allocators or the participant counts.
        """
        result = NormalizedField()

        for position, record in enumerate(records):
            category, reason = self._check(
                record.raw_time_seconds, record.category, record.gender
            )
            if reason:
                logger.debug(
                    "Excluding #%s %s (%s): %s",
                    record.place, record.name, record.category, reason,
                )
                result.excluded.append(ExcludedRecord(record=record, reason=reason))
                continue

            multiplier = self.table[category]
            result.graded.append(
                GradedRecord(
                    record=record,
                    category=category,
                    gender=gender_of(category),
                    multiplier=multiplier,
                    graded_time_seconds=record.raw_time_seconds * multiplier,
                    position=position,
                )
            )

        if result.excluded:
            logger.debug(
                "Normalized %d records, excluded %d",
                len(result.graded), len(result.excluded),
            )
        return result

    def _check(
        self,
        raw_time_seconds: int | None,
        category: str | None,
        gender: str | None,
    ) -> tuple[str | None, str | None]:
        """(normalized category, exclusion reason); reason is None if gradable."""
        if not raw_time_seconds or raw_time_seconds < 0:
            return None, "unparsed_time"
        category = normalize_category(category, gender)
        if category is None:
            return None, "unknown_gender"
        if self.table.multiplier(category) is None:
            return category, "no_standard"
        return category, None
