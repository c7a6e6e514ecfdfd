"""Data models for qualification analysis (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FinisherRecord:
    """Single finisher result as supplied by a results source."""

    place: int  # 1-based overall finish rank
    name: str  # "Jane Doe" (not unique)
    category: str  # "F40-44" or bare "40-44" when gender is separate
    gender: str | None = None  # "M" / "F"
    raw_time_seconds: int | None = None  # 0 / None = unparsed
    country: str | None = None  # "USA"


@dataclass(frozen=True)
class GradedRecord:
    """A finisher that survived exclusion, with its age-graded time."""

    record: FinisherRecord
    category: str  # normalized, always gender-prefixed
    gender: str  # derived from category
    multiplier: float
    graded_time_seconds: float
    position: int  # index in the input list, used for tie-breaks

    @property
    def place(self) -> int:
        return self.record.place

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def raw_time_seconds(self) -> int:
        return self.record.raw_time_seconds or 0


@dataclass(frozen=True)
class SlotAllocation:
    """Slot configuration for one system at one race.

    The 2025 system uses the gendered pools; the 2026 system only
    reads total_slots.
    """

    total_slots: int
    men_slots: int | None = None
    women_slots: int | None = None

    def __post_init__(self):
        for label, value in (
            ("total_slots", self.total_slots),
            ("men_slots", self.men_slots),
            ("women_slots", self.women_slots),
        ):
            if value is not None and value < 0:
                raise ValueError(f"{label} must be >= 0, got {value}")

    @property
    def is_gendered(self) -> bool:
        return self.men_slots is not None and self.women_slots is not None


@dataclass(frozen=True)
class CatalogRace:
    """One race entry from a YAML race catalog.

    Slot configurations stay None when the catalog does not give them;
    the analyzer then reports no analysis for that race.
    """

    name: str
    results_path: Path
    legacy_slots: SlotAllocation | None = None
    merit_slots: SlotAllocation | None = None


@dataclass
class ExcludedRecord:
    """A finisher dropped before allocation, with the reason."""

    record: FinisherRecord
    reason: str  # "unparsed_time" / "unknown_gender" / "no_standard"


@dataclass
class NormalizedField:
    """Output of the time normalizer for one race."""

    graded: list[GradedRecord] = field(default_factory=list)
    excluded: list[ExcludedRecord] = field(default_factory=list)


@dataclass
class SystemResult:
    """Qualifiers selected by one allocation system."""

    system: str  # "system_2025" / "system_2026"
    qualifiers: list[GradedRecord] = field(default_factory=list)
    winners: dict[str, GradedRecord] = field(default_factory=dict)  # category → winner
    cutoff_times: dict[str, float] = field(default_factory=dict)  # category → seconds
    unused_slots: int = 0  # slots allocated but with no eligible finisher left
    performance_pool_slots: int | None = None  # 2026 only

    def qualifier_positions(self) -> set[int]:
        return {q.position for q in self.qualifiers}

    def count(self, gender: str | None = None, category: str | None = None) -> int:
        return sum(
            1
            for q in self.qualifiers
            if (gender is None or q.gender == gender)
            and (category is None or q.category == category)
        )
