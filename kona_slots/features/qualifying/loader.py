"""Loaders for finisher results (JSON) and standard tables (YAML)."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

import yaml

from kona_slots.config import settings
from kona_slots.shared.formatters import parse_time_to_seconds

from .models import CatalogRace, FinisherRecord, SlotAllocation
from .standards import StandardTable

logger = logging.getLogger(__name__)


def load_standard_table(path: str | Path) -> StandardTable:
    """Load a standard table from YAML.

    Expected shape:
        name: kona_2026
        standards:
          M30-34: 1.0
          F30-34: 0.8977
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    standards = data.get("standards")
    if not isinstance(standards, dict) or not standards:
        raise ValueError(f"No 'standards' mapping in {path}")

    try:
        multipliers = {str(k): float(v) for k, v in standards.items()}
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid multiplier in {path}: {e}") from e

    return StandardTable(multipliers, name=data.get("name", path.stem))


@lru_cache(maxsize=1)
def default_standard_table() -> StandardTable:
    """Process-wide table: settings.standards_file if set, else Kona 2026.

    Loaded once; StandardTable is immutable so sharing it is safe.
    """
    if settings.standards_file:
        logger.info("Loading standard table from %s", settings.standards_file)
        return load_standard_table(settings.standards_file)
    return StandardTable.kona_2026()


def load_finishers(path: str | Path) -> list[FinisherRecord]:
    """Load finisher records from a results JSON file.

    Accepts either a list of results or {"results": [...]}. Each row uses
    the result-provider shape:
        {"place": "12", "name": "...", "age_group": "M30-34",
         "gender": "M", "time": "9:01:33", "country": "USA"}
    `category` may replace `age_group` and `time_s` may replace `time`.
    Rows without a usable place or name, or with non-text name,
    category or gender values, are skipped.
    """
    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8"))

    rows = raw.get("results") if isinstance(raw, dict) else raw
    if not isinstance(rows, list):
        raise ValueError(f"No results list in {path}")

    records = []
    for row in rows:
        record = finisher_from_dict(row)
        if record is None:
            logger.debug("Skipping malformed row in %s: %r", path.name, row)
            continue
        records.append(record)

    logger.info("Loaded %d finishers from %s", len(records), path)
    return records


def _text_field(row: dict, *keys: str) -> str | None:
    """First non-empty value among keys; None if it is not a string."""
    for key in keys:
        value = row.get(key)
        if value is None or value == "":
            continue
        return value.strip() if isinstance(value, str) else None
    return ""


def finisher_from_dict(row: dict) -> FinisherRecord | None:
    """Build a FinisherRecord from one result row, None if unusable."""
    if not isinstance(row, dict):
        return None

    try:
        place = int(row.get("place"))
    except (TypeError, ValueError):
        return None
    name = _text_field(row, "name")
    category = _text_field(row, "age_group", "category")
    gender = _text_field(row, "gender")
    if place <= 0 or not name or category is None or gender is None:
        return None

    if row.get("time_s") is not None:
        try:
            raw_time = int(row["time_s"])
        except (TypeError, ValueError):
            raw_time = None
    else:
        time_text = row.get("time")
        raw_time = parse_time_to_seconds(time_text) if isinstance(time_text, str) else None

    country = row.get("country")
    return FinisherRecord(
        place=place,
        name=name,
        category=category,
        gender=gender or None,
        raw_time_seconds=raw_time,
        country=country if isinstance(country, str) and country else None,
    )


def _slot_count(race: dict, key: str) -> int | None:
    value = race.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def load_race_catalog(path: str | Path) -> list[CatalogRace]:
    """Load a YAML race catalog.

    Expected shape:
        races:
          - name: IRONMAN Florida
            results_file: results/im_florida.json
            men_slots: 52
            women_slots: 23
            total_slots_2026: 75

    results_file is resolved against the catalog's directory. Without both
    men_slots and women_slots the race has no 2025 configuration.
    total_slots defaults to men + women, and total_slots_2026 to total_slots.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    races = data.get("races") if isinstance(data, dict) else None
    if not isinstance(races, list):
        raise ValueError(f"No 'races' list in {path}")

    catalog = []
    for race in races:
        if not isinstance(race, dict) or not race.get("name") or not race.get("results_file"):
            logger.debug("Skipping catalog entry without name or results_file: %r", race)
            continue

        name = str(race["name"])
        men = _slot_count(race, "men_slots")
        women = _slot_count(race, "women_slots")
        total = _slot_count(race, "total_slots")

        legacy = None
        if men is not None and women is not None:
            total = total if total is not None else men + women
            legacy = SlotAllocation(total_slots=total, men_slots=men, women_slots=women)
        else:
            logger.info("No 2025 slot configuration for %s", name)

        total_2026 = _slot_count(race, "total_slots_2026")
        if total_2026 is None:
            total_2026 = total
        merit = SlotAllocation(total_slots=total_2026) if total_2026 is not None else None

        catalog.append(CatalogRace(
            name=name,
            results_path=path.parent / race["results_file"],
            legacy_slots=legacy,
            merit_slots=merit,
        ))

    logger.info("Loaded %d races from %s", len(catalog), path)
    return catalog
