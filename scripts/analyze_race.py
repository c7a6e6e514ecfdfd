#!/usr/bin/env python3
"""CLI script for comparing 2025 and 2026 slot allocation on a results file.

Usage:
    # Summary table
    python scripts/analyze_race.py \
        --file content/results/im_florida_2024.json \
        --men-slots 52 --women-slots 23 --total-slots-2026 75

    # Full JSON report
    python scripts/analyze_race.py \
        --file content/results/im_florida_2024.json \
        --men-slots 52 --women-slots 23 --json

    # Trends over several races (slots from a YAML file)
    python scripts/analyze_race.py --races content/races.yaml --trends
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kona_slots.config import settings
from kona_slots.features.qualifying import (
    AnalysisReport,
    QualifyingAnalyzer,
    SlotAllocation,
    TrendsReport,
    aggregate_trends,
    load_finishers,
    load_race_catalog,
    load_standard_table,
)
from kona_slots.shared.formatters import format_delta, format_time


logger = logging.getLogger("analyze_race")


def print_report(report: AnalysisReport, descriptions: dict[str, str] | None = None) -> None:
    """Print the race-level comparison and per-category table."""
    print(f"\n=== {report.race_name or 'Race'} ===")
    for system, description in (descriptions or {}).items():
        print(f"{system}: {description}")
    print(
        f"Participants: {report.total_participants} "
        f"(M {report.men_participants} / F {report.women_participants})"
    )
    if report.excluded_count:
        print(f"Excluded:     {report.excluded_count} (no standard or no time)")
    print(f"Slots:        2025={report.total_slots}  2026={report.total_slots_2026}")

    print(f"\n{'':10s} {'Men':>6s} {'Women':>6s} {'Total':>6s}")
    for label, totals in (("2025", report.system_2025), ("2026", report.system_2026)):
        print(
            f"{label:10s} {totals.men_qualified:6d} "
            f"{totals.women_qualified:6d} {totals.total_qualified:6d}"
        )
    print(
        f"{'Change':10s} {format_delta(report.changes.men_difference):>6s} "
        f"{format_delta(report.changes.women_difference):>6s} "
        f"{format_delta(report.changes.total_difference):>6s}"
    )

    print(f"\n{'Category':8s} {'N':>5s} {'2025':>5s} {'2026':>5s} {'Diff':>5s} "
          f"{'Cutoff 2025':>12s} {'Cutoff 2026':>12s}")
    for category, row in report.age_group_analysis.items():
        print(
            f"{category:8s} {row.participants:5d} {row.system_2025.total:5d} "
            f"{row.system_2026.total:5d} {format_delta(row.difference.total):>5s} "
            f"{format_time(row.system_2025.cutoff_time_seconds):>12s} "
            f"{format_time(row.system_2026.cutoff_time_seconds):>12s}"
        )


def print_trends(trends: TrendsReport) -> None:
    """Print the multi-race summary."""
    print(f"\n=== Trends over {trends.total_races} races ===")
    print(
        f"Participants: {trends.total_participants} "
        f"(M {trends.men_percentage}% / F {trends.women_percentage}%)"
    )
    for label, totals in (("2025", trends.system_2025), ("2026", trends.system_2026)):
        print(
            f"Qualifiers {label}: {totals.total_qualified} "
            f"(M {totals.men_percentage}% / F {totals.women_percentage}%)"
        )
    print(
        f"Change: men {format_delta(trends.changes.men_difference)}, "
        f"women {format_delta(trends.changes.women_difference)}"
    )
    for category, trend in trends.age_group_trends.items():
        print(
            f"  {category:8s} {trend.participant_count:6d} "
            f"{trend.slots_2025:5d} → {trend.slots_2026:5d} "
            f"({format_delta(trend.difference)}, {trend.percentage_change:+d}%)"
        )
    for label, movers in (("Top gainers", trends.top_gainers), ("Top losers", trends.top_losers)):
        if movers:
            print(f"{label}: " + ", ".join(
                f"{t.category} {format_delta(t.difference)}" for t in movers
            ))


def analyze_catalog(analyzer: QualifyingAnalyzer, catalog_path: Path) -> list[AnalysisReport]:
    """Analyze every race listed in a YAML catalog.

    Races without a slot configuration or a results file are skipped.
    """
    reports = []
    for race in load_race_catalog(catalog_path):
        if not race.results_path.exists():
            logger.warning("Results file not found for %s: %s", race.name, race.results_path)
            continue

        report = analyzer.analyze(
            load_finishers(race.results_path),
            legacy_slots=race.legacy_slots,
            merit_slots=race.merit_slots,
            race_name=race.name,
        )
        if report is not None:
            reports.append(report)
    return reports


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare 2025 and 2026 slot allocation")
    parser.add_argument("--file", help="Results JSON file for one race")
    parser.add_argument("--races", help="YAML catalog of races (for --trends)")
    parser.add_argument("--name", help="Race name for the report")
    parser.add_argument("--men-slots", type=int, help="2025 men's slots")
    parser.add_argument("--women-slots", type=int, help="2025 women's slots")
    parser.add_argument(
        "--total-slots-2026",
        type=int,
        help="2026 total slots (default: men + women)",
    )
    parser.add_argument("--standards", help="YAML standard table (default: Kona 2026)")
    parser.add_argument("--trends", action="store_true", help="Aggregate over --races")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    table = load_standard_table(args.standards) if args.standards else None
    analyzer = QualifyingAnalyzer(table)

    if args.races:
        reports = analyze_catalog(analyzer, Path(args.races))
        if args.trends:
            trends = aggregate_trends(reports)
            if trends is None:
                print("No analysis available")
                sys.exit(1)
            if args.json:
                print(trends.model_dump_json(indent=2))
            else:
                print_trends(trends)
            return
        for report in reports:
            if args.json:
                print(report.model_dump_json(indent=2))
            else:
                print_report(report, analyzer.describe_systems())
        return

    if not args.file:
        parser.error("Either --file or --races is required")
    if args.men_slots is None or args.women_slots is None:
        parser.error("--men-slots and --women-slots are required with --file")

    path = Path(args.file)
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    total = args.men_slots + args.women_slots
    report = analyzer.analyze(
        load_finishers(path),
        legacy_slots=SlotAllocation(
            total_slots=total,
            men_slots=args.men_slots,
            women_slots=args.women_slots,
        ),
        merit_slots=SlotAllocation(
            total_slots=args.total_slots_2026 if args.total_slots_2026 is not None else total
        ),
        race_name=args.name or path.stem,
    )
    if report is None:
        print("No analysis available")
        sys.exit(1)

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print_report(report, analyzer.describe_systems())


if __name__ == "__main__":
    main()
