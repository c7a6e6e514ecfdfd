"""
Time parsing and formatting utilities.

Used by the result loader, the analyzer and the CLI script.
"""

from __future__ import annotations


def parse_time_to_seconds(time_str: str | None) -> int | None:
    """Parse a race-clock time to seconds.

    Formats:
        "8:45:12"  → 31512
        "52:05"    → 3125
        "553"      → 553

    Returns None for empty or unparsable strings (DNF markers, "--:--" etc.).
    """
    if not time_str:
        return None

    parts = time_str.strip().split(":")
    try:
        values = [int(p) for p in parts]
    except ValueError:
        return None

    if any(v < 0 for v in values):
        return None

    if len(values) == 3:
        hours, minutes, seconds = values
        return hours * 3600 + minutes * 60 + seconds
    if len(values) == 2:
        minutes, seconds = values
        return minutes * 60 + seconds
    if len(values) == 1:
        return values[0]
    return None


def format_time(seconds: int | float | None) -> str:
    """Format seconds as race-clock time.

    553    → "9:13"
    3125   → "52:05"
    31512  → "8:45:12"
    None   → "—"
    """
    if seconds is None:
        return "—"

    total = int(round(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_delta(value: int) -> str:
    """Format a signed count difference ('+3', '-1', '0')."""
    if value > 0:
        return f"+{value}"
    return str(value)
