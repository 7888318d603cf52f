# core/formatters.py

# all pure text helpers for scores, statistics, and dates
# must never import from models!

import datetime
from typing import Any, Iterable

BAND_LABELS: dict[str, str] = {
    "top": "Top (頂標)",
    "upper_mid": "Upper-mid (前標)",
    "mid": "Mid (均標)",
    "lower_mid": "Lower-mid (後標)",
    "bottom": "Bottom (底標)",
}

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_list_with_and(items: list[Any]) -> str:
    if not items:
        return ""

    if len(items) == 1:
        return str(items[0])

    if len(items) == 2:
        return " and ".join(str(item) for item in items)

    return ", ".join(str(item) for item in items[:-1]) + ", and " + str(items[-1])


# === score formatters ===


def format_score(score: float | None) -> str:
    if score is None:
        return "--"

    return f"{score:g}" if float(score).is_integer() else f"{score:.2f}"


def format_percent(percent: float) -> str:
    return f"{percent:g}%"


def format_statistics_lines(statistics: dict[str, float | None]) -> list[str]:
    lines = [f"{'Mean':<18} {format_score(statistics.get('mean')):>6}"]

    for band, label in BAND_LABELS.items():
        lines.append(f"{label:<18} {format_score(statistics.get(band)):>6}")

    return lines


def format_distribution_lines(buckets: Iterable[tuple[str, int]]) -> list[str]:
    return [f"{label:>7} | {'#' * count} {count}" for label, count in buckets]


def format_rank(rank: int | None, total: int) -> str:
    return f"{rank} / {total}" if rank is not None else f"-- / {total}"


# === date formatters ===


def format_exam_date(exam_date: datetime.date | None) -> str:
    return exam_date.strftime("%Y-%m-%d") if exam_date else "[NO DATE]"


def parse_exam_date(exam_date_str: str) -> datetime.date:
    """
    Parses a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date.
    """
    try:
        return datetime.datetime.strptime(exam_date_str.strip(), "%Y-%m-%d").date()

    except ValueError:
        raise ValueError("Invalid input. The date must be formatted as YYYY-MM-DD.")
