# tests/test_formatters.py

import datetime

import pytest

import core.formatters as formatters


def test_format_list_with_and():
    assert formatters.format_list_with_and([]) == ""
    assert formatters.format_list_with_and(["First"]) == "First"
    assert formatters.format_list_with_and(["First", "Final"]) == "First and Final"
    assert (
        formatters.format_list_with_and(["First", "Second", "Final"])
        == "First, Second, and Final"
    )


def test_format_score():
    assert formatters.format_score(None) == "--"
    assert formatters.format_score(85.0) == "85"
    assert formatters.format_score(63.456) == "63.46"


def test_format_rank():
    assert formatters.format_rank(3, 5) == "3 / 5"
    assert formatters.format_rank(None, 5) == "-- / 5"


def test_statistics_lines_cover_mean_and_bands():
    lines = formatters.format_statistics_lines(
        {"mean": 63.0, "top": 100, "upper_mid": 90, "mid": 80, "lower_mid": 50, "bottom": 30}
    )

    assert len(lines) == 6
    assert lines[0].startswith("Mean")
    assert lines[1].endswith("100")


def test_parse_exam_date():
    assert formatters.parse_exam_date(" 2025-09-12 ") == datetime.date(2025, 9, 12)
    assert formatters.format_exam_date(datetime.date(2025, 9, 12)) == "2025-09-12"
    assert formatters.format_exam_date(None) == "[NO DATE]"

    with pytest.raises(ValueError):
        formatters.parse_exam_date("12/09/2025")
