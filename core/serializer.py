# core/serializer.py

"""
The single boundary between an in-memory `Gradebook` and the stored gradebook document.

`to_storage()` turns a gradebook into plain JSON-compatible data. Every "absent" value anywhere in
the document (ungraded scores, unset settings such as N, missing exam dates) is written as an
explicit null, because the store rejects undefined values but accepts null. The walk is recursive,
so nested maps and lists are normalized the same way as top-level fields.

`from_storage()` is the inverse. A null score becomes an absent score (None), never 0.

No other module should know about the storage shape; callers go through these two functions.
"""

from __future__ import annotations

import datetime
import math
from enum import Enum
from typing import Any

from models.gradebook import Gradebook
from models.score_column import ScoreColumn
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import TotalScoreSetting


def to_storage(gradebook: Gradebook) -> dict[str, Any]:
    return sanitize_for_storage(gradebook.to_dict())


def from_storage(document: Any) -> Gradebook:
    """
    Rebuilds a `Gradebook` from a stored document.

    Args:
        document (Any): The decoded JSON document, as produced by `to_storage()`.

    Returns:
        Gradebook: The reconstructed gradebook, marked as having no unsaved changes.

    Raises:
        ValueError: If the document is not a mapping, a section has the wrong shape, or a field
            holds a value the models reject.
        KeyError: If a student row is missing its `studentId`.

    Notes:
        - Missing `totalSetting` or `periodicScores` sections fall back to the defaults.
        - `columns` may be a list (current shape) or a map of index to column details (older documents).
    """
    if not isinstance(document, dict):
        raise ValueError("Expected the gradebook document to be a mapping.")

    students_raw = document.get("students") or []
    if not isinstance(students_raw, list):
        raise ValueError("Expected 'students' to contain a list.")

    for row in students_raw:
        _require_mapping(row, "each student row")
        _require_mapping(row.get("regularScores"), "'regularScores'", optional=True)
        _require_mapping(row.get("periodicScores"), "'periodicScores'", optional=True)

    total_setting_raw = document.get("totalSetting")
    _require_mapping(total_setting_raw, "'totalSetting'", optional=True)
    if total_setting_raw:
        for section in ("categories", "periodicEnabled"):
            _require_mapping(total_setting_raw.get(section), f"'{section}'", optional=True)

    periodic_raw = document.get("periodicScores")
    if periodic_raw is not None and not isinstance(periodic_raw, list):
        raise ValueError("Expected 'periodicScores' to contain a list.")

    try:
        students = [StudentGradeRow.from_dict(row) for row in students_raw]

        total_setting = (
            TotalScoreSetting.from_dict(total_setting_raw)
            if total_setting_raw
            else TotalScoreSetting.default()
        )

        periodic_scores = (
            [PeriodicName(name) for name in periodic_raw]
            if periodic_raw is not None
            else None
        )

    except (AttributeError, TypeError) as e:
        raise ValueError(f"Invalid gradebook document: {e}")

    highest_key = max(
        (key for student in students for key in student.regular_scores), default=-1
    )
    columns = _columns_from_storage(document.get("columns"), highest_key + 1)

    for student in students:
        stray = [key for key in student.regular_scores if not 0 <= key < len(columns)]
        if stray:
            raise ValueError(
                f"Student {student.student_id} has scores for unknown columns: {stray}"
            )

    return Gradebook(
        columns=columns,
        students=students,
        total_setting=total_setting,
        periodic_scores=periodic_scores,
    )


def sanitize_for_storage(value: Any) -> Any:
    """
    Recursively converts a value into JSON-compatible data with explicit nulls.

    - None and NaN become None (JSON null).
    - Enums become their values; dates and datetimes become ISO strings.
    - Mapping keys become strings (so integer column indices survive a JSON round trip).
    - Lists and tuples are walked element by element.

    Raises:
        TypeError: If a value has no storage representation.
    """
    if value is None:
        return None

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, bool):
        return value

    if isinstance(value, float):
        return None if math.isnan(value) else value

    if isinstance(value, (int, str)):
        return value

    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()

    if isinstance(value, dict):
        return {_storage_key(k): sanitize_for_storage(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [sanitize_for_storage(item) for item in value]

    raise TypeError(f"Object of type {type(value).__name__} cannot be stored.")


# === helper methods ===


def _storage_key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)

    return str(key)


def _require_mapping(value: Any, name: str, optional: bool = False) -> None:
    if value is None and optional:
        return

    if not isinstance(value, dict):
        raise ValueError(f"Expected {name} to be a mapping, got {type(value).__name__}.")


LEGACY_CATEGORY_NAMES: dict[str, str] = {
    "小考成績": "Quiz",
    "作業成績": "Homework",
    "上課態度": "Attitude",
}


def _legacy_column_details(detail: dict) -> dict:
    if "category" in detail or "label" in detail:
        return detail

    return {
        "category": LEGACY_CATEGORY_NAMES.get(detail.get("type") or "", detail.get("type")),
        "label": detail.get("name") or "",
        "examDate": detail.get("date") or None,
    }


def _columns_from_storage(columns_raw: Any, scored_count: int) -> list[ScoreColumn]:
    if columns_raw is None:
        return []

    if isinstance(columns_raw, dict):
        # older documents keep column details in a map keyed by index, with gaps for empty columns
        for detail in columns_raw.values():
            _require_mapping(detail, "each legacy column entry", optional=True)

        details = {
            int(index): _legacy_column_details(detail or {})
            for index, detail in columns_raw.items()
        }
        count = max(max(details, default=-1) + 1, scored_count)
        columns_raw = [
            {**details.get(index, {}), "index": index} for index in range(count)
        ]

    if not isinstance(columns_raw, list):
        raise ValueError("Expected 'columns' to contain a list.")

    columns = []

    for position, column_raw in enumerate(columns_raw):
        _require_mapping(column_raw, "each column entry")

        try:
            column = ScoreColumn.from_dict(column_raw)
        except (AttributeError, KeyError, TypeError) as e:
            raise ValueError(f"Failed to deserialize column {column_raw}: {e}")

        if column.index != position:
            raise ValueError(
                f"Column at position {position} carries index {column.index}."
            )

        columns.append(column)

    return columns
