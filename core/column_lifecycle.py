# core/column_lifecycle.py

"""
The single entry point for changing the regular-score column structure of a `Gradebook`.

Every student's `regular_scores` map is keyed by column index, so adding, removing, or editing a
column must keep three things aligned: the column list, each column's `index`, and the keys of every
student's score map. The functions here mutate the gradebook in place and return it; callers should
treat the return value as the source of truth.

After every structural change `require_contiguous_columns()` checks that:
- `columns[i].index == i` for every column, and
- every student's score keys fall within `0..column_count-1`.
A violation is a programming error and raises `AssertionError`.
"""

from __future__ import annotations

import datetime
import logging

from models.gradebook import Gradebook
from models.score_column import ScoreCategory, ScoreColumn

logger = logging.getLogger(__name__)

# sentinel for "leave this field unchanged" in update_column()
_UNCHANGED = object()


def add_column(gradebook: Gradebook) -> Gradebook:
    """
    Appends an empty column at the next index.

    No student scores are touched, so the new column starts ungraded for everyone.
    """
    index = gradebook.column_count
    gradebook.columns.append(ScoreColumn(index))
    gradebook.mark_dirty()

    logger.debug("Added regular-score column %d", index)

    require_contiguous_columns(gradebook)
    return gradebook


def remove_column(gradebook: Gradebook, index: int) -> Gradebook:
    """
    Deletes the column at `index` and re-packs every index above it.

    Args:
        gradebook (Gradebook): The gradebook being edited.
        index (int): The index of the column to delete.

    Returns:
        The same `Gradebook`, now with one fewer column.

    Raises:
        IndexError: If `index` does not name an existing column.

    Notes:
        - A score stored at index `k > index` moves to `k - 1`; scores below `index` keep their key.
        - The deleted column's scores are discarded for every student.
    """
    if not 0 <= index < gradebook.column_count:
        raise IndexError(
            f"Column index {index} is out of range for {gradebook.column_count} columns."
        )

    del gradebook.columns[index]

    for position, column in enumerate(gradebook.columns):
        column.index = position

    for student in gradebook.students:
        student.replace_regular_scores(
            _repack_scores(student.regular_scores, index)
        )

    gradebook.mark_dirty()

    logger.info(
        "Removed regular-score column %d, %d columns remain",
        index,
        gradebook.column_count,
    )

    require_contiguous_columns(gradebook)
    return gradebook


def update_column(
    gradebook: Gradebook,
    index: int,
    category: ScoreCategory | str | None | object = _UNCHANGED,
    label: str | object = _UNCHANGED,
    exam_date: datetime.date | None | object = _UNCHANGED,
) -> Gradebook:
    """
    Edits the metadata of one column. Fields that are not passed keep their current value.

    Raises:
        IndexError: If `index` does not name an existing column.
        ValueError: If `category` is not a known `ScoreCategory`.
    """
    if not 0 <= index < gradebook.column_count:
        raise IndexError(
            f"Column index {index} is out of range for {gradebook.column_count} columns."
        )

    column = gradebook.columns[index]

    if category is not _UNCHANGED:
        column.category = category
    if label is not _UNCHANGED:
        column.label = label
    if exam_date is not _UNCHANGED:
        column.exam_date = exam_date

    gradebook.mark_dirty()

    return gradebook


def column_display_name(columns: list[ScoreColumn], index: int) -> str:
    """
    Builds the header shown for a column.

    Categorized columns are numbered within their category ("Quiz 1", "Quiz 2", "Homework 1", ...).
    Uncategorized columns use their label, or "Score <n>" when the label is blank.
    """
    column = columns[index]

    if column.category is not None:
        ordinal = sum(1 for c in columns[: index + 1] if c.category is column.category)
        return f"{column.category.value} {ordinal}"

    return column.label.strip() or f"Score {index + 1}"


def require_contiguous_columns(gradebook: Gradebook) -> None:
    for position, column in enumerate(gradebook.columns):
        assert column.index == position, (
            f"Column at position {position} carries index {column.index}."
        )

    for student in gradebook.students:
        for key in student.regular_scores:
            assert 0 <= key < gradebook.column_count, (
                f"Student {student.student_id} has a score for missing column {key}."
            )


# === helper methods ===


def _repack_scores(
    scores: dict[int, float | None], removed_index: int
) -> dict[int, float | None]:
    repacked = {}

    for key, score in scores.items():
        if key < removed_index:
            repacked[key] = score
        elif key > removed_index:
            repacked[key - 1] = score

    return repacked
