# tests/test_column_lifecycle.py

import datetime

import pytest

from core.column_lifecycle import (
    add_column,
    column_display_name,
    remove_column,
    require_contiguous_columns,
    update_column,
)
from models.gradebook import Gradebook
from models.score_column import ScoreCategory, ScoreColumn
from models.student_grade_row import StudentGradeRow


def test_remove_middle_column():
    columns = [
        ScoreColumn(0, label="A"),
        ScoreColumn(1, label="B"),
        ScoreColumn(2, label="C"),
    ]
    student = StudentGradeRow("s001", "Lin", regular_scores={0: 80, 1: 90, 2: 100})
    gradebook = Gradebook(columns=columns, students=[student])

    remove_column(gradebook, 1)

    assert [c.label for c in gradebook.columns] == ["A", "C"]
    assert [c.index for c in gradebook.columns] == [0, 1]
    assert student.regular_scores == {0: 80, 1: 100}
    assert gradebook.has_unsaved_changes


@pytest.mark.parametrize("removed", range(5))
def test_remove_column_reindexes_every_student(removed):
    before = {j: float(10 * j) for j in range(5)}
    students = [
        StudentGradeRow("s001", "Lin", regular_scores=before),
        StudentGradeRow("s002", "Chen", regular_scores={j: before[j] for j in (0, 4)}),
    ]
    gradebook = Gradebook(columns=[ScoreColumn(i) for i in range(5)], students=students)
    expected = [
        {(j if j < removed else j - 1): s for j, s in row.regular_scores.items() if j != removed}
        for row in students
    ]

    remove_column(gradebook, removed)

    assert [row.regular_scores for row in students] == expected
    assert all(column.index == i for i, column in enumerate(gradebook.columns))


def test_remove_column_out_of_range(sample_gradebook):
    with pytest.raises(IndexError):
        remove_column(sample_gradebook, sample_gradebook.column_count)

    with pytest.raises(IndexError):
        remove_column(sample_gradebook, -1)


def test_add_column(sample_gradebook):
    add_column(sample_gradebook)

    column = sample_gradebook.columns[-1]

    assert sample_gradebook.column_count == 5
    assert column.index == 4
    assert not column.has_metadata
    assert sample_gradebook.column_scores(4) == []
    assert sample_gradebook.has_unsaved_changes


def test_update_column_only_changes_given_fields(sample_gradebook):
    update_column(sample_gradebook, 1, label="Retake")

    column = sample_gradebook.columns[1]
    assert column.category is ScoreCategory.QUIZ
    assert column.label == "Retake"

    update_column(sample_gradebook, 1, category="Homework", exam_date=datetime.date(2025, 10, 1))

    assert column.category is ScoreCategory.HOMEWORK
    assert column.exam_date == datetime.date(2025, 10, 1)
    assert column.label == "Retake"


def test_update_column_rejects_unknown_category(sample_gradebook):
    with pytest.raises(ValueError):
        update_column(sample_gradebook, 0, category="Lab")


def test_column_display_name(sample_columns):
    sample_columns.append(ScoreColumn(4, label="Mock exam"))
    sample_columns.append(ScoreColumn(5))

    assert column_display_name(sample_columns, 0) == "Quiz 1"
    assert column_display_name(sample_columns, 1) == "Quiz 2"
    assert column_display_name(sample_columns, 2) == "Homework 1"
    assert column_display_name(sample_columns, 4) == "Mock exam"
    assert column_display_name(sample_columns, 5) == "Score 6"


def test_require_contiguous_columns_detects_gaps(sample_gradebook):
    require_contiguous_columns(sample_gradebook)

    sample_gradebook.columns[2].index = 7

    with pytest.raises(AssertionError):
        require_contiguous_columns(sample_gradebook)


def test_require_contiguous_columns_detects_stray_scores(sample_gradebook):
    sample_gradebook.students[0].set_regular_score(9, 50)

    with pytest.raises(AssertionError):
        require_contiguous_columns(sample_gradebook)
