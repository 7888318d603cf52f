# tests/conftest.py

import datetime

import pytest

from core.gradebook_store import JsonGradebookStore
from models.gradebook import Gradebook
from models.score_column import ScoreCategory, ScoreColumn
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import TotalScoreSetting


@pytest.fixture
def sample_columns():
    return [
        ScoreColumn(0, ScoreCategory.QUIZ, "Unit 1", datetime.date(2025, 9, 12)),
        ScoreColumn(1, ScoreCategory.QUIZ, "Unit 2"),
        ScoreColumn(2, ScoreCategory.HOMEWORK, "Worksheet"),
        ScoreColumn(3, ScoreCategory.ATTITUDE),
    ]


@pytest.fixture
def sample_student():
    return StudentGradeRow(
        student_id="s001",
        name="Lin Yu-Ting",
        regular_scores={0: 80, 1: 90, 2: 70, 3: 100},
        periodic_scores={
            PeriodicName.FIRST: 70,
            PeriodicName.SECOND: 80,
            PeriodicName.FINAL: 75,
        },
        manual_adjust=2,
    )


@pytest.fixture
def sparse_student():
    return StudentGradeRow(
        student_id="s002",
        name="Chen Wei",
        regular_scores={0: 60, 2: None},
        periodic_scores={PeriodicName.FIRST: 88},
    )


@pytest.fixture
def sample_gradebook(sample_columns, sample_student, sparse_student):
    return Gradebook(
        columns=sample_columns,
        students=[sample_student, sparse_student],
        total_setting=TotalScoreSetting.default(),
    )


@pytest.fixture
def ranked_gradebook():
    scores = {"s1": 88, "s2": 92, "s3": 92, "s4": 75, "s5": 60, "s6": None}
    students = [
        StudentGradeRow(student_id, f"Student {student_id}", periodic_scores={PeriodicName.FIRST: score})
        for student_id, score in scores.items()
    ]

    return Gradebook.default(students=students)


@pytest.fixture
def sample_store(tmp_path):
    return JsonGradebookStore(str(tmp_path / "gradebooks"))
