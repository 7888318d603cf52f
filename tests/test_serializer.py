# tests/test_serializer.py

import datetime
import json
import math

import pytest

from core.serializer import from_storage, sanitize_for_storage, to_storage
from models.gradebook import Gradebook
from models.score_column import ScoreCategory
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import CalcMethod


def test_round_trip(sample_gradebook):
    document = json.loads(json.dumps(to_storage(sample_gradebook)))

    restored = from_storage(document)

    assert restored == sample_gradebook
    assert not restored.has_unsaved_changes


def test_round_trip_keeps_absent_distinct_from_zero():
    student = StudentGradeRow(
        "s001",
        "Lin",
        regular_scores={0: 0, 1: None},
        periodic_scores={PeriodicName.FIRST: 0, PeriodicName.SECOND: None},
    )
    gradebook = Gradebook.default(students=[student], column_count=3)

    restored = from_storage(json.loads(json.dumps(to_storage(gradebook))))
    row = restored.students[0]

    assert row.regular_score(0) == 0
    assert row.regular_score(1) is None
    assert 1 in row.regular_scores
    assert 2 not in row.regular_scores
    assert row.periodic_score(PeriodicName.FIRST) == 0
    assert row.periodic_score(PeriodicName.SECOND) is None
    assert restored == gradebook


def test_to_storage_shape(sample_gradebook):
    document = to_storage(sample_gradebook)

    assert document["columns"][0] == {
        "index": 0,
        "category": "Quiz",
        "label": "Unit 1",
        "examDate": "2025-09-12",
    }
    assert document["columns"][1]["examDate"] is None
    assert document["students"][1]["regularScores"] == {"0": 60.0, "2": None}
    assert document["students"][1]["periodicScores"] == {"First": 88.0}
    assert document["periodicScores"] == ["First", "Second", "Final"]
    assert document["totalSetting"]["regularPercent"] == 40
    assert document["totalSetting"]["categories"]["Quiz"] == {
        "percent": 20.0,
        "calcMethod": "all",
        "n": None,
    }


def test_sanitize_for_storage_nested():
    value = {
        1: [math.nan, None, 3.5, {"when": datetime.date(2025, 1, 2)}],
        PeriodicName.FINAL: CalcMethod.BEST_N,
        "flag": True,
    }

    assert sanitize_for_storage(value) == {
        "1": [None, None, 3.5, {"when": "2025-01-02"}],
        "Final": "best",
        "flag": True,
    }


def test_sanitize_for_storage_rejects_unknown_types():
    with pytest.raises(TypeError):
        sanitize_for_storage({"value": object()})


def test_missing_sections_use_defaults():
    gradebook = from_storage({"students": [{"studentId": "s001", "name": "Lin"}]})

    assert gradebook.column_count == 0
    assert gradebook.periodic_scores == list(PeriodicName)
    assert gradebook.total_setting.regular_percent == 40
    assert gradebook.total_setting.periodic_percent == 40


def test_stored_regular_percent_is_recomputed():
    gradebook = from_storage(
        {
            "totalSetting": {
                "regularPercent": 99,
                "periodicPercent": 40,
                "categories": {
                    "Quiz": {"percent": 30, "calcMethod": "best", "n": 2},
                    "Homework": {"percent": 20, "calcMethod": "all", "n": None},
                    "Attitude": {"percent": 10, "calcMethod": "all", "n": None},
                },
            },
        }
    )

    setting = gradebook.total_setting
    assert setting.regular_percent == 60
    assert setting.category(ScoreCategory.QUIZ).uses_best_n
    assert setting.category(ScoreCategory.QUIZ).n == 2


def test_legacy_column_map():
    gradebook = from_storage(
        {
            "columns": {
                "0": {"type": "小考成績", "name": "Ch. 1", "date": "2024-03-01"},
                "2": {"type": "上課態度", "name": ""},
            },
            "students": [
                {"studentId": "s001", "name": "Lin", "regularScores": {"0": 90, "3": 70}},
            ],
        }
    )

    assert gradebook.column_count == 4
    assert gradebook.columns[0].category is ScoreCategory.QUIZ
    assert gradebook.columns[0].label == "Ch. 1"
    assert gradebook.columns[0].exam_date == datetime.date(2024, 3, 1)
    assert gradebook.columns[1].category is None
    assert gradebook.columns[2].category is ScoreCategory.ATTITUDE
    assert gradebook.students[0].regular_score(3) == 70


@pytest.mark.parametrize(
    "document",
    [
        [],
        "gradebook",
        {"students": {"s001": {}}},
        {"columns": "none"},
        {"columns": [{"index": 1}]},
        {"columns": [{"index": 0, "category": "Lab"}]},
        {"students": [{"studentId": "s001", "regularScores": {"0": 50}}]},
        {"periodicScores": ["Midterm"]},
        {"periodicScores": "First"},
        {"totalSetting": "broken"},
        {"totalSetting": {"categories": ["Quiz"]}},
        {"totalSetting": {"categories": {"Quiz": 20}}},
        {"students": ["s001"]},
        {"students": [{"studentId": "s001", "regularScores": [80, 90]}]},
        {"students": [{"studentId": "s001", "periodicScores": "First"}]},
        {"columns": ["Quiz"]},
        {"columns": {"0": "Quiz"}},
    ],
)
def test_malformed_documents_raise_value_error(document):
    with pytest.raises(ValueError):
        from_storage(document)


def test_missing_student_id_raises_key_error():
    with pytest.raises(KeyError):
        from_storage({"students": [{"name": "Lin"}]})
