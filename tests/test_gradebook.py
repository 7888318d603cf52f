# tests/test_gradebook.py

from core.response import ErrorCode
from models.gradebook import DEFAULT_REGULAR_COLUMNS, Gradebook
from models.student_grade_row import PeriodicName, StudentGradeRow


def test_default_gradebook():
    gradebook = Gradebook.default()

    assert gradebook.column_count == DEFAULT_REGULAR_COLUMNS
    assert [c.index for c in gradebook.columns] == list(range(DEFAULT_REGULAR_COLUMNS))
    assert not any(c.has_metadata for c in gradebook.columns)
    assert gradebook.periodic_scores == [
        PeriodicName.FIRST,
        PeriodicName.SECOND,
        PeriodicName.FINAL,
    ]
    assert gradebook.students == []
    assert not gradebook.has_unsaved_changes


def test_mark_dirty(sample_gradebook):
    assert not sample_gradebook.has_unsaved_changes

    sample_gradebook.mark_dirty()
    assert sample_gradebook.has_unsaved_changes

    sample_gradebook.mark_saved()
    assert not sample_gradebook.has_unsaved_changes


def test_add_student(sample_gradebook):
    student = StudentGradeRow("s003", "Wang Hsin")

    gradebook_response = sample_gradebook.add_student(student)

    assert gradebook_response.success
    assert gradebook_response.data["record"] is student
    assert sample_gradebook.students[-1] is student
    assert sample_gradebook.has_unsaved_changes


def test_add_duplicate_student(sample_gradebook):
    gradebook_response = sample_gradebook.add_student(StudentGradeRow("s001", "Someone Else"))

    assert not gradebook_response.success
    assert gradebook_response.error is ErrorCode.VALIDATION_FAILED
    assert len(sample_gradebook.students) == 2
    assert not sample_gradebook.has_unsaved_changes


def test_add_and_remove_student(sample_gradebook):
    sample_gradebook.add_student(StudentGradeRow("s003", "Wang Hsin"))

    gradebook_response = sample_gradebook.remove_student("s003")

    assert gradebook_response.success
    assert [s.student_id for s in sample_gradebook.students] == ["s001", "s002"]


def test_find_and_remove_unknown_student(sample_gradebook):
    find_response = sample_gradebook.find_student("s999")
    remove_response = sample_gradebook.remove_student("s999")

    assert not find_response.success
    assert find_response.status_code == 404
    assert remove_response.error is ErrorCode.NOT_FOUND


def test_column_and_periodic_scores_skip_ungraded(sample_gradebook):
    assert sample_gradebook.column_scores(0) == [80, 60]
    assert sample_gradebook.column_scores(2) == [70]
    assert sample_gradebook.periodic_exam_scores(PeriodicName.FIRST) == [70, 88]
    assert sample_gradebook.periodic_exam_scores(PeriodicName.FINAL) == [75]


def test_reorder_students(sample_gradebook):
    sample_gradebook.reorder_students(["s002"])

    assert [s.student_id for s in sample_gradebook.students] == ["s002", "s001"]
    assert sample_gradebook.has_unsaved_changes


def test_reorder_students_in_same_order_stays_clean(sample_gradebook):
    sample_gradebook.reorder_students(["s001", "s002"])

    assert not sample_gradebook.has_unsaved_changes


def test_set_periodic_scores(sample_gradebook):
    sample_gradebook.set_periodic_scores(["Final", PeriodicName.FIRST, "Final"])

    assert sample_gradebook.periodic_scores == [PeriodicName.FIRST, PeriodicName.FINAL]
    assert sample_gradebook.has_unsaved_changes
    # scores for the exam left out stay on the row
    assert sample_gradebook.students[0].periodic_score(PeriodicName.SECOND) == 80


def test_column_scores_ignore_cleared_scores(sample_gradebook):
    sample_gradebook.students[0].set_regular_score(0, "")

    assert sample_gradebook.column_scores(0) == [60]
    assert 0 not in sample_gradebook.students[0].regular_scores
