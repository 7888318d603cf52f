# tests/test_total_score.py

from core.total_score import (
    compute_breakdown,
    compute_category_averages,
    compute_periodic_average,
    compute_regular,
    compute_total,
    midterm_average,
    round_half_up,
)
from models.score_column import ScoreCategory
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import CalcMethod, TotalScoreSetting


def test_total_score(sample_student, sample_columns):
    setting = TotalScoreSetting.default()

    averages = compute_category_averages(sample_student, sample_columns, setting)

    assert averages == {
        ScoreCategory.QUIZ: 85,
        ScoreCategory.HOMEWORK: 70,
        ScoreCategory.ATTITUDE: 100,
    }
    assert compute_regular(sample_student, sample_columns, setting) == 34
    assert compute_periodic_average(sample_student, setting) == 75
    assert compute_total(sample_student, sample_columns, setting) == 66


def test_breakdown_matches_parts(sample_student, sample_columns):
    breakdown = compute_breakdown(
        sample_student, sample_columns, TotalScoreSetting.default()
    )

    assert breakdown.regular == 34
    assert breakdown.periodic_average == 75
    assert breakdown.manual_adjust == 2
    assert breakdown.total == 66


def test_absent_enabled_periodic_counts_as_zero(sample_columns):
    student = StudentGradeRow(
        "s003",
        "Wang Hsin",
        periodic_scores={PeriodicName.FIRST: 90, PeriodicName.SECOND: 60},
    )

    assert compute_periodic_average(student, TotalScoreSetting.default()) == 50


def test_disabled_periodic_exams_are_left_out(sample_student):
    setting = TotalScoreSetting.default()
    setting.set_periodic_enabled(PeriodicName.FINAL, False)

    assert compute_periodic_average(sample_student, setting) == 75

    for name in PeriodicName:
        setting.set_periodic_enabled(name, False)

    assert compute_periodic_average(sample_student, setting) == 0


def test_ungraded_category_contributes_zero(sample_columns):
    student = StudentGradeRow("s004", "Huang Mei", regular_scores={0: 100})

    # quiz average 100 at 20%; homework and attitude are ungraded
    assert compute_regular(student, sample_columns, TotalScoreSetting.default()) == 20


def test_uncategorized_columns_are_ignored(sample_columns):
    sample_columns[3].category = None
    student = StudentGradeRow("s005", "Lee Ann", regular_scores={3: 100})

    assert compute_regular(student, sample_columns, TotalScoreSetting.default()) == 0


def test_best_n_in_total(sample_student, sample_columns):
    setting = TotalScoreSetting.default()
    quiz = setting.category(ScoreCategory.QUIZ)
    quiz.calc_method = CalcMethod.BEST_N
    quiz.n = 1

    # quiz average 90 instead of 85, worth 20%
    assert compute_regular(sample_student, sample_columns, setting) == 35


def test_weights_are_used_as_configured(sample_student, sample_columns):
    setting = TotalScoreSetting.default()
    setting.periodic_percent = 100

    # 34 + 75 + 2, even though the weights add up to 140%
    assert compute_total(sample_student, sample_columns, setting) == 111


def test_round_half_up():
    assert round_half_up(65.5) == 66
    assert round_half_up(66.5) == 67
    assert round_half_up(65.49) == 65
    assert round_half_up(-0.5) == 0


def test_midterm_average(sample_student, sparse_student):
    assert midterm_average(sample_student) == 75
    assert midterm_average(sparse_student) == 44
