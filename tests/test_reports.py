# tests/test_reports.py

from core.reports import (
    column_report,
    periodic_report,
    setting_warnings,
    student_periodic_ranks,
    sync_roster,
    total_score_rows,
)
from core.response import ErrorCode
from models.gradebook import Gradebook
from models.score_column import ScoreCategory
from models.statistics import RankResult
from models.student_grade_row import PeriodicName
from models.total_score_setting import CalcMethod, TotalScoreSetting

# --- statistics reports ---


def test_column_report_uses_graded_scores_only(sample_gradebook):
    report_response = column_report(sample_gradebook, 2)

    assert report_response.success
    statistics = report_response.data["statistics"]
    # s001 has 70, s002 is ungraded
    assert statistics.mean == 70
    assert statistics.top == 70
    assert sum(b.count for b in report_response.data["distribution"]) == 1


def test_column_report_unknown_column(sample_gradebook):
    report_response = column_report(sample_gradebook, 10)

    assert not report_response.success
    assert report_response.error is ErrorCode.NOT_FOUND
    assert report_response.status_code == 404


def test_periodic_report(ranked_gradebook):
    report_response = periodic_report(ranked_gradebook, PeriodicName.FIRST)

    assert report_response.success
    assert report_response.data["statistics"].mean == 81.4


def test_periodic_report_not_recorded(ranked_gradebook):
    ranked_gradebook.set_periodic_scores([PeriodicName.FIRST])

    report_response = periodic_report(ranked_gradebook, PeriodicName.FINAL)

    assert not report_response.success
    assert report_response.error is ErrorCode.NOT_FOUND
    assert "Final" in report_response.detail


# --- ranks ---


def test_student_periodic_ranks(ranked_gradebook):
    ranks = student_periodic_ranks(ranked_gradebook, "s2").data["ranks"]
    assert ranks[PeriodicName.FIRST] == RankResult(1, 5)
    assert ranks[PeriodicName.SECOND] is None

    ranks = student_periodic_ranks(ranked_gradebook, "s1").data["ranks"]
    assert ranks[PeriodicName.FIRST] == RankResult(3, 5)


def test_ungraded_student_is_unranked(ranked_gradebook):
    ranks_response = student_periodic_ranks(ranked_gradebook, "s6")

    assert ranks_response.data["ranks"][PeriodicName.FIRST] is None
    assert ranks_response.data["totals"][PeriodicName.FIRST] == 5


def test_ranks_for_unknown_student(ranked_gradebook):
    ranks_response = student_periodic_ranks(ranked_gradebook, "nobody")

    assert not ranks_response.success
    assert ranks_response.error is ErrorCode.NOT_FOUND


# --- total score rows ---


def test_total_score_rows(sample_gradebook):
    rows = total_score_rows(sample_gradebook)

    assert rows[0] == {
        "studentId": "s001",
        "name": "Lin Yu-Ting",
        "regularScore": 34,
        "midScore": 75,
        "finalScore": 75,
        "manualAdjust": 2,
        "totalScore": 66,
        "remark": "",
    }
    # quiz average 60 at 20%; First 88 with Second and Final ungraded
    assert rows[1]["regularScore"] == 12
    assert rows[1]["finalScore"] == 0
    assert rows[1]["totalScore"] == 24


# --- setting warnings ---


def test_default_setting_warns_about_total_weight():
    warnings = setting_warnings(TotalScoreSetting.default())

    assert len(warnings) == 1
    assert "80%" in warnings[0]


def test_balanced_setting_has_no_warnings(sample_columns):
    setting = TotalScoreSetting.default()
    setting.periodic_percent = 60

    assert setting_warnings(setting, sample_columns) == []


def test_setting_warnings_flag_every_problem(sample_columns):
    setting = TotalScoreSetting.default()
    setting.category(ScoreCategory.QUIZ).percent = 100
    setting.category(ScoreCategory.QUIZ).calc_method = CalcMethod.BEST_N
    setting.category(ScoreCategory.HOMEWORK).calc_method = CalcMethod.BEST_N
    setting.category(ScoreCategory.HOMEWORK).n = 3
    for name in PeriodicName:
        setting.set_periodic_enabled(name, False)

    warnings = setting_warnings(setting, sample_columns)

    assert len(warnings) == 5
    assert any("more than 100%" in w for w in warnings)
    assert any("none are enabled" in w for w in warnings)
    assert any("Quiz uses best-N" in w for w in warnings)
    assert any("only has 1 columns" in w for w in warnings)


# --- roster sync ---


def test_sync_roster(sample_gradebook):
    sample_gradebook.total_setting.manual_adjust_default = 1
    roster = [
        {"studentId": "s003", "name": "Wang Hsin"},
        {"studentId": "s001", "name": "Lin Yu-Ting (renamed)"},
    ]

    sync_roster(sample_gradebook, roster)

    assert [s.student_id for s in sample_gradebook.students] == ["s003", "s001"]
    new_row, kept_row = sample_gradebook.students
    assert new_row.manual_adjust == 1
    assert new_row.regular_scores == {}
    assert kept_row.name == "Lin Yu-Ting (renamed)"
    assert kept_row.regular_score(0) == 80
    assert sample_gradebook.has_unsaved_changes


def test_sync_roster_unchanged_stays_clean(sample_gradebook):
    roster = [
        {"studentId": "s001", "name": "Lin Yu-Ting"},
        {"studentId": "s002", "name": "Chen Wei"},
    ]

    sync_roster(sample_gradebook, roster)

    assert not sample_gradebook.has_unsaved_changes


def test_sync_roster_rename_marks_dirty(sample_gradebook):
    roster = [
        {"studentId": "s001", "name": "Lin Yu-Ting"},
        {"studentId": "s002", "name": "Chen Wei-Jie"},
    ]

    sync_roster(sample_gradebook, roster)

    assert sample_gradebook.students[1].name == "Chen Wei-Jie"
    assert sample_gradebook.has_unsaved_changes


def test_sync_roster_into_empty_gradebook():
    gradebook = Gradebook.default()

    sync_roster(gradebook, [{"studentId": 7, "name": "Lee Ann"}])

    assert gradebook.students[0].student_id == "7"


def test_sync_roster_keeps_first_of_duplicate_entries(sample_gradebook):
    roster = [
        {"studentId": "s001", "name": "Lin Yu-Ting"},
        {"studentId": "s001", "name": "Lin Duplicate"},
        {"studentId": "s003", "name": "Wang Hsin"},
        {"studentId": "s003", "name": "Wang Again"},
    ]

    sync_roster(sample_gradebook, roster)

    assert [s.student_id for s in sample_gradebook.students] == ["s001", "s003"]
    assert sample_gradebook.students[0].name == "Lin Yu-Ting"
    assert sample_gradebook.students[1].name == "Wang Hsin"
    assert sample_gradebook.students[0].regular_score(0) == 80
