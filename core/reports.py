# core/reports.py

"""
Report builders used by the reporting views and the CLI.

These functions gather the right population of scores from a `Gradebook` and hand them to the
engines in `core.percentile`, `core.rank`, and `core.total_score`:
- Percentile and rank reports only include students with a graded score for the exam in question.
- Total-score rows count an ungraded, enabled periodic exam as 0, as `core.total_score` does.

Lookups that can miss (an unknown column or student) report through a `Response`.
"""

from __future__ import annotations

import logging
from typing import Any

from core.percentile import compute_distribution, compute_statistics
from core.rank import rank
from core.response import ErrorCode, Response
from core.total_score import compute_breakdown, midterm_average
from models.gradebook import Gradebook
from models.score_column import ScoreCategory, ScoreColumn
from models.statistics import RankResult
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import TotalScoreSetting

logger = logging.getLogger(__name__)


# === statistics reports ===


def column_report(gradebook: Gradebook, index: int) -> Response:
    """
    Builds the five-tier statistics and distribution for one regular-score column.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): False if `index` does not name a column.
            - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` for an unknown column.
            - status_code (int | None): 200 on success, 404 if not found.
            - data (dict | None): Payload with the following keys:
                - "statistics" (PercentileStatistics): Five-tier statistics over graded scores.
                - "distribution" (list[DistributionBucket]): The six-bucket histogram.
    """
    if not 0 <= index < gradebook.column_count:
        return Response.fail(
            detail=f"No column at index {index}.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    return _statistics_response(gradebook.column_scores(index))


def periodic_report(gradebook: Gradebook, name: PeriodicName) -> Response:
    """
    Builds the five-tier statistics and distribution for one periodic exam.

    Follows the same contract as `column_report()`; fails with `ErrorCode.NOT_FOUND` if the exam
    is not among the gradebook's `periodic_scores`.
    """
    if name not in gradebook.periodic_scores:
        return Response.fail(
            detail=f"The periodic exam '{PeriodicName(name).value}' is not recorded in this gradebook.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    return _statistics_response(gradebook.periodic_exam_scores(name))


def student_periodic_ranks(gradebook: Gradebook, student_id: str) -> Response:
    """
    Ranks one student on every periodic exam recorded in the gradebook.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): False if the student is not in the gradebook.
            - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` for an unknown student.
            - data (dict | None): Payload with the following keys:
                - "ranks" (dict[PeriodicName, RankResult | None]): The rank for each exam in
                  `gradebook.periodic_scores` order; None where the student is ungraded.
                - "totals" (dict[PeriodicName, int]): The number of graded students per exam,
                  present even when the student is unranked.
    """
    find_response = gradebook.find_student(student_id)

    if not find_response.success:
        return find_response

    student: StudentGradeRow = find_response.data["record"]
    ranks: dict[PeriodicName, RankResult | None] = {}
    totals: dict[PeriodicName, int] = {}

    for name in gradebook.periodic_scores:
        population = gradebook.periodic_exam_scores(name)
        ranks[name] = rank(population, student.periodic_score(name))
        totals[name] = len(population)

    return Response.succeed(data={"ranks": ranks, "totals": totals})


# === total score reports ===


def total_score_rows(gradebook: Gradebook) -> list[dict[str, Any]]:
    """
    Builds one summary row per student for the total-score sheet.

    Each row holds the student id and name, the weighted regular score, the rounded average of the
    first and second periodic exams, the final exam score (0 if ungraded), the manual adjustment,
    the total score, and the remark.
    """
    rows = []

    for student in gradebook.students:
        breakdown = compute_breakdown(
            student, gradebook.columns, gradebook.total_setting
        )
        rows.append(
            {
                "studentId": student.student_id,
                "name": student.name,
                "regularScore": breakdown.regular,
                "midScore": midterm_average(student),
                "finalScore": student.periodic_score(PeriodicName.FINAL) or 0,
                "manualAdjust": student.manual_adjust,
                "totalScore": breakdown.total,
                "remark": student.remark,
            }
        )

    return rows


def setting_warnings(
    setting: TotalScoreSetting,
    columns: list[ScoreColumn] | None = None,
) -> list[str]:
    """
    Lists the problems an instructor should see in the grading configuration.

    Nothing here blocks calculation; the engine computes with the settings as given.

    Args:
        setting (TotalScoreSetting): The configuration being edited.
        columns (list[ScoreColumn] | None): If provided, best-N counts are also checked against
            the number of columns in each category.

    Returns:
        A list of human-readable warnings, empty if the configuration is consistent.
    """
    warnings = []
    regular = setting.regular_percent
    combined = regular + setting.periodic_percent

    if regular > 100:
        warnings.append(
            f"Regular score categories add up to {regular:g}%, more than 100%."
        )

    if combined != 100:
        warnings.append(
            f"Regular ({regular:g}%) and periodic ({setting.periodic_percent:g}%) weights add up to {combined:g}%, not 100%."
        )

    if setting.periodic_percent > 0 and not setting.enabled_periodic_names:
        warnings.append(
            "Periodic exams carry weight but none are enabled; the periodic average will be 0."
        )

    for category, category_setting in setting.categories.items():
        if not category_setting.uses_best_n:
            continue

        if category_setting.n is None or category_setting.n <= 0:
            warnings.append(
                f"{category.value} uses best-N but N is not set; every score will be averaged."
            )

        elif columns is not None:
            available = category_column_counts(columns)[category]
            if category_setting.n > available:
                warnings.append(
                    f"{category.value} averages the best {category_setting.n} scores but only has {available} columns."
                )

    return warnings


# === roster sync ===


def sync_roster(gradebook: Gradebook, roster: list[dict[str, Any]]) -> Gradebook:
    """
    Aligns the gradebook's student rows with the course roster.

    Args:
        gradebook (Gradebook): The gradebook being opened.
        roster (list[dict[str, Any]]): Enrolled students in display order, each with at least
            "studentId" and "name".

    Returns:
        The same `Gradebook`, with one row per roster entry in roster order.

    Notes:
        - Existing rows keep their scores; their names are refreshed from the roster.
        - New rows start ungraded, with the setting's default manual adjustment.
        - Rows for students no longer on the roster are dropped.
        - A student listed more than once keeps only the first roster entry.
    """
    existing = {student.student_id: student for student in gradebook.students}
    roster_ids = []
    synced = []
    renamed = False

    for entry in roster:
        student_id = str(entry["studentId"])

        if student_id in roster_ids:
            logger.warning("Skipped duplicate roster entry for student %s", student_id)
            continue

        roster_ids.append(student_id)
        student = existing.get(student_id)

        if student is None:
            student = StudentGradeRow(
                student_id=student_id,
                name=entry.get("name", ""),
                manual_adjust=gradebook.total_setting.manual_adjust_default,
            )
            logger.debug("Added roster student %s", student_id)

        elif entry.get("name", student.name) != student.name:
            student.name = entry["name"]
            renamed = True

        synced.append(student)

    dropped = set(existing) - set(roster_ids)
    if dropped:
        logger.info("Dropped %d students no longer on the roster", len(dropped))

    if [s.student_id for s in gradebook.students] != roster_ids:
        gradebook.students[:] = synced
        gradebook.mark_dirty()

    elif renamed:
        gradebook.mark_dirty()

    return gradebook


# === helper methods ===


def _statistics_response(scores: list[float]) -> Response:
    return Response.succeed(
        data={
            "statistics": compute_statistics(scores),
            "distribution": compute_distribution(scores),
        }
    )


def category_column_counts(columns: list[ScoreColumn]) -> dict[ScoreCategory, int]:
    return {
        category: sum(1 for c in columns if c.category is category)
        for category in ScoreCategory
    }
