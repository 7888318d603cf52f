# core/total_score.py

"""
Weighted total-score calculation for a single student.

The total combines three parts:
- the regular score: each category's average (see `core.aggregator`) weighted by its percent,
- the periodic average of the enabled periodic exams, weighted by `periodic_percent`,
- the student's manual adjustment, added unweighted.

Missing data never raises. A category with no graded scores contributes 0, and an enabled periodic
exam without a score counts as 0 in the periodic average. That second rule differs from the
percentile and rank reports, which leave ungraded students out of the population.
"""

from __future__ import annotations

import math

from core.aggregator import aggregate
from models.score_column import ScoreCategory, ScoreColumn
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import TotalScoreSetting


class ScoreBreakdown:
    """
    The intermediate values behind one student's total score.
    """

    def __init__(
        self,
        category_averages: dict[ScoreCategory, float],
        regular: float,
        periodic_average: float,
        manual_adjust: int,
        total: int,
    ):
        self.category_averages = category_averages
        self.regular = regular
        self.periodic_average = periodic_average
        self.manual_adjust = manual_adjust
        self.total = total

    def __repr__(self) -> str:
        return f"ScoreBreakdown({self.category_averages}, {self.regular}, {self.periodic_average}, {self.manual_adjust}, {self.total})"


def category_scores(
    student: StudentGradeRow,
    columns: list[ScoreColumn],
    category: ScoreCategory,
) -> list[float]:
    """
    Collects a student's graded regular scores for every column in `category`, in column order.
    """
    return [
        score
        for column in columns
        if column.category is category
        and (score := student.regular_score(column.index)) is not None
    ]


def compute_category_averages(
    student: StudentGradeRow,
    columns: list[ScoreColumn],
    setting: TotalScoreSetting,
) -> dict[ScoreCategory, float]:
    return {
        category: aggregate(
            category_scores(student, columns, category),
            setting.category(category),
        )
        for category in ScoreCategory
    }


def compute_regular(
    student: StudentGradeRow,
    columns: list[ScoreColumn],
    setting: TotalScoreSetting,
) -> float:
    """
    Computes the weighted regular score: the sum of each category average times its percent / 100.
    """
    averages = compute_category_averages(student, columns, setting)

    return _weighted_regular(averages, setting)


def compute_periodic_average(
    student: StudentGradeRow,
    setting: TotalScoreSetting,
) -> float:
    """
    Averages the student's enabled periodic exams, counting an ungraded exam as 0.

    Returns 0 when no periodic exam is enabled.
    """
    enabled = setting.enabled_periodic_names

    if not enabled:
        return 0

    return sum(student.periodic_score(name) or 0 for name in enabled) / len(enabled)


def compute_total(
    student: StudentGradeRow,
    columns: list[ScoreColumn],
    setting: TotalScoreSetting,
) -> int:
    return compute_breakdown(student, columns, setting).total


def compute_breakdown(
    student: StudentGradeRow,
    columns: list[ScoreColumn],
    setting: TotalScoreSetting,
) -> ScoreBreakdown:
    """
    Computes every intermediate value behind the student's total score.

    Args:
        student (StudentGradeRow): The student being scored.
        columns (list[ScoreColumn]): The gradebook's regular-score columns.
        setting (TotalScoreSetting): The gradebook's grading configuration.

    Returns:
        ScoreBreakdown: The category averages, weighted regular score, periodic average,
        manual adjustment, and the rounded total.

    Notes:
        - The manual adjustment is added as-is; it was range-checked when it was entered.
        - Percent weights are used exactly as configured, even when they do not sum to 100.
    """
    averages = compute_category_averages(student, columns, setting)
    regular = _weighted_regular(averages, setting)
    periodic_average = compute_periodic_average(student, setting)

    total = round_half_up(
        regular + periodic_average * setting.periodic_percent / 100 + student.manual_adjust
    )

    return ScoreBreakdown(
        category_averages=averages,
        regular=regular,
        periodic_average=periodic_average,
        manual_adjust=student.manual_adjust,
        total=total,
    )


def midterm_average(student: StudentGradeRow) -> int:
    """
    The rounded average of the first and second periodic exams, ungraded counting as 0.

    Shown in the total-score summary next to the final exam.
    """
    first = student.periodic_score(PeriodicName.FIRST) or 0
    second = student.periodic_score(PeriodicName.SECOND) or 0

    return round_half_up((first + second) / 2)


def _weighted_regular(
    averages: dict[ScoreCategory, float],
    setting: TotalScoreSetting,
) -> float:
    return sum(
        averages[category] * setting.category(category).percent / 100
        for category in ScoreCategory
    )


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
