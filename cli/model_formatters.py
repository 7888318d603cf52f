# cli/model_formatters.py

# anything that renders domain objects or performs Gradebook read-only operations
from textwrap import dedent

import core.formatters as formatters
from core.column_lifecycle import column_display_name
from models.gradebook import Gradebook
from models.score_column import ScoreCategory
from models.statistics import DistributionBucket, PercentileStatistics
from models.student_grade_row import StudentGradeRow
from models.total_score_setting import CalcMethod, TotalScoreSetting

# === column formatters ===


def format_column_oneline(gradebook: Gradebook, index: int) -> str:
    column = gradebook.columns[index]
    name = column_display_name(gradebook.columns, index)
    graded = len(gradebook.column_scores(index))

    return f"{name:<16} | {formatters.format_exam_date(column.exam_date)} | {graded} graded"


def format_column_multiline(gradebook: Gradebook, index: int) -> str:
    column = gradebook.columns[index]
    category = column.category.value if column.category else "[UNCATEGORIZED]"

    return dedent(
        f"""\
        Column {index + 1}: {column_display_name(gradebook.columns, index)}
        ... Category: {category}
        ... Label: {column.label or '[NONE]'}
        ... Exam date: {formatters.format_exam_date(column.exam_date)}"""
    )


# === student formatters ===


def format_student_oneline(student: StudentGradeRow) -> str:
    return f"{student.student_id:<10} | {student.name}"


def format_student_scores(student: StudentGradeRow, gradebook: Gradebook) -> str:
    regular = ", ".join(
        f"{column_display_name(gradebook.columns, i)}: {formatters.format_score(student.regular_score(i))}"
        for i in range(gradebook.column_count)
    )
    periodic = ", ".join(
        f"{name.value}: {formatters.format_score(student.periodic_score(name))}"
        for name in gradebook.periodic_scores
    )

    return dedent(
        f"""\
        {student.name} ({student.student_id}):
        ... Regular: {regular or '[NO COLUMNS]'}
        ... Periodic: {periodic or '[NONE]'}
        ... Manual adjust: {student.manual_adjust:+d}
        ... Remark: {student.remark or '[NONE]'}"""
    )


def format_total_row(row: dict) -> str:
    return (
        f"{row['studentId']:<10} | {row['name']:<12} | "
        f"Regular {formatters.format_score(round(row['regularScore'], 2)):>6} | "
        f"Mid {row['midScore']:>3} | Final {formatters.format_score(row['finalScore']):>5} | "
        f"Adj {row['manualAdjust']:+d} | Total {row['totalScore']:>3}"
    )


# === setting formatters ===


def format_category_setting(setting: TotalScoreSetting, category: ScoreCategory) -> str:
    category_setting = setting.category(category)

    if category_setting.calc_method is CalcMethod.BEST_N:
        method = f"best {category_setting.n}" if category_setting.n else "best [N NOT SET]"
    else:
        method = "all"

    return f"{category.value:<10} | {formatters.format_percent(category_setting.percent):>6} | {method}"


def format_total_setting(setting: TotalScoreSetting) -> str:
    categories = "\n".join(
        f"... {format_category_setting(setting, category)}" for category in ScoreCategory
    )
    enabled = formatters.format_list_with_and(
        [name.value for name in setting.enabled_periodic_names]
    )

    return (
        f"Regular score ({formatters.format_percent(setting.regular_percent)}):\n"
        f"{categories}\n"
        f"Periodic exams ({formatters.format_percent(setting.periodic_percent)}): "
        f"{enabled or '[NONE ENABLED]'}\n"
        f"Default manual adjust: {setting.manual_adjust_default:+d}"
    )


# === statistics formatters ===


def format_statistics_report(
    statistics: PercentileStatistics, distribution: list[DistributionBucket]
) -> str:
    if statistics.is_empty:
        return "No graded scores yet."

    lines = formatters.format_statistics_lines(statistics.to_dict())
    lines.append("")
    lines.extend(
        formatters.format_distribution_lines(
            (bucket.range_label, bucket.count) for bucket in distribution
        )
    )

    return "\n".join(lines)
