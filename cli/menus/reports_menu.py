# cli/menus/reports_menu.py

"""
Reports menu for the Gradebook CLI.

Every report is read-only and built by `core.reports`:
- Five-tier statistics and the score distribution for a column or a periodic exam
- A student's rank on each periodic exam
- The total-score sheet for the whole class
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus.columns_menu import prompt_find_column
from cli.menus.students_menu import prompt_find_student
from cli.session import GradebookSession
from core import reports
from core.column_lifecycle import column_display_name
from core.response import Response
from models.student_grade_row import StudentGradeRow


def run(session: GradebookSession) -> None:
    """
    Top-level loop with dispatch for the Reports menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Reports")
    options = [
        ("Column Statistics", view_column_report),
        ("Periodic Exam Statistics", view_periodic_report),
        ("Student Periodic Ranks", view_student_ranks),
        ("Total Score Sheet", view_total_scores),
    ]
    zero_option = "Return to Course Manager menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(session)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Course Manager menu")


# === statistics ===


def view_column_report(session: GradebookSession) -> None:
    index = prompt_find_column(session)

    if index is MenuSignal.CANCEL:
        return
    index = cast(int, index)

    display_statistics(
        column_display_name(session.gradebook.columns, index),
        reports.column_report(session.gradebook, index),
    )


def view_periodic_report(session: GradebookSession) -> None:
    names = session.gradebook.periodic_scores

    if not names:
        print("\nThis gradebook does not record periodic exams.")
        return

    print()
    helpers.display_results(names, show_index=True, formatter=lambda n: n.value)

    choice = helpers.prompt_index_or_cancel(
        "Select a periodic exam by number (leave blank to cancel):", len(names)
    )

    if choice is MenuSignal.CANCEL:
        return

    name = names[cast(int, choice)]

    display_statistics(
        f"{name.value} Exam", reports.periodic_report(session.gradebook, name)
    )


def display_statistics(title: str, report_response: Response) -> None:
    if not report_response.success:
        helpers.display_response_failure(report_response)
        return

    print(f"\n{formatters.format_banner_text(title)}")
    print(
        model_formatters.format_statistics_report(
            report_response.data["statistics"],
            report_response.data["distribution"],
        )
    )


# === ranks ===


def view_student_ranks(session: GradebookSession) -> None:
    student = prompt_find_student(session)

    if student is MenuSignal.CANCEL:
        return
    student = cast(StudentGradeRow, student)

    ranks_response = reports.student_periodic_ranks(session.gradebook, student.student_id)

    if not ranks_response.success:
        helpers.display_response_failure(ranks_response)
        return

    print(f"\n{formatters.format_banner_text(f'Ranks: {student.name}')}")

    for name, result in ranks_response.data["ranks"].items():
        total = ranks_response.data["totals"][name]
        rank_text = formatters.format_rank(result.rank if result else None, total)
        print(f"{name.value:<8} | {rank_text}")


# === total scores ===


def view_total_scores(session: GradebookSession) -> None:
    rows = reports.total_score_rows(session.gradebook)

    if not rows:
        print("\nThere are no students in this gradebook.")
        return

    print(f"\n{formatters.format_banner_text('Total Score Sheet', width=60)}")
    helpers.display_results(rows, formatter=model_formatters.format_total_row)

    helpers.display_warnings(
        reports.setting_warnings(session.gradebook.total_setting, session.gradebook.columns)
    )
