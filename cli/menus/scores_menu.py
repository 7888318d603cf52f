# cli/menus/scores_menu.py

"""
Enter Scores menu for the Gradebook CLI.

Scores are entered a column (or periodic exam) at a time, walking the students in roster order.
At each prompt:
- a number records the score,
- "-" clears the score back to ungraded,
- a blank entry skips the student and keeps the current value,
- "q" stops entering scores for the column.

Ungraded is kept distinct from 0 throughout: a cleared score is excluded from statistics and ranks.
"""

from typing import Any, Callable, cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus.columns_menu import prompt_find_column
from cli.menus.students_menu import prompt_find_student
from cli.session import GradebookSession
from core.column_lifecycle import column_display_name
from models.student_grade_row import PeriodicName, StudentGradeRow

CLEAR_SCORE = "-"
STOP_ENTRY = "q"


def run(session: GradebookSession) -> None:
    """
    Top-level loop with dispatch for the Enter Scores menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text("Enter Scores")
    options = [
        ("Enter Column Scores", enter_column_scores),
        ("Enter Periodic Exam Scores", enter_periodic_scores),
        ("View Student Scores", view_student_scores),
    ]
    zero_option = "Return to Course Manager menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response(session)

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(session)

    helpers.returning_to("Course Manager menu")


# === score entry ===


def enter_column_scores(session: GradebookSession) -> None:
    index = prompt_find_column(session)

    if index is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    index = cast(int, index)

    gradebook = session.gradebook
    print(f"\nEntering scores for {column_display_name(gradebook.columns, index)}.")

    changed = record_scores(
        session,
        current=lambda s: s.regular_score(index),
        record=lambda s, score: s.set_regular_score(index, score),
    )

    print(f"\n{changed} scores updated.")


def enter_periodic_scores(session: GradebookSession) -> None:
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
        helpers.returning_without_changes()
        return

    name: PeriodicName = names[cast(int, choice)]
    print(f"\nEntering scores for the {name.value} exam.")

    changed = record_scores(
        session,
        current=lambda s: s.periodic_score(name),
        record=lambda s, score: s.set_periodic_score(name, score),
    )

    print(f"\n{changed} scores updated.")


def record_scores(
    session: GradebookSession,
    current: Callable[[StudentGradeRow], float | None],
    record: Callable[[StudentGradeRow, Any], None],
) -> int:
    """
    Walks the students in order and records one score for each.

    Args:
        session (GradebookSession): The opened course gradebook.
        current (Callable): Reads the student's current score for the exam being entered.
        record (Callable): Stores a validated score (or None to clear it) on the student.

    Returns:
        The number of students whose score changed.
    """
    changed = 0

    for student in session.gradebook.students:
        score = prompt_score_entry(student, current(student))

        if score is MenuSignal.EXIT:
            break

        if score is MenuSignal.DEFAULT:
            continue

        if score != current(student):
            record(student, score)
            changed += 1

    if changed:
        session.gradebook.mark_dirty()

    return changed


def prompt_score_entry(
    student: StudentGradeRow, current: float | None
) -> float | None | MenuSignal:
    """
    Prompts for one student's score.

    Returns:
        The validated score, None to clear it, `MenuSignal.DEFAULT` to keep the current value, or
        `MenuSignal.EXIT` to stop entering scores.
    """
    while True:
        response = helpers.prompt_user_input(
            f"{student.name} [{formatters.format_score(current)}] "
            f"(blank to keep, '{CLEAR_SCORE}' to clear, '{STOP_ENTRY}' to stop):"
        )

        if response == "":
            return MenuSignal.DEFAULT

        if response.lower() == STOP_ENTRY:
            return MenuSignal.EXIT

        if response == CLEAR_SCORE:
            return None

        try:
            return StudentGradeRow.validate_score_input(response)

        except (TypeError, ValueError) as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


# === view scores ===


def view_student_scores(session: GradebookSession) -> None:
    student = prompt_find_student(session)

    if student is MenuSignal.CANCEL:
        return
    student = cast(StudentGradeRow, student)

    print()
    print(model_formatters.format_student_scores(student, session.gradebook))
