# cli/menus/settings_menu.py

"""
Grading Settings menu for the Gradebook CLI.

This module lets the user edit the `TotalScoreSetting` of the open gradebook:
- Percent weight and averaging method (all scores, or best N) for each score category
- The periodic exam weight, and which periodic exams count toward the total
- Which periodic exams the gradebook records scores for
- The default manual adjustment given to newly added students

Weights are never forced to add up to 100%. Inconsistent configurations are reported as warnings
after every change, and the total score is always computed with the weights as entered.
"""

from typing import Any, cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.session import GradebookSession
from core.reports import setting_warnings
from models.score_column import ScoreCategory
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import CalcMethod, validate_percent_input


def run(session: GradebookSession) -> None:
    """
    Top-level loop with dispatch for the Grading Settings menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text("Grading Settings")
    options = [
        ("Edit Category Weight", edit_category_percent_and_confirm),
        ("Edit Category Averaging", edit_category_method_and_confirm),
        ("Edit Periodic Exam Weight", edit_periodic_percent_and_confirm),
        ("Enable/Disable Periodic Exams", toggle_periodic_exam_and_confirm),
        ("Choose Recorded Periodic Exams", choose_recorded_periodic_exams_and_confirm),
        ("Edit Default Manual Adjust", edit_manual_adjust_default_and_confirm),
        ("View Current Settings", view_current_settings),
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


# === category settings ===


def prompt_category_or_cancel() -> ScoreCategory | MenuSignal:
    categories = list(ScoreCategory)

    print()
    helpers.display_results(categories, show_index=True, formatter=lambda c: c.value)

    choice = helpers.prompt_index_or_cancel(
        "Select a category by number (leave blank to cancel):", len(categories)
    )

    if choice is MenuSignal.CANCEL:
        return MenuSignal.CANCEL

    return categories[cast(int, choice)]


def edit_category_percent_and_confirm(session: GradebookSession) -> None:
    category = prompt_category_or_cancel()

    if category is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    category = cast(ScoreCategory, category)

    category_setting = session.gradebook.total_setting.category(category)

    new_percent = helpers.prompt_number_or_cancel(
        f"Enter the new weight for {category.value}, 0 to 100 (leave blank to cancel):",
        validate_percent_input,
    )

    if new_percent is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    print(
        f"\nCurrent weight: {formatters.format_percent(category_setting.percent)} -> "
        f"New weight: {formatters.format_percent(new_percent)}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    category_setting.percent = new_percent
    apply_setting_change(session)


def edit_category_method_and_confirm(session: GradebookSession) -> None:
    """
    Switches a category between averaging every score and averaging its best N scores.

    Notes:
        - When switching to best-N the user must also enter N; N larger than the number of graded
          scores simply averages every score.
    """
    category = prompt_category_or_cancel()

    if category is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    category = cast(ScoreCategory, category)

    category_setting = session.gradebook.total_setting.category(category)
    print(f"\nCurrent setting: {model_formatters.format_category_setting(session.gradebook.total_setting, category)}")

    if helpers.confirm_action(f"Should {category.value} average only the best N scores?"):
        new_n = helpers.prompt_number_or_cancel(
            "Enter N, the number of best scores to average (leave blank to cancel):",
            validate_best_n_input,
        )

        if new_n is MenuSignal.CANCEL:
            helpers.returning_without_changes()
            return

        new_method = CalcMethod.BEST_N

    else:
        new_method, new_n = CalcMethod.ALL, None

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    category_setting.calc_method = new_method
    category_setting.n = new_n
    apply_setting_change(session)


def validate_best_n_input(n_input: Any) -> int:
    """
    Raises:
        ValueError: If the input is not a whole number of at least 1.
    """
    try:
        n = int(n_input)

    except (TypeError, ValueError):
        raise ValueError("Invalid input. N must be a whole number.")

    if n < 1:
        raise ValueError("Invalid input. N must be at least 1.")

    return n


# === periodic settings ===


def edit_periodic_percent_and_confirm(session: GradebookSession) -> None:
    setting = session.gradebook.total_setting

    new_percent = helpers.prompt_number_or_cancel(
        "Enter the new periodic exam weight, 0 to 100 (leave blank to cancel):",
        validate_percent_input,
    )

    if new_percent is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    print(
        f"\nCurrent weight: {formatters.format_percent(setting.periodic_percent)} -> "
        f"New weight: {formatters.format_percent(new_percent)}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    setting.periodic_percent = new_percent
    apply_setting_change(session)


def toggle_periodic_exam_and_confirm(session: GradebookSession) -> None:
    setting = session.gradebook.total_setting
    names = list(PeriodicName)

    print()
    helpers.display_results(
        names,
        show_index=True,
        formatter=lambda n: f"{n.value:<8} | {'enabled' if setting.periodic_enabled[n] else 'disabled'}",
    )

    choice = helpers.prompt_index_or_cancel(
        "Select a periodic exam to enable or disable (leave blank to cancel):", len(names)
    )

    if choice is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    name = names[cast(int, choice)]
    enabled = setting.periodic_enabled[name]

    if not helpers.confirm_action(
        f"Are you sure you want to {'disable' if enabled else 'enable'} the {name.value} exam?"
    ):
        helpers.returning_without_changes()
        return

    setting.set_periodic_enabled(name, not enabled)
    apply_setting_change(session)


def choose_recorded_periodic_exams_and_confirm(session: GradebookSession) -> None:
    """
    Picks the periodic exams this gradebook records, for courses that skip one or more of them.

    Notes:
        - Scores already entered for an exam that is dropped are kept on the student rows and
          reappear if the exam is chosen again.
    """
    gradebook = session.gradebook
    chosen = []

    print(
        "\nCurrently recorded: "
        f"{formatters.format_list_with_and([n.value for n in gradebook.periodic_scores]) or '[NONE]'}"
    )

    for name in PeriodicName:
        if helpers.confirm_action(f"Should this gradebook record the {name.value} exam?"):
            chosen.append(name)

    if chosen == gradebook.periodic_scores:
        helpers.returning_without_changes()
        return

    print(
        f"\nNew recorded exams: {formatters.format_list_with_and([n.value for n in chosen]) or '[NONE]'}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    gradebook.set_periodic_scores(chosen)
    print("\nRecorded periodic exams successfully updated.")


# === manual adjust default ===


def edit_manual_adjust_default_and_confirm(session: GradebookSession) -> None:
    setting = session.gradebook.total_setting

    new_adjust = helpers.prompt_number_or_cancel(
        "Enter the default manual adjustment, -5 to 5 (leave blank to cancel):",
        StudentGradeRow.validate_manual_adjust_input,
    )

    if new_adjust is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    print(
        f"\nCurrent default: {setting.manual_adjust_default:+d} -> New default: {new_adjust:+d}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    setting.manual_adjust_default = new_adjust
    apply_setting_change(session)


# === view and warnings ===


def apply_setting_change(session: GradebookSession) -> None:
    session.gradebook.mark_dirty()
    print("\nSetting successfully updated.")

    helpers.display_warnings(
        setting_warnings(session.gradebook.total_setting, session.gradebook.columns)
    )


def view_current_settings(session: GradebookSession) -> None:
    print(f"\n{formatters.format_banner_text('Grading Settings')}")
    print(model_formatters.format_total_setting(session.gradebook.total_setting))

    helpers.display_warnings(
        setting_warnings(session.gradebook.total_setting, session.gradebook.columns)
    )
