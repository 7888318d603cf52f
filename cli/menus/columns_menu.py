# cli/menus/columns_menu.py

"""
Manage Score Columns menu for the Gradebook CLI.

Regular-score columns are only ever changed through `core.column_lifecycle`, which keeps the column
list and every student's score map aligned. This menu supports:
- Appending an empty column
- Removing a column, which shifts every later column (and its scores) down by one
- Editing a column's category, label, and exam date
- Viewing all columns
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.session import GradebookSession
from core import column_lifecycle
from core.column_lifecycle import column_display_name
from models.score_column import ScoreCategory


def run(session: GradebookSession) -> None:
    """
    Top-level loop with dispatch for the Manage Score Columns menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text("Manage Score Columns")
    options = [
        ("Add Column", add_column_and_confirm),
        ("Edit Column", find_and_edit_column),
        ("Remove Column", find_and_remove_column),
        ("View Columns", view_columns),
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


# === add column ===


def add_column_and_confirm(session: GradebookSession) -> None:
    gradebook = session.gradebook

    if not helpers.confirm_action(
        f"Add an empty column after the current {gradebook.column_count}?"
    ):
        helpers.returning_without_changes()
        return

    column_lifecycle.add_column(gradebook)
    print(f"\nColumn {gradebook.column_count} successfully added.")

    if helpers.confirm_action("Would you like to set its category, label, and date now?"):
        edit_column(session, gradebook.column_count - 1)


# === find column ===


def prompt_find_column(session: GradebookSession) -> int | MenuSignal:
    """
    Lists the columns and prompts for one by position.

    Returns:
        The selected column index, or `MenuSignal.CANCEL`.
    """
    gradebook = session.gradebook

    if gradebook.column_count == 0:
        print("\nThere are no score columns in this gradebook.")
        return MenuSignal.CANCEL

    view_columns(session)

    return helpers.prompt_index_or_cancel(
        "Select a column by number (leave blank to cancel):", gradebook.column_count
    )


# === edit column ===


def find_and_edit_column(session: GradebookSession) -> None:
    index = prompt_find_column(session)

    if index is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    edit_column(session, cast(int, index))


def edit_column(session: GradebookSession, index: int) -> None:
    """
    Interface for editing the metadata of one column.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Editable Fields")
    options = [
        ("Category", edit_category_and_confirm),
        ("Label", edit_label_and_confirm),
        ("Exam Date", edit_exam_date_and_confirm),
    ]
    zero_option = "Finish editing and return"

    print("\nYou are editing the following column:")
    print(model_formatters.format_column_multiline(session.gradebook, index))

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(session, index)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Manage Score Columns menu")


def edit_category_and_confirm(session: GradebookSession, index: int) -> None:
    categories = list(ScoreCategory)

    print()
    helpers.display_results(
        categories, show_index=True, formatter=lambda c: c.value
    )

    choice = helpers.prompt_index_or_cancel(
        "Select a category by number (leave blank to cancel):", len(categories)
    )

    if choice is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    new_category = categories[cast(int, choice)]
    current = session.gradebook.columns[index].category

    print(
        f"\nCurrent category: {current.value if current else '[UNCATEGORIZED]'} -> New category: {new_category.value}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    column_lifecycle.update_column(session.gradebook, index, category=new_category)
    print("\nCategory successfully updated.")


def edit_label_and_confirm(session: GradebookSession, index: int) -> None:
    new_label = helpers.prompt_user_input_or_none(
        "Enter the new label (leave blank to clear it):"
    )

    print(
        f"\nCurrent label: {session.gradebook.columns[index].label or '[NONE]'} -> New label: {new_label or '[NONE]'}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    column_lifecycle.update_column(session.gradebook, index, label=new_label or "")
    print("\nLabel successfully updated.")


def edit_exam_date_and_confirm(session: GradebookSession, index: int) -> None:
    while True:
        date_input = helpers.prompt_user_input_or_none(
            "Enter the exam date as YYYY-MM-DD (leave blank to clear it):"
        )

        if date_input is None:
            new_date = None
            break

        try:
            new_date = formatters.parse_exam_date(date_input)
            break

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")

    current = session.gradebook.columns[index].exam_date

    print(
        f"\nCurrent date: {formatters.format_exam_date(current)} -> New date: {formatters.format_exam_date(new_date)}"
    )

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    column_lifecycle.update_column(session.gradebook, index, exam_date=new_date)
    print("\nExam date successfully updated.")


# === remove column ===


def find_and_remove_column(session: GradebookSession) -> None:
    """
    Prompts for a column and removes it after confirmation.

    Notes:
        - Every score in the removed column is deleted, and later columns shift down one position.
    """
    index = prompt_find_column(session)

    if index is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    index = cast(int, index)

    gradebook = session.gradebook
    name = column_display_name(gradebook.columns, index)
    graded = len(gradebook.column_scores(index))

    print(f"\n{helpers.caution_banner()}")
    print(
        f"Removing {name} deletes {graded} recorded scores, and every later column shifts down by one."
    )

    if not helpers.confirm_action("Are you sure you want to remove this column?"):
        helpers.returning_without_changes()
        return

    column_lifecycle.remove_column(gradebook, index)
    print(f"\n{name} successfully removed.")


# === view columns ===


def view_columns(session: GradebookSession) -> None:
    gradebook = session.gradebook

    print(f"\n{formatters.format_banner_text('Score Columns')}")
    helpers.display_results(
        range(gradebook.column_count),
        show_index=True,
        formatter=lambda i: model_formatters.format_column_oneline(gradebook, i),
    )
