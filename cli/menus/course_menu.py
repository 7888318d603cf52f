# cli/menus/course_menu.py

"""
Course Manager menu for the Gradebook CLI.

Provides calls to the menus for managing students, score columns, score entry, and grading settings,
as well as the Reports menu and an option to save the gradebook.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import (
    columns_menu,
    reports_menu,
    scores_menu,
    settings_menu,
    students_menu,
)
from cli.session import GradebookSession


def run(session: GradebookSession) -> None:
    """
    Top-level loop with dispatch for the Course Manager menu.

    Args:
        session (GradebookSession): The opened course gradebook.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text(session.key)
    options = [
        ("Manage Students", students_menu.run),
        ("Manage Score Columns", columns_menu.run),
        ("Enter Scores", scores_menu.run),
        ("Grading Settings", settings_menu.run),
        ("Reports", reports_menu.run),
        ("Save Gradebook", save_gradebook),
    ]
    zero_option = "Return to Start Menu"

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

    helpers.returning_to("Start Menu")


def save_gradebook(session: GradebookSession) -> None:
    save_response = session.save()

    if not save_response.success:
        helpers.display_response_failure(save_response)

    else:
        print(f"\n{save_response.detail}")
