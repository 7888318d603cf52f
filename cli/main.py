# cli/main.py

"""
Start Menu for the Gradebook CLI.

Provides functions for opening the stored gradebook of a course, or starting a default one.
"""

import logging
import os
from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import course_menu
from cli.path_utils import resolve_store_dir
from cli.session import GradebookSession
from core.gradebook_store import JsonGradebookStore, course_key
from models.gradebook import Gradebook

LOG_LEVEL_ENV_VAR = "GRADEBOOK_LOG_LEVEL"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").strip().upper()
    level = logging.getLevelName(level_name)

    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    configure_logging()

    title = formatters.format_banner_text("GRADEBOOK MANAGER")
    options = [
        ("Open a course gradebook", open_gradebook),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            session = menu_response()

            if session is not None:
                course_menu.run(session)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def open_gradebook() -> GradebookSession | None:
    """
    Prompts the user for a course and opens its gradebook from the JSON store.

    Returns:
        GradebookSession: The opened gradebook bound to its store and course key.
        None: If the user cancels during input.

    Notes:
        - The course name and code inputs are cancellable.
        - If the store directory input is left blank, `GRADEBOOK_STORE_DIR` or `~/Documents/Gradebooks` is used.
        - A course with no stored document starts from `Gradebook.default()`; nothing is written until the user saves.
        - A stored document that cannot be read is reported and the user is prompted again.
    """
    while True:
        name = helpers.prompt_user_input_or_cancel(
            "Enter the course name (e.g. Math A, leave blank to cancel):"
        )

        if name is MenuSignal.CANCEL:
            return None
        name = cast(str, name)

        code = helpers.prompt_user_input_or_cancel(
            "Enter the course code (e.g. M101, leave blank to cancel):"
        )

        if code is MenuSignal.CANCEL:
            return None
        code = cast(str, code)

        dir_input = helpers.prompt_user_input_or_none(
            "Enter the gradebook store directory (leave blank to use default):"
        )

        store = JsonGradebookStore(resolve_store_dir(dir_input))
        key = course_key(name, code)

        print(f"\nOpening gradebook for {key} ...")

        load_response = store.load(key)

        if not load_response.success:
            helpers.display_response_failure(load_response)
            continue

        gradebook = load_response.data["gradebook"]

        if gradebook is None:
            print("... No stored gradebook found. Starting with the default settings.")
            gradebook = Gradebook.default()
            gradebook.mark_dirty()

        else:
            print("... Gradebook loaded successfully.")

        logger.info("Opened %s from %s", key, store.dir_path)

        return GradebookSession(store, key, gradebook)


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit
