# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the grading CLI.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for and validating user input (scores, indices, percents)
- Handling confirmation flows and unsaved-change checks
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to keep prompts and messages consistent.
"""

from enum import Enum
from typing import Any, Callable, Iterable

import core.formatters as formatters
from cli.session import GradebookSession
from core.response import Response


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option:")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === confirmation and input methods ===

# - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
# - `prompt_user_input_or_none()` returns `None` on blank input.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n):").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_make_change() -> bool:
    return confirm_action("Do you want to make this change?")


def prompt_if_dirty(session: GradebookSession) -> None:
    if session.gradebook.has_unsaved_changes and confirm_action(
        "There are unsaved changes to the gradebook. Do you want to save now?"
    ):
        save_response = session.save()

        if not save_response.success:
            display_response_failure(save_response)


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


def prompt_index_or_cancel(prompt: str, count: int) -> int | MenuSignal:
    """
    Prompts for a 1-based position among `count` items and returns the 0-based index.

    Returns:
        The selected index, or `MenuSignal.CANCEL` if the user leaves the input blank.
    """
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if response is MenuSignal.CANCEL:
            return MenuSignal.CANCEL

        try:
            position = int(response)

        except ValueError:
            print("Invalid input. Please enter a number.")
            continue

        if 1 <= position <= count:
            return position - 1

        print(f"Invalid selection. Please enter a number between 1 and {count}.")


def prompt_number_or_cancel(
    prompt: str,
    validator: Callable[[Any], Any],
) -> Any:
    """
    Prompts until `validator` accepts the input, returning the validated value.

    Returns:
        The validated value, or `MenuSignal.CANCEL` if the user leaves the input blank.
    """
    while True:
        response = prompt_user_input_or_cancel(prompt)

        if response is MenuSignal.CANCEL:
            return MenuSignal.CANCEL

        try:
            return validator(response)

        except (TypeError, ValueError) as e:
            print(f"\n{e}")


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> str:
    return formatters.format_banner_text("CAUTION!")


def display_warnings(warnings: list[str]) -> None:
    if not warnings:
        return

    print(f"\n{formatters.format_banner_text('WARNING!')}")
    for warning in warnings:
        print(f"... {warning}")


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
