# cli/menus/students_menu.py

"""
Manage Students menu for the Gradebook CLI.

This module defines the interface for managing the student rows of a gradebook, including:
- Adding and removing students
- Editing a student's name, manual adjustment, and remark
- Syncing the rows with a roster file exported from the course list
- Sorting the rows by student id
- Viewing all students

All mutations go through the `Gradebook` and `StudentGradeRow` APIs so validation and dirty
tracking stay in the model layer.
"""

import json
from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.session import GradebookSession
from core.reports import sync_roster
from models.student_grade_row import StudentGradeRow


def run(session: GradebookSession) -> None:
    """
    Top-level loop with dispatch for the Manage Students menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text("Manage Students")
    options = [
        ("Add Student", add_student),
        ("Edit Student", find_and_edit_student),
        ("Remove Student", find_and_remove_student),
        ("Sync With Roster File", sync_with_roster_file),
        ("Sort Students by Id", sort_students_by_id),
        ("View Students", view_students),
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


# === add student ===


def add_student(session: GradebookSession) -> None:
    """
    Loops a prompt to create a new `StudentGradeRow` and add it to the gradebook.

    Notes:
        - New rows start ungraded, with the gradebook's default manual adjustment.
    """
    gradebook = session.gradebook

    while True:
        student_id = prompt_student_id_or_cancel(session)

        if student_id is MenuSignal.CANCEL:
            break
        student_id = cast(str, student_id)

        name = helpers.prompt_user_input_or_cancel(
            "Enter the student's name (leave blank to cancel):"
        )

        if name is MenuSignal.CANCEL:
            break
        name = cast(str, name)

        new_student = StudentGradeRow(
            student_id=student_id,
            name=name,
            manual_adjust=gradebook.total_setting.manual_adjust_default,
        )

        gradebook_response = gradebook.add_student(new_student)

        if not gradebook_response.success:
            helpers.display_response_failure(gradebook_response)
            print(f"\n{name} was not added.")

        else:
            print(f"\n{gradebook_response.detail}")

        if not helpers.confirm_action("Would you like to continue adding new students?"):
            break

    helpers.returning_to("Manage Students menu")


def prompt_student_id_or_cancel(session: GradebookSession) -> str | MenuSignal:
    """
    Solicits a student id, checking that it is unique within the gradebook.

    Returns:
        The stripped id, or `MenuSignal.CANCEL` if the user leaves the input blank.
    """
    while True:
        id_input = helpers.prompt_user_input_or_cancel(
            "Enter the student id (leave blank to cancel):"
        )

        if isinstance(id_input, MenuSignal):
            return id_input

        try:
            session.gradebook.require_unique_student_id(id_input)
            return id_input

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


# === find student ===


def prompt_find_student(session: GradebookSession) -> StudentGradeRow | MenuSignal:
    """
    Lists the students and prompts for one by position.

    Returns:
        The selected `StudentGradeRow`, or `MenuSignal.CANCEL`.
    """
    students = session.gradebook.students

    if not students:
        print("\nThere are no students in this gradebook.")
        return MenuSignal.CANCEL

    print()
    helpers.display_results(
        students, show_index=True, formatter=model_formatters.format_student_oneline
    )

    index = helpers.prompt_index_or_cancel(
        "Select a student by number (leave blank to cancel):", len(students)
    )

    if index is MenuSignal.CANCEL:
        return MenuSignal.CANCEL

    return students[cast(int, index)]


# === edit student ===


def find_and_edit_student(session: GradebookSession) -> None:
    student = prompt_find_student(session)

    if student is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    student = cast(StudentGradeRow, student)

    title = formatters.format_banner_text("Editable Fields")
    options = [
        ("Name", edit_name_and_confirm),
        ("Manual Adjust", edit_manual_adjust_and_confirm),
        ("Remark", edit_remark_and_confirm),
    ]
    zero_option = "Finish editing and return"

    print("\nYou are editing the following student:")
    print(model_formatters.format_student_scores(student, session.gradebook))

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(student, session)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Manage Students menu")


def edit_name_and_confirm(student: StudentGradeRow, session: GradebookSession) -> None:
    new_name = helpers.prompt_user_input_or_cancel(
        "Enter the new name (leave blank to cancel):"
    )

    if new_name is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    new_name = cast(str, new_name)

    print(f"\nCurrent name: {student.name} -> New name: {new_name}")

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    student.name = new_name
    session.gradebook.mark_dirty()
    print("\nName successfully updated.")


def edit_manual_adjust_and_confirm(
    student: StudentGradeRow, session: GradebookSession
) -> None:
    """
    Prompts for a whole-number manual adjustment between -5 and +5.

    Notes:
        - Out-of-range or fractional input is rejected at the prompt and asked again.
    """
    new_adjust = helpers.prompt_number_or_cancel(
        "Enter the manual adjustment, -5 to 5 (leave blank to cancel):",
        StudentGradeRow.validate_manual_adjust_input,
    )

    if new_adjust is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    print(f"\nCurrent adjust: {student.manual_adjust:+d} -> New adjust: {new_adjust:+d}")

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    student.manual_adjust = new_adjust
    session.gradebook.mark_dirty()
    print("\nManual adjustment successfully updated.")


def edit_remark_and_confirm(student: StudentGradeRow, session: GradebookSession) -> None:
    new_remark = helpers.prompt_user_input_or_none(
        "Enter the new remark (leave blank to clear it):"
    )

    print(f"\nCurrent remark: {student.remark or '[NONE]'} -> New remark: {new_remark or '[NONE]'}")

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    student.remark = new_remark or ""
    session.gradebook.mark_dirty()
    print("\nRemark successfully updated.")


# === remove student ===


def find_and_remove_student(session: GradebookSession) -> None:
    student = prompt_find_student(session)

    if student is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    student = cast(StudentGradeRow, student)

    print(f"\n{helpers.caution_banner()}")
    print(f"Removing {student.name} deletes every score recorded for them.")

    if not helpers.confirm_action("Are you sure you want to remove this student?"):
        helpers.returning_without_changes()
        return

    gradebook_response = session.gradebook.remove_student(student.student_id)

    if not gradebook_response.success:
        helpers.display_response_failure(gradebook_response)

    else:
        print(f"\n{gradebook_response.detail}")


# === roster sync ===


def sync_with_roster_file(session: GradebookSession) -> None:
    """
    Aligns the student rows with a roster file.

    The file is a JSON list of objects with "studentId" and "name", in display order. Students not
    on the roster are dropped along with their scores, so the user must confirm first.
    """
    path = helpers.prompt_user_input_or_cancel(
        "Enter the path to the roster JSON file (leave blank to cancel):"
    )

    if path is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    path = cast(str, path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            roster = json.load(f)

    except (OSError, json.JSONDecodeError) as e:
        print(f"\n[ERROR] Could not read the roster file: {e}")
        return

    if not isinstance(roster, list) or not all(
        isinstance(entry, dict) and "studentId" in entry for entry in roster
    ):
        print('\n[ERROR] The roster must be a list of objects with a "studentId".')
        return

    roster_ids = {str(entry["studentId"]) for entry in roster}
    dropped = [s for s in session.gradebook.students if s.student_id not in roster_ids]

    if dropped:
        print(f"\n{helpers.caution_banner()}")
        print(
            "These students are not on the roster and will be removed: "
            f"{formatters.format_list_with_and([s.name for s in dropped])}"
        )

    if not helpers.confirm_action("Do you want to sync the gradebook with this roster?"):
        helpers.returning_without_changes()
        return

    sync_roster(session.gradebook, roster)
    print(f"\nGradebook synced with {len(session.gradebook.students)} roster students.")


# === sort students ===


def sort_students_by_id(session: GradebookSession) -> None:
    gradebook = session.gradebook
    sorted_ids = sorted(s.student_id for s in gradebook.students)

    if sorted_ids == [s.student_id for s in gradebook.students]:
        print("\nStudents are already sorted by id.")
        return

    if not helpers.confirm_action("Are you sure you want to sort the students by id?"):
        helpers.returning_without_changes()
        return

    gradebook.reorder_students(sorted_ids)
    print("\nStudents successfully sorted by id.")


# === view students ===


def view_students(session: GradebookSession) -> None:
    students = session.gradebook.students

    if not students:
        print("\nThere are no students in this gradebook.")
        return

    print(f"\n{formatters.format_banner_text('Students')}")
    helpers.display_results(
        students, show_index=True, formatter=model_formatters.format_student_oneline
    )
