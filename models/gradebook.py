# models/gradebook.py

"""
The Gradebook model is the aggregate root for one course's grades.

A `Gradebook` holds:
- `columns`: the ordered `ScoreColumn` arena for regular scores.
- `students`: the `StudentGradeRow` records, in roster order.
- `total_setting`: the `TotalScoreSetting` used for total-score calculation.
- `periodic_scores`: the ordered subset of `PeriodicName` values shown for this course.

The gradebook is loaded (or defaulted) when a course is opened, mutated in memory during an editing
session, and persisted as one document on save. Column structure is only ever changed through
`core.column_lifecycle`, which keeps every student's score map aligned with the column indices.

Includes an `unsaved_changes` flag that is session-scoped and never persisted.
"""

from __future__ import annotations

from typing import Any

from core.response import ErrorCode, Response
from models.score_column import ScoreColumn
from models.student_grade_row import PeriodicName, StudentGradeRow
from models.total_score_setting import TotalScoreSetting

DEFAULT_REGULAR_COLUMNS = 10

DEFAULT_PERIODIC_SCORES: tuple[PeriodicName, ...] = (
    PeriodicName.FIRST,
    PeriodicName.SECOND,
    PeriodicName.FINAL,
)


class Gradebook:

    def __init__(
        self,
        columns: list[ScoreColumn] | None = None,
        students: list[StudentGradeRow] | None = None,
        total_setting: TotalScoreSetting | None = None,
        periodic_scores: list[PeriodicName] | None = None,
    ):
        self._columns: list[ScoreColumn] = list(columns or [])
        self._students: list[StudentGradeRow] = list(students or [])
        self._total_setting: TotalScoreSetting = (
            total_setting or TotalScoreSetting.default()
        )
        self._periodic_scores: list[PeriodicName] = (
            list(DEFAULT_PERIODIC_SCORES)
            if periodic_scores is None
            else [PeriodicName(name) for name in periodic_scores]
        )
        self._unsaved_changes: bool = False

    # === properties ===

    # --- core data structures ---

    @property
    def columns(self) -> list[ScoreColumn]:
        return self._columns

    @property
    def students(self) -> list[StudentGradeRow]:
        return self._students

    @property
    def total_setting(self) -> TotalScoreSetting:
        return self._total_setting

    @total_setting.setter
    def total_setting(self, total_setting: TotalScoreSetting) -> None:
        self._total_setting = total_setting
        self.mark_dirty()

    @property
    def periodic_scores(self) -> list[PeriodicName]:
        return self._periodic_scores

    @property
    def column_count(self) -> int:
        return len(self._columns)

    # --- status markers ---

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    def mark_saved(self) -> None:
        self._unsaved_changes = False

    def mark_dirty(self) -> None:
        """
        Marks the gradebook as having unsaved changes.
        """
        self._unsaved_changes = True

    # === public classmethods ===

    @classmethod
    def default(
        cls,
        students: list[StudentGradeRow] | None = None,
        column_count: int = DEFAULT_REGULAR_COLUMNS,
    ) -> Gradebook:
        """
        Builds the gradebook used for a course that has no stored document yet.

        Args:
            students (list[StudentGradeRow] | None): Rows for the enrolled students, in roster order.
            column_count (int): The number of empty regular-score columns to start with.

        Returns:
            A `Gradebook` with default settings, all three periodic exams, and `column_count` empty columns.
        """
        return cls(
            columns=[ScoreColumn(index) for index in range(column_count)],
            students=students,
            total_setting=TotalScoreSetting.default(),
            periodic_scores=list(DEFAULT_PERIODIC_SCORES),
        )

    # === data accessors ===

    def find_student(self, student_id: str) -> Response:
        """
        Finds the `StudentGradeRow` with the given roster id.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a matching row exists.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if no row matches.
                - status_code (int | None): 200 on success, 404 if not found.
                - data (dict | None): "record" (StudentGradeRow) on success.

        Notes:
            - This method is read-only and does not raise.
        """
        for student in self._students:
            if student.student_id == student_id:
                return Response.succeed(data={"record": student})

        return Response.fail(
            detail=f"No student with id '{student_id}' in this gradebook.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    def column_scores(self, index: int) -> list[float]:
        """
        Returns every graded score in a regular-score column, skipping absent entries.
        """
        return [
            student.regular_score(index)
            for student in self._students
            if student.is_graded(index)
        ]

    def periodic_exam_scores(self, name: PeriodicName) -> list[float]:
        """
        Returns every graded score for a periodic exam, skipping absent entries.
        """
        return [
            score
            for student in self._students
            if (score := student.periodic_score(name)) is not None
        ]

    # === data manipulators ===

    def add_student(self, student: StudentGradeRow) -> Response:
        """
        Appends a `StudentGradeRow` to the gradebook.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the row was added.
                - error (ErrorCode | str | None): `ErrorCode.VALIDATION_FAILED` if the student id is already present.
                - data (dict | None): "record" (StudentGradeRow) on success.

        Notes:
            - This method mutates `Gradebook` state and calls `mark_dirty()` if successful.
        """
        try:
            self.require_unique_student_id(student.student_id)

        except ValueError as e:
            return Response.fail(
                detail=f"Failed to add student: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self._students.append(student)
        self.mark_dirty()

        return Response.succeed(
            detail=f"{student.name} successfully added to the gradebook.",
            data={"record": student},
        )

    def remove_student(self, student_id: str) -> Response:
        """
        Removes the `StudentGradeRow` with the given id.

        Returns:
            Response: `ErrorCode.NOT_FOUND` (404) if no such row exists, otherwise a simple confirmation.

        Notes:
            - This method mutates `Gradebook` state and calls `mark_dirty()` if successful.
        """
        find_response = self.find_student(student_id)

        if not find_response.success:
            return find_response

        self._students.remove(find_response.data["record"])
        self.mark_dirty()

        return Response.succeed(detail="Student successfully removed from the gradebook.")

    def reorder_students(self, student_ids: list[str]) -> None:
        """
        Reorders the rows to follow `student_ids`; rows not listed keep their relative order at the end.
        """
        position = {student_id: i for i, student_id in enumerate(student_ids)}
        before = [s.student_id for s in self._students]
        self._students.sort(
            key=lambda s: position.get(s.student_id, len(position))
        )

        if [s.student_id for s in self._students] != before:
            self.mark_dirty()

    def set_periodic_scores(self, names: list[PeriodicName]) -> None:
        """
        Chooses which periodic exams the gradebook records, kept in First, Second, Final order.

        Scores already entered for an exam that is left out stay on the student rows.
        """
        chosen = {PeriodicName(name) for name in names}
        self._periodic_scores = [name for name in PeriodicName if name in chosen]
        self.mark_dirty()

    # === data validators ===

    def require_unique_student_id(self, student_id: str) -> None:
        """
        Validates that no existing row shares the given student id.

        Raises:
            ValueError: If a row with the same id already exists.
        """
        if any(s.student_id == student_id for s in self._students):
            raise ValueError(f"A student with the id '{student_id}' already exists.")

    # === persistence and import ===

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": [column.to_dict() for column in self._columns],
            "students": [student.to_dict() for student in self._students],
            "totalSetting": self._total_setting.to_dict(),
            "periodicScores": list(self._periodic_scores),
        }

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gradebook):
            return NotImplemented

        return (
            self._columns == other._columns
            and self._students == other._students
            and self._total_setting == other._total_setting
            and self._periodic_scores == other._periodic_scores
        )

    def __repr__(self) -> str:
        return f"Gradebook({len(self._columns)} columns, {len(self._students)} students, {self._periodic_scores})"
