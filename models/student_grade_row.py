# models/student_grade_row.py

"""
Represents one student's row in the gradebook.

Stores identifying information (the roster `student_id` and display name) alongside the raw scores:
- `regular_scores`: a sparse map of column index to score. A missing key or a None value means
  "not yet graded", which is distinct from a score of 0.
- `periodic_scores`: a map of `PeriodicName` to score with the same absent semantics.
- `manual_adjust`: an integer bonus/penalty in [-5, +5], validated when it is entered.
- `remark`: free text shown next to the total score.

NaN scores are normalized to absent on entry so that downstream calculations only ever see
finite numbers or None.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

MANUAL_ADJUST_MIN = -5
MANUAL_ADJUST_MAX = 5


class PeriodicName(str, Enum):
    FIRST = "First"
    SECOND = "Second"
    FINAL = "Final"


class StudentGradeRow:

    def __init__(
        self,
        student_id: str,
        name: str,
        regular_scores: dict[int, float | None] | None = None,
        periodic_scores: dict[PeriodicName, float | None] | None = None,
        manual_adjust: int = 0,
        remark: str = "",
    ):
        self._student_id = student_id
        self._name = name
        self._regular_scores: dict[int, float | None] = {}
        self._periodic_scores: dict[PeriodicName, float | None] = {}
        # manual_adjust uses setter method for validation
        self.manual_adjust = manual_adjust
        self._remark = remark

        # stored documents may carry explicit nulls, which are kept as absent entries
        for index, score in (regular_scores or {}).items():
            self._regular_scores[int(index)] = StudentGradeRow.validate_score_input(score)

        for name_, score in (periodic_scores or {}).items():
            self._periodic_scores[PeriodicName(name_)] = (
                StudentGradeRow.validate_score_input(score)
            )

    # === properties ===

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def regular_scores(self) -> dict[int, float | None]:
        return self._regular_scores

    @property
    def periodic_scores(self) -> dict[PeriodicName, float | None]:
        return self._periodic_scores

    @property
    def manual_adjust(self) -> int:
        return self._manual_adjust

    @manual_adjust.setter
    def manual_adjust(self, manual_adjust: Any) -> None:
        self._manual_adjust = StudentGradeRow.validate_manual_adjust_input(
            manual_adjust
        )

    @property
    def remark(self) -> str:
        return self._remark

    @remark.setter
    def remark(self, remark: str) -> None:
        self._remark = remark

    # === data accessors ===

    def regular_score(self, index: int) -> float | None:
        return self._regular_scores.get(index)

    def periodic_score(self, name: PeriodicName) -> float | None:
        return self._periodic_scores.get(name)

    def is_graded(self, index: int) -> bool:
        return self._regular_scores.get(index) is not None

    # === data manipulators ===

    def set_regular_score(self, index: int, score: Any) -> None:
        """
        Records a regular score; an absent score clears the entry instead of storing it.
        """
        validated = StudentGradeRow.validate_score_input(score)

        if validated is None:
            self.clear_regular_score(index)
        else:
            self._regular_scores[int(index)] = validated

    def clear_regular_score(self, index: int) -> None:
        self._regular_scores.pop(int(index), None)

    def set_periodic_score(self, name: PeriodicName | str, score: Any) -> None:
        validated = StudentGradeRow.validate_score_input(score)

        if validated is None:
            self.clear_periodic_score(name)
        else:
            self._periodic_scores[PeriodicName(name)] = validated

    def clear_periodic_score(self, name: PeriodicName | str) -> None:
        self._periodic_scores.pop(PeriodicName(name), None)

    def replace_regular_scores(self, regular_scores: dict[int, float | None]) -> None:
        """
        Swaps in a re-packed regular score map. Only `core.column_lifecycle` should call this.
        """
        self._regular_scores = dict(regular_scores)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "studentId": self._student_id,
            "name": self._name,
            "regularScores": dict(self._regular_scores),
            "periodicScores": dict(self._periodic_scores),
            "manualAdjust": self._manual_adjust,
            "remark": self._remark,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StudentGradeRow:
        return cls(
            student_id=str(data["studentId"]),
            name=data.get("name") or "",
            regular_scores={
                int(index): score
                for index, score in (data.get("regularScores") or {}).items()
            },
            periodic_scores={
                PeriodicName(name): score
                for name, score in (data.get("periodicScores") or {}).items()
            },
            manual_adjust=data.get("manualAdjust") or 0,
            remark=data.get("remark") or "",
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StudentGradeRow):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"StudentGradeRow({self._student_id}, {self._name}, {self._regular_scores}, {self._periodic_scores}, {self._manual_adjust})"

    def __str__(self) -> str:
        return f"STUDENT ROW: name: {self._name}, id: {self._student_id}"

    # === data validators ===

    @staticmethod
    def validate_score_input(score: Any) -> float | None:
        """
        Validates and normalizes a raw score.

        Accepts None, a blank string, or NaN as "absent", otherwise:
            - Casts to float.
            - Rejects infinite values.

        Args:
            score (Any): The input value to validate.

        Returns:
            The normalized score (float), or None if the score is absent.

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is infinite.
        """
        if score is None or (isinstance(score, str) and not score.strip()):
            return None

        try:
            score = float(score)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Score must be a number or left blank.")

        if math.isnan(score):
            return None

        if math.isinf(score):
            raise ValueError("Invalid input. Score must be a finite number.")

        return score

    @staticmethod
    def validate_manual_adjust_input(manual_adjust: Any) -> int:
        """
        Validates input for a manual adjustment.

        Accepts any integral input between -5 and +5 inclusive. None is treated as 0.

        Raises:
            TypeError: If the input cannot be cast to an integer.
            ValueError: If the input is fractional or outside [-5, +5].
        """
        if manual_adjust is None:
            return 0

        try:
            value = float(manual_adjust)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Manual adjustment must be a whole number.")

        if not value.is_integer():
            raise ValueError("Invalid input. Manual adjustment must be a whole number.")

        if value < MANUAL_ADJUST_MIN or value > MANUAL_ADJUST_MAX:
            raise ValueError(
                f"Invalid input. Manual adjustment must be between {MANUAL_ADJUST_MIN} and +{MANUAL_ADJUST_MAX}."
            )

        return int(value)
