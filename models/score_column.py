# models/score_column.py

"""
Represents one regular-score column of the gradebook (a quiz, a homework, or an attitude check).

Columns are stored as an ordered list on the `Gradebook`. A column's `index` is the join key
into every student's `regular_scores` map and must always equal its position in that list.

Notes:
- A freshly added column carries empty metadata: no category, a blank label, and no exam date.
- Columns without a category are shown in the editor but do not feed any category average.
- Index bookkeeping is owned by `core.column_lifecycle`; callers should never renumber columns by hand.
"""

from __future__ import annotations

import datetime
from enum import Enum


class ScoreCategory(str, Enum):
    QUIZ = "Quiz"
    HOMEWORK = "Homework"
    ATTITUDE = "Attitude"


class ScoreColumn:

    def __init__(
        self,
        index: int,
        category: ScoreCategory | None = None,
        label: str = "",
        exam_date: datetime.date | None = None,
    ):
        self._index = index
        # category uses setter method for validation
        self.category = category
        self._label = label
        self._exam_date = exam_date

    # === properties ===

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, index: int) -> None:
        self._index = index

    @property
    def category(self) -> ScoreCategory | None:
        return self._category

    @category.setter
    def category(self, category: ScoreCategory | str | None) -> None:
        self._category = ScoreColumn.validate_category_input(category)

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, label: str) -> None:
        self._label = label

    @property
    def exam_date(self) -> datetime.date | None:
        return self._exam_date

    @exam_date.setter
    def exam_date(self, exam_date: datetime.date | None) -> None:
        self._exam_date = exam_date

    @property
    def exam_date_iso(self) -> str | None:
        return self._exam_date.isoformat() if self._exam_date else None

    @property
    def has_metadata(self) -> bool:
        return self._category is not None or bool(self._label.strip())

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "index": self._index,
            "category": self._category,
            "label": self._label,
            "examDate": self._exam_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ScoreColumn:
        exam_date = data.get("examDate")
        if isinstance(exam_date, str):
            exam_date = datetime.date.fromisoformat(exam_date) if exam_date else None

        return cls(
            index=int(data["index"]),
            category=ScoreColumn.validate_category_input(data.get("category")),
            label=data.get("label") or "",
            exam_date=exam_date,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreColumn):
            return NotImplemented

        return (
            self._index == other._index
            and self._category == other._category
            and self._label == other._label
            and self._exam_date == other._exam_date
        )

    def __repr__(self) -> str:
        return f"ScoreColumn({self._index}, {self._category}, {self._label!r}, {self.exam_date_iso})"

    def __str__(self) -> str:
        category = self._category.value if self._category else "[NO CATEGORY]"
        return f"COLUMN: index: {self._index}, category: {category}, label: {self._label}"

    # === data validators ===

    @staticmethod
    def validate_category_input(category: ScoreCategory | str | None) -> ScoreCategory | None:
        """
        Validates and normalizes input for a `ScoreColumn` category.

        Accepts None or a blank string as "no category", otherwise the value must match a `ScoreCategory`.

        Raises:
            ValueError: If the input does not name a known category.
        """
        if category is None or category == "":
            return None

        try:
            return ScoreCategory(category)

        except ValueError:
            raise ValueError(f"Unknown score category: {category}.")
