# models/total_score_setting.py

"""
Holds the grading configuration used to turn raw scores into a total score.

A `TotalScoreSetting` carries:
- One `CategorySetting` per `ScoreCategory` (percent weight, averaging method, and the optional N for best-N).
- `periodic_percent`: the weight applied to the average of the enabled periodic exams.
- `periodic_enabled`: which of the three periodic exams count toward the total.
- `manual_adjust_default`: the adjustment given to newly added student rows.

Notes:
- `regular_percent` is always recomputed as the sum of the category percents; a stored value is never trusted.
- `regular_percent + periodic_percent == 100` is expected but deliberately not enforced, so an instructor can
  edit the weights one at a time. Warnings for such states come from `core.reports.setting_warnings()`.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from models.score_column import ScoreCategory
from models.student_grade_row import PeriodicName, StudentGradeRow


class CalcMethod(str, Enum):
    ALL = "all"
    BEST_N = "best"


class CategorySetting:

    def __init__(
        self,
        percent: float,
        calc_method: CalcMethod = CalcMethod.ALL,
        n: int | None = None,
    ):
        # percent uses setter method for validation
        self.percent = percent
        self._calc_method = CalcMethod(calc_method)
        self._n = n

    # === properties ===

    @property
    def percent(self) -> float:
        return self._percent

    @percent.setter
    def percent(self, percent: Any) -> None:
        self._percent = validate_percent_input(percent)

    @property
    def calc_method(self) -> CalcMethod:
        return self._calc_method

    @calc_method.setter
    def calc_method(self, calc_method: CalcMethod | str) -> None:
        self._calc_method = CalcMethod(calc_method)

    @property
    def n(self) -> int | None:
        return self._n

    @n.setter
    def n(self, n: int | None) -> None:
        self._n = n

    @property
    def uses_best_n(self) -> bool:
        return self._calc_method is CalcMethod.BEST_N

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "percent": self._percent,
            "calcMethod": self._calc_method,
            "n": self._n,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CategorySetting:
        n = data.get("n")

        return cls(
            percent=data.get("percent", 0),
            calc_method=data.get("calcMethod") or CalcMethod.ALL,
            n=int(n) if n is not None else None,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategorySetting):
            return NotImplemented

        return (
            self._percent == other._percent
            and self._calc_method == other._calc_method
            and self._n == other._n
        )

    def __repr__(self) -> str:
        return f"CategorySetting({self._percent}, {self._calc_method.value}, {self._n})"


DEFAULT_CATEGORY_PERCENTS: dict[ScoreCategory, float] = {
    ScoreCategory.QUIZ: 20.0,
    ScoreCategory.HOMEWORK: 10.0,
    ScoreCategory.ATTITUDE: 10.0,
}

DEFAULT_PERIODIC_PERCENT = 40.0


class TotalScoreSetting:

    def __init__(
        self,
        periodic_percent: float,
        categories: dict[ScoreCategory, CategorySetting],
        periodic_enabled: dict[PeriodicName, bool] | None = None,
        manual_adjust_default: int = 0,
    ):
        # periodic_percent and manual_adjust_default use setter methods for validation
        self.periodic_percent = periodic_percent
        self.manual_adjust_default = manual_adjust_default
        self._categories: dict[ScoreCategory, CategorySetting] = {
            category: categories.get(category, CategorySetting(0.0))
            for category in ScoreCategory
        }
        enabled = periodic_enabled or {}
        self._periodic_enabled: dict[PeriodicName, bool] = {
            name: bool(enabled.get(name, True)) for name in PeriodicName
        }

    # === properties ===

    @property
    def regular_percent(self) -> float:
        return sum(setting.percent for setting in self._categories.values())

    @property
    def periodic_percent(self) -> float:
        return self._periodic_percent

    @periodic_percent.setter
    def periodic_percent(self, percent: Any) -> None:
        self._periodic_percent = validate_percent_input(percent)

    @property
    def manual_adjust_default(self) -> int:
        return self._manual_adjust_default

    @manual_adjust_default.setter
    def manual_adjust_default(self, manual_adjust: Any) -> None:
        self._manual_adjust_default = StudentGradeRow.validate_manual_adjust_input(
            manual_adjust
        )

    @property
    def categories(self) -> dict[ScoreCategory, CategorySetting]:
        return self._categories

    @property
    def periodic_enabled(self) -> dict[PeriodicName, bool]:
        return self._periodic_enabled

    @property
    def enabled_periodic_names(self) -> list[PeriodicName]:
        return [name for name in PeriodicName if self._periodic_enabled[name]]

    def category(self, category: ScoreCategory) -> CategorySetting:
        return self._categories[category]

    def set_periodic_enabled(self, name: PeriodicName, enabled: bool) -> None:
        self._periodic_enabled[PeriodicName(name)] = bool(enabled)

    # === public classmethods ===

    @classmethod
    def default(cls) -> TotalScoreSetting:
        return cls(
            periodic_percent=DEFAULT_PERIODIC_PERCENT,
            categories={
                category: CategorySetting(percent)
                for category, percent in DEFAULT_CATEGORY_PERCENTS.items()
            },
            periodic_enabled={name: True for name in PeriodicName},
            manual_adjust_default=0,
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "regularPercent": self.regular_percent,
            "periodicPercent": self._periodic_percent,
            "manualAdjustDefault": self._manual_adjust_default,
            "categories": {
                category: setting.to_dict()
                for category, setting in self._categories.items()
            },
            "periodicEnabled": dict(self._periodic_enabled),
        }

    @classmethod
    def from_dict(cls, data: dict) -> TotalScoreSetting:
        """
        Rebuilds a `TotalScoreSetting` from a stored dictionary.

        Missing categories fall back to their default percent with the "all" method, and missing
        periodic flags default to enabled. A stored `regularPercent` is ignored.
        """
        categories_raw = data.get("categories") or {}
        categories = {}

        for category in ScoreCategory:
            raw = categories_raw.get(category.value)
            categories[category] = (
                CategorySetting.from_dict(raw)
                if raw is not None
                else CategorySetting(DEFAULT_CATEGORY_PERCENTS[category])
            )

        periodic_percent = data.get("periodicPercent")

        return cls(
            periodic_percent=(
                DEFAULT_PERIODIC_PERCENT if periodic_percent is None else periodic_percent
            ),
            categories=categories,
            periodic_enabled={
                PeriodicName(name): enabled
                for name, enabled in (data.get("periodicEnabled") or {}).items()
            },
            manual_adjust_default=data.get("manualAdjustDefault") or 0,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TotalScoreSetting):
            return NotImplemented

        return (
            self._periodic_percent == other._periodic_percent
            and self._manual_adjust_default == other._manual_adjust_default
            and self._categories == other._categories
            and self._periodic_enabled == other._periodic_enabled
        )

    def __repr__(self) -> str:
        return f"TotalScoreSetting({self.regular_percent}, {self._periodic_percent}, {self._categories}, {self._periodic_enabled})"


# === data validators ===


def validate_percent_input(percent: Any) -> float:
    """
    Validates and normalizes a percent weight.

    Accepts any input, and then:
        - Casts to float.
        - Ensures the number is finite.
        - Ensures it is between 0 and 100, inclusive.

    Args:
        percent (Any): The input value to validate.

    Returns:
        The normalized percent (float).

    Raises:
        TypeError: If the input cannot be cast to float.
        ValueError: If the input is non-finite or out of bounds.
    """
    try:
        percent = float(percent)

    except (TypeError, ValueError):
        raise TypeError("Percent must be a number.")

    if not math.isfinite(percent):
        raise ValueError("Percent must be a finite number.")

    if percent < 0 or percent > 100:
        raise ValueError("Percent must be between 0 and 100.")

    return percent
