# core/aggregator.py

"""
Per-category averaging of regular scores.

A category (quiz, homework, attitude) is reduced to a single average using either every graded
score or only the best N of them, as configured by its `CategorySetting`.
"""

from models.total_score_setting import CalcMethod, CategorySetting


def aggregate(scores: list[float], setting: CategorySetting) -> float:
    """
    Averages a category's graded scores according to its `CategorySetting`.

    Args:
        scores (list[float]): The graded scores for one student in one category. Absent and NaN
            entries must already be filtered out by the caller.
        setting (CategorySetting): The category's averaging method and optional N.

    Returns:
        The category average, or 0 when `scores` is empty.

    Notes:
        - With `CalcMethod.BEST_N`, N is clamped into [1, len(scores)].
        - An N that is missing or not positive falls back to averaging every score.
        - Never raises; an out-of-range N is a presentation-layer warning, not an error.
    """
    if not scores:
        return 0

    if setting.calc_method is CalcMethod.BEST_N and setting.n is not None and setting.n > 0:
        count = min(setting.n, len(scores))
        best = sorted(scores, reverse=True)[:count]
        return sum(best) / count

    return sum(scores) / len(scores)
