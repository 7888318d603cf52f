# core/rank.py

"""
Competition ranking of one student's score within a population.
"""

import math

from models.statistics import RankResult


def rank(all_scores: list[float | None], mine: float | None) -> RankResult | None:
    """
    Ranks `mine` against `all_scores` using standard competition ranking.

    Args:
        all_scores (list[float | None]): Every student's score for one exam; absent or NaN entries are ignored.
        mine (float | None): The score being ranked.

    Returns:
        RankResult: `rank` is one more than the number of strictly higher scores, so tied scores share a
        rank and the next distinct score skips ahead; `total` is the number of graded scores.
        None: If `mine` is absent, the student is unranked.
    """
    graded = [score for score in all_scores if _is_graded(score)]

    if not _is_graded(mine):
        return None

    higher = sum(1 for score in graded if score > mine)

    return RankResult(rank=higher + 1, total=len(graded))


def _is_graded(score: float | None) -> bool:
    return score is not None and not math.isnan(score)
