# tests/test_rank.py

import math

from core.rank import rank
from models.statistics import RankResult


def test_rank_with_ties():
    scores = [88, 92, 92, 75, 60]

    assert rank(scores, 92) == RankResult(1, 5)
    assert rank(scores, 88) == RankResult(3, 5)
    assert rank(scores, 60) == RankResult(5, 5)


def test_absent_score_is_unranked():
    assert rank([88, 92], None) is None
    assert rank([88, 92], math.nan) is None


def test_absent_scores_are_left_out_of_total():
    result = rank([88, None, 92, math.nan, 75], 75)

    assert result == RankResult(3, 3)


def test_rank_bounds():
    scores = [10, 20, 20, 30, 40, 40, 40]

    for score in scores:
        result = rank(scores, score)
        assert 1 <= result.rank <= result.total == len(scores)


def test_rank_result_str():
    assert str(RankResult(2, 30)) == "2 / 30"
