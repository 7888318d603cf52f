# core/percentile.py

"""
Five-tier (五標) percentile statistics and the score distribution histogram.

The five reference scores follow the convention used for Taiwanese exam reports: scores are sorted
from highest to lowest, each position is given the share of the class at or below it, and the first
score to land in each band becomes that band's value. Adjacent bands that resolve to the same score
are collapsed onto the higher band, and any band left empty inherits the value of the band above it.
"""

from models.statistics import BAND_ORDER, DistributionBucket, PercentileStatistics

# lower bound (inclusive) of each band, in BAND_ORDER
BAND_THRESHOLDS: dict[str, float] = {
    "top": 0.88,
    "upper_mid": 0.75,
    "mid": 0.50,
    "lower_mid": 0.25,
    "bottom": 0.0,
}

# (label, lower bound inclusive); the last bucket catches everything below 50
DISTRIBUTION_RANGES: tuple[tuple[str, float | None], ...] = (
    ("90-100", 90),
    ("80-89", 80),
    ("70-79", 70),
    ("60-69", 60),
    ("50-59", 50),
    ("<50", None),
)


def compute_statistics(scores: list[float]) -> PercentileStatistics:
    """
    Computes the mean and the five-tier reference scores for a population.

    Args:
        scores (list[float]): Graded scores only; absent entries must already be excluded.

    Returns:
        PercentileStatistics: All fields None when `scores` is empty, otherwise the mean (rounded to
        two decimals) and the five band values.

    Notes:
        - Input order does not matter; scores are sorted internally.
        - After collapsing and filling, bands are non-increasing from `top` to `bottom`.
    """
    if not scores:
        return PercentileStatistics()

    n = len(scores)
    mean = round(sum(scores) / n, 2)

    levels: dict[str, float | None] = {band: None for band in BAND_ORDER}

    for i, score in enumerate(sorted(scores, reverse=True)):
        band = _band_for_percentile((n - i) / n)

        if levels[band] is None:
            levels[band] = score

    _collapse_ties(levels)
    _fill_forward(levels)

    return PercentileStatistics(mean=mean, **levels)


def compute_distribution(scores: list[float]) -> list[DistributionBucket]:
    buckets = [DistributionBucket(label) for label, _ in DISTRIBUTION_RANGES]

    for score in scores:
        for bucket, (_, lower_bound) in zip(buckets, DISTRIBUTION_RANGES):
            if lower_bound is None or score >= lower_bound:
                bucket.increment()
                break

    return buckets


# === helper methods ===


def _band_for_percentile(percentile: float) -> str:
    for band in BAND_ORDER:
        if percentile >= BAND_THRESHOLDS[band]:
            return band

    return BAND_ORDER[-1]


def _collapse_ties(levels: dict[str, float | None]) -> None:
    # walks top to bottom, so a collapse is visible to the next comparison
    for upper, lower in zip(BAND_ORDER, BAND_ORDER[1:]):
        if levels[upper] is not None and levels[upper] == levels[lower]:
            levels[lower] = None


def _fill_forward(levels: dict[str, float | None]) -> None:
    for upper, lower in zip(BAND_ORDER, BAND_ORDER[1:]):
        if levels[lower] is None and levels[upper] is not None:
            levels[lower] = levels[upper]
