# models/statistics.py

"""
Result types produced by the statistics engines.

- `PercentileStatistics`: the Taiwan five-tier reference scores (top, upper-mid, mid, lower-mid, bottom) plus the mean.
- `DistributionBucket`: one bar of the fixed six-bucket score histogram.
- `RankResult`: a competition rank within a population of graded students.

These are read-only value objects; the engines in `core/` build them.
"""

from __future__ import annotations

BAND_ORDER: tuple[str, ...] = ("top", "upper_mid", "mid", "lower_mid", "bottom")


class PercentileStatistics:

    def __init__(
        self,
        mean: float | None = None,
        top: float | None = None,
        upper_mid: float | None = None,
        mid: float | None = None,
        lower_mid: float | None = None,
        bottom: float | None = None,
    ):
        self._mean = mean
        self._bands: dict[str, float | None] = {
            "top": top,
            "upper_mid": upper_mid,
            "mid": mid,
            "lower_mid": lower_mid,
            "bottom": bottom,
        }

    # === properties ===

    @property
    def mean(self) -> float | None:
        return self._mean

    @property
    def top(self) -> float | None:
        return self._bands["top"]

    @property
    def upper_mid(self) -> float | None:
        return self._bands["upper_mid"]

    @property
    def mid(self) -> float | None:
        return self._bands["mid"]

    @property
    def lower_mid(self) -> float | None:
        return self._bands["lower_mid"]

    @property
    def bottom(self) -> float | None:
        return self._bands["bottom"]

    @property
    def is_empty(self) -> bool:
        return self._mean is None

    def bands(self) -> list[tuple[str, float | None]]:
        return [(band, self._bands[band]) for band in BAND_ORDER]

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {"mean": self._mean, **self._bands}

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PercentileStatistics):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"PercentileStatistics(mean={self._mean}, top={self.top}, upper_mid={self.upper_mid}, "
            f"mid={self.mid}, lower_mid={self.lower_mid}, bottom={self.bottom})"
        )


class DistributionBucket:

    def __init__(self, range_label: str, count: int = 0):
        self._range_label = range_label
        self._count = count

    @property
    def range_label(self) -> str:
        return self._range_label

    @property
    def count(self) -> int:
        return self._count

    def increment(self) -> None:
        self._count += 1

    def to_dict(self) -> dict:
        return {"range": self._range_label, "count": self._count}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistributionBucket):
            return NotImplemented

        return (self._range_label, self._count) == (other._range_label, other._count)

    def __repr__(self) -> str:
        return f"DistributionBucket({self._range_label!r}, {self._count})"


class RankResult:

    def __init__(self, rank: int, total: int):
        self._rank = rank
        self._total = total

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def total(self) -> int:
        return self._total

    def to_dict(self) -> dict:
        return {"rank": self._rank, "total": self._total}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RankResult):
            return NotImplemented

        return (self._rank, self._total) == (other._rank, other._total)

    def __repr__(self) -> str:
        return f"RankResult({self._rank}, {self._total})"

    def __str__(self) -> str:
        return f"{self._rank} / {self._total}"
