"""Bucketed result data model.

The eleven popularity bands are a fixed, ordered table. Together they cover
every integer rate exactly once: "ten" is open below and "high" open above.
"""
from dataclasses import dataclass
from typing import Optional

from .article import Article


@dataclass(frozen=True)
class RateBand:
    """추천수 구간 정의."""

    name: str
    label: str
    lower: Optional[int]
    upper: Optional[int]

    def contains(self, rate: int) -> bool:
        """Check if rate falls within this band (bounds inclusive)."""
        if self.lower is not None and rate < self.lower:
            return False
        if self.upper is not None and rate > self.upper:
            return False
        return True


RATE_BANDS: tuple[RateBand, ...] = (
    RateBand("ten", "0~19", None, 19),
    RateBand("twenty", "20~29", 20, 29),
    RateBand("thirty", "30~39", 30, 39),
    RateBand("forty", "40~49", 40, 49),
    RateBand("fifty", "50~59", 50, 59),
    RateBand("sixty", "60~69", 60, 69),
    RateBand("seventy", "70~79", 70, 79),
    RateBand("eighty", "80~89", 80, 89),
    RateBand("ninety", "90~99", 90, 99),
    RateBand("hundred", "100~199", 100, 199),
    RateBand("high", "200~", 200, None),
)


def band_for_rate(rate: int) -> RateBand:
    """Return the first band containing rate."""
    for band in RATE_BANDS:
        if band.contains(rate):
            return band

    # Unreachable: the first and last bands are open-ended.
    raise ValueError(f"추천수 구간을 찾을 수 없습니다: {rate}")


@dataclass(frozen=True)
class Bucket:
    """구간별 게시글 묶음."""

    band: RateBand
    articles: tuple[Article, ...]

    @property
    def name(self) -> str:
        return self.band.name

    @property
    def label(self) -> str:
        return self.band.label

    def __len__(self) -> int:
        return len(self.articles)


@dataclass(frozen=True)
class BucketedResult:
    """결산 결과 데이터 모델."""

    title: str
    total: int
    all: tuple[Article, ...]
    buckets: tuple[Bucket, ...]

    def __post_init__(self) -> None:
        """Validate the partition invariants."""
        if tuple(bucket.band for bucket in self.buckets) != RATE_BANDS:
            raise ValueError("결산 결과의 구간 구성이 올바르지 않습니다")

        if self.total != len(self.all):
            raise ValueError("total 은 전체 게시글 수와 같아야 합니다")

        if self.total != sum(len(bucket) for bucket in self.buckets):
            raise ValueError("구간별 게시글 수의 합이 total 과 다릅니다")

    def __getitem__(self, name: str) -> tuple[Article, ...]:
        for bucket in self.buckets:
            if bucket.name == name:
                return bucket.articles
        raise KeyError(name)

    def share(self, bucket: Bucket) -> int:
        """Percentage of all articles in bucket, rounded down."""
        if self.total == 0:
            return 0
        return len(bucket) * 100 // self.total
