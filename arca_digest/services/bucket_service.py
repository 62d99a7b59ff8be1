"""Bucketing service implementation."""
import logging
from operator import attrgetter
from typing import Sequence

from ..models.article import Article
from ..models.result import RATE_BANDS, Bucket, BucketedResult, band_for_rate

logger = logging.getLogger(__name__)


def format_title(target_year: int, target_month: int) -> str:
    """Report heading for the target month."""
    return f"{target_year}년 {target_month}월 채널 결산"


class Bucketizer:
    """추천수 구간별 결산 서비스."""

    def bucketize(
        self, articles: Sequence[Article], target_year: int, target_month: int
    ) -> BucketedResult:
        """
        게시글을 추천수 구간으로 나누고 구간마다 추천수 오름차순 정렬.

        Args:
            articles: 수집된 전체 글
            target_year: 결산 연도
            target_month: 결산 월

        Returns:
            BucketedResult: 결산 결과
        """
        logger.info("[resultArticles]: 결과 결산 중...")

        grouped: dict[str, list[Article]] = {band.name: [] for band in RATE_BANDS}
        for article in articles:
            grouped[band_for_rate(article.rate).name].append(article)

        # sorted() is stable, so equal rates keep collection order
        buckets = tuple(
            Bucket(band, tuple(sorted(grouped[band.name], key=attrgetter("rate"))))
            for band in RATE_BANDS
        )

        result = BucketedResult(
            title=format_title(target_year, target_month),
            total=len(articles),
            all=tuple(articles),
            buckets=buckets,
        )

        logger.info("[resultArticles]: 결과 결산 완료")
        return result
