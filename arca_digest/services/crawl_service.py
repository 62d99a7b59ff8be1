"""Crawl service implementation.

This module implements the month-bounded pagination over category listings.
"""
import logging
from datetime import datetime, tzinfo
from enum import Enum
from typing import Iterable

from ..models.article import Article, ListingRow
from .listing_service import ListingService

logger = logging.getLogger(__name__)


class WindowPosition(Enum):
    """목록 행의 결산 기간 대비 위치."""

    AHEAD = "ahead"
    INSIDE = "inside"
    PASSED = "passed"


def locate(date: datetime, target_year: int, target_month: int) -> WindowPosition:
    """Place date relative to the target (year, month)."""
    key = (date.year, date.month)
    target = (target_year, target_month)

    if key > target:
        return WindowPosition.AHEAD
    if key == target:
        return WindowPosition.INSIDE
    return WindowPosition.PASSED


class DateWindowCollector:
    """한 카테고리에서 결산 월의 글을 수집."""

    def __init__(
        self,
        fetcher: ListingService,
        target_year: int,
        target_month: int,
        zone: tzinfo,
    ):
        self.fetcher = fetcher
        self.target_year = target_year
        self.target_month = target_month
        self.zone = zone

    async def collect(self, category: str) -> list[Article]:
        """
        카테고리 목록을 1페이지부터 넘기며 결산 월의 글을 수집.

        Listing must be in non-increasing date order: the first row older
        than the target month ends the crawl for this category.

        Args:
            category: 카테고리 식별자

        Returns:
            List[Article]: 결산 월에 작성된 글 (목록 순서)
        """
        collected: list[Article] = []
        page = 1
        exhausted = False

        while not exhausted:
            rows = await self.fetcher.fetch_page(category, page)

            if not rows:
                logger.info(f"{category} 카테고리 {page} 페이지가 비어 있어 수집 종료")
                break

            in_window, exhausted = self._scan_page(rows)
            collected.extend(in_window)
            page += 1

        logger.info(f"{category} 카테고리 수집 완료: {len(collected)}개 ({page - 1} 페이지)")
        return collected

    def _scan_page(self, rows: Iterable[ListingRow]) -> tuple[list[Article], bool]:
        """Return the page's in-window articles and whether the window was passed."""
        articles: list[Article] = []

        for row in rows:
            position = locate(row.parse_date(self.zone), self.target_year, self.target_month)

            if position is WindowPosition.AHEAD:
                continue
            if position is WindowPosition.PASSED:
                return articles, True

            articles.append(Article.from_row(row, self.zone))

        return articles, False


class CategoryAggregator:
    """여러 카테고리의 수집 결과를 순서대로 합침."""

    def __init__(self, collector: DateWindowCollector):
        self.collector = collector

    async def aggregate(self, categories: Iterable[str]) -> list[Article]:
        """
        카테고리별 수집 결과를 입력 순서대로 연결.

        Cross-category duplicates are kept.

        Args:
            categories: 카테고리 식별자 목록

        Returns:
            List[Article]: 전체 수집 글
        """
        articles: list[Article] = []

        for category in categories:
            articles.extend(await self.collector.collect(category))

        logger.info(f"전체 카테고리 수집 완료: {len(articles)}개")
        return articles
