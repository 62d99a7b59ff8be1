"""Listing page fetcher.

Fetches one page of a channel's category listing. Pages are expected in
non-increasing date order; the collector relies on that to stop.
"""
import asyncio
import logging

from ..models.article import ListingRow
from .arca_client import ArcaClient
from .parser_service import ParserService

logger = logging.getLogger(__name__)


class ListingService:
    """채널 목록 페이지 조회 서비스."""

    def __init__(
        self,
        client: ArcaClient,
        parser: ParserService,
        slug: str,
        request_delay: float,
    ):
        self.client = client
        self.parser = parser
        self.slug = slug
        self.request_delay = request_delay

    async def fetch_page(self, category: str, page: int) -> list[ListingRow]:
        """
        카테고리 목록의 한 페이지 조회.

        Args:
            category: 카테고리 식별자
            page: 1부터 시작하는 페이지 번호

        Returns:
            List[ListingRow]: 페이지 순서의 목록 행, 페이지가 끝났으면 빈 목록
        """
        # Fixed courtesy delay before every request
        await asyncio.sleep(self.request_delay)

        logger.info(f"[getArticles]: {category} 카테고리 {page} 페이지 글 가져오는 중...")

        html = await self.client.get_text(
            f"b/{self.slug}", params={"category": category, "p": str(page)}
        )
        rows = self.parser.parse_listing(html)

        logger.info(
            f"[getArticles]: {category} 카테고리 {page} 페이지 글 가져오기 완료 ({len(rows)}개)"
        )
        return rows
