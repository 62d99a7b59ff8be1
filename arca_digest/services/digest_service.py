"""Digest service implementation.

Runs the whole monthly digest: login, collection, bucketing and rendering.
The report is written only after every step succeeded.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..models.config import Config
from ..models.result import BucketedResult
from .arca_client import ArcaClient
from .auth_service import AuthService
from .bucket_service import Bucketizer
from .crawl_service import CategoryAggregator, DateWindowCollector
from .listing_service import ListingService
from .parser_service import ParserService
from .report_service import ReportRenderer

logger = logging.getLogger(__name__)


class DigestService:
    """채널 월간 결산 서비스."""

    def __init__(
        self,
        config: Config,
        client: ArcaClient,
        parser: ParserService,
        bucketizer: Bucketizer,
        renderer: ReportRenderer,
    ):
        self.config = config
        self.client = client
        self.parser = parser
        self.bucketizer = bucketizer
        self.renderer = renderer

    @classmethod
    def from_config(cls, config: Config) -> "DigestService":
        """Wire the default collaborators for config."""
        return cls(
            config=config,
            client=ArcaClient(
                base_url=config.base_url,
                user_agent=config.user_agent,
                cookie_path=Path(config.cookie_path),
            ),
            parser=ParserService(),
            bucketizer=Bucketizer(),
            renderer=ReportRenderer(
                base_url=config.base_url,
                zone=config.zone,
                detail_min_rate=config.detail_min_rate,
            ),
        )

    async def collect(self, login: Optional[bool] = None) -> BucketedResult:
        """
        로그인 후 모든 카테고리를 수집하여 결산.

        Args:
            login: 로그인 여부 (기본값: 설정의 need_login)

        Returns:
            BucketedResult: 결산 결과
        """
        config = self.config
        login = config.need_login if login is None else login

        async with self.client:
            if login:
                await AuthService(self.client, self.parser).login(
                    config.username, config.password
                )

            listing = ListingService(
                client=self.client,
                parser=self.parser,
                slug=config.slug,
                request_delay=config.request_delay,
            )
            collector = DateWindowCollector(
                fetcher=listing,
                target_year=config.target_year,
                target_month=config.target_month,
                zone=config.zone,
            )
            articles = await CategoryAggregator(collector).aggregate(config.category)

        return self.bucketizer.bucketize(articles, config.target_year, config.target_month)

    async def run(
        self,
        output_path: Optional[Path] = None,
        login: Optional[bool] = None,
        rendered_at: Optional[datetime] = None,
    ) -> dict[str, Any]:
        """
        결산을 실행하고 결과 HTML 을 저장.

        Args:
            output_path: 결과 파일 경로 (기본값: 설정의 output_path)
            login: 로그인 여부 (기본값: 설정의 need_login)
            rendered_at: 집계 시각 (기본값: 현재 시각)

        Returns:
            Dict[str, Any]: 실행 결과 요약
        """
        start_time = datetime.now()
        logger.info(
            f"{self.config.slug} 채널 {self.config.target_year}년 {self.config.target_month}월 결산 시작, "
            f"카테고리: {list(self.config.category)}"
        )

        result = await self.collect(login=login)

        output_path = output_path or Path(self.config.output_path)
        self.renderer.write(result, output_path, rendered_at)

        duration = (datetime.now() - start_time).total_seconds()

        return {
            "status": "success",
            "title": result.title,
            "total": result.total,
            "buckets": {bucket.label: len(bucket) for bucket in result.buckets},
            "output": str(output_path),
            "execution_time": duration,
        }
