"""Report rendering service.

Renders a BucketedResult into the HTML fragment posted to the channel.
"""
import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models.article import Article
from ..models.result import BucketedResult

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
REPORT_TEMPLATE = "report.html.j2"


def format_timestamp(value: datetime) -> str:
    """Format like 'yyyy-MM-dd a hh:mm:ss' in the ko-KR locale."""
    meridiem = "오전" if value.hour < 12 else "오후"
    return f"{value:%Y-%m-%d} {meridiem} {value:%I:%M:%S}"


class ReportRenderer:
    """결산 HTML 생성 서비스."""

    def __init__(self, base_url: str, zone: tzinfo, detail_min_rate: int = 50):
        self.base_url = base_url.rstrip("/")
        self.zone = zone
        self.detail_min_rate = detail_min_rate

        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, result: BucketedResult, rendered_at: Optional[datetime] = None) -> str:
        """
        결산 결과를 HTML 로 변환.

        Args:
            result: 결산 결과
            rendered_at: 집계 시각 (기본값: 현재 시각)

        Returns:
            str: HTML 문서
        """
        logger.info("[makeHtml]: HTML 생성 중...")

        rendered_at = (rendered_at or datetime.now(self.zone)).astimezone(self.zone)
        template = self.env.get_template(REPORT_TEMPLATE)

        document = template.render(
            title=result.title,
            rendered_at=format_timestamp(rendered_at),
            total=result.total,
            buckets=[
                {"label": bucket.label, "count": len(bucket), "share": result.share(bucket)}
                for bucket in result.buckets
            ],
            sections=[
                {
                    "label": bucket.label,
                    "entries": [self._entry(article) for article in bucket.articles],
                }
                for bucket in result.buckets
                if self._is_detailed(bucket.band.lower)
            ],
        )

        logger.info("[makeHtml]: HTML 생성 완료")
        return document

    def _is_detailed(self, lower: Optional[int]) -> bool:
        # "ten" is labelled from 0
        return (lower if lower is not None else 0) >= self.detail_min_rate

    def _entry(self, article: Article) -> dict[str, Any]:
        return {
            "title": article.title,
            "author": article.author,
            "author_link": None if article.is_anonymous() else article.profile_path(),
            "date": format_timestamp(article.date.astimezone(self.zone)),
            "view": article.view,
            "rate": article.rate,
            "category": article.category,
            "href": article.url,
            "absolute_url": article.absolute_url(self.base_url),
        }

    def write(
        self, result: BucketedResult, output_path: Path, rendered_at: Optional[datetime] = None
    ) -> Path:
        """Render result and write it to output_path."""
        document = self.render(result, rendered_at)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")

        logger.info(f"결산 파일 저장 완료: {output_path}")
        return output_path
