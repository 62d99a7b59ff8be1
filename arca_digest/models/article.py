"""Article data model.

This module defines the raw listing row, the Article data class and the
conversion between them.
"""
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from ..lib.errors import ParseError

AUTHOR_TAG_SEPARATOR = "#"

# Anonymous posters are identified by a truncated IP, e.g. "123.45".
ANONYMOUS_AUTHOR_PATTERN = re.compile(r"\d{1,3}\.\d{1,3}$")


@dataclass(frozen=True)
class ListingRow:
    """게시판 목록의 원본 행 데이터."""

    title: str
    url: str
    author: Optional[str]
    published: Optional[str]
    view: Optional[str]
    rate: Optional[str]
    category: str

    def parse_date(self, zone: tzinfo) -> datetime:
        """
        작성 시각을 지정된 시간대의 datetime 으로 변환.

        Args:
            zone: 결산 기준 시간대

        Returns:
            datetime: 시간대가 지정된 작성 시각

        Raises:
            ParseError: 시각이 없거나 ISO-8601 형식이 아닌 경우
        """
        if not self.published:
            raise ParseError(f"작성 시각이 없습니다: {self.url}", "MISSING_TIMESTAMP")

        try:
            parsed = datetime.fromisoformat(self.published.strip())
        except ValueError as e:
            raise ParseError(
                f"작성 시각 형식이 잘못되었습니다: {self.published}",
                "INVALID_TIMESTAMP",
                {"url": self.url},
            ) from e

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=zone)
        return parsed.astimezone(zone)


def _parse_count(value: Optional[str], field: str, url: str) -> int:
    """Parse a view/rate cell, refusing to coerce junk to zero."""
    if value is None or not value.strip():
        raise ParseError(f"{field} 값이 없습니다: {url}", "MISSING_FIELD", {"field": field})

    try:
        return int(value.strip())
    except ValueError as e:
        raise ParseError(
            f"{field} 값이 숫자가 아닙니다: {value!r}",
            "NOT_A_NUMBER",
            {"field": field, "url": url},
        ) from e


@dataclass(frozen=True)
class Article:
    """채널 게시글 데이터 모델."""

    title: str
    url: str
    author: str
    date: datetime
    view: int
    rate: int
    category: str

    def __post_init__(self) -> None:
        """Validate article data after initialization."""
        self._validate_title()
        self._validate_url()
        self._validate_author()
        self._validate_date()
        self._validate_view()

    def _validate_title(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("게시글 제목은 비어 있을 수 없습니다")

    def _validate_url(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("게시글 URL 은 비어 있을 수 없습니다")

        if not self.url.startswith("/"):
            raise ValueError(f"게시글 URL 은 상대 경로여야 합니다: {self.url}")

    def _validate_author(self) -> None:
        if not self.author or not self.author.strip():
            raise ValueError("작성자는 비어 있을 수 없습니다")

    def _validate_date(self) -> None:
        if self.date.tzinfo is None:
            raise ValueError("작성 시각에는 시간대가 필요합니다")

    def _validate_view(self) -> None:
        if self.view < 0:
            raise ValueError("조회수는 음수일 수 없습니다")

    @classmethod
    def from_row(cls, row: ListingRow, zone: tzinfo) -> "Article":
        """
        목록 행을 Article 로 변환.

        Args:
            row: 파서가 추출한 목록 행
            zone: 결산 기준 시간대

        Returns:
            Article: 변환된 게시글

        Raises:
            ParseError: 필수 필드가 없거나 숫자 필드가 잘못된 경우
        """
        for field, value in (("url", row.url), ("title", row.title), ("author", row.author)):
            if not value:
                raise ParseError(
                    f"{field} 값이 없습니다: {row.url or row.title}",
                    "MISSING_FIELD",
                    {"field": field},
                )

        try:
            return cls(
                title=row.title,
                url=row.url,
                author=row.author,
                date=row.parse_date(zone),
                view=_parse_count(row.view, "view", row.url),
                rate=_parse_count(row.rate, "rate", row.url),
                category=row.category,
            )
        except ValueError as e:
            raise ParseError(str(e), "INVALID_FIELD", {"url": row.url}) from e

    @property
    def author_name(self) -> str:
        """Author name without the secondary tag."""
        return self.author.split(AUTHOR_TAG_SEPARATOR, 1)[0]

    @property
    def author_tag(self) -> Optional[str]:
        """Secondary tag after '#', if any."""
        parts = self.author.split(AUTHOR_TAG_SEPARATOR, 1)
        return parts[1] if len(parts) > 1 and parts[1] else None

    def is_anonymous(self) -> bool:
        """Check if the author is an anonymous (IP-suffixed) poster."""
        return bool(ANONYMOUS_AUTHOR_PATTERN.search(self.author_name))

    def profile_path(self) -> str:
        """Relative path of the author's profile page."""
        tag = self.author_tag
        return f"/u/@{self.author_name}" + (f"/{tag}" if tag else "")

    @property
    def clean_url(self) -> str:
        """Article URL with the query string removed."""
        return self.url.split("?", 1)[0]

    def absolute_url(self, base_url: str) -> str:
        """Absolute article URL without query parameters."""
        return base_url.rstrip("/") + self.clean_url

    def to_dict(self) -> dict:
        """Convert article to dictionary."""
        return {
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "date": self.date.isoformat(),
            "view": self.view,
            "rate": self.rate,
            "category": self.category,
        }
