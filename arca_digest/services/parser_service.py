"""Parser service implementation.

This module extracts listing rows and form tokens from arca.live pages.
"""
import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..models.article import ListingRow

logger = logging.getLogger(__name__)


class ParserService:
    """arca.live 페이지 파싱 서비스."""

    def __init__(self):
        # Exact class match skips notice rows ("vrow column notice")
        self.row_selector = 'a[class="vrow column"]'
        self.active_category_selector = ".item > a[class=active]"
        self.csrf_selector = "input[name=_csrf]"

        self.title_selector = ".title"
        self.author_selector = ".user-info > span"
        self.author_attribute = "data-filter"
        self.time_selector = "time"
        self.view_selector = ".col-view"
        self.rate_selector = ".col-rate"

    def parse_listing(self, html: str) -> list[ListingRow]:
        """
        게시판 목록 페이지에서 글 목록 추출.

        Args:
            html: 목록 페이지 HTML

        Returns:
            List[ListingRow]: 페이지에 나타난 순서대로의 목록 행, 글이 없으면 빈 목록
        """
        soup = BeautifulSoup(html, "html.parser")
        category = self.parse_active_category(soup)

        rows = [self._parse_row(element, category) for element in soup.select(self.row_selector)]

        logger.debug(f"목록 페이지 파싱: {len(rows)}개 행, 카테고리 '{category}'")
        return rows

    def parse_active_category(self, soup: BeautifulSoup) -> str:
        """Label of the highlighted category tab."""
        active = soup.select_one(self.active_category_selector)
        return active.get_text().strip() if active else ""

    def _parse_row(self, element: Tag, category: str) -> ListingRow:
        time_element = element.select_one(self.time_selector)
        author_element = element.select_one(self.author_selector)

        return ListingRow(
            title=self._text(element, self.title_selector) or "",
            url=element.get("href", ""),
            author=author_element.get(self.author_attribute) if author_element else None,
            published=time_element.get("datetime") if time_element else None,
            view=self._text(element, self.view_selector),
            rate=self._text(element, self.rate_selector),
            category=category,
        )

    def _text(self, element: Tag, selector: str) -> Optional[str]:
        """Whitespace-normalized text of the first match, or None."""
        found = element.select_one(selector)
        if found is None:
            return None
        return " ".join(found.get_text().split())

    def extract_csrf_token(self, html: str) -> Optional[str]:
        """Value of the login form's hidden _csrf input."""
        soup = BeautifulSoup(html, "html.parser")
        field = soup.select_one(self.csrf_selector)
        if field is None:
            return None

        value = field.get("value")
        return value or None
