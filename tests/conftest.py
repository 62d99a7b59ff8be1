"""Shared test helpers."""
import json
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo

import pytest

from arca_digest.models.article import ListingRow

SEOUL = ZoneInfo("Asia/Seoul")


def make_row(
    published: Optional[str] = "2024-03-10T12:00:00+09:00",
    rate: Optional[str] = "10",
    view: Optional[str] = "100",
    title: str = "테스트 글",
    url: str = "/b/test/1?p=1",
    author: Optional[str] = "tester#1234",
    category: str = "일반",
) -> ListingRow:
    return ListingRow(
        title=title,
        url=url,
        author=author,
        published=published,
        view=view,
        rate=rate,
        category=category,
    )


def listing_html(rows: list[dict[str, Any]], category: str = "전체", notice: bool = True) -> str:
    """Render a minimal channel listing page."""
    items = []
    if notice:
        items.append(
            '<a class="vrow column notice" href="/b/test/1">'
            '<span class="title">공지</span>'
            '<time datetime="2020-01-01T00:00:00.000Z"></time></a>'
        )

    for row in rows:
        items.append(
            f'<a class="vrow column" href="{row["url"]}">'
            '<div class="vrow-inner">'
            f'<span class="vcol col-title"><span class="title">\n  {row["title"]}\n</span></span>'
            '<span class="vcol col-author"><span class="user-info">'
            f'<span data-filter="{row["author"]}">{row["author"]}</span></span></span>'
            f'<span class="vcol col-time"><time datetime="{row["published"]}">time</time></span>'
            f'<span class="vcol col-view">{row["view"]}</span>'
            f'<span class="vcol col-rate">{row["rate"]}</span>'
            "</div></a>"
        )

    return (
        "<html><body>"
        '<div class="board-category">'
        '<span class="item"><a href="?category=">전체</a></span>'
        f'<span class="item"><a class="active" href="?category=x"> {category} </a></span>'
        "</div>"
        f'<div class="list-table">{"".join(items)}</div>'
        "</body></html>"
    )


def html_row(
    title: str = "글",
    url: str = "/b/test/100",
    author: str = "tester#1234",
    published: str = "2024-03-10T03:00:00.000Z",
    view: str = "10",
    rate: str = "1",
) -> dict[str, Any]:
    return {
        "title": title,
        "url": url,
        "author": author,
        "published": published,
        "view": view,
        "rate": rate,
    }


@pytest.fixture()
def config_data() -> dict[str, Any]:
    """A valid config.json object."""
    return {
        "username": "tester",
        "password": "secret",
        "target_year": 2024,
        "target_month": 3,
        "slug": "test",
        "category": ["", "유머"],
        "need_login": False,
    }


@pytest.fixture()
def config_file(tmp_path: Path, config_data: dict[str, Any]) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_data, ensure_ascii=False), encoding="utf-8")
    return path
