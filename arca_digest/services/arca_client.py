"""arca.live HTTP client.

This module wraps an aiohttp session with the site's base URL, browser-like
headers and a cookie jar persisted between runs.
"""
import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import aiohttp

from ..lib.errors import FetchError

logger = logging.getLogger(__name__)


class ArcaClient:
    """arca.live 인증 HTTP 클라이언트."""

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        cookie_path: Optional[Path] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.cookie_path = cookie_path
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(f"HTTP 클라이언트 초기화: {self.base_url}")

    async def __aenter__(self) -> "ArcaClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        """Open the session, restoring saved cookies if present."""
        if self._session is not None:
            return

        cookie_jar = aiohttp.CookieJar()
        if self.cookie_path and self.cookie_path.exists():
            cookie_jar.load(self.cookie_path)
            logger.info(f"저장된 쿠키 불러옴: {self.cookie_path}")

        self._session = aiohttp.ClientSession(
            cookie_jar=cookie_jar,
            headers={
                "User-Agent": self.user_agent,
                "Origin": self.base_url,
            },
        )

    async def close(self) -> None:
        """Persist cookies and close the session."""
        if self._session is None:
            return

        if self.cookie_path:
            self.cookie_path.parent.mkdir(parents=True, exist_ok=True)
            self._session.cookie_jar.save(self.cookie_path)
            logger.debug(f"쿠키 저장 완료: {self.cookie_path}")

        await self._session.close()
        self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("ArcaClient 세션이 열려 있지 않습니다")
        return self._session

    def url_for(self, path: str) -> str:
        """Build an absolute URL from a site-relative path."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_text(self, path: str, params: Optional[dict[str, str]] = None) -> str:
        """
        GET 요청 후 본문 반환.

        Args:
            path: 사이트 기준 상대 경로
            params: 쿼리 파라미터

        Returns:
            str: 응답 본문

        Raises:
            FetchError: 연결 실패, 시간 초과 또는 4xx/5xx 응답
        """
        url = self.url_for(path)

        try:
            async with self.session.get(url, params=params) as response:
                if response.status >= 400:
                    raise FetchError(
                        f"HTTP {response.status}: {url}",
                        "HTTP_ERROR",
                        {"url": url, "status": response.status},
                    )
                return await response.text()

        except asyncio.TimeoutError as e:
            raise FetchError(f"요청 시간 초과: {url}", "TIMEOUT", {"url": url}) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"연결 실패: {url} ({e})", "CONNECTION_FAILED", {"url": url}) from e

    async def post_form(self, path: str, form: dict[str, Any]) -> int:
        """
        폼 POST 요청 (리다이렉트를 따라가지 않음).

        Args:
            path: 사이트 기준 상대 경로
            form: 폼 필드

        Returns:
            int: 응답 상태 코드
        """
        url = self.url_for(path)

        try:
            async with self.session.post(
                url,
                data=form,
                allow_redirects=False,
                headers={"Referer": url},
            ) as response:
                await response.read()
                return response.status

        except asyncio.TimeoutError as e:
            raise FetchError(f"요청 시간 초과: {url}", "TIMEOUT", {"url": url}) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"연결 실패: {url} ({e})", "CONNECTION_FAILED", {"url": url}) from e
