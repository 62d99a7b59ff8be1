"""Login service.

The login form carries a CSRF token; a successful post answers with a
redirect and leaves the session cookies in the client's jar.
"""
import logging

from ..lib.errors import AuthenticationError
from .arca_client import ArcaClient
from .parser_service import ParserService

logger = logging.getLogger(__name__)

LOGIN_PATH = "u/login"
REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


class AuthService:
    """로그인 서비스."""

    def __init__(self, client: ArcaClient, parser: ParserService):
        self.client = client
        self.parser = parser

    async def login(self, username: str, password: str) -> None:
        """
        사용자 로그인.

        Args:
            username: 아이디
            password: 비밀번호

        Raises:
            AuthenticationError: CSRF 토큰이 없거나 로그인이 거부된 경우
        """
        logger.info(f"[login]: {username} 유저 로그인 중...")

        page = await self.client.get_text(LOGIN_PATH)
        csrf_token = self.parser.extract_csrf_token(page)

        if not csrf_token:
            raise AuthenticationError("로그인 폼에서 CSRF 토큰을 찾을 수 없습니다", "CSRF_MISSING")

        status = await self.client.post_form(
            LOGIN_PATH,
            {
                "_csrf": csrf_token,
                "from": "login",
                "username": username,
                "password": password,
            },
        )

        if status not in REDIRECT_STATUSES:
            raise AuthenticationError(
                f"{username} 유저 로그인 실패 (HTTP {status})",
                "LOGIN_REJECTED",
                {"status": status},
            )

        logger.info(f"[login]: {username} 유저 로그인 완료")
