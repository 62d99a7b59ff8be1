"""Config data model.

This module defines the Config data class, default values for the
operational settings and per-key validation.
"""
from dataclasses import dataclass, fields
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class ConfigKey:
    """Configuration key constants."""

    # Account
    USERNAME = "username"
    PASSWORD = "password"
    NEED_LOGIN = "need_login"

    # Target listing
    TARGET_YEAR = "target_year"
    TARGET_MONTH = "target_month"
    SLUG = "slug"
    CATEGORY = "category"

    # Operational settings
    BASE_URL = "base_url"
    REQUEST_DELAY = "request_delay"
    TIMEZONE = "timezone"
    OUTPUT_PATH = "output_path"
    COOKIE_PATH = "cookie_path"
    USER_AGENT = "user_agent"
    DETAIL_MIN_RATE = "detail_min_rate"


REQUIRED_KEYS: tuple[str, ...] = (
    ConfigKey.USERNAME,
    ConfigKey.PASSWORD,
    ConfigKey.TARGET_YEAR,
    ConfigKey.TARGET_MONTH,
    ConfigKey.SLUG,
    ConfigKey.CATEGORY,
    ConfigKey.NEED_LOGIN,
)

# Default values for the optional settings
DEFAULT_CONFIG: dict[str, Any] = {
    ConfigKey.BASE_URL: "https://arca.live",  # 사이트 주소
    ConfigKey.REQUEST_DELAY: 5.0,  # 페이지 요청 간격（초）
    ConfigKey.TIMEZONE: "Asia/Seoul",  # 결산 기준 시간대
    ConfigKey.OUTPUT_PATH: "output.html",  # 결과 파일 경로
    ConfigKey.COOKIE_PATH: "cookies.dat",  # 쿠키 저장 경로 (aiohttp CookieJar pickle)
    ConfigKey.USER_AGENT: (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/109.0"
    ),
    ConfigKey.DETAIL_MIN_RATE: 50,  # 상세 목록에 포함할 최소 추천 구간
}

SENSITIVE_KEYS = frozenset({ConfigKey.PASSWORD})


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config_value(key: str, value: Any) -> None:
    """Validate configuration value for specific key."""
    if key in (ConfigKey.USERNAME, ConfigKey.PASSWORD):
        if not isinstance(value, str):
            raise ValueError(f"{key} 는 문자열이어야 합니다")

    elif key == ConfigKey.NEED_LOGIN:
        if not isinstance(value, bool):
            raise ValueError("need_login 은 true 또는 false 여야 합니다")

    elif key == ConfigKey.TARGET_YEAR:
        if not _is_int(value) or value <= 0:
            raise ValueError("target_year 는 양의 정수여야 합니다")

    elif key == ConfigKey.TARGET_MONTH:
        if not _is_int(value) or not 1 <= value <= 12:
            raise ValueError("target_month 는 1 에서 12 사이의 정수여야 합니다")

    elif key == ConfigKey.SLUG:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("slug 는 비어 있을 수 없습니다")
        if "/" in value or "?" in value:
            raise ValueError("slug 에는 '/' 나 '?' 를 쓸 수 없습니다")

    elif key == ConfigKey.CATEGORY:
        if not isinstance(value, (list, tuple)):
            raise ValueError("category 는 문자열 배열이어야 합니다")
        if not all(isinstance(item, str) for item in value):
            raise ValueError("category 의 모든 항목은 문자열이어야 합니다")

    elif key == ConfigKey.BASE_URL:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("base_url 은 비어 있을 수 없습니다")
        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError("base_url 은 올바른 URL 이어야 합니다")

    elif key == ConfigKey.REQUEST_DELAY:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError("request_delay 는 0 이상의 숫자여야 합니다")

    elif key == ConfigKey.TIMEZONE:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("timezone 은 비어 있을 수 없습니다")
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"알 수 없는 시간대입니다: {value}") from e

    elif key in (ConfigKey.OUTPUT_PATH, ConfigKey.COOKIE_PATH, ConfigKey.USER_AGENT):
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} 는 비어 있을 수 없습니다")

    elif key == ConfigKey.DETAIL_MIN_RATE:
        if not _is_int(value):
            raise ValueError("detail_min_rate 는 정수여야 합니다")


@dataclass(frozen=True)
class Config:
    """결산 설정 데이터 모델."""

    username: str
    password: str
    target_year: int
    target_month: int
    slug: str
    category: tuple[str, ...]
    need_login: bool
    base_url: str = DEFAULT_CONFIG[ConfigKey.BASE_URL]
    request_delay: float = DEFAULT_CONFIG[ConfigKey.REQUEST_DELAY]
    timezone: str = DEFAULT_CONFIG[ConfigKey.TIMEZONE]
    output_path: str = DEFAULT_CONFIG[ConfigKey.OUTPUT_PATH]
    cookie_path: str = DEFAULT_CONFIG[ConfigKey.COOKIE_PATH]
    user_agent: str = DEFAULT_CONFIG[ConfigKey.USER_AGENT]
    detail_min_rate: int = DEFAULT_CONFIG[ConfigKey.DETAIL_MIN_RATE]

    def __post_init__(self) -> None:
        """Validate config data after initialization."""
        for field in fields(self):
            validate_config_value(field.name, getattr(self, field.name))

        self._validate_credentials()

    def _validate_credentials(self) -> None:
        """Credentials are only mandatory when login is requested."""
        if self.need_login and (not self.username or not self.password):
            raise ValueError("need_login 이 true 이면 username 과 password 가 필요합니다")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create config from a decoded config.json object."""
        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise ValueError(f"필수 설정이 없습니다: {', '.join(missing)}")

        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"알 수 없는 설정입니다: {', '.join(unknown)}")

        values = {**DEFAULT_CONFIG, **data}
        category = values[ConfigKey.CATEGORY]
        if isinstance(category, list):
            values[ConfigKey.CATEGORY] = tuple(category)

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        data = {field.name: getattr(self, field.name) for field in fields(self)}
        data[ConfigKey.CATEGORY] = list(self.category)
        return data

    @property
    def zone(self) -> ZoneInfo:
        """Time zone used to attribute articles to a month."""
        return ZoneInfo(self.timezone)


def example_config() -> dict[str, Any]:
    """Config skeleton written by `config init`."""
    return {
        ConfigKey.USERNAME: "",
        ConfigKey.PASSWORD: "",
        ConfigKey.TARGET_YEAR: 2024,
        ConfigKey.TARGET_MONTH: 1,
        ConfigKey.SLUG: "breaking",
        ConfigKey.CATEGORY: [""],
        ConfigKey.NEED_LOGIN: False,
        **DEFAULT_CONFIG,
    }
