"""Configuration loader implementation.

This module loads config.json and applies environment variable overrides.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigurationError
from ..models.config import DEFAULT_CONFIG, REQUIRED_KEYS, SENSITIVE_KEYS, Config, ConfigKey

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("config.json")

# Environment values for these keys are taken verbatim, never JSON-decoded
STRING_KEYS = frozenset(
    {
        ConfigKey.USERNAME,
        ConfigKey.PASSWORD,
        ConfigKey.SLUG,
        ConfigKey.BASE_URL,
        ConfigKey.TIMEZONE,
        ConfigKey.OUTPUT_PATH,
        ConfigKey.COOKIE_PATH,
        ConfigKey.USER_AGENT,
    }
)


class ConfigLoader:
    """설정 로더, 설정 파일과 환경 변수를 병합."""

    def __init__(self, env_prefix: str = "ARCA_DIGEST_"):
        self.env_prefix = env_prefix
        self._config_sources: list[str] = []

    def load_config(
        self,
        config_file: Optional[Path] = None,
        use_environment: bool = True,
    ) -> Config:
        """
        설정을 불러와 검증.

        우선순위: 환경 변수 > 설정 파일 > 기본값

        Args:
            config_file: 설정 파일 경로 (기본값: ./config.json)
            use_environment: 환경 변수 사용 여부

        Returns:
            Config: 검증된 설정

        Raises:
            ConfigurationError: 파일이 없거나 형식이 잘못된 경우
        """
        config_file = config_file or DEFAULT_CONFIG_FILE
        self._config_sources = ["defaults"]

        data = self.load_from_file(config_file)
        self._config_sources.append(f"file:{config_file}")

        if use_environment:
            env_config = self.load_from_environment()
            if env_config:
                data.update(env_config)
                self._config_sources.append("environment")

        config = self.validate_config(data)

        logger.info(f"설정 로드 완료, 출처: {', '.join(self._config_sources)}")
        return config

    def load_from_file(self, config_file: Path) -> dict[str, Any]:
        """Read the JSON config object from config_file."""
        if not config_file.exists():
            raise ConfigurationError(
                f"{config_file} 파일이 없습니다.",
                "CONFIG_NOT_FOUND",
                {"path": str(config_file)},
            )

        try:
            with open(config_file, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"{config_file} 파일이 잘못되었습니다: {e}",
                "CONFIG_INVALID",
                {"path": str(config_file)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{config_file} 파일이 잘못되었습니다: JSON 객체가 아닙니다",
                "CONFIG_INVALID",
                {"path": str(config_file)},
            )

        logger.debug(f"파일에서 {len(data)}개 설정 로드: {config_file}")
        return data

    def load_from_environment(self) -> dict[str, Any]:
        """Collect overrides such as ARCA_DIGEST_TARGET_MONTH=3."""
        config: dict[str, Any] = {}
        known_keys = set(REQUIRED_KEYS) | set(DEFAULT_CONFIG)

        for key in known_keys:
            env_key = self._config_to_env_key(key)
            if env_key in os.environ:
                config[key] = self._decode_env_value(key, os.environ[env_key])

        logger.debug(f"환경 변수에서 {len(config)}개 설정 로드")
        return config

    def _decode_env_value(self, key: str, value: str) -> Any:
        if key in STRING_KEYS:
            return value

        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

        if key == ConfigKey.CATEGORY:
            return [item.strip() for item in value.split(",")]
        return value

    def _config_to_env_key(self, key: str) -> str:
        return f"{self.env_prefix}{key.upper()}"

    def validate_config(self, data: dict[str, Any]) -> Config:
        """Build a Config, turning validation failures into ConfigurationError."""
        try:
            return Config.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.error(f"설정 검증 실패: {e}")
            raise ConfigurationError(f"설정이 잘못되었습니다: {e}", "CONFIG_INVALID") from e

    def get_config_sources(self) -> list[str]:
        """Sources merged by the last load_config call."""
        return self._config_sources.copy()

    @staticmethod
    def masked(config: Config) -> dict[str, Any]:
        """Config as a dictionary with sensitive values hidden."""
        return {
            key: ("***" if key in SENSITIVE_KEYS and value else value)
            for key, value in config.to_dict().items()
        }

    def export_example(self, output_file: Path, data: dict[str, Any]) -> Path:
        """Write an example config.json."""
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")

        logger.info(f"예제 설정 저장: {output_file}")
        return output_file
