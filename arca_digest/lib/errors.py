"""Error types.

Every failure in the digest pipeline is fatal; these types only exist so the
CLI can report what went wrong before exiting.
"""
from typing import Optional


class DigestError(Exception):
    """결산 작업 기본 예외."""

    def __init__(self, message: str, error_code: str = "UNKNOWN", details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class ConfigurationError(DigestError):
    """config.json is missing or fails validation."""

    def __init__(self, message: str, error_code: str = "CONFIG_INVALID", details: Optional[dict] = None):
        super().__init__(message, error_code, details)


class AuthenticationError(DigestError):
    """Login did not establish a session."""

    def __init__(self, message: str, error_code: str = "LOGIN_REJECTED", details: Optional[dict] = None):
        super().__init__(message, error_code, details)


class FetchError(DigestError):
    """A page request failed at the transport level."""

    def __init__(self, message: str, error_code: str = "HTTP_ERROR", details: Optional[dict] = None):
        super().__init__(message, error_code, details)


class ParseError(DigestError):
    """A listing row lacks an expected field or holds a malformed value."""

    def __init__(self, message: str, error_code: str = "PARSE_ANOMALY", details: Optional[dict] = None):
        super().__init__(message, error_code, details)
