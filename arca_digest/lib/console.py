"""Console utilities for safe character output.

Korean report titles and log prefixes must survive consoles that are not
UTF-8 (notably the legacy Windows code page).
"""
import sys
from typing import Any


def safe_echo(message: Any, **kwargs) -> None:
    """
    인코딩 문제를 처리하며 메시지 출력.

    Args:
        message: 출력할 메시지
        **kwargs: print 에 전달할 추가 인자
    """
    try:
        print(message, **kwargs)
    except UnicodeEncodeError:
        text = message if isinstance(message, str) else repr(message)
        print(text.encode("ascii", "replace").decode("ascii"), **kwargs)



def setup_console_encoding() -> None:
    """Switch stdout/stderr to UTF-8 where the stream allows it."""
    if sys.platform != "win32":
        return

    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")
