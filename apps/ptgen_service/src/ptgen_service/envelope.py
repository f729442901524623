"""Public JSON envelope and the debug payload attached to internal faults."""

import time
import traceback
from typing import Any

from common.config import get_settings
from fastapi import Request


def default_body() -> dict[str, Any]:
    """Fields every JSON response carries."""
    service = get_settings().service
    return {
        "success": False,
        "error": None,
        "format": "",
        "copyright": f"Powered by @{service.author}",
        "version": service.api_version,
        "generate_at": 0,
    }


def make_envelope(body_update: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``body_update`` on the defaults and stamp the generation time in ms."""
    return {
        **default_body(),
        **body_update,
        "generate_at": int(time.time() * 1000),
    }


def internal_error_message(exc: BaseException) -> str:
    author = get_settings().service.author
    return f"Internal Error, Please contact @{author}. Exception: {exc}"


def debug_payload(exc: BaseException, request: Request) -> dict[str, Any]:
    """Diagnostic snapshot of an internal fault, oldest frame first.

    Args:
        exc: The exception that aborted the request.
        request: Inbound request, summarised without its body.

    Returns:
        Dict with ``message``, ``exception``, ``timestamp`` and ``request`` keys.
    """
    error_type = type(exc).__name__
    frames = [
        {
            "filename": frame.filename,
            "function": frame.name,
            "lineno": frame.lineno,
            "context_line": frame.line,
        }
        for frame in traceback.extract_tb(exc.__traceback__)
    ]
    exception: dict[str, Any] = {"type": error_type, "value": str(exc)}
    if frames:
        exception["stacktrace"] = {"frames": frames}

    return {
        "message": f"{error_type}: {str(exc) or '<no message>'}",
        "exception": {"values": [exception]},
        "timestamp": time.time(),
        "request": {
            "method": request.method,
            "url": str(request.url),
            "query_string": request.url.query,
            "headers": dict(request.headers),
        },
    }
