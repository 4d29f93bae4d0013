"""
Error classification helpers mapping HTTP statuses and exceptions to
normalized ErrorCode values.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .consult_error import ConsultError
from .error_code import ErrorCode


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UNAVAILABLE,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def classify_status(status: Optional[int]) -> ErrorCode:
    """Map an HTTP status code to an :class:`ErrorCode`.

    Unlisted 5xx statuses map to ``SERVER_ERROR``; anything else unlisted maps
    to ``BAD_RESPONSE``.
    """
    if status is None:
        return ErrorCode.UNKNOWN
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.BAD_RESPONSE


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ``ConsultError`` passthrough.
        2. Timeout exceptions.
        3. ``INTERNAL`` for anything else (an adapter bug, not a provider failure).
    """
    if isinstance(exc, ConsultError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    return ErrorCode.INTERNAL


__all__ = [
    "classify_status",
    "classify_exception",
    "_HTTP_STATUS_MAP",
]
