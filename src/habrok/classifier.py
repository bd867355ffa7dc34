"""
Outcome classification for single attempts
"""
from typing import Iterable, Optional

from .config import RETRYABLE_TRANSPORT_CODES
from .types import (
    AttemptResult,
    Classification,
    HttpResponse,
    TransportFailure,
    Verdict,
)


TOO_MANY_REQUESTS = 429


def is_retryable_status(status: int) -> bool:
    """
    Check if an HTTP status code should trigger a retry.

    Only rate limiting is treated as transient; every other error status
    fails on first occurrence.
    """
    return status == TOO_MANY_REQUESTS


def is_retryable_code(
    code: Optional[str],
    retryable_codes: Iterable[str] = RETRYABLE_TRANSPORT_CODES,
) -> bool:
    """Check if a transport error code should trigger a retry."""
    return code is not None and code in retryable_codes


def classify(
    result: AttemptResult,
    retryable_codes: Iterable[str] = RETRYABLE_TRANSPORT_CODES,
) -> Classification:
    """
    Classify the result of one attempt.

    Args:
        result: Attempt result produced by a transport adapter
        retryable_codes: Transport error codes that trigger a retry

    Returns:
        The verdict together with the result it was derived from
    """
    if isinstance(result, HttpResponse):
        if result.status_code < 400:
            return Classification(Verdict.SUCCESS, result)
        if is_retryable_status(result.status_code):
            return Classification(Verdict.RETRY, result)
        return Classification(Verdict.FAIL, result)

    if isinstance(result, TransportFailure):
        if is_retryable_code(result.code, retryable_codes):
            return Classification(Verdict.RETRY, result)
        return Classification(Verdict.FAIL, result)

    raise TypeError(f"Unsupported attempt result: {type(result).__name__}")
