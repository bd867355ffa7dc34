"""
Terminal error construction
"""
from typing import Union

import httpx

from .errors import HttpError
from .types import AttemptResult, Classification, HttpResponse, TransportFailure


UNKNOWN_REASON = "Unknown Error"


def reason_phrase(status_code: int) -> str:
    """Return the standard reason phrase for a status code."""
    return httpx.codes.get_reason_phrase(status_code) or UNKNOWN_REASON


def build_terminal_error(failure: Union[Classification, AttemptResult]) -> BaseException:
    """
    Build the error a failed call is rejected with.

    HTTP-origin failures become an ``HttpError`` carrying the status code,
    its reason phrase and the response body. Transport-origin failures
    return the original error object untouched.

    Args:
        failure: A classified failure, or the bare attempt result

    Returns:
        The error to raise
    """
    result = failure.result if isinstance(failure, Classification) else failure

    if isinstance(result, HttpResponse):
        return HttpError(
            status_code=result.status_code,
            reason=reason_phrase(result.status_code),
            data=result.body,
        )

    if isinstance(result, TransportFailure):
        return result.error

    raise TypeError(f"Unsupported attempt result: {type(result).__name__}")
