"""
Type definitions for habrok
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional, Union
from enum import Enum


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved request envelope for one logical call"""

    method: str
    """HTTP method"""

    uri: str
    """Absolute request URI"""

    headers: dict[str, str] = field(default_factory=dict)
    """Merged request headers"""

    json_mode: bool = True
    """Whether the response body should be parsed as JSON"""


@dataclass(frozen=True)
class TransportFailure:
    """An attempt that failed below the HTTP layer"""

    error: BaseException
    """The original transport error"""

    code: Optional[str] = None
    """Machine-readable error code, e.g. ECONNRESET"""

    kind: Literal["transport"] = field(default="transport", init=False)

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class HttpResponse:
    """An attempt that produced an HTTP response"""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    kind: Literal["http"] = field(default="http", init=False)


AttemptResult = Union[TransportFailure, HttpResponse]


class Verdict(str, Enum):
    """Classifier verdict for one attempt"""
    SUCCESS = "success"
    RETRY = "retry"
    FAIL = "fail"


@dataclass(frozen=True)
class Classification:
    """Verdict plus the attempt result it was derived from"""

    verdict: Verdict
    result: AttemptResult


@dataclass
class RetryState:
    """Per-call retry bookkeeping, owned by a single execute() invocation"""

    max_attempts: int
    """Attempt ceiling"""

    min_delay_seconds: float
    """Backoff floor (seconds)"""

    max_delay_seconds: float
    """Backoff ceiling (seconds)"""

    attempt_index: int = 0
    """0-based attempt index"""

    def advance(self) -> int:
        self.attempt_index += 1
        return self.attempt_index

    @property
    def exhausted(self) -> bool:
        return self.attempt_index >= self.max_attempts


@dataclass(frozen=True)
class SuccessResult:
    """Resolved value of a successful call"""

    status_code: int
    headers: dict[str, str]
    body: Any

    @classmethod
    def from_response(cls, response: HttpResponse) -> "SuccessResult":
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            body=response.body,
        )


# Event types
EventType = Literal[
    "attempt:start",
    "attempt:success",
    "attempt:fail",
    "retry:wait",
]


@dataclass
class RetryEvent:
    """Event emitted by the request executor"""

    type: EventType
    """Event type"""

    attempt: int
    """Current attempt index"""

    data: dict[str, Any] = field(default_factory=dict)
    """Event-specific data"""


# Event listener type
RetryEventListener = Callable[[RetryEvent], None]
