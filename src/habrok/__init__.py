"""
Resilient HTTP request executor with retry, backoff and normalized errors.
"""
__version__ = "1.0.0"

from .types import (
    RequestDescriptor,
    TransportFailure,
    HttpResponse,
    AttemptResult,
    Verdict,
    Classification,
    RetryState,
    SuccessResult,
    RetryEvent,
    RetryEventListener,
)
from .errors import HabrokError, HttpError
from .config import (
    HabrokConfig,
    DEFAULT_CONFIG,
    RETRYABLE_TRANSPORT_CODES,
    validate_config,
    merge_config,
    compute_delay,
)
from .classifier import classify, is_retryable_status, is_retryable_code
from .normalizer import build_terminal_error, reason_phrase
from .transport import (
    TransportAdapter,
    SyncTransportAdapter,
    HttpxTransportAdapter,
    SyncHttpxTransportAdapter,
    error_code,
)
from .request_builder import default_headers, build_headers, build_descriptor
from .executor import RequestExecutor
from .client import Habrok
from .factory import create_habrok, HABROK_PRESETS


__all__ = [
    # Types
    "RequestDescriptor",
    "TransportFailure",
    "HttpResponse",
    "AttemptResult",
    "Verdict",
    "Classification",
    "RetryState",
    "SuccessResult",
    "RetryEvent",
    "RetryEventListener",
    # Errors
    "HabrokError",
    "HttpError",
    # Config
    "HabrokConfig",
    "DEFAULT_CONFIG",
    "RETRYABLE_TRANSPORT_CODES",
    "validate_config",
    "merge_config",
    "compute_delay",
    # Classification and normalization
    "classify",
    "is_retryable_status",
    "is_retryable_code",
    "build_terminal_error",
    "reason_phrase",
    # Transport
    "TransportAdapter",
    "SyncTransportAdapter",
    "HttpxTransportAdapter",
    "SyncHttpxTransportAdapter",
    "error_code",
    # Requests
    "default_headers",
    "build_headers",
    "build_descriptor",
    "RequestExecutor",
    "Habrok",
    "create_habrok",
    "HABROK_PRESETS",
]
