"""
Configuration utilities for habrok
"""
import asyncio
import dataclasses
import math
import random
import time
from dataclasses import dataclass
from typing import Any, Optional


# Transport error codes that are known to be transient
RETRYABLE_TRANSPORT_CODES = ("ECONNRESET",)

# Exponent cap for the backoff curve; growth past the float range resolves to the ceiling
MAX_BACKOFF_EXPONENT = 64


@dataclass(frozen=True)
class HabrokConfig:
    """Configuration for one habrok instance"""

    disable_custom_headers: bool = False
    """Suppress default header injection. Default: False"""

    disable_automatic_json: bool = False
    """Leave the response body unparsed. Default: False"""

    retry_min_delay: float = 1.0
    """Backoff floor and base delay (seconds). Default: 1.0"""

    retry_max_delay: float = 30.0
    """Backoff ceiling (seconds). Default: 30.0"""

    backoff_factor: float = 2.0
    """Exponential growth factor between retries. Default: 2.0"""

    jitter_factor: float = 0.0
    """Jitter factor (0-1). Default: 0 (deterministic)"""

    max_attempts: int = 5
    """Transport invocations allowed per logical call. Default: 5"""

    retryable_codes: tuple[str, ...] = RETRYABLE_TRANSPORT_CODES
    """Transport error codes that trigger a retry"""


DEFAULT_CONFIG = HabrokConfig()


def validate_config(config: HabrokConfig) -> None:
    """Validate habrok configuration."""
    if config.max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {config.max_attempts}")
    if config.retry_min_delay < 0:
        raise ValueError(f"retry_min_delay must be non-negative, got {config.retry_min_delay}")
    if config.retry_max_delay < 0:
        raise ValueError(f"retry_max_delay must be non-negative, got {config.retry_max_delay}")
    if config.backoff_factor < 1:
        raise ValueError(f"backoff_factor must be >= 1, got {config.backoff_factor}")
    if not 0 <= config.jitter_factor <= 1:
        raise ValueError(f"jitter_factor must be between 0 and 1, got {config.jitter_factor}")


def merge_config(config: Optional[HabrokConfig] = None, **options: Any) -> HabrokConfig:
    """
    Merge configuration with defaults.

    Args:
        config: User-provided configuration
        **options: Individual fields overriding ``config``

    Returns:
        Complete, validated configuration
    """
    merged = config if config is not None else DEFAULT_CONFIG
    if options:
        if "retryable_codes" in options:
            options["retryable_codes"] = tuple(options["retryable_codes"])
        merged = dataclasses.replace(merged, **options)
    validate_config(merged)
    return merged


def compute_delay(
    attempt: int,
    min_delay: float,
    max_delay: float,
    factor: float = 2.0,
    jitter_factor: float = 0.0,
) -> float:
    """
    Calculate the backoff delay before the given attempt.

    The first retry (attempt 1) waits ``min_delay``; every following retry
    multiplies that by ``factor``. The result is clamped to
    ``[min_delay, max_delay]``, with the ceiling applied last, so a zero
    floor or a zero ceiling both yield no delay at all.

    Args:
        attempt: Index of the attempt about to run (1 for the first retry)
        min_delay: Floor and base delay in seconds
        max_delay: Ceiling in seconds
        factor: Exponential growth factor
        jitter_factor: Jitter factor (0-1)

    Returns:
        Delay in seconds
    """
    if min_delay <= 0 or max_delay <= 0:
        return 0.0

    exponent = min(max(attempt - 1, 0), MAX_BACKOFF_EXPONENT)
    try:
        delay = min_delay * (factor ** exponent)
    except OverflowError:
        return max_delay
    if math.isinf(delay):
        return max_delay

    if jitter_factor:
        jitter_amount = random.random() * jitter_factor * delay
        delay = delay * (1 - jitter_factor / 2) + jitter_amount

    return min(max(delay, min_delay), max_delay)


async def async_sleep(seconds: float) -> None:
    """
    Sleep for a specified duration (async).

    Args:
        seconds: Duration in seconds
    """
    await asyncio.sleep(seconds)


def sync_sleep(seconds: float) -> None:
    """
    Sleep for a specified duration (sync).

    Args:
        seconds: Duration in seconds
    """
    time.sleep(seconds)
