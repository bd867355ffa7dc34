"""
Request builder utilities for habrok.
"""
import logging
import platform
import sys
from typing import Optional

from .config import HabrokConfig
from .types import RequestDescriptor

logger = logging.getLogger("habrok.request_builder")


def default_headers() -> dict[str, str]:
    """Headers injected into every request unless disabled."""
    from . import __version__

    return {
        "User-Agent": f"habrok/{__version__}",
        "X-Python-Platform": sys.platform,
        "X-Python-Version": platform.python_version(),
    }


def build_headers(
    config: HabrokConfig,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, str]:
    """Build request headers: defaults first, caller headers on top."""
    if config.disable_custom_headers:
        return dict(headers or {})

    result = default_headers()
    if headers:
        # Header names are case-insensitive; a caller header replaces any
        # default spelled differently.
        overridden = {name.lower() for name in headers}
        result = {name: value for name, value in result.items() if name.lower() not in overridden}
        result.update(headers)
    return result


def build_descriptor(
    config: HabrokConfig,
    method: str,
    uri: str,
    headers: Optional[dict[str, str]] = None,
) -> RequestDescriptor:
    """
    Build the immutable envelope for one logical call.

    Args:
        config: Habrok configuration
        method: HTTP method
        uri: Absolute request URI
        headers: Caller headers, merged over the defaults

    Returns:
        The request descriptor handed to the transport adapter
    """
    if not method:
        raise ValueError("method is required")
    if not uri:
        raise ValueError("uri is required")

    descriptor = RequestDescriptor(
        method=method.upper(),
        uri=uri,
        headers=build_headers(config, headers),
        json_mode=not config.disable_automatic_json,
    )
    logger.debug(f"build_descriptor: {descriptor.method} {descriptor.uri} json_mode={descriptor.json_mode}")
    return descriptor
