"""
Factory functions for creating habrok clients
"""
from typing import Any, Optional

import httpx

from .client import Habrok
from .config import HabrokConfig, merge_config
from .transport import HttpxTransportAdapter, SyncHttpxTransportAdapter


def create_habrok(
    config: Optional[HabrokConfig] = None,
    *,
    httpx_client: Optional[httpx.AsyncClient] = None,
    httpx_sync_client: Optional[httpx.Client] = None,
    **options: Any,
) -> Habrok:
    """
    Create a configured habrok client.

    Args:
        config: Base configuration (defaults when omitted)
        httpx_client: Async httpx client to send requests with
        httpx_sync_client: Sync httpx client to send requests with
        **options: Configuration fields, e.g. ``retry_min_delay=0``

    Returns:
        Habrok client

    Example:
        habrok = create_habrok(disable_custom_headers=True, retry_max_delay=5)
        result = await habrok.request("GET", "https://api.example.com/ships")
    """
    merged = merge_config(config, **options)
    adapter = HttpxTransportAdapter(httpx_client) if httpx_client is not None else None
    sync_adapter = (
        SyncHttpxTransportAdapter(httpx_sync_client) if httpx_sync_client is not None else None
    )
    return Habrok(merged, adapter=adapter, sync_adapter=sync_adapter)


# Preset configurations
HABROK_PRESETS = {
    "default": HabrokConfig(),
    "quick": HabrokConfig(
        max_attempts=3,
        retry_min_delay=0.2,
        retry_max_delay=2.0,
    ),
    "gentle": HabrokConfig(
        max_attempts=6,
        retry_min_delay=2.0,
        retry_max_delay=120.0,
        jitter_factor=0.5,
    ),
    "no_delay": HabrokConfig(
        retry_min_delay=0,
        retry_max_delay=0,
    ),
}
