"""
Configured habrok client.
"""
from typing import Optional

from .config import HabrokConfig, merge_config
from .executor import RequestExecutor
from .request_builder import build_descriptor
from .transport import (
    HttpxTransportAdapter,
    SyncHttpxTransportAdapter,
    SyncTransportAdapter,
    TransportAdapter,
)
from .types import SuccessResult


class Habrok:
    """
    Resilient HTTP request client.

    httpx clients are only created for the adapters not supplied by the
    caller, on first use, and are released by close() / aclose().

    Example:
        async with Habrok(HabrokConfig(retry_min_delay=0.5)) as habrok:
            result = await habrok.request("GET", "https://api.example.com/ships")

        with Habrok() as habrok:
            result = habrok.request_sync("GET", "https://api.example.com/ships")
    """

    def __init__(
        self,
        config: Optional[HabrokConfig] = None,
        *,
        adapter: Optional[TransportAdapter] = None,
        sync_adapter: Optional[SyncTransportAdapter] = None,
        executor_id: Optional[str] = None,
    ):
        self._config = merge_config(config)
        self._owned_adapter: Optional[HttpxTransportAdapter] = None
        self._owned_sync_adapter: Optional[SyncHttpxTransportAdapter] = None
        self._executor = RequestExecutor(
            adapter,
            self._config,
            sync_adapter=sync_adapter,
            executor_id=executor_id,
        )

    def _ensure_adapter(self) -> None:
        if self._executor.adapter is None:
            self._owned_adapter = HttpxTransportAdapter()
            self._executor.adapter = self._owned_adapter

    def _ensure_sync_adapter(self) -> None:
        if self._executor.sync_adapter is None:
            self._owned_sync_adapter = SyncHttpxTransportAdapter()
            self._executor.sync_adapter = self._owned_sync_adapter

    @property
    def RETRIES(self) -> int:
        """Attempt ceiling per request."""
        return self._executor.max_attempts

    @property
    def config(self) -> HabrokConfig:
        return self._config

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    async def request(
        self,
        method: str,
        uri: str,
        headers: Optional[dict[str, str]] = None,
    ) -> SuccessResult:
        """Make a request, retrying transient failures."""
        descriptor = build_descriptor(self._config, method, uri, headers)
        self._ensure_adapter()
        return await self._executor.execute(descriptor)

    def request_sync(
        self,
        method: str,
        uri: str,
        headers: Optional[dict[str, str]] = None,
    ) -> SuccessResult:
        """Make a blocking request, retrying transient failures."""
        descriptor = build_descriptor(self._config, method, uri, headers)
        self._ensure_sync_adapter()
        return self._executor.execute_sync(descriptor)

    def close(self) -> None:
        """Close the sync adapter created by this client"""
        if self._owned_sync_adapter is not None:
            self._owned_sync_adapter.close()
            self._owned_sync_adapter = None
            self._executor.sync_adapter = None

    async def aclose(self) -> None:
        """Close every adapter created by this client"""
        if self._owned_adapter is not None:
            await self._owned_adapter.aclose()
            self._owned_adapter = None
            self._executor.adapter = None
        self.close()

    def __enter__(self) -> "Habrok":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "Habrok":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
