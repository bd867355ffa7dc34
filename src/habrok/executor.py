"""
Retry loop driving transport adapters
"""
import logging
import time
from typing import Callable, Optional, Union

from .types import (
    AttemptResult,
    Classification,
    RequestDescriptor,
    RetryEvent,
    RetryEventListener,
    RetryState,
    SuccessResult,
    Verdict,
)
from .config import (
    HabrokConfig,
    merge_config,
    compute_delay,
    async_sleep,
    sync_sleep,
)
from .classifier import classify
from .normalizer import build_terminal_error
from .transport import SyncTransportAdapter, TransportAdapter, to_transport_failure

logger = logging.getLogger("habrok.executor")


class RequestExecutor:
    """
    Request Executor

    Runs one logical request through a transport adapter with:
    - A fixed attempt ceiling per configured instance
    - Exponential backoff between retryable failures
    - Fail-fast on everything not known to be transient
    - Event emission for observability
    """

    def __init__(
        self,
        adapter: Optional[TransportAdapter] = None,
        config: Optional[HabrokConfig] = None,
        *,
        sync_adapter: Optional[SyncTransportAdapter] = None,
        executor_id: Optional[str] = None,
    ):
        """
        Create a new RequestExecutor.

        Args:
            adapter: Async transport adapter used by execute()
            config: Habrok configuration
            sync_adapter: Sync transport adapter used by execute_sync()
            executor_id: Optional unique identifier
        """
        self._config = merge_config(config)
        self._adapter = adapter
        self._sync_adapter = sync_adapter
        self._id = executor_id or f"habrok-{int(time.time() * 1000)}"
        self._listeners: list[RetryEventListener] = []

    def _emit(self, event: RetryEvent) -> None:
        """Emit an event to all listeners."""
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.warning(f"{self._id}: listener failed on {event.type}", exc_info=True)

    def _new_state(self) -> RetryState:
        return RetryState(
            max_attempts=self._config.max_attempts,
            min_delay_seconds=self._config.retry_min_delay,
            max_delay_seconds=self._config.retry_max_delay,
        )

    def _classify(self, result: AttemptResult) -> Classification:
        return classify(result, self._config.retryable_codes)

    def _on_result(
        self,
        descriptor: RequestDescriptor,
        state: RetryState,
        result: AttemptResult,
        started: float,
    ) -> Union[SuccessResult, float]:
        """
        Apply one attempt result to the call state.

        Returns the success result, or the delay before the next attempt.
        Raises the terminal error when the call is over.
        """
        classification = self._classify(result)
        attempt = state.attempt_index

        if classification.verdict == Verdict.SUCCESS:
            self._emit(RetryEvent(
                type="attempt:success",
                attempt=attempt,
                data={
                    "duration_seconds": time.monotonic() - started,
                    "status_code": result.status_code,
                },
            ))
            return SuccessResult.from_response(result)

        will_retry = classification.verdict == Verdict.RETRY
        if will_retry:
            state.advance()
            will_retry = not state.exhausted

        self._emit(RetryEvent(
            type="attempt:fail",
            attempt=attempt,
            data={
                "verdict": classification.verdict.value,
                "will_retry": will_retry,
                "duration_seconds": time.monotonic() - started,
            },
        ))

        if not will_retry:
            error = build_terminal_error(classification)
            logger.debug(
                f"{self._id}: {descriptor.method} {descriptor.uri} failed after "
                f"{attempt + 1} attempt(s): {error!r}"
            )
            raise error

        delay = compute_delay(
            state.attempt_index,
            state.min_delay_seconds,
            state.max_delay_seconds,
            factor=self._config.backoff_factor,
            jitter_factor=self._config.jitter_factor,
        )
        logger.info(
            f"{self._id}: retrying {descriptor.method} {descriptor.uri} "
            f"(attempt {state.attempt_index + 1}/{state.max_attempts}) in {delay:.3f}s"
        )
        self._emit(RetryEvent(
            type="retry:wait",
            attempt=attempt,
            data={"delay_seconds": delay},
        ))
        return delay

    async def execute(self, descriptor: RequestDescriptor) -> SuccessResult:
        """
        Execute a request with retry logic.

        Args:
            descriptor: The fully resolved request

        Returns:
            The response of the first successful attempt

        Raises:
            HttpError: For error responses, after exhaustion when retryable
            BaseException: The original transport error

        Example:
            executor = RequestExecutor(HttpxTransportAdapter())
            result = await executor.execute(descriptor)
        """
        if self._adapter is None:
            raise RuntimeError("RequestExecutor has no async transport adapter")

        state = self._new_state()
        while True:
            self._emit(RetryEvent(type="attempt:start", attempt=state.attempt_index))
            started = time.monotonic()

            try:
                result = await self._adapter.attempt(descriptor)
            except Exception as error:
                result = to_transport_failure(error)

            outcome = self._on_result(descriptor, state, result, started)
            if isinstance(outcome, SuccessResult):
                return outcome

            await async_sleep(outcome)

    def execute_sync(self, descriptor: RequestDescriptor) -> SuccessResult:
        """
        Execute a request with retry logic using the sync adapter.

        Blocks the calling thread during backoff.

        Args:
            descriptor: The fully resolved request

        Returns:
            The response of the first successful attempt
        """
        if self._sync_adapter is None:
            raise RuntimeError("RequestExecutor has no sync transport adapter")

        state = self._new_state()
        while True:
            self._emit(RetryEvent(type="attempt:start", attempt=state.attempt_index))
            started = time.monotonic()

            try:
                result = self._sync_adapter.attempt(descriptor)
            except Exception as error:
                result = to_transport_failure(error)

            outcome = self._on_result(descriptor, state, result, started)
            if isinstance(outcome, SuccessResult):
                return outcome

            sync_sleep(outcome)

    def on(self, listener: RetryEventListener) -> Callable[[], None]:
        """
        Add an event listener.

        Args:
            listener: Event listener function

        Returns:
            Function to remove the listener
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def off(self, listener: RetryEventListener) -> None:
        """Remove an event listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def adapter(self) -> Optional[TransportAdapter]:
        """Async transport adapter used by execute()."""
        return self._adapter

    @adapter.setter
    def adapter(self, adapter: Optional[TransportAdapter]) -> None:
        self._adapter = adapter

    @property
    def sync_adapter(self) -> Optional[SyncTransportAdapter]:
        """Sync transport adapter used by execute_sync()."""
        return self._sync_adapter

    @sync_adapter.setter
    def sync_adapter(self, adapter: Optional[SyncTransportAdapter]) -> None:
        self._sync_adapter = adapter

    @property
    def id(self) -> str:
        """Get the executor ID."""
        return self._id

    @property
    def config(self) -> HabrokConfig:
        """Get the current configuration."""
        return self._config

    @property
    def max_attempts(self) -> int:
        """Attempt ceiling shared by every call through this executor."""
        return self._config.max_attempts
