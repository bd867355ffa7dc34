"""
Shared fixtures for habrok tests.
"""
import uuid

import pytest
from unittest.mock import AsyncMock, MagicMock

from habrok.config import HabrokConfig
from habrok.types import HttpResponse, RequestDescriptor, TransportFailure


@pytest.fixture
def uri():
    """Unique request URI."""
    return f"https://api.viki.ng/longships/{uuid.uuid4()}"


@pytest.fixture
def descriptor(uri):
    """Sample RequestDescriptor for testing."""
    return RequestDescriptor(method="GET", uri=uri, headers={"z": "1"}, json_mode=True)


@pytest.fixture
def body():
    """Sample JSON response body."""
    return {"x": str(uuid.uuid4())}


@pytest.fixture
def response_headers():
    """Sample response headers."""
    return {"z": str(uuid.uuid4())}


@pytest.fixture
def no_delay_config():
    """Config with backoff disabled."""
    return HabrokConfig(retry_min_delay=0)


def make_adapter(*results):
    """Async adapter mock; one result is returned on every call, several in turn."""
    adapter = MagicMock()
    adapter.attempt = AsyncMock()
    if len(results) == 1:
        adapter.attempt.return_value = results[0]
    else:
        adapter.attempt.side_effect = list(results)
    return adapter


def make_sync_adapter(*results):
    """Sync adapter mock; one result is returned on every call, several in turn."""
    adapter = MagicMock()
    if len(results) == 1:
        adapter.attempt.return_value = results[0]
    else:
        adapter.attempt.side_effect = list(results)
    return adapter


@pytest.fixture
def connection_reset():
    """Retryable transport failure."""
    error = ConnectionResetError("ECONNRESET")
    return TransportFailure(error=error, code="ECONNRESET")


@pytest.fixture
def ok_response(body, response_headers):
    """Successful HttpResponse."""
    return HttpResponse(status_code=200, headers=response_headers, body=body)
