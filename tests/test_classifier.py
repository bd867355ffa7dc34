"""
Tests for habrok outcome classification.

Test coverage includes:
- Decision coverage: Every classification rule
- Boundary value testing: Status codes around 400 and 429
- Idempotence: Repeated classification of the same result
"""

import pytest

from habrok.classifier import classify, is_retryable_code, is_retryable_status
from habrok.types import HttpResponse, TransportFailure, Verdict


class TestIsRetryableStatus:
    """Tests for is_retryable_status function."""

    def test_returns_true_for_429(self):
        """Should return True for 429 Too Many Requests."""
        assert is_retryable_status(429) is True

    @pytest.mark.parametrize("status", [400, 404, 500, 502, 503, 504])
    def test_returns_false_for_other_errors(self, status):
        """Should not retry any other error status."""
        assert is_retryable_status(status) is False


class TestIsRetryableCode:
    """Tests for is_retryable_code function."""

    def test_returns_true_for_connection_reset(self):
        """Should retry ECONNRESET by default."""
        assert is_retryable_code("ECONNRESET") is True

    def test_returns_false_for_missing_code(self):
        """Should not retry errors without a code."""
        assert is_retryable_code(None) is False

    def test_returns_false_for_other_codes(self):
        """Should not retry codes outside the set."""
        assert is_retryable_code("ECONNREFUSED") is False

    def test_uses_custom_code_set(self):
        """Should use the provided code set."""
        assert is_retryable_code("ETIMEDOUT", ("ETIMEDOUT",)) is True
        assert is_retryable_code("ECONNRESET", ("ETIMEDOUT",)) is False


class TestClassify:
    """Tests for classify function."""

    @pytest.mark.parametrize("status", [200, 201, 204, 301, 304, 399])
    def test_succeeds_below_400(self, status):
        """Should classify status < 400 as success."""
        result = HttpResponse(status_code=status)
        classification = classify(result)
        assert classification.verdict == Verdict.SUCCESS
        assert classification.result is result

    def test_retries_429(self):
        """Should classify 429 as retryable."""
        assert classify(HttpResponse(status_code=429)).verdict == Verdict.RETRY

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 428, 430, 500, 503])
    def test_fails_other_error_statuses(self, status):
        """Should classify any other status >= 400 as terminal."""
        assert classify(HttpResponse(status_code=status)).verdict == Verdict.FAIL

    def test_retries_retryable_transport_codes(self):
        """Should classify retryable transport codes as retryable."""
        failure = TransportFailure(error=ConnectionResetError("ECONNRESET"), code="ECONNRESET")
        assert classify(failure).verdict == Verdict.RETRY

    def test_fails_other_transport_codes(self):
        """Should classify other transport codes as terminal."""
        failure = TransportFailure(error=OSError("refused"), code="ECONNREFUSED")
        assert classify(failure).verdict == Verdict.FAIL

    def test_fails_transport_errors_without_code(self):
        """Should classify code-less transport errors as terminal."""
        failure = TransportFailure(error=ValueError("invalid input"))
        assert classify(failure).verdict == Verdict.FAIL

    def test_uses_custom_retryable_codes(self):
        """Should honour a custom code set."""
        failure = TransportFailure(error=TimeoutError("timed out"), code="ETIMEDOUT")
        assert classify(failure, ("ETIMEDOUT",)).verdict == Verdict.RETRY

    def test_is_idempotent(self):
        """Should return the same verdict for the same result."""
        for result in (
            HttpResponse(status_code=200),
            HttpResponse(status_code=429),
            HttpResponse(status_code=500),
            TransportFailure(error=ConnectionResetError("x"), code="ECONNRESET"),
            TransportFailure(error=ValueError("x")),
        ):
            assert classify(result) == classify(result)

    def test_rejects_unknown_results(self):
        """Should raise TypeError for unsupported inputs."""
        with pytest.raises(TypeError):
            classify({"statusCode": 200})
