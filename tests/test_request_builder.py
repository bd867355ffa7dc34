"""
Tests for habrok request builder utilities.
"""

import platform
import sys

import pytest

from habrok import __version__
from habrok.config import HabrokConfig
from habrok.request_builder import build_descriptor, build_headers, default_headers


URI = "https://api.viki.ng/longships/42"


class TestDefaultHeaders:
    """Tests for default_headers function."""

    def test_includes_user_agent(self):
        """Should identify the library in User-Agent."""
        headers = default_headers()
        assert headers["User-Agent"].startswith("habrok")
        assert headers["User-Agent"] == f"habrok/{__version__}"

    def test_includes_runtime_headers(self):
        """Should describe the runtime platform and version."""
        headers = default_headers()
        assert headers["X-Python-Platform"] == sys.platform
        assert headers["X-Python-Version"] == platform.python_version()


class TestBuildHeaders:
    """Tests for build_headers function."""

    def test_returns_defaults_without_caller_headers(self):
        """Should return the default headers."""
        assert build_headers(HabrokConfig()) == default_headers()

    def test_caller_headers_override_defaults(self):
        """Should merge caller headers over defaults."""
        headers = build_headers(HabrokConfig(), {"User-Agent": "longship", "z": "1"})
        assert headers["User-Agent"] == "longship"
        assert headers["z"] == "1"
        assert "X-Python-Version" in headers

    def test_caller_headers_override_defaults_in_any_case(self):
        """Should replace a default whose name differs only in case."""
        headers = build_headers(HabrokConfig(), {"user-agent": "mine"})
        assert headers["user-agent"] == "mine"
        assert "User-Agent" not in headers
        assert [name for name in headers if name.lower() == "user-agent"] == ["user-agent"]
        assert "X-Python-Platform" in headers

    def test_omits_defaults_when_disabled(self):
        """Should pass caller headers through when defaults are disabled."""
        caller = {"z": "1"}
        headers = build_headers(HabrokConfig(disable_custom_headers=True), caller)
        assert headers == caller
        assert headers is not caller

    def test_returns_empty_headers_when_disabled_without_caller_headers(self):
        """Should return no headers at all."""
        assert build_headers(HabrokConfig(disable_custom_headers=True)) == {}


class TestBuildDescriptor:
    """Tests for build_descriptor function."""

    def test_sets_method_and_uri(self):
        """Should carry method and uri."""
        descriptor = build_descriptor(HabrokConfig(), "GET", URI)
        assert descriptor.method == "GET"
        assert descriptor.uri == URI

    def test_normalizes_method_case(self):
        """Should upper-case the method."""
        assert build_descriptor(HabrokConfig(), "post", URI).method == "POST"

    def test_enables_json_mode_by_default(self):
        """Should enable JSON mode by default."""
        assert build_descriptor(HabrokConfig(), "GET", URI).json_mode is True

    def test_disables_json_mode(self):
        """Should disable JSON mode when configured."""
        config = HabrokConfig(disable_automatic_json=True)
        assert build_descriptor(config, "GET", URI).json_mode is False

    def test_includes_default_headers(self):
        """Should include default headers."""
        descriptor = build_descriptor(HabrokConfig(), "GET", URI)
        assert descriptor.headers["User-Agent"].startswith("habrok")

    def test_is_immutable(self):
        """Should not allow reassignment."""
        descriptor = build_descriptor(HabrokConfig(), "GET", URI)
        with pytest.raises(AttributeError):
            descriptor.uri = "https://elsewhere.example.com"

    @pytest.mark.parametrize("method,uri", [(None, URI), ("", URI), ("GET", None), ("GET", "")])
    def test_requires_method_and_uri(self, method, uri):
        """Should reject a missing method or uri."""
        with pytest.raises(ValueError):
            build_descriptor(HabrokConfig(), method, uri)
