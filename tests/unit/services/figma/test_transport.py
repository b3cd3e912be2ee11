"""Unit tests for FigmaTransport.

HTTP is served by httpx.MockTransport; no network access.
"""

from unittest.mock import Mock, patch

import httpx
import pytest

from src.lib.config import Config
from src.services.figma.errors import (
    CapabilityError,
    ServiceError,
    TransportError,
    UnknownError,
)
from src.services.figma.transport import FigmaTransport

API_KEY = "figd_secret-value"


def make_transport(handler, logger=None) -> FigmaTransport:
    """Create a transport whose requests are answered by handler."""
    return FigmaTransport(
        API_KEY,
        Config(proxy_host=""),
        logger=logger or Mock(),
        transport=httpx.MockTransport(handler),
    )


class TestRequestSuccess:
    """Test successful requests."""

    async def test_returns_parsed_json(self):
        """Test body is decoded and returned as-is."""
        transport = make_transport(lambda request: httpx.Response(200, json={"name": "File"}))

        result = await transport.request("/files/ABC123")

        assert result == {"name": "File"}

    async def test_sends_auth_and_fixed_headers(self):
        """Test token, user agent and accept headers are attached."""
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            return httpx.Response(200, json={})

        transport = make_transport(handler)
        await transport.request("/files/ABC123?depth=2")

        assert seen["url"] == "https://api.figma.com/v1/files/ABC123?depth=2"
        assert seen["headers"]["X-Figma-Token"] == API_KEY
        assert seen["headers"]["User-Agent"] == "curl/8.9.1"
        assert seen["headers"]["Accept"] == "*/*"

    async def test_logged_headers_are_redacted(self):
        """Test the token never appears in log messages."""
        logger = Mock()
        transport = make_transport(lambda request: httpx.Response(200, json={}), logger=logger)

        await transport.request("/files/ABC123")

        messages = [str(call.args[0]) for call in logger.info.call_args_list]
        assert any("***" in message for message in messages)
        assert not any(API_KEY in message for message in messages)
        assert any("Received response with status: 200" in message for message in messages)


class TestRequestFailures:
    """Test failure mapping onto the error taxonomy."""

    async def test_404_raises_service_error(self):
        """Test API error status becomes ServiceError with status."""
        transport = make_transport(lambda request: httpx.Response(404, json={"err": "Not found"}))

        with pytest.raises(ServiceError) as exc_info:
            await transport.request("/files/missing")

        assert exc_info.value.status == 404
        assert exc_info.value.message == "Not Found"

    async def test_429_keeps_status_for_branching(self):
        """Test rate limiting surfaces as ServiceError with its own code."""
        transport = make_transport(lambda request: httpx.Response(429))

        with pytest.raises(ServiceError) as exc_info:
            await transport.request("/files/ABC123")

        assert exc_info.value.status == 429

    async def test_missing_status_text_uses_unknown_error(self):
        """Test non-standard status without reason phrase."""
        transport = make_transport(lambda request: httpx.Response(599))

        with pytest.raises(ServiceError) as exc_info:
            await transport.request("/files/ABC123")

        assert exc_info.value.status == 599
        assert exc_info.value.message == "Unknown error"

    async def test_connection_failure_raises_transport_error(self):
        """Test request that never got a response."""

        def handler(request):
            raise httpx.ConnectError("proxy refused connection", request=request)

        transport = make_transport(handler)

        with pytest.raises(TransportError, match="Network error: proxy refused connection") as exc_info:
            await transport.request("/files/ABC123")

        assert not hasattr(exc_info.value, "status")

    async def test_timeout_raises_transport_error(self):
        """Test timeouts are transport failures."""

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport = make_transport(handler)

        with pytest.raises(TransportError):
            await transport.request("/files/ABC123")

    async def test_invalid_json_raises_unknown_error(self):
        """Test undecodable body is wrapped as UnknownError."""
        transport = make_transport(lambda request: httpx.Response(200, content=b"<html>proxy page</html>"))

        with pytest.raises(UnknownError, match="Failed to make request to Figma API"):
            await transport.request("/files/ABC123")

    async def test_missing_httpx_raises_capability_error_before_io(self):
        """Test capability guard fails fast without network access."""
        handler = Mock(return_value=httpx.Response(200, json={}))
        transport = make_transport(handler)

        with patch("src.services.figma.transport.httpx", None):
            with pytest.raises(CapabilityError) as exc_info:
                await transport.request("/files/ABC123")

        handler.assert_not_called()
        assert not hasattr(exc_info.value, "status")


class TestClientConfiguration:
    """Test proxy and TLS settings passed to httpx."""

    def test_proxy_route_is_used(self):
        """Test configured proxy becomes the httpx proxy."""
        transport = FigmaTransport(
            API_KEY, Config(proxy_host="proxy.corp.local", proxy_port=3128), logger=Mock()
        )

        kwargs = transport.client_kwargs()

        assert kwargs["proxy"] == "http://proxy.corp.local:3128"
        assert kwargs["trust_env"] is False
        assert kwargs["verify"] is True

    def test_relaxed_tls_is_opt_in(self):
        """Test certificate validation is only disabled when configured."""
        logger = Mock()
        transport = FigmaTransport(
            API_KEY,
            Config(proxy_host="proxy.corp.local", proxy_tls_verify=False),
            logger=logger,
        )

        assert transport.client_kwargs()["verify"] is False
        logger.warning.assert_called_once()

    def test_empty_proxy_host_connects_directly(self):
        """Test no proxy is configured when host is empty."""
        transport = FigmaTransport(API_KEY, Config(proxy_host=""), logger=Mock())

        kwargs = transport.client_kwargs()

        assert "proxy" not in kwargs
        assert kwargs["trust_env"] is False

    def test_headers_property(self):
        """Test header set matches what the proxy accepts."""
        transport = FigmaTransport(API_KEY, Config(proxy_host=""), logger=Mock())

        assert transport.headers == {
            "X-Figma-Token": API_KEY,
            "User-Agent": "curl/8.9.1",
            "Accept": "*/*",
        }
