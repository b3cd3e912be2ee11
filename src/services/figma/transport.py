"""Figma REST transport.

Issues authenticated GET requests against the Figma API, optionally tunneled
through a forward proxy, and maps every failure onto the FigmaError taxonomy.
One attempt per call; retry policy belongs to the caller.
"""

import json
from typing import Any

try:
    import httpx
except ImportError:
    httpx = None

from src.lib.config import Config
from src.lib.constants import FIGMA_API_BASE_URL, FIGMA_TOKEN_HEADER, FIGMA_USER_AGENT
from src.lib.logging import get_logger
from src.services.figma.errors import (
    CapabilityError,
    FigmaError,
    ServiceError,
    TransportError,
    UnknownError,
)

CAPABILITY_ERROR_MESSAGE = (
    "The httpx package is not available in this Python environment, so no "
    "Figma data can be fetched. Abort the current request: no alternate "
    "approach will work. Install httpx (pip install httpx) and try again."
)


class FigmaTransport:
    """Authenticated HTTP access to the Figma REST API."""

    base_url = FIGMA_API_BASE_URL

    def __init__(
        self,
        api_key: str,
        config: Config | None = None,
        logger: Any = None,
        transport: "httpx.AsyncBaseTransport | None" = None,
    ):
        """Initialize Figma transport.

        Args:
            api_key: Figma personal access token
            config: Proxy, TLS and timeout settings (defaults to Config())
            logger: Logger to use (defaults to the module structlog logger)
            transport: Optional httpx transport replacing the network
                (proxy settings are ignored when given)
        """
        self._api_key = api_key
        self.config = config or Config()
        self.logger = logger if logger is not None else get_logger(__name__)
        self._transport = transport

        if self.config.proxy_url:
            self.logger.info(f"FigmaTransport initialized with proxy: {self.config.proxy_url}")
            if not self.config.proxy_tls_verify:
                self.logger.warning(
                    "TLS certificate validation is disabled for the proxy tunnel"
                )

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every API request."""
        return {
            FIGMA_TOKEN_HEADER: self._api_key,
            "User-Agent": FIGMA_USER_AGENT,
            "Accept": "*/*",
        }

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for httpx.AsyncClient.

        trust_env is off because the proxy route is explicit; HTTP(S)_PROXY
        from the environment must not override it.
        """
        kwargs: dict[str, Any] = {
            "timeout": self.config.request_timeout_seconds,
            "follow_redirects": True,
            "trust_env": False,
        }

        if self._transport is not None:
            kwargs["transport"] = self._transport
        elif self.config.proxy_url:
            kwargs["proxy"] = self.config.proxy_url
            kwargs["verify"] = self.config.proxy_tls_verify

        return kwargs

    def build_client(self) -> "httpx.AsyncClient":
        """Create a client bound to this transport's routing.

        Raises:
            CapabilityError: httpx is not installed
        """
        if httpx is None:
            raise CapabilityError(CAPABILITY_ERROR_MESSAGE)
        return httpx.AsyncClient(**self.client_kwargs())

    async def request(self, endpoint: str) -> Any:
        """GET an API endpoint and return its decoded JSON body.

        Args:
            endpoint: Path and query appended to the API base URL

        Returns:
            Parsed response body (not validated)

        Raises:
            CapabilityError: httpx is not installed
            ServiceError: API returned a non-success status
            TransportError: No response was received
            UnknownError: Any other failure
        """
        if httpx is None:
            raise CapabilityError(CAPABILITY_ERROR_MESSAGE)

        url = f"{self.base_url}{endpoint}"
        via = f" through proxy {self.config.proxy_url}" if self.config.proxy_url else ""
        self.logger.info(f"Calling {url}{via}")

        try:
            redacted = {**self.headers, FIGMA_TOKEN_HEADER: "***"}
            self.logger.info(f"Sending request with headers: {json.dumps(redacted)}")

            async with self.build_client() as client:
                response = await client.get(url, headers=self.headers)

            self.logger.info(f"Received response with status: {response.status_code}")

            if not response.is_success:
                self.logger.error(f"Error status: {response.status_code}")
                self.logger.error(f"Error data: {response.text[:500]}")
                raise ServiceError(
                    response.status_code, response.reason_phrase or "Unknown error"
                )

            return response.json()

        except FigmaError:
            raise

        except httpx.RequestError as e:
            self.logger.error(f"Error making request: {e!r}")
            raise TransportError(f"Network error: {str(e) or type(e).__name__}") from e

        except Exception as e:
            self.logger.error(f"Error making request: {e!r}")
            raise UnknownError(f"Failed to make request to Figma API: {e}") from e
