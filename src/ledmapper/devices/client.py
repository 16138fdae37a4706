"""HTTP transport for WLED controllers."""

import logging
from typing import Any

import httpx

from ledmapper.exceptions import TransportError, wrap_http_error

logger = logging.getLogger(__name__)

CONFIG_PATH = "/cfg.json"
EDIT_PATH = "/edit"
HIGHLIGHT_PATH = "/json/si"
LED_SETTINGS_PATH = "/settings/leds"


def normalize_base_url(host: str) -> str:
    """
    Turn a host address into a base URL.

    Examples:
        >>> normalize_base_url("10.0.0.5")
        'http://10.0.0.5'
        >>> normalize_base_url("https://wled.local/")
        'https://wled.local'
    """
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


class WledClient:
    """
    Thin async wrapper around httpx for one controller.

    Every failure (connection problems, timeouts, non-2xx responses,
    unparseable JSON) surfaces as TransportError. Nothing is retried.
    """

    def __init__(
        self,
        host: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            host: Controller address, with or without scheme
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.host = host
        self.base_url = normalize_base_url(host)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def url_for(self, path: str) -> str:
        """Absolute URL for a controller path."""
        return f"{self.base_url}{path}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = self.url_for(path)
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"{method} {url} failed: {e!r}")
            raise wrap_http_error(e, url, host=self.host) from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a path and decode the JSON body."""
        response = await self._request("GET", path, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                url=self.url_for(path), reason=f"invalid JSON body: {e}", host=self.host
            ) from e

    async def post_json(self, path: str, payload: Any) -> httpx.Response:
        """POST a JSON body."""
        return await self._request("POST", path, json=payload)

    async def upload_file(
        self,
        path: str,
        field: str,
        filename: str,
        content: str,
        content_type: str = "application/json",
    ) -> httpx.Response:
        """POST a single file as multipart/form-data."""
        files = {field: (filename, content.encode("utf-8"), content_type)}
        return await self._request("POST", path, files=files)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
