"""HTTP client for the recipe generation backend."""

import asyncio
import json
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from roto.api.base import (
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    ServerError,
    UnknownNetworkError,
)
from roto.config import get_settings
from roto.logging_config import LoggingContext, get_logger
from roto.storage import StorageError

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class APIClient:
    """Sends JSON POST requests with trace headers and decodes typed responses."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        device_id_provider: Callable[[], str],
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url if base_url is not None else settings.api_base_url
        self.timeout = timeout or settings.request_timeout or self.DEFAULT_TIMEOUT
        self.device_id_provider = device_id_provider
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={
                    "Accept": "application/json",
                    "User-Agent": "Roto/1.0",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def build_url(self, endpoint: str) -> httpx.URL:
        """Join base URL and endpoint, rejecting anything that is not absolute http(s)."""
        raw = f"{self.base_url}{endpoint}"
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as e:
            raise InvalidURLError(f"Invalid URL {raw!r}: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(f"Invalid URL {raw!r}: expected an absolute http(s) URL")
        return url

    @staticmethod
    def encode_body(body: BaseModel | dict[str, Any] | list[Any]) -> bytes:
        """Serialize the request body. Fails instead of sending an empty body."""
        try:
            if isinstance(body, BaseModel):
                return body.model_dump_json().encode("utf-8")
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise UnknownNetworkError(f"Could not serialize request body: {e}", cause=e) from e

    def _device_id(self) -> str | None:
        try:
            return self.device_id_provider()
        except StorageError as e:
            logger.warning(f"Sending request without device id: {e}")
            return None

    async def post(
        self,
        endpoint: str,
        body: BaseModel | dict[str, Any] | list[Any],
        response_model: type[T],
    ) -> T:
        """
        POST ``body`` as JSON to ``base_url + endpoint`` and decode the reply.

        Args:
            endpoint: Path appended to the base URL, e.g. "/generate".
            body: Pydantic model or JSON-compatible value.
            response_model: Model the 2xx body must validate against.

        Returns:
            The decoded response.

        Raises:
            InvalidURLError: URL could not be built.
            InvalidResponseError: Malformed HTTP response.
            ServerError: Status outside 200-299.
            DecodingError: Body is not JSON matching ``response_model``.
            UnknownNetworkError: Serialization failure, timeout or any
                other transport failure.
        """
        url = self.build_url(endpoint)
        content = self.encode_body(body)

        request_id = str(uuid.uuid4())
        device_id = await asyncio.to_thread(self._device_id)
        headers = {"Content-Type": "application/json", "X-Request-ID": request_id}
        if device_id:
            headers["X-Device-ID"] = device_id

        with LoggingContext(request_id=request_id, device_id=device_id):
            client = await self._get_client()
            logger.info(f"POST {url}")

            try:
                response = await client.post(url, content=content, headers=headers)
            except (httpx.RemoteProtocolError, httpx.DecodingError) as e:
                logger.error(f"Malformed response from {url}: {e}")
                raise InvalidResponseError(f"Malformed response: {e}") from e
            except httpx.UnsupportedProtocol as e:
                raise InvalidURLError(f"Unsupported URL {url}: {e}") from e
            except httpx.TimeoutException as e:
                logger.error(f"Request to {url} timed out after {self.timeout}s")
                raise UnknownNetworkError(f"Request timed out: {e}", cause=e) from e
            except httpx.HTTPError as e:
                logger.error(f"Request to {url} failed: {e}")
                raise UnknownNetworkError(f"Request failed: {e}", cause=e) from e

            if not 200 <= response.status_code < 300:
                error_detail = response.text[:500] if response.content else "No details"
                logger.error(f"API error {response.status_code} for {url}: {error_detail}")
                raise ServerError(response.status_code, detail=error_detail)

            try:
                data = response_model.model_validate_json(response.content.decode("utf-8"))
            except (UnicodeDecodeError, ValidationError) as e:
                logger.error(f"Failed to decode response from {url}: {e}")
                raise DecodingError(f"Response did not match expected shape: {e}") from e

            logger.info(f"POST {url} -> {response.status_code}")
            return data

    async def __aenter__(self) -> "APIClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
