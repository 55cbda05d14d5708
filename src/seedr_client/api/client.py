"""Async HTTP transport for the Seedr API."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx

from seedr_client.api.models import (
    FIELD_ERROR,
    PARAM_ACCESS_TOKEN,
    PARAM_FUNC,
    RESOURCE_PATH,
)

if TYPE_CHECKING:
    from seedr_client.config import SeedrConfig

logger = logging.getLogger(__name__)


class SeedrError(Exception):
    """Base class for every error raised by this library."""


class SeedrApiError(SeedrError):
    """Raised when the Seedr API returns a non-2xx response."""

    def __init__(self, status_code: int, message: str, detail: str | None = None) -> None:
        super().__init__(f"Seedr API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.detail = detail


class SeedrTransportError(SeedrError):
    """Raised when the request never produced an HTTP response."""


class SeedrResponseError(SeedrError):
    """Raised when a 2xx response body is not valid JSON."""


def _error_detail(response: httpx.Response) -> str | None:
    """Return the ``error`` field of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get(FIELD_ERROR):
        return str(body[FIELD_ERROR])
    return None


def error_payload(exc: SeedrError) -> dict[str, Any]:
    """Render a failure as the ``{error, status}`` dict returned by soft-failing calls.

    The server's own ``error`` text wins over the exception message; ``status``
    is None when no HTTP response was received.
    """
    if isinstance(exc, SeedrApiError):
        return {FIELD_ERROR: exc.detail or str(exc), "status": exc.status_code}
    return {FIELD_ERROR: str(exc), "status": None}


class SeedrClient:
    """Thin async wrapper over one ``httpx.AsyncClient`` bound to a Seedr host.

    The access token is never stored; every call receives it explicitly.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        user_agent: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise the underlying HTTP client.

        Args:
            base_url: Service root, e.g. ``https://www.seedr.cc``.
            timeout: Per-request timeout in seconds.
            user_agent: User-Agent header value.
            transport: Optional transport override (tests pass
                ``httpx.MockTransport``).
        """
        self.base_url = base_url
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> SeedrClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Perform a GET request and decode the JSON body.

        Args:
            path: URL path relative to the base URL (must start with '/').
            params: Query string parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            SeedrApiError: If the API returns a non-2xx status code.
            SeedrTransportError: If the request could not be completed.
            SeedrResponseError: If the body is not JSON.
        """
        return await self._send("GET", path, params=params)

    async def call(self, func: str, access_token: str, **fields: Any) -> Any:
        """Invoke a ``resource.php`` RPC with a form-urlencoded body.

        Args:
            func: Remote operation name (e.g. ``fetch_file``).
            access_token: OAuth access token.
            **fields: Operation-specific form fields; ``None`` values are dropped.

        Returns:
            Parsed JSON response body.
        """
        data = {PARAM_ACCESS_TOKEN: access_token, PARAM_FUNC: func}
        data.update({k: str(v) for k, v in fields.items() if v is not None})
        logger.debug("[call] posting rpc; func:%s", func)
        return await self._send("POST", RESOURCE_PATH, data=data)

    async def upload(
        self,
        func: str,
        access_token: str,
        field_name: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> Any:
        """Invoke a ``resource.php`` RPC with a multipart body carrying one file.

        Args:
            func: Remote operation name.
            access_token: OAuth access token.
            field_name: Multipart field holding the file.
            filename: File name reported to the server.
            content: Raw file bytes.
            content_type: MIME type of the file part.

        Returns:
            Parsed JSON response body.
        """
        data = {PARAM_ACCESS_TOKEN: access_token, PARAM_FUNC: func}
        files = {field_name: (filename, content, content_type)}
        logger.debug(
            "[upload] posting multipart rpc; func:%s;filename:%s;bytes:%d",
            func,
            filename,
            len(content),
        )
        return await self._send("POST", RESOURCE_PATH, data=data, files=files)

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise SeedrTransportError(f"{method} {path} failed: {exc}") from exc

        if not response.is_success:
            detail = _error_detail(response)
            raise SeedrApiError(response.status_code, detail or response.reason_phrase, detail)

        try:
            return response.json()
        except ValueError as exc:
            raise SeedrResponseError(f"{method} {path} returned a non-JSON body") from exc


def seedr_client_from_config(
    config: SeedrConfig, transport: httpx.AsyncBaseTransport | None = None
) -> SeedrClient:
    """Construct a SeedrClient from client configuration.

    Args:
        config: Client configuration instance.
        transport: Optional transport override.

    Returns:
        Configured SeedrClient instance.
    """
    return SeedrClient(
        base_url=config.base_url,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
        transport=transport,
    )
