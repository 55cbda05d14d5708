"""Device-code authorization against the Seedr device endpoints."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from seedr_client.api.client import SeedrApiError, SeedrClient, SeedrError
from seedr_client.api.models import (
    DEVICE_AUTHORIZE_PATH,
    DEVICE_CODE_PATH,
    PARAM_CLIENT_ID,
    PARAM_DEVICE_CODE,
    AccessToken,
    DeviceCode,
)

if TYPE_CHECKING:
    from seedr_client.config import SeedrConfig

logger = logging.getLogger(__name__)

# The authorize endpoint answers 400 while the user has not entered the code.
AUTHORIZATION_PENDING_STATUS = 400


class DeviceCodeExpiredError(SeedrError):
    """Raised when a device code expires before the user authorizes it."""


class DeviceAuthFlow:
    """Requests device codes and exchanges them for access tokens."""

    def __init__(
        self,
        client: SeedrClient,
        client_id: str,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise the device flow.

        Args:
            client: HTTP transport.
            client_id: Application identifier sent with every device request.
            sleep: Coroutine used to wait between polls.
            clock: Monotonic clock used to enforce code expiry.
        """
        self._client = client
        self._client_id = client_id
        self._sleep = sleep
        self._clock = clock

    async def request_device_code(self) -> DeviceCode:
        """Ask the server for a new device/user code pair.

        Raises:
            SeedrError: On any transport failure or non-2xx response.
        """
        raw = await self._client.get(DEVICE_CODE_PATH, params={PARAM_CLIENT_ID: self._client_id})
        code = DeviceCode.from_dict(raw)
        logger.info(
            "[request_device_code] issued device code; user_code:%s;expires_in:%d;interval:%d",
            code.user_code,
            code.expires_in,
            code.interval,
        )
        return code

    async def poll_for_token(self, device_code: str) -> AccessToken | None:
        """Check once whether the user has authorized the device.

        Args:
            device_code: The ``device_code`` from ``request_device_code``.

        Returns:
            The access token, or None while authorization is still pending.

        Raises:
            SeedrError: On any failure other than the pending signal.
        """
        try:
            raw = await self._client.get(
                DEVICE_AUTHORIZE_PATH,
                params={PARAM_DEVICE_CODE: device_code, PARAM_CLIENT_ID: self._client_id},
            )
        except SeedrApiError as exc:
            if exc.status_code == AUTHORIZATION_PENDING_STATUS:
                logger.debug("[poll_for_token] authorization pending")
                return None
            raise

        if isinstance(raw, dict) and raw.get("access_token"):
            return AccessToken.from_dict(raw)
        return None

    async def wait_for_token(self, code: DeviceCode) -> AccessToken:
        """Poll until the user authorizes the device or the code expires.

        Waits ``code.interval`` seconds between polls and gives up once
        ``code.expires_in`` seconds have elapsed since the first poll.

        Args:
            code: Device code returned by ``request_device_code``.

        Returns:
            The access token.

        Raises:
            DeviceCodeExpiredError: If the code expires first.
            SeedrError: If a poll fails for a reason other than pending.
        """
        interval = max(code.interval, 1)
        deadline = self._clock() + code.expires_in
        attempts = 0
        while True:
            attempts += 1
            token = await self.poll_for_token(code.device_code)
            if token is not None:
                logger.info("[wait_for_token] device authorized; attempts:%d", attempts)
                return token
            if self._clock() + interval > deadline:
                break
            await self._sleep(interval)

        logger.warning("[wait_for_token] device code expired; attempts:%d", attempts)
        raise DeviceCodeExpiredError(
            f"Device code {code.user_code} expired after {code.expires_in}s"
        )


def device_auth_flow_from_config(client: SeedrClient, config: SeedrConfig) -> DeviceAuthFlow:
    """Construct a DeviceAuthFlow from client configuration.

    Args:
        client: HTTP transport.
        config: Client configuration instance.

    Returns:
        Configured DeviceAuthFlow instance.
    """
    return DeviceAuthFlow(client=client, client_id=config.client_id)
