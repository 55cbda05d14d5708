"""Seedr service: one entry point wiring every component to a shared client."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx

from seedr_client.api.client import SeedrClient, seedr_client_from_config
from seedr_client.api.device import DeviceAuthFlow, device_auth_flow_from_config
from seedr_client.api.models import (
    ROOT_FOLDER_ID,
    AccessToken,
    AccountInfo,
    ClearResult,
    CredentialStatus,
    DeviceCode,
    VideoFile,
)
from seedr_client.storage.account import AccountUtilities
from seedr_client.storage.folders import FolderBrowser, folder_browser_from_config
from seedr_client.storage.transfers import DEFAULT_TORRENT_FILENAME, TransferManager
from seedr_client.storage.wishlist import WishlistManager

if TYPE_CHECKING:
    from seedr_client.config import SeedrConfig

logger = logging.getLogger(__name__)


class SeedrService:
    """Every Seedr operation behind one object.

    The access token is passed explicitly to each call. Use as an async
    context manager, or call ``aclose()``, to release the HTTP client.
    """

    def __init__(
        self,
        client: SeedrClient,
        device_flow: DeviceAuthFlow,
        browser: FolderBrowser,
    ) -> None:
        """Initialise the service.

        Args:
            client: HTTP transport shared by all components.
            device_flow: Device authorization flow.
            browser: Folder browser (also backs the transfer, wishlist and
                account components).
        """
        self._client = client
        self.device_flow = device_flow
        self.folders = browser
        self.transfers = TransferManager(client, browser)
        self.wishlist = WishlistManager(client, browser)
        self.account = AccountUtilities(client, browser, self.transfers)

    async def __aenter__(self) -> SeedrService:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Device auth
    # ------------------------------------------------------------------

    async def request_device_code(self) -> DeviceCode:
        return await self.device_flow.request_device_code()

    async def poll_for_token(self, device_code: str) -> AccessToken | None:
        return await self.device_flow.poll_for_token(device_code)

    async def wait_for_token(self, code: DeviceCode) -> AccessToken:
        return await self.device_flow.wait_for_token(code)

    # ------------------------------------------------------------------
    # Folders and files
    # ------------------------------------------------------------------

    async def get_folder(self, access_token: str, folder_id: Any = None) -> dict[str, Any]:
        return await self.folders.get_folder(access_token, folder_id)

    async def get_all_video_files(
        self, access_token: str, folder_id: Any = None, parent_path: str = ""
    ) -> list[VideoFile]:
        return await self.folders.get_all_video_files(access_token, folder_id, parent_path)

    async def get_stream_url(self, access_token: str, file_id: Any) -> dict[str, Any]:
        return await self.folders.get_stream_url(access_token, file_id)

    async def create_folder(self, access_token: str, name: str) -> dict[str, Any]:
        return await self.folders.create_folder(access_token, name)

    async def get_folder_by_name(self, access_token: str, name: str) -> dict[str, Any] | None:
        return await self.folders.get_folder_by_name(access_token, name)

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    async def add_magnet(
        self, access_token: str, magnet_link: str, folder_id: Any = ROOT_FOLDER_ID
    ) -> dict[str, Any]:
        return await self.transfers.add_magnet(access_token, magnet_link, folder_id)

    async def add_torrent_file(
        self, access_token: str, content: bytes | str, filename: str = DEFAULT_TORRENT_FILENAME
    ) -> dict[str, Any]:
        return await self.transfers.add_torrent_file(access_token, content, filename)

    async def get_active_transfers(self, access_token: str) -> list[dict[str, Any]]:
        return await self.transfers.get_active_transfers(access_token)

    async def delete_torrent(self, access_token: str, torrent_id: Any) -> Any:
        return await self.transfers.delete_torrent(access_token, torrent_id)

    async def delete_folder(self, access_token: str, folder_id: Any) -> Any:
        return await self.transfers.delete_folder(access_token, folder_id)

    # ------------------------------------------------------------------
    # Wishlist
    # ------------------------------------------------------------------

    async def get_wishlist(self, access_token: str) -> list[dict[str, Any]]:
        return await self.wishlist.get_wishlist(access_token)

    async def promote_from_wishlist(self, access_token: str, wishlist_id: Any) -> dict[str, Any]:
        return await self.wishlist.promote_from_wishlist(access_token, wishlist_id)

    async def delete_from_wishlist(self, access_token: str, wishlist_id: Any) -> dict[str, Any]:
        return await self.wishlist.delete_from_wishlist(access_token, wishlist_id)

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    async def get_account_info(self, access_token: str) -> AccountInfo:
        return await self.account.get_account_info(access_token)

    async def get_user_info(self, access_token: str) -> dict[str, Any]:
        return await self.account.get_user_info(access_token)

    async def validate_credentials(self, access_token: str) -> CredentialStatus:
        return await self.account.validate_credentials(access_token)

    async def clear_account(self, access_token: str) -> ClearResult:
        return await self.account.clear_account(access_token)


def seedr_service_from_config(
    config: SeedrConfig, transport: httpx.AsyncBaseTransport | None = None
) -> SeedrService:
    """Construct a SeedrService from client configuration.

    Creates one SeedrClient and wires the device flow and folder browser
    to it; the remaining components are built on top of those.

    Args:
        config: Client configuration instance.
        transport: Optional HTTP transport override.

    Returns:
        Configured SeedrService instance.
    """
    client = seedr_client_from_config(config, transport=transport)
    logger.debug("[seedr_service_from_config] building service; base_url:%s", config.base_url)
    return SeedrService(
        client=client,
        device_flow=device_auth_flow_from_config(client, config),
        browser=folder_browser_from_config(client, config),
    )
