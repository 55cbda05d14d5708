"""Account information, credential checks and bulk cleanup."""

from __future__ import annotations

import logging
from typing import Any

from seedr_client.api.client import SeedrClient, SeedrError
from seedr_client.api.models import (
    DELETE_TYPE_FILE,
    DELETE_TYPE_FOLDER,
    DELETE_TYPE_TORRENT,
    FIELD_ERROR,
    FIELD_FILES,
    FIELD_FOLDER_FILE_ID,
    FIELD_FOLDERS,
    FIELD_ID,
    FIELD_STORAGE_LIMIT,
    FIELD_STORAGE_USED,
    FIELD_TRANSFERS,
    FIELD_USER_TORRENT_ID,
    FIELD_USERNAME,
    FUNC_GET_ACCOUNT_INFO,
    FUNC_GET_SETTINGS,
    AccountInfo,
    ClearResult,
    CredentialStatus,
    DeleteItem,
)
from seedr_client.storage.folders import FolderBrowser
from seedr_client.storage.transfers import TransferManager

logger = logging.getLogger(__name__)

_GIB = 1024**3


def collect_root_items(folder_data: dict[str, Any]) -> list[DeleteItem]:
    """List every folder, file and transfer of a root listing as delete entries.

    Transfers are identified by ``user_torrent_id`` when present, else ``id``.
    """
    items: list[DeleteItem] = []
    for folder in folder_data.get(FIELD_FOLDERS) or []:
        items.append(DeleteItem(type=DELETE_TYPE_FOLDER, id=str(folder[FIELD_ID])))
    for file in folder_data.get(FIELD_FILES) or []:
        items.append(DeleteItem(type=DELETE_TYPE_FILE, id=str(file[FIELD_FOLDER_FILE_ID])))
    for transfer in folder_data.get(FIELD_TRANSFERS) or []:
        transfer_id = transfer.get(FIELD_USER_TORRENT_ID) or transfer.get(FIELD_ID)
        items.append(DeleteItem(type=DELETE_TYPE_TORRENT, id=transfer_id))
    return items


class AccountUtilities:
    """Account-level queries and maintenance."""

    def __init__(
        self, client: SeedrClient, browser: FolderBrowser, transfers: TransferManager
    ) -> None:
        self._client = client
        self._browser = browser
        self._transfers = transfers

    async def get_account_info(self, access_token: str) -> AccountInfo:
        """Fetch storage usage, computing the remaining space locally.

        Never raises: a failed request yields a zeroed AccountInfo whose
        ``error`` holds the failure message. A response without storage
        fields is returned zeroed as well, carrying the server's ``error``.
        """
        try:
            info = await self._client.call(FUNC_GET_ACCOUNT_INFO, access_token)
        except SeedrError as exc:
            logger.error("[get_account_info] error getting account info; error:%s", exc)
            return AccountInfo(error=str(exc))

        if not isinstance(info, dict):
            return AccountInfo(error="Unexpected account info response")

        used = info.get(FIELD_STORAGE_USED)
        limit = info.get(FIELD_STORAGE_LIMIT)
        if used is None or limit is None:
            logger.warning("[get_account_info] response has no storage fields")
            error = info.get(FIELD_ERROR)
            return AccountInfo(
                username=info.get(FIELD_USERNAME),
                error=str(error) if error else None,
                raw=info,
            )

        try:
            used = int(used)
            limit = int(limit)
        except (TypeError, ValueError) as exc:
            logger.error(
                "[get_account_info] storage fields are not numeric; used:%r;limit:%r",
                used,
                limit,
            )
            return AccountInfo(error=f"Invalid storage fields in account info: {exc}", raw=info)

        remaining = limit - used
        logger.info(
            "[get_account_info] storage; used_gb:%.2f;limit_gb:%.2f;free_gb:%.2f",
            used / _GIB,
            limit / _GIB,
            remaining / _GIB,
        )
        return AccountInfo(
            storage_used=used,
            storage_limit=limit,
            remaining_space=remaining,
            username=info.get(FIELD_USERNAME),
            raw=info,
        )

    async def get_user_info(self, access_token: str) -> dict[str, Any]:
        """Fetch raw account settings (``get_settings``).

        Raises:
            SeedrError: On any transport failure or non-2xx response.
        """
        settings = await self._client.call(FUNC_GET_SETTINGS, access_token)
        return settings  # type: ignore[no-any-return]

    async def validate_credentials(self, access_token: str) -> CredentialStatus:
        """Check that a token works by fetching account info."""
        account = await self.get_account_info(access_token)
        if account.error:
            return CredentialStatus(
                status="error",
                message=f"Failed to validate Seedr credentials: {account.error}",
            )
        return CredentialStatus(status="success")

    async def clear_account(self, access_token: str) -> ClearResult:
        """Delete every root folder, file and transfer in one batch.

        The deletion count is the number of items requested; the server's
        answer is logged but not checked per item.
        """
        logger.info("[clear_account] starting full account cleanup")
        try:
            folder_data = await self._browser.get_folder(access_token)
            if not isinstance(folder_data, dict):
                logger.error("[clear_account] unexpected root listing; type:%s", type(folder_data))
                return ClearResult(result=False, error="Unexpected root folder listing")
            items = collect_root_items(folder_data)
            if not items:
                logger.info("[clear_account] account already empty")
                return ClearResult(result=True, deleted_count=0)

            logger.info("[clear_account] deleting items; count:%d", len(items))
            response = await self._transfers.delete_items(access_token, items)
        except (SeedrError, KeyError, AttributeError, TypeError) as exc:
            logger.error("[clear_account] error clearing account; error:%s", exc)
            return ClearResult(result=False, error=str(exc))

        logger.info("[clear_account] cleanup response; response:%s", response)
        return ClearResult(result=True, deleted_count=len(items))
