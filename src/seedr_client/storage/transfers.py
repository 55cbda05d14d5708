"""Adding and removing torrents."""

from __future__ import annotations

import base64
import json
import logging
import re
from typing import Any

from seedr_client.api.client import SeedrClient, SeedrError, error_payload
from seedr_client.api.models import (
    DELETE_TYPE_FOLDER,
    DELETE_TYPE_TORRENT,
    FIELD_ERROR,
    FIELD_TRANSFERS,
    FUNC_ADD_TORRENT,
    FUNC_DELETE,
    PARAM_TORRENT_FILE,
    ROOT_FOLDER_ID,
    DeleteItem,
)
from seedr_client.storage.folders import FolderBrowser

logger = logging.getLogger(__name__)

DEFAULT_TORRENT_FILENAME = "torrent.torrent"
TORRENT_CONTENT_TYPE = "application/x-bittorrent"

_DATA_URI_RE = re.compile(r"data:.*?;base64,(.*)", re.DOTALL)


class AddTorrentError(SeedrError):
    """Raised when the server accepts the request but reports a failure in the body."""


def decode_torrent_content(content: bytes | str) -> bytes:
    """Turn raw bytes, a base64 data URI, or a bare base64 string into bytes.

    Raises:
        ValueError: If a string is not valid base64.
    """
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if content.startswith("data:"):
        match = _DATA_URI_RE.match(content)
        if match is None:
            return content.encode("utf-8")
        return base64.b64decode(match.group(1))
    return base64.b64decode(content)


class TransferManager:
    """Queues torrents for download and deletes items from the account."""

    def __init__(self, client: SeedrClient, browser: FolderBrowser) -> None:
        """Initialise the manager.

        Args:
            client: HTTP transport.
            browser: Folder browser used to read the root listing.
        """
        self._client = client
        self._browser = browser

    async def add_magnet(
        self, access_token: str, magnet_link: str, folder_id: Any = ROOT_FOLDER_ID
    ) -> dict[str, Any]:
        """Start downloading a magnet link.

        Args:
            access_token: OAuth access token.
            magnet_link: The magnet URI.
            folder_id: Target folder (-1 for the account root).

        Returns:
            Raw server response (typically ``{result, user_torrent_id, ...}``).

        Raises:
            AddTorrentError: If the response body carries an ``error`` field.
            SeedrError: On any transport failure or non-2xx response.
        """
        result = await self._client.call(
            FUNC_ADD_TORRENT,
            access_token,
            torrent_magnet=magnet_link,
            folder_id=folder_id,
        )
        if isinstance(result, dict) and result.get(FIELD_ERROR):
            logger.error("[add_magnet] server rejected magnet; error:%s", result[FIELD_ERROR])
            raise AddTorrentError(f"Failed to add magnet: {result[FIELD_ERROR]}")
        logger.info("[add_magnet] magnet added; folder_id:%s", folder_id)
        return result  # type: ignore[no-any-return]

    async def add_torrent_file(
        self,
        access_token: str,
        content: bytes | str,
        filename: str = DEFAULT_TORRENT_FILENAME,
    ) -> dict[str, Any]:
        """Upload a .torrent file.

        Args:
            access_token: OAuth access token.
            content: Raw bytes, a ``data:...;base64,`` URI, or a base64 string.
            filename: File name reported to the server.

        Returns:
            Raw server response, or ``{error, status}`` if the upload failed.
        """
        try:
            payload = decode_torrent_content(content)
            result = await self._client.upload(
                FUNC_ADD_TORRENT,
                access_token,
                field_name=PARAM_TORRENT_FILE,
                filename=filename,
                content=payload,
                content_type=TORRENT_CONTENT_TYPE,
            )
        except SeedrError as exc:
            logger.error(
                "[add_torrent_file] error adding torrent file; filename:%s;error:%s",
                filename,
                exc,
            )
            return error_payload(exc)
        except ValueError as exc:
            logger.error(
                "[add_torrent_file] torrent content is not valid base64; filename:%s", filename
            )
            return {FIELD_ERROR: str(exc), "status": None}

        logger.info(
            "[add_torrent_file] add torrent file response; filename:%s;response:%s",
            filename,
            result,
        )
        return result  # type: ignore[no-any-return]

    async def get_active_transfers(self, access_token: str) -> list[dict[str, Any]]:
        """Return the torrents currently downloading, or [] if the listing fails."""
        try:
            folder_data = await self._browser.get_folder(access_token)
        except SeedrError as exc:
            logger.error("[get_active_transfers] error getting active transfers; error:%s", exc)
            return []
        if not isinstance(folder_data, dict):
            return []
        return list(folder_data.get(FIELD_TRANSFERS) or [])

    async def delete_items(self, access_token: str, items: list[DeleteItem]) -> Any:
        """Issue one ``delete`` RPC for a batch of items.

        Raises:
            SeedrError: On any transport failure or non-2xx response.
        """
        delete_arr = json.dumps([item.to_dict() for item in items])
        return await self._client.call(FUNC_DELETE, access_token, delete_arr=delete_arr)

    async def delete_torrent(self, access_token: str, torrent_id: Any) -> Any:
        """Remove a torrent from active downloads."""
        result = await self.delete_items(
            access_token, [DeleteItem(type=DELETE_TYPE_TORRENT, id=str(torrent_id))]
        )
        logger.info(
            "[delete_torrent] delete torrent response; torrent_id:%s;response:%s",
            torrent_id,
            result,
        )
        return result

    async def delete_folder(self, access_token: str, folder_id: Any) -> Any:
        """Delete a folder and everything in it."""
        return await self.delete_items(
            access_token, [DeleteItem(type=DELETE_TYPE_FOLDER, id=folder_id)]
        )
