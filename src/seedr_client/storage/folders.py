"""Folder browsing and playable-video enumeration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from seedr_client.api.client import SeedrClient, SeedrError, error_payload
from seedr_client.api.models import (
    FIELD_FILES,
    FIELD_FOLDER_FILE_ID,
    FIELD_FOLDERS,
    FIELD_ID,
    FIELD_NAME,
    FIELD_PLAY_VIDEO,
    FIELD_SIZE,
    FOLDER_PATH,
    FUNC_ADD_FOLDER,
    FUNC_FETCH_FILE,
    PARAM_ACCESS_TOKEN,
    VideoFile,
)
from seedr_client.config import DEFAULT_MAX_FOLDER_DEPTH

if TYPE_CHECKING:
    from seedr_client.config import SeedrConfig

logger = logging.getLogger(__name__)

_ROOT_KEY = "<root>"


def join_path(parent_path: str, name: str) -> str:
    """Append ``name`` to a ``/``-joined path; an empty parent yields ``name``."""
    return f"{parent_path}/{name}" if parent_path else name


class FolderBrowser:
    """Reads the folder tree of a Seedr account."""

    def __init__(self, client: SeedrClient, max_depth: int = DEFAULT_MAX_FOLDER_DEPTH) -> None:
        """Initialise the browser.

        Args:
            client: HTTP transport.
            max_depth: Deepest subfolder level visited by ``get_all_video_files``;
                the starting folder is level 0.
        """
        self._client = client
        self._max_depth = max_depth

    async def get_folder(self, access_token: str, folder_id: Any = None) -> dict[str, Any]:
        """Fetch the raw listing of the root folder or of ``folder_id``.

        Raises:
            SeedrError: On any transport failure or non-2xx response.
        """
        path = f"{FOLDER_PATH}/{folder_id}" if folder_id else FOLDER_PATH
        folder_data = await self._client.get(path, params={PARAM_ACCESS_TOKEN: access_token})
        return folder_data  # type: ignore[no-any-return]

    async def get_all_video_files(
        self,
        access_token: str,
        folder_id: Any = None,
        parent_path: str = "",
    ) -> list[VideoFile]:
        """Collect every playable video below a folder, depth first.

        A folder's own files come before the contents of its subfolders, and
        both keep the order the API returned them in. Folders that fail to
        load are logged and skipped, so the result may be partial. Folder ids
        seen before are not revisited, and folders deeper than ``max_depth``
        are not entered.

        Args:
            access_token: OAuth access token.
            folder_id: Folder to start from (None for the root).
            parent_path: Path prefix for every returned file.

        Returns:
            List of VideoFile objects with their ``/``-joined paths.
        """
        videos: list[VideoFile] = []
        visited: set[str] = set()
        stack: list[tuple[Any, str, int]] = [(folder_id, parent_path, 0)]

        while stack:
            current_id, current_path, depth = stack.pop()
            key = _ROOT_KEY if not current_id else str(current_id)
            if key in visited:
                logger.warning(
                    "[get_all_video_files] folder already visited, skipping; folder_id:%s", key
                )
                continue
            visited.add(key)

            try:
                folder_data = await self.get_folder(access_token, current_id)
            except SeedrError as exc:
                logger.error(
                    "[get_all_video_files] error fetching folder; folder_id:%s;error:%s",
                    key,
                    exc,
                )
                continue

            if not isinstance(folder_data, dict):
                logger.warning("[get_all_video_files] unexpected folder body; folder_id:%s", key)
                continue
            if not current_id and folder_data.get(FIELD_ID) is not None:
                visited.add(str(folder_data[FIELD_ID]))

            for raw in folder_data.get(FIELD_FILES) or []:
                if not isinstance(raw, dict):
                    logger.warning(
                        "[get_all_video_files] skipping malformed file entry; folder_id:%s", key
                    )
                    continue
                if raw.get(FIELD_PLAY_VIDEO) and raw.get(FIELD_FOLDER_FILE_ID) is not None:
                    videos.append(
                        VideoFile(
                            id=str(raw[FIELD_FOLDER_FILE_ID]),
                            name=raw.get(FIELD_NAME, ""),
                            size=raw.get(FIELD_SIZE, 0),
                            path=join_path(current_path, raw.get(FIELD_NAME, "")),
                        )
                    )

            subfolders = [
                sub
                for sub in folder_data.get(FIELD_FOLDERS) or []
                if isinstance(sub, dict) and sub.get(FIELD_ID) is not None
            ]
            if subfolders and depth >= self._max_depth:
                logger.warning(
                    "[get_all_video_files] depth limit reached; folder_id:%s;depth:%d",
                    key,
                    depth,
                )
                continue

            # Reversed so the first subfolder is popped next.
            for sub in reversed(subfolders):
                sub_path = join_path(current_path, sub.get(FIELD_NAME, ""))
                stack.append((str(sub[FIELD_ID]), sub_path, depth + 1))

        logger.info(
            "[get_all_video_files] enumeration complete; video_count:%d;folder_count:%d",
            len(videos),
            len(visited),
        )
        return videos

    async def get_stream_url(self, access_token: str, file_id: Any) -> dict[str, Any]:
        """Resolve a direct playback URL for a file.

        Returns:
            Raw ``{url, name, size}`` body.
        """
        return await self._client.call(  # type: ignore[no-any-return]
            FUNC_FETCH_FILE, access_token, folder_file_id=file_id
        )

    async def create_folder(self, access_token: str, name: str) -> dict[str, Any]:
        """Create a folder at the account root.

        Returns:
            The server response, or ``{error, status}`` if the call failed.
        """
        try:
            result = await self._client.call(FUNC_ADD_FOLDER, access_token, name=name)
        except SeedrError as exc:
            logger.error("[create_folder] error creating folder; name:%s;error:%s", name, exc)
            return error_payload(exc)
        logger.info("[create_folder] create folder response; name:%s;response:%s", name, result)
        return result  # type: ignore[no-any-return]

    async def get_folder_by_name(self, access_token: str, name: str) -> dict[str, Any] | None:
        """Return the first root folder whose name is exactly ``name``.

        Used to locate the folder a torrent was downloaded into, which the
        server names after the info hash. Returns None when nothing matches
        or the listing fails.
        """
        try:
            folder_data = await self.get_folder(access_token)
        except SeedrError as exc:
            logger.error("[get_folder_by_name] error finding folder; name:%s;error:%s", name, exc)
            return None
        if not isinstance(folder_data, dict):
            return None
        for folder in folder_data.get(FIELD_FOLDERS) or []:
            if folder.get(FIELD_NAME) == name:
                return folder  # type: ignore[no-any-return]
        return None


def folder_browser_from_config(client: SeedrClient, config: SeedrConfig) -> FolderBrowser:
    """Construct a FolderBrowser from client configuration."""
    return FolderBrowser(client=client, max_depth=config.max_folder_depth)
