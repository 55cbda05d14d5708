"""Wishlist (queued torrents) listing, promotion and removal.

``get_wish_list`` answers in different shapes depending on the server version.
Each known shape has its own parser; ``WISHLIST_PARSERS`` lists them in the
order they are tried, and the first one that recognizes the body wins:

1. ``{"wish_list": [...]}``
2. ``{"result": [...]}``, or ``{"result": {...}}`` which carries no items
3. ``[...]``
4. ``{"result": false, "error": "..."}``, meaning no items
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from seedr_client.api.client import SeedrApiError, SeedrClient, SeedrError
from seedr_client.api.models import (
    FIELD_ERROR,
    FIELD_RESULT,
    FIELD_WISH_LIST,
    FUNC_GET_WISH_LIST,
    FUNC_START_WISH,
    FUNC_WISH_DELETE,
)
from seedr_client.storage.folders import FolderBrowser

logger = logging.getLogger(__name__)

SHAPE_WISH_LIST_FIELD = "wish_list_field"
SHAPE_RESULT_ARRAY = "result_array"
SHAPE_RESULT_OBJECT = "result_object"
SHAPE_BARE_ARRAY = "bare_array"
SHAPE_RESULT_ERROR = "result_error"
SHAPE_UNRECOGNIZED = "unrecognized"

PROMOTION_UNAVAILABLE_ERROR = "Promotion endpoint unavailable"

_LOG_PREVIEW_CHARS = 300


@dataclass(frozen=True)
class WishlistResponse:
    """A ``get_wish_list`` body, tagged with the shape it was recognized as."""

    shape: str
    items: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None


def _parse_wish_list_field(body: Any) -> WishlistResponse | None:
    if isinstance(body, dict) and isinstance(body.get(FIELD_WISH_LIST), list):
        return WishlistResponse(SHAPE_WISH_LIST_FIELD, list(body[FIELD_WISH_LIST]))
    return None


def _parse_result_field(body: Any) -> WishlistResponse | None:
    if not isinstance(body, dict):
        return None
    result = body.get(FIELD_RESULT)
    if isinstance(result, list):
        return WishlistResponse(SHAPE_RESULT_ARRAY, list(result))
    if isinstance(result, dict):
        return WishlistResponse(SHAPE_RESULT_OBJECT)
    return None


def _parse_bare_array(body: Any) -> WishlistResponse | None:
    if isinstance(body, list):
        return WishlistResponse(SHAPE_BARE_ARRAY, list(body))
    return None


def _parse_result_error(body: Any) -> WishlistResponse | None:
    if isinstance(body, dict) and body.get(FIELD_RESULT) is False and body.get(FIELD_ERROR):
        return WishlistResponse(SHAPE_RESULT_ERROR, error=str(body[FIELD_ERROR]))
    return None


WISHLIST_PARSERS: tuple[Callable[[Any], WishlistResponse | None], ...] = (
    _parse_wish_list_field,
    _parse_result_field,
    _parse_bare_array,
    _parse_result_error,
)


def parse_wishlist_response(body: Any) -> WishlistResponse:
    """Classify a ``get_wish_list`` body; unknown shapes yield no items."""
    for parser in WISHLIST_PARSERS:
        parsed = parser(body)
        if parsed is not None:
            return parsed
    return WishlistResponse(SHAPE_UNRECOGNIZED)


def _preview(body: Any, limit: int) -> str:
    return json.dumps(body, default=str)[:limit]


class WishlistManager:
    """Reads and edits the queue of torrents waiting for free storage."""

    def __init__(self, client: SeedrClient, browser: FolderBrowser) -> None:
        """Initialise the manager.

        Args:
            client: HTTP transport.
            browser: Folder browser used for the root-listing fallback.
        """
        self._client = client
        self._browser = browser

    async def get_wishlist(self, access_token: str) -> list[dict[str, Any]]:
        """Return the queued wishlist items; never raises.

        Servers without ``get_wish_list`` answer 500, in which case the root
        folder listing is consulted for a ``wish_list`` field instead.
        """
        try:
            body = await self._client.call(FUNC_GET_WISH_LIST, access_token)
        except SeedrError as exc:
            status = exc.status_code if isinstance(exc, SeedrApiError) else None
            logger.warning(
                "[get_wishlist] primary endpoint failed, trying folder fallback; status:%s",
                status,
            )
            return await self._wishlist_from_folder(access_token)

        logger.info("[get_wishlist] wishlist response; body:%s", _preview(body, _LOG_PREVIEW_CHARS))
        parsed = parse_wishlist_response(body)
        if parsed.shape == SHAPE_RESULT_ERROR:
            logger.info("[get_wishlist] server reported no wishlist; error:%s", parsed.error)
        elif parsed.shape == SHAPE_UNRECOGNIZED:
            logger.warning("[get_wishlist] unrecognized wishlist response shape")
        return parsed.items

    async def _wishlist_from_folder(self, access_token: str) -> list[dict[str, Any]]:
        try:
            folder_data = await self._browser.get_folder(access_token)
        except SeedrError as exc:
            logger.error("[get_wishlist] folder fallback also failed; error:%s", exc)
            return []
        wish_list = folder_data.get(FIELD_WISH_LIST) if isinstance(folder_data, dict) else None
        if isinstance(wish_list, list) and wish_list:
            logger.info("[get_wishlist] got wishlist from folder data; count:%d", len(wish_list))
            return list(wish_list)
        return []

    async def promote_from_wishlist(self, access_token: str, wishlist_id: Any) -> dict[str, Any]:
        """Ask the server to start downloading a wishlist item.

        A failed call is not fatal: the server promotes queued items by itself
        once storage frees up, which the returned ``willAutoPromote`` flag
        tells the caller.
        """
        try:
            result = await self._client.call(FUNC_START_WISH, access_token, wish_id=wishlist_id)
        except SeedrError as exc:
            logger.warning(
                "[promote_from_wishlist] promotion unavailable, server may auto-promote;"
                " wish_id:%s;error:%s",
                wishlist_id,
                exc,
            )
            return {
                FIELD_RESULT: False,
                FIELD_ERROR: PROMOTION_UNAVAILABLE_ERROR,
                "willAutoPromote": True,
            }
        logger.info(
            "[promote_from_wishlist] promote response; wish_id:%s;body:%s",
            wishlist_id,
            _preview(result, 200),
        )
        return result  # type: ignore[no-any-return]

    async def delete_from_wishlist(self, access_token: str, wishlist_id: Any) -> dict[str, Any]:
        """Drop an item from the wishlist; returns ``{error}`` on failure."""
        try:
            return await self._client.call(  # type: ignore[no-any-return]
                FUNC_WISH_DELETE, access_token, wish_id=wishlist_id
            )
        except SeedrError as exc:
            logger.error(
                "[delete_from_wishlist] error deleting from wishlist; wish_id:%s;error:%s",
                wishlist_id,
                exc,
            )
            return {FIELD_ERROR: str(exc)}
