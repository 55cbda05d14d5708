"""Unit tests for storage/wishlist.py — response parsing and WishlistManager."""

import asyncio

import pytest

from seedr_client.storage.folders import FolderBrowser
from seedr_client.storage.wishlist import (
    SHAPE_BARE_ARRAY,
    SHAPE_RESULT_ARRAY,
    SHAPE_RESULT_ERROR,
    SHAPE_RESULT_OBJECT,
    SHAPE_UNRECOGNIZED,
    SHAPE_WISH_LIST_FIELD,
    WishlistManager,
    parse_wishlist_response,
)
from tests.unit.storage.fakes import NETWORK_DOWN, FakeSeedr, Reply

_ITEMS = [
    {"id": 1, "title": "ubuntu.iso", "size": 100, "torrent_hash": "aa"},
    {"id": 2, "title": "debian.iso", "size": 200, "torrent_hash": "bb"},
]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_manager(fake: FakeSeedr) -> WishlistManager:
    client = fake.client()
    return WishlistManager(client, FolderBrowser(client))


# ---------------------------------------------------------------------------
# parse_wishlist_response tests
# ---------------------------------------------------------------------------


class TestParseWishlistResponse:
    def test_wish_list_field(self) -> None:
        parsed = parse_wishlist_response({"result": True, "wish_list": _ITEMS})
        assert parsed.shape == SHAPE_WISH_LIST_FIELD
        assert parsed.items == _ITEMS

    def test_empty_wish_list_field_still_matches(self) -> None:
        parsed = parse_wishlist_response({"wish_list": [], "result": _ITEMS})
        assert parsed.shape == SHAPE_WISH_LIST_FIELD
        assert parsed.items == []

    def test_result_array(self) -> None:
        parsed = parse_wishlist_response({"result": _ITEMS})
        assert parsed.shape == SHAPE_RESULT_ARRAY
        assert parsed.items == _ITEMS

    def test_result_object_has_no_items(self) -> None:
        parsed = parse_wishlist_response({"result": {"count": 2}})
        assert parsed.shape == SHAPE_RESULT_OBJECT
        assert parsed.items == []

    def test_bare_array(self) -> None:
        parsed = parse_wishlist_response(_ITEMS)
        assert parsed.shape == SHAPE_BARE_ARRAY
        assert parsed.items == _ITEMS

    def test_result_false_with_error(self) -> None:
        parsed = parse_wishlist_response({"result": False, "error": "no_wishlist"})
        assert parsed.shape == SHAPE_RESULT_ERROR
        assert parsed.items == []
        assert parsed.error == "no_wishlist"

    @pytest.mark.parametrize(
        "body",
        [{"result": True}, {"result": False}, {}, "ok", None, {"wish_list": "nope"}],
    )
    def test_unrecognized_shapes(self, body: object) -> None:
        parsed = parse_wishlist_response(body)
        assert parsed.shape == SHAPE_UNRECOGNIZED
        assert parsed.items == []


# ---------------------------------------------------------------------------
# get_wishlist tests
# ---------------------------------------------------------------------------


class TestGetWishlist:
    def test_returns_items_from_primary_endpoint(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["get_wish_list"] = {"wish_list": _ITEMS}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.get_wishlist("tok")) == _ITEMS
        assert fake_seedr.folder_requests() == []

    def test_server_error_body_means_no_items(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["get_wish_list"] = {"result": False, "error": "nothing queued"}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.get_wishlist("tok")) == []
        assert fake_seedr.folder_requests() == []

    def test_falls_back_to_root_folder_on_500(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["get_wish_list"] = Reply(500)
        fake_seedr.folders["root"] = {"folders": [], "wish_list": _ITEMS}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.get_wishlist("tok")) == _ITEMS
        assert fake_seedr.folder_requests() == ["/api/folder"]

    def test_fallback_without_wish_list_returns_empty(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["get_wish_list"] = Reply(500)
        fake_seedr.folders["root"] = {"folders": [], "files": []}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.get_wishlist("tok")) == []

    def test_fallback_ignores_non_list_wish_list(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["get_wish_list"] = Reply(500)
        fake_seedr.folders["root"] = {"wish_list": {"count": 2, "items": []}}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.get_wishlist("tok")) == []

    def test_both_failing_returns_empty(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["get_wish_list"] = NETWORK_DOWN
        fake_seedr.folders["root"] = NETWORK_DOWN
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.get_wishlist("tok")) == []


# ---------------------------------------------------------------------------
# promote / delete tests
# ---------------------------------------------------------------------------


class TestPromoteFromWishlist:
    def test_returns_server_result(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["start_wish"] = {"result": True}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.promote_from_wishlist("tok", 1)) == {"result": True}
        assert fake_seedr.rpc_forms("start_wish")[0]["wish_id"] == "1"

    def test_failure_reports_auto_promotion(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["start_wish"] = Reply(500)
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.promote_from_wishlist("tok", 1)) == {
            "result": False,
            "error": "Promotion endpoint unavailable",
            "willAutoPromote": True,
        }


class TestDeleteFromWishlist:
    def test_returns_server_result(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["wish_delete"] = {"result": True}
        manager = _make_manager(fake_seedr)

        assert asyncio.run(manager.delete_from_wishlist("tok", 2)) == {"result": True}
        assert fake_seedr.rpc_forms("wish_delete")[0]["wish_id"] == "2"

    def test_failure_returns_error(self, fake_seedr: FakeSeedr) -> None:
        fake_seedr.rpc["wish_delete"] = NETWORK_DOWN
        manager = _make_manager(fake_seedr)

        result = asyncio.run(manager.delete_from_wishlist("tok", 2))

        assert list(result) == ["error"]
        assert "network down" in result["error"]
