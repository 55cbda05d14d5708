"""Unit tests for api/models.py — DTO construction and serialization."""

import pytest

from seedr_client.api.models import (
    AccessToken,
    AccountInfo,
    ClearResult,
    CredentialStatus,
    DeleteItem,
    DeviceCode,
    VideoFile,
)


class TestDeviceCode:
    def test_from_dict(self) -> None:
        code = DeviceCode.from_dict(
            {"device_code": "abc", "user_code": "123", "expires_in": 1800, "interval": 5}
        )
        assert code.device_code == "abc"
        assert code.user_code == "123"
        assert code.expires_in == 1800
        assert code.interval == 5
        assert code.verification_url is None

    def test_from_dict_requires_codes(self) -> None:
        with pytest.raises(KeyError):
            DeviceCode.from_dict({"user_code": "123"})


class TestAccessToken:
    def test_from_dict_with_defaults(self) -> None:
        token = AccessToken.from_dict({"access_token": "tok"})
        assert token == AccessToken(access_token="tok", token_type="bearer", expires_in=0)


class TestVideoFile:
    def test_equality(self) -> None:
        a = VideoFile("1", "a.mkv", 10, "Movies/a.mkv")
        b = VideoFile("1", "a.mkv", 10, "Movies/a.mkv")
        assert a == b


class TestDeleteItem:
    def test_to_dict(self) -> None:
        assert DeleteItem(type="folder", id="7").to_dict() == {"type": "folder", "id": "7"}


class TestAccountInfo:
    def test_defaults_are_zeroed(self) -> None:
        info = AccountInfo(error="boom")
        assert info.to_dict() == {
            "storage_used": 0,
            "storage_limit": 0,
            "remaining_space": 0,
            "error": "boom",
        }
        assert info.ok is False

    def test_to_dict_omits_missing_error(self) -> None:
        info = AccountInfo(storage_used=1, storage_limit=3, remaining_space=2, username="me")
        assert info.ok is True
        assert "error" not in info.to_dict()
        assert info.to_dict()["username"] == "me"


class TestClearResult:
    def test_success_shape(self) -> None:
        assert ClearResult(result=True, deleted_count=0).to_dict() == {
            "result": True,
            "deleted_count": 0,
        }

    def test_failure_shape(self) -> None:
        assert ClearResult(result=False, error="down").to_dict() == {
            "result": False,
            "error": "down",
        }


class TestCredentialStatus:
    def test_success_has_no_message(self) -> None:
        status = CredentialStatus(status="success")
        assert status.ok is True
        assert status.to_dict() == {"status": "success"}

    def test_error_carries_message(self) -> None:
        status = CredentialStatus(status="error", message="bad token")
        assert status.ok is False
        assert status.to_dict() == {"status": "error", "message": "bad token"}
