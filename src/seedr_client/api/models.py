"""Data models and field names for the Seedr API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# API paths
DEVICE_CODE_PATH = "/api/device/code"
DEVICE_AUTHORIZE_PATH = "/api/device/authorize"
FOLDER_PATH = "/api/folder"
RESOURCE_PATH = "/oauth_test/resource.php"

# resource.php "func" discriminators
FUNC_FETCH_FILE = "fetch_file"
FUNC_GET_ACCOUNT_INFO = "get_account_info"
FUNC_GET_SETTINGS = "get_settings"
FUNC_ADD_FOLDER = "add_folder"
FUNC_ADD_TORRENT = "add_torrent"
FUNC_GET_WISH_LIST = "get_wish_list"
FUNC_START_WISH = "start_wish"
FUNC_WISH_DELETE = "wish_delete"
FUNC_DELETE = "delete"

# Request field names
PARAM_ACCESS_TOKEN = "access_token"
PARAM_CLIENT_ID = "client_id"
PARAM_DEVICE_CODE = "device_code"
PARAM_FUNC = "func"
PARAM_FOLDER_FILE_ID = "folder_file_id"
PARAM_NAME = "name"
PARAM_TORRENT_MAGNET = "torrent_magnet"
PARAM_TORRENT_FILE = "torrent_file"
PARAM_FOLDER_ID = "folder_id"
PARAM_WISH_ID = "wish_id"
PARAM_DELETE_ARR = "delete_arr"

# Response field names
FIELD_ID = "id"
FIELD_NAME = "name"
FIELD_SIZE = "size"
FIELD_FOLDERS = "folders"
FIELD_FILES = "files"
FIELD_TRANSFERS = "transfers"
FIELD_WISH_LIST = "wish_list"
FIELD_FOLDER_FILE_ID = "folder_file_id"
FIELD_PLAY_VIDEO = "play_video"
FIELD_USER_TORRENT_ID = "user_torrent_id"
FIELD_RESULT = "result"
FIELD_ERROR = "error"
FIELD_STORAGE_USED = "storage_used"
FIELD_STORAGE_LIMIT = "storage_limit"
FIELD_USERNAME = "username"

# delete_arr item types
DELETE_TYPE_FOLDER = "folder"
DELETE_TYPE_FILE = "file"
DELETE_TYPE_TORRENT = "torrent"

# Magnet target meaning "account root".
ROOT_FOLDER_ID = -1


@dataclass
class DeviceCode:
    """Device-flow code pair issued by the server."""

    device_code: str
    user_code: str
    expires_in: int
    interval: int
    verification_url: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> DeviceCode:
        return cls(
            device_code=str(raw["device_code"]),
            user_code=str(raw["user_code"]),
            expires_in=int(raw.get("expires_in", 0)),
            interval=int(raw.get("interval", 5)),
            verification_url=raw.get("verification_url"),
        )


@dataclass
class AccessToken:
    """Opaque credential returned once the user approves the device."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = 0

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> AccessToken:
        return cls(
            access_token=str(raw["access_token"]),
            token_type=str(raw.get("token_type", "bearer")),
            expires_in=int(raw.get("expires_in", 0)),
        )


@dataclass
class VideoFile:
    """A playable file found while walking the folder tree.

    Attributes:
        id: Stringified ``folder_file_id``, usable with ``get_stream_url``.
        name: File name as reported by the server.
        size: Size in bytes.
        path: ``/``-joined ancestor folder names followed by the file name.
    """

    id: str
    name: str
    size: int
    path: str


@dataclass
class DeleteItem:
    """One entry of a ``delete_arr`` batch."""

    type: str
    id: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id}


@dataclass
class AccountInfo:
    """Storage usage for an account.

    A zeroed instance with ``error`` set is returned when the request fails;
    callers check ``error`` rather than catching exceptions.
    """

    storage_used: int = 0
    storage_limit: int = 0
    remaining_space: int = 0
    username: str | None = None
    error: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            FIELD_STORAGE_USED: self.storage_used,
            FIELD_STORAGE_LIMIT: self.storage_limit,
            "remaining_space": self.remaining_space,
        }
        if self.username is not None:
            out[FIELD_USERNAME] = self.username
        if self.error is not None:
            out[FIELD_ERROR] = self.error
        return out


@dataclass
class ClearResult:
    """Outcome of wiping the account root.

    ``deleted_count`` is the number of deletions requested, not confirmed.
    """

    result: bool
    deleted_count: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.result:
            return {FIELD_RESULT: False, FIELD_ERROR: self.error}
        return {FIELD_RESULT: True, "deleted_count": self.deleted_count}


@dataclass
class CredentialStatus:
    """Result of validating an access token."""

    status: str
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"status": self.status}
        if self.message is not None:
            out["message"] = self.message
        return out
