"""Async client for the Seedr cloud torrent and file-storage API."""

from seedr_client.api.client import (
    SeedrApiError,
    SeedrClient,
    SeedrError,
    SeedrResponseError,
    SeedrTransportError,
)
from seedr_client.api.device import DeviceCodeExpiredError
from seedr_client.config import SeedrConfig, load_config
from seedr_client.orchestration.service import SeedrService, seedr_service_from_config
from seedr_client.storage.transfers import AddTorrentError

__version__ = "0.1.0"

__all__ = [
    "AddTorrentError",
    "DeviceCodeExpiredError",
    "SeedrApiError",
    "SeedrClient",
    "SeedrConfig",
    "SeedrError",
    "SeedrResponseError",
    "SeedrService",
    "SeedrTransportError",
    "load_config",
    "seedr_service_from_config",
]
