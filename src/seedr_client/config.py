"""Client configuration loaded from environment variables."""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://www.seedr.cc"
# Long-lived token (1 year) client identity used by the device flow.
DEFAULT_CLIENT_ID = "seedr_xbmc"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_FOLDER_DEPTH = 64
DEFAULT_USER_AGENT = "seedr-client/0.1.0"


@dataclass(frozen=True)
class SeedrConfig:
    """Process-wide immutable client configuration.

    Every field has a default pointing at the public Seedr service, so an
    empty environment yields a working configuration. Tests construct the
    dataclass directly to target a mock endpoint.
    """

    base_url: str = DEFAULT_BASE_URL
    client_id: str = DEFAULT_CLIENT_ID
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_folder_depth: int = DEFAULT_MAX_FOLDER_DEPTH
    user_agent: str = DEFAULT_USER_AGENT


def load_config() -> SeedrConfig:
    """Construct a SeedrConfig from environment variables.

    Optional environment variables (with defaults):
        SEEDR_BASE_URL: Service root URL (default: https://www.seedr.cc).
        SEEDR_CLIENT_ID: Device-flow client identifier (default: seedr_xbmc).
        SEEDR_REQUEST_TIMEOUT: Per-request timeout in seconds (default: 10).
        SEEDR_MAX_FOLDER_DEPTH: Deepest folder level visited when enumerating
            videos (default: 64).
        SEEDR_USER_AGENT: User-Agent header sent with every request.

    Returns:
        Configured SeedrConfig instance.
    """
    return SeedrConfig(
        base_url=os.environ.get("SEEDR_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        client_id=os.environ.get("SEEDR_CLIENT_ID", DEFAULT_CLIENT_ID),
        request_timeout=float(
            os.environ.get("SEEDR_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        ),
        max_folder_depth=int(
            os.environ.get("SEEDR_MAX_FOLDER_DEPTH", str(DEFAULT_MAX_FOLDER_DEPTH))
        ),
        user_agent=os.environ.get("SEEDR_USER_AGENT", DEFAULT_USER_AGENT),
    )
