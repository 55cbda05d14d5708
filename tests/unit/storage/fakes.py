"""Fake Seedr server used by the storage tests."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

import httpx

from seedr_client.api.client import SeedrClient

NETWORK_DOWN = "network-down"

_MULTIPART_FUNC_RE = re.compile(rb'name="func"\r\n\r\n(\w+)')


@dataclass
class Reply:
    """A canned non-200 (or non-JSON) answer."""

    status: int
    body: Any = None


def form_of(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def func_of(request: httpx.Request) -> str | None:
    if request.headers.get("Content-Type", "").startswith("multipart/form-data"):
        match = _MULTIPART_FUNC_RE.search(request.content)
        return match.group(1).decode() if match else None
    return form_of(request).get("func")


class FakeSeedr:
    """Routes folder GETs by id and resource.php POSTs by ``func``.

    ``folders`` maps a folder id (``"root"`` for the root) to its listing;
    ``rpc`` maps a func name to its body. Values may be a JSON body, a
    ``Reply`` or ``NETWORK_DOWN``. Unknown folders answer 404.
    """

    def __init__(self) -> None:
        self.folders: dict[str, Any] = {}
        self.rpc: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/api/folder"):
            key = path[len("/api/folder") :].lstrip("/") or "root"
            return self._respond(request, self.folders.get(key, Reply(404, {"error": "nope"})))
        if path == "/oauth_test/resource.php":
            func = func_of(request)
            return self._respond(request, self.rpc.get(func, Reply(500)))
        return httpx.Response(404)

    @staticmethod
    def _respond(request: httpx.Request, value: Any) -> httpx.Response:
        if value == NETWORK_DOWN:
            raise httpx.ConnectError("network down", request=request)
        if isinstance(value, Reply):
            if value.body is None:
                return httpx.Response(value.status)
            return httpx.Response(value.status, json=value.body)
        return httpx.Response(200, json=value)

    def client(self) -> SeedrClient:
        return SeedrClient(
            base_url="https://seedr.test",
            timeout=5.0,
            user_agent="tests",
            transport=httpx.MockTransport(self.handler),
        )

    def folder_requests(self) -> list[str]:
        return [r.url.path for r in self.requests if r.url.path.startswith("/api/folder")]

    def rpc_forms(self, func: str) -> list[dict[str, str]]:
        return [
            form_of(r)
            for r in self.requests
            if r.url.path == "/oauth_test/resource.php" and func_of(r) == func
        ]
