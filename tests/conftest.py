"""Pytest fixtures: a scripted portal API behind httpx.MockTransport."""

from collections import defaultdict
from collections.abc import Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from client.app import PortalClient
from core.config import Settings
from core.models.auth import CredentialPair

type Responder = tuple[int, Any] | Callable[[httpx.Request], httpx.Response]


def ok(data: Any) -> tuple[int, Any]:
    return 200, {"success": True, "data": data}


def fail(status: int, message: str) -> tuple[int, Any]:
    return status, {"success": False, "error": message}


def page(items: list[dict], has_more: bool = False, last_doc: Any = None) -> tuple[int, Any]:
    return ok({"data": items, "hasMore": has_more, "lastDoc": last_doc})


class FakePortal:
    """
    Stand-in for the portal API.

    Responses queued for a route are served in order; the last one keeps
    being served once the queue is down to it.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Responder]] = defaultdict(list)

    def on(self, method: str, path: str, *responses: Responder) -> None:
        self._routes[(method, f"/api{path}")].extend(responses)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == f"/api{path}"
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": f"No route {request.method} {request.url.path}"})

        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(responder):
            return responder(request)

        status, body = responder
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_endpoint="portal.test",
        api_endpoint_ssl=False,
        session_file=tmp_path / ".session.json",
    )


@pytest.fixture
def fake_portal() -> FakePortal:
    return FakePortal()


@pytest_asyncio.fixture
async def portal(settings, fake_portal):
    async with PortalClient(settings, transport=httpx.MockTransport(fake_portal)) as client:
        yield client


@pytest.fixture
def logged_in(portal) -> PortalClient:
    portal.token_store.set_token(
        CredentialPair(access_token="access-1", refresh_token="refresh-1")
    )
    return portal
