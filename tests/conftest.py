"""Shared fixtures: a fake Mojang service behind httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from mcidentity.cache import LookupCache
from mcidentity.resolver import IdentityResolver

NOTCH_UUID = "069a79f4-44e9-4726-a5be-fca90e38aaf5"
NOTCH_BARE = "069a79f444e94726a5befca90e38aaf5"


class ManualClock:
    """Clock the tests move by hand."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMojang:
    """Canned responses keyed by path. Records every request it sees.

    A canned reply may also be a callable taking the request, which can
    raise to simulate a network failure.
    """

    def __init__(self) -> None:
        self.names: dict[str, httpx.Response] = {}
        self.search: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path.startswith("/user/profiles/"):
            uuid = path.split("/")[3]
            return self._reply(self.names.get(uuid, httpx.Response(204)), request)
        if request.method == "POST" and path == "/profiles/page/1":
            name = json.loads(request.content)["name"]
            empty = httpx.Response(200, json={"profiles": [], "size": 0})
            return self._reply(self.search.get(name, empty), request)
        return httpx.Response(404)

    @staticmethod
    def _reply(reply, request: httpx.Request) -> httpx.Response:
        if callable(reply):
            return reply(request)
        return httpx.Response(reply.status_code, headers=reply.headers, content=reply.content)

    def calls(self, method: str | None = None) -> int:
        return sum(1 for r in self.requests if method is None or r.method == method)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def mojang():
    fake = FakeMojang()
    fake.names[NOTCH_BARE] = httpx.Response(200, json=["Notch"])
    fake.search["notch"] = httpx.Response(
        200, json={"profiles": [{"name": "Notch", "id": NOTCH_UUID}], "size": 1}
    )
    return fake


@pytest.fixture
def cache(clock):
    return LookupCache(cleanup_interval=0, clock=clock)


@pytest.fixture
def resolver(mojang, cache):
    client = httpx.Client(transport=httpx.MockTransport(mojang.handler))
    yield IdentityResolver(client, cache, api_base="https://api.mojang.test", cache_ttl=100.0)
    client.close()
