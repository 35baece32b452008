"""Shared test fixtures for the dolbyio_rest_apis test suite.

WHY: Every endpoint test needs an HttpTransport that answers with canned
JSON and records what was sent. Centralizing the fake here keeps the test
modules down to "given these responses, expect these requests".

HOW: FakeApi is an httpx.MockTransport handler. It pops one queued
response per request (dicts/lists become 200 JSON responses, httpx.Response
objects are returned as-is) and keeps every httpx.Request it saw. run()
opens an HttpTransport on top of it and drives a coroutine with
asyncio.run().

RULES:
- No test ever reaches the network
- Hostnames are the defaults, never read from the environment
- A FakeApi that runs out of responses fails the test loudly
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, List

import httpx
import pytest

from dolbyio_rest_apis.config import Hostnames
from dolbyio_rest_apis.core.auth import (
    ApiKeyCredential,
    BearerTokenCredential,
    JwtToken,
)
from dolbyio_rest_apis.core.http import HttpTransport


class FakeApi:
    """Queue of canned responses plus a log of the requests that consumed them."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("Unexpected request: {} {}".format(request.method, request.url))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    def run(self, call: Callable[[HttpTransport], Awaitable[Any]]) -> Any:
        """Open a transport backed by this fake and await ``call(transport)``."""

        async def _run():
            transport = HttpTransport(
                hostnames=Hostnames(), transport=httpx.MockTransport(self)
            )
            async with transport:
                return await call(transport)

        return asyncio.run(_run())

    # Convenience accessors on the recorded requests

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def params(self, index: int = -1) -> dict:
        return dict(self.requests[index].url.params)

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_api():
    """Factory: fake_api(response, ...) returns a FakeApi with those responses queued."""
    return FakeApi


@pytest.fixture
def bearer():
    """Credential wrapping a JWT, as returned by get_api_access_token()."""
    return BearerTokenCredential(JwtToken(access_token="jwt-abc", token_type="Bearer"))


@pytest.fixture
def api_key():
    """Credential for API-key authenticated endpoints (Media, Streaming)."""
    return ApiKeyCredential("secret-123")
