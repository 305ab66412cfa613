from __future__ import annotations

import asyncio

import httpx
import pytest

from lembaas_client import AsyncRestClient, ClientConfig, ConfigError, NotFoundError
from lembaas_client.users import GET_USER
from mock_api import BASE_URL


def _client(handler, token: str | None = "t") -> AsyncRestClient:
    return AsyncRestClient(ClientConfig(base_url=BASE_URL, token=token), transport=httpx.MockTransport(handler))


def test_async_call_decodes_payload() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"user": {"id": 2, "email": "e@x.y"}})

    async def run():
        async with _client(handler) as client:
            return await client.call(GET_USER, user_id=2)

    env = asyncio.run(run())

    assert env.payload.id == 2


def test_async_not_found() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "user not found"})

    async def run():
        async with _client(handler) as client:
            await client.call(GET_USER, user_id=2)

    with pytest.raises(NotFoundError):
        asyncio.run(run())


def test_async_requires_token_before_sending() -> None:
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    async def run():
        async with _client(handler, token=None) as client:
            await client.execute("GET", "/users")

    with pytest.raises(ConfigError):
        asyncio.run(run())
    assert calls == []


def test_caller_deadline_cancels_in_flight_request() -> None:
    finished = []

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        finished.append(request)
        return httpx.Response(200, json={})

    async def run():
        async with _client(handler) as client:
            await asyncio.wait_for(client.execute("GET", "/users"), timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(run())
    assert finished == []
