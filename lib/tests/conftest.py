from __future__ import annotations

import httpx
import pytest

from lembaas_client import ClientConfig, LembaasClient, RestClient
from mock_api import BASE_URL, Recorder


@pytest.fixture
def rest():
    clients: list[RestClient] = []

    def _make(recorder: Recorder, *, token: str | None = "app-token", api_version: int = 1) -> RestClient:
        cfg = ClientConfig(base_url=BASE_URL, api_version=api_version, token=token)
        client = RestClient(cfg, transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def lembaas():
    clients: list[LembaasClient] = []

    def _make(recorder: Recorder, *, token: str | None = "app-token") -> LembaasClient:
        cfg = ClientConfig(base_url=BASE_URL, token=token)
        client = LembaasClient(cfg, transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()
