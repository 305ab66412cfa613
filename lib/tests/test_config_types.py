from __future__ import annotations

import pytest

from lembaas_client import ClientConfig, ConfigError


def test_api_base_url_strips_trailing_slash() -> None:
    cfg = ClientConfig(base_url="https://baas.example.com/", api_version=2)

    assert cfg.api_base_url == "https://baas.example.com/api/v2"


def test_defaults() -> None:
    cfg = ClientConfig(base_url="http://localhost:8080")

    assert cfg.api_version == 1
    assert cfg.timeout_s == 30.0
    assert cfg.has_token is False


@pytest.mark.parametrize("base_url", ["", "   ", "baas.example.com", "ftp://baas.example.com"])
def test_malformed_base_url(base_url) -> None:
    with pytest.raises(ConfigError):
        ClientConfig(base_url=base_url)


@pytest.mark.parametrize("version", [0, -1, True, "1"])
def test_malformed_api_version(version) -> None:
    with pytest.raises(ConfigError):
        ClientConfig(base_url="http://localhost", api_version=version)


def test_with_token_does_not_mutate() -> None:
    cfg = ClientConfig(base_url="http://localhost")
    authed = cfg.with_token("t")

    assert cfg.token is None
    assert authed.token == "t"
    assert authed.has_token is True
