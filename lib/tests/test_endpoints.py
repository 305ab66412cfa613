from __future__ import annotations

import pytest

from lembaas_client import ConfigError
from lembaas_client.endpoints import Endpoint
from lembaas_client.extract import ErrorExtractor


def test_render_escapes_params() -> None:
    ep = Endpoint("GET", "/users/email/{email}/get")

    assert ep.params == ("email",)
    assert ep.render(email="a b@c.d") == "/users/email/a%20b%40c.d/get"


def test_render_missing_param() -> None:
    with pytest.raises(ConfigError, match="role_id"):
        Endpoint("DELETE", "/roles/{role_id}/delete").render()


def test_unsupported_method() -> None:
    with pytest.raises(ConfigError):
        Endpoint("PATCH", "/users/update")


def test_expected_accepts_tuple() -> None:
    assert Endpoint("DELETE", "/roles/{id}/delete", expected_status=(200, 204)).expected == (200, 204)


def test_extractor_first_non_empty_path_wins() -> None:
    ex = ErrorExtractor("error", "message", "Error.message")

    assert ex.extract({"error": "", "message": "  ", "Error": {"code": 1, "message": "nested"}}) == "nested"
    assert ex.extract({"error": "flat", "message": "other"}) == "flat"
    assert ex.extract({"Error": None}) is None
    assert ex.extract(["not", "a", "dict"]) is None


def test_extractor_reads_message_from_object() -> None:
    assert ErrorExtractor("error").extract({"error": {"code": 3, "message": "bad input"}}) == "bad input"
