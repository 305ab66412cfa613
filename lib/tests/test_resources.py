from __future__ import annotations

import base64

import pytest

from lembaas_client import ApiError, ConfigError, DecodeError, NotFoundError, UnexpectedStatusError
from lembaas_client.models import CreateRoleRequest, CreateUserRequest, UpdateUserRequest
from mock_api import Recorder


def test_token_exchange_round_trip(lembaas) -> None:
    rec = Recorder(200, {"token": "T", "expires_in": 3600, "token_type": "Bearer"})
    client = lembaas(rec, token=None)

    token = client.apps.get_auth_token("a", "b")

    assert rec.last.method == "POST"
    assert rec.last.url.path == "/api/v1/token"
    assert rec.last_json() == {"client_id": "a", "client_secret": "b"}
    assert "Authorization" not in rec.last.headers
    assert token.token == "T"
    assert token.expires_in == 3600
    assert token.token_type == "Bearer"


def test_authenticate_returns_client_with_token(lembaas) -> None:
    rec = Recorder(200, {"token": "fresh", "expires_in": 60, "token_type": "Bearer"})
    client = lembaas(rec, token=None)

    authed = client.authenticate("id", "secret")
    try:
        rec.body = {"id": 4, "name": "demo", "client_id": "id", "created_at": "2024-05-01T10:00:00Z"}
        info = authed.apps.get_app_info()
    finally:
        authed.close()

    assert client.rest is not authed.rest
    assert client.client_config.token is None
    assert authed.client_config.token == "fresh"
    assert rec.last.headers["Authorization"] == "Bearer fresh"
    assert info.name == "demo"
    assert info.created_at.year == 2024


def test_authenticate_rejects_empty_token(lembaas) -> None:
    client = lembaas(Recorder(200, {"token": "", "expires_in": 0}), token=None)

    with pytest.raises(ApiError):
        client.authenticate("id", "secret")


def test_app_info_empty_body_is_decode_error(lembaas) -> None:
    with pytest.raises(DecodeError):
        lembaas(Recorder(200)).apps.get_app_info()


def test_app_info_requires_token(lembaas) -> None:
    rec = Recorder(200, {})

    with pytest.raises(ConfigError):
        lembaas(rec, token=None).apps.get_app_info()

    assert rec.requests == []


def test_delete_config_value_204_empty_body(lembaas) -> None:
    rec = Recorder(204)

    assert lembaas(rec).config.delete_value("theme") is None
    assert rec.last.method == "DELETE"
    assert rec.last.url.path == "/api/v1/config/theme/delete"


def test_delete_config_value_404(lembaas) -> None:
    with pytest.raises(UnexpectedStatusError) as exc:
        lembaas(Recorder(404)).config.delete_value("missing")

    assert exc.value.expected == (204,)
    assert exc.value.actual == 404


def test_list_config_values(lembaas) -> None:
    rec = Recorder(
        200,
        {
            "count": 2,
            "config_values": [
                {"config_key": "a", "config_value": "1", "enabled": True},
                {"config_key": "b", "config_value": "2", "enabled": False},
            ],
        },
    )

    values = lembaas(rec).config.list_values()

    assert values.count == 2
    assert [v.config_key for v in values.config_values] == ["a", "b"]


def test_set_config_value_expects_201(lembaas) -> None:
    rec = Recorder(201, {"config_key": "a", "config_value": "1", "enabled": True})

    value = lembaas(rec).config.set_value("a", "1")

    assert rec.last_json() == {"config_key": "a", "config_value": "1"}
    assert value.enabled is True


def test_get_user_404_is_not_found(lembaas) -> None:
    with pytest.raises(NotFoundError):
        lembaas(Recorder(404, {"error": "user not found"})).users.get_user(9)


def test_get_user_500_is_generic_status_error(lembaas) -> None:
    with pytest.raises(UnexpectedStatusError) as exc:
        lembaas(Recorder(500, {"error": "db down"})).users.get_user(9)

    assert not isinstance(exc.value, NotFoundError)
    assert exc.value.actual == 500
    assert exc.value.body_error_text == "db down"


def test_get_user_unwraps_user_object(lembaas) -> None:
    rec = Recorder(200, {"user": {"id": 9, "app_id": 1, "email": "x@y.z", "role_id": 2, "is_active": True}})

    user = lembaas(rec).users.get_user(9)

    assert rec.last.url.path == "/api/v1/users/9/get"
    assert (user.id, user.email, user.is_active) == (9, "x@y.z", True)


def test_get_user_by_email_escapes_path(lembaas) -> None:
    rec = Recorder(200, {"user": {"id": 1, "email": "a/b+c@example.com"}})

    user = lembaas(rec).users.get_user_by_email("a/b+c@example.com")

    assert rec.last.url.raw_path == b"/api/v1/users/email/a%2Fb%2Bc%40example.com/get"
    assert user.email == "a/b+c@example.com"


def test_register_user(lembaas) -> None:
    rec = Recorder(201, {"user": {"id": 5, "email": "new@example.com", "role_id": 3, "is_active": True}})

    user = lembaas(rec).users.register_user(CreateUserRequest(email="new@example.com", password="pw", role_id=3))

    assert rec.last_json() == {"email": "new@example.com", "password": "pw", "role_id": 3, "is_active": True}
    assert user.id == 5


def test_update_user_embedded_error(lembaas) -> None:
    rec = Recorder(200, {"error": "email already in use"})

    with pytest.raises(ApiError, match="email already in use"):
        lembaas(rec).users.update_user(UpdateUserRequest(id=5, email="dup@example.com"))


def test_delete_user_expects_204(lembaas) -> None:
    with pytest.raises(UnexpectedStatusError) as exc:
        lembaas(Recorder(200, {})).users.delete_user(5)

    assert exc.value.expected == (204,)


def test_enable_totp_decodes_qr_code(lembaas) -> None:
    png = b"\x89PNG\r\n"
    rec = Recorder(200, {"qr_code": base64.b64encode(png).decode()})

    result = lembaas(rec).users.enable_totp(7)

    assert rec.last.url.path == "/api/v1/users/7/totp/enable"
    assert result.qr_code == png


def test_confirm_totp_sends_code(lembaas) -> None:
    rec = Recorder(200, {})

    lembaas(rec).users.confirm_totp(7, "123456")

    assert rec.last.url.path == "/api/v1/users/7/totp/enable/confirm"
    assert rec.last_json() == {"totp_code": "123456"}


def test_login_requires_second_factor(lembaas) -> None:
    rec = Recorder(200, {"login_code": "lc-1", "login_code_valid_until": "2030-01-01T00:00:00Z"})

    auth = lembaas(rec).users.login("a@b.c", "pw")

    assert rec.last_json() == {"email": "a@b.c", "password": "pw"}
    assert auth.totp_required is True
    assert auth.is_valid_login is False


def test_login_totp_returns_session(lembaas) -> None:
    rec = Recorder(200, {"session_token": "s", "user_id": 3, "email": "a@b.c", "expires_in": 900})

    auth = lembaas(rec).users.login_totp("lc-1", "654321")

    assert rec.last.url.path == "/api/v1/users/login/totp"
    assert rec.last_json() == {"login_code": "lc-1", "totp_code": "654321"}
    assert auth.is_valid_login is True


def test_list_roles_message_field_is_error(lembaas) -> None:
    with pytest.raises(ApiError, match="forbidden"):
        lembaas(Recorder(200, {"message": "forbidden"})).roles.list_roles()


def test_create_role(lembaas) -> None:
    rec = Recorder(201, {"id": 11, "app_id": 1, "name": "editor", "permissions": "rw", "is_default": False})

    role = lembaas(rec).roles.create_role(CreateRoleRequest(name="editor", permissions="rw"))

    assert rec.last_json() == {"name": "editor", "description": "", "permissions": "rw", "is_default": False}
    assert role.id == 11


@pytest.mark.parametrize("status,body", [(200, {}), (204, None)])
def test_delete_role_accepts_200_or_204(lembaas, status, body) -> None:
    rec = Recorder(status, body)

    lembaas(rec).roles.delete_role(11)

    assert rec.last.url.path == "/api/v1/roles/11/delete"


def test_delete_role_checks_error_field(lembaas) -> None:
    with pytest.raises(ApiError, match="role in use"):
        lembaas(Recorder(200, {"error": "role in use"})).roles.delete_role(11)
