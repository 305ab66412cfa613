from __future__ import annotations

from .endpoints import Endpoint
from .models import (
    AppUser,
    AppUserAuth,
    AppUserList,
    CreateUserRequest,
    TOTPConfirmRequest,
    TOTPEnable,
    TOTPLoginRequest,
    UpdateUserRequest,
    UserLoginRequest,
)
from .transport import RestClient

LIST_USERS = Endpoint("GET", "/users", decode=AppUserList.from_dict)
GET_USER = Endpoint("GET", "/users/{user_id}/get", decode=AppUser.from_envelope, lookup=True)
GET_USER_BY_EMAIL = Endpoint("GET", "/users/email/{email}/get", decode=AppUser.from_envelope, lookup=True)
REGISTER_USER = Endpoint("POST", "/users/register", expected_status=201, decode=AppUser.from_envelope)
UPDATE_USER = Endpoint("POST", "/users/update", decode=AppUser.from_envelope)
DELETE_USER = Endpoint("DELETE", "/users/{user_id}/delete", expected_status=204, check_error_field=False)
ENABLE_TOTP = Endpoint("POST", "/users/{user_id}/totp/enable", decode=TOTPEnable.from_dict)
CONFIRM_TOTP = Endpoint("POST", "/users/{user_id}/totp/enable/confirm", decode=TOTPEnable.from_dict)
LOGIN = Endpoint("POST", "/users/login", decode=AppUserAuth.from_dict)
LOGIN_TOTP = Endpoint("POST", "/users/login/totp", decode=AppUserAuth.from_dict)


class UserClient:
    """End users of the application, their sessions and second factor."""

    def __init__(self, rest: RestClient):
        self._rest = rest

    def list_users(self) -> AppUserList:
        return self._rest.call(LIST_USERS).payload

    def get_user(self, user_id: int) -> AppUser:
        return self._rest.call(GET_USER, user_id=int(user_id)).payload

    def get_user_by_email(self, email: str) -> AppUser:
        return self._rest.call(GET_USER_BY_EMAIL, email=email).payload

    def register_user(self, request: CreateUserRequest) -> AppUser:
        return self._rest.call(REGISTER_USER, body=request).payload

    def update_user(self, request: UpdateUserRequest) -> AppUser:
        return self._rest.call(UPDATE_USER, body=request).payload

    def delete_user(self, user_id: int) -> None:
        self._rest.call(DELETE_USER, user_id=int(user_id))

    def enable_totp(self, user_id: int) -> TOTPEnable:
        return self._rest.call(ENABLE_TOTP, user_id=int(user_id)).payload

    def confirm_totp(self, user_id: int, code: str) -> TOTPEnable:
        body = TOTPConfirmRequest(totp_code=code)
        return self._rest.call(CONFIRM_TOTP, body=body, user_id=int(user_id)).payload

    def login(self, email: str, password: str) -> AppUserAuth:
        return self._rest.call(LOGIN, body=UserLoginRequest(email=email, password=password)).payload

    def login_totp(self, login_code: str, totp_code: str) -> AppUserAuth:
        body = TOTPLoginRequest(login_code=login_code, totp_code=totp_code)
        return self._rest.call(LOGIN_TOTP, body=body).payload
