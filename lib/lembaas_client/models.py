from __future__ import annotations

import base64
import binascii
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from .errors import DecodeError

T = TypeVar("T")

# Go's zero time.Time; the API sends it for "never".
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"{what}: expected JSON object, got {type(data).__name__}")
    return data


def _wrong(key: str, want: str, value: Any) -> DecodeError:
    return DecodeError(f"field {key!r}: expected {want}, got {type(value).__name__}")


def _str(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _wrong(key, "string", value)
    return value


def _int(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise _wrong(key, "integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise _wrong(key, "integer", value)


def _bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _wrong(key, "boolean", value)
    return value


def _time(data: dict, key: str) -> datetime | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise _wrong(key, "RFC 3339 timestamp", value)
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise DecodeError(f"field {key!r}: invalid timestamp {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if dt == _ZERO_TIME:
        return None
    return dt


def _bytes(data: dict, key: str) -> bytes:
    value = data.get(key)
    if value is None:
        return b""
    if not isinstance(value, str):
        raise _wrong(key, "base64 string", value)
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"field {key!r}: invalid base64") from e


def _items(data: dict, key: str, item: Callable[[Any], T]) -> list[T]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _wrong(key, "array", value)
    return [item(v) for v in value]


# --- responses ---

@dataclass
class AppToken:
    token: str = ""
    expires_in: int = 0
    token_type: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> AppToken:
        d = _object(data, "token")
        return cls(token=_str(d, "token"), expires_in=_int(d, "expires_in"), token_type=_str(d, "token_type"))


@dataclass
class AppInfo:
    id: int = 0
    name: str = ""
    description: str = ""
    client_id: str = ""
    icon_url: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AppInfo:
        d = _object(data, "app")
        return cls(
            id=_int(d, "id"),
            name=_str(d, "name"),
            description=_str(d, "description"),
            client_id=_str(d, "client_id"),
            icon_url=_str(d, "icon_url"),
            created_at=_time(d, "created_at"),
        )


@dataclass
class AppConfigValue:
    config_key: str = ""
    config_value: str = ""
    enabled: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> AppConfigValue:
        d = _object(data, "config value")
        return cls(config_key=_str(d, "config_key"), config_value=_str(d, "config_value"), enabled=_bool(d, "enabled"))


@dataclass
class AppConfigValueList:
    count: int = 0
    config_values: list[AppConfigValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AppConfigValueList:
        d = _object(data, "config values")
        return cls(count=_int(d, "count"), config_values=_items(d, "config_values", AppConfigValue.from_dict))


@dataclass
class AppRole:
    id: int = 0
    app_id: int = 0
    name: str = ""
    description: str = ""
    permissions: str = ""
    is_default: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AppRole:
        d = _object(data, "role")
        return cls(
            id=_int(d, "id"),
            app_id=_int(d, "app_id"),
            name=_str(d, "name"),
            description=_str(d, "description"),
            permissions=_str(d, "permissions"),
            is_default=_bool(d, "is_default"),
            created_at=_time(d, "created_at"),
        )


@dataclass
class AppRoleList:
    count: int = 0
    roles: list[AppRole] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AppRoleList:
        d = _object(data, "roles")
        return cls(count=_int(d, "count"), roles=_items(d, "roles", AppRole.from_dict))


@dataclass
class AppUser:
    id: int = 0
    app_id: int = 0
    email: str = ""
    role_id: int = 0
    is_active: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AppUser:
        d = _object(data, "user")
        return cls(
            id=_int(d, "id"),
            app_id=_int(d, "app_id"),
            email=_str(d, "email"),
            role_id=_int(d, "role_id"),
            is_active=_bool(d, "is_active"),
            created_at=_time(d, "created_at"),
            updated_at=_time(d, "updated_at"),
        )

    @classmethod
    def from_envelope(cls, data: Any) -> AppUser:
        """Single-user responses wrap the user: ``{"user": {...}}``."""
        d = _object(data, "user response")
        inner = d.get("user")
        if inner is None:
            return cls()
        return cls.from_dict(inner)


@dataclass
class AppUserList:
    count: int = 0
    users: list[AppUser] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AppUserList:
        d = _object(data, "users")
        return cls(count=_int(d, "count"), users=_items(d, "users", AppUser.from_dict))


@dataclass
class AppUserSession:
    id: str = ""
    app_id: int = 0
    user_id: int = 0
    expires_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AppUserSession:
        d = _object(data, "session")
        return cls(
            id=_str(d, "id"),
            app_id=_int(d, "app_id"),
            user_id=_int(d, "user_id"),
            expires_at=_time(d, "expires_at"),
            created_at=_time(d, "created_at"),
        )


@dataclass
class AppUserAuth:
    session_token: str = ""
    user_id: int = 0
    email: str = ""
    role_id: int = 0
    expires_at: datetime | None = None
    expires_in: int = 0
    # second factor
    login_code: str = ""
    login_code_valid_until: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AppUserAuth:
        d = _object(data, "login")
        return cls(
            session_token=_str(d, "session_token"),
            user_id=_int(d, "user_id"),
            email=_str(d, "email"),
            role_id=_int(d, "role_id"),
            expires_at=_time(d, "expires_at"),
            expires_in=_int(d, "expires_in"),
            login_code=_str(d, "login_code"),
            login_code_valid_until=_time(d, "login_code_valid_until"),
        )

    @property
    def is_valid_login(self) -> bool:
        return (
            self.user_id > 0
            and (self.expires_in > 0 or self.expires_at is not None)
            and self.session_token != ""
        )

    @property
    def totp_required(self) -> bool:
        return self.login_code != "" and self.login_code_valid_until is not None


@dataclass
class TOTPEnable:
    qr_code: bytes = b""

    @classmethod
    def from_dict(cls, data: Any) -> TOTPEnable:
        d = _object(data, "totp")
        return cls(qr_code=_bytes(d, "qr_code"))


# --- requests ---

class _Request:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TokenRequest(_Request):
    client_id: str
    client_secret: str


@dataclass
class SetConfigValueRequest(_Request):
    config_key: str
    config_value: str


@dataclass
class CreateRoleRequest(_Request):
    name: str
    description: str = ""
    permissions: str = ""
    is_default: bool = False


@dataclass
class CreateUserRequest(_Request):
    email: str
    password: str
    role_id: int = 0
    is_active: bool = True


@dataclass
class UpdateUserRequest(_Request):
    id: int
    email: str
    password: str = ""
    role_id: int = 0
    is_active: bool = True


@dataclass
class UserLoginRequest(_Request):
    email: str
    password: str


@dataclass
class TOTPLoginRequest(_Request):
    login_code: str
    totp_code: str


@dataclass
class TOTPConfirmRequest(_Request):
    totp_code: str
