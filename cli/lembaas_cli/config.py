from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from typing import Any

import tomli_w
from platformdirs import user_config_dir

APP_NAME = "lembaas"
CONFIG_FILENAME = "config.toml"
BASE_URL_DEFAULT = "http://127.0.0.1:8080"
API_VERSION_DEFAULT = 1
ENV_BASE_URL = "LEMBAAS_BASE_URL"
ENV_TOKEN = "LEMBAAS_TOKEN"


@dataclass
class AuthConfig:
    token: str = ""
    token_type: str = "bearer"
    expires_at: str | None = None


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig = field(default_factory=AuthConfig)
    api_version: int = API_VERSION_DEFAULT


def config_path() -> str:
    return os.path.join(user_config_dir(APP_NAME), CONFIG_FILENAME)


def default_config() -> AppConfig:
    return AppConfig(base_url=BASE_URL_DEFAULT, auth=AuthConfig(), api_version=API_VERSION_DEFAULT)


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"
    return f"{scheme}{value}"


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return _prune_none(
        {
            "base_url": cfg.base_url,
            "api_version": cfg.api_version,
            "auth": {
                "token": cfg.auth.token,
                "token_type": cfg.auth.token_type,
                "expires_at": cfg.auth.expires_at,
            },
        }
    )


def _prune_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_none(v) for k, v in value.items() if v is not None}
    return value


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""))
    if base_url:
        cfg.base_url = base_url
    api_version = data.get("api_version")
    if isinstance(api_version, int) and not isinstance(api_version, bool) and api_version > 0:
        cfg.api_version = api_version
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        expires_at = auth_raw.get("expires_at")
        cfg.auth = AuthConfig(
            token=str(auth_raw.get("token") or ""),
            token_type=str(auth_raw.get("token_type") or "bearer"),
            expires_at=expires_at if isinstance(expires_at, str) else None,
        )
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_env(cfg: AppConfig) -> AppConfig:
    """Environment wins over the file; the saved config is left untouched."""
    base_url = normalize_base_url(os.getenv(ENV_BASE_URL, ""))
    token = os.getenv(ENV_TOKEN, "").strip()
    if not base_url and not token:
        return cfg
    return replace(
        cfg,
        base_url=base_url or cfg.base_url,
        auth=replace(cfg.auth, token=token) if token else cfg.auth,
    )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
