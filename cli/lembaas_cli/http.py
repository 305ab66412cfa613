from __future__ import annotations

from typing import NoReturn

import typer
from lembaas_client import (
    AuthError,
    ClientConfig,
    ConfigError,
    LembaasClient,
    LembaasClientError,
    NotFoundError,
)

from . import console
from .config import AppConfig, apply_env, normalize_base_url


def make_client(cfg: AppConfig, *, base_url_override: str | None = None, anonymous: bool = False) -> LembaasClient:
    effective = apply_env(cfg)
    base_url = normalize_base_url(base_url_override or effective.base_url)
    token = None if anonymous else (effective.auth.token or None)
    try:
        client_cfg = ClientConfig(base_url=base_url, api_version=effective.api_version, token=token)
    except ConfigError as e:
        console.err(f"Invalid settings: {e}")
        raise typer.Exit(code=2)
    return LembaasClient(client_cfg)


def fail(action: str, e: LembaasClientError) -> NoReturn:
    """Report a client error and exit: 1 for missing resources, 2 otherwise."""
    if isinstance(e, NotFoundError):
        console.err(f"{action}: not found.")
        raise typer.Exit(code=1)
    if isinstance(e, AuthError):
        console.err(f"{action}: unauthorized ({e.actual}). Run 'lembaas auth token' to get a new token.")
        raise typer.Exit(code=2)
    if isinstance(e, ConfigError):
        console.err(f"{action}: {e}. Run 'lembaas auth token' first.")
        raise typer.Exit(code=2)
    console.err(f"{action}: {e}")
    raise typer.Exit(code=2)
