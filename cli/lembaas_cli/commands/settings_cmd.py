from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/lembaas/config.toml).")


@app.command("show")
def show_settings():
    cfg = load_config()
    token_state = "(set)" if (cfg.auth.token or "").strip() else "(empty)"
    console.print(
        f"base_url={cfg.base_url} api_version={cfg.api_version} token={token_state} token_type={cfg.auth.token_type}",
        markup=False,
    )
    console.info(f"config file: {config_path()}")


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help="Setting key (base_url, api_version)."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "base_url":
        console.print(cfg.base_url, markup=False)
        return
    if k == "api_version":
        console.print(str(cfg.api_version))
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        api_version: int | None = typer.Option(None, "--api-version", min=1, help="Set API version (the N in /api/vN)."),
):
    cfg = load_config()
    if base_url is not None:
        normalized = normalize_base_url(base_url)
        if not normalized:
            console.err("Base URL cannot be empty.")
            raise typer.Exit(code=2)
        cfg.base_url = normalized
    if api_version is not None:
        cfg.api_version = api_version
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
