from __future__ import annotations

from datetime import datetime, timedelta, timezone

import typer
from lembaas_client import LembaasClientError

from .. import console
from ..config import load_config, save_config
from ..formatting import format_expires_in, format_timestamp, to_jsonable
from ..http import fail, make_client

app = typer.Typer(help="App credentials and bearer token.")


@app.command("token")
def get_token(
        client_id: str = typer.Option(..., "--client-id", prompt=True, help="Application client ID."),
        client_secret: str = typer.Option(
            ..., "--client-secret", prompt=True, hide_input=True, help="Application client secret."
        ),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url, anonymous=True)
    try:
        token = client.apps.get_auth_token(client_id, client_secret)
    except LembaasClientError as e:
        fail("Token exchange failed", e)
    finally:
        client.close()

    if token is None or not token.token:
        console.err("Token exchange returned no token.")
        raise typer.Exit(code=2)

    cfg.auth.token = token.token
    cfg.auth.token_type = (token.token_type or "bearer").lower()
    cfg.auth.expires_at = None
    if token.expires_in > 0:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=token.expires_in)
        cfg.auth.expires_at = format_timestamp(expires_at)
    save_path = save_config(cfg)
    console.ok(f"Token saved to {save_path} (expires in {format_expires_in(token.expires_in)}).")


@app.command("logout", help="Clear the saved bearer token.")
def logout():
    cfg = load_config()
    cfg.auth.token = ""
    cfg.auth.expires_at = None
    save_path = save_config(cfg)
    console.ok(f"Token cleared from {save_path}.")


@app.command("app")
def app_info(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show the application the saved token belongs to."""
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        info = client.apps.get_app_info()
    except LembaasClientError as e:
        fail("Failed to fetch app info", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(info))
        return

    console.ok("App:")
    console.print(f"  id: {info.id}", markup=False)
    console.print(f"  name: {info.name}", markup=False)
    console.print(f"  description: {info.description or '-'}", markup=False)
    console.print(f"  client_id: {info.client_id}", markup=False)
    console.print(f"  icon_url: {info.icon_url or '-'}", markup=False)
    console.print(f"  created_at: {format_timestamp(info.created_at)}", markup=False)
    if cfg.auth.expires_at:
        console.print(f"  token_expires_at: {cfg.auth.expires_at}", markup=False)
