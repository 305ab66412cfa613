from __future__ import annotations

import typer
from lembaas_client import LembaasClientError
from rich.markup import escape
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_bool, to_jsonable
from ..http import fail, make_client

app = typer.Typer(help="Custom app config values (key/value).")


@app.command("list")
def list_values(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        data = client.config.list_values()
    except LembaasClientError as e:
        fail("Failed to list config values", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(data))
        return

    table = Table(title=f"Config values ({data.count})")
    table.add_column("key", style="bold")
    table.add_column("value")
    table.add_column("enabled")
    for v in data.config_values:
        table.add_row(escape(v.config_key), escape(v.config_value), format_bool(v.enabled))
    console.print(table)


@app.command("get")
def get_value(
        key: str = typer.Argument(..., help="Config key."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        value = client.config.get_value(key)
    except LembaasClientError as e:
        fail(f"Failed to get '{key}'", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(value))
        return
    # plain value so it can be used in scripts
    console.print(value.config_value, markup=False, highlight=False)


@app.command("set")
def set_value(
        key: str = typer.Argument(..., help="Config key."),
        value: str = typer.Argument(..., help="Config value."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        saved = client.config.set_value(key, value)
    except LembaasClientError as e:
        fail(f"Failed to set '{key}'", e)
    finally:
        client.close()

    console.ok(f"{saved.config_key} = {saved.config_value} (enabled: {format_bool(saved.enabled)})")


@app.command("delete")
def delete_value(
        key: str = typer.Argument(..., help="Config key."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not typer.confirm(f"Delete config value '{key}'?", default=False):
        raise typer.Exit(code=0)

    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        client.config.delete_value(key)
    except LembaasClientError as e:
        fail(f"Failed to delete '{key}'", e)
    finally:
        client.close()

    console.ok(f"Config value '{key}' deleted.")
