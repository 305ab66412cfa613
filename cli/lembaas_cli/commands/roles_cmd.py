from __future__ import annotations

import typer
from lembaas_client import LembaasClientError
from lembaas_client.models import CreateRoleRequest
from rich.markup import escape
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_bool, format_timestamp, to_jsonable
from ..http import fail, make_client

app = typer.Typer(help="Application roles.")


@app.command("list")
def list_roles(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        data = client.roles.list_roles()
    except LembaasClientError as e:
        fail("Failed to list roles", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(data))
        return

    table = Table(title=f"Roles ({data.count})")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("permissions")
    table.add_column("default")
    table.add_column("created")
    for r in data.roles:
        table.add_row(
            str(r.id),
            escape(r.name),
            escape(r.permissions or "-"),
            format_bool(r.is_default),
            format_timestamp(r.created_at),
        )
    console.print(table)


@app.command("create")
def create_role(
        name: str = typer.Option(..., "--name", help="Role name."),
        description: str = typer.Option("", "--description", help="Role description."),
        permissions: str = typer.Option("", "--permissions", help="Permissions string as understood by the app."),
        is_default: bool = typer.Option(False, "--default", help="Assign to new users by default."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    request = CreateRoleRequest(name=name, description=description, permissions=permissions, is_default=is_default)
    try:
        role = client.roles.create_role(request)
    except LembaasClientError as e:
        fail("Failed to create role", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(role))
        return
    console.ok(f"Role created: id={role.id} name={role.name}")


@app.command("delete")
def delete_role(
        role_id: int = typer.Argument(..., help="Role ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not typer.confirm(f"Delete role {role_id}?", default=False):
        raise typer.Exit(code=0)

    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        client.roles.delete_role(role_id)
    except LembaasClientError as e:
        fail(f"Failed to delete role {role_id}", e)
    finally:
        client.close()

    console.ok(f"Role {role_id} deleted.")
