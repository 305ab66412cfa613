from __future__ import annotations

import typer
from lembaas_client import LembaasClientError
from lembaas_client.models import AppUser, AppUserAuth, CreateUserRequest, UpdateUserRequest
from rich.markup import escape
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_bool, format_expires_in, format_timestamp, to_jsonable
from ..http import fail, make_client

app = typer.Typer(help="Application users, logins and TOTP.")


def _print_user(user: AppUser) -> None:
    console.print(f"  id: {user.id}", markup=False)
    console.print(f"  email: {user.email}", markup=False)
    console.print(f"  role_id: {user.role_id}", markup=False)
    console.print(f"  active: {format_bool(user.is_active)}", markup=False)
    console.print(f"  created_at: {format_timestamp(user.created_at)}", markup=False)
    console.print(f"  updated_at: {format_timestamp(user.updated_at)}", markup=False)


def _print_auth(auth: AppUserAuth) -> None:
    if auth.totp_required:
        console.warn("Second factor required.")
        console.print(f"  login_code: {auth.login_code}", markup=False)
        console.print(f"  valid_until: {format_timestamp(auth.login_code_valid_until)}", markup=False)
        console.info("Continue with: lembaas users login-totp --login-code <code> --totp-code <totp>")
        return
    if not auth.is_valid_login:
        console.err("Login response carries no session.")
        raise typer.Exit(code=2)
    console.ok(f"Logged in as {auth.email} (user {auth.user_id}, role {auth.role_id}).")
    console.print(f"  session_token: {auth.session_token}", markup=False)
    if auth.expires_at is not None:
        console.print(f"  expires_at: {format_timestamp(auth.expires_at)}", markup=False)
    else:
        console.print(f"  expires_in: {format_expires_in(auth.expires_in)}", markup=False)


@app.command("list")
def list_users(
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        data = client.users.list_users()
    except LembaasClientError as e:
        fail("Failed to list users", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(data))
        return

    table = Table(title=f"Users ({data.count})")
    table.add_column("id", style="bold")
    table.add_column("email")
    table.add_column("role_id")
    table.add_column("active")
    table.add_column("created")
    for u in data.users:
        table.add_row(str(u.id), escape(u.email), str(u.role_id), format_bool(u.is_active), format_timestamp(u.created_at))
    console.print(table)


@app.command("show")
def show_user(
        user_id: int | None = typer.Argument(None, help="User ID."),
        email: str | None = typer.Option(None, "--email", help="Look the user up by e-mail instead."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    if (user_id is None) == (email is None):
        console.err("Pass either a user ID or --email.")
        raise typer.Exit(code=2)

    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        if email is not None:
            user = client.users.get_user_by_email(email)
        else:
            user = client.users.get_user(user_id)
    except LembaasClientError as e:
        fail(f"Failed to fetch user {email or user_id}", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(user))
        return
    console.ok("User:")
    _print_user(user)


@app.command("register")
def register_user(
        email: str = typer.Option(..., "--email", help="User e-mail."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, confirmation_prompt=True),
        role_id: int = typer.Option(0, "--role-id", help="Role ID (0 lets the app pick its default role)."),
        active: bool = typer.Option(True, "--active/--inactive", help="Create the user enabled or disabled."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    request = CreateUserRequest(email=email, password=password, role_id=role_id, is_active=active)
    try:
        user = client.users.register_user(request)
    except LembaasClientError as e:
        fail("Failed to register user", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(user))
        return
    console.ok(f"User registered: id={user.id} email={user.email}")


@app.command("update")
def update_user(
        user_id: int = typer.Argument(..., help="User ID."),
        email: str = typer.Option(..., "--email", help="User e-mail."),
        password: str = typer.Option("", "--password", help="New password (empty keeps the current one)."),
        role_id: int = typer.Option(0, "--role-id", help="Role ID."),
        active: bool = typer.Option(True, "--active/--inactive", help="Enable or disable the user."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    request = UpdateUserRequest(id=user_id, email=email, password=password, role_id=role_id, is_active=active)
    try:
        user = client.users.update_user(request)
    except LembaasClientError as e:
        fail(f"Failed to update user {user_id}", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(user))
        return
    console.ok(f"User {user_id} updated.")
    _print_user(user)


@app.command("delete")
def delete_user(
        user_id: int = typer.Argument(..., help="User ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    if not yes and not typer.confirm(f"Delete user {user_id}?", default=False):
        raise typer.Exit(code=0)

    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        client.users.delete_user(user_id)
    except LembaasClientError as e:
        fail(f"Failed to delete user {user_id}", e)
    finally:
        client.close()

    console.ok(f"User {user_id} deleted.")


@app.command("totp-enable")
def enable_totp(
        user_id: int = typer.Argument(..., help="User ID."),
        qr_out: str | None = typer.Option(None, "--qr-out", help="Write the enrolment QR code (PNG) to this file."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        result = client.users.enable_totp(user_id)
    except LembaasClientError as e:
        fail(f"Failed to enable TOTP for user {user_id}", e)
    finally:
        client.close()

    console.ok(f"TOTP enrolment started for user {user_id}.")
    if qr_out:
        with open(qr_out, "wb") as f:
            f.write(result.qr_code)
        console.info(f"QR code written to {qr_out} ({len(result.qr_code)} bytes).")
    console.info(f"Confirm with: lembaas users totp-confirm {user_id} <code>")


@app.command("totp-confirm")
def confirm_totp(
        user_id: int = typer.Argument(..., help="User ID."),
        code: str = typer.Argument(..., help="Current code from the authenticator app."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        client.users.confirm_totp(user_id, code)
    except LembaasClientError as e:
        fail(f"Failed to confirm TOTP for user {user_id}", e)
    finally:
        client.close()

    console.ok(f"TOTP enabled for user {user_id}.")


@app.command("login")
def login(
        email: str = typer.Option(..., "--email", prompt=True, help="User e-mail."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="User password."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Log an app user in (checks credentials; the session is not saved)."""
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        auth = client.users.login(email, password)
    except LembaasClientError as e:
        fail("Login failed", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(auth))
        return
    _print_auth(auth)


@app.command("login-totp")
def login_totp(
        login_code: str = typer.Option(..., "--login-code", help="login_code returned by 'users login'."),
        totp_code: str = typer.Option(..., "--totp-code", prompt=True, help="Code from the authenticator app."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, base_url_override=base_url)
    try:
        auth = client.users.login_totp(login_code, totp_code)
    except LembaasClientError as e:
        fail("TOTP login failed", e)
    finally:
        client.close()

    if json_out:
        console.print_json(to_jsonable(auth))
        return
    _print_auth(auth)
