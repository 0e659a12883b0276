"""CLI entry point for Gatehouse."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from gatehouse_core.config import GatehouseConfig, load_config
from gatehouse_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from gatehouse_core.identity.models import User
from gatehouse_core.logging_setup import configure_logging
from gatehouse_core.policy import build_rbac
from gatehouse_core.rbac import RBAC, RBACError

app = typer.Typer(
    name="gatehouse",
    help="In-memory RBAC registry: inspect and query a bootstrap policy.",
)

config_app = typer.Typer(help="Manage Gatehouse configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: GatehouseConfig | None = None

# Exit codes for `check`
EXIT_ALLOWED = 0
EXIT_DENIED = 1
EXIT_ERROR = 2


def _get_config() -> GatehouseConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to gatehouse.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)
    configure_logging(_config.log_level, _config.log_format)


def _build() -> RBAC:
    try:
        return build_rbac(_get_config().policy)
    except RBACError as e:
        rprint(f"[red]Invalid policy:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)


@app.command()
def check(
    user: str = typer.Argument(..., help="User id"),
    obj: str = typer.Argument(..., metavar="OBJECT", help="Protected object"),
    action: str = typer.Argument(..., help="Action on the object"),
) -> None:
    """Decide whether USER may perform ACTION on OBJECT under the configured policy."""
    rbac = _build()
    try:
        allowed = rbac.user_has_object_action(User(id=user), obj, action)
    except (RBACError, ValidationError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    if allowed:
        rprint(f"[green]ALLOW[/green] {user} {obj}:{action}")
        raise typer.Exit(EXIT_ALLOWED)
    rprint(f"[red]DENY[/red] {user} {obj}:{action}")
    raise typer.Exit(EXIT_DENIED)


@app.command()
def show() -> None:
    """Show the roles and user assignments of the configured policy."""
    rbac = _build()

    roles = Table(title=f"Roles ({len(rbac.list_roles())})")
    roles.add_column("Role", style="bold")
    roles.add_column("Permissions")
    for role in sorted(rbac.list_roles(), key=str):
        perms = sorted(str(p) for p in rbac.list_role_permissions(role))
        roles.add_row(str(role), ", ".join(perms) or "-")
    rprint(roles)

    users = Table(title=f"Users ({len(rbac.list_users())})")
    users.add_column("User", style="bold")
    users.add_column("Roles")
    users.add_column("Effective permissions", style="dim")
    for user in sorted(rbac.list_users(), key=str):
        held = sorted(str(r) for r in rbac.list_user_roles(user))
        effective = sorted(str(p) for p in rbac.list_user_permissions(user))
        users.add_row(str(user), ", ".join(held) or "-", ", ".join(effective) or "-")
    rprint(users)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default gatehouse.yaml in current directory."""
    target = Path("gatehouse.yaml")
    if target.exists() and not force:
        rprint("[yellow]gatehouse.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
