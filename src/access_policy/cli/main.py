"""CLI entry point for access-policy.

Invoked as::

    access-policy [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m access_policy.cli.main

Commands
--------
- check     Decide one action for an actor in a scope
- explain   Show which permissions authorize each action in a scope
- validate  Load a policy document and report what it declares
- version   Show version information

``check`` exits 0 when allowed, 1 when denied, and 2 when the policy
document or the arguments are invalid.
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from access_policy.config.loader import LoadedPolicies, PolicyConfigError, PolicyLoader
from access_policy.decision.held import HeldPermissionSet
from access_policy.roles.store import PermissionSetNotFoundError
from access_policy.scope import PolicyScope

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("policies.yaml")
_EXIT_CONFIG_ERROR = 2


def _load_or_exit(config_path: str) -> LoadedPolicies:
    try:
        return PolicyLoader().load(Path(config_path))
    except (FileNotFoundError, PolicyConfigError) as exc:
        err_console.print(f"[red]Invalid policy document:[/red] {escape(str(exc))}")
        sys.exit(_EXIT_CONFIG_ERROR)


def _scope_or_exit(policies: LoadedPolicies, scope_name: str) -> PolicyScope:
    try:
        return policies.scope(scope_name)
    except KeyError as exc:
        err_console.print(f"[red]{escape(str(exc.args[0]))}[/red]")
        sys.exit(_EXIT_CONFIG_ERROR)


_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(),
    help="Path to the policy document.",
)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="access-policy")
def cli() -> None:
    """Access policy CLI: evaluate permit/restrict rules against actors."""


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from access_policy import __version__

    console.print(
        Panel(
            f"[bold]access-policy[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Permission rule evaluation and authorization decisions.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@_config_option
@click.option("--scope", "-s", "scope_name", required=True, help="Scope to evaluate in.")
@click.option("--action", "-a", required=True, help="Action name to decide.")
@click.option(
    "--permission",
    "-p",
    "permissions",
    multiple=True,
    help="Permission held by the actor. Repeatable.",
)
@click.option(
    "--permission-set",
    "-r",
    "permission_sets",
    multiple=True,
    help="Permission set (role) held by the actor. Repeatable.",
)
@click.option("--anonymous", is_flag=True, help="Decide with no actor.")
def check_command(
    config_path: str,
    scope_name: str,
    action: str,
    permissions: tuple[str, ...],
    permission_sets: tuple[str, ...],
    anonymous: bool,
) -> None:
    """Decide whether an actor may perform an action in a scope."""
    policies = _load_or_exit(config_path)
    scope = _scope_or_exit(policies, scope_name)

    held: HeldPermissionSet | None = None
    if not anonymous:
        held = HeldPermissionSet.from_iterable(permissions)
        if permission_sets:
            try:
                roles = policies.permission_sets.new_in_roles("cli", *permission_sets)
            except PermissionSetNotFoundError as exc:
                err_console.print(f"[red]{escape(str(exc))}[/red]")
                sys.exit(_EXIT_CONFIG_ERROR)
            held = held.union(roles.held_permissions())

    result = scope.decide(action, held)

    status_str = "[green]ALLOWED[/green]" if result.allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Access Check Result", border_style="blue"))
    console.print(f"  Scope: [cyan]{escape(scope.name)}[/cyan]  Action: [cyan]{escape(result.action)}[/cyan]")
    console.print(f"  Actor: {'(none)' if held is None else escape(str(held))}")
    console.print(f"  Required: {escape(str(sorted(result.required))) if result.required else '(none)'}")
    console.print(f"  Reason: {result.reason}")

    sys.exit(0 if result.allowed else 1)


# ---------------------------------------------------------------------------
# explain
# ---------------------------------------------------------------------------


@cli.command(name="explain")
@_config_option
@click.option("--scope", "-s", "scope_name", required=True, help="Scope to explain.")
@click.option(
    "--action",
    "-a",
    "actions",
    multiple=True,
    required=True,
    help="Action name to explain. Repeatable.",
)
def explain_command(config_path: str, scope_name: str, actions: tuple[str, ...]) -> None:
    """Show which permissions would authorize each action.

    Conditional rules are evaluated as if no actor were present.
    """
    policies = _load_or_exit(config_path)
    scope = _scope_or_exit(policies, scope_name)

    table = Table(title=f"Required permissions in {scope.name}", box=box.SIMPLE)
    table.add_column("Action", style="cyan")
    table.add_column("Permissions", style="magenta")
    for action in actions:
        required = scope.decide(action).required
        table.add_row(action, ", ".join(sorted(required)) or "(none)")
    console.print(table)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@_config_option
def validate_command(config_path: str) -> None:
    """Load a policy document and summarise it."""
    policies = _load_or_exit(config_path)

    table = Table(title="Scopes", box=box.SIMPLE)
    table.add_column("Scope", style="cyan")
    table.add_column("Parent", style="dim")
    table.add_column("Permissions", style="magenta")
    for scope in policies.scopes.values():
        table.add_row(scope.name, scope.parent or "-", ", ".join(scope.table.names))
    console.print(table)

    console.print(
        f"[green]Valid[/green] {len(policies.scopes)} scopes, "
        f"{len(policies.permission_sets)} permission sets."
    )


if __name__ == "__main__":
    cli()
