"""CLI commands for user administration."""

from __future__ import annotations

import click

from wms.application.manage_users import (
    ApproveUserHandler,
    ChangeUserRoleHandler,
    ListUsersHandler,
    RegisterUserHandler,
    RemoveUserHandler,
)
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import Container


@click.command("register")
@click.argument("username")
@click.pass_obj
def user_register(container: Container, username: str) -> None:
    """Register a new user (pending approval)."""
    try:
        dto = RegisterUserHandler(container.user_repository()).handle(username)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"User '{dto.username}' registered, awaiting approval.")


@click.command("approve")
@click.argument("username")
@click.pass_obj
def user_approve(container: Container, username: str) -> None:
    """Approve a pending user."""
    try:
        ApproveUserHandler(container.user_repository()).handle(username)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"User '{username}' approved.")


@click.command("role")
@click.argument("username")
@click.argument("role", type=click.Choice(["administrator", "user"]))
@click.pass_obj
def user_role(container: Container, username: str, role: str) -> None:
    """Change a user's role."""
    try:
        ChangeUserRoleHandler(container.user_repository()).handle(username, role)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"User '{username}' is now {role}.")


@click.command("remove")
@click.argument("username")
@click.pass_obj
def user_remove(container: Container, username: str) -> None:
    """Remove a user."""
    try:
        RemoveUserHandler(container.user_repository()).handle(username)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"User '{username}' removed.")


@click.command("list")
@click.pass_obj
def user_list(container: Container) -> None:
    """List users."""
    try:
        users = ListUsersHandler(container.user_repository()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'Username':<20} {'Role':<14} {'Status':<8}")
    click.echo("-" * 44)
    for u in users:
        click.echo(f"{u.username:<20} {u.role:<14} {u.status:<8}")
