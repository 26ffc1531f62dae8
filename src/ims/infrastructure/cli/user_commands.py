"""CLI commands for the user directory."""

from __future__ import annotations

import click

from ims.application.add_user import AddUserHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.cli.session import Session, pass_session


@click.command("add")
@click.option("--id", "user_id", required=True, help="User ID from the auth provider.")
@click.option("--first-name", required=True, help="Name shown in history.")
@click.option("--role", default="Employee", help="Role, e.g. Admin or Employee.")
@click.option("--photo-url", default="", help="Profile photo URL.")
@pass_session
def user_add(
    session: Session, user_id: str, first_name: str, role: str, photo_url: str
) -> None:
    """Register or update a user profile."""
    handler = AddUserHandler(user_repo=session.container.user_repository)

    try:
        user = handler.handle(user_id, first_name, role, photo_url)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user.id} '{user.first_name}' ({user.role}) saved")


@click.command("list")
@pass_session
def user_list(session: Session) -> None:
    """List user profiles."""
    users = session.container.user_repository.list_all()

    if not users:
        click.echo("No users found.")
        return

    for u in users:
        click.echo(f"{u.id:<20} {u.first_name:<15} {u.role}")
