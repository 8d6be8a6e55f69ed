"""User management CLI commands."""

import typer
from rich.console import Console
from rich.table import Table

from src.sixcities.core.exceptions import UserError
from src.sixcities.core.services.database.db_session import DbSessionService
from src.sixcities.core.services.user.user_service import UserService
from src.sixcities.entities.user.dto import CreateUserDTO, LoginUserDTO
from src.sixcities.entities.user.user_type import UserType
from src.sixcities.runtime.init_db import init_db

console = Console()

users_app = typer.Typer(help="Manage users stored in the configured database")


def get_db_service() -> DbSessionService:
    """Build the database service from the active configuration."""
    return DbSessionService()


def _print_rdo_table(rdo: dict[str, object] | None, email: str) -> None:
    if rdo is None:
        console.print(f"[red]❌ No user with email '{email}'[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"User {email}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for key, value in rdo.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@users_app.command("init-db")
def init_db_command() -> None:
    """Create the users table if it does not exist."""
    init_db(get_db_service())
    console.print("[green]✅ Database initialized[/green]")


@users_app.command("create")
def create_user(
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(..., "--password", "-p", help="Plaintext password"),
    user_type: UserType = typer.Option(UserType.REGULAR, "--type", "-t", help="User role"),
    avatar_path: str = typer.Option("", "--avatar", help="Path to the avatar image"),
) -> None:
    """Create a user and print its public representation."""
    db_service = get_db_service()
    db_service.create_all()

    dto = CreateUserDTO(
        name=name,
        email=email,
        password=password,
        user_type=user_type,
        avatar_path=avatar_path,
    )
    try:
        with db_service.session_scope() as session:
            service = UserService(session)
            rdo = service.to_rdo(service.create(dto)).to_response()
    except UserError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e

    _print_rdo_table(rdo, email)
    console.print(f"[green]✅ User '{email}' created[/green]")


@users_app.command("show")
def show_user(email: str = typer.Argument(..., help="Email of the user")) -> None:
    """Show the public representation of a user."""
    with get_db_service().session_scope() as session:
        service = UserService(session)
        user = service.find_by_email(email)
        rdo = service.to_rdo(user).to_response() if user is not None else None

    _print_rdo_table(rdo, email)


@users_app.command("verify")
def verify_user(
    email: str = typer.Argument(..., help="Email of the user"),
    password: str = typer.Option(..., "--password", "-p", help="Plaintext password"),
) -> None:
    """Check a password against the stored hash."""
    with get_db_service().session_scope() as session:
        user = UserService(session).verify_credentials(
            LoginUserDTO(email=email, password=password)
        )

    if user is None:
        console.print("[red]❌ Invalid email or password[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✅ Password matches for '{email}'[/green]")
