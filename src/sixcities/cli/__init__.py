"""Main CLI application module."""

import typer

from src.sixcities.runtime.logging_setup import configure_logging

from .user_commands import users_app

app = typer.Typer(
    help="Six Cities user data tools",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def _setup() -> None:
    configure_logging()


app.add_typer(users_app, name="users")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
