"""Main CLI entry point for Bella"""

import typer

from bella.__version__ import __version__
from bella.cli.commands import chat as chat_module

app = typer.Typer(
    name="bella",
    help="Bella - retirement plan transaction assistant",
    add_completion=False,
)

app.add_typer(chat_module.app, name="chat", help="Start an interactive chat session")


def version_callback(value: bool) -> None:
    """Print version and exit"""
    if value:
        typer.echo(f"Bella version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Bella - retirement plan transaction assistant"""
    pass


def cli() -> None:
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    cli()
