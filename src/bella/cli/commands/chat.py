"""Chat command for interactive sessions."""

from pathlib import Path

import typer

app = typer.Typer(help="Start interactive chat with Bella")


@app.callback(invoke_without_command=True)
def run_chat(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to bella.yaml or config directory"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Log level (overrides the config file)"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write JSON logs to this file"
    ),
    conversation_id: str | None = typer.Option(
        None, "--conversation", help="Conversation ID used in logs"
    ),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    ctx: typer.Context = typer.Option(None, hidden=True),  # Inject context
) -> None:
    """Start interactive chat session."""
    if ctx and ctx.invoked_subcommand:
        return

    from bella.cli.chat_runner import ChatConfig, run_chat_session
    from bella.core.errors import ConfigError

    chat_config = ChatConfig(
        config_path=config,
        log_level=log_level,
        log_file=log_file,
        conversation_id=conversation_id,
        debug=debug,
    )

    try:
        run_chat_session(chat_config)
    except KeyboardInterrupt:
        pass
    except (ConfigError, FileNotFoundError) as e:
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1)
