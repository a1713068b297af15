"""Interactive chat runner for Bella CLI."""

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from bella.config.loader import ConfigLoader
from bella.config.models import BellaSettings
from bella.core.constants import UIHint
from bella.core.types import Response
from bella.dm.controller import DialogueController
from bella.observability.logging import setup_logging

BANNER_ART = r"""
  _          _ _
 | |__   ___| | | __ _
 | '_ \ / _ \ | |/ _` |
 | |_) |  __/ | | (_| |
 |_.__/ \___|_|_|\__,_|
"""

HINT_STYLES = {
    UIHint.SPEAKING: "blue",
    UIHint.AWAITING_INPUT: "blue",
    UIHint.CONFIRMATION_REQUIRED: "yellow",
    UIHint.COMPLETED: "green",
    UIHint.ERROR: "red",
    UIHint.IDLE: "blue",
}


@dataclass
class ChatConfig:
    """Configuration for chat runner."""

    config_path: Path | None = None
    log_level: str | None = None
    log_file: Path | None = None
    conversation_id: str | None = None
    debug: bool = False


class ChatRunner:
    """Interactive chat session runner.

    Owns one DialogueController for the whole session, so the session is a
    single conversation.
    """

    def __init__(self, config: ChatConfig, console: Console | None = None):
        self.config = config
        self.console = console or Console()
        self.controller: DialogueController | None = None
        self._running = False

    def setup(self) -> None:
        """Load settings, configure logging and build the controller.

        Raises:
            ConfigError: If the config file is invalid
            FileNotFoundError: If the config path does not exist
        """
        settings = (
            ConfigLoader.load(self.config.config_path)
            if self.config.config_path
            else BellaSettings()
        )
        level = "DEBUG" if self.config.debug else (self.config.log_level or settings.logging.level)
        setup_logging(level, log_file=str(self.config.log_file) if self.config.log_file else None)

        self.controller = DialogueController(
            settings=settings,
            conversation_id=self.config.conversation_id,
        )

    def start(self) -> None:
        """Start the interactive session."""
        if self.controller is None:
            self.setup()
        assert self.controller is not None

        self.console.print(BANNER_ART, style="bold magenta")
        self.console.print(f"Conversation ID: [green]{self.controller.conversation_id}[/]")
        self.console.print(
            "Type '/state' to inspect the dialogue state, 'exit' or 'quit' to end.\n"
        )

        self._running = True
        while self._running:
            try:
                user_input = Prompt.ask("[bold green]You[/]", console=self.console)
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[yellow]Goodbye![/]")
                break

            if self._is_exit_command(user_input):
                self.console.print("\n[yellow]Goodbye![/]")
                break

            if user_input.strip() == "/state":
                self._print_state()
                continue

            response = self.controller.handle_user_input(user_input)
            self._render(response)

    def _render(self, response: Response) -> None:
        style = HINT_STYLES.get(response.ui_hint, "blue")
        self.console.print(f"[bold {style}]Bella > [/]{response.text}")
        if response.confirmation_phrase:
            self.console.print(f"[yellow]Say exactly:[/] {response.confirmation_phrase}")
        if response.quick_replies:
            self.console.print("[dim]" + " | ".join(response.quick_replies) + "[/]")
        if self.config.debug:
            self.console.print(f"[dim]hint={response.ui_hint.value}[/]")
        self.console.print()

    def _print_state(self) -> None:
        assert self.controller is not None
        state = self.controller.get_state()
        self.console.print_json(data=state.model_dump(mode="json"))

    def _is_exit_command(self, user_input: str) -> bool:
        """Check if input is an exit command."""
        return user_input.strip().lower() in ("quit", "exit", "/quit", "/exit")


def run_chat_session(config: ChatConfig) -> None:
    """Run an interactive chat session.

    Args:
        config: Chat configuration
    """
    runner = ChatRunner(config)
    runner.setup()
    runner.start()
