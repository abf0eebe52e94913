"""Mockable context through which toolup presents output and collects input."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from .config import ToolupConfig, default_home_dir
from .http_client import AiohttpRequestExecutor, HTTPClient
from .io import InputProvider, OutputHandler
from .terminal import TerminalWidthProbe, default_width_probe, wrap_text

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"
READ_LINE_TERMINATOR = ": \n"
INVALID_CONFIRMATION_MESSAGE = (
    'Please input either "y" or "n", or press ENTER to use the default.'
)


def _plain_console() -> Console:
    # Used for its stdout/stdin resolution; text is written to its file verbatim.
    return Console()


@dataclass
class CoreContext:
    """Run-scoped overrides and I/O capabilities for toolup.

    One context is built per run (or per test, with mocks substituted) and
    passed explicitly to everything that prints, prompts or needs the
    environment overrides.
    """

    # A separate home directory to use instead of the default location logic.
    mocked_home_dir: Optional[Path] = None

    current_directory: Path = field(default_factory=Path.cwd)

    # Path to the user's shell binary (e.g. /bin/sh), overrides shell detection.
    mocked_shell: Optional[str] = None

    http_client: HTTPClient = field(default_factory=HTTPClient, repr=False)

    # When unset, output goes to stdout and input comes from stdin.
    output_handler: Optional[OutputHandler] = field(default=None, repr=False)
    input_provider: Optional[InputProvider] = field(default=None, repr=False)

    width_probe: TerminalWidthProbe = field(
        default_factory=default_width_probe, repr=False, compare=False
    )
    console: Console = field(default_factory=_plain_console, repr=False, compare=False)

    @classmethod
    def from_config(cls, config: ToolupConfig, **overrides: Any) -> "CoreContext":
        """Build a context whose overrides and HTTP client follow ``config``."""
        values: dict = {
            "mocked_home_dir": config.home_dir,
            "mocked_shell": config.shell,
            "http_client": HTTPClient(
                AiohttpRequestExecutor(
                    timeout=config.http_timeout, user_agent=config.user_agent
                )
            ),
        }
        values.update(overrides)
        return cls(**values)

    async def print(self, string: str = "", terminator: Optional[str] = None) -> None:
        """Pass the string to the output handler, or print it to stdout.

        Non-empty text is wrapped to the current terminal width first.
        """
        terminal_width = self.width_probe.get_width()
        wrapped = wrap_text(string, terminal_width) if string else string

        if self.output_handler is None:
            # Bypass rich rendering, which expands tabs and drops control characters.
            stream = self.console.file
            stream.write(wrapped + ("\n" if terminator is None else terminator))
            stream.flush()
            return

        await self.output_handler.handle_output_line(wrapped + (terminator or ""))

    async def read_line(self, prompt: str) -> Optional[str]:
        """Show ``prompt`` and read one line, or None at end of input."""
        await self.print(prompt, terminator=READ_LINE_TERMINATOR)

        if self.input_provider is not None:
            return await self.input_provider.read_line()

        try:
            return self.console.input()
        except EOFError:
            logger.debug("Standard input exhausted")
            return None

    async def prompt_for_confirmation(self, default_behavior: bool) -> bool:
        """Ask the user to confirm, returning ``default_behavior`` on ENTER.

        Keeps asking until a valid answer arrives. End of input counts as
        accepting the default.
        """
        options = "(Y/n)" if default_behavior else "(y/N)"

        while True:
            answer = await self.read_line(f"Proceed? {options}")
            if answer is None:
                answer = "y" if default_behavior else "n"
            answer = answer.lower()

            if answer not in ("y", "n", ""):
                logger.debug("Rejected confirmation answer %r", answer)
                await self.print(INVALID_CONFIRMATION_MESSAGE)
                continue

            if not answer:
                return default_behavior
            return answer == "y"

    def home_dir(self) -> Path:
        """The mocked home directory if set, else the platform default."""
        if self.mocked_home_dir is not None:
            return self.mocked_home_dir
        return default_home_dir()

    def shell(self) -> str:
        """The user's shell: mocked, $SHELL, the login shell, or /bin/sh."""
        if self.mocked_shell is not None:
            return self.mocked_shell

        env_shell = os.environ.get("SHELL")
        if env_shell:
            return env_shell

        try:
            import pwd

            login_shell = pwd.getpwuid(os.getuid()).pw_shell
        except (ImportError, KeyError):
            return DEFAULT_SHELL
        return login_shell or DEFAULT_SHELL

    async def aclose(self) -> None:
        """Release the HTTP client's connections."""
        await self.http_client.close()
