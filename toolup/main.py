"""Main entry point for the toolup CLI."""

if __name__ == "__main__" and __package__ is None:
    import sys
    from pathlib import Path

    # Add the project root to the Python path
    project_root = Path(__file__).resolve().parent.parent
    sys.path.insert(0, str(project_root))
    __package__ = "toolup"


import asyncio
from pathlib import Path
from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from toolup.arch import UnsupportedArchitectureError, cpu_arch
from toolup.config import (
    ConfigurationError,
    ToolupConfig,
    default_home_dir,
    load_configuration,
    save_config,
    validate_config_file,
)
from toolup.context import CoreContext
from toolup.logging_setup import configure_logging
from toolup.version import VERSION

app = typer.Typer(
    name="toolup",
    help="toolup - toolchain manager",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=False,
)

# Welcome panel and error reports; regular output goes through CoreContext.
console = Console()


def show_welcome():
    """Display usage instructions."""
    welcome_text = """
# toolup

## Commands

```bash
toolup confirm "Remove the toolchain?"
toolup arch
toolup init-config
```

For more help: `toolup --help`
    """

    console.print(
        Panel(
            Markdown(welcome_text),
            title="[bold blue]toolup[/bold blue]",
            border_style="blue",
        )
    )


async def emit_lines(context: CoreContext, lines: Iterable[str]) -> None:
    """Print each line through the context, then release its resources."""
    try:
        for line in lines:
            await context.print(line)
    finally:
        await context.aclose()


def describe_config(config: ToolupConfig, context: CoreContext) -> list:
    return [
        "toolup Configuration",
        f"Home directory: {context.home_dir()}",
        f"Shell: {context.shell()}",
        f"HTTP timeout: {config.http_timeout}s",
        f"User agent: {config.user_agent}",
        f"Log level: {config.log_level.value}",
    ]


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        asyncio.run(emit_lines(CoreContext(), [f"toolup version {VERSION}"]))
        raise typer.Exit()


def show_config_callback(value: bool):
    """Show current configuration and exit."""
    if value:
        try:
            config = load_configuration()
        except Exception as e:
            handle_error(e)
            raise typer.Exit(1)

        context = CoreContext.from_config(config)
        asyncio.run(emit_lines(context, describe_config(config, context)))
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug output and detailed error information",
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config-file", "-c", help="Path to custom configuration file"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit.",
    ),
    show_config: Optional[bool] = typer.Option(
        None,
        "--show-config",
        callback=show_config_callback,
        is_eager=True,
        help="Show current configuration and exit.",
    ),
):
    """toolup - toolchain manager."""
    try:
        validate_config_file(config_file)
        config = load_configuration(config_file=config_file, debug=debug)
    except ConfigurationError as e:
        handle_error(e, debug)
        raise typer.Exit(1)

    configure_logging(config.log_level)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        show_welcome()
        raise typer.Exit()


@app.command()
def confirm(
    ctx: typer.Context,
    message: Optional[str] = typer.Argument(
        None, help="Message to show before asking for confirmation"
    ),
    default_yes: bool = typer.Option(
        True,
        "--default-yes/--default-no",
        help="Answer assumed when ENTER is pressed without input",
    ),
):
    """Ask a yes/no question; exit 0 on yes and 1 on no."""
    config: ToolupConfig = ctx.obj
    context = CoreContext.from_config(config)

    try:
        accepted = asyncio.run(run_confirmation(context, message, default_yes))
    except Exception as e:
        handle_error(e, config.show_debug)
        raise typer.Exit(1)

    raise typer.Exit(0 if accepted else 1)


async def run_confirmation(
    context: CoreContext, message: Optional[str], default_behavior: bool
) -> bool:
    try:
        if message:
            await context.print(message)
        return await context.prompt_for_confirmation(default_behavior)
    finally:
        await context.aclose()


@app.command()
def arch(ctx: typer.Context):
    """Print the processor architecture tag used for downloads."""
    config: ToolupConfig = ctx.obj

    try:
        tag = cpu_arch()
    except UnsupportedArchitectureError as e:
        handle_error(e, config.show_debug)
        raise typer.Exit(1)

    asyncio.run(emit_lines(CoreContext.from_config(config), [tag.value]))


@app.command("init-config")
def init_config(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None, "--path", help="Where to write the file (default: ~/.toolup/config.toml)"
    ),
):
    """Write the current configuration to a TOML file."""
    config: ToolupConfig = ctx.obj
    target = path or default_home_dir() / "config.toml"

    if not save_config(config, target):
        handle_error(ConfigurationError(f"Could not write {target}"), config.show_debug)
        raise typer.Exit(1)

    asyncio.run(
        emit_lines(CoreContext.from_config(config), [f"Configuration saved to {target}"])
    )


def handle_error(error: Exception, debug: bool = False):
    """Handle and display errors with appropriate formatting."""
    if debug:
        console.print("\n[bold red]Debug Error Details:[/bold red]")
        console.print_exception()
    else:
        console.print(f"\n[bold red]Error:[/bold red] {str(error)}")
        console.print("[dim]Use --debug for more details[/dim]")


if __name__ == "__main__":
    app()
