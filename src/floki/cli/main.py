"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from floki.cli.commands import (
    image_exists,
    obtain_image,
    pull_image,
    resolve_name,
    validate_config,
)
from floki.errors import FlokiError
from floki.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="floki",
    help="floki - run your build tooling in a declared docker image",
    add_completion=False,
)

# Errors go to stderr, results to stdout
console = Console(stderr=True)


def _run_cli_command(handler: Callable[..., Any], **kwargs: Any) -> Any:
    """Helper to run a CLI command with error handling."""
    try:
        return handler(**kwargs)
    except FlokiError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar="FLOKI_LOG_LEVEL", help="Logging level"
    ),
):
    """Configure logging for every command."""
    try:
        setup_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


ConfigOption = typer.Option(
    None, "--config", "-c", help="Configuration file (default: nearest floki.yaml)"
)


# Image subcommands
image_app = typer.Typer(help="Image commands")
app.add_typer(image_app, name="image")


@image_app.command("name")
def image_name_command(config: Optional[Path] = ConfigOption):
    """Print the name of the configured image."""
    _run_cli_command(resolve_name, config_path=config)


@image_app.command("obtain")
def image_obtain_command(config: Optional[Path] = ConfigOption):
    """Build or prepare the configured image."""
    _run_cli_command(obtain_image, config_path=config)


@image_app.command("pull")
def image_pull_command(name: str = typer.Argument(..., help="Image name to pull")):
    """Pull an image."""
    _run_cli_command(pull_image, name=name)


@image_app.command("exists")
def image_exists_command(name: str = typer.Argument(..., help="Image name")):
    """Check whether an image is available locally."""
    if not _run_cli_command(image_exists, name=name):
        raise typer.Exit(1)


# Config subcommands
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@config_app.command("validate")
def config_validate_command(config: Optional[Path] = ConfigOption):
    """Validate a configuration file."""
    _run_cli_command(validate_config, config_path=config)


def main():
    """Main entry point for CLI."""
    app()
