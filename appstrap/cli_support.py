"""Shared utilities for appstrap CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from appstrap.core.config import AppstrapConfig, get_config
from appstrap.core.detector import PackageManagerDetector
from appstrap.core.elevation import default_elevation
from appstrap.core.runner import CommandRunner


def is_mock(dry_run: bool = False) -> bool:
    """Return True when the CLI runs in mock (dry-run) mode."""
    return dry_run or get_config().mock


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from appstrap.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def build_runner(mock: bool = False, config: Optional[AppstrapConfig] = None) -> CommandRunner:
    """Create the command runner for a CLI invocation."""
    config = config or get_config()
    return CommandRunner(
        elevation=default_elevation(config.sudo_command),
        timeout=config.command_timeout,
        mock=mock,
    )


def get_detector() -> PackageManagerDetector:
    """Return a detector for the running host."""
    return PackageManagerDetector()


def confirm_action(message: str, yes_flag: bool = False, mock: bool = False) -> bool:
    """Prompt user for confirmation unless --yes or mock mode.

    Args:
        message: Confirmation message to display
        yes_flag: Skip prompt if True (from --yes flag)
        mock: Skip prompt if True (mock mode)

    Returns:
        True if confirmed, False otherwise
    """
    if yes_flag or mock:
        return True
    return typer.confirm(message, default=False)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {e}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")
