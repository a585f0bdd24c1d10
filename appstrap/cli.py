#!/usr/bin/env python3
"""appstrap CLI - declarative application installer for fresh machines."""

import typer
from rich.console import Console

from appstrap.cli_install_commands import register_install_commands
from appstrap.cli_utility_commands import register_utility_commands

app = typer.Typer(
    name="appstrap",
    help="""appstrap - install your applications on any fresh machine

One catalog. zypper, dnf, apt, winget or Homebrew, with Flatpak as fallback.

Quick start:
  appstrap detect               # Which package manager will be used
  appstrap list                 # What the catalog would do here
  appstrap install --dry-run    # See the commands
  appstrap install              # Make it happen
""",
    add_completion=False,
)

console = Console()

# Attach modular subcommands
register_install_commands(app, console)
register_utility_commands(app, console)

if __name__ == "__main__":
    app()
