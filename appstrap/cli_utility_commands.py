"""Utility CLI commands - detect, list, version."""
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from appstrap import __version__

# Module-level console instance (will be set by register function)
console: Console = Console()


def detect():
    """Show the platform, CPU architecture and package manager appstrap would use."""
    from appstrap.cli_support import get_detector

    detector = get_detector()
    manager = detector.detect()

    manager_line = (
        f"[bold]Package manager:[/bold] {manager.value}"
        if manager
        else "[bold]Package manager:[/bold] [red]none detected[/red]"
    )
    console.print(Panel(
        f"[bold]Platform:[/bold] {detector.platform_family.value}\n"
        f"[bold]Architecture:[/bold] {detector.architecture}\n"
        f"{manager_line}",
        title="🔍 Host",
        border_style="blue"
    ))

    if manager is None:
        raise typer.Exit(1)


def list_apps(
    catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help="Catalog file (apps.yml / apps.json)"),
):
    """List catalog entries and how each would be installed on this host.

    Examples:
        appstrap list
        appstrap list --catalog ~/dotfiles/apps.json
    """
    from appstrap.cli_support import get_detector, handle_cli_error
    from appstrap.core.catalog import find_catalog, load_catalog
    from appstrap.core.config import get_config
    from appstrap.core.detector import PlatformFamily
    from appstrap.core.errors import CatalogError

    try:
        apps = load_catalog(find_catalog(catalog or get_config().catalog_path))
    except CatalogError as e:
        handle_cli_error(e, console)

    detector = get_detector()
    manager = detector.detect()
    arch = detector.architecture
    linux = detector.platform_family == PlatformFamily.LINUX

    table = Table(
        title=f"📦 Apps ({manager.value if manager else 'no package manager'}, {arch})",
        show_header=True,
    )
    table.add_column("App", style="cyan")
    table.add_column("Packages")
    table.add_column("Flatpak", style="blue")
    table.add_column("Repository", overflow="fold")
    table.add_column("Reboot", justify="center")
    table.add_column("Status")

    for app in apps:
        packages = app.packages_for(manager) if manager else []
        flatpak = app.flatpak if (app.flatpak and linux) else ""
        repo = app.repository_url if (manager and manager.is_linux and app.repository_url) else ""

        if not app.supports_arch(arch):
            status = "[yellow]skip (arch)[/yellow]"
        elif packages or flatpak or app.pre_install_commands or app.post_install_commands:
            status = "[green]install[/green]"
        else:
            status = "[dim]nothing to do[/dim]"

        table.add_row(
            app.name,
            ", ".join(packages),
            flatpak,
            repo,
            "yes" if app.requires_reboot else "",
            status,
        )

    console.print(table)


def version():
    """Show appstrap version."""
    console.print(f"appstrap v{__version__}")


def register_utility_commands(app: typer.Typer, shared_console: Console):
    """Register utility commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(detect)
    app.command("list")(list_apps)
    app.command()(version)
