"""Install CLI command - process the application catalog."""
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from appstrap.core.errors import CatalogError, CommandError, DetectionError
from appstrap.models.report import RunReport

# Module-level console instance (will be set by register function)
console: Console = Console()


def render_summary(report: RunReport) -> None:
    """Print the succeeded / skipped / failed buckets."""
    from appstrap.cli_support import print_success, print_warning

    console.print("\n[bold]📊 Installation summary[/bold]")

    if report.succeeded:
        print_success(console, f"Successfully installed: {', '.join(report.succeeded)}")
    else:
        print_success(console, "Successfully installed: None")

    if report.skipped:
        print_warning(
            console,
            f"Skipped (architecture incompatible): {', '.join(s.name for s in report.skipped)}",
        )

    if report.failed:
        table = Table(title="❌ Failed to install", show_header=True, header_style="bold red")
        table.add_column("App", style="cyan")
        table.add_column("Error", overflow="fold")
        for failure in report.failed:
            table.add_row(failure.name, failure.error)
        console.print(table)
    else:
        print_success(console, "No installation failures.")


def install(
    catalog: Optional[str] = typer.Option(None, "--catalog", "-c", help="Catalog file (apps.yml / apps.json)"),
    only: Optional[List[str]] = typer.Option(None, "--only", help="Only process the named app (repeatable)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log commands instead of running them"),
    refresh: bool = typer.Option(False, "--refresh", help="Refresh the package index before installing"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Reboot without asking when an app requires it"),
    no_reboot: bool = typer.Option(False, "--no-reboot", help="Never reboot, only remind"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Path to log file"),
):
    """Install every application in the catalog.

    Detects the package manager, adds repositories, installs native packages
    (falling back to Flatpak on Linux) and runs each app's hooks. Individual
    app failures are reported at the end and do not change the exit code.

    Examples:
        appstrap install                      # Use ./apps.yml or ./apps.json
        appstrap install --only "VS Code"     # One app
        appstrap install --dry-run            # Show what would run
    """
    from appstrap.cli_support import (
        build_runner,
        confirm_action,
        get_detector,
        handle_cli_error,
        is_mock,
        print_info,
        print_warning,
        setup_file_logging,
    )
    from appstrap.core.catalog import find_catalog, load_catalog, select_apps
    from appstrap.core.config import get_config
    from appstrap.core.orchestrator import AppOrchestrator
    from appstrap.services.flatpak import FlatpakInstaller

    setup_file_logging(log_file=log_file, verbose=verbose)

    config = get_config()
    mock = is_mock(dry_run)

    try:
        apps = select_apps(load_catalog(find_catalog(catalog or config.catalog_path)), only)
        detector = get_detector()
        manager = detector.require()
    except (CatalogError, DetectionError) as e:
        handle_cli_error(e, console, verbose, exit_code=1)

    console.print(f"📦 Detected package manager: [bold]{manager.value}[/bold]")
    if mock:
        print_info(console, "Dry run - commands are logged, not executed")

    runner = build_runner(mock=mock, config=config)
    orchestrator = AppOrchestrator(
        runner,
        manager,
        detector.platform_family,
        detector.architecture,
        flatpak=FlatpakInstaller(runner, config.flatpak_remote, config.flatpak_remote_url),
    )

    if refresh:
        result = orchestrator.installer.refresh()
        if not result.success:
            print_warning(console, f"Package index refresh failed: {result.stderr.strip()}")

    report = orchestrator.run(apps)
    render_summary(report)

    if not report.needs_reboot:
        console.print("[green]✓[/green] No reboot required.")
    elif no_reboot:
        print_warning(console, "Please reboot your system when convenient.")
    elif confirm_action(
        "🔄 Some installations require a system reboot.\nWould you like to reboot now?",
        yes_flag=yes,
        mock=mock,
    ):
        try:
            orchestrator.reboot()
        except CommandError as e:
            handle_cli_error(e, console, verbose, exit_code=1)
    else:
        print_warning(console, "Please reboot your system when convenient.")

    console.print("🎉 Installation complete!")


def register_install_commands(app: typer.Typer, shared_console: Console):
    """Register install commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(install)

