"""Application orchestration: one catalog, one run.

Each application walks the same sequence of steps::

    architecture check -> pre-install hooks -> repository -> native packages
        -> flatpak fallback -> post-install hooks

and ends up succeeded, failed or (architecture mismatch only) skipped. A
failing application never stops the run.
"""
import os
import shlex
from typing import Iterable, List, Mapping, Optional

from appstrap.core.detector import PlatformFamily
from appstrap.core.errors import AppstrapError, PackageInstallError
from appstrap.core.logger import get_logger
from appstrap.managers import ManagerKind, get_backend
from appstrap.models.app import AppDescriptor
from appstrap.models.report import AppResult, AppStatus, RunReport
from appstrap.services.flatpak import FlatpakInstaller
from appstrap.services.installer import PackageInstaller
from appstrap.services.repositories import RepositoryManager

logger = get_logger(__name__)

SUBSTITUTED_VARS = ("USER", "HOME")


def expand_command(command: str, environ: Mapping[str, str]) -> List[str]:
    """Substitute ``$USER``/``$HOME`` and split into an argument vector.

    Substitution is textual; unset variables become empty strings. The
    result is split with shell quoting rules but is never run by a shell,
    so pipes and redirects are passed through as literal arguments.

    Raises:
        AppstrapError: If the command has unbalanced quotes or is empty
    """
    expanded = command
    for var in SUBSTITUTED_VARS:
        expanded = expanded.replace(f"${var}", environ.get(var, ""))
    try:
        argv = shlex.split(expanded)
    except ValueError as e:
        raise AppstrapError(f"Invalid command {command!r}: {e}") from e
    if not argv:
        raise AppstrapError(f"Empty command in catalog: {command!r}")
    return argv


class AppOrchestrator:
    """Runs the install sequence for every application in a catalog."""

    def __init__(
        self,
        runner,
        manager: ManagerKind,
        platform_family: PlatformFamily,
        architecture: str,
        installer: Optional[PackageInstaller] = None,
        repositories: Optional[RepositoryManager] = None,
        flatpak: Optional[FlatpakInstaller] = None,
        environ: Optional[Mapping[str, str]] = None,
        logger=None,
    ):
        """Initialize orchestrator.

        Args:
            runner: CommandRunner shared by every step
            manager: Detected package manager
            platform_family: Host OS family (Flatpak is Linux-only)
            architecture: Normalized host CPU architecture
            installer: Native installer (built from ``manager`` if omitted)
            repositories: Repository manager (built from ``manager`` if omitted)
            flatpak: Flatpak installer (default remote if omitted)
            environ: Variables for hook substitution (defaults to os.environ)
            logger: Logger for progress lines (defaults to module logger)
        """
        self.runner = runner
        self.manager = ManagerKind(manager)
        self.platform_family = platform_family
        self.architecture = architecture
        self.logger = logger or get_logger(__name__)

        backend = get_backend(self.manager)
        self.installer = installer or PackageInstaller(backend, runner, logger=self.logger)
        self.repositories = repositories or RepositoryManager(backend, runner, logger=self.logger)
        self.flatpak = flatpak or FlatpakInstaller(runner, logger=self.logger)
        self.environ = environ if environ is not None else os.environ

    @property
    def is_linux(self) -> bool:
        return self.platform_family == PlatformFamily.LINUX

    def run(self, apps: Iterable[AppDescriptor]) -> RunReport:
        """Process ``apps`` in order and collect the outcome.

        On Linux the Flatpak remote is set up once before the first app.
        """
        apps = list(apps)
        report = RunReport()

        if self.is_linux:
            self.flatpak.ensure_remote()

        self.logger.info(f"Starting application installation ({len(apps)} apps)...")
        for app in apps:
            report.record(self.process(app))

        self.logger.info("All applications processed.")
        return report

    def process(self, app: AppDescriptor) -> AppResult:
        """Run every step for one application.

        Returns:
            AppResult; errors from any step are converted into a failed result
        """
        self.logger.info(f"Processing: {app.name}")

        if not app.supports_arch(self.architecture):
            reason = f"not available for architecture: {self.architecture}"
            self.logger.warning(f"⚠ Skipping {app.name} - {reason}")
            return AppResult(app.name, AppStatus.SKIPPED, reason)

        try:
            self._run_hooks(app, app.pre_install_commands, "pre-installation")
            self.repositories.ensure(app)
            self._install(app)
            self._run_hooks(app, app.post_install_commands, "post-installation")
        except AppstrapError as e:
            self.logger.error(f"✗ Failed to install {app.name}: {e}")
            return AppResult(app.name, AppStatus.FAILED, str(e))

        return AppResult(app.name, AppStatus.SUCCEEDED, requires_reboot=app.requires_reboot)

    def reboot(self):
        """Reboot the host through the elevation wrapper.

        Raises:
            CommandError: If the reboot command fails
        """
        self.logger.info("Rebooting now...")
        return self.runner.check(["reboot"], privileged=True)

    def _install(self, app: AppDescriptor) -> None:
        packages = app.packages_for(self.manager)
        can_fallback = bool(app.flatpak) and self.is_linux
        native_error = None

        if packages:
            self.logger.info(f"Installing packages for {app.name}: {', '.join(packages)}")
            outcome = self.installer.install(packages)
            if outcome.success:
                if outcome.already_installed:
                    self.logger.info(f"✓ Already installed: {', '.join(outcome.already_installed)}")
                if outcome.newly_installed:
                    self.logger.info(f"✓ Newly installed: {', '.join(outcome.newly_installed)}")
            else:
                error = PackageInstallError(outcome.stderr.strip(), outcome.result)
                self.logger.error(f"✗ Native package installation failed: {outcome.stderr.strip()}")
                if not can_fallback:
                    raise error
                native_error = str(error)
                self.logger.info("Will try Flatpak installation as fallback...")

        if not can_fallback:
            return

        if packages and native_error is None:
            self.logger.info(
                f"Skipping Flatpak installation for {app.name} - native packages were successfully installed"
            )
            return

        self.logger.info(f"Installing Flatpak for {app.name}: {app.flatpak}")
        self.flatpak.install(app.flatpak, native_error=native_error)

    def _run_hooks(self, app: AppDescriptor, commands: List[str], phase: str) -> None:
        if not commands:
            return
        self.logger.info(f"Running {phase} commands for {app.name}:")
        for command in commands:
            self.runner.check(expand_command(command, self.environ))
