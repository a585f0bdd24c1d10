"""Native package installation through the detected package manager."""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from appstrap.core.logger import get_logger
from appstrap.core.runner import CommandResult
from appstrap.managers.base import PackageManagerBackend

logger = get_logger(__name__)


@dataclass
class InstallOutcome:
    """Result of installing a package list.

    ``already_installed``/``newly_installed`` come from parsing manager
    output and are a best-effort split; ``success`` is authoritative.
    """

    success: bool
    already_installed: List[str] = field(default_factory=list)
    newly_installed: List[str] = field(default_factory=list)
    result: Optional[CommandResult] = None

    @property
    def stderr(self) -> str:
        return self.result.stderr if self.result else ""


class PackageInstaller:
    """Installs package identifiers with one backend."""

    def __init__(self, backend: PackageManagerBackend, runner, logger=None):
        self.backend = backend
        self.runner = runner
        self.logger = logger or get_logger(__name__)

    def install(self, packages: Sequence[str]) -> InstallOutcome:
        """Install ``packages`` and classify each one.

        Args:
            packages: Identifiers for the active manager

        Returns:
            InstallOutcome; ``success`` is False when the manager exited
            non-zero, with its stderr kept on ``result``
        """
        packages = list(packages)
        if not packages:
            return InstallOutcome(success=True)

        if self.backend.batch_install:
            return self._install_batch(packages)
        return self._install_each(packages)

    def refresh(self) -> CommandResult:
        """Refresh the manager's package index."""
        return self.runner.run(self.backend.refresh_command(), privileged=self.backend.privileged)

    def _install_batch(self, packages: List[str]) -> InstallOutcome:
        result = self.runner.run(
            self.backend.install_command(packages),
            privileged=self.backend.privileged,
        )
        if not result.success:
            return InstallOutcome(success=False, result=result)

        already, new = self.backend.classify(result, packages, self.runner)
        return InstallOutcome(
            success=True,
            already_installed=already,
            newly_installed=new,
            result=result,
        )

    def _install_each(self, packages: List[str]) -> InstallOutcome:
        already: List[str] = []
        new: List[str] = []
        result = None

        for pkg in packages:
            result = self.runner.run(
                self.backend.install_command([pkg]),
                privileged=self.backend.privileged,
            )
            if not result.success:
                return InstallOutcome(
                    success=False,
                    already_installed=already,
                    newly_installed=new,
                    result=result,
                )
            pkg_already, pkg_new = self.backend.classify(result, [pkg], self.runner)
            already.extend(pkg_already)
            new.extend(pkg_new)

        return InstallOutcome(
            success=True,
            already_installed=already,
            newly_installed=new,
            result=result,
        )
