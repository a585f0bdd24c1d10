"""Abstract base class for package manager backends."""
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Sequence, Tuple


class ManagerKind(str, Enum):
    """Closed set of supported package managers.

    The value doubles as the executable probed on PATH and as the catalog key
    holding that manager's package list.
    """

    ZYPPER = "zypper"
    DNF = "dnf"
    APT = "apt"
    WINGET = "winget"
    HOMEBREW = "homebrew"

    @property
    def is_linux(self) -> bool:
        return self in (ManagerKind.ZYPPER, ManagerKind.DNF, ManagerKind.APT)


def repo_short_name(app_name: str) -> str:
    """Derive a repository name from an application name."""
    return re.sub(r"\s", "", app_name.lower())


class PackageManagerBackend(ABC):
    """Abstract interface for one package manager.

    Each backend carries its own command templates, its repository protocol
    and its heuristic for telling fresh installs from no-ops.
    """

    kind: ManagerKind
    # Install/refresh need the elevation wrapper
    privileged: bool = True
    # Install subcommand accepts several identifiers at once
    batch_install: bool = True
    supports_repositories: bool = False

    @abstractmethod
    def install_command(self, packages: Sequence[str]) -> List[str]:
        """Build the non-interactive install command.

        Args:
            packages: Identifiers to install in one invocation

        Returns:
            Argument vector (without elevation prefix)
        """
        pass

    @abstractmethod
    def refresh_command(self) -> List[str]:
        """Build the command that refreshes the manager's package index."""
        pass

    def classify(self, result, packages: Sequence[str], runner) -> Tuple[List[str], List[str]]:
        """Split packages into (already_installed, newly_installed).

        Only called for successful install invocations. Output wording
        differs across versions and locales; treat the answer as best-effort.

        Args:
            result: CommandResult of the install invocation
            packages: Identifiers passed to that invocation
            runner: CommandRunner for backends that need a follow-up query

        Returns:
            Tuple of (already_installed, newly_installed)
        """
        return [], list(packages)

    def ensure_repository(self, app, runner, logger) -> bool:
        """Register the app's repository and refresh the index.

        Args:
            app: AppDescriptor with a repository URL
            runner: CommandRunner used for every step
            logger: Logger for progress lines

        Returns:
            True if a repository was added, False if it already existed

        Raises:
            CommandError: If any step fails
        """
        raise NotImplementedError(f"{self.kind.value} does not support repositories")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
