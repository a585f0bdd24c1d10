"""Host platform and package manager detection."""
import platform
import shutil
from enum import Enum
from typing import Callable, Optional

from appstrap.core.errors import DetectionError
from appstrap.managers.base import ManagerKind

# Linux managers in probe order, most distro-specific tooling first
LINUX_MANAGER_PRIORITY = (ManagerKind.ZYPPER, ManagerKind.DNF, ManagerKind.APT)

_ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


class PlatformFamily(str, Enum):
    """Operating system families appstrap knows how to handle."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


def normalize_arch(machine: str) -> str:
    """Map the host's reported CPU architecture onto a small closed set."""
    machine = (machine or "").strip().lower()
    return _ARCH_ALIASES.get(machine, machine)


class PackageManagerDetector:
    """Detects the platform family, CPU architecture and package manager.

    Detection runs once; later calls return the cached answer so a run never
    switches managers halfway through.
    """

    def __init__(
        self,
        system: Optional[Callable[[], str]] = None,
        machine: Optional[Callable[[], str]] = None,
        which: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self._system = system or platform.system
        self._machine = machine or platform.machine
        self._which = which or shutil.which
        self._detected = False
        self._manager: Optional[ManagerKind] = None

    @property
    def platform_family(self) -> PlatformFamily:
        name = self._system().lower()
        if name.startswith(("windows", "cygwin", "msys")):
            return PlatformFamily.WINDOWS
        if name == "darwin":
            return PlatformFamily.MACOS
        if name == "linux":
            return PlatformFamily.LINUX
        return PlatformFamily.UNKNOWN

    @property
    def architecture(self) -> str:
        return normalize_arch(self._machine())

    def detect(self) -> Optional[ManagerKind]:
        """Return the package manager for this host, or None.

        Windows always maps to winget and macOS to Homebrew. On Linux the
        first of zypper, dnf and apt found on PATH wins.
        """
        if self._detected:
            return self._manager

        family = self.platform_family
        manager = None
        if family == PlatformFamily.WINDOWS:
            manager = ManagerKind.WINGET
        elif family == PlatformFamily.MACOS:
            manager = ManagerKind.HOMEBREW
        elif family == PlatformFamily.LINUX:
            for candidate in LINUX_MANAGER_PRIORITY:
                if self._which(candidate.value):
                    manager = candidate
                    break

        self._manager = manager
        self._detected = True
        return manager

    def require(self) -> ManagerKind:
        """Like :meth:`detect` but raise when nothing is supported.

        Raises:
            DetectionError: No supported package manager on this host
        """
        manager = self.detect()
        if manager is None:
            raise DetectionError("Could not detect supported package manager for this OS.")
        return manager
