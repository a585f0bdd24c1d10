"""Package manager backends.

appstrap supports a closed set of managers, one backend each:
- zypper: openSUSE / SUSE
- dnf: Fedora / RHEL
- apt: Debian / Ubuntu
- winget: Windows
- homebrew: macOS
"""
from .apt import AptBackend
from .base import ManagerKind, PackageManagerBackend, repo_short_name
from .dnf import DnfBackend
from .homebrew import HomebrewBackend
from .winget import WingetBackend
from .zypper import ZypperBackend

BACKENDS = {
    ManagerKind.ZYPPER: ZypperBackend,
    ManagerKind.DNF: DnfBackend,
    ManagerKind.APT: AptBackend,
    ManagerKind.WINGET: WingetBackend,
    ManagerKind.HOMEBREW: HomebrewBackend,
}


def get_backend(kind: ManagerKind) -> PackageManagerBackend:
    """Return the backend implementing ``kind``."""
    return BACKENDS[ManagerKind(kind)]()


__all__ = [
    'AptBackend',
    'BACKENDS',
    'DnfBackend',
    'HomebrewBackend',
    'ManagerKind',
    'PackageManagerBackend',
    'WingetBackend',
    'ZypperBackend',
    'get_backend',
    'repo_short_name',
]
