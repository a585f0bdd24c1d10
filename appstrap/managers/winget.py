"""winget backend (Windows)."""
from typing import List, Sequence, Tuple

from .base import ManagerKind, PackageManagerBackend

ALREADY_INSTALLED_MARKERS = ("already installed", "No applicable update found")


class WingetBackend(PackageManagerBackend):
    """Windows package manager; installs one identifier per call."""

    kind = ManagerKind.WINGET
    privileged = False
    batch_install = False

    def install_command(self, packages: Sequence[str]) -> List[str]:
        if len(packages) != 1:
            raise ValueError("winget installs exactly one package per invocation")
        return [
            "winget",
            "install",
            "--silent",
            "--accept-package-agreements",
            "--accept-source-agreements",
            packages[0],
        ]

    def refresh_command(self) -> List[str]:
        return ["winget", "source", "update"]

    def classify(self, result, packages: Sequence[str], runner) -> Tuple[List[str], List[str]]:
        if any(marker in result.stdout for marker in ALREADY_INSTALLED_MARKERS):
            return list(packages), []
        return [], list(packages)
