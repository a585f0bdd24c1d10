"""Homebrew backend (macOS)."""
import re
from typing import List, Sequence, Tuple

from .base import ManagerKind, PackageManagerBackend


class HomebrewBackend(PackageManagerBackend):
    """macOS package manager. Runs as the invoking user, never via sudo."""

    kind = ManagerKind.HOMEBREW
    privileged = False

    def install_command(self, packages: Sequence[str]) -> List[str]:
        return ["brew", "install", *packages]

    def refresh_command(self) -> List[str]:
        return ["brew", "update"]

    def classify(self, result, packages: Sequence[str], runner) -> Tuple[List[str], List[str]]:
        output = result.stdout + result.stderr
        already, new = [], []
        for pkg in packages:
            # "pkg: already installed" or "Warning: pkg 1.2 is already installed and up-to-date."
            pattern = rf"(^|\s){re.escape(pkg)}(:| \S+ is) already installed"
            if re.search(pattern, output, re.MULTILINE):
                already.append(pkg)
            else:
                new.append(pkg)
        return already, new
