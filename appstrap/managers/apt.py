"""apt backend (Debian / Ubuntu)."""
import shlex
from typing import List, Sequence, Tuple

from .base import ManagerKind, PackageManagerBackend


class AptBackend(PackageManagerBackend):
    """Debian-family package manager."""

    kind = ManagerKind.APT
    supports_repositories = True

    def install_command(self, packages: Sequence[str]) -> List[str]:
        return ["apt", "install", "-y", *packages]

    def refresh_command(self) -> List[str]:
        return ["apt", "update"]

    def classify(self, result, packages: Sequence[str], runner) -> Tuple[List[str], List[str]]:
        already, new = [], []
        for pkg in packages:
            if (
                f"{pkg} is already the newest version" in result.stdout
                or f"{pkg} set to manually installed" in result.stdout
            ):
                already.append(pkg)
            else:
                new.append(pkg)
        return already, new

    def ensure_repository(self, app, runner, logger) -> bool:
        if app.repo_gpg_key:
            logger.info(f"Adding GPG key for {app.name}: {app.repo_gpg_key}")
            add_key = runner.elevation.wrap_shell("apt-key add -")
            runner.check_shell(f"wget -qO- {shlex.quote(app.repo_gpg_key)} | {add_key}")

        # add-apt-repository tolerates re-adding an existing source
        runner.check(["add-apt-repository", "-y", app.repository_url], privileged=True)
        runner.check(self.refresh_command(), privileged=True)
        return True
