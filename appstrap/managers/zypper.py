"""zypper backend (openSUSE / SUSE)."""
from typing import List, Sequence, Set, Tuple

from .base import ManagerKind, PackageManagerBackend, repo_short_name


def configured_repo_names(lr_output: str) -> Set[str]:
    """Collect alias and name columns from ``zypper lr --name`` output."""
    names = set()
    for line in lr_output.splitlines():
        columns = [column.strip() for column in line.split("|")]
        # Skip the header and "--+--" separator rows
        if len(columns) < 3 or not columns[0].isdigit():
            continue
        names.update(column for column in columns[1:3] if column)
    return names


class ZypperBackend(PackageManagerBackend):
    """SUSE-family package manager."""

    kind = ManagerKind.ZYPPER
    supports_repositories = True

    def install_command(self, packages: Sequence[str]) -> List[str]:
        return ["zypper", "install", "-y", *packages]

    def refresh_command(self) -> List[str]:
        return ["zypper", "refresh"]

    def classify(self, result, packages: Sequence[str], runner) -> Tuple[List[str], List[str]]:
        already, new = [], []
        for pkg in packages:
            if f"'{pkg}' is already installed" in result.stdout:
                already.append(pkg)
            else:
                new.append(pkg)
        return already, new

    def ensure_repository(self, app, runner, logger) -> bool:
        repo_name = repo_short_name(app.name)
        added = False

        existing = runner.run(["zypper", "lr", "--name"])
        if existing.success and repo_name in configured_repo_names(existing.stdout):
            logger.info(f"✓ Repository '{repo_name}' already exists, skipping...")
        else:
            runner.check(["zypper", "addrepo", "--refresh", app.repository_url, repo_name], privileged=True)
            added = True

        # zypper trusts the key itself while refreshing
        refresh = self.refresh_command()
        if app.repo_gpg_key:
            refresh = ["zypper", "--gpg-auto-import-keys", "refresh"]
        runner.check(refresh, privileged=True)
        return added
