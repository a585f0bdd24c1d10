"""dnf backend (Fedora / RHEL)."""
from typing import List, Optional, Sequence, Tuple

from .base import ManagerKind, PackageManagerBackend, repo_short_name

REPOS_DIR = "/etc/yum.repos.d"


def render_repo_file(repo_id: str, name: str, baseurl: str, gpgkey: Optional[str] = None) -> str:
    """Build a .repo definition for /etc/yum.repos.d."""
    lines = [
        f"[{repo_id}]",
        f"name={name}",
        f"baseurl={baseurl}",
        "enabled=1",
        f"gpgcheck={1 if gpgkey else 0}",
    ]
    if gpgkey:
        lines.append(f"gpgkey={gpgkey}")
    return "\n".join(lines) + "\n"


def enabled_repo_ids(repolist_output: str) -> List[str]:
    """Parse repo ids out of ``dnf repolist --enabled`` output."""
    ids = []
    for line in repolist_output.splitlines():
        parts = line.split()
        if not parts or (parts[0] == "repo" and len(parts) > 1 and parts[1] == "id"):
            continue
        ids.append(parts[0])
    return ids


class DnfBackend(PackageManagerBackend):
    """Fedora-family package manager."""

    kind = ManagerKind.DNF
    supports_repositories = True

    def install_command(self, packages: Sequence[str]) -> List[str]:
        return ["dnf", "install", "-y", *packages]

    def refresh_command(self) -> List[str]:
        # check-update exits 100 when updates are pending, makecache does not
        return ["dnf", "makecache"]

    def classify(self, result, packages: Sequence[str], runner) -> Tuple[List[str], List[str]]:
        stdout, stderr = result.stdout, result.stderr
        already, new = [], []

        for pkg in packages:
            if (
                f"Installing : {pkg}" in stdout
                or f"Upgrading  : {pkg}" in stdout
                or ("Installed:" in stdout and pkg in stdout)
            ):
                new.append(pkg)
            elif (
                (f"Package {pkg}" in stdout and "already installed" in stdout)
                or (f"Package {pkg}" in stderr and "already installed" in stderr)
                or ("Nothing to do" in stdout and len(packages) == 1)
            ):
                already.append(pkg)
            else:
                check = runner.run(["dnf", "list", "installed", pkg])
                if check.success:
                    already.append(pkg)
                else:
                    new.append(pkg)

        return already, new

    def ensure_repository(self, app, runner, logger) -> bool:
        repo_id = repo_short_name(app.name)

        if app.repo_gpg_key:
            logger.info(f"Importing GPG key for {app.name}: {app.repo_gpg_key}")
            runner.check(["rpm", "--import", app.repo_gpg_key], privileged=True)

        repolist = runner.run(["dnf", "repolist", "--enabled"])
        if repolist.success and repo_id in enabled_repo_ids(repolist.stdout):
            logger.info(f"✓ Repository '{repo_id}' already exists and is enabled, skipping...")
            return False

        # Written directly instead of config-manager --add-repo, which is
        # unreliable with remote .repo files
        repo_file = f"{REPOS_DIR}/{repo_id}.repo"
        content = render_repo_file(repo_id, app.name, app.repository_url, app.repo_gpg_key)
        runner.check(["tee", repo_file], privileged=True, input_text=content)
        logger.info(f"✓ Repository file created: {repo_file}")

        runner.check(self.refresh_command(), privileged=True)
        return True
