"""Flatpak fallback installation (Linux only).

Everything happens at user level (``--user``), so no elevation is needed.
"""
from typing import Optional

from appstrap.core.config import FLATHUB_REPO_URL
from appstrap.core.errors import FlatpakError
from appstrap.core.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND_MARKER = "Nothing matches"


class FlatpakInstaller:
    """Installs applications from a shared Flatpak remote."""

    def __init__(
        self,
        runner,
        remote: str = "flathub",
        remote_url: str = FLATHUB_REPO_URL,
        logger=None,
    ):
        """Initialize installer.

        Args:
            runner: CommandRunner used for every flatpak call
            remote: Remote name apps are installed from
            remote_url: .flatpakrepo location used when adding the remote
            logger: Logger for progress lines (defaults to module logger)
        """
        self.runner = runner
        self.remote = remote
        self.remote_url = remote_url
        self.logger = logger or get_logger(__name__)

    def ensure_remote(self) -> bool:
        """Register the remote for the current user if it is missing.

        Failures are logged as warnings; per-app installs may still work or
        will fail on their own.

        Returns:
            True if the remote is (now) configured
        """
        self.logger.info(f"Checking Flatpak {self.remote} remote setup...")
        remotes = self.runner.run(["flatpak", "remotes", "--user"])
        if not remotes.success:
            self.logger.warning(f"⚠ Unable to list Flatpak remotes: {remotes.stderr.strip()}")
            return False

        if self._has_remote(remotes.stdout):
            self.logger.info(f"✓ Flatpak {self.remote} remote already configured")
            return True

        self.logger.info(f"Setting up {self.remote} remote for user-level Flatpak installations...")
        added = self.runner.run([
            "flatpak", "remote-add", "--user", "--if-not-exists", self.remote, self.remote_url,
        ])
        if not added.success:
            self.logger.warning(f"⚠ Failed to add {self.remote} remote, Flatpak installations may fail")
            return False

        self.logger.info(f"✓ {self.remote} remote added successfully")
        self.sync_metadata()
        return True

    def sync_metadata(self) -> bool:
        """Refresh appstream metadata for the remote.

        Falls back to listing the remote, which also pulls its summary.
        """
        self.logger.info(f"Syncing {self.remote} metadata...")
        sync = self.runner.run(["flatpak", "update", "--user", "--appstream"])
        if sync.success:
            self.logger.info(f"✓ {self.remote} metadata synced successfully")
            return True

        self.logger.warning(f"⚠ Failed to sync {self.remote} metadata, trying alternative sync method...")
        alt = self.runner.run(["flatpak", "remote-ls", "--user", self.remote])
        if not alt.success:
            self.logger.warning("⚠ Alternative sync also failed, some apps may not be found")
            return False
        return True

    def is_installed(self, app_id: str) -> bool:
        listed = self.runner.run(["flatpak", "list", "--user", f"--app={app_id}"])
        return listed.success and app_id in listed.stdout

    def install(self, app_id: str, native_error: Optional[str] = None) -> bool:
        """Install ``app_id`` from the remote.

        Args:
            app_id: Flatpak application identifier
            native_error: Failure message of a preceding native attempt, folded
                into the raised error

        Returns:
            True if newly installed, False if it was already present

        Raises:
            FlatpakError: If installation fails after the single retry
        """
        if self.is_installed(app_id):
            self.logger.info(f"✓ Already installed via Flatpak: {app_id}")
            return False

        command = ["flatpak", "install", "--user", "-y", self.remote, app_id]
        result = self.runner.run(command)

        if not result.success and NOT_FOUND_MARKER in result.stderr:
            self.logger.info("App not found, syncing remote and retrying...")
            self.runner.run(["flatpak", "update", "--user", "--appstream"])
            result = self.runner.run(command)

        if not result.success:
            raise FlatpakError(app_id, result.stderr.strip(), native_error=native_error)

        self.logger.info(f"✓ Successfully installed via Flatpak: {app_id}")
        return True

    def _has_remote(self, remotes_output: str) -> bool:
        for line in remotes_output.splitlines():
            parts = line.split()
            if parts and parts[0] == self.remote:
                return True
        return False
