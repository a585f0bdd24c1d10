"""Third-party repository registration."""
from appstrap.core.logger import get_logger
from appstrap.managers.base import PackageManagerBackend

logger = get_logger(__name__)


class RepositoryManager:
    """Registers an application's repository with the active manager.

    Only the Linux managers know about repositories; for winget and Homebrew
    the ``repoUrl`` field is ignored.
    """

    def __init__(self, backend: PackageManagerBackend, runner, logger=None):
        self.backend = backend
        self.runner = runner
        self.logger = logger or get_logger(__name__)

    def applies_to(self, app) -> bool:
        return bool(app.repository_url) and self.backend.supports_repositories

    def ensure(self, app) -> bool:
        """Make sure the app's repository is registered and indexed.

        Args:
            app: AppDescriptor

        Returns:
            True if a repository was added, False if skipped or already present

        Raises:
            CommandError: If a registration step fails
        """
        if not self.applies_to(app):
            return False

        self.logger.info(f"Adding repository for {app.name}: {app.repository_url}")
        return self.backend.ensure_repository(app, self.runner, self.logger)
