"""Installation services used by the orchestrator."""
from appstrap.services.flatpak import FlatpakInstaller
from appstrap.services.installer import InstallOutcome, PackageInstaller
from appstrap.services.repositories import RepositoryManager

__all__ = [
    'FlatpakInstaller',
    'InstallOutcome',
    'PackageInstaller',
    'RepositoryManager',
]
