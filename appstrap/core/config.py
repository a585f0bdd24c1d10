"""appstrap runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional

FLATHUB_REPO_URL = "https://dl.flathub.org/repo/flathub.flatpakrepo"


@dataclass
class AppstrapConfig:
    """Runtime configuration for an installation run.

    Attributes:
        command_timeout: Timeout in seconds for a single external command (default: 1800)
        flatpak_remote: Name of the shared Flatpak remote (default: flathub)
        flatpak_remote_url: Location of the remote's .flatpakrepo file
        sudo_command: Privilege elevation wrapper; empty disables elevation
        catalog_path: Catalog file override (default: search the working directory)
        mock: Log commands instead of running them
    """

    command_timeout: int = 1800  # 30 minutes, large packages on slow mirrors
    flatpak_remote: str = "flathub"
    flatpak_remote_url: str = FLATHUB_REPO_URL
    sudo_command: str = "sudo"
    catalog_path: Optional[str] = None
    mock: bool = False

    @classmethod
    def from_env(cls) -> "AppstrapConfig":
        """Create config from environment variables.

        Environment variables:
            APPSTRAP_COMMAND_TIMEOUT: Per-command timeout in seconds
            APPSTRAP_FLATPAK_REMOTE: Flatpak remote name
            APPSTRAP_FLATPAK_REMOTE_URL: Flatpak remote repo file URL
            APPSTRAP_SUDO: Elevation wrapper command (empty string disables)
            APPSTRAP_CATALOG: Catalog file path
            APPSTRAP_MOCK: "1" or "true" for dry-run mode

        Returns:
            AppstrapConfig instance with values from environment or defaults
        """
        return cls(
            command_timeout=int(
                os.getenv("APPSTRAP_COMMAND_TIMEOUT", cls.command_timeout)
            ),
            flatpak_remote=os.getenv("APPSTRAP_FLATPAK_REMOTE", cls.flatpak_remote),
            flatpak_remote_url=os.getenv("APPSTRAP_FLATPAK_REMOTE_URL", cls.flatpak_remote_url),
            sudo_command=os.getenv("APPSTRAP_SUDO", cls.sudo_command),
            catalog_path=os.getenv("APPSTRAP_CATALOG") or None,
            mock=os.getenv("APPSTRAP_MOCK", "").lower() in ("1", "true"),
        )


# Global config instance (can be overridden)
_config: Optional[AppstrapConfig] = None


def get_config() -> AppstrapConfig:
    """Get the global appstrap configuration.

    Returns:
        AppstrapConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = AppstrapConfig.from_env()
    return _config


def set_config(config: Optional[AppstrapConfig]):
    """Set the global appstrap configuration.

    Args:
        config: AppstrapConfig instance to use globally, or None to re-read the environment
    """
    global _config
    _config = config
