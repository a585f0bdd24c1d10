"""Application descriptor models for the install catalog."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from appstrap.core.detector import normalize_arch
from appstrap.managers.base import ManagerKind


class AppDescriptor(BaseModel):
    """One catalog entry: how to install an application on every platform.

    Keys follow the catalog's camelCase spelling (``repoUrl``,
    ``preInstallCommands``...); snake_case names are accepted as well.
    """

    model_config = ConfigDict(extra='forbid', frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)

    # Package lists, one per manager
    dnf: Optional[List[str]] = None
    apt: Optional[List[str]] = None
    zypper: Optional[List[str]] = None
    winget: Optional[List[str]] = None
    homebrew: Optional[List[str]] = None

    flatpak: Optional[str] = None
    flatpak_sudo: bool = Field(False, alias="flatpakSudo", description="Accepted for compatibility, unused")

    repo_url: Optional[str] = Field(None, alias="repoUrl")
    repo: Optional[str] = Field(None, description="Legacy spelling of repoUrl")
    repo_gpg_key: Optional[str] = Field(None, alias="repoGpgKey")

    pre_install_commands: List[str] = Field(default_factory=list, alias="preInstallCommands")
    post_install_commands: List[str] = Field(default_factory=list, alias="postInstallCommands")

    requires_reboot: bool = Field(False, alias="requiresReboot")
    architectures: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Reject names that are only whitespace."""
        if not v.strip():
            raise ValueError("App name must not be blank")
        return v

    @field_validator('dnf', 'apt', 'zypper', 'winget', 'homebrew')
    @classmethod
    def validate_packages(cls, v):
        """Package identifiers must be non-empty strings without whitespace."""
        if v is None:
            return v
        for package in v:
            if not package.strip() or any(ch.isspace() for ch in package):
                raise ValueError(
                    f"Package identifier '{package}' is empty or contains whitespace"
                )
        return v

    @field_validator('architectures')
    @classmethod
    def normalize_architectures(cls, v):
        """Store architectures in the same normalized form as host detection."""
        if v is None:
            return v
        return [normalize_arch(arch) for arch in v]

    @property
    def repository_url(self) -> Optional[str]:
        """Repository location, preferring ``repoUrl`` over legacy ``repo``."""
        return self.repo_url or self.repo

    def packages_for(self, manager: ManagerKind) -> List[str]:
        """Package identifiers configured for ``manager`` (empty if none)."""
        return list(getattr(self, ManagerKind(manager).value) or [])

    def supports_arch(self, arch: str) -> bool:
        """True when no allow-list is declared or ``arch`` is on it."""
        if not self.architectures:
            return True
        return normalize_arch(arch) in self.architectures
