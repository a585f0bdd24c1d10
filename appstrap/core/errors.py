"""Exception hierarchy for appstrap runs."""
from typing import Optional


class AppstrapError(Exception):
    """Base class for errors raised by appstrap."""


class DetectionError(AppstrapError):
    """Raised when no supported package manager exists on the host."""


class CatalogError(AppstrapError):
    """Raised when the application catalog is missing or malformed."""


class CommandError(AppstrapError):
    """Raised when an external command that must succeed exits non-zero."""

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"Error running command: {result.command_line}\n"
            f"Exit Code: {result.code}\n"
            f"Stderr: {result.stderr}\n"
            f"Stdout: {result.stdout}"
        )


class PackageInstallError(AppstrapError):
    """Raised when the native package manager fails to install packages."""

    def __init__(self, stderr: str, result=None):
        self.stderr = stderr
        self.result = result
        super().__init__(f"Package installation failed: {stderr}")


class FlatpakError(AppstrapError):
    """Raised when a Flatpak installation fails terminally."""

    def __init__(self, app_id: str, stderr: str, native_error: Optional[str] = None):
        self.app_id = app_id
        self.stderr = stderr
        self.native_error = native_error
        if native_error:
            message = (
                "Both native package and Flatpak installation failed. "
                f"Native: {native_error}. Flatpak: {stderr}"
            )
        else:
            message = f"Flatpak installation failed: {stderr}"
        super().__init__(message)
