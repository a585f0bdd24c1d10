"""Run result models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AppStatus(str, Enum):
    """Terminal state of one application in a run."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SkippedApp:
    name: str
    reason: str


@dataclass
class FailedApp:
    name: str
    error: str


@dataclass
class AppResult:
    """Outcome of processing a single application."""

    name: str
    status: AppStatus
    message: Optional[str] = None
    requires_reboot: bool = False


@dataclass
class RunReport:
    """Accumulated outcome of a whole installation run.

    Attributes:
        succeeded: Names of applications that completed every step
        skipped: Applications not processed, with the reason
        failed: Applications that failed, with the error message
        needs_reboot: At least one succeeded application asked for a reboot
    """

    succeeded: List[str] = field(default_factory=list)
    skipped: List[SkippedApp] = field(default_factory=list)
    failed: List[FailedApp] = field(default_factory=list)
    needs_reboot: bool = False

    def record(self, result: AppResult) -> None:
        """Append a per-app result to the matching bucket."""
        if result.status == AppStatus.SUCCEEDED:
            self.succeeded.append(result.name)
            if result.requires_reboot:
                self.needs_reboot = True
        elif result.status == AppStatus.SKIPPED:
            self.skipped.append(SkippedApp(result.name, result.message or ""))
        else:
            self.failed.append(FailedApp(result.name, result.message or ""))

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.skipped) + len(self.failed)
