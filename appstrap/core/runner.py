"""External command execution.

Every package manager, Flatpak and hook invocation goes through
:class:`CommandRunner`. ``run`` never raises for a failing process; callers
inspect the :class:`CommandResult` and decide whether to escalate via
``check`` (which raises :class:`CommandError`).
"""
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from appstrap.core.elevation import Elevation, NoElevation
from appstrap.core.errors import CommandError
from appstrap.core.logger import get_logger

logger = get_logger(__name__)

SHELL = "bash"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single external command."""

    success: bool
    code: int
    stdout: str = ""
    stderr: str = ""
    command: Tuple[str, ...] = ()

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


class CommandRunner:
    """Runs external commands and captures their output."""

    def __init__(
        self,
        elevation: Optional[Elevation] = None,
        timeout: Optional[int] = None,
        mock: bool = False,
        logger=None,
    ):
        """Initialize runner.

        Args:
            elevation: Strategy used for ``privileged=True`` commands
            timeout: Seconds before a command is abandoned (None waits forever)
            mock: If True, log commands and report success without running them
            logger: Logger for command tracing (defaults to module logger)
        """
        self.elevation = elevation or NoElevation()
        self.timeout = timeout
        self.mock = mock
        self.logger = logger or get_logger(__name__)

    def run(
        self,
        argv: Sequence[str],
        privileged: bool = False,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        """Run a command given as an argument vector.

        Args:
            argv: Program and arguments
            privileged: Wrap the command with the elevation strategy
            input_text: Text passed on the child's standard input

        Returns:
            CommandResult; never raises for process failures
        """
        cmd = self.elevation.wrap(argv) if privileged else list(argv)
        return self._execute(cmd, input_text)

    def run_shell(self, command: str, privileged: bool = False) -> CommandResult:
        """Run a command string through the shell interpreter.

        Args:
            command: Shell syntax command line
            privileged: Prefix the command with the elevation wrapper
        """
        if privileged:
            command = self.elevation.wrap_shell(command)
        return self._execute([SHELL, "-c", command], None)

    def check(
        self,
        argv: Sequence[str],
        privileged: bool = False,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        """Run a command that must succeed.

        Raises:
            CommandError: If the command exits non-zero or cannot be started
        """
        result = self.run(argv, privileged=privileged, input_text=input_text)
        return self._checked(result)

    def check_shell(self, command: str, privileged: bool = False) -> CommandResult:
        """Shell variant of :meth:`check`."""
        return self._checked(self.run_shell(command, privileged=privileged))

    def command_exists(self, name: str) -> bool:
        """Return True if ``name`` resolves on the executable search path."""
        return shutil.which(name) is not None

    def _checked(self, result: CommandResult) -> CommandResult:
        if not result.success:
            self.logger.error(f"✗ Command failed (exit {result.code}): {result.command_line}")
            raise CommandError(result)
        self.logger.info(f"✓ Successfully ran: {result.command_line}")
        if result.stdout.strip():
            self.logger.debug(f"Stdout: {result.stdout.strip()}")
        return result

    def _execute(self, cmd, input_text: Optional[str]) -> CommandResult:
        command = tuple(cmd)

        if self.mock:
            self.logger.info(f"MOCK: Would run {' '.join(command)}")
            return CommandResult(success=True, code=0, command=command)

        self.logger.debug(f"Running: {' '.join(command)}")
        try:
            proc = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
                # Localized manager output is not always valid UTF-8
                errors="replace",
                input=input_text,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                success=False,
                code=-1,
                stderr=f"Command timed out ({self.timeout}s)",
                command=command,
            )
        except OSError as e:
            return CommandResult(success=False, code=-1, stderr=str(e), command=command)

        return CommandResult(
            success=proc.returncode == 0,
            code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            command=command,
        )
