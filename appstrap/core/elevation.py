"""Privilege elevation strategies for mutating host commands."""
import os
import shlex
from typing import List, Optional, Sequence


class Elevation:
    """Wraps commands so they run with elevated privileges.

    The default strategy prefixes ``sudo``. Tests and already-privileged
    sessions use :class:`NoElevation`.
    """

    def __init__(self, prefix: Optional[Sequence[str]] = None):
        self.prefix: List[str] = list(prefix) if prefix is not None else ["sudo"]

    def wrap(self, argv: Sequence[str]) -> List[str]:
        return self.prefix + list(argv)

    def wrap_shell(self, command: str) -> str:
        """Prefix a shell fragment (one pipeline stage) with the wrapper."""
        if not self.prefix:
            return command
        return f"{shlex.join(self.prefix)} {command}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.prefix!r})"


class NoElevation(Elevation):
    """Runs privileged commands as-is."""

    def __init__(self):
        super().__init__(prefix=[])


def default_elevation(sudo_command: str = "sudo") -> Elevation:
    """Pick the elevation strategy for this process.

    Root (or a platform without ``geteuid``, i.e. Windows) needs no wrapper.
    An empty ``sudo_command`` disables elevation explicitly.
    """
    if not sudo_command.strip():
        return NoElevation()
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None or geteuid() == 0:
        return NoElevation()
    return Elevation(shlex.split(sudo_command))
