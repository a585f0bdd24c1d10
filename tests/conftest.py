"""Shared test fixtures for appstrap tests."""
import pytest

from appstrap.core.config import set_config
from appstrap.core.detector import PackageManagerDetector
from appstrap.core.elevation import NoElevation
from appstrap.core.runner import CommandResult, CommandRunner
from appstrap.models.app import AppDescriptor


class FakeRunner(CommandRunner):
    """CommandRunner that records commands instead of spawning them.

    Responses are matched by substring against the joined command line, in
    the order they were registered. A response with ``times`` is used that
    many times and then ignored. Unmatched commands succeed with no output.
    """

    def __init__(self, elevation=None):
        super().__init__(elevation=elevation or NoElevation())
        self.calls = []
        self.inputs = []
        self._rules = []

    def respond(self, needle, success=True, code=None, stdout="", stderr="", times=None):
        self._rules.append({
            'needle': needle,
            'success': success,
            'code': code if code is not None else (0 if success else 1),
            'stdout': stdout,
            'stderr': stderr,
            'times': times,
        })
        return self

    def fail(self, needle, stderr="", code=1, times=None):
        return self.respond(needle, success=False, code=code, stderr=stderr, times=times)

    def lines(self):
        return [" ".join(call) for call in self.calls]

    def count(self, needle):
        return sum(1 for line in self.lines() if needle in line)

    def _execute(self, cmd, input_text):
        command = tuple(cmd)
        self.calls.append(command)
        self.inputs.append(input_text)
        line = " ".join(command)

        for rule in self._rules:
            if rule['needle'] not in line:
                continue
            if rule['times'] is not None:
                if rule['times'] <= 0:
                    continue
                rule['times'] -= 1
            return CommandResult(
                success=rule['success'],
                code=rule['code'],
                stdout=rule['stdout'],
                stderr=rule['stderr'],
                command=command,
            )

        return CommandResult(success=True, code=0, command=command)


def make_detector(system="Linux", machine="x86_64", executables=()):
    """Detector for a simulated host exposing only ``executables``."""
    return PackageManagerDetector(
        system=lambda: system,
        machine=lambda: machine,
        which=lambda name: f"/usr/bin/{name}" if name in executables else None,
    )


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Start every test from default configuration."""
    for var in (
        "APPSTRAP_CATALOG",
        "APPSTRAP_MOCK",
        "APPSTRAP_SUDO",
        "APPSTRAP_COMMAND_TIMEOUT",
        "APPSTRAP_FLATPAK_REMOTE",
        "APPSTRAP_FLATPAK_REMOTE_URL",
    ):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def runner():
    """Recording runner without elevation."""
    return FakeRunner()


@pytest.fixture
def make_app():
    """Build an AppDescriptor from catalog-style keyword arguments."""
    def _make(**fields):
        fields.setdefault('name', 'Tool')
        return AppDescriptor.model_validate(fields)
    return _make
