"""Tests for the Flatpak fallback installer."""
import pytest

from appstrap.core.errors import FlatpakError
from appstrap.services.flatpak import FlatpakInstaller

REMOTE_URL = "https://dl.flathub.org/repo/flathub.flatpakrepo"


@pytest.fixture
def flatpak(runner):
    return FlatpakInstaller(runner)


class TestEnsureRemote:
    """Test one-time remote setup."""

    def test_remote_already_configured(self, runner, flatpak):
        runner.respond("flatpak remotes --user", stdout="flathub\tuser\n")

        assert flatpak.ensure_remote() is True
        assert runner.lines() == ["flatpak remotes --user"]

    def test_missing_remote_is_added_and_synced(self, runner, flatpak):
        runner.respond("flatpak remotes --user", stdout="")

        assert flatpak.ensure_remote() is True
        assert runner.lines() == [
            "flatpak remotes --user",
            f"flatpak remote-add --user --if-not-exists flathub {REMOTE_URL}",
            "flatpak update --user --appstream",
        ]

    def test_similar_remote_name_does_not_count(self, runner, flatpak):
        runner.respond("flatpak remotes --user", stdout="flathub-beta\tuser\n")
        flatpak.ensure_remote()
        assert runner.count("remote-add") == 1

    def test_add_failure_is_only_a_warning(self, runner, flatpak):
        runner.fail("remote-add", stderr="Can't load uri")

        assert flatpak.ensure_remote() is False
        assert runner.count("--appstream") == 0

    def test_sync_failure_tries_alternative(self, runner, flatpak):
        runner.fail("update --user --appstream", stderr="network down")
        runner.fail("remote-ls", stderr="network down")

        assert flatpak.ensure_remote() is True
        assert runner.lines()[-1] == "flatpak remote-ls --user flathub"

    def test_flatpak_missing(self, runner, flatpak):
        runner.fail("flatpak remotes", stderr="No such file or directory", code=-1)
        assert flatpak.ensure_remote() is False
        assert len(runner.calls) == 1

    def test_custom_remote(self, runner):
        installer = FlatpakInstaller(runner, remote="kde", remote_url="https://kde.example/kde.flatpakrepo")
        installer.ensure_remote()
        assert "flatpak remote-add --user --if-not-exists kde https://kde.example/kde.flatpakrepo" in runner.lines()


class TestInstall:
    """Test per-application installation."""

    def test_already_installed_has_no_side_effect(self, runner, flatpak):
        runner.respond("flatpak list --user --app=org.tool.App", stdout="Tool\torg.tool.App\t1.0\n")

        assert flatpak.install("org.tool.App") is False
        assert runner.count("flatpak install") == 0

    def test_fresh_install(self, runner, flatpak):
        assert flatpak.install("org.tool.App") is True
        assert runner.lines() == [
            "flatpak list --user --app=org.tool.App",
            "flatpak install --user -y flathub org.tool.App",
        ]

    def test_not_found_resyncs_and_retries_once(self, runner, flatpak):
        runner.fail("flatpak install", stderr="error: Nothing matches org.tool.App", times=1)

        assert flatpak.install("org.tool.App") is True
        assert runner.lines() == [
            "flatpak list --user --app=org.tool.App",
            "flatpak install --user -y flathub org.tool.App",
            "flatpak update --user --appstream",
            "flatpak install --user -y flathub org.tool.App",
        ]

    def test_retry_failure_raises_single_cause(self, runner, flatpak):
        runner.fail("flatpak install", stderr="error: Nothing matches org.tool.App")

        with pytest.raises(FlatpakError) as excinfo:
            flatpak.install("org.tool.App")

        assert runner.count("flatpak install") == 2
        assert str(excinfo.value) == "Flatpak installation failed: error: Nothing matches org.tool.App"

    def test_other_failures_are_not_retried(self, runner, flatpak):
        runner.fail("flatpak install", stderr="error: No space left on device")

        with pytest.raises(FlatpakError):
            flatpak.install("org.tool.App")
        assert runner.count("flatpak install") == 1
        assert runner.count("--appstream") == 0

    def test_combined_message_with_native_error(self, runner, flatpak):
        runner.fail("flatpak install", stderr="error: Nothing matches org.tool.App")

        with pytest.raises(FlatpakError) as excinfo:
            flatpak.install("org.tool.App", native_error="Package installation failed: E: Unable to locate package tool")

        message = str(excinfo.value)
        assert message.startswith("Both native package and Flatpak installation failed.")
        assert "Unable to locate package tool" in message
        assert "Nothing matches org.tool.App" in message
