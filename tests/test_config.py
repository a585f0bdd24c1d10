"""Tests for environment-driven configuration."""
from appstrap.core.config import FLATHUB_REPO_URL, AppstrapConfig, get_config, set_config


class TestAppstrapConfig:
    """Test AppstrapConfig.from_env and the global accessor."""

    def test_defaults(self):
        config = AppstrapConfig.from_env()

        assert config.command_timeout == 1800
        assert config.flatpak_remote == "flathub"
        assert config.flatpak_remote_url == FLATHUB_REPO_URL
        assert config.sudo_command == "sudo"
        assert config.catalog_path is None
        assert config.mock is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("APPSTRAP_COMMAND_TIMEOUT", "60")
        monkeypatch.setenv("APPSTRAP_FLATPAK_REMOTE", "kde")
        monkeypatch.setenv("APPSTRAP_FLATPAK_REMOTE_URL", "https://kde.example/kde.flatpakrepo")
        monkeypatch.setenv("APPSTRAP_SUDO", "doas")
        monkeypatch.setenv("APPSTRAP_CATALOG", "/etc/appstrap/apps.yml")
        monkeypatch.setenv("APPSTRAP_MOCK", "true")

        config = AppstrapConfig.from_env()

        assert config.command_timeout == 60
        assert config.flatpak_remote == "kde"
        assert config.flatpak_remote_url == "https://kde.example/kde.flatpakrepo"
        assert config.sudo_command == "doas"
        assert config.catalog_path == "/etc/appstrap/apps.yml"
        assert config.mock is True

    def test_empty_sudo_disables_elevation(self, monkeypatch):
        monkeypatch.setenv("APPSTRAP_SUDO", "")
        assert AppstrapConfig.from_env().sudo_command == ""

    def test_get_config_is_cached_until_reset(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("APPSTRAP_MOCK", "1")
        assert get_config() is first

        set_config(None)
        assert get_config().mock is True

    def test_set_config(self):
        custom = AppstrapConfig(command_timeout=5)
        set_config(custom)
        assert get_config() is custom
