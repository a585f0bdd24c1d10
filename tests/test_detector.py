"""Tests for platform and package manager detection."""
import pytest
from conftest import make_detector

from appstrap.core.detector import PackageManagerDetector, PlatformFamily, normalize_arch
from appstrap.core.errors import DetectionError
from appstrap.managers import ManagerKind


class TestPackageManagerDetection:
    """Test manager selection policy."""

    def test_zypper_only_host(self):
        """Only zypper on PATH selects the SUSE-family manager."""
        detector = make_detector(executables={"zypper"})
        assert detector.detect() == ManagerKind.ZYPPER

    def test_linux_priority_order(self):
        """zypper wins over dnf, dnf wins over apt."""
        assert make_detector(executables={"zypper", "dnf", "apt"}).detect() == ManagerKind.ZYPPER
        assert make_detector(executables={"dnf", "apt"}).detect() == ManagerKind.DNF
        assert make_detector(executables={"apt"}).detect() == ManagerKind.APT

    def test_windows_always_winget(self):
        detector = make_detector(system="Windows", executables=())
        assert detector.detect() == ManagerKind.WINGET
        assert detector.platform_family == PlatformFamily.WINDOWS

    def test_macos_always_homebrew(self):
        detector = make_detector(system="Darwin", executables=())
        assert detector.detect() == ManagerKind.HOMEBREW
        assert detector.platform_family == PlatformFamily.MACOS

    def test_linux_without_managers(self):
        detector = make_detector(executables={"pacman"})
        assert detector.detect() is None
        with pytest.raises(DetectionError, match="Could not detect"):
            detector.require()

    def test_unknown_platform(self):
        detector = make_detector(system="SunOS", executables={"apt"})
        assert detector.platform_family == PlatformFamily.UNKNOWN
        assert detector.detect() is None

    def test_detection_is_cached(self):
        """PATH is probed once; later calls reuse the first answer."""
        probes = []

        def which(name):
            probes.append(name)
            return "/usr/bin/dnf" if name == "dnf" else None

        detector = PackageManagerDetector(system=lambda: "Linux", machine=lambda: "x86_64", which=which)

        assert detector.detect() == ManagerKind.DNF
        assert detector.detect() == ManagerKind.DNF
        assert probes == ["zypper", "dnf"]


class TestArchitecture:
    """Test CPU architecture normalization."""

    @pytest.mark.parametrize("reported,expected", [
        ("x86_64", "x86_64"),
        ("AMD64", "x86_64"),
        ("aarch64", "aarch64"),
        ("arm64", "aarch64"),
        ("ARM64", "aarch64"),
        ("riscv64", "riscv64"),
    ])
    def test_normalize_arch(self, reported, expected):
        assert normalize_arch(reported) == expected

    def test_detector_reports_normalized_arch(self):
        assert make_detector(machine="arm64").architecture == "aarch64"
