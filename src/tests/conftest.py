"""
Pytest configuration and fixtures for anneal tests.
"""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from anneal.overrides import Overrides


class FakeResolver:
    """In-memory reverse dependency lookup."""

    def __init__(self, reverse_deps=None):
        self.reverse_deps = reverse_deps or {}
        self.calls = []

    def resolve(self, package):
        self.calls.append(package)
        return list(self.reverse_deps.get(package, []))


class FakeUniverse:
    """In-memory foreign package list that counts queries."""

    def __init__(self, packages=()):
        self.packages = set(packages)
        self.calls = 0

    def list_packages(self):
        self.calls += 1
        return set(self.packages)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def override_dirs(temp_dir):
    """Create empty trigger and package override directories."""
    triggers_dir = temp_dir / "triggers"
    packages_dir = temp_dir / "packages"
    triggers_dir.mkdir()
    packages_dir.mkdir()
    return triggers_dir, packages_dir


@pytest.fixture
def write_override():
    """Write an override file and return its path."""

    def _write(directory, name, content):
        path = directory / f"{name}.conf"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def no_overrides():
    """Provide an empty Overrides instance."""
    return Overrides()


@pytest.fixture
def sample_reverse_deps():
    """Provide reverse dependencies for common triggers."""
    return {
        "qt6-base": ["qt6-tools", "kvantum-qt6", "qt6ct-kde", "zoom-bin"],
        "gtk4": ["gnome-text-editor", "nautilus-git", "kvantum-qt6"],
        "boost": ["ros-core"],
        "custom-lib": ["custom-app"],
    }


@pytest.fixture
def sample_aur_packages():
    """Provide a foreign package set."""
    return {
        "kvantum-qt6",
        "qt6ct-kde",
        "zoom-bin",
        "nautilus-git",
        "ros-core",
        "custom-app",
        "custom-tool",
        "custom-bin",
        "other-pkg",
    }


@pytest.fixture
def resolver(sample_reverse_deps):
    return FakeResolver(sample_reverse_deps)


@pytest.fixture
def universe(sample_aur_packages):
    return FakeUniverse(sample_aur_packages)


@pytest.fixture
def version_pairs():
    """Provide version pairs for comparison testing."""
    return [
        # (a, b, expected compare result)
        ("1.0.0", "1.0.0", 0),
        ("1.2", "1.2.1", -1),
        ("1.0.0", "1.0.0rc1", 1),
        ("1.0.0-rc1", "1.0.0", -1),
        ("1.0alpha", "1.0beta", -1),
        ("2.0", "10.0", -1),
        ("1:1.0", "2.0", 1),
        ("1.2.3-1", "1.2.3-9", 0),
        ("20240101", "20240215", -1),
        ("1.0a", "1.0.1", -1),
    ]
