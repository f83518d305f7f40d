"""
User Overrides

Loads user customisation of trigger behaviour from two directories:

    <triggers_dir>/<trigger>.conf  - which packages a trigger marks
    <packages_dir>/<package>.conf  - which triggers may mark a package

Each file holds one glob pattern per line; blank lines and ``#`` comments
are ignored. A file with no patterns disables the trigger, or exempts the
package from every trigger.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Optional, TypeVar

from .config import Config
from .glob_match import matches_glob

logger = logging.getLogger(__name__)

OVERRIDE_SUFFIX = ".conf"
BIN_SUFFIX = "-bin"

_T = TypeVar("_T")


@dataclass(frozen=True)
class TriggerOverride:
    """Override for a trigger. No patterns means the trigger is disabled."""

    patterns: tuple[str, ...] = ()

    @property
    def disabled(self) -> bool:
        return not self.patterns


@dataclass(frozen=True)
class PackageOverride:
    """Override for a package. No patterns means it is never marked."""

    patterns: tuple[str, ...] = ()

    @property
    def never_mark(self) -> bool:
        return not self.patterns


def parse_override_lines(content: str) -> list[str]:
    """
    Extract patterns from override file content.

    Lines are trimmed; blank lines and lines starting with ``#`` are
    dropped. Order is preserved.
    """
    patterns = []
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


def _load_directory(
    directory: Path, factory: Callable[[tuple[str, ...]], _T]
) -> dict[str, _T]:
    """
    Load every ``*.conf`` file in a directory.

    A missing directory yields no overrides. Files that cannot be read are
    logged and skipped without affecting the others.
    """
    loaded: dict[str, _T] = {}

    if not directory.is_dir():
        logger.debug(f"Override directory not found: {directory}")
        return loaded

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.warning(f"Cannot list override directory {directory}: {e}")
        return loaded

    for path in entries:
        if path.suffix != OVERRIDE_SUFFIX or not path.is_file():
            continue

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable override file {path}: {e}")
            continue

        loaded[path.stem] = factory(tuple(parse_override_lines(content)))

    return loaded


class Overrides:
    """
    Loaded user overrides.

    Contents are fixed at construction; the query methods never modify
    them.
    """

    def __init__(
        self,
        triggers: Optional[Mapping[str, TriggerOverride]] = None,
        packages: Optional[Mapping[str, PackageOverride]] = None,
    ):
        self._triggers = MappingProxyType(dict(triggers or {}))
        self._packages = MappingProxyType(dict(packages or {}))

    @classmethod
    def load_from_paths(
        cls, triggers_dir: str | Path, packages_dir: str | Path
    ) -> "Overrides":
        """
        Load overrides from the given directories.

        Args:
            triggers_dir: Directory of trigger override files
            packages_dir: Directory of package override files

        Returns:
            Overrides instance (empty if neither directory exists)
        """
        triggers = _load_directory(Path(triggers_dir), TriggerOverride)
        packages = _load_directory(Path(packages_dir), PackageOverride)

        logger.debug(
            f"Loaded {len(triggers)} trigger override(s) and "
            f"{len(packages)} package override(s)"
        )
        return cls(triggers, packages)

    @classmethod
    def load(cls, config: Optional[Config] = None) -> "Overrides":
        """Load overrides from the directories named in the config."""
        config = config or Config()
        return cls.load_from_paths(config.triggers_dir, config.packages_dir)

    @property
    def triggers(self) -> Mapping[str, TriggerOverride]:
        return self._triggers

    @property
    def packages(self) -> Mapping[str, PackageOverride]:
        return self._packages

    def is_user_trigger(self, name: str) -> bool:
        """Check if a trigger override file exists for this name."""
        return name in self._triggers

    def user_triggers(self) -> Iterator[str]:
        """Iterate over user-defined trigger names."""
        return iter(self._triggers)

    def get_trigger_targets(
        self, trigger: str, aur_packages: set[str] | frozenset[str]
    ) -> Optional[list[str]]:
        """
        Get the packages a trigger override selects.

        Args:
            trigger: Trigger package name
            aur_packages: Installed foreign packages

        Returns:
            None if the trigger has no override (use reverse dependencies),
            otherwise the sorted matching AUR packages, excluding ``-bin``
            packages. A disabled trigger yields an empty list.
        """
        override = self._triggers.get(trigger)
        if override is None:
            return None

        return sorted(
            pkg
            for pkg in aur_packages
            if not pkg.endswith(BIN_SUFFIX)
            and any(matches_glob(pattern, pkg) for pattern in override.patterns)
        )

    def should_mark_package(self, package: str, trigger: str) -> bool:
        """
        Check if a trigger is allowed to mark a package.

        Returns:
            True when the package has no override or its override lists a
            pattern matching the trigger; False otherwise.
        """
        override = self._packages.get(package)
        if override is None:
            return True

        return any(matches_glob(pattern, trigger) for pattern in override.patterns)
