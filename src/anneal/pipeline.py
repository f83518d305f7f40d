"""
Trigger Pipeline

Decides which AUR packages to mark for rebuild after a batch of upgrades.
For each upgraded package that is a trigger, the version change is checked
against the trigger's threshold, dependents are found (from a trigger
override or reverse dependencies), and package overrides prune the result.

Input format per package: ``name`` or ``name:oldver:newver``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from .config import Config
from .overrides import BIN_SUFFIX, Overrides
from .registry import TRIGGERS, get_curated_threshold, is_curated_trigger
from .resolvers import (
    ForeignPackageUniverseProvider,
    PacmanForeignProvider,
    PactreeResolver,
    ReverseDependencyResolver,
)
from .threshold import Threshold, version_change_exceeds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TriggerInput:
    """An upgraded package with optional version info."""

    name: str
    old_version: Optional[str] = None
    new_version: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "TriggerInput":
        """
        Parse ``name`` or ``name:oldver:newver``.

        Only the first two colons split; anything after the second one,
        including an epoch, belongs to the new version.
        """
        parts = raw.split(":", 2)
        if len(parts) == 3:
            return cls(name=parts[0], old_version=parts[1], new_version=parts[2])
        return cls(name=raw)

    def exceeds_threshold(self, threshold: Threshold) -> bool:
        """Check the version change; missing or bad versions always fire."""
        return version_change_exceeds(self.old_version, self.new_version, threshold)


@dataclass(frozen=True)
class MarkedPackage:
    """A package marked for rebuild and the trigger that marked it."""

    package: str
    trigger: str

    def to_dict(self) -> dict[str, str]:
        return {"package": self.package, "trigger": self.trigger}


@dataclass
class TriggerResult:
    """Outcome of processing one batch of upgraded packages."""

    marked: list[MarkedPackage] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    below_threshold: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "marked": [m.to_dict() for m in self.marked],
            "skipped": self.skipped,
            "below_threshold": self.below_threshold,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def is_trigger(name: str, overrides: Overrides) -> bool:
    """A package is a trigger if it is curated or has a trigger override."""
    return is_curated_trigger(name) or overrides.is_user_trigger(name)


def get_aur_dependents(
    trigger: str,
    aur_packages: set[str] | frozenset[str],
    overrides: Overrides,
    resolver: ReverseDependencyResolver,
) -> list[str]:
    """
    Find the AUR packages a trigger should mark.

    Args:
        trigger: Trigger package name
        aur_packages: Installed foreign packages
        overrides: Loaded user overrides
        resolver: Reverse dependency lookup

    Returns:
        Candidate packages allowed by package overrides
    """
    targets = overrides.get_trigger_targets(trigger, aur_packages)

    if targets is None:
        # -bin packages would only re-download the same binary
        targets = [
            dep
            for dep in resolver.resolve(trigger)
            if dep in aur_packages and not dep.endswith(BIN_SUFFIX)
        ]

    return [dep for dep in targets if overrides.should_mark_package(dep, trigger)]


def deduplicate_marked(marked: Iterable[MarkedPackage]) -> list[MarkedPackage]:
    """Keep the first mark for each package, preserving order."""
    seen: set[str] = set()
    unique = []
    for m in marked:
        if m.package not in seen:
            seen.add(m.package)
            unique.append(m)
    return unique


def process_triggers(
    packages: Iterable[str],
    default_threshold: Threshold,
    overrides: Overrides,
    resolver: ReverseDependencyResolver,
    universe: ForeignPackageUniverseProvider,
) -> TriggerResult:
    """
    Find AUR dependents to mark for a batch of upgraded packages.

    Curated triggers use their own threshold; user-defined triggers use
    ``default_threshold``. The foreign package list is queried once and
    shared by every trigger in the batch.

    Args:
        packages: Raw inputs, ``name`` or ``name:oldver:newver``
        default_threshold: Threshold for user-defined triggers
        overrides: Loaded user overrides
        resolver: Reverse dependency lookup
        universe: Foreign package enumeration

    Returns:
        TriggerResult with deduplicated marks

    Raises:
        CommandError: If a package query fails for a reason other than
            "not found"; the whole batch is aborted.
    """
    result = TriggerResult()
    aur_packages = frozenset(universe.list_packages())
    logger.debug(f"Found {len(aur_packages)} foreign package(s)")

    for raw in packages:
        item = TriggerInput.parse(raw)

        if not is_trigger(item.name, overrides):
            result.skipped.append(item.name)
            continue

        threshold = get_curated_threshold(item.name)
        if threshold is None:
            threshold = default_threshold

        if not item.exceeds_threshold(threshold):
            logger.debug(
                f"{item.name} {item.old_version} -> {item.new_version} "
                f"is below {threshold.as_str()} threshold"
            )
            result.below_threshold.append(item.name)
            continue

        dependents = get_aur_dependents(item.name, aur_packages, overrides, resolver)
        logger.debug(f"{item.name} marks {len(dependents)} package(s)")
        result.marked.extend(
            MarkedPackage(package=dep, trigger=item.name) for dep in dependents
        )

    result.marked = deduplicate_marked(result.marked)
    return result


def run_triggers(
    packages: Iterable[str],
    config: Optional[Config] = None,
    overrides: Optional[Overrides] = None,
) -> TriggerResult:
    """
    Process triggers against the live system.

    Loads overrides from the configured directories unless given, and
    queries pacman/pactree with the configured timeout.
    """
    config = config or Config.load()
    if overrides is None:
        overrides = Overrides.load(config)

    return process_triggers(
        packages,
        config.version_threshold,
        overrides,
        PactreeResolver(timeout=config.command_timeout),
        PacmanForeignProvider(timeout=config.command_timeout),
    )


def list_all_triggers(
    overrides: Overrides, default_threshold: Threshold
) -> list[tuple[str, Threshold]]:
    """
    List curated and user-defined triggers with their thresholds.

    User-defined triggers that are not curated get ``default_threshold``.
    The result is sorted by name.
    """
    triggers = dict(TRIGGERS)
    for name in overrides.user_triggers():
        triggers.setdefault(name, default_threshold)
    return sorted(triggers.items())
