"""
Curated Triggers

Built-in list of ABI-sensitive packages whose upgrades are known to break
AUR dependents, each with the threshold that fires it.

Bump TRIGGER_LIST_VERSION whenever an entry is added, removed or changed.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from .threshold import Threshold

TRIGGER_LIST_VERSION = 1

TRIGGERS: tuple[tuple[str, Threshold], ...] = (
    # Qt: private ABI changes every minor release
    ("qt5-base", Threshold.MINOR),
    ("qt6-base", Threshold.MINOR),
    # GTK
    ("gtk2", Threshold.MAJOR),
    ("gtk3", Threshold.MAJOR),
    ("gtk4", Threshold.MINOR),
    # Core libraries
    ("boost", Threshold.MINOR),
    ("electron", Threshold.MAJOR),
    ("icu", Threshold.MAJOR),
    ("openssl", Threshold.MINOR),
)

CURATED_THRESHOLDS: Mapping[str, Threshold] = MappingProxyType(dict(TRIGGERS))


def is_curated_trigger(name: str) -> bool:
    """Check if a package is in the curated trigger list."""
    return name in CURATED_THRESHOLDS


def get_curated_threshold(name: str) -> Optional[Threshold]:
    """Return the curated threshold for a trigger, or None if not curated."""
    return CURATED_THRESHOLDS.get(name)
