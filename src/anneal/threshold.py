"""
Version Thresholds

Decides whether a version change is significant enough to fire a rebuild
trigger. Thresholds nest: anything that clears MAJOR also clears MINOR,
PATCH and ALWAYS.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .version import Version, compare_versions, parse_version

logger = logging.getLogger(__name__)


class Threshold(str, Enum):
    """Minimum version-change severity required to fire a trigger."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    ALWAYS = "always"

    @classmethod
    def from_str(cls, value: str) -> "Threshold":
        """
        Parse a threshold name (case-insensitive).

        Raises:
            ValueError: If the name is not a known threshold
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(
                f"invalid threshold {value!r}, expected: {valid}"
            ) from None

    def as_str(self) -> str:
        return self.value


def exceeds_threshold(old: Version, new: Version, threshold: Threshold) -> bool:
    """
    Check whether the change from old to new clears a threshold.

    Args:
        old: Version before the upgrade
        new: Version after the upgrade
        threshold: Severity gate to evaluate

    Returns:
        True if the change is significant enough to trigger a rebuild
    """
    if threshold is Threshold.ALWAYS:
        # pkgrel-only bumps count here and nowhere else
        return compare_versions(old, new) != 0 or old.pkgrel != new.pkgrel

    if old.epoch != new.epoch:
        return True

    old_major, new_major = old.major(), new.major()

    if threshold is Threshold.MAJOR:
        if old_major is None or new_major is None:
            return compare_versions(old, new) != 0
        return old_major != new_major

    if threshold is Threshold.MINOR:
        # Same fallback as MAJOR: any change clearing MAJOR must clear MINOR,
        # so alpha -> beta fires here too
        if old_major is None or new_major is None:
            return compare_versions(old, new) != 0
        if old_major != new_major:
            return True

        old_minor, new_minor = old.minor(), new.minor()
        if old_minor is not None and new_minor is not None:
            return old_minor != new_minor
        if old_minor is not None or new_minor is not None:
            # 1 -> 1.1
            return True
        return old_major != new_major

    return compare_versions(old, new) != 0


def version_change_exceeds(
    old_text: Optional[str],
    new_text: Optional[str],
    threshold: Threshold,
) -> bool:
    """
    Check raw version strings against a threshold.

    Missing or unparseable versions count as exceeding every threshold so
    that a needed rebuild is never silently dropped.
    """
    if old_text is None or new_text is None:
        return True

    old = parse_version(old_text)
    new = parse_version(new_text)
    if old is None or new is None:
        logger.debug(
            f"Unparseable version change {old_text!r} -> {new_text!r}, "
            "treating as significant"
        )
        return True

    return exceeds_threshold(old, new, threshold)
