"""
Version Utilities

Provides parsing and comparison for Arch Linux package version strings.
Handles epochs (``1:2.3.4``), pkgrel suffixes (``1.2.3-1``), pre-release
markers (``1.2.3rc1``, ``1.2.3-rc1``) and date-style versions.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple, Union

# A segment is either numeric (int) or alphabetic (str).
Segment = Union[int, str]

_SEPARATORS = ".-_"
_DIGITS = frozenset("0123456789")


def _compare_segments(a: Segment, b: Segment) -> int:
    """Compare two segments. Numeric always sorts above alpha."""
    a_num = isinstance(a, int)
    b_num = isinstance(b, int)

    if a_num != b_num:
        return 1 if a_num else -1
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """
    A parsed package version.

    Attributes:
        epoch: Version epoch (the ``1`` in ``1:2.3.4-5``), default 0
        segments: Numeric and alphabetic segments of the version body
        pkgrel: Package release (the ``5`` in ``1:2.3.4-5``), if present
        text: The string this version was parsed from, if any

    Comparison and hashing ignore ``pkgrel`` and ``text``.
    """

    epoch: int = 0
    segments: Tuple[Segment, ...] = ()
    pkgrel: Optional[str] = None
    text: Optional[str] = None

    def _numeric(self, index: int) -> Optional[int]:
        numbers = [s for s in self.segments if isinstance(s, int)]
        if index < len(numbers):
            return numbers[index]
        return None

    def major(self) -> Optional[int]:
        """Return the first numeric segment, if any."""
        return self._numeric(0)

    def minor(self) -> Optional[int]:
        """Return the second numeric segment, if any."""
        return self._numeric(1)

    def patch(self) -> Optional[int]:
        """Return the third numeric segment, if any."""
        return self._numeric(2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) < 0

    def __hash__(self) -> int:
        return hash((self.epoch, self.segments))

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        body = ".".join(str(s) for s in self.segments)
        if self.epoch:
            body = f"{self.epoch}:{body}"
        if self.pkgrel is not None:
            body = f"{body}-{self.pkgrel}"
        return body


def _split_segments(body: str) -> list[Segment]:
    """
    Split a version body into numeric and alphabetic segments.

    Examples:
        "1.2.3" -> [1, 2, 3]
        "3alpha" -> [3, "alpha"]
        "2.0beta3" -> [2, 0, "beta", 3]
    """
    segments: list[Segment] = []
    current = ""
    current_is_digit = None

    for char in body:
        if char in _SEPARATORS:
            if current:
                segments.append(int(current) if current_is_digit else current)
            current = ""
            current_is_digit = None
            continue

        is_digit = char in _DIGITS
        if current and is_digit != current_is_digit:
            segments.append(int(current) if current_is_digit else current)
            current = ""
        current += char
        current_is_digit = is_digit

    if current:
        segments.append(int(current) if current_is_digit else current)

    return segments


def _is_pkgrel(text: str) -> bool:
    return bool(text) and all(c in _DIGITS or c == "." for c in text)


def parse_version(text: str) -> Optional[Version]:
    """
    Parse a version string into a Version object.

    Supported formats:
        1.2.3, 1.2, 42, 20240101
        1:2.3.4        (epoch)
        1.2.3-1        (pkgrel, may be dotted: 1.2.3-1.1)
        1.2.3rc1       (pre-release)
        1.2.3-rc1      (pre-release, kept in the version body)

    Args:
        text: Raw version string

    Returns:
        Version object or None if parsing fails
    """
    if not text:
        return None

    epoch = 0
    remaining = text
    if ":" in remaining:
        epoch_str, remaining = remaining.split(":", 1)
        if not epoch_str or not set(epoch_str) <= _DIGITS:
            return None
        epoch = int(epoch_str)

    # A trailing "-<digits and dots>" is always read as the pkgrel
    pkgrel = None
    head, sep, tail = remaining.rpartition("-")
    if sep and _is_pkgrel(tail):
        pkgrel = tail
        remaining = head

    segments = _split_segments(remaining)
    if not segments:
        return None

    return Version(epoch=epoch, segments=tuple(segments), pkgrel=pkgrel, text=text)


def compare_versions(a: Version, b: Version) -> int:
    """
    Compare two parsed versions, ignoring pkgrel.

    When one side runs out of segments, a remaining numeric segment makes
    the longer version greater (1.2 < 1.2.1) while a remaining alphabetic
    segment makes it lesser (1.0.0rc1 < 1.0.0).

    Returns:
        -1 if a < b
         0 if a == b
         1 if a > b
    """
    if a.epoch != b.epoch:
        return -1 if a.epoch < b.epoch else 1

    for s1, s2 in zip(a.segments, b.segments):
        result = _compare_segments(s1, s2)
        if result != 0:
            return result

    len_a, len_b = len(a.segments), len(b.segments)
    if len_a > len_b:
        return 1 if isinstance(a.segments[len_b], int) else -1
    if len_b > len_a:
        return -1 if isinstance(b.segments[len_a], int) else 1

    return 0
