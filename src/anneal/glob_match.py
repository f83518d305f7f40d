"""
Glob Matching

Minimal wildcard matching for override files: ``*`` matches any run of
characters (including none), ``?`` matches exactly one character and
everything else matches literally. There are no character classes or
escapes.
"""

from __future__ import annotations


def matches_glob(pattern: str, text: str) -> bool:
    """
    Match a glob pattern against a string.

    Uses a single pass with a bookmark on the last ``*`` seen, retrying
    from there one character later whenever a literal match fails.

    Examples:
        matches_glob("qt?-*", "qt6-base") -> True
        matches_glob("qt?-*", "qt-base") -> False
    """
    p = t = 0
    star = -1
    star_text = 0

    while t < len(text):
        if p < len(pattern) and pattern[p] == "*":
            star = p
            star_text = t
            p += 1
        elif p < len(pattern) and (pattern[p] == "?" or pattern[p] == text[t]):
            p += 1
            t += 1
        elif star >= 0:
            # Let the last * absorb one more character
            p = star + 1
            star_text += 1
            t = star_text
        else:
            return False

    while p < len(pattern) and pattern[p] == "*":
        p += 1

    return p == len(pattern)
