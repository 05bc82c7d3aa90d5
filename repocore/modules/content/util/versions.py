"""Version helpers shared by the layouts, metadata tools and purge."""

from __future__ import annotations

import functools
import re
from typing import Iterable, List, Optional, Tuple

SNAPSHOT = "SNAPSHOT"

UNIQUE_SNAPSHOT_PATTERN = re.compile(r"^(.*)-([0-9]{8}\.[0-9]{6})-([0-9]+)$")

# Qualifiers ranked lowest to highest when both sides are one of them.
SPECIAL_WORDS = (
    "final",
    "release",
    "current",
    "latest",
    "g",
    "gold",
    "fcs",
    "a",
    "alpha",
    "b",
    "beta",
    "de",
    "diseased",
    "m",
    "milestone",
    "p",
    "pre",
    "preview",
    "rc",
    "candidate",
    "snapshot",
    "dev",
    "test",
)

_VERSION_TOKEN_PATTERNS = (
    r"([0-9][_.0-9a-z]*)",
    r"(snapshot)",
    r"(g?[_.0-9ab]*(pre|rc|g|m)[_.0-9]*)",
    r"(dev[_.0-9]*)",
    r"(alpha[_.0-9]*)",
    r"(beta[_.0-9]*)",
    r"(rc[_.0-9]*)",
    r"(debug[_.0-9]*)",
    r"(unofficial[_.0-9]*)",
    r"(current)",
    r"(latest)",
    r"(fcs)",
    r"(release[_.0-9]*)",
    r"(nightly)",
    r"(final)",
    r"(incubating)",
    r"(incubator)",
    r"([ab][_.0-9]+)",
)
VERSION_TOKEN_PATTERN = re.compile("|".join(_VERSION_TOKEN_PATTERNS), re.IGNORECASE)


def is_generic_snapshot(version: Optional[str]) -> bool:
    return bool(version) and version.endswith(SNAPSHOT)


def is_unique_snapshot(version: Optional[str]) -> bool:
    return bool(version) and UNIQUE_SNAPSHOT_PATTERN.match(version) is not None


def is_snapshot(version: Optional[str]) -> bool:
    return is_unique_snapshot(version) or is_generic_snapshot(version)


def get_base_version(version: str) -> str:
    """Map ``1.0-20070821.213044-8`` to ``1.0-SNAPSHOT``; anything else is returned as is."""
    match = UNIQUE_SNAPSHOT_PATTERN.match(version)
    if match:
        return f"{match.group(1)}-{SNAPSHOT}"
    return version


def split_unique_snapshot(version: str) -> Optional[Tuple[str, str, int]]:
    """Return ``(base, timestamp, build_number)`` for a timestamped snapshot build."""
    match = UNIQUE_SNAPSHOT_PATTERN.match(version)
    if not match:
        return None
    return match.group(1), match.group(2), int(match.group(3))


def is_version_token(token: str) -> bool:
    """Heuristic used to find where the version starts inside a legacy filename."""
    return bool(token) and VERSION_TOKEN_PATTERN.fullmatch(token) is not None


def to_parts(version: Optional[str]) -> List[str]:
    """Split a version into alternating digit and letter runs; anything else separates."""
    parts: List[str] = []
    if not version or not version.strip():
        return parts
    mode = None
    start = 0
    for index, char in enumerate(version):
        if char.isdigit():
            kind = "digit"
        elif char.isalpha():
            kind = "text"
        else:
            kind = None
        if kind != mode:
            if mode is not None:
                parts.append(version[start:index])
            mode = kind
            start = index
    if mode is not None:
        parts.append(version[start:])
    return parts


def _compare_part(left: str, right: str) -> int:
    left_num = left.isdigit()
    right_num = right.isdigit()
    if left_num and right_num:
        return (int(left) > int(right)) - (int(left) < int(right))
    if not left_num and not right_num:
        left_word = left.lower()
        right_word = right.lower()
        if left_word in SPECIAL_WORDS and right_word in SPECIAL_WORDS:
            return SPECIAL_WORDS.index(left_word) - SPECIAL_WORDS.index(right_word)
    if not left_num and right_num:
        return -1
    if left_num and not right_num:
        return 1
    return _compare_text(left, right)


def _compare_text(left: str, right: str) -> int:
    left = left.lower()
    right = right.lower()
    return (left > right) - (left < right)


def compare_versions(left: Optional[str], right: Optional[str]) -> int:
    """Maven-style ordering; ``None`` sorts after everything else."""
    if left is None and right is None:
        return 0
    if left is None:
        return 1
    if right is None:
        return -1
    left_parts = to_parts(left)
    right_parts = to_parts(right)
    for index in range(max(len(left_parts), len(right_parts))):
        left_part = left_parts[index] if index < len(left_parts) else "0"
        right_part = right_parts[index] if index < len(right_parts) else "0"
        diff = _compare_part(left_part, right_part)
        if diff != 0:
            return diff
    diff = len(right_parts) - len(left_parts)
    if diff != 0:
        return diff
    return _compare_text(left, right)


version_key = functools.cmp_to_key(compare_versions)


def sort_versions(versions: Iterable[str]) -> List[str]:
    """Deduplicate and sort ascending."""
    return sorted(set(versions), key=version_key)


def max_version(versions: Iterable[Optional[str]]) -> Optional[str]:
    candidates = [version for version in versions if version]
    if not candidates:
        return None
    return max(candidates, key=version_key)
