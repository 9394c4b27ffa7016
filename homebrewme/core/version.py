"""Version string comparison between installed bundles and Homebrew casks."""

import re
from enum import Enum
from typing import List, Optional

UNKNOWN_VERSION = "unknown"


class VersionComparison(Enum):
    """Result of comparing a version against another."""
    NEWER = "newer"
    OLDER = "older"
    SAME = "same"
    UNKNOWN = "unknown"


def is_unknown(version: Optional[str]) -> bool:
    """Check if a version is missing or the unknown sentinel"""
    if version is None:
        return True
    version = str(version).strip()
    return not version or version.lower() == UNKNOWN_VERSION


def normalize_version(version: str) -> List[int]:
    """Normalize a dotted version string to a list of integers.

    Each dot-separated component keeps only its digits, so "2.3-beta"
    becomes [2, 3]. A component with no digits counts as 0.

    Args:
        version: Version string such as "1.2.3" or "10.4b"

    Returns:
        List of integers, one per component
    """
    components = []
    for part in str(version).strip().split('.'):
        digits = re.sub(r'\D', '', part)
        components.append(int(digits) if digits else 0)
    return components


def compare(a: Optional[str], b: Optional[str]) -> VersionComparison:
    """Compare version a against version b.

    Args:
        a: Version being classified (typically the installed one)
        b: Reference version (typically the catalog one)

    Returns:
        NEWER if a > b, OLDER if a < b, SAME if equal, UNKNOWN if either
        side is missing
    """
    if is_unknown(a) or is_unknown(b):
        return VersionComparison.UNKNOWN

    parts_a = normalize_version(a)
    parts_b = normalize_version(b)

    # Pad shorter list with zeros
    max_len = max(len(parts_a), len(parts_b))
    parts_a.extend([0] * (max_len - len(parts_a)))
    parts_b.extend([0] * (max_len - len(parts_b)))

    for x, y in zip(parts_a, parts_b):
        if x > y:
            return VersionComparison.NEWER
        if x < y:
            return VersionComparison.OLDER

    return VersionComparison.SAME
