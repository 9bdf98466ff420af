"""
Plugin version comparison.

Versions are dotted numbers such as ``1.2.10``. Missing parts count as
zero, so ``1.2`` equals ``1.2.0``. Text after a part's leading digits
(``0-beta``) is ignored.
"""
import re
from typing import List, Optional

_LEADING_DIGITS = re.compile(r"\d+")


def _parts(version: str) -> List[int]:
    parts = []
    for part in version.strip().lstrip("vV").split("."):
        match = _LEADING_DIGITS.match(part)
        parts.append(int(match.group()) if match else 0)
    return parts


def compare_versions(left: str, right: str) -> int:
    """
    Compare two versions part by part.

    Args:
        left: First version
        right: Second version

    Returns:
        1 if left is newer, -1 if right is newer, 0 if they are equal
    """
    a, b = _parts(left), _parts(right)
    width = max(len(a), len(b))
    a += [0] * (width - len(a))
    b += [0] * (width - len(b))
    return (a > b) - (a < b)


def is_newer(candidate: str, current: Optional[str]) -> bool:
    """True if candidate is newer than current. An unknown current version never is."""
    if not current:
        return False
    return compare_versions(candidate, current) > 0
