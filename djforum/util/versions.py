"""Utilities for comparing dotted version strings."""

from __future__ import annotations

import re
from itertools import zip_longest
from typing import List

from typing_extensions import TypeAlias


_LEADING_DIGITS_RE = re.compile(r'^\s*(\d+)')


#: The numeric segments of a parsed version.
VersionSegments: TypeAlias = List[int]


def parse_version(version: str) -> VersionSegments:
    """Split a dotted version string into numeric segments.

    Each segment's leading digits give its value. Segments without any
    (such as ``'x'``) count as 0, so ``'1.2rc1'`` parses as ``[1, 2]``.

    Args:
        version (str):
            The version string, such as ``'1.4.2'``.

    Returns:
        list of int:
        The numeric segments.
    """
    segments = []

    for segment in (version or '').split('.'):
        m = _LEADING_DIGITS_RE.match(segment)
        segments.append(int(m.group(1)) if m else 0)

    return segments


def compare_versions(a: str, b: str) -> int:
    """Compare two dotted version strings.

    Segments are compared numerically from left to right, and the first
    unequal pair decides. The shorter version is padded with zeros, so
    ``'1.2'`` and ``'1.2.0'`` are equal.

    Args:
        a (str):
            The first version.

        b (str):
            The second version.

    Returns:
        int:
        A negative number if ``a`` is older than ``b``, 0 if they're equal,
        or a positive number if ``a`` is newer.
    """
    for seg_a, seg_b in zip_longest(parse_version(a), parse_version(b),
                                    fillvalue=0):
        if seg_a != seg_b:
            return -1 if seg_a < seg_b else 1

    return 0
