"""
Point-type vocabulary for instrumentation mappings.

The ``Types:`` header of a mapping file lists the kinds of points the
instrumentation pass emitted.  The set is closed: a tag outside this enum
makes the mapping malformed.
"""
from __future__ import annotations

from enum import Enum


class PointType(str, Enum):
    """Syntactic kind of an instrumentation point."""

    FUNCTION = "FUNCTION"
    BRANCH = "BRANCH"
    BRANCH_DEFAULT = "BRANCH_DEFAULT"
