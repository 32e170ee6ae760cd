"""
Profile — frozen configuration for covreport.

Holds the knobs that callers may vary without touching core logic: the
name of the array the production instrumentation pushes point ids into,
and where the runner writes its output.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecoderProfile:
    """Immutable decoder configuration."""

    profile_id: str = "covreport-v0"

    # Name passed to the compiler as --production_instrumentation_array_name
    array_name: str = "ist_arr"

    # File name used when the runner is given an output directory
    report_filename: str = "coverage_profile.json"

    @classmethod
    def v0(cls) -> DecoderProfile:
        """Return the canonical v0 profile (all defaults)."""
        return cls()
