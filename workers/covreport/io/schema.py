"""
Schema — Pydantic models for decoded coverage profiles.

Model hierarchy mirrors the report proto consumed downstream:

    ReportProfile
      └── FileProfile (one per source file, sorted by file_name)
            └── InstrumentationPointStats (sorted by line)
                  └── InstrumentationPoint

``DecodedReport`` wraps a profile with the runtime contract fields
(package_name, decoder_version, schema_version, profile_id) that every
JSON output carries.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from covreport import DECODER_VERSION, PACKAGE_NAME, SCHEMA_VERSION
from covreport.policy.point_type import PointType


# ── Instrumentation point ────────────────────────────────────────────────────

class InstrumentationPoint(BaseModel):
    """
    One place the compiler instrumented.

    Frozen so that it hashes by value: two points with identical fields
    are the same point, which is what the merger keys on.
    """
    model_config = ConfigDict(frozen=True)

    file_name: str
    function_name: str
    kind: PointType
    line: int = Field(ge=0)
    column: int = Field(ge=0)


class InstrumentationPointStats(BaseModel):
    """Execution count for a single point."""
    point: InstrumentationPoint
    times_executed: int = Field(ge=0)


# ── Profiles ─────────────────────────────────────────────────────────────────

class FileProfile(BaseModel):
    """All point stats belonging to one source file."""
    file_name: str
    stats: List[InstrumentationPointStats] = Field(default_factory=list)


class ReportProfile(BaseModel):
    """Coverage profile grouped by file."""
    files: List[FileProfile] = Field(default_factory=list)


# ── Summary ──────────────────────────────────────────────────────────────────

class ProfileSummary(BaseModel):
    file_count: int = 0
    total_points: int = 0
    covered_points: int = 0       # times_executed > 0
    total_executions: int = 0


# ── Top-level output ─────────────────────────────────────────────────────────

class DecodedReport(BaseModel):
    """
    coverage_profile.json — a decoded or merged profile plus provenance.
    """
    package_name: str = PACKAGE_NAME
    decoder_version: str = DECODER_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str
    mode: str                # frequency | presence | merge
    summary: ProfileSummary = ProfileSummary()
    profile: ReportProfile = ReportProfile()
