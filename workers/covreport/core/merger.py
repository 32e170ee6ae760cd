"""
Profile merger — sum execution counts across profiles.

Points are compared by value (file, function, kind, line, column), so the
inputs must come from binaries compiled from the same sources.  Profiles
from different revisions still merge, they just produce disjoint entries.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable

from covreport.core.assembler import build_report_profile
from covreport.io.schema import (
    InstrumentationPoint,
    InstrumentationPointStats,
    ReportProfile,
)

logger = logging.getLogger(__name__)


def merge_profiles(profiles: Iterable[ReportProfile]) -> ReportProfile:
    """Merge *profiles* into one, adding counts of identical points."""
    totals: Dict[InstrumentationPoint, int] = {}
    n_profiles = 0

    for profile in profiles:
        n_profiles += 1
        for file_profile in profile.files:
            for entry in file_profile.stats:
                totals[entry.point] = totals.get(entry.point, 0) + entry.times_executed

    logger.debug("merged %d profiles into %d points", n_profiles, len(totals))

    return build_report_profile(
        InstrumentationPointStats(point=point, times_executed=count)
        for point, count in totals.items()
    )
