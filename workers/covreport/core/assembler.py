"""
Profile assembler — mapping table + observations → ReportProfile.

Two entry points feed the same grouping step:

  - ``decode_report``          runtime frequencies ({point id: count})
  - ``profile_from_presence``  ids found in the compiled binary (count 0/1)

``build_report_profile`` is the shared final step and is also used by the
merger.  It groups stats by file, sorts each group by line (stable, so
equal lines keep encounter order) and sorts files by name.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Set

from covreport.core.mapping_parser import MappingTable
from covreport.io.schema import (
    FileProfile,
    InstrumentationPointStats,
    ProfileSummary,
    ReportProfile,
)

logger = logging.getLogger(__name__)


# ── Shared grouping step ─────────────────────────────────────────────────────

def build_report_profile(
    stats: Iterable[InstrumentationPointStats],
) -> ReportProfile:
    """Group *stats* by file name and order them deterministically."""
    by_file: Dict[str, List[InstrumentationPointStats]] = {}
    for entry in stats:
        by_file.setdefault(entry.point.file_name, []).append(entry)

    files = [
        FileProfile(
            file_name=file_name,
            stats=sorted(entries, key=lambda s: s.point.line),
        )
        for file_name, entries in sorted(by_file.items())
    ]
    return ReportProfile(files=files)


# ── Frequency mode ───────────────────────────────────────────────────────────

def frequency_of(frequencies: Mapping[str, int], point_id: str) -> int:
    """Observed count for *point_id*; ids never reported count as 0."""
    if point_id in frequencies:
        return frequencies[point_id]
    return 0


def decode_report(
    mapping: MappingTable,
    frequencies: Mapping[str, int],
) -> ReportProfile:
    """
    Decode a runtime frequency report.

    Every point of *mapping* yields one stats entry.  Ids in *frequencies*
    that the mapping does not know are ignored.  Counts must be
    non-negative; a negative count fails model validation (ValueError).
    """
    unknown = sum(1 for pid in frequencies if pid not in mapping)
    if unknown:
        logger.debug("%d reported ids not present in mapping", unknown)

    return build_report_profile(
        InstrumentationPointStats(
            point=point,
            times_executed=frequency_of(frequencies, point_id),
        )
        for point_id, point in mapping.items()
    )


# ── Presence mode ────────────────────────────────────────────────────────────

def profile_from_presence(
    mapping: MappingTable,
    present_ids: Set[str],
) -> ReportProfile:
    """
    Build a profile of statically used code.

    A point counts 1 if its id survived compilation (found in the binary)
    and 0 if the compiler removed it as dead code.  Presence does not
    imply execution.
    """
    return build_report_profile(
        InstrumentationPointStats(
            point=point,
            times_executed=1 if point_id in present_ids else 0,
        )
        for point_id, point in mapping.items()
    )


# ── Summary ──────────────────────────────────────────────────────────────────

def summarize(profile: ReportProfile) -> ProfileSummary:
    summary = ProfileSummary(file_count=len(profile.files))
    for file_profile in profile.files:
        for entry in file_profile.stats:
            summary.total_points += 1
            summary.total_executions += entry.times_executed
            if entry.times_executed > 0:
                summary.covered_points += 1
    return summary
