"""
Loader — read covreport inputs from disk.

  - mapping file        text, parsed by ``parse_mapping``
  - frequency report    JSON object {point id: count}
  - compiled binary     JS text scanned for presence
  - profile             JSON written by the writer (DecodedReport) or a
                        bare ReportProfile
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

from covreport.core.mapping_parser import MappingTable, parse_mapping
from covreport.io.schema import DecodedReport, ReportProfile

logger = logging.getLogger(__name__)


def parse_mapping_file(mapping_path: Path) -> MappingTable:
    """Read and parse a mapping file."""
    mapping = parse_mapping(mapping_path.read_text(encoding="utf-8"))
    logger.info("loaded %d instrumentation points from %s", len(mapping), mapping_path)
    return mapping


def load_frequencies(report_path: Path) -> Dict[str, int]:
    """
    Load a runtime frequency report.

    Raises ValueError if the document is not an object of non-negative
    integer counts.
    """
    data = json.loads(report_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{report_path}: frequency report must be a JSON object")

    frequencies: Dict[str, int] = {}
    for point_id, count in data.items():
        # bool is an int subclass; true/false are not counts
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(
                f"{report_path}: count for {point_id!r} must be a non-negative "
                f"integer, got {count!r}"
            )
        frequencies[point_id] = count

    logger.info("loaded %d frequencies from %s", len(frequencies), report_path)
    return frequencies


def load_program_text(binary_path: Path) -> str:
    """Read a compiled JS binary; undecodable bytes are replaced."""
    return binary_path.read_text(encoding="utf-8", errors="replace")


def load_profile(profile_path: Path) -> ReportProfile:
    """Load a profile from a DecodedReport or bare ReportProfile JSON."""
    data = json.loads(profile_path.read_text(encoding="utf-8"))
    if isinstance(data, dict) and "profile" in data:
        return DecodedReport.model_validate(data).profile
    return ReportProfile.model_validate(data)
