"""
Writer — serialize covreport outputs to JSON.

Filesystem layout:
    <output_dir>/coverage_profile.json   (or an explicit file path)
"""
import json
from pathlib import Path

from covreport.io.schema import DecodedReport


def write_report(report: DecodedReport, output_path: Path) -> Path:
    """
    Write *report* as JSON to *output_path*.

    Creates parent directories if they do not exist.
    Returns the written path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(
        json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )

    return output_path
