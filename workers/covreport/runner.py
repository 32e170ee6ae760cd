"""
Runner — top-level orchestration: mapping + observations → profile JSON.

Ties loader, core decoding and writer together.  The ``build_*`` functions
work on in-memory text and are shared with the API router; the ``run_*``
functions take paths and are what the CLI calls.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from covreport.core.assembler import decode_report, profile_from_presence, summarize
from covreport.core.errors import MappingFormatError
from covreport.core.mapping_parser import MappingTable
from covreport.core.merger import merge_profiles
from covreport.core.presence import scan_presence
from covreport.io.loader import (
    load_frequencies,
    load_profile,
    load_program_text,
    parse_mapping_file,
)
from covreport.io.schema import DecodedReport, ReportProfile
from covreport.io.writer import write_report
from covreport.policy.profile import DecoderProfile

logger = logging.getLogger(__name__)


# ── In-memory API ────────────────────────────────────────────────────────────

def _wrap(profile: DecoderProfile, mode: str, report: ReportProfile) -> DecodedReport:
    return DecodedReport(
        profile_id=profile.profile_id,
        mode=mode,
        summary=summarize(report),
        profile=report,
    )


def build_frequency_report(
    mapping: MappingTable,
    frequencies: Mapping[str, int],
    profile: DecoderProfile | None = None,
) -> DecodedReport:
    """Decode runtime frequencies against a parsed mapping."""
    profile = profile or DecoderProfile.v0()
    return _wrap(profile, "frequency", decode_report(mapping, frequencies))


def build_presence_report(
    mapping: MappingTable,
    program_text: str,
    profile: DecoderProfile | None = None,
) -> DecodedReport:
    """Mark each mapped point present (1) or eliminated (0) in *program_text*."""
    profile = profile or DecoderProfile.v0()
    present = scan_presence(program_text, profile.array_name)
    return _wrap(profile, "presence", profile_from_presence(mapping, present))


def build_merged_report(
    profiles: Iterable[ReportProfile],
    profile: DecoderProfile | None = None,
) -> DecodedReport:
    """Merge previously decoded profiles."""
    profile = profile or DecoderProfile.v0()
    return _wrap(profile, "merge", merge_profiles(profiles))


def _maybe_write(
    report: DecodedReport,
    profile: DecoderProfile,
    output_dir: Optional[Path],
) -> None:
    if output_dir:
        path = write_report(report, output_dir / profile.report_filename)
        logger.info("Wrote %s profile to %s", report.mode, path)


# ── Path-based API ───────────────────────────────────────────────────────────

def run_decode(
    mapping_path: Path,
    report_path: Path,
    profile: DecoderProfile | None = None,
    output_dir: Path | None = None,
) -> DecodedReport:
    """
    Decode a runtime frequency report file.

    Parameters
    ----------
    mapping_path : Path
        Mapping file written by the compiler.
    report_path : Path
        JSON object of {point id: times executed}.
    profile : DecoderProfile, optional
        Defaults to DecoderProfile.v0().
    output_dir : Path, optional
        Directory to write the profile JSON into.  Nothing is written
        when omitted.
    """
    profile = profile or DecoderProfile.v0()
    mapping = parse_mapping_file(mapping_path)
    frequencies = load_frequencies(report_path)

    report = build_frequency_report(mapping, frequencies, profile)
    _maybe_write(report, profile, output_dir)
    return report


def run_static(
    mapping_path: Path,
    binary_path: Path,
    profile: DecoderProfile | None = None,
    output_dir: Path | None = None,
) -> DecodedReport:
    """Build a statically-used-code profile from a compiled binary."""
    profile = profile or DecoderProfile.v0()
    mapping = parse_mapping_file(mapping_path)
    program_text = load_program_text(binary_path)

    report = build_presence_report(mapping, program_text, profile)
    _maybe_write(report, profile, output_dir)
    return report


def run_merge(
    profile_paths: List[Path],
    profile: DecoderProfile | None = None,
    output_dir: Path | None = None,
) -> DecodedReport:
    """Merge profile JSON files produced by earlier runs."""
    profile = profile or DecoderProfile.v0()
    profiles = []
    for path in profile_paths:
        logger.info("Loading profile: %s", path)
        profiles.append(load_profile(path))

    report = build_merged_report(profiles, profile)
    _maybe_write(report, profile, output_dir)
    return report


# ── CLI ──────────────────────────────────────────────────────────────────────

def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="covreport — decode coverage reports from instrumented JS binaries",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="Decode a runtime frequency report")
    decode.add_argument("mapping", type=Path, help="Instrumentation mapping file")
    decode.add_argument("report", type=Path, help="JSON frequency report")

    static = sub.add_parser("static", help="Profile code present in a compiled binary")
    static.add_argument("mapping", type=Path, help="Instrumentation mapping file")
    static.add_argument("binary", type=Path, help="Compiled JS binary")
    static.add_argument(
        "--array-name",
        default=None,
        help="Instrumentation array name (default: %s)" % DecoderProfile.v0().array_name,
    )

    merge = sub.add_parser("merge", help="Merge decoded profiles")
    merge.add_argument("profiles", nargs="+", type=Path, help="Profile JSON files")

    for p in (decode, static, merge):
        p.add_argument(
            "-o", "--output-dir",
            type=Path,
            default=None,
            help="Directory to write the profile JSON",
        )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for covreport."""
    args = _build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "merge":
        inputs = list(args.profiles)
    elif args.command == "decode":
        inputs = [args.mapping, args.report]
    else:
        inputs = [args.mapping, args.binary]

    for p in inputs:
        if not p.exists():
            logger.error("File not found: %s", p)
            return 1

    profile = DecoderProfile.v0()
    try:
        if args.command == "decode":
            report = run_decode(args.mapping, args.report, profile, args.output_dir)
        elif args.command == "static":
            if args.array_name:
                profile = DecoderProfile(array_name=args.array_name)
            report = run_static(args.mapping, args.binary, profile, args.output_dir)
        else:
            report = run_merge(inputs, profile, args.output_dir)
    except MappingFormatError as e:
        logger.error("Malformed mapping: %s", e)
        return 1
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 1

    s = report.summary
    print(f"Files: {s.file_count}  "
          f"Points: {s.total_points} (covered={s.covered_points})  "
          f"Executions: {s.total_executions}")

    if args.output_dir:
        print(f"Output written to: {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
