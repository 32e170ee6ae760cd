"""
Mapping parser — instrumentation mapping text → {point id: InstrumentationPoint}.

Mapping file layout (``\\n``-separated, blank lines ignored)::

    FileNames:["a.js","b.js"]
    FunctionNames:["foo","bar"]
    Types:["FUNCTION","BRANCH"]
    <id>:<five base64 VLQ integers>
    ...

The five integers of a data line are, in order: file-name index,
function-name index, type index, line number, column number.  The three
indices address the header lists.

Any deviation from the layout raises ``MappingFormatError`` and no partial
table is returned.
"""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Sequence, TypeVar

from covreport.core.errors import MappingFormatError, MappingIndexError
from covreport.core.vlq import CharCursor, decode_vlq
from covreport.io.schema import InstrumentationPoint
from covreport.policy.point_type import PointType

logger = logging.getLogger(__name__)

T = TypeVar("T")

MappingTable = Dict[str, InstrumentationPoint]

FILE_NAMES_PREFIX = "FileNames:"
FUNCTION_NAMES_PREFIX = "FunctionNames:"
TYPES_PREFIX = "Types:"

_HEADER_PREFIXES = (FILE_NAMES_PREFIX, FUNCTION_NAMES_PREFIX, TYPES_PREFIX)


# ── Header parsing ───────────────────────────────────────────────────────────

def _parse_header(line: str, prefix: str) -> List[str]:
    """Return the JSON string list that follows *prefix* on *line*."""
    if not line.startswith(prefix):
        raise MappingFormatError(
            f"expected header line starting with {prefix!r}, got {line[:80]!r}"
        )

    payload = line[len(prefix):]
    try:
        values = json.loads(payload)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise MappingFormatError(
            f"{prefix} payload is not valid JSON: {exc}"
        ) from exc

    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise MappingFormatError(f"{prefix} payload must be a JSON array of strings")
    return values


def _parse_types(names: List[str]) -> List[PointType]:
    types: List[PointType] = []
    for name in names:
        try:
            types.append(PointType(name))
        except ValueError:
            raise MappingFormatError(
                f"unrecognized instrumentation point type {name!r}"
            ) from None
    return types


# ── Data lines ───────────────────────────────────────────────────────────────

def _lookup(values: Sequence[T], index: int, label: str) -> T:
    """Index into a header list, rejecting negative and past-the-end indices."""
    if index < 0 or index >= len(values):
        raise MappingIndexError(
            f"{label} index {index} out of range (size {len(values)})"
        )
    return values[index]


def _decode_point(
    encoded: str,
    file_names: List[str],
    function_names: List[str],
    types: List[PointType],
) -> InstrumentationPoint:
    cursor = CharCursor(encoded)

    file_name = _lookup(file_names, decode_vlq(cursor), "file name")
    function_name = _lookup(function_names, decode_vlq(cursor), "function name")
    kind = _lookup(types, decode_vlq(cursor), "type")
    line = decode_vlq(cursor)
    column = decode_vlq(cursor)

    if line < 0 or column < 0:
        raise MappingFormatError(
            f"negative position line={line} column={column} in {encoded!r}"
        )

    return InstrumentationPoint(
        file_name=file_name,
        function_name=function_name,
        kind=kind,
        line=line,
        column=column,
    )


# ── Public API ───────────────────────────────────────────────────────────────

def parse_mapping(mapping_text: str) -> MappingTable:
    """
    Parse instrumentation mapping text.

    Parameters
    ----------
    mapping_text : str
        Full content of the mapping file emitted at compile time.

    Returns
    -------
    MappingTable
        Insertion-ordered ``{point id: InstrumentationPoint}``.  When an id
        appears on several lines only the first line is kept.

    Raises
    ------
    MappingFormatError
        Fewer than three lines, missing or misordered headers, bad JSON,
        unknown point type, VLQ decode failure, or an out-of-range index.
    """
    lines = [ln for ln in mapping_text.split("\n") if ln.strip()]

    if len(lines) < 3:
        raise MappingFormatError(
            f"mapping must contain at least 3 lines, got {len(lines)}"
        )

    file_names, function_names, type_names = (
        _parse_header(lines[i].strip(), prefix)
        for i, prefix in enumerate(_HEADER_PREFIXES)
    )
    types = _parse_types(type_names)

    mapping: MappingTable = {}
    duplicates = 0

    for lineno, raw in enumerate(lines[3:], start=4):
        item = raw.strip()
        sep = item.find(":")
        if sep < 0:
            raise MappingFormatError(
                f"data line {lineno} has no ':' separator: {item[:80]!r}"
            )
        point_id = item[:sep]
        point = _decode_point(item[sep + 1:], file_names, function_names, types)

        # First occurrence wins; the producer may re-emit an id.
        if point_id in mapping:
            duplicates += 1
            logger.debug("duplicate point id %r on line %d ignored", point_id, lineno)
            continue
        mapping[point_id] = point

    logger.debug(
        "parsed mapping: %d points, %d files, %d functions, %d duplicates",
        len(mapping), len(file_names), len(function_names), duplicates,
    )
    return mapping
