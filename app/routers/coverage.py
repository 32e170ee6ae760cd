"""
Coverage Router
Decodes coverage reports sent by instrumented JS binaries.

Runs the covreport package over request payloads: a mapping file's text
plus either runtime frequencies or the compiled binary, or a list of
already decoded profiles to merge.

See workers/covreport/LOCK.md for the v0 scope contract.
"""
import logging
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, StrictInt

from app.config import settings
from covreport.core.errors import MappingFormatError
from covreport.core.mapping_parser import MappingTable, parse_mapping
from covreport.io.schema import DecodedReport, ReportProfile
from covreport.policy.profile import DecoderProfile
from covreport.runner import (
    build_frequency_report,
    build_merged_report,
    build_presence_report,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Request Models
# =============================================================================

class DecodeRequest(BaseModel):
    """Request to decode a runtime frequency report."""
    mapping: str = Field(..., description="Instrumentation mapping file content")
    frequencies: Dict[str, Annotated[StrictInt, Field(ge=0)]] = Field(
        default_factory=dict,
        description="Times executed per point id",
    )


class StaticRequest(BaseModel):
    """Request to profile the code present in a compiled binary."""
    mapping: str = Field(..., description="Instrumentation mapping file content")
    program: str = Field(..., description="Compiled JS binary content")
    array_name: Optional[str] = Field(
        None,
        description="Instrumentation array name (default from settings)",
    )


class MergeRequest(BaseModel):
    """Request to merge decoded profiles."""
    profiles: List[ReportProfile] = Field(default_factory=list)


# =============================================================================
# Helpers
# =============================================================================

def _parse(mapping_text: str) -> MappingTable:
    try:
        return parse_mapping(mapping_text)
    except MappingFormatError as e:
        logger.error("Malformed mapping: %s", e)
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )


def _profile(array_name: Optional[str] = None) -> DecoderProfile:
    return DecoderProfile(array_name=array_name or settings.DEFAULT_ARRAY_NAME)


# =============================================================================
# Router
# =============================================================================

router = APIRouter()


@router.post(
    "/decode",
    response_model=DecodedReport,
    status_code=status.HTTP_200_OK,
    summary="Decode runtime frequencies against a mapping",
)
async def decode_endpoint(request: DecodeRequest):
    """
    Parse the mapping and attach the reported execution counts to every
    instrumentation point.  Points missing from ``frequencies`` count 0.
    """
    mapping = _parse(request.mapping)
    report = build_frequency_report(mapping, request.frequencies, _profile())
    logger.info(
        "decoded %d points (%d covered)",
        report.summary.total_points, report.summary.covered_points,
    )
    return report


@router.post(
    "/static",
    response_model=DecodedReport,
    status_code=status.HTTP_200_OK,
    summary="Profile statically used code in a compiled binary",
)
async def static_endpoint(request: StaticRequest):
    """
    Mark each point 1 if its id is pushed to the instrumentation array in
    the compiled program, 0 if the compiler removed it.
    """
    mapping = _parse(request.mapping)
    return build_presence_report(
        mapping, request.program, _profile(request.array_name),
    )


@router.post(
    "/merge",
    response_model=DecodedReport,
    status_code=status.HTTP_200_OK,
    summary="Merge decoded profiles",
)
async def merge_endpoint(request: MergeRequest):
    """
    Sum execution counts of identical points across ``profiles``.  Inputs
    should come from binaries built from the same sources.
    """
    return build_merged_report(request.profiles, _profile())
