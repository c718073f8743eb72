"""
Pydantic models for the simulated device command API.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from utils.command_matcher import MatchType


class ApiEnvelope(BaseModel):
    """Wrapper used by every endpoint."""
    code: str = Field(..., description="SUCCESS or an error code such as MISSING_FIELDS")
    message: str = Field(..., description="Human-readable status message")
    data: Optional[Any] = Field(default=None, description="Payload, absent on errors")


class MatchSimDeviceCommand(BaseModel):
    """Request for POST /api/v1/sim-device-cmds/match."""
    namespace: str = Field(default="", description="Namespace of the simulated device")
    device_name: str = Field(default="", description="Simulated device name")
    command: str = Field(default="", description="Command as typed, may be abbreviated")
    enabled_only: bool = Field(default=False, description="Ignore disabled commands")


class MatchResponse(BaseModel):
    """Payload of a match: the match type and what the device prints."""
    match_type: MatchType = Field(..., description="exact, partial_single, partial_multi or none")
    output: str = Field(..., description="Canned output, disambiguation block or the unsupported text")
