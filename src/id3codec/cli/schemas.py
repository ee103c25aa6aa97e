"""Pydantic schemas for JSON output.

Every ``--json`` response is one of these models, so scripts get the same
structure (and validated field types) whatever the command.
"""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response for all commands.

    Attributes:
        status: Always "error" for error responses
        error: Machine-readable error code (e.g., "invalid_input", "no_header_found")
        message: Human-readable error message
    """

    status: Literal["error"] = "error"
    error: str = Field(
        description="Machine-readable error code",
        examples=["invalid_input", "no_header_found", "truncated_frame", "write_failed"],
    )
    message: str = Field(description="Human-readable error description")


class FrameInfo(BaseModel):
    id: str = Field(description="Four-character frame identifier")
    description: str = Field(description="Human-readable frame name")
    size: int = Field(ge=10, description="Encoded size including the frame header")
    flags: str = Field(description="The two flag bytes as hex")
    encoding: Optional[int] = Field(default=None, ge=0, le=3, description="Text encoding indicator")
    text: Optional[List[str]] = Field(default=None, description="Text values for text frames")


class InspectSuccessResponse(BaseModel):
    """Response for a successfully parsed tag.

    Attributes:
        status: Always "success"
        file: Path to the inspected file
        version: Tag version, e.g. "2.4.0"
        flags: Header flag byte
        size: Total tag size on disk, header included
        extended_header: Size of the extended header block, if any
        padding: Bytes of padding after the last frame
        frames: One entry per frame, in tag order
    """

    status: Literal["success"] = "success"
    file: str = Field(description="Path to the inspected file")
    version: str = Field(description="Tag version")
    flags: int = Field(ge=0, le=255, description="Header flag byte")
    size: int = Field(ge=10, description="Total tag size in bytes")
    extended_header: Optional[int] = Field(default=None, ge=0, description="Extended header size")
    padding: int = Field(ge=0, description="Padding bytes")
    frames: List[FrameInfo] = Field(description="Frames in the tag")


class WriteSuccessResponse(BaseModel):
    status: Literal["success"] = "success"
    source: str = Field(description="Path to source file")
    destination: str = Field(description="Path to written file")
    tag_size: int = Field(ge=0, description="Size of the written tag (0 if stripped)")
    frames: int = Field(ge=0, description="Number of frames written")


InspectResponse = InspectSuccessResponse | ErrorResponse
WriteResponse = WriteSuccessResponse | ErrorResponse
