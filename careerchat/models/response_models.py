"""Response models for the Career Chat API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from careerchat.models.records import DisplayHint, RenderDescriptor


class RenderResponse(BaseModel):
    """Response returned by POST /api/v1/render."""

    render: Optional[RenderDescriptor] = Field(
        default=None, description="Kind and records to draw; null when nothing renders",
    )
    hints: list[DisplayHint] = Field(default_factory=list)


class ChatReply(BaseModel):
    """Response returned by POST /api/v1/chat."""

    response: str = Field(..., description="Assistant reply text, possibly command-annotated")
    context: str = Field(default="", description="Updated conversation summary")
    status: str = Field(
        default="ok",
        description="Processing status",
        examples=["ok", "error"],
    )
    render: Optional[RenderDescriptor] = None
    hints: list[DisplayHint] = Field(default_factory=list)


class SearchResult(BaseModel):
    """Response returned by the job and community search endpoints."""

    message: str = Field(..., description="Command-annotated chat message")
    render: Optional[RenderDescriptor] = None
    hints: list[DisplayHint] = Field(default_factory=list)


class CommandInfo(BaseModel):
    """A command users can type, with examples."""

    command: str
    description: str
    icon: str
    examples: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health-check response."""

    status: str = "ok"
    version: str = "1.0.0"
