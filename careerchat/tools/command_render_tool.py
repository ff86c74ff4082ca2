"""Command Render Tool.

Inspects a chat message for an inline command (``/jobdata``, ``/community``,
``/courses``, ``/resume``, ``/jobportals``) and returns the structured records
the presentation layer turns into cards.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from careerchat.commands.links import display_hints
from careerchat.commands.registry import CommandRegistry, default_registry
from careerchat.models.records import DisplayHint, RenderDescriptor

logger = logging.getLogger(__name__)


class CommandRenderInput(BaseModel):
    """Input schema for the Command Render tool."""

    message: str = Field(..., description="Raw chat message, from the user or the assistant")


class CommandRenderOutput(BaseModel):
    """Output schema for the Command Render tool."""

    render: Optional[RenderDescriptor] = Field(
        default=None, description="Kind and records to draw, or null when nothing renders",
    )
    hints: list[DisplayHint] = Field(default_factory=list, description="Per-record icons and colours")


class CommandRenderTool(BaseTool):
    """Turns command-annotated chat messages into render descriptors."""

    name: str = "command_renderer"
    description: str = (
        "Detects an inline slash-command in a chat message and extracts the job, "
        "community, course, resume or job-portal records it carries. "
        "Returns {render, hints}; render is null when there is nothing to show."
    )
    args_schema: Type[BaseModel] = CommandRenderInput

    registry: Optional[CommandRegistry] = None

    def _run(self, message: str) -> dict[str, Any]:
        """Synchronous render."""
        return self.render(message).model_dump(by_alias=True)

    async def _arun(self, message: str) -> dict[str, Any]:
        """Async wrapper; parsing is CPU-only."""
        return self._run(message)

    # ── Core logic ────────────────────────────────────────────────────────

    def render(self, message: str) -> CommandRenderOutput:
        registry = self.registry or default_registry()
        descriptor = registry.renderable_for(message)
        if descriptor is None:
            return CommandRenderOutput()
        logger.info("Rendering %d %s record(s)", len(descriptor.records), descriptor.kind.value)
        return CommandRenderOutput(render=descriptor, hints=display_hints(descriptor))
