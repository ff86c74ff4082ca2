"""Chat router: /api/v1 endpoints for the Career Chat service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from careerchat.agents.chat_loop import (
    create_job_search_tool,
    get_community_search_tool,
    process_chat,
)
from careerchat.models.request_models import (
    ChatRequest,
    CommunitySearchRequest,
    JobSearchRequest,
    RenderRequest,
)
from careerchat.models.response_models import (
    ChatReply,
    CommandInfo,
    HealthResponse,
    RenderResponse,
    SearchResult,
)
from careerchat.tools.command_render_tool import CommandRenderTool
from careerchat.tools.community_search_tool import CommunitySearchError
from careerchat.tools.job_search_tool import JobSearchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["career-chat"])

# ── Commands users can type ───────────────────────────────────────────────────

COMMANDS: list[CommandInfo] = [
    CommandInfo(
        command="/job",
        description="Search for jobs",
        icon="work",
        examples=["software engineer", "data scientist in Bangalore", "project manager"],
    ),
    CommandInfo(
        command="/community",
        description="Find communities for a topic",
        icon="groups",
        examples=["python", "machine learning", "women in tech"],
    ),
    CommandInfo(
        command="/jobportals",
        description="Show popular job portals",
        icon="school",
        examples=[],
    ),
]


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.post("/render", response_model=RenderResponse)
async def render_message(req: RenderRequest) -> RenderResponse:
    """Return the cards a chat message renders, if any."""
    rendered = CommandRenderTool().render(req.message)
    return RenderResponse(render=rendered.render, hints=rendered.hints)


@router.get("/commands", response_model=list[CommandInfo])
async def list_commands() -> list[CommandInfo]:
    """Commands users can type, with examples."""
    return COMMANDS


@router.post("/chat", response_model=ChatReply)
async def chat(req: ChatRequest) -> ChatReply:
    """Run one chat turn and return the reply with its rendered cards."""
    logger.info("Incoming chat message for %s", req.chat_id)
    return await process_chat(
        chat_id=req.chat_id,
        chat_name=req.chat_name,
        message=req.message,
        context=req.context,
    )


@router.post("/jobs/search", response_model=SearchResult)
async def search_jobs(req: JobSearchRequest) -> SearchResult:
    """Search jobs and return them as a /jobdata message."""
    tool = create_job_search_tool()
    try:
        message = await tool._arun(**req.model_dump())
    except JobSearchError as exc:
        logger.exception("Job search failed")
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    rendered = CommandRenderTool().render(message)
    return SearchResult(message=message, render=rendered.render, hints=rendered.hints)


@router.post("/communities/search", response_model=SearchResult)
async def search_communities(req: CommunitySearchRequest) -> SearchResult:
    """Search Reddit communities and return them as a /community message."""
    if not req.query.strip():
        raise HTTPException(status_code=422, detail="Search query must be a non-empty string")

    try:
        message = await get_community_search_tool()._arun(query=req.query)
    except CommunitySearchError as exc:
        logger.exception("Community search failed")
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    rendered = CommandRenderTool().render(message)
    return SearchResult(message=message, render=rendered.render, hints=rendered.hints)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple liveness probe."""
    return HealthResponse()
