"""Chat loop: handles one user turn.

Flow:
1. ``/job <title> [in <location>]`` → Job Search Tool → ``/jobdata`` reply
2. ``/community <topic>``           → Community Search Tool → ``/community`` reply
3. ``/jobportals``                  → bare ``/jobportals`` reply (static catalog)
4. anything else                    → Chat Agent
5. Every reply goes through the Command Render Tool so the caller gets the
   cards to draw alongside the text.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from careerchat.agents.chat_agent import ChatAgent
from careerchat.config import get_settings
from careerchat.models.records import CommandKind
from careerchat.models.response_models import ChatReply
from careerchat.tools.command_render_tool import CommandRenderTool
from careerchat.tools.community_search_tool import CommunitySearchError, CommunitySearchTool
from careerchat.tools.job_search_tool import JobSearchError, JobSearchTool

logger = logging.getLogger(__name__)

AGENT_FAILURE_REPLY = (
    "Sorry, I encountered an error while processing your message. Please try again."
)

JOB_COMMAND = re.compile(r"^/job\s+(?P<title>.+?)(?:\s+in\s+(?P<location>.+))?$", re.IGNORECASE)
COMMUNITY_COMMAND = re.compile(r"^/community\s+(?P<query>.+)$", re.IGNORECASE)
PORTALS_COMMAND = re.compile(r"^/jobportals\b", re.IGNORECASE)


def create_job_search_tool() -> JobSearchTool:
    settings = get_settings()
    return JobSearchTool(
        api_key=settings.jsearch_api_key,
        api_host=settings.jsearch_host,
        base_url=settings.jsearch_base_url,
        default_country=settings.jsearch_country,
        logo_lookup_url=settings.logo_lookup_url,
        timeout=settings.http_timeout,
    )


_community_tool: Optional[CommunitySearchTool] = None


def get_community_search_tool() -> CommunitySearchTool:
    """Return the shared community tool so its Reddit token stays cached."""
    global _community_tool
    if _community_tool is None:
        settings = get_settings()
        _community_tool = CommunitySearchTool(
            client_id=settings.reddit_client_id,
            client_secret=settings.reddit_client_secret,
            user_agent=settings.reddit_user_agent,
            timeout=settings.http_timeout,
        )
    return _community_tool


async def process_chat(
    chat_id: str,
    chat_name: str,
    message: str,
    context: str = "",
) -> ChatReply:
    """Produce the assistant reply for *message* and the cards it renders."""
    text = message.strip()
    first_line = text.split("\n", 1)[0].strip()

    status = "ok"
    new_context = context

    try:
        job_match = JOB_COMMAND.match(first_line)
        community_match = COMMUNITY_COMMAND.match(first_line)
        if job_match:
            logger.info("Chat %s: job search for %r", chat_id, job_match.group("title"))
            response = await create_job_search_tool()._arun(
                job_title=job_match.group("title").strip(),
                location=(job_match.group("location") or "").strip() or None,
            )
        elif community_match:
            logger.info("Chat %s: community search for %r", chat_id, community_match.group("query"))
            response = await get_community_search_tool()._arun(query=community_match.group("query"))
        elif PORTALS_COMMAND.match(first_line):
            response = CommandKind.JOB_PORTALS.keyword
        else:
            response, new_context = await _ask_agent(chat_id, chat_name, text, context)
    except (JobSearchError, CommunitySearchError) as exc:
        logger.warning("Chat %s: search failed (%s): %s", chat_id, type(exc).__name__, exc)
        response = f"Search failed: {exc}"
        status = "error"

    rendered = CommandRenderTool().render(response)
    return ChatReply(
        response=response,
        context=new_context,
        status=status,
        render=rendered.render,
        hints=rendered.hints,
    )


async def _ask_agent(chat_id: str, chat_name: str, message: str, context: str) -> tuple[str, str]:
    try:
        output = await ChatAgent().reply(message, chat_id=chat_id, chat_name=chat_name, context=context)
    except Exception:
        logger.exception("Chat agent failed for chat %s", chat_id)
        return AGENT_FAILURE_REPLY, context
    return output["response"], output["context"]
