"""Community Search Tool.

Finds subreddits for a topic through the Reddit API (OAuth2 client
credentials) and formats them as a ``/community`` chat message.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Type

import httpx
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field, PrivateAttr

logger = logging.getLogger(__name__)

REDDIT_TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
REDDIT_SEARCH_URL = "https://oauth.reddit.com/subreddits/search"
REDDIT_SUBREDDIT_URL = "https://www.reddit.com/r/{name}"

# Refresh the token this many seconds before Reddit says it expires
TOKEN_EXPIRY_MARGIN = 300


class CommunitySearchError(Exception):
    """Reddit authentication or search failed."""

    def __init__(self, message: str, status: int = 502) -> None:
        super().__init__(message)
        self.status = status


class RedditCommunity(BaseModel):
    """A subreddit returned by the search."""

    id: str
    title: str
    display_name: str
    description: str = ""
    subscribers: int = 0
    icon_img: str = ""

    @property
    def link(self) -> str:
        return REDDIT_SUBREDDIT_URL.format(name=self.display_name)


class CommunitySearchInput(BaseModel):
    """Input schema for the Community Search tool."""

    query: str = Field(..., description="Topic to find communities for")


def format_community_message(communities: list[RedditCommunity]) -> str:
    """Build a ``/community`` block, one ``name:platform:link`` line per entry."""
    lines = ["/community"]
    for community in communities:
        # Colons separate fields and line breaks separate entries
        name = community.title.replace(":", " ").replace("\r", " ").replace("\n", " ").strip()
        name = name or community.display_name
        lines.append(f"{name}:Reddit:{community.link}")
    return "\n".join(lines)


class CommunitySearchTool(BaseTool):
    """Searches Reddit communities and returns a ``/community`` message."""

    name: str = "community_search"
    description: str = (
        "Finds Reddit communities (subreddits) related to a topic. "
        "Returns a /community message with one name:platform:link line per community."
    )
    args_schema: Type[BaseModel] = CommunitySearchInput

    # Injected from settings
    client_id: str = ""
    client_secret: str = ""
    user_agent: str = "CareerChat/1.0"
    limit: int = 25
    timeout: float = 15.0
    transport: Optional[httpx.AsyncBaseTransport] = None

    _token: Optional[str] = PrivateAttr(default=None)
    _token_expiry: float = PrivateAttr(default=0.0)

    def _run(self, query: str) -> str:
        """Synchronous search on a private event loop."""
        import asyncio

        return asyncio.run(self._arun(query))

    async def _arun(self, query: str) -> str:
        """Async search, returning the formatted ``/community`` message."""
        communities = await self.search(query)
        return format_community_message(communities)

    # ── HTTP ──────────────────────────────────────────────────────────────

    async def search(self, query: str) -> list[RedditCommunity]:
        if not query or not query.strip():
            raise ValueError("Search query must be a non-empty string")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            token = await self._authenticate(client)
            try:
                resp = await client.get(
                    REDDIT_SEARCH_URL,
                    params={
                        "q": query.strip(),
                        "type": "sr",
                        "sort": "relevance",
                        "limit": self.limit,
                    },
                    headers={"Authorization": f"Bearer {token}", "User-Agent": self.user_agent},
                )
            except httpx.HTTPError as exc:
                raise CommunitySearchError(f"Failed to search Reddit communities: {exc}") from exc

        if resp.is_error:
            raise CommunitySearchError(
                f"Reddit API request failed: {resp.status_code} {resp.reason_phrase}",
                status=resp.status_code,
            )

        children = resp.json().get("data", {}).get("children", [])
        communities = [_to_community(child.get("data", {})) for child in children]
        logger.info("Reddit returned %d communities for %r", len(communities), query)
        return communities

    async def _authenticate(self, client: httpx.AsyncClient) -> str:
        """Return a cached access token or fetch a new one."""
        if self._token and time.time() < self._token_expiry - TOKEN_EXPIRY_MARGIN:
            return self._token

        if not self.client_id or not self.client_secret:
            raise CommunitySearchError("Reddit credentials are not configured", status=503)

        try:
            resp = await client.post(
                REDDIT_TOKEN_URL,
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
                headers={"User-Agent": self.user_agent},
            )
        except httpx.HTTPError as exc:
            raise CommunitySearchError(f"Failed to authenticate with Reddit API: {exc}") from exc

        if resp.is_error:
            raise CommunitySearchError(
                f"Reddit authentication failed: {resp.status_code} {resp.reason_phrase}",
                status=resp.status_code,
            )

        payload = resp.json()
        if not payload.get("access_token"):
            raise CommunitySearchError("Reddit authentication returned no access token")
        self._token = payload["access_token"]
        self._token_expiry = time.time() + float(payload.get("expires_in", 0))
        logger.debug("Reddit token refreshed, expires in %ss", payload.get("expires_in"))
        return self._token

    def clear_auth_cache(self) -> None:
        self._token = None
        self._token_expiry = 0.0


def _to_community(data: dict[str, Any]) -> RedditCommunity:
    return RedditCommunity(
        id=data.get("id", ""),
        title=data.get("title") or data.get("display_name", ""),
        display_name=data.get("display_name", ""),
        description=data.get("public_description") or "",
        subscribers=data.get("subscribers") or 0,
        icon_img=data.get("icon_img") or "",
    )
