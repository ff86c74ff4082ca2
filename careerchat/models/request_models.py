"""Request models for the Career Chat API."""

from typing import Optional

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    """A chat message to inspect for inline commands."""

    message: str = Field(
        ...,
        description="Raw chat message text",
        examples=["/community\nPython Devs:Discord:https://discord.gg/python"],
    )


class ChatRequest(BaseModel):
    """One user turn in a chat."""

    chat_id: str = Field(..., description="Chat identifier", examples=["c0ffee"])
    chat_name: str = Field(default="New chat", description="Chat title")
    message: str = Field(
        ...,
        min_length=1,
        description="The user's message; may start with /job, /community or /jobportals",
        examples=["/job data scientist in Bangalore"],
    )
    context: str = Field(default="", description="Conversation summary from the previous turn")


class JobSearchRequest(BaseModel):
    """Search current job listings."""

    job_title: str = Field(..., min_length=1, examples=["software engineer"])
    location: Optional[str] = Field(default=None, examples=["Bangalore"])
    page: int = Field(default=1, ge=1)
    num_pages: int = Field(default=1, ge=1, le=10)
    country: Optional[str] = None
    date_posted: str = Field(default="all", examples=["all", "week"])


class CommunitySearchRequest(BaseModel):
    """Search Reddit communities for a topic."""

    query: str = Field(..., examples=["machine learning"])
