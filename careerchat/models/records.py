"""Typed records decoded from command-annotated chat messages."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommandKind(str, Enum):
    """Inline commands recognised inside a chat message."""

    JOB_DATA = "jobdata"
    COMMUNITY = "community"
    COURSES = "courses"
    RESUME = "resume"
    JOB_PORTALS = "jobportals"

    @property
    def keyword(self) -> str:
        return f"/{self.value}"


class JobRecord(BaseModel):
    """A job listing embedded after ``/jobdata``.

    Field aliases match the JSearch payload produced by the job search tool,
    so ``model_validate`` accepts the raw JSON objects directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., min_length=1, alias="job_title")
    employer_name: str = Field(..., min_length=1, alias="employer_name")
    employer_logo_url: Optional[str] = Field(default=None, alias="employer_logo")
    apply_link: str = Field(..., min_length=1, alias="job_apply_link")
    employment_type: str = Field(default="", alias="job_employment_type")
    posted_at_utc: Optional[str] = Field(default=None, alias="job_posted_at_datetime_utc")

    @field_validator("employment_type", mode="before")
    @classmethod
    def _blank_employment_type(cls, value: object) -> object:
        # JSearch sends null when the listing has no employment type
        return "" if value is None else value


class LinkedEntityRecord(BaseModel):
    """Shared shape for communities, courses and job portals."""

    model_config = ConfigDict(frozen=True)

    name: str
    platform_or_category: str
    link: str
    description: Optional[str] = None


class ResumeRecord(BaseModel):
    """A hosted resume link and its cleaned-up display filename."""

    model_config = ConfigDict(frozen=True)

    url: str
    derived_filename: str


StructuredRecord = Union[JobRecord, LinkedEntityRecord, ResumeRecord]


class DisplayHint(BaseModel):
    """Icon and colour the card for one record should use."""

    icon_url: Optional[str] = None
    icon: str = "language"
    color: str = "#49654E"
    level: Optional[str] = None


class RenderDescriptor(BaseModel):
    """What the presentation layer should draw for a message."""

    model_config = ConfigDict(frozen=True)

    kind: CommandKind
    records: tuple[StructuredRecord, ...]
