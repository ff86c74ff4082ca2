"""Job Search Tool.

Queries the JSearch aggregator (RapidAPI) and formats the listings as a
``/jobdata`` chat message the command renderer can turn into job cards.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Type

import httpx
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Keys kept from each JSearch listing; they are the aliases of JobRecord.
JOB_FIELDS: tuple[str, ...] = (
    "employer_logo",
    "job_title",
    "employer_name",
    "job_apply_link",
    "job_employment_type",
    "job_posted_at_datetime_utc",
)


class JobSearchError(Exception):
    """The job search API rejected the request or could not be reached."""

    def __init__(self, message: str, status: int = 500) -> None:
        super().__init__(message)
        self.status = status


class JobSearchInput(BaseModel):
    """Input schema for the Job Search tool."""

    job_title: str = Field(..., min_length=1, description="Role to search for")
    location: Optional[str] = Field(default=None, description="City or region")
    page: int = Field(default=1, ge=1)
    num_pages: int = Field(default=1, ge=1, le=10)
    country: Optional[str] = Field(default=None, description="ISO country code, defaults to settings")
    date_posted: str = Field(default="all", description="all | today | 3days | week | month")


def build_query(job_title: str, location: Optional[str] = None) -> str:
    if location:
        return f"{job_title} in {location}"
    return job_title


def clean_jobs(jobs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only the fields job cards display."""
    return [{key: job.get(key) for key in JOB_FIELDS} for job in jobs]


def format_job_message(jobs: list[dict[str, Any]]) -> str:
    return "/jobdata\n" + json.dumps(clean_jobs(jobs), indent=2, ensure_ascii=False)


class JobSearchTool(BaseTool):
    """Searches JSearch and returns a ``/jobdata`` message."""

    name: str = "job_search"
    description: str = (
        "Searches current job listings for a role and optional location. "
        "Returns a /jobdata message containing a JSON array of jobs."
    )
    args_schema: Type[BaseModel] = JobSearchInput

    # Injected from settings
    api_key: str = ""
    api_host: str = "jsearch.p.rapidapi.com"
    base_url: str = "https://jsearch.p.rapidapi.com"
    default_country: str = "in"
    logo_lookup_url: str = "https://autocomplete.clearbit.com/v1/companies/suggest"
    timeout: float = 15.0
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _run(self, **kwargs: Any) -> str:
        """Synchronous search on a private event loop."""
        import asyncio

        return asyncio.run(self._arun(**kwargs))

    async def _arun(
        self,
        job_title: str,
        location: Optional[str] = None,
        page: int = 1,
        num_pages: int = 1,
        country: Optional[str] = None,
        date_posted: str = "all",
    ) -> str:
        """Async search, returning the formatted ``/jobdata`` message."""
        jobs = await self.search(
            job_title,
            location=location,
            page=page,
            num_pages=num_pages,
            country=country,
            date_posted=date_posted,
        )
        return format_job_message(jobs)

    # ── HTTP ──────────────────────────────────────────────────────────────

    async def search(
        self,
        job_title: str,
        location: Optional[str] = None,
        page: int = 1,
        num_pages: int = 1,
        country: Optional[str] = None,
        date_posted: str = "all",
    ) -> list[dict[str, Any]]:
        """Return raw listings, with employer logos filled in where possible."""
        params = {
            "query": build_query(job_title, location),
            "page": page,
            "num_pages": num_pages,
            "country": country or self.default_country,
            "date_posted": date_posted,
            "language": "en",
        }
        headers = {"x-rapidapi-key": self.api_key, "x-rapidapi-host": self.api_host}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                resp = await client.get(f"{self.base_url}/search", params=params, headers=headers)
            except httpx.HTTPError as exc:
                logger.error("JSearch request failed: %s", exc)
                raise JobSearchError(f"Job search request failed: {exc}", status=503) from exc

            if resp.status_code == 401:
                raise JobSearchError(
                    "Invalid API key. Please check your API key configuration.", status=401,
                )
            if resp.is_error:
                raise JobSearchError(_error_message(resp), status=resp.status_code)

            jobs = resp.json().get("data") or []
            for job in jobs:
                if not job.get("employer_logo"):
                    job["employer_logo"] = await self._lookup_logo(client, job.get("employer_name", ""))

        logger.info("JSearch returned %d job(s) for %r", len(jobs), params["query"])
        return jobs

    async def _lookup_logo(self, client: httpx.AsyncClient, employer_name: str) -> Optional[str]:
        """Best-effort logo lookup; any failure means no logo."""
        if not employer_name:
            return None
        try:
            resp = await client.get(self.logo_lookup_url, params={"query": employer_name})
            if resp.is_error:
                return None
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Logo lookup failed for %s: %s", employer_name, exc)
            return None
        if isinstance(data, list) and data and data[0].get("logo"):
            return data[0]["logo"]
        return None


def _error_message(resp: httpx.Response) -> str:
    try:
        detail = resp.json().get("message")
    except (ValueError, AttributeError):
        detail = None
    return detail or f"API Error: {resp.status_code} {resp.reason_phrase}"
