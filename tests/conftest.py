"""Shared pytest fixtures for the Career Chat test suite."""

from __future__ import annotations

import os
import json

import pytest
from fastapi.testclient import TestClient

# Ensure test environment variables are set BEFORE importing app modules
os.environ.setdefault("LLM_API_KEY", "test-key-not-real")
os.environ.setdefault("LLM_MODEL", "llama3-70b-8192")
os.environ.setdefault("JSEARCH_API_KEY", "test-rapidapi-key")
os.environ.setdefault("REDDIT_CLIENT_ID", "test-client")
os.environ.setdefault("REDDIT_CLIENT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


SAMPLE_JOBS = [
    {
        "employer_logo": "https://logo.clearbit.com/acme.com",
        "job_title": "Backend Engineer",
        "employer_name": "Acme",
        "job_apply_link": "https://jobs.acme.example/123",
        "job_employment_type": "FULLTIME",
        "job_posted_at_datetime_utc": "2024-05-01T00:00:00.000Z",
    },
    {
        "employer_logo": None,
        "job_title": "Data Analyst",
        "employer_name": "Globex",
        "job_apply_link": "https://globex.example/careers/9",
        "job_employment_type": "CONTRACTOR",
    },
    {
        "employer_logo": None,
        "job_title": "ML Engineer",
        "employer_name": "Initech",
        "job_apply_link": "https://initech.example/apply",
        "job_employment_type": "PARTTIME",
        "job_posted_at_datetime_utc": None,
    },
]


@pytest.fixture
def sample_jobs() -> list[dict]:
    """Return JSearch-shaped job dicts."""
    return [dict(job) for job in SAMPLE_JOBS]


@pytest.fixture
def client() -> TestClient:
    """FastAPI synchronous test client."""
    from careerchat.main import app

    return TestClient(app)


def _make_jobdata_message(jobs: list[dict], preamble: str = "") -> str:
    """Helper to build a /jobdata message the way the job search tool does."""
    return f"{preamble}/jobdata\n{json.dumps(jobs, indent=2)}"


def _make_chat_response(response: str = "Happy to help!", context: str = "User asked for help.") -> str:
    """Helper to build a mock Chat Agent JSON response string."""
    return json.dumps({"response": response, "context": context})
