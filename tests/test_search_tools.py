"""Job and community search tools against mocked upstream APIs."""

from __future__ import annotations

import httpx
import pytest

from careerchat.commands.registry import renderable_for
from careerchat.models.records import CommandKind
from careerchat.tools.community_search_tool import (
    CommunitySearchError,
    CommunitySearchTool,
    RedditCommunity,
    format_community_message,
)
from careerchat.tools.job_search_tool import JobSearchError, JobSearchTool, build_query


def _jsearch_handler(jobs: list[dict], seen: list[httpx.Request], status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.host == "autocomplete.clearbit.com":
            name = request.url.params["query"]
            if name == "Globex":
                return httpx.Response(200, json=[{"name": "Globex", "logo": "https://logo.clearbit.com/globex.com"}])
            return httpx.Response(200, json=[])
        if status != 200:
            return httpx.Response(status, json={"message": "quota exceeded"})
        return httpx.Response(200, json={"status": "OK", "data": jobs})

    return handler


def _job_tool(handler) -> JobSearchTool:
    return JobSearchTool(api_key="k", transport=httpx.MockTransport(handler))


def test_build_query_with_and_without_location():
    assert build_query("data scientist") == "data scientist"
    assert build_query("data scientist", "Pune") == "data scientist in Pune"


@pytest.mark.asyncio
async def test_job_search_formats_jobdata_message(sample_jobs):
    raw = [dict(job, job_id=f"id-{i}", job_description="long text") for i, job in enumerate(sample_jobs)]
    seen: list[httpx.Request] = []

    message = await _job_tool(_jsearch_handler(raw, seen))._arun(job_title="engineer", location="Pune")

    assert message.startswith("/jobdata\n")
    assert "job_description" not in message
    descriptor = renderable_for(message)
    assert descriptor.kind is CommandKind.JOB_DATA
    assert len(descriptor.records) == 3

    search = seen[0]
    assert search.url.path == "/search"
    assert search.url.params["query"] == "engineer in Pune"
    assert search.url.params["country"] == "in"
    assert search.url.params["language"] == "en"
    assert search.headers["x-rapidapi-key"] == "k"


@pytest.mark.asyncio
async def test_job_search_fills_missing_logos(sample_jobs):
    seen: list[httpx.Request] = []
    jobs = await _job_tool(_jsearch_handler(sample_jobs, seen)).search("engineer")

    assert jobs[0]["employer_logo"] == "https://logo.clearbit.com/acme.com"
    assert jobs[1]["employer_logo"] == "https://logo.clearbit.com/globex.com"
    assert jobs[2]["employer_logo"] is None
    lookups = [r for r in seen if r.url.host == "autocomplete.clearbit.com"]
    assert len(lookups) == 2


@pytest.mark.asyncio
async def test_job_search_listing_without_employment_type_still_renders():
    raw = [{"job_title": "Analyst", "employer_name": "Acme", "employer_logo": "https://logo.example/a.png",
            "job_apply_link": "https://jobs.acme.example/9"}]

    message = await _job_tool(_jsearch_handler(raw, []))._arun(job_title="analyst")

    assert '"job_employment_type": null' in message
    descriptor = renderable_for(message)
    assert descriptor is not None
    assert descriptor.records[0].title == "Analyst"
    assert descriptor.records[0].employment_type == ""


@pytest.mark.asyncio
async def test_job_search_invalid_key():
    tool = _job_tool(_jsearch_handler([], [], status=401))
    with pytest.raises(JobSearchError) as exc_info:
        await tool.search("engineer")
    assert exc_info.value.status == 401
    assert "Invalid API key" in str(exc_info.value)


@pytest.mark.asyncio
async def test_job_search_upstream_error_message():
    tool = _job_tool(_jsearch_handler([], [], status=429))
    with pytest.raises(JobSearchError) as exc_info:
        await tool.search("engineer")
    assert exc_info.value.status == 429
    assert str(exc_info.value) == "quota exceeded"


# ── Reddit ────────────────────────────────────────────────────────────────────


SUBREDDITS = {
    "data": {
        "children": [
            {"data": {"id": "a1", "title": "Python: the language", "display_name": "Python",
                      "public_description": "News about Python", "subscribers": 1000, "icon_img": ""}},
            {"data": {"id": "b2", "title": "", "display_name": "learnpython",
                      "public_description": None, "subscribers": None, "icon_img": None}},
        ]
    }
}


def _reddit_handler(calls: dict, search_status: int = 200, token_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v1/access_token":
            calls["token"] = calls.get("token", 0) + 1
            if token_status != 200:
                return httpx.Response(token_status)
            return httpx.Response(200, json={"access_token": "tok", "token_type": "bearer", "expires_in": 3600})
        calls["search"] = calls.get("search", 0) + 1
        calls["auth"] = request.headers.get("authorization")
        calls["params"] = dict(request.url.params)
        if search_status != 200:
            return httpx.Response(search_status)
        return httpx.Response(200, json=SUBREDDITS)

    return handler


def _reddit_tool(handler) -> CommunitySearchTool:
    return CommunitySearchTool(client_id="id", client_secret="secret", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_community_search_formats_community_block():
    calls: dict = {}
    message = await _reddit_tool(_reddit_handler(calls))._arun(query=" python ")

    assert message.splitlines() == [
        "/community",
        "Python  the language:Reddit:https://www.reddit.com/r/Python",
        "learnpython:Reddit:https://www.reddit.com/r/learnpython",
    ]
    descriptor = renderable_for(message)
    assert descriptor.kind is CommandKind.COMMUNITY
    assert [r.link for r in descriptor.records] == [
        "https://www.reddit.com/r/Python",
        "https://www.reddit.com/r/learnpython",
    ]
    assert calls["auth"] == "Bearer tok"
    assert calls["params"] == {"q": "python", "type": "sr", "sort": "relevance", "limit": "25"}


@pytest.mark.asyncio
async def test_community_token_is_cached():
    calls: dict = {}
    tool = _reddit_tool(_reddit_handler(calls))

    await tool.search("python")
    await tool.search("rust")
    assert calls["token"] == 1
    assert calls["search"] == 2

    tool.clear_auth_cache()
    await tool.search("go")
    assert calls["token"] == 2


@pytest.mark.asyncio
async def test_community_search_rejects_empty_query():
    with pytest.raises(ValueError):
        await _reddit_tool(_reddit_handler({})).search("   ")


@pytest.mark.asyncio
async def test_community_auth_failure():
    tool = _reddit_tool(_reddit_handler({}, token_status=401))
    with pytest.raises(CommunitySearchError, match="authentication failed"):
        await tool.search("python")


@pytest.mark.asyncio
async def test_community_search_failure():
    tool = _reddit_tool(_reddit_handler({}, search_status=503))
    with pytest.raises(CommunitySearchError) as exc_info:
        await tool.search("python")
    assert exc_info.value.status == 503


def test_community_missing_credentials():
    tool = CommunitySearchTool(transport=httpx.MockTransport(_reddit_handler({})))
    with pytest.raises(CommunitySearchError, match="not configured"):
        tool._run(query="python")


def test_format_community_message_flattens_line_breaks():
    community = RedditCommunity(id="c3", title="Careers\r\nin tech", display_name="techcareers")

    message = format_community_message([community])

    assert message.splitlines() == ["/community", "Careers  in tech:Reddit:https://www.reddit.com/r/techcareers"]
    descriptor = renderable_for(message)
    assert [r.name for r in descriptor.records] == ["Careers  in tech"]


def test_format_community_message_empty():
    assert format_community_message([]) == "/community"
    assert renderable_for("/community") is None


def test_reddit_community_link():
    community = RedditCommunity(id="x", title="Rust", display_name="rust")
    assert community.link == "https://www.reddit.com/r/rust"
