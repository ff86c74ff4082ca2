#!/usr/bin/env python3
"""run_demo.py: send sample command messages to the live render API.

Usage:
    python scripts/run_demo.py              # default: http://localhost:8000
    python scripts/run_demo.py --base-url http://localhost:8000
"""

from __future__ import annotations

import argparse
import json
import sys

import httpx

DEMO_MESSAGES = [
    {
        "name": "Jobs",
        "message": "/jobdata\n" + json.dumps([
            {
                "job_title": "Backend Engineer",
                "employer_name": "Acme",
                "employer_logo": None,
                "job_apply_link": "https://jobs.acme.example/123",
                "job_employment_type": "FULLTIME",
                "job_posted_at_datetime_utc": "2024-05-01T00:00:00.000Z",
            }
        ]),
    },
    {
        "name": "Communities",
        "message": (
            "Here are a few places to start:\n/community\n"
            "r/cscareerquestions:Reddit:https://www.reddit.com/r/cscareerquestions\n"
            "Python Discord:Discord:https://discord.gg/python"
        ),
    },
    {
        "name": "Courses",
        "message": "/courses\nMachine Learning:Coursera:https://www.coursera.org/learn/machine-learning",
    },
    {
        "name": "Resume",
        "message": "/resume : https://storage.example.com/resumes/u1/resume_Jane_Doe_2024-01-01T10-00-00-000Z.pdf",
    },
    {"name": "Job portals", "message": "/jobportals"},
    {"name": "Plain text", "message": "Good luck with the interview!"},
]


def run_demo(base_url: str) -> None:
    print("═" * 60)
    print(" Career Chat Render Demo")
    print("═" * 60)
    print(f"Target: {base_url}\n")

    try:
        resp = httpx.get(f"{base_url}/api/v1/health", timeout=5)
        resp.raise_for_status()
        print(f"✅ Health check: {resp.json()}\n")
    except Exception as exc:
        print(f"❌ Health check failed: {exc}")
        print("   Make sure the server is running: uvicorn careerchat.main:app --reload")
        sys.exit(1)

    rendered = 0
    for demo in DEMO_MESSAGES:
        print(f"─── {demo['name']} {'─' * (40 - len(demo['name']))}")
        try:
            resp = httpx.post(f"{base_url}/api/v1/render", json={"message": demo["message"]}, timeout=10)
            resp.raise_for_status()
            render = resp.json()["render"]
        except Exception as exc:
            print(f"  ❌ Error: {exc}")
            print()
            continue

        if render is None:
            print("  → nothing to render")
        else:
            rendered += 1
            print(f"  → Kind:    {render['kind']}")
            for record in render["records"]:
                print(f"    • {json.dumps(record, ensure_ascii=False)[:100]}")
        print()

    print("═" * 60)
    print(f" Rendered {rendered}/{len(DEMO_MESSAGES)} messages")
    print("═" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run Career Chat render demo")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    args = parser.parse_args()
    run_demo(args.base_url)
