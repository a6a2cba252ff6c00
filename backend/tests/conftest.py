"""Shared test configuration, fixtures and a scripted model client."""

import json

import pytest

from config import Settings
from models.schemas.resume import (
    ContactInfo,
    Education,
    Experience,
    JobData,
    ResumeBullet,
    ResumeContent,
    Skills,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


class FakeModelClient:
    """ModelClient that replays queued responses and records every request.

    A queued dict or list is returned as JSON text, an exception is raised,
    anything else is returned as-is.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    async def complete(self, request):
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("Unexpected model call")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, (dict, list)):
            return json.dumps(response)
        return response


class RoutingModelClient:
    """ModelClient that answers by system prompt, for concurrent pre-analysis runs."""

    def __init__(self, routes: dict):
        self.routes = routes
        self.requests = []

    async def complete(self, request):
        self.requests.append(request)
        for marker, response in self.routes.items():
            if marker in request.system_prompt:
                if isinstance(response, BaseException):
                    raise response
                return json.dumps(response) if isinstance(response, (dict, list)) else response
        raise AssertionError(f"No route for system prompt: {request.system_prompt[:60]}")


@pytest.fixture
def settings():
    return Settings(
        gemini_api_key="test-key",
        ai_retry_initial_delay_ms=0,
        ai_retry_max_delay_ms=0,
        ai_retry_jitter_factor=0.0,
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(gemini_api_key="")


@pytest.fixture
def fake_client():
    return FakeModelClient


@pytest.fixture
def routing_client():
    return RoutingModelClient


@pytest.fixture
def resume():
    return ResumeContent(
        contact=ContactInfo(name="Priya Raman", email="priya@example.com", location="Bengaluru, India"),
        summary="Backend engineer focused on payments infrastructure.",
        experiences=[
            Experience(
                id="exp-1",
                company="Razorpay",
                title="Senior Software Engineer",
                start_date="2020-01",
                bullets=[
                    ResumeBullet(id="b-1", text="Built payment reconciliation service in Go"),
                    ResumeBullet(id="b-2", text="Led team of 5 engineers on settlement platform"),
                ],
            ),
            Experience(
                id="exp-2",
                company="Freshworks",
                title="Software Engineer",
                start_date="2017-06",
                end_date="2019-12",
                bullets=[ResumeBullet(id="b-3", text="Worked on CI/CD pipelines")],
            ),
        ],
        education=[Education(id="edu-1", institution="IIT Madras", degree="B.Tech", field="Computer Science")],
        skills=Skills(technical=["Go", "Python", "PostgreSQL", "Kubernetes"], soft=["Mentoring"]),
    )


@pytest.fixture
def job():
    return JobData(
        title="Senior Backend Engineer",
        company_name="Acme Payments",
        description="Build and scale payment APIs.",
        requirements=["5+ years backend experience", "Distributed systems"],
        skills=["Go", "PostgreSQL", "Kafka"],
    )
