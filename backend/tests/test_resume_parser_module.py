"""Tests for parsing extracted resume text into structured content."""

import pytest

from models.schemas.resume import ResumeContent, Skills
from services.modules.errors import ResumeParseError
from services.modules.resume_parser import ResumeParserModule, has_valid_content

RESUME_TEXT = """Priya Raman
priya@example.com

Experience
Senior Software Engineer, Razorpay (2020 - Present)
- Built payment reconciliation service in Go

Skills
Go, Python, PostgreSQL
"""

PARSED = {
    "contact": {"name": "Priya Raman", "email": "priya@example.com"},
    "summary": "",
    "experiences": [
        {
            "id": "exp-1",
            "company": "Razorpay",
            "title": "Senior Software Engineer",
            "start_date": "2020",
            "end_date": None,
            "bullets": [{"id": "bullet-1", "text": "Built payment reconciliation service in Go"}],
        }
    ],
    "education": [],
    "skills": {"technical": ["Go", "Python", "PostgreSQL"], "soft": []},
}


class TestResumeParserModule:
    @pytest.mark.asyncio
    async def test_parses_resume(self, settings, fake_client):
        client = fake_client(PARSED)
        resume = await ResumeParserModule(settings, client).parse(RESUME_TEXT)

        assert resume.contact.name == "Priya Raman"
        assert resume.experiences[0].bullets[0].id == "bullet-1"
        assert resume.skills.technical == ["Go", "Python", "PostgreSQL"]
        assert client.requests[0].temperature == 0.1
        assert "Razorpay" in client.requests[0].user_prompt

    @pytest.mark.asyncio
    async def test_short_text_rejected(self, settings, fake_client):
        client = fake_client()
        with pytest.raises(ResumeParseError) as exc_info:
            await ResumeParserModule(settings, client).parse("Priya Raman, engineer")
        assert exc_info.value.code == "INSUFFICIENT_CONTENT"
        assert client.requests == []

    @pytest.mark.asyncio
    async def test_salvages_bad_sub_fields(self, settings, fake_client):
        data = dict(PARSED, contact={"name": "Priya", "email": None, "phone": 12345}, projects="none")
        resume = await ResumeParserModule(settings, fake_client(data)).parse(RESUME_TEXT)
        assert resume.contact.name == "Priya"
        assert resume.contact.email == ""
        assert resume.projects is None
        assert len(resume.experiences) == 1

    @pytest.mark.asyncio
    async def test_unsalvageable_response(self, settings, fake_client):
        data = {"experiences": [{"title": "No id or company"}]}
        with pytest.raises(ResumeParseError) as exc_info:
            await ResumeParserModule(settings, fake_client(data)).parse(RESUME_TEXT)
        assert exc_info.value.code == "SCHEMA_VALIDATION_FAILED"


class TestHasValidContent:
    def test_empty_resume(self):
        assert has_valid_content(ResumeContent()) is False

    def test_skills_only(self):
        assert has_valid_content(ResumeContent(skills=Skills(technical=["Go"]))) is True
