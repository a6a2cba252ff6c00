"""Tests for the job context analysis module."""

import pytest

from models.schemas.resume import JobData, ResumeContent
from services.modules.context import ContextModule, get_context_label
from services.modules.errors import ContextAnalysisError

RESPONSE = {
    "score": 72,
    "summary": "Good backend fit; streaming experience missing.",
    "matched_skills": [
        {"skill": "Go", "source": "technical", "strength": "exact", "evidence": "Built services in Go"},
        {"skill": "Mentoring", "source": "people", "strength": "kinda"},
    ],
    "missingRequirements": [{"requirement": "Kafka", "importance": "critical", "suggestion": "Mention queues"}],
    "experience_alignments": [
        {"experience_id": "exp-1", "relevance": "high", "matched_aspects": ["payments", "Go"]},
        {"relevance": "sky-high"},
    ],
    "keyword_coverage": {
        "matched": 4,
        "total": 6,
        "percentage": 180,
        "keywords": [{"keyword": "Go", "found": True, "location": "skills"}, {"keyword": "Kafka", "found": "yes"}],
    },
    "suggestions": [{"category": "keywords", "priority": "high", "recommendation": "Add Kafka"}],
    "fit_assessment": {"strengths": ["Payments domain"], "gaps": ["Streaming"], "overallFit": "Strong"},
}


class TestContextLabel:
    @pytest.mark.parametrize(
        "score,label",
        [(90, "excellent"), (85, "excellent"), (70, "good"), (50, "moderate"), (30, "weak"), (29, "poor")],
    )
    def test_thresholds(self, score, label):
        assert get_context_label(score) == label


class TestContextModule:
    @pytest.mark.asyncio
    async def test_normalizes_response(self, settings, fake_client, resume, job):
        result = await ContextModule(settings, fake_client(RESPONSE)).analyze(resume, job)

        assert result.score == 72
        assert result.score_label == "good"
        assert result.matched_skills[1].source == "technical"
        assert result.matched_skills[1].strength == "related"
        assert result.missing_requirements[0].importance == "critical"
        assert result.experience_alignments[1].experience_id == "exp-1"
        assert result.experience_alignments[1].relevance == "medium"
        assert result.keyword_coverage.percentage == 100
        assert result.keyword_coverage.keywords[1].found is False
        assert result.fit_assessment.overall_fit == "Strong"

    @pytest.mark.asyncio
    async def test_prompt_contains_job(self, settings, fake_client, resume, job):
        client = fake_client({"score": 60})
        await ContextModule(settings, client).analyze(resume, job)
        prompt = client.requests[0].user_prompt
        assert "Kafka" in prompt
        assert "Razorpay" in prompt

    @pytest.mark.asyncio
    async def test_empty_job_rejected(self, settings, fake_client, resume):
        client = fake_client()
        with pytest.raises(ContextAnalysisError) as exc_info:
            await ContextModule(settings, client).analyze(resume, JobData(title="Engineer", description="  "))
        assert exc_info.value.code == "INSUFFICIENT_JOB_CONTENT"
        assert client.requests == []

    @pytest.mark.asyncio
    async def test_empty_resume_rejected(self, settings, fake_client, job):
        with pytest.raises(ContextAnalysisError) as exc_info:
            await ContextModule(settings, fake_client()).analyze(ResumeContent(), job)
        assert exc_info.value.code == "INSUFFICIENT_CONTENT"

    @pytest.mark.asyncio
    async def test_defaults_for_missing_sections(self, settings, fake_client, resume, job):
        result = await ContextModule(settings, fake_client({"score": "64"})).analyze(resume, job)
        assert result.score == 64
        assert result.keyword_coverage.total == 0
        assert result.fit_assessment.strengths == []
        assert result.summary == "Analysis complete."
