"""Tests for the uniqueness analysis module."""

import json

import pytest

from config import Settings
from models.schemas.resume import ResumeContent
from services.gemini_client import ModelAPIError
from services.modules.errors import UniquenessAnalysisError
from services.modules.uniqueness import UniquenessModule, get_uniqueness_label

RESPONSE = {
    "score": 78,
    "factors": [
        {
            "type": "skill_combination",
            "title": "Payments + Distributed Systems",
            "description": "Rare pairing of domain and infrastructure depth",
            "rarity": "very_rare",
            "evidence": ["Built payment reconciliation service in Go"],
            "suggestion": "Lead the summary with it",
        },
        {"type": "superpower", "rarity": "legendary"},
    ],
    "summary": "Strong payments infrastructure profile.",
    "differentiators": ["Payments domain depth", 42],
    "suggestions": [{"area": "Summary", "recommendation": "Mention settlement scale"}, {"recommendation": "Add OSS"}],
}


class TestUniquenessLabel:
    @pytest.mark.parametrize("score,label", [(95, "exceptional"), (85, "exceptional"), (65, "high"), (40, "moderate"), (39, "low")])
    def test_thresholds(self, score, label):
        assert get_uniqueness_label(score) == label


class TestUniquenessModule:
    @pytest.mark.asyncio
    async def test_normalizes_response(self, settings, fake_client, resume, job):
        client = fake_client("```json\n" + json.dumps(RESPONSE) + "\n```")
        result = await UniquenessModule(settings, client).analyze(resume, job)

        assert result.score == 78
        assert result.score_label == "high"
        assert len(result.factors) == 2
        first, second = result.factors
        assert first.type == "skill_combination"
        assert first.rarity == "very_rare"
        assert first.id
        # Unknown enum values fall back to defaults
        assert second.type == "unique_experience"
        assert second.rarity == "uncommon"
        assert second.title == "Factor 2"
        assert result.differentiators == ["Payments domain depth"]
        assert result.suggestions[1].area == "General"

    @pytest.mark.asyncio
    async def test_request_uses_task_parameters(self, settings, fake_client, resume):
        client = fake_client({"score": 50})
        await UniquenessModule(settings, client).analyze(resume)
        request = client.requests[0]
        assert request.temperature == 0.4
        assert request.max_tokens == 4000
        assert "Razorpay" in request.user_prompt
        assert "single valid JSON object" in request.system_prompt

    @pytest.mark.asyncio
    async def test_missing_score_defaults_and_zero_is_kept(self, settings, fake_client, resume):
        result = await UniquenessModule(settings, fake_client({"factors": []})).analyze(resume)
        assert result.score == 50
        assert result.summary == "Analysis complete."

        result = await UniquenessModule(settings, fake_client({"score": 0})).analyze(resume)
        assert result.score == 0
        assert result.score_label == "low"

    @pytest.mark.asyncio
    async def test_out_of_range_score_clamped(self, settings, fake_client, resume):
        result = await UniquenessModule(settings, fake_client({"score": 140})).analyze(resume)
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_not_configured(self, unconfigured_settings, fake_client, resume):
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(unconfigured_settings, fake_client()).analyze(resume)
        assert exc_info.value.code == "AI_NOT_CONFIGURED"

    @pytest.mark.asyncio
    async def test_insufficient_content(self, settings, fake_client):
        client = fake_client()
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(settings, client).analyze(ResumeContent())
        assert exc_info.value.code == "INSUFFICIENT_CONTENT"
        assert client.requests == []

    @pytest.mark.asyncio
    async def test_unparseable_response(self, settings, fake_client, resume):
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(settings, fake_client("I cannot help with that.")).analyze(resume)
        assert exc_info.value.code == "PARSE_ERROR"

    @pytest.mark.asyncio
    async def test_empty_response(self, settings, fake_client, resume):
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(settings, fake_client("   ")).analyze(resume)
        assert exc_info.value.code == "EMPTY_RESPONSE"

    @pytest.mark.asyncio
    async def test_non_object_response(self, settings, fake_client, resume):
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(settings, fake_client([1, 2])).analyze(resume)
        assert exc_info.value.code == "INVALID_RESPONSE"

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self, settings, fake_client, resume):
        client = fake_client(ModelAPIError("overloaded", status=503), {"score": 61})
        result = await UniquenessModule(settings, client).analyze(resume)
        assert result.score == 61
        assert len(client.requests) == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries(self, settings, fake_client, resume):
        client = fake_client(*[ModelAPIError("overloaded", status=503)] * 3)
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(settings, client).analyze(resume)
        assert exc_info.value.code == "MAX_RETRIES_EXCEEDED"
        assert len(client.requests) == 3

    @pytest.mark.asyncio
    async def test_fatal_error_keeps_its_code(self, settings, fake_client, resume):
        client = fake_client(ModelAPIError("bad key", status=401))
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(settings, client).analyze(resume)
        assert exc_info.value.code == "AUTH_ERROR"
        assert len(client.requests) == 1

    @pytest.mark.asyncio
    async def test_time_budget(self, fake_client, resume):
        tight = Settings(gemini_api_key="test-key", ai_time_budget_ms=1000)
        client = fake_client(ModelAPIError("overloaded", status=503))
        with pytest.raises(UniquenessAnalysisError) as exc_info:
            await UniquenessModule(tight, client).analyze(resume)
        assert exc_info.value.code == "TIME_BUDGET_EXHAUSTED"
