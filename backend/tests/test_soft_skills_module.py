"""Tests for the conversational soft-skill assessment."""

import pytest

from models.schemas.soft_skills import ChatResponse, SurveyMessage, get_evidence_label
from services.modules.errors import SoftSkillsError
from services.modules.soft_skills import SoftSkillsModule, to_assessment


class TestSoftSkillsModule:
    @pytest.mark.asyncio
    async def test_start_assessment(self, settings, fake_client):
        client = fake_client({"message": "Tell me about a time you led a team.", "is_complete": False, "question_number": 1})
        response = await SoftSkillsModule(settings, client).start_assessment("Leadership")

        assert response.message.startswith("Tell me")
        assert response.is_complete is False
        assert response.question_number == 1
        assert response.evidence_score is None
        request = client.requests[0]
        assert '"Leadership"' in request.user_prompt
        assert request.temperature == 0.7
        assert request.max_tokens == 1000

    @pytest.mark.asyncio
    async def test_blank_skill_rejected(self, settings, fake_client):
        with pytest.raises(SoftSkillsError) as exc_info:
            await SoftSkillsModule(settings, fake_client()).start_assessment(" ")
        assert exc_info.value.code == "INVALID_SKILL"

    @pytest.mark.asyncio
    async def test_continue_appends_user_message(self, settings, fake_client):
        client = fake_client({"message": "What was the outcome?", "questionNumber": 3})
        conversation = [
            SurveyMessage(role="assistant", content="Tell me about a time you led a team."),
            SurveyMessage(role="user", content="I led the settlement rewrite."),
            SurveyMessage(role="assistant", content="How did you align the team?"),
        ]
        response = await SoftSkillsModule(settings, client).continue_assessment(
            "Leadership", conversation, "  Weekly design reviews.  ", 2
        )

        assert response.question_number == 3
        prompt = client.requests[0].user_prompt
        assert "Candidate: Weekly design reviews." in prompt
        assert "Question number: 3" in prompt

    @pytest.mark.asyncio
    async def test_question_number_capped(self, settings, fake_client):
        client = fake_client({"message": "Thanks!", "question_number": 9})
        response = await SoftSkillsModule(settings, client).continue_assessment("Teamwork", [], "Done", 5)
        assert "Question number: 5" in client.requests[0].user_prompt
        assert response.question_number == 5

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, settings, fake_client):
        with pytest.raises(SoftSkillsError) as exc_info:
            await SoftSkillsModule(settings, fake_client()).continue_assessment("Teamwork", [], "", 1)
        assert exc_info.value.code == "INVALID_MESSAGE"

    @pytest.mark.asyncio
    async def test_completion(self, settings, fake_client):
        client = fake_client(
            {
                "message": "Thanks, that's all I need.",
                "is_complete": True,
                "question_number": 4,
                "evidence_score": 7,
                "statement": "Led a 5-person team through a platform rewrite.",
            }
        )
        response = await SoftSkillsModule(settings, client).continue_assessment("Leadership", [], "We shipped.", 3)
        assert response.is_complete is True
        assert response.evidence_score == 5
        assert response.statement == "Led a 5-person team through a platform rewrite."

    @pytest.mark.asyncio
    async def test_missing_message_is_invalid(self, settings, fake_client):
        with pytest.raises(SoftSkillsError) as exc_info:
            await SoftSkillsModule(settings, fake_client({"is_complete": True})).start_assessment("Teamwork")
        assert exc_info.value.code == "INVALID_RESPONSE"


class TestToAssessment:
    def test_incomplete_conversation(self):
        assert to_assessment("Leadership", ChatResponse(message="Next question?")) is None

    @pytest.mark.parametrize("score,strength", [(5, "strong"), (4, "strong"), (3, "moderate"), (2, "weak"), (None, "weak")])
    def test_strength_from_evidence(self, score, strength):
        response = ChatResponse(message="Done", is_complete=True, evidence_score=score, statement="Did things")
        assessment = to_assessment("Leadership", response, bullet_ids=["b-2"])
        assert assessment.strength == strength
        assert assessment.evidence == ["Did things"]
        assert assessment.bullet_ids == ["b-2"]

    def test_evidence_labels(self):
        assert get_evidence_label(5) == "Expert"
        assert get_evidence_label(None) == "Unknown"
