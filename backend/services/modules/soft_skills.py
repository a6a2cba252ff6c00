"""Conversational soft-skill assessment: up to five questions, then a score."""

import logging

from models.schemas.soft_skills import ChatResponse, SoftSkillAssessment, SurveyMessage
from services.modules.base import BaseAnalysisModule, as_number, as_optional_str, clamp_int, pick
from services.modules.errors import SoftSkillsError
from services.prompt_builder import (
    SOFT_SKILLS_SYSTEM_PROMPT,
    build_chat_prompt,
    build_start_assessment_prompt,
)

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 5


def to_assessment(
    skill: str,
    response: ChatResponse,
    bullet_ids: list[str] | None = None,
) -> SoftSkillAssessment | None:
    """Turn a completed conversation into pre-analysis evidence; None if still in progress."""
    if not response.is_complete:
        return None

    score = response.evidence_score or 0
    if score >= 4:
        strength = "strong"
    elif score == 3:
        strength = "moderate"
    else:
        strength = "weak"

    return SoftSkillAssessment(
        skill=skill,
        evidence=[response.statement] if response.statement else [],
        strength=strength,
        bullet_ids=bullet_ids or [],
    )


class SoftSkillsModule(BaseAnalysisModule):
    name = "soft_skills"
    task = "conversational"
    system_prompt = SOFT_SKILLS_SYSTEM_PROMPT
    error_class = SoftSkillsError

    async def start_assessment(self, skill: str) -> ChatResponse:
        self.ensure_configured()
        if not skill or not skill.strip():
            raise self.fail("Skill name is required", "INVALID_SKILL")
        return await self.run(build_start_assessment_prompt(skill.strip()))

    async def continue_assessment(
        self,
        skill: str,
        conversation: list[SurveyMessage],
        message: str,
        question_number: int,
    ) -> ChatResponse:
        self.ensure_configured()
        if not message or not message.strip():
            raise self.fail("Message is required", "INVALID_MESSAGE")

        transcript = [*conversation, SurveyMessage(role="user", content=message.strip())]
        prompt = build_chat_prompt(skill, transcript, min(MAX_QUESTIONS, question_number + 1))
        return await self.run(prompt)

    def normalize(self, data: dict) -> ChatResponse:
        message = data.get("message")
        if not isinstance(message, str) or not message:
            raise self.fail("Invalid response: missing message", "INVALID_RESPONSE")

        evidence = as_number(pick(data, "evidence_score", "evidenceScore"))
        return ChatResponse(
            message=message,
            is_complete=bool(pick(data, "is_complete", "isComplete", default=False)),
            question_number=clamp_int(pick(data, "question_number", "questionNumber"), 1, MAX_QUESTIONS, 1),
            evidence_score=None if evidence is None else clamp_int(evidence, 1, 5, 1),
            statement=as_optional_str(data.get("statement")),
        )
