"""Conversational soft-skill assessment."""

from typing import Literal

from pydantic import BaseModel, Field

SOFT_SKILLS = [
    "Leadership",
    "Communication",
    "Problem Solving",
    "Teamwork",
    "Adaptability",
    "Time Management",
    "Critical Thinking",
    "Creativity",
    "Emotional Intelligence",
    "Conflict Resolution",
    "Decision Making",
    "Negotiation",
    "Public Speaking",
    "Active Listening",
    "Mentoring",
]

EVIDENCE_LABELS = {
    1: "Developing",
    2: "Foundational",
    3: "Competent",
    4: "Proficient",
    5: "Expert",
}

SkillStrength = Literal["weak", "moderate", "strong"]


def get_evidence_label(score: int | None) -> str:
    return EVIDENCE_LABELS.get(score, "Unknown")


class SurveyMessage(BaseModel):
    role: Literal["assistant", "user"]
    content: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    message: str
    is_complete: bool = False
    question_number: int = Field(1, ge=1, le=5)
    evidence_score: int | None = Field(None, ge=1, le=5)
    statement: str | None = None  # resume-ready summary once complete


class SoftSkillAssessment(BaseModel):
    skill: str
    evidence: list[str] = []
    strength: SkillStrength = "weak"
    bullet_ids: list[str] = []
