from pydantic import BaseModel

from models.schemas.readiness import Dimension, RecruiterReadinessScore
from models.schemas.resume import ResumeContent
from models.schemas.rules import RuleStats, TransformationRule
from models.schemas.soft_skills import ChatResponse, SoftSkillAssessment


class ErrorDetail(BaseModel):
    code: str
    message: str
    user_message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    ai_configured: bool = False
    enabled_rules: int = 0


class ParseResponse(BaseModel):
    resume: ResumeContent
    page_count: int = 0
    has_valid_content: bool = False
    # Line-level signals from the raw PDF text, independent of the AI parse
    detected_bullets: int = 0
    quantified_bullets: int = 0


class SoftSkillTurnResponse(ChatResponse):
    evidence_label: str | None = None
    assessment: SoftSkillAssessment | None = None  # set once is_complete


class ReadinessResponse(BaseModel):
    score: RecruiterReadinessScore
    summary: str
    most_impactful_dimension: Dimension


class RulesResponse(BaseModel):
    rules: list[TransformationRule] = []
    stats: RuleStats
