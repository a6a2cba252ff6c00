"""Aggregated module outputs consumed by the rule engine and readiness scoring."""

from datetime import datetime

from pydantic import BaseModel

from models.schemas.company import CompanyContext
from models.schemas.context import ContextResult
from models.schemas.impact import ImpactResult
from models.schemas.soft_skills import SoftSkillAssessment
from models.schemas.uniqueness import UniquenessResult


class PreAnalysisResult(BaseModel):
    """Every dimension may be absent: modules fail independently."""
    uniqueness: UniquenessResult | None = None
    impact: ImpactResult | None = None
    context: ContextResult | None = None
    company: CompanyContext | None = None
    soft_skills: list[SoftSkillAssessment] = []

    # module name -> error code, for modules that failed
    errors: dict[str, str] = {}
    analyzed_at: datetime | None = None
    resume_id: str | None = None
    job_id: str | None = None
