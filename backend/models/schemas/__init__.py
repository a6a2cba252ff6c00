"""Pydantic contracts shared by the modules, the rule engine and the API."""

from models.schemas.company import CompanyContext, CompanyResearchResult
from models.schemas.context import ContextResult
from models.schemas.impact import ImpactResult
from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.readiness import DimensionScore, RecruiterReadinessScore, TailoringPlan
from models.schemas.resume import JobData, ResumeContent
from models.schemas.rules import (
    RuleCondition,
    TransformationAction,
    TransformationInstruction,
    TransformationRule,
)
from models.schemas.soft_skills import ChatResponse, SoftSkillAssessment
from models.schemas.uniqueness import UniquenessResult

__all__ = [
    "CompanyContext",
    "CompanyResearchResult",
    "ContextResult",
    "ImpactResult",
    "PreAnalysisResult",
    "DimensionScore",
    "RecruiterReadinessScore",
    "TailoringPlan",
    "JobData",
    "ResumeContent",
    "RuleCondition",
    "TransformationAction",
    "TransformationInstruction",
    "TransformationRule",
    "ChatResponse",
    "SoftSkillAssessment",
    "UniquenessResult",
]
