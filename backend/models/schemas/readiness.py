"""Recruiter readiness score: five weighted dimensions and a composite."""

from typing import Literal

from pydantic import BaseModel

from models.schemas.rules import RuleEvaluationResult, StrategicTone, TransformationInstruction
from services.tailoring.templates import BulletTemplate

ReadinessLabel = Literal["needs_work", "getting_there", "good", "strong", "exceptional"]
Dimension = Literal["uniqueness", "impact", "context_translation", "cultural_fit", "customization"]
SuggestionImpact = Literal["high", "medium", "low"]


class DimensionScore(BaseModel):
    raw: int  # 0-100
    weighted: float  # raw * weight
    weight: float
    label: str
    suggestions: list[str] = []  # at most 2
    defaulted: bool = False  # True when the module result was absent


class ReadinessDimensions(BaseModel):
    uniqueness: DimensionScore
    impact: DimensionScore
    context_translation: DimensionScore
    cultural_fit: DimensionScore
    customization: DimensionScore


class TopSuggestion(BaseModel):
    dimension: Dimension
    action: str
    impact: SuggestionImpact


class RecruiterReadinessScore(BaseModel):
    composite: int
    label: ReadinessLabel
    dimensions: ReadinessDimensions
    top_suggestions: list[TopSuggestion] = []


class TailoringPlan(BaseModel):
    """Rule-engine output handed to the rewrite step, plus the readiness snapshot."""
    instructions: list[TransformationInstruction] = []
    templates: list[BulletTemplate] = []  # referenced by instructions, first use order
    applied_rules: list[RuleEvaluationResult] = []
    overall_tone: StrategicTone = "measured"
    readiness: RecruiterReadinessScore
    rules_evaluated: int = 0
