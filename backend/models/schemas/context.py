"""Context module output: alignment between the resume and a target job."""

from typing import Literal

from pydantic import BaseModel, Field

SkillSource = Literal["technical", "soft", "experience", "education"]
MatchStrength = Literal["exact", "related", "transferable"]
Importance = Literal["critical", "important", "nice_to_have"]
Relevance = Literal["high", "medium", "low"]
SuggestionCategory = Literal["skills", "experience", "keywords", "tailoring"]
AlignmentLabel = Literal["excellent", "good", "moderate", "weak", "poor"]


class MatchedSkill(BaseModel):
    skill: str
    source: SkillSource = "technical"
    strength: MatchStrength = "related"
    evidence: str = ""


class MissingRequirement(BaseModel):
    requirement: str
    importance: Importance = "important"
    suggestion: str = ""


class ExperienceAlignment(BaseModel):
    experience_id: str
    experience_title: str = ""
    company_name: str = ""
    relevance: Relevance = "medium"
    matched_aspects: list[str] = []
    explanation: str = ""


class KeywordHit(BaseModel):
    keyword: str
    found: bool = False
    location: str | None = None


class KeywordCoverage(BaseModel):
    matched: int = 0
    total: int = 0
    percentage: int = Field(0, ge=0, le=100)
    keywords: list[KeywordHit] = []


class ContextSuggestion(BaseModel):
    category: SuggestionCategory = "tailoring"
    priority: Relevance = "medium"
    recommendation: str


class FitAssessment(BaseModel):
    strengths: list[str] = []
    gaps: list[str] = []
    overall_fit: str = ""


class ContextResult(BaseModel):
    score: int = Field(50, ge=0, le=100)
    score_label: AlignmentLabel = "moderate"
    summary: str = ""
    matched_skills: list[MatchedSkill] = []
    missing_requirements: list[MissingRequirement] = []
    experience_alignments: list[ExperienceAlignment] = []
    keyword_coverage: KeywordCoverage = KeywordCoverage()
    suggestions: list[ContextSuggestion] = []
    fit_assessment: FitAssessment = FitAssessment()
