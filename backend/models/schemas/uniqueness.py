"""Uniqueness module output: what sets the candidate apart."""

from typing import Literal

from pydantic import BaseModel, Field

FactorType = Literal[
    "skill_combination",
    "career_transition",
    "unique_experience",
    "domain_expertise",
    "achievement",
    "education",
]
Rarity = Literal["uncommon", "rare", "very_rare"]
UniquenessLabel = Literal["low", "moderate", "high", "exceptional"]


class AreaSuggestion(BaseModel):
    area: str = "General"
    recommendation: str


class UniquenessFactor(BaseModel):
    id: str
    type: FactorType = "unique_experience"
    title: str
    description: str = ""
    rarity: Rarity = "uncommon"
    evidence: list[str] = []
    suggestion: str = ""


class UniquenessResult(BaseModel):
    score: int = Field(50, ge=0, le=100)
    score_label: UniquenessLabel = "moderate"
    factors: list[UniquenessFactor] = []
    summary: str = ""
    differentiators: list[str] = []
    suggestions: list[AreaSuggestion] = []
