"""Impact module output: how well achievements are quantified."""

from typing import Literal

from pydantic import BaseModel, Field

from models.schemas.uniqueness import AreaSuggestion

ImprovementLevel = Literal["none", "minor", "major", "transformed"]
ImpactLabel = Literal["weak", "moderate", "strong", "exceptional"]


class ImpactBullet(BaseModel):
    id: str
    experience_id: str
    experience_title: str = "Unknown Position"
    company_name: str = "Unknown Company"
    original: str = ""
    improved: str = ""
    metrics: list[str] = []
    improvement: ImprovementLevel = "none"
    explanation: str = ""


class MetricCategories(BaseModel):
    """Count of bullets carrying each kind of metric."""
    percentage: int = 0
    monetary: int = 0
    time: int = 0
    scale: int = 0
    other: int = 0


class ImpactResult(BaseModel):
    score: int = Field(50, ge=0, le=100)
    score_label: ImpactLabel = "moderate"
    summary: str = "Analysis complete."
    total_bullets: int = 0
    bullets_improved: int = 0
    bullets: list[ImpactBullet] = []
    metric_categories: MetricCategories = MetricCategories()
    suggestions: list[AreaSuggestion] = []
