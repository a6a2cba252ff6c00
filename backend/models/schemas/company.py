"""Company research output, and the slimmer view used for tailoring."""

from typing import Literal

from pydantic import BaseModel, Field

TipCategory = Literal["preparation", "technical", "behavioral", "cultural_fit", "questions_to_ask"]
CompanySize = Literal["startup", "growth", "enterprise", "unknown"]

CULTURE_DIMENSIONS = [
    "Work-Life Balance",
    "Innovation",
    "Collaboration",
    "Career Growth",
    "Diversity & Inclusion",
    "Compensation & Benefits",
    "Management Quality",
    "Job Security",
]


class CultureDimension(BaseModel):
    dimension: str
    score: float = Field(3, ge=1, le=5)
    description: str = ""


class FundingRound(BaseModel):
    round: str
    amount: str | None = None
    date: str | None = None
    investors: list[str] | None = None


class FundingData(BaseModel):
    stage: str | None = None
    total_raised: str | None = None
    valuation: str | None = None
    last_round: FundingRound | None = None
    notable_investors: list[str] = []


class GlassdoorData(BaseModel):
    overall_rating: float | None = Field(None, ge=1, le=5)
    pros: list[str] = []
    cons: list[str] = []
    recommend_to_friend: str | None = None
    ceo_approval: str | None = None


class Competitor(BaseModel):
    name: str = "Unknown"
    relationship: str = "Competitor"


class InterviewTip(BaseModel):
    category: TipCategory = "preparation"
    tip: str
    priority: Literal["high", "medium", "low"] = "medium"


class ValueAlignment(BaseModel):
    value: str
    how_to_demo: str = ""


class RecruiterContext(BaseModel):
    """How recognizable the company is to a U.S. recruiter."""
    is_well_known: bool = False
    size: CompanySize = "unknown"
    comparable: str | None = None  # well-known company it resembles
    context: str = ""  # one-line description for a resume


class CompanyResearchResult(BaseModel):
    company_name: str
    industry: str = "Unknown"
    summary: str = ""
    founded: str | None = None
    headquarters: str | None = None
    employee_count: str | None = None
    website: str | None = None
    culture_dimensions: list[CultureDimension] = []
    culture_overview: str = ""
    glassdoor_data: GlassdoorData = GlassdoorData()
    funding_data: FundingData = FundingData()
    competitors: list[Competitor] = []
    interview_tips: list[InterviewTip] = []
    common_interview_topics: list[str] = []
    core_values: list[str] = []
    values_alignment: list[ValueAlignment] = []
    key_takeaways: list[str] = []
    recruiter_context: RecruiterContext = RecruiterContext()


class CompanyContext(BaseModel):
    """Company signal consumed by the rule engine and readiness scoring."""
    company_name: str
    is_well_known: bool = False
    industry: str | None = None
    size: CompanySize = "unknown"
    funding_stage: str | None = None
    comparable: str | None = None
    context: str = ""
