"""Company research, and the condensed view of it used for tailoring."""

import logging
import re

from models.schemas.company import (
    CompanyContext,
    CompanyResearchResult,
    CompanySize,
    Competitor,
    CultureDimension,
    FundingData,
    FundingRound,
    GlassdoorData,
    InterviewTip,
    RecruiterContext,
    ValueAlignment,
)
from models.schemas.resume import JobData
from services.modules.base import (
    BaseAnalysisModule,
    as_dicts,
    as_number,
    as_optional_str,
    as_str,
    as_str_list,
    clamp,
    pick,
    whitelist,
)
from services.modules.errors import CompanyResearchError
from services.prompt_builder import COMPANY_RESEARCH_SYSTEM_PROMPT, build_company_research_prompt

logger = logging.getLogger(__name__)

TIP_CATEGORIES = ("preparation", "technical", "behavioral", "cultural_fit", "questions_to_ask")
PRIORITIES = ("high", "medium", "low")
COMPANY_SIZES = ("startup", "growth", "enterprise", "unknown")

_EARLY_STAGE_RE = re.compile(r"pre-?seed|seed|series\s*[ab]\b", re.IGNORECASE)
_LATE_STAGE_RE = re.compile(r"series\s*[c-z]\b", re.IGNORECASE)
_PUBLIC_RE = re.compile(r"public|ipo|acquired", re.IGNORECASE)


def _glassdoor(raw) -> GlassdoorData:
    if not isinstance(raw, dict):
        return GlassdoorData()
    rating = as_number(pick(raw, "overall_rating", "overallRating"))
    return GlassdoorData(
        overall_rating=max(1.0, min(5.0, rating)) if rating else None,
        pros=as_str_list(raw.get("pros")),
        cons=as_str_list(raw.get("cons")),
        recommend_to_friend=as_optional_str(pick(raw, "recommend_to_friend", "recommendToFriend")),
        ceo_approval=as_optional_str(pick(raw, "ceo_approval", "ceoApproval")),
    )


def _funding(raw) -> FundingData:
    if not isinstance(raw, dict):
        return FundingData()
    last = pick(raw, "last_round", "lastRound")
    last_round = None
    if isinstance(last, dict):
        investors = last.get("investors")
        last_round = FundingRound(
            round=as_str(last.get("round")),
            amount=as_optional_str(last.get("amount")),
            date=as_optional_str(last.get("date")),
            investors=as_str_list(investors) if isinstance(investors, list) else None,
        )
    return FundingData(
        stage=as_optional_str(raw.get("stage")),
        total_raised=as_optional_str(pick(raw, "total_raised", "totalRaised")),
        valuation=as_optional_str(raw.get("valuation")),
        last_round=last_round,
        notable_investors=as_str_list(pick(raw, "notable_investors", "notableInvestors")),
    )


def _recruiter_context(raw) -> RecruiterContext:
    if not isinstance(raw, dict):
        return RecruiterContext()
    return RecruiterContext(
        is_well_known=pick(raw, "is_well_known", "isWellKnown") is True,
        size=whitelist(raw.get("size"), COMPANY_SIZES, "unknown"),
        comparable=as_optional_str(raw.get("comparable")),
        context=as_str(raw.get("context")),
    )


def infer_company_size(funding_stage: str | None) -> CompanySize:
    if not funding_stage:
        return "unknown"
    if _PUBLIC_RE.search(funding_stage):
        return "enterprise"
    if _LATE_STAGE_RE.search(funding_stage):
        return "growth"
    if _EARLY_STAGE_RE.search(funding_stage):
        return "startup"
    return "unknown"


def to_company_context(result: CompanyResearchResult) -> CompanyContext:
    """Condense a research report into what the rule engine and scoring need."""
    recruiter = result.recruiter_context
    size = recruiter.size
    if size == "unknown":
        size = infer_company_size(result.funding_data.stage)

    context = recruiter.context
    if not context and not recruiter.is_well_known and result.industry != "Unknown":
        stage = f"{result.funding_data.stage} " if result.funding_data.stage else ""
        context = f"{stage}{result.industry} company".strip()

    return CompanyContext(
        company_name=result.company_name,
        is_well_known=recruiter.is_well_known,
        industry=None if result.industry == "Unknown" else result.industry,
        size=size,
        funding_stage=result.funding_data.stage,
        comparable=recruiter.comparable,
        context=context,
    )


class CompanyResearchModule(BaseAnalysisModule):
    name = "company"
    task = "company_research"
    system_prompt = COMPANY_RESEARCH_SYSTEM_PROMPT
    error_class = CompanyResearchError

    async def research(self, company_name: str, job: JobData | None = None) -> CompanyResearchResult:
        self.ensure_configured()
        if not company_name or not company_name.strip():
            raise self.fail("Company name is required.", "INVALID_INPUT")
        company_name = company_name.strip()
        return await self.run(build_company_research_prompt(company_name, job), company_name=company_name)

    def normalize(self, data: dict, company_name: str = "") -> CompanyResearchResult:
        culture = [
            CultureDimension(
                dimension=as_str(d.get("dimension"), "Unknown"),
                score=clamp(d.get("score"), 1, 5, 3),
                description=as_str(d.get("description")),
            )
            for d in as_dicts(pick(data, "culture_dimensions", "cultureDimensions"))
        ]
        competitors = [
            Competitor(
                name=as_str(c.get("name"), "Unknown"),
                relationship=as_str(c.get("relationship"), "Competitor"),
            )
            for c in as_dicts(data.get("competitors"))
        ]
        tips = [
            InterviewTip(
                category=whitelist(t.get("category"), TIP_CATEGORIES, "preparation"),
                tip=as_str(t.get("tip")),
                priority=whitelist(t.get("priority"), PRIORITIES, "medium"),
            )
            for t in as_dicts(pick(data, "interview_tips", "interviewTips"))
        ]
        alignment = [
            ValueAlignment(
                value=as_str(v.get("value")),
                how_to_demo=as_str(pick(v, "how_to_demo", "howToDemo")),
            )
            for v in as_dicts(pick(data, "values_alignment", "valuesAlignment"))
        ]

        return CompanyResearchResult(
            company_name=as_str(pick(data, "company_name", "companyName"), company_name),
            industry=as_str(data.get("industry"), "Unknown"),
            summary=as_str(data.get("summary"), "Company research complete."),
            founded=as_optional_str(data.get("founded")),
            headquarters=as_optional_str(data.get("headquarters")),
            employee_count=as_optional_str(pick(data, "employee_count", "employeeCount")),
            website=as_optional_str(data.get("website")),
            culture_dimensions=culture,
            culture_overview=as_str(pick(data, "culture_overview", "cultureOverview")),
            glassdoor_data=_glassdoor(pick(data, "glassdoor_data", "glassdoorData")),
            funding_data=_funding(pick(data, "funding_data", "fundingData")),
            competitors=competitors,
            interview_tips=tips,
            common_interview_topics=as_str_list(pick(data, "common_interview_topics", "commonInterviewTopics")),
            core_values=as_str_list(pick(data, "core_values", "coreValues")),
            values_alignment=alignment,
            key_takeaways=as_str_list(pick(data, "key_takeaways", "keyTakeaways")),
            recruiter_context=_recruiter_context(pick(data, "recruiter_context", "recruiterContext")),
        )
