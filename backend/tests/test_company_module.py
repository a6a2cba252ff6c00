"""Tests for company research and its condensed tailoring view."""

import pytest

from models.schemas.company import CompanyResearchResult, FundingData, RecruiterContext
from services.modules.company import CompanyResearchModule, infer_company_size, to_company_context
from services.modules.errors import CompanyResearchError

RESPONSE = {
    "company_name": "Razorpay",
    "industry": "Fintech",
    "summary": "Indian payments gateway.",
    "founded": 2014,
    "culture_dimensions": [
        {"dimension": "Innovation", "score": 4.5, "description": "Ships fast"},
        {"dimension": "Work-Life Balance", "score": 9},
    ],
    "glassdoorData": {"overallRating": 0, "pros": ["Learning"], "cons": ["Hours"]},
    "funding_data": {
        "stage": "Series F",
        "total_raised": "$740M",
        "last_round": {"round": "Series F", "amount": "$375M", "investors": ["GIC", 7]},
    },
    "competitors": [{"name": "Stripe"}],
    "interview_tips": [{"category": "trivia", "tip": "Know UPI", "priority": "urgent"}],
    "values_alignment": [{"value": "Customer first", "howToDemo": "Talk about merchant outcomes"}],
    "recruiter_context": {"is_well_known": "yes", "size": "huge", "comparable": "Stripe of India"},
}


class TestCompanyResearchModule:
    @pytest.mark.asyncio
    async def test_normalizes_response(self, settings, fake_client):
        result = await CompanyResearchModule(settings, fake_client(RESPONSE)).research("  Razorpay ")

        assert result.company_name == "Razorpay"
        assert result.founded == "2014"
        assert result.culture_dimensions[0].score == 4.5
        assert result.culture_dimensions[1].score == 5
        assert result.glassdoor_data.overall_rating is None
        assert result.glassdoor_data.pros == ["Learning"]
        assert result.funding_data.last_round.investors == ["GIC"]
        assert result.competitors[0].relationship == "Competitor"
        assert result.interview_tips[0].category == "preparation"
        assert result.interview_tips[0].priority == "medium"
        assert result.values_alignment[0].how_to_demo == "Talk about merchant outcomes"
        # Only a literal true counts as well known
        assert result.recruiter_context.is_well_known is False
        assert result.recruiter_context.size == "unknown"

    @pytest.mark.asyncio
    async def test_company_name_falls_back_to_request(self, settings, fake_client):
        client = fake_client({"industry": "Logistics"})
        result = await CompanyResearchModule(settings, client).research("Delhivery")
        assert result.company_name == "Delhivery"
        assert result.summary == "Company research complete."
        assert "Delhivery" in client.requests[0].user_prompt
        assert client.requests[0].temperature == 0.5

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, settings, fake_client):
        with pytest.raises(CompanyResearchError) as exc_info:
            await CompanyResearchModule(settings, fake_client()).research("   ")
        assert exc_info.value.code == "INVALID_INPUT"


class TestInferCompanySize:
    @pytest.mark.parametrize(
        "stage,size",
        [
            ("Public", "enterprise"),
            ("IPO 2021", "enterprise"),
            ("Acquired by Google", "enterprise"),
            ("Series D", "growth"),
            ("Series C", "growth"),
            ("Series B", "startup"),
            ("Seed", "startup"),
            ("Pre-seed", "startup"),
            ("Bootstrapped", "unknown"),
            (None, "unknown"),
        ],
    )
    def test_stages(self, stage, size):
        assert infer_company_size(stage) == size


class TestToCompanyContext:
    def test_uses_recruiter_context(self):
        result = CompanyResearchResult(
            company_name="Zoho",
            industry="SaaS",
            recruiter_context=RecruiterContext(is_well_known=False, size="enterprise", comparable="Salesforce", context="Indian SaaS suite"),
        )
        context = to_company_context(result)
        assert context.size == "enterprise"
        assert context.comparable == "Salesforce"
        assert context.context == "Indian SaaS suite"
        assert context.industry == "SaaS"

    def test_infers_size_and_context_from_funding(self):
        result = CompanyResearchResult(
            company_name="Tiny Co",
            industry="Healthtech",
            funding_data=FundingData(stage="Seed"),
        )
        context = to_company_context(result)
        assert context.size == "startup"
        assert context.funding_stage == "Seed"
        assert context.context == "Seed Healthtech company"

    def test_unknown_industry_is_none(self):
        context = to_company_context(CompanyResearchResult(company_name="Mystery"))
        assert context.industry is None
        assert context.context == ""
        assert context.size == "unknown"

    def test_well_known_company_gets_no_generated_context(self):
        result = CompanyResearchResult(
            company_name="Google",
            industry="Internet",
            recruiter_context=RecruiterContext(is_well_known=True),
        )
        context = to_company_context(result)
        assert context.is_well_known is True
        assert context.context == ""
