"""Tests for the pre-analysis fan-out and tailoring plan."""

import pytest

from config import Settings
from models.schemas.impact import ImpactResult, MetricCategories
from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.soft_skills import SoftSkillAssessment
from models.schemas.uniqueness import UniquenessResult
from services.gemini_client import ModelAPIError
from services.tailoring.orchestrator import plan_tailoring, run_pre_analysis

UNIQUENESS = {"score": 72, "factors": [{"type": "domain_expertise", "title": "Payments", "rarity": "rare"}]}
IMPACT = {"score": 45, "bullets": [{"original": "Worked on CI/CD pipelines", "improvement": "major"}]}
CONTEXT = {"score": 68, "keyword_coverage": {"matched": 2, "total": 3, "percentage": 66}}
COMPANY = {"company_name": "Acme Payments", "industry": "Fintech", "funding_data": {"stage": "Series B"}}


def routes():
    return {
        "personal branding": UNIQUENESS,
        "metrics-driven": IMPACT,
        "ATS (Applicant": CONTEXT,
        "career research analyst": COMPANY,
    }


class TestRunPreAnalysis:
    @pytest.mark.asyncio
    async def test_runs_all_modules(self, settings, routing_client, resume, job):
        client = routing_client(routes())
        result = await run_pre_analysis(resume, job, settings, client, resume_id="r-1", job_id="j-1")

        assert result.errors == {}
        assert result.uniqueness.score == 72
        assert result.impact.total_bullets == 3
        assert result.context.score == 68
        # Company comes from the job and is condensed for tailoring
        assert result.company.company_name == "Acme Payments"
        assert result.company.size == "startup"
        assert result.company.industry == "Fintech"
        assert result.analyzed_at is not None
        assert (result.resume_id, result.job_id) == ("r-1", "j-1")
        assert len(client.requests) == 4

    @pytest.mark.asyncio
    async def test_without_job_skips_context_and_company(self, settings, routing_client, resume):
        client = routing_client(routes())
        result = await run_pre_analysis(resume, None, settings, client)
        assert result.context is None
        assert result.company is None
        assert result.errors == {}
        assert len(client.requests) == 2

    @pytest.mark.asyncio
    async def test_explicit_company_name(self, settings, routing_client, resume):
        client = routing_client(routes())
        result = await run_pre_analysis(resume, None, settings, client, company_name="Acme Payments")
        assert result.company is not None
        assert result.context is None

    @pytest.mark.asyncio
    async def test_failed_module_recorded(self, settings, routing_client, resume, job):
        table = routes()
        table["metrics-driven"] = ModelAPIError("bad request", status=400)
        table["career research analyst"] = "not json at all"
        result = await run_pre_analysis(resume, job, settings, routing_client(table))

        assert result.impact is None
        assert result.company is None
        assert result.errors == {"impact": "BAD_REQUEST", "company": "PARSE_ERROR"}
        assert result.uniqueness is not None
        assert result.context is not None

    @pytest.mark.asyncio
    async def test_not_configured(self, routing_client, resume, job):
        result = await run_pre_analysis(resume, job, Settings(gemini_api_key=""), routing_client(routes()))
        assert set(result.errors.values()) == {"AI_NOT_CONFIGURED"}
        assert set(result.errors) == {"uniqueness", "impact", "context", "company"}

    @pytest.mark.asyncio
    async def test_soft_skills_passed_through(self, settings, routing_client, resume):
        skills = [SoftSkillAssessment(skill="Leadership", strength="strong")]
        result = await run_pre_analysis(resume, None, settings, routing_client(routes()), soft_skills=skills)
        assert result.soft_skills == skills


class TestPlanTailoring:
    def test_weak_resume_plan(self):
        analysis = PreAnalysisResult(
            uniqueness=UniquenessResult(score=35, score_label="low"),
            impact=ImpactResult(score=30, score_label="weak", bullets_improved=3, metric_categories=MetricCategories()),
        )
        plan = plan_tailoring(analysis)

        assert plan.rules_evaluated == 30
        assert plan.instructions[0].rule_id == "impact-low-score-major-transform"
        assert plan.overall_tone == "measured"
        assert [r.rule_id for r in plan.applied_rules] == list(dict.fromkeys(i.rule_id for i in plan.instructions))
        assert all(r.matched for r in plan.applied_rules)
        assert plan.readiness.label == "needs_work"

    def test_no_matches_uses_readiness_for_tone(self):
        analysis = PreAnalysisResult(uniqueness=UniquenessResult(score=95))
        plan = plan_tailoring(analysis, rules=[])
        assert plan.instructions == []
        assert plan.rules_evaluated == 0
        assert plan.overall_tone == "measured"

    def test_low_impact_plan_without_company(self):
        analysis = PreAnalysisResult.model_validate(
            {"impact": {"score": 30, "metric_categories": {"percentage": 0}}, "company": None, "soft_skills": []}
        )
        plan = plan_tailoring(analysis)
        rule_ids = [i.rule_id for i in plan.instructions]

        assert "impact-low-score-major-transform" in rule_ids
        assert not any(r.startswith("context-") for r in rule_ids)
        assert plan.readiness.dimensions.impact.label == "weak"
        assert plan.readiness.dimensions.context_translation.raw == 70

    def test_plan_carries_referenced_templates(self):
        analysis = PreAnalysisResult(impact=ImpactResult(score=30, metric_categories=MetricCategories()))
        plan = plan_tailoring(analysis)

        referenced = [i.template_id for i in plan.instructions if i.template_id]
        assert [t.id for t in plan.templates] == list(dict.fromkeys(referenced))
        assert plan.templates[0].id == "FULL_CAR_TRANSFORM"
        assert "{" in plan.templates[0].pattern
