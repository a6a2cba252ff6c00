"""Context analysis: how well a resume lines up with one target job."""

import logging

from models.schemas.context import (
    AlignmentLabel,
    ContextResult,
    ContextSuggestion,
    ExperienceAlignment,
    FitAssessment,
    KeywordCoverage,
    KeywordHit,
    MatchedSkill,
    MissingRequirement,
)
from models.schemas.resume import JobData, ResumeContent
from services.modules.base import (
    BaseAnalysisModule,
    as_dicts,
    as_optional_str,
    as_str,
    as_str_list,
    clamp_int,
    count,
    pick,
    whitelist,
)
from services.modules.errors import ContextAnalysisError
from services.prompt_builder import CONTEXT_SYSTEM_PROMPT, build_context_prompt

logger = logging.getLogger(__name__)

SKILL_SOURCES = ("technical", "soft", "experience", "education")
MATCH_STRENGTHS = ("exact", "related", "transferable")
IMPORTANCE_LEVELS = ("critical", "important", "nice_to_have")
RELEVANCE_LEVELS = ("high", "medium", "low")
SUGGESTION_CATEGORIES = ("skills", "experience", "keywords", "tailoring")


def get_context_label(score: int) -> AlignmentLabel:
    if score >= 85:
        return "excellent"
    if score >= 70:
        return "good"
    if score >= 50:
        return "moderate"
    if score >= 30:
        return "weak"
    return "poor"


def _keyword_coverage(raw) -> KeywordCoverage:
    if not isinstance(raw, dict):
        return KeywordCoverage()
    return KeywordCoverage(
        matched=count(raw.get("matched")),
        total=count(raw.get("total")),
        percentage=clamp_int(raw.get("percentage"), 0, 100, 0),
        keywords=[
            KeywordHit(
                keyword=as_str(k.get("keyword")),
                found=k.get("found") is True,
                location=as_optional_str(k.get("location")),
            )
            for k in as_dicts(raw.get("keywords"))
        ],
    )


def _fit_assessment(raw) -> FitAssessment:
    if not isinstance(raw, dict):
        return FitAssessment()
    return FitAssessment(
        strengths=as_str_list(raw.get("strengths")),
        gaps=as_str_list(raw.get("gaps")),
        overall_fit=as_str(pick(raw, "overall_fit", "overallFit")),
    )


class ContextModule(BaseAnalysisModule):
    name = "context"
    task = "context"
    system_prompt = CONTEXT_SYSTEM_PROMPT
    error_class = ContextAnalysisError

    async def analyze(self, resume: ResumeContent, job: JobData) -> ContextResult:
        self.ensure_configured()
        if not resume.experiences and not resume.skills.technical:
            raise self.fail("Resume must have experiences or skills to analyze.", "INSUFFICIENT_CONTENT")
        if not job.has_content:
            raise self.fail(
                "Job must have a description, requirements, or skills to analyze.",
                "INSUFFICIENT_JOB_CONTENT",
            )
        return await self.run(build_context_prompt(resume, job))

    def normalize(self, data: dict) -> ContextResult:
        matched_skills = [
            MatchedSkill(
                skill=as_str(s.get("skill")),
                source=whitelist(s.get("source"), SKILL_SOURCES, "technical"),
                strength=whitelist(s.get("strength"), MATCH_STRENGTHS, "related"),
                evidence=as_str(s.get("evidence")),
            )
            for s in as_dicts(pick(data, "matched_skills", "matchedSkills"))
        ]
        missing = [
            MissingRequirement(
                requirement=as_str(r.get("requirement")),
                importance=whitelist(r.get("importance"), IMPORTANCE_LEVELS, "important"),
                suggestion=as_str(r.get("suggestion")),
            )
            for r in as_dicts(pick(data, "missing_requirements", "missingRequirements"))
        ]
        alignments = [
            ExperienceAlignment(
                experience_id=as_str(pick(e, "experience_id", "experienceId"), f"exp-{i}"),
                experience_title=as_str(pick(e, "experience_title", "experienceTitle")),
                company_name=as_str(pick(e, "company_name", "companyName")),
                relevance=whitelist(e.get("relevance"), RELEVANCE_LEVELS, "medium"),
                matched_aspects=as_str_list(pick(e, "matched_aspects", "matchedAspects")),
                explanation=as_str(e.get("explanation")),
            )
            for i, e in enumerate(as_dicts(pick(data, "experience_alignments", "experienceAlignments")))
        ]
        suggestions = [
            ContextSuggestion(
                category=whitelist(s.get("category"), SUGGESTION_CATEGORIES, "tailoring"),
                priority=whitelist(s.get("priority"), RELEVANCE_LEVELS, "medium"),
                recommendation=as_str(s.get("recommendation")),
            )
            for s in as_dicts(data.get("suggestions"))
        ]
        score = clamp_int(data.get("score"), 0, 100, 50)

        return ContextResult(
            score=score,
            score_label=get_context_label(score),
            summary=as_str(data.get("summary"), "Analysis complete."),
            matched_skills=matched_skills,
            missing_requirements=missing,
            experience_alignments=alignments,
            keyword_coverage=_keyword_coverage(pick(data, "keyword_coverage", "keywordCoverage")),
            suggestions=suggestions,
            fit_assessment=_fit_assessment(pick(data, "fit_assessment", "fitAssessment")),
        )
