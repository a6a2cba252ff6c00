"""Impact analysis: how well achievements are quantified, bullet by bullet."""

import logging
import uuid

from models.schemas.impact import ImpactBullet, ImpactLabel, ImpactResult, MetricCategories
from models.schemas.resume import JobData, ResumeContent
from services.modules.base import (
    BaseAnalysisModule,
    as_dicts,
    as_str,
    as_str_list,
    clamp_int,
    count,
    pick,
    whitelist,
)
from services.modules.errors import ImpactAnalysisError
from services.modules.uniqueness import normalize_suggestions
from services.prompt_builder import IMPACT_SYSTEM_PROMPT, build_impact_prompt

logger = logging.getLogger(__name__)

IMPROVEMENT_LEVELS = ("none", "minor", "major", "transformed")


def get_impact_label(score: int) -> ImpactLabel:
    if score >= 85:
        return "exceptional"
    if score >= 65:
        return "strong"
    if score >= 40:
        return "moderate"
    return "weak"


class ImpactModule(BaseAnalysisModule):
    name = "impact"
    task = "impact"
    system_prompt = IMPACT_SYSTEM_PROMPT
    error_class = ImpactAnalysisError

    async def analyze(self, resume: ResumeContent, job: JobData | None = None) -> ImpactResult:
        self.ensure_configured()
        total_bullets = resume.bullet_count
        if total_bullets == 0:
            raise self.fail("Resume must have experience bullets to analyze.", "INSUFFICIENT_CONTENT")
        return await self.run(build_impact_prompt(resume, job), total_bullets=total_bullets)

    def normalize(self, data: dict, total_bullets: int | None = None) -> ImpactResult:
        bullets = []
        for i, b in enumerate(as_dicts(data.get("bullets"))):
            original = as_str(b.get("original"))
            bullets.append(
                ImpactBullet(
                    id=str(uuid.uuid4()),
                    experience_id=as_str(pick(b, "experience_id", "experienceId"), f"exp-{i}"),
                    experience_title=as_str(pick(b, "experience_title", "experienceTitle"), "Unknown Position"),
                    company_name=as_str(pick(b, "company_name", "companyName"), "Unknown Company"),
                    original=original,
                    improved=as_str(b.get("improved"), original),
                    metrics=as_str_list(b.get("metrics")),
                    improvement=whitelist(b.get("improvement"), IMPROVEMENT_LEVELS, "none"),
                    explanation=as_str(b.get("explanation")),
                )
            )

        categories = pick(data, "metric_categories", "metricCategories", default={})
        if not isinstance(categories, dict):
            categories = {}
        score = clamp_int(data.get("score"), 0, 100, 50)

        return ImpactResult(
            score=score,
            score_label=get_impact_label(score),
            summary=as_str(data.get("summary"), "Analysis complete."),
            total_bullets=len(bullets) if total_bullets is None else total_bullets,
            bullets_improved=sum(1 for b in bullets if b.improvement != "none"),
            bullets=bullets,
            metric_categories=MetricCategories(
                percentage=count(categories.get("percentage")),
                monetary=count(categories.get("monetary")),
                time=count(categories.get("time")),
                scale=count(categories.get("scale")),
                other=count(categories.get("other")),
            ),
            suggestions=normalize_suggestions(data.get("suggestions")),
        )
