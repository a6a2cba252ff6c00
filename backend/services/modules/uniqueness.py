"""Uniqueness analysis: the rare combinations that set a candidate apart."""

import logging
import uuid

from models.schemas.resume import JobData, ResumeContent
from models.schemas.uniqueness import (
    AreaSuggestion,
    UniquenessFactor,
    UniquenessLabel,
    UniquenessResult,
)
from services.modules.base import (
    BaseAnalysisModule,
    as_dicts,
    as_str,
    as_str_list,
    clamp_int,
    pick,
    whitelist,
)
from services.modules.errors import UniquenessAnalysisError
from services.prompt_builder import UNIQUENESS_SYSTEM_PROMPT, build_uniqueness_prompt

logger = logging.getLogger(__name__)

FACTOR_TYPES = (
    "skill_combination",
    "career_transition",
    "unique_experience",
    "domain_expertise",
    "achievement",
    "education",
)
RARITIES = ("uncommon", "rare", "very_rare")


def get_uniqueness_label(score: int) -> UniquenessLabel:
    if score >= 85:
        return "exceptional"
    if score >= 65:
        return "high"
    if score >= 40:
        return "moderate"
    return "low"


def normalize_suggestions(raw) -> list[AreaSuggestion]:
    return [
        AreaSuggestion(
            area=as_str(s.get("area"), "General"),
            recommendation=as_str(s.get("recommendation")),
        )
        for s in as_dicts(raw)
    ]


class UniquenessModule(BaseAnalysisModule):
    name = "uniqueness"
    task = "uniqueness"
    system_prompt = UNIQUENESS_SYSTEM_PROMPT
    error_class = UniquenessAnalysisError

    async def analyze(self, resume: ResumeContent, job: JobData | None = None) -> UniquenessResult:
        self.ensure_configured()
        if not resume.experiences and not resume.skills.technical:
            raise self.fail("Resume must have experiences or skills to analyze.", "INSUFFICIENT_CONTENT")
        return await self.run(build_uniqueness_prompt(resume, job))

    def normalize(self, data: dict) -> UniquenessResult:
        factors = [
            UniquenessFactor(
                id=str(uuid.uuid4()),
                type=whitelist(f.get("type"), FACTOR_TYPES, "unique_experience"),
                title=as_str(f.get("title"), f"Factor {i + 1}"),
                description=as_str(f.get("description")),
                rarity=whitelist(f.get("rarity"), RARITIES, "uncommon"),
                evidence=as_str_list(f.get("evidence")),
                suggestion=as_str(f.get("suggestion")),
            )
            for i, f in enumerate(as_dicts(data.get("factors")))
        ]
        score = clamp_int(data.get("score"), 0, 100, 50)

        return UniquenessResult(
            score=score,
            score_label=get_uniqueness_label(score),
            factors=factors,
            summary=as_str(data.get("summary"), "Analysis complete."),
            differentiators=as_str_list(pick(data, "differentiators")),
            suggestions=normalize_suggestions(data.get("suggestions")),
        )
