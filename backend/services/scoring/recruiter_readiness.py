"""Recruiter readiness: a weighted composite over the five recruiter issues.

1. Uniqueness (20%): standing out from other candidates
2. Impact (30%): quantified achievements
3. Context translation (15%): U.S. context for unknown companies
4. Cultural fit (10%): soft-skill evidence
5. Customization (25%): alignment with this specific job

Pure functions of a PreAnalysisResult. A module that failed during
pre-analysis scores a neutral 50 on its dimension and is flagged as
defaulted, so one failed module does not sink the composite.
"""

import logging

from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.readiness import (
    Dimension,
    DimensionScore,
    ReadinessDimensions,
    RecruiterReadinessScore,
    TopSuggestion,
)
from services.modules.context import get_context_label
from services.modules.impact import get_impact_label
from services.modules.uniqueness import get_uniqueness_label
from services.scoring.thresholds import get_score_label, get_suggestion_impact

logger = logging.getLogger(__name__)

DIMENSION_WEIGHTS: dict[Dimension, float] = {
    "uniqueness": 0.20,
    "impact": 0.30,
    "context_translation": 0.15,
    "cultural_fit": 0.10,
    "customization": 0.25,
}

NEUTRAL_SCORE = 50
MAX_SUGGESTIONS_PER_DIMENSION = 2
MAX_TOP_SUGGESTIONS = 3

_IMPACT_ORDER = {"high": 0, "medium": 1, "low": 2}


def _clamp_score(raw: float) -> int:
    return int(round(max(0, min(100, raw))))


def _dimension(
    dimension: Dimension,
    raw: float,
    label: str,
    suggestions: list[str],
    defaulted: bool = False,
) -> DimensionScore:
    weight = DIMENSION_WEIGHTS[dimension]
    raw = _clamp_score(raw)
    return DimensionScore(
        raw=raw,
        weighted=raw * weight,
        weight=weight,
        label=label,
        suggestions=suggestions[:MAX_SUGGESTIONS_PER_DIMENSION],
        defaulted=defaulted,
    )


def _neutral(dimension: Dimension) -> DimensionScore:
    return _dimension(dimension, NEUTRAL_SCORE, get_score_label(NEUTRAL_SCORE), [], defaulted=True)


def score_uniqueness(analysis: PreAnalysisResult) -> DimensionScore:
    result = analysis.uniqueness
    if result is None:
        return _neutral("uniqueness")

    raw = _clamp_score(result.score)
    suggestions = []
    if raw < 50:
        suggestions.append("Highlight unique skill combinations that set you apart")
    if not any(f.rarity == "very_rare" for f in result.factors):
        suggestions.append("Identify and emphasize your rarest qualifications")
    if raw < 70:
        suggestions.append("Add career transitions or cross-domain expertise to your narrative")
    return _dimension("uniqueness", raw, get_uniqueness_label(raw), suggestions)


def score_impact(analysis: PreAnalysisResult) -> DimensionScore:
    result = analysis.impact
    if result is None:
        return _neutral("impact")

    raw = _clamp_score(result.score)
    suggestions = []
    if raw < 50:
        suggestions.append("Add specific metrics to your achievement statements (%, $, #)")
    if result.metric_categories.percentage < 2:
        suggestions.append("Include improvement percentages (increased by X%, reduced by Y%)")
    if result.metric_categories.scale < 2:
        suggestions.append("Add scale context (team size, user base, transaction volume)")
    if result.bullets_improved > result.total_bullets * 0.5:
        suggestions.append("Most bullets need stronger quantification")
    return _dimension("impact", raw, get_impact_label(raw), suggestions)


def score_context_translation(analysis: PreAnalysisResult) -> DimensionScore:
    company = analysis.company
    if company is None:
        raw = 70  # nothing to translate
    elif company.is_well_known:
        raw = 100
    elif company.comparable:
        raw = 80
    elif company.context:
        raw = 60
    else:
        raw = 30

    suggestions = []
    if company is not None and not company.is_well_known:
        suggestions.append("Add context for unfamiliar companies (size, industry, comparable companies)")
    if raw < 70:
        suggestions.append("Include company descriptions that U.S. recruiters will understand")
    return _dimension("context_translation", raw, get_score_label(raw), suggestions)


def score_cultural_fit(analysis: PreAnalysisResult) -> DimensionScore:
    skills = analysis.soft_skills
    if not skills:
        raw = 30
    else:
        strong = sum(1 for s in skills if s.strength == "strong")
        moderate = sum(1 for s in skills if s.strength == "moderate")
        raw = min(100, 30 + strong * 20 + moderate * 10)

    names = {s.skill.strip().lower() for s in skills}
    suggestions = []
    if raw < 50:
        suggestions.append("Add evidence of soft skills like leadership, collaboration, communication")
    if "leadership" not in names:
        suggestions.append("Highlight leadership experiences (led, mentored, coached)")
    if "collaboration" not in names:
        suggestions.append("Show collaboration evidence (partnered, cross-functional, stakeholders)")
    return _dimension("cultural_fit", raw, get_score_label(raw), suggestions)


def score_customization(analysis: PreAnalysisResult) -> DimensionScore:
    result = analysis.context
    if result is None:
        return _neutral("customization")

    raw = _clamp_score(result.score)
    suggestions = []
    if result.keyword_coverage.percentage < 60:
        suggestions.append("Include more keywords from the job description naturally")
    if any(r.importance == "critical" for r in result.missing_requirements):
        suggestions.append("Address critical missing requirements in your resume")
    if not any(e.relevance == "high" for e in result.experience_alignments):
        suggestions.append("Tailor experience descriptions to highlight relevant aspects")
    if raw < 70:
        suggestions.append("Customize your summary and skills section for this specific role")
    return _dimension("customization", raw, get_context_label(raw), suggestions)


def _top_suggestions(dimensions: dict[Dimension, DimensionScore]) -> list[TopSuggestion]:
    ranked = []
    for name, dim in dimensions.items():
        impact = get_suggestion_impact(dim.raw)
        for action in dim.suggestions:
            ranked.append((_IMPACT_ORDER[impact], dim.raw, TopSuggestion(dimension=name, action=action, impact=impact)))
    # Stable: within the same bucket and score, dimension order is kept
    ranked.sort(key=lambda item: (item[0], item[1]))
    return [item[2] for item in ranked[:MAX_TOP_SUGGESTIONS]]


def calculate_recruiter_readiness(analysis: PreAnalysisResult) -> RecruiterReadinessScore:
    """Score a pre-analysis snapshot across the five recruiter issues."""
    dimensions: dict[Dimension, DimensionScore] = {
        "uniqueness": score_uniqueness(analysis),
        "impact": score_impact(analysis),
        "context_translation": score_context_translation(analysis),
        "cultural_fit": score_cultural_fit(analysis),
        "customization": score_customization(analysis),
    }

    composite = int(round(sum(d.weighted for d in dimensions.values())))
    defaulted = [name for name, d in dimensions.items() if d.defaulted]
    if defaulted:
        logger.info("Readiness scored with neutral defaults for: %s", ", ".join(defaulted))

    return RecruiterReadinessScore(
        composite=composite,
        label=get_score_label(composite),
        dimensions=ReadinessDimensions(**dimensions),
        top_suggestions=_top_suggestions(dimensions),
    )


def get_score_summary(score: RecruiterReadinessScore) -> str:
    if score.composite >= 90:
        return "Exceptional match! Your resume is well-optimized for this role."
    if score.composite >= 75:
        return "Strong match! A few targeted improvements could make your application even stronger."
    if score.composite >= 60:
        return "Good potential. Focus on the suggested improvements to stand out."
    if score.composite >= 45:
        return "Room for improvement. Your resume needs more tailoring for this specific role."
    return "Significant work needed. Consider major revisions to improve your match."


def get_most_impactful_improvement(score: RecruiterReadinessScore) -> Dimension:
    """Dimension with the most weighted headroom, (100 - raw) * weight."""
    dims = score.dimensions.model_dump()
    return max(dims, key=lambda name: (100 - dims[name]["raw"]) * dims[name]["weight"])
