"""Customization rules (recruiter issue #5: generic applications)."""

from models.schemas.rules import (
    EnhanceAction,
    EnhanceData,
    InjectKeywordsAction,
    KeywordData,
    ReorderAction,
    ReorderData,
    TransformationRule,
)
from services.tailoring.conditions import exists, threshold

CONTEXT_RULES: list[TransformationRule] = [
    TransformationRule(
        id="context-inject-missing-keywords",
        name="Inject Missing Keywords",
        description="Work missing job keywords into existing bullets",
        priority=10,
        recruiter_issue=5,
        condition=threshold("context.keyword_coverage.percentage", "<", 70),
        actions=[
            InjectKeywordsAction(
                target="bullet",
                template_id="NATURAL_KEYWORD_INSERT",
                data=KeywordData(max_per_bullet=2, natural_integration=True, avoid_keyword_stuffing=True),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="context-reorder-skills-by-relevance",
        name="Reorder Skills by Relevance",
        description="Put skills that match the job first",
        priority=15,
        recruiter_issue=5,
        condition=threshold("context.matched_skills.length", ">", 0),
        actions=[
            ReorderAction(
                target="skills",
                data=ReorderData(sort_by="match_strength", matched_first=True),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="context-tailor-summary-to-role",
        name="Tailor Summary to Role",
        description="Name the target role and lead with fit strengths",
        priority=8,
        recruiter_issue=5,
        condition=exists("context.fit_assessment.strengths"),
        actions=[
            EnhanceAction(
                target="summary",
                data=EnhanceData(
                    lead_with="strengths",
                    include_role_title=True,
                    highlight_strengths=True,
                    align_with_company_values=True,
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="context-address-gaps",
        name="Address Requirement Gaps",
        description="Bridge critical gaps with transferable experience",
        priority=12,
        recruiter_issue=5,
        condition=exists("context.missing_requirements"),
        actions=[
            EnhanceAction(
                target="bullet",
                data=EnhanceData(show_transferable_skills=True, bridge_gaps=True, focus_on="critical"),
            )
        ],
        strategic_tone="measured",
    ),
    TransformationRule(
        id="context-low-match-strategic-pivot",
        name="Strategic Pivot for Low Match",
        description="Reposition the summary around transferable skills for stretch roles",
        priority=5,
        recruiter_issue=5,
        condition=threshold("context.score", "<", 50),
        actions=[
            EnhanceAction(
                target="summary",
                data=EnhanceData(
                    emphasize_transferable_skills=True,
                    show_learning_agility=True,
                    tone_down=True,
                ),
            )
        ],
        strategic_tone="humble",
    ),
    TransformationRule(
        id="context-excellent-match-confidence",
        name="Confident Positioning for Strong Match",
        description="Position the candidate as the ideal fit",
        priority=20,
        recruiter_issue=5,
        condition=threshold("context.score", ">=", 80),
        actions=[
            EnhanceAction(
                target="summary",
                data=EnhanceData(position_as_ideal_candidate=True, emphasize_direct_experience=True),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="context-highlight-relevant-experiences",
        name="Highlight Relevant Experiences",
        description="Add relevance context to the experiences that align with the job",
        priority=18,
        recruiter_issue=5,
        condition=exists("context.experience_alignments"),
        actions=[
            EnhanceAction(
                target="experience",
                data=EnhanceData(highlight_relevant=True, add_relevance_context=True),
            )
        ],
        strategic_tone="confident",
    ),
]
