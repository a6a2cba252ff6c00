"""Uniqueness rules (recruiter issue #1: resumes look identical)."""

from models.schemas.rules import (
    EnhanceAction,
    EnhanceData,
    HighlightAction,
    HighlightData,
    ReorderAction,
    ReorderData,
    TransformationRule,
)
from services.tailoring.conditions import all_of, exists, match, threshold

UNIQUENESS_RULES: list[TransformationRule] = [
    TransformationRule(
        id="uniqueness-highlight-very-rare",
        name="Highlight Rare Differentiators",
        description="Promote rare and very rare factors into a 'Why I'm the Right Fit' section",
        priority=8,
        recruiter_issue=1,
        condition=exists("uniqueness.factors"),
        actions=[
            HighlightAction(
                target="section",
                data=HighlightData(
                    section="why_fit",
                    source="uniqueness.factors",
                    filter_rarity=["very_rare", "rare"],
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="uniqueness-lead-summary",
        name="Lead Summary with Differentiators",
        description="Open the summary with the strongest differentiators",
        priority=12,
        recruiter_issue=1,
        condition=all_of(
            exists("uniqueness.differentiators"),
            threshold("uniqueness.score", ">=", 50),
        ),
        actions=[
            EnhanceAction(
                target="summary",
                data=EnhanceData(lead_with="differentiators", max_differentiators=2),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="uniqueness-skill-combinations",
        name="Group Rare Skill Combinations",
        description="Reorder skills so rare combinations are visible first",
        priority=18,
        recruiter_issue=1,
        condition=all_of(
            exists("uniqueness.factors"),
            match("uniqueness.factors[0].type", "=", "skill_combination"),
        ),
        actions=[
            ReorderAction(
                target="skills",
                data=ReorderData(group_by="rarity", promote_rare=True),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="uniqueness-career-transition",
        name="Frame Career Transition",
        description="Present a career change as a strategic pivot in the summary",
        priority=22,
        recruiter_issue=1,
        condition=match("uniqueness.factors", "contains", "career_transition"),
        actions=[
            EnhanceAction(
                target="summary",
                data=EnhanceData(
                    lead_with="transition",
                    include_transition_narrative=True,
                    framing_style="strategic_pivot",
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="uniqueness-low-score-find-differentiators",
        name="Surface Hidden Differentiators",
        description="For low uniqueness, dig uncommon aspects out of existing bullets",
        priority=5,
        recruiter_issue=1,
        condition=threshold("uniqueness.score", "<", 50),
        actions=[
            EnhanceAction(
                target="bullet",
                data=EnhanceData(
                    emphasize_uncommon_aspects=True,
                    look_for=[
                        "specific technologies",
                        "project scale",
                        "industry-specific knowledge",
                        "cross-functional experience",
                    ],
                ),
            )
        ],
        strategic_tone="measured",
    ),
    TransformationRule(
        id="uniqueness-domain-expertise",
        name="Create Expertise Category",
        description="Give domain expertise its own core competencies category",
        priority=15,
        recruiter_issue=1,
        condition=match("uniqueness.factors", "contains", "domain_expertise"),
        actions=[
            HighlightAction(
                target="section",
                data=HighlightData(section="competencies", create_expertise_category=True),
            )
        ],
        strategic_tone="confident",
    ),
]
