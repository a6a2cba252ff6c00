"""U.S. context rules (recruiter issue #3: unknown companies need context).

U.S. recruiters skim past employers they do not recognize. These rules add
size, industry and comparable-company context, and normalize job titles
to U.S. conventions.
"""

from models.schemas.rules import (
    ContextualizeAction,
    ContextualizeData,
    EnhanceAction,
    EnhanceData,
    TransformationRule,
)
from services.tailoring.conditions import all_of, exists, match

INDUSTRY_COMPARABLES = {
    "fintech": ["Stripe", "Square", "Plaid"],
    "edtech": ["Coursera", "Duolingo", "Khan Academy"],
    "healthtech": ["Oscar", "Ro", "Headspace"],
    "ecommerce": ["Shopify", "Amazon", "Etsy"],
    "saas": ["Salesforce", "Slack", "Notion"],
    "ai": ["OpenAI", "Anthropic", "Scale AI"],
}

US_TITLE_MAPPINGS = {
    "programme manager": "Program Manager",
    "senior programme manager": "Senior Program Manager",
    "engineering manager": "Engineering Manager",
    "technical lead": "Tech Lead / Staff Engineer",
    "chief technology officer": "CTO",
    "managing director": "VP / Director",
}

US_CONTEXT_RULES: list[TransformationRule] = [
    TransformationRule(
        id="us-context-unknown-company",
        name="Describe Unknown Company",
        description="Add a short description after employers a U.S. recruiter will not recognize",
        priority=12,
        recruiter_issue=3,
        condition=all_of(
            exists("company"),
            match("company.is_well_known", "=", False),
        ),
        actions=[
            ContextualizeAction(
                target="experience",
                template_id="COMPANY_CONTEXT_STARTUP",
                data=ContextualizeData(
                    add_company_description=True,
                    format="{company} (description)",
                    description_types=[
                        "industry leader in X",
                        "Y-person startup",
                        "Series X fintech company",
                        "Similar to early-stage Z",
                    ],
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="us-context-add-scale",
        name="Add Scale Indicators",
        description="Show the scale of work done at smaller or unknown companies",
        priority=15,
        recruiter_issue=3,
        condition=all_of(
            exists("company"),
            match("company.size", "in", ["startup", "growth", "unknown"]),
        ),
        actions=[
            EnhanceAction(
                target="bullet",
                data=EnhanceData(
                    add_scale_indicators=True,
                    scale_types=[
                        "serving X+ users",
                        "processing $Xm in transactions",
                        "across X countries",
                    ],
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="us-context-comparable-companies",
        name="Reference Comparable Companies",
        description="Compare unknown employers to well-known U.S. companies in the same industry",
        priority=18,
        recruiter_issue=3,
        condition=all_of(
            exists("company"),
            match("company.is_well_known", "=", False),
            exists("company.industry"),
        ),
        actions=[
            ContextualizeAction(
                target="experience",
                template_id="COMPANY_CONTEXT_COMPARABLE",
                data=ContextualizeData(
                    add_comparable=True,
                    comparable_format="(Similar to early-stage {comparable})",
                    industry_mappings=INDUSTRY_COMPARABLES,
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="us-context-translate-titles",
        name="Translate Job Titles",
        description="Normalize job titles to their U.S. equivalents",
        priority=20,
        recruiter_issue=3,
        condition=exists("context.experience_alignments"),
        actions=[
            EnhanceAction(
                target="experience",
                data=EnhanceData(normalize_job_titles=True, title_mappings=US_TITLE_MAPPINGS),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="us-context-industry-translation",
        name="Add Industry Context",
        description="Name the industry in bullets from unknown employers",
        priority=22,
        recruiter_issue=3,
        condition=all_of(
            exists("company.industry"),
            match("company.is_well_known", "=", False),
        ),
        actions=[
            ContextualizeAction(
                target="bullet",
                data=ContextualizeData(
                    add_industry_context=True,
                    format_patterns=[
                        "in the {industry} sector",
                        "for {industry} applications",
                        "serving {industry} clients",
                    ],
                ),
            )
        ],
        strategic_tone="confident",
    ),
]
