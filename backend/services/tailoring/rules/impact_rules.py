"""Impact rules (recruiter issue #2: lists duties, not impact).

Turn vague duty statements into quantified achievements, mostly via the
CAR (Challenge-Action-Result) bullet templates.
"""

from models.schemas.rules import (
    ApplyTemplateAction,
    EnhanceAction,
    EnhanceData,
    TemplateData,
    TransformationRule,
)
from services.tailoring.conditions import all_of, threshold

IMPACT_RULES: list[TransformationRule] = [
    TransformationRule(
        id="impact-transform-weak-bullets",
        name="Transform Weak Bullets",
        description="Apply CAR format to bullets marked as needing improvement",
        priority=10,
        recruiter_issue=2,
        condition=threshold("impact.bullets_improved", ">", 0),
        actions=[ApplyTemplateAction(target="bullet", template_id="CAR_FORMAT")],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="impact-add-scale-context",
        name="Add Scale Context",
        description="Add user base, team size, or volume metrics to bullets",
        priority=15,
        recruiter_issue=2,
        condition=all_of(
            threshold("impact.score", "<", 70),
            threshold("impact.metric_categories.scale", "<", 3),
        ),
        actions=[
            EnhanceAction(
                target="bullet",
                template_id="SCALE_ENHANCEMENT",
                data=EnhanceData(
                    metric_type="scale",
                    examples=[
                        "serving X users",
                        "team of X engineers",
                        "processing X transactions/day",
                    ],
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="impact-add-percentage-metrics",
        name="Add Percentage Improvements",
        description="Add improvement percentages to bullets lacking them",
        priority=20,
        recruiter_issue=2,
        condition=all_of(
            threshold("impact.metric_categories.percentage", "<", 2),
            threshold("impact.bullets_improved", ">", 2),
        ),
        actions=[
            EnhanceAction(
                target="bullet",
                template_id="PERCENTAGE_IMPROVEMENT",
                data=EnhanceData(
                    metric_type="percentage",
                    patterns=["improved X by Y%", "reduced X by Y%", "increased X by Y%"],
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="impact-add-time-metrics",
        name="Add Time Savings",
        description="Add time-related metrics (saved X hours, accelerated by X weeks)",
        priority=25,
        recruiter_issue=2,
        condition=all_of(
            threshold("impact.metric_categories.time", "<", 1),
            threshold("impact.score", "<", 75),
        ),
        actions=[
            EnhanceAction(
                target="bullet",
                template_id="TIME_SAVINGS",
                data=EnhanceData(
                    metric_type="time",
                    patterns=[
                        "reducing time from X to Y",
                        "saving X hours per week",
                        "accelerating delivery by X weeks",
                    ],
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="impact-low-score-major-transform",
        name="Major Transformation for Low Impact",
        description="Completely transform bullets for resumes with very low impact scores",
        priority=5,
        recruiter_issue=2,
        condition=threshold("impact.score", "<", 40),
        actions=[
            ApplyTemplateAction(
                target="bullet",
                template_id="FULL_CAR_TRANSFORM",
                data=TemplateData(require_metrics=True, require_action_verb=True, require_result=True),
            )
        ],
        strategic_tone="measured",  # careful with weak resumes
    ),
]
