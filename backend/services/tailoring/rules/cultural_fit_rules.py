"""Cultural fit rules (recruiter issue #4: not showing cultural fit).

Weave evidence of soft skills into existing bullets using the action verbs
recruiters associate with each skill.
"""

from models.schemas.rules import (
    AddSoftSkillsAction,
    EnhanceAction,
    EnhanceData,
    SoftSkillData,
    TransformationRule,
)
from services.tailoring.conditions import all_of, any_of, exists, match, negate, threshold

SOFT_SKILL_SIGNALS = {
    "leadership": ["led", "managed", "mentored", "coached", "spearheaded", "directed", "drove"],
    "collaboration": ["collaborated", "partnered", "cross-functional", "stakeholders", "aligned", "coordinated"],
    "communication": ["presented", "communicated", "articulated", "documented", "reported", "briefed"],
    "initiative": ["initiated", "proposed", "championed", "identified", "pioneered", "launched"],
    "problem-solving": ["solved", "resolved", "diagnosed", "analyzed", "optimized", "improved"],
}


def _weave_rule(skill: str, priority: int, name: str, template_id: str | None = None) -> TransformationRule:
    return TransformationRule(
        id=f"cultural-weave-{skill}",
        name=name,
        description=f"Weave {skill} evidence into bullets that already imply it",
        priority=priority,
        recruiter_issue=4,
        condition=all_of(
            exists("soft_skills"),
            match("soft_skills", "contains", skill),
        ),
        actions=[
            AddSoftSkillsAction(
                target="bullet",
                template_id=template_id,
                data=SoftSkillData(
                    skill=skill,
                    signals=SOFT_SKILL_SIGNALS[skill],
                    natural_integration=True,
                ),
            )
        ],
        strategic_tone="confident",
    )


CULTURAL_FIT_RULES: list[TransformationRule] = [
    _weave_rule("leadership", 15, "Weave Leadership Evidence", "LEADERSHIP_INTEGRATION"),
    _weave_rule("collaboration", 18, "Weave Collaboration Evidence", "COLLABORATION_INTEGRATION"),
    _weave_rule("communication", 20, "Weave Communication Evidence", "COMMUNICATION_INTEGRATION"),
    TransformationRule(
        id="cultural-add-initiative",
        name="Show Initiative",
        description="Surface self-started work with initiative verbs",
        priority=22,
        recruiter_issue=4,
        condition=all_of(
            exists("soft_skills"),
            match("soft_skills", "contains", "initiative"),
        ),
        actions=[
            AddSoftSkillsAction(
                target="bullet",
                data=SoftSkillData(
                    skill="initiative",
                    signals=SOFT_SKILL_SIGNALS["initiative"],
                    natural_integration=True,
                ),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="cultural-weak-soft-skills",
        name="Add Baseline Soft Skill Signals",
        description="Add collaboration and communication signals when little soft-skill evidence exists",
        priority=10,
        recruiter_issue=4,
        condition=any_of(
            negate(exists("soft_skills")),
            threshold("soft_skills.length", "<", 2),
        ),
        actions=[
            AddSoftSkillsAction(
                target="bullet",
                data=SoftSkillData(
                    add_generic_signals=True,
                    focus_on=["collaboration", "communication"],
                    look_for_opportunities=True,
                ),
            )
        ],
        strategic_tone="measured",
    ),
    TransformationRule(
        id="cultural-summary-values",
        name="Mention Soft Skills in Summary",
        description="Mention the top soft skills in the professional summary",
        priority=12,
        recruiter_issue=4,
        condition=exists("soft_skills"),
        actions=[
            EnhanceAction(
                target="summary",
                data=EnhanceData(include_top_soft_skills=True, max_skills=2, natural_integration=True),
            )
        ],
        strategic_tone="confident",
    ),
    TransformationRule(
        id="cultural-problem-solving",
        name="Show Problem Solving",
        description="Frame bullets around problems diagnosed and solved",
        priority=25,
        recruiter_issue=4,
        condition=match("soft_skills", "contains", "problem solving"),
        actions=[
            AddSoftSkillsAction(
                target="bullet",
                data=SoftSkillData(
                    skill="problem-solving",
                    signals=SOFT_SKILL_SIGNALS["problem-solving"],
                ),
            )
        ],
        strategic_tone="confident",
    ),
]
