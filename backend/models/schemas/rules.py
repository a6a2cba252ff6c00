"""Transformation rule contracts: conditions, actions, rules and instructions.

Conditions form a recursive boolean tree discriminated on ``type``. Action
payloads are closed models, one per action type.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from models.schemas.uniqueness import Rarity

StrategicTone = Literal["confident", "measured", "humble"]
TransformTarget = Literal["bullet", "summary", "skills", "experience", "section"]
RecruiterIssue = Literal[1, 2, 3, 4, 5]

RECRUITER_ISSUES = {
    1: ("Uniqueness", "Resumes look identical"),
    2: ("Impact", "Lists duties, not impact"),
    3: ("US Context", "Unknown companies need context"),
    4: ("Cultural Fit", "Not showing cultural fit"),
    5: ("Customization", "Generic applications"),
}

_FROZEN = {"frozen": True, "extra": "forbid"}


# --- Conditions ---


class ExistsCondition(BaseModel):
    model_config = _FROZEN
    type: Literal["EXISTS"] = "EXISTS"
    field: str


class MatchCondition(BaseModel):
    model_config = _FROZEN
    type: Literal["MATCH"] = "MATCH"
    field: str
    operator: Literal["=", "contains", "in"]
    value: bool | int | float | str | list[str]


class ThresholdCondition(BaseModel):
    model_config = _FROZEN
    type: Literal["THRESHOLD"] = "THRESHOLD"
    field: str
    operator: Literal["<", ">", "<=", ">="]
    value: float


class AndCondition(BaseModel):
    model_config = _FROZEN
    type: Literal["AND"] = "AND"
    conditions: list["RuleCondition"] = Field(..., min_length=1)


class OrCondition(BaseModel):
    model_config = _FROZEN
    type: Literal["OR"] = "OR"
    conditions: list["RuleCondition"] = Field(..., min_length=1)


class NotCondition(BaseModel):
    """Negation of the conjunction of ``conditions`` (use a one-item list for a single child)."""
    model_config = _FROZEN
    type: Literal["NOT"] = "NOT"
    conditions: list["RuleCondition"] = Field(..., min_length=1)


RuleCondition = Annotated[
    Union[ExistsCondition, MatchCondition, ThresholdCondition, AndCondition, OrCondition, NotCondition],
    Field(discriminator="type"),
]

AndCondition.model_rebuild()
OrCondition.model_rebuild()
NotCondition.model_rebuild()


# --- Action payloads ---


class TemplateData(BaseModel):
    model_config = _FROZEN
    require_metrics: bool = False
    require_action_verb: bool = False
    require_result: bool = False


class EnhanceData(BaseModel):
    model_config = _FROZEN
    # metrics
    metric_type: Literal["scale", "percentage", "time", "monetary"] | None = None
    examples: list[str] = []
    patterns: list[str] = []
    # summary positioning
    lead_with: Literal["differentiators", "strengths", "transition"] | None = None
    max_differentiators: int | None = None
    include_transition_narrative: bool = False
    framing_style: str | None = None
    include_role_title: bool = False
    highlight_strengths: bool = False
    align_with_company_values: bool = False
    emphasize_transferable_skills: bool = False
    show_learning_agility: bool = False
    tone_down: bool = False
    position_as_ideal_candidate: bool = False
    emphasize_direct_experience: bool = False
    include_top_soft_skills: bool = False
    max_skills: int | None = None
    natural_integration: bool = False
    # bullet content
    emphasize_uncommon_aspects: bool = False
    look_for: list[str] = []
    show_transferable_skills: bool = False
    bridge_gaps: bool = False
    focus_on: str | None = None
    add_scale_indicators: bool = False
    scale_types: list[str] = []
    # experience entries
    highlight_relevant: bool = False
    add_relevance_context: bool = False
    normalize_job_titles: bool = False
    title_mappings: dict[str, str] = {}


class HighlightData(BaseModel):
    model_config = _FROZEN
    section: Literal["why_fit", "competencies"]
    source: str | None = None
    filter_rarity: list[Rarity] = []
    create_expertise_category: bool = False


class ReorderData(BaseModel):
    model_config = _FROZEN
    sort_by: Literal["match_strength", "rarity"] | None = None
    group_by: Literal["rarity"] | None = None
    matched_first: bool = False
    promote_rare: bool = False


class ContextualizeData(BaseModel):
    model_config = _FROZEN
    add_company_description: bool = False
    format: str | None = None
    description_types: list[str] = []
    add_comparable: bool = False
    comparable_format: str | None = None
    industry_mappings: dict[str, list[str]] = {}
    add_industry_context: bool = False
    format_patterns: list[str] = []


class KeywordData(BaseModel):
    model_config = _FROZEN
    max_per_bullet: int = 2
    natural_integration: bool = True
    avoid_keyword_stuffing: bool = True


class SoftSkillData(BaseModel):
    model_config = _FROZEN
    skill: str | None = None
    signals: list[str] = []
    natural_integration: bool = False
    add_generic_signals: bool = False
    focus_on: list[str] = []
    look_for_opportunities: bool = False


# --- Actions ---


class _ActionBase(BaseModel):
    model_config = _FROZEN
    target: TransformTarget
    template_id: str | None = None
    # Rewrites must never invent facts
    preserve_original_meaning: bool = True


class ApplyTemplateAction(_ActionBase):
    type: Literal["apply_template"] = "apply_template"
    template_id: str
    data: TemplateData = TemplateData()


class EnhanceAction(_ActionBase):
    type: Literal["enhance"] = "enhance"
    data: EnhanceData = EnhanceData()


class HighlightAction(_ActionBase):
    type: Literal["highlight"] = "highlight"
    data: HighlightData


class ReorderAction(_ActionBase):
    type: Literal["reorder"] = "reorder"
    data: ReorderData = ReorderData()


class ContextualizeAction(_ActionBase):
    type: Literal["contextualize"] = "contextualize"
    data: ContextualizeData = ContextualizeData()


class InjectKeywordsAction(_ActionBase):
    type: Literal["inject_keywords"] = "inject_keywords"
    data: KeywordData = KeywordData()


class AddSoftSkillsAction(_ActionBase):
    type: Literal["add_soft_skills"] = "add_soft_skills"
    data: SoftSkillData = SoftSkillData()


TransformationAction = Annotated[
    Union[
        ApplyTemplateAction,
        EnhanceAction,
        HighlightAction,
        ReorderAction,
        ContextualizeAction,
        InjectKeywordsAction,
        AddSoftSkillsAction,
    ],
    Field(discriminator="type"),
]


# --- Rules and evaluation output ---


class TransformationRule(BaseModel):
    model_config = _FROZEN
    id: str
    name: str
    description: str = ""
    priority: int  # lower = evaluated and applied first
    recruiter_issue: RecruiterIssue
    condition: RuleCondition
    actions: list[TransformationAction] = Field(..., min_length=1)
    strategic_tone: StrategicTone = "confident"
    enabled: bool = True


class TransformationInstruction(BaseModel):
    """One action of a matched rule, tagged with the rule's tone and priority."""
    rule_id: str
    rule_name: str
    priority: int
    recruiter_issue: RecruiterIssue
    tone: StrategicTone
    action: TransformationAction

    @property
    def type(self) -> str:
        return self.action.type

    @property
    def target(self) -> str:
        return self.action.target

    @property
    def template_id(self) -> str | None:
        return self.action.template_id

    @property
    def data(self) -> BaseModel:
        return self.action.data


class RuleEvaluationResult(BaseModel):
    rule_id: str
    rule_name: str
    matched: bool
    recruiter_issue: RecruiterIssue
    priority: int
    strategic_tone: StrategicTone
    actions: list[TransformationAction] = []


class RuleStats(BaseModel):
    total: int = 0
    by_issue: dict[int, int] = {}
    by_priority: dict[str, int] = {}
