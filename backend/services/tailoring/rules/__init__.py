"""Static transformation rule sets, one per recruiter issue."""

from models.schemas.rules import RuleStats, TransformationRule
from services.tailoring.rules.context_rules import CONTEXT_RULES
from services.tailoring.rules.cultural_fit_rules import CULTURAL_FIT_RULES
from services.tailoring.rules.impact_rules import IMPACT_RULES
from services.tailoring.rules.uniqueness_rules import UNIQUENESS_RULES
from services.tailoring.rules.us_context_rules import US_CONTEXT_RULES

# Declaration order; ties in priority keep this order
ALL_RULES: list[TransformationRule] = [
    *IMPACT_RULES,
    *UNIQUENESS_RULES,
    *CONTEXT_RULES,
    *US_CONTEXT_RULES,
    *CULTURAL_FIT_RULES,
]


def get_all_enabled_rules() -> list[TransformationRule]:
    """Every enabled rule across all sets, sorted by priority (stable)."""
    return sorted((r for r in ALL_RULES if r.enabled), key=lambda r: r.priority)


def get_rules_by_issue(issue: int) -> list[TransformationRule]:
    return [r for r in get_all_enabled_rules() if r.recruiter_issue == issue]


def get_rule_by_id(rule_id: str) -> TransformationRule | None:
    return next((r for r in ALL_RULES if r.id == rule_id), None)


def _priority_band(priority: int) -> str:
    if priority < 10:
        return "high"
    if priority < 20:
        return "medium"
    return "low"


def get_rule_stats() -> RuleStats:
    rules = get_all_enabled_rules()
    by_issue = {issue: 0 for issue in range(1, 6)}
    by_priority = {"high": 0, "medium": 0, "low": 0}
    for rule in rules:
        by_issue[rule.recruiter_issue] += 1
        by_priority[_priority_band(rule.priority)] += 1
    return RuleStats(total=len(rules), by_issue=by_issue, by_priority=by_priority)


__all__ = [
    "ALL_RULES",
    "CONTEXT_RULES",
    "CULTURAL_FIT_RULES",
    "IMPACT_RULES",
    "UNIQUENESS_RULES",
    "US_CONTEXT_RULES",
    "get_all_enabled_rules",
    "get_rule_by_id",
    "get_rule_stats",
    "get_rules_by_issue",
]
