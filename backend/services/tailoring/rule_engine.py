"""Evaluate transformation rules against a pre-analysis snapshot.

Field paths are dotted, e.g. ``impact.metric_categories.scale``. Segments may
carry list indexes (``factors[0].type``), ``length`` reads the size of a list
or string, and camelCase segments are accepted (``metricCategories``). A path
that cannot be resolved yields MISSING, which no predicate accepts.
"""

import logging
import re
from collections.abc import Mapping, Sequence

from pydantic import BaseModel

from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.rules import (
    AndCondition,
    ExistsCondition,
    MatchCondition,
    NotCondition,
    OrCondition,
    RuleEvaluationResult,
    ThresholdCondition,
    TransformationInstruction,
    TransformationRule,
)

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

_SEGMENT_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)((?:\[\d+\])*)$")
_INDEX_RE = re.compile(r"\[(\d+)\]")
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def _get_attr(value, name: str):
    if value is None or value is MISSING:
        return MISSING

    if name == "length" and isinstance(value, (list, tuple, str)):
        return len(value)

    if isinstance(value, BaseModel):
        fields = type(value).model_fields
        for candidate in (name, _to_snake(name)):
            if candidate in fields:
                return getattr(value, candidate)
        return MISSING

    if isinstance(value, Mapping):
        for candidate in (name, _to_snake(name)):
            if candidate in value:
                return value[candidate]
        return MISSING

    return MISSING


def _get_index(value, index: int):
    if isinstance(value, Sequence) and not isinstance(value, str) and 0 <= index < len(value):
        return value[index]
    return MISSING


def resolve_field(data, path: str):
    """Resolve a dotted path against ``data``; MISSING if any step fails."""
    value = data
    for segment in path.split("."):
        m = _SEGMENT_RE.match(segment)
        if m is None:
            return MISSING
        value = _get_attr(value, m.group(1))
        for index in _INDEX_RE.findall(m.group(2)):
            value = _get_index(value, int(index))
        if value is MISSING:
            return MISSING
    return value


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize_token(value: str) -> str:
    return value.strip().lower().replace("_", " ").replace("-", " ")


def _element_contains(element, expected) -> bool:
    """Element of an array matches a ``contains`` value.

    Scalars compare by equality. Objects (e.g. factors, soft skills) match
    when any of their string fields equals the value, ignoring case and
    ``_``/``-`` separators.
    """
    if isinstance(element, BaseModel):
        element = element.model_dump()
    if isinstance(element, Mapping):
        if not isinstance(expected, str):
            return False
        target = _normalize_token(expected)
        return any(isinstance(v, str) and _normalize_token(v) == target for v in element.values())
    return _strict_equals(element, expected)


def _strict_equals(left, right) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if _is_number(left) and _is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _evaluate_exists(resolved) -> bool:
    if resolved is MISSING or resolved is None:
        return False
    if isinstance(resolved, (list, tuple)):
        return len(resolved) > 0
    return True


def _evaluate_match(cond: MatchCondition, resolved) -> bool:
    if resolved is MISSING or resolved is None:
        return False

    if cond.operator == "=":
        return _strict_equals(resolved, cond.value)

    if cond.operator == "contains":
        if isinstance(resolved, (list, tuple)):
            return any(_element_contains(item, cond.value) for item in resolved)
        if isinstance(resolved, str) and isinstance(cond.value, str):
            return cond.value in resolved
        return False

    # "in": scalar membership
    if not isinstance(cond.value, list) or isinstance(resolved, (list, tuple, Mapping, BaseModel)):
        return False
    return any(_strict_equals(resolved, candidate) for candidate in cond.value)


def _evaluate_threshold(cond: ThresholdCondition, resolved) -> bool:
    if not _is_number(resolved):
        return False
    if cond.operator == "<":
        return resolved < cond.value
    if cond.operator == ">":
        return resolved > cond.value
    if cond.operator == "<=":
        return resolved <= cond.value
    return resolved >= cond.value


def evaluate_condition(condition, analysis) -> bool:
    """Evaluate a condition tree. Unresolvable fields never raise, they just fail."""
    if isinstance(condition, AndCondition):
        return all(evaluate_condition(c, analysis) for c in condition.conditions)
    if isinstance(condition, OrCondition):
        return any(evaluate_condition(c, analysis) for c in condition.conditions)
    if isinstance(condition, NotCondition):
        return not all(evaluate_condition(c, analysis) for c in condition.conditions)

    resolved = resolve_field(analysis, condition.field)
    if isinstance(condition, ExistsCondition):
        return _evaluate_exists(resolved)
    if isinstance(condition, MatchCondition):
        return _evaluate_match(condition, resolved)
    if isinstance(condition, ThresholdCondition):
        return _evaluate_threshold(condition, resolved)
    raise TypeError(f"Unknown condition type: {type(condition).__name__}")


def _ordered(rules: list[TransformationRule]) -> list[TransformationRule]:
    # sorted() is stable: equal priorities keep declaration order
    return sorted((r for r in rules if r.enabled), key=lambda r: r.priority)


def evaluate_rules(
    rules: list[TransformationRule],
    analysis: PreAnalysisResult,
) -> list[TransformationInstruction]:
    """Instructions for every matching enabled rule, in ascending priority order.

    One instruction per action. Instructions are not deduplicated across rules.
    """
    instructions: list[TransformationInstruction] = []
    for rule in _ordered(rules):
        if not evaluate_condition(rule.condition, analysis):
            continue
        logger.debug("Rule matched: %s (priority %d)", rule.id, rule.priority)
        for action in rule.actions:
            instructions.append(
                TransformationInstruction(
                    rule_id=rule.id,
                    rule_name=rule.name,
                    priority=rule.priority,
                    recruiter_issue=rule.recruiter_issue,
                    tone=rule.strategic_tone,
                    action=action,
                )
            )
    return instructions


def evaluate_rule_results(
    rules: list[TransformationRule],
    analysis: PreAnalysisResult,
) -> list[RuleEvaluationResult]:
    """Per-rule match trace, in evaluation order, for debugging and display."""
    return [
        RuleEvaluationResult(
            rule_id=rule.id,
            rule_name=rule.name,
            matched=evaluate_condition(rule.condition, analysis),
            recruiter_issue=rule.recruiter_issue,
            priority=rule.priority,
            strategic_tone=rule.strategic_tone,
            actions=list(rule.actions),
        )
        for rule in _ordered(rules)
    ]
