"""Shorthand constructors for rule condition trees."""

from models.schemas.rules import (
    AndCondition,
    ExistsCondition,
    MatchCondition,
    NotCondition,
    OrCondition,
    ThresholdCondition,
)


def exists(field: str) -> ExistsCondition:
    return ExistsCondition(field=field)


def match(field: str, operator: str, value) -> MatchCondition:
    return MatchCondition(field=field, operator=operator, value=value)


def threshold(field: str, operator: str, value: float) -> ThresholdCondition:
    return ThresholdCondition(field=field, operator=operator, value=value)


def all_of(*conditions) -> AndCondition:
    return AndCondition(conditions=list(conditions))


def any_of(*conditions) -> OrCondition:
    return OrCondition(conditions=list(conditions))


def negate(*conditions) -> NotCondition:
    return NotCondition(conditions=list(conditions))
