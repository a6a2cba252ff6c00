"""Tests for the built-in transformation rule sets."""

import pytest

from models.schemas.company import CompanyContext
from models.schemas.context import ContextResult, FitAssessment, KeywordCoverage
from models.schemas.impact import ImpactResult, MetricCategories
from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.soft_skills import SoftSkillAssessment
from models.schemas.uniqueness import UniquenessFactor, UniquenessResult
from services.tailoring.rule_engine import evaluate_rules
from services.tailoring.rules import (
    ALL_RULES,
    get_all_enabled_rules,
    get_rule_by_id,
    get_rule_stats,
    get_rules_by_issue,
)
from services.tailoring.templates import get_bullet_template


def matched_ids(analysis: PreAnalysisResult) -> list[str]:
    seen = []
    for instruction in evaluate_rules(get_all_enabled_rules(), analysis):
        if instruction.rule_id not in seen:
            seen.append(instruction.rule_id)
    return seen


class TestRuleCatalog:
    def test_stats(self):
        stats = get_rule_stats()
        assert stats.total == 30
        assert stats.by_issue == {1: 6, 2: 5, 3: 5, 4: 7, 5: 7}
        assert stats.by_priority == {"high": 5, "medium": 16, "low": 9}

    def test_ids_unique(self):
        ids = [r.id for r in ALL_RULES]
        assert len(ids) == len(set(ids))

    def test_enabled_rules_sorted_by_priority(self):
        priorities = [r.priority for r in get_all_enabled_rules()]
        assert priorities == sorted(priorities)

    def test_rules_by_issue(self):
        rules = get_rules_by_issue(3)
        assert len(rules) == 5
        assert all(r.id.startswith("us-context-") for r in rules)

    def test_rule_by_id(self):
        assert get_rule_by_id("impact-transform-weak-bullets").priority == 10
        assert get_rule_by_id("no-such-rule") is None

    def test_referenced_templates_exist(self):
        for rule in ALL_RULES:
            for action in rule.actions:
                if action.template_id is not None:
                    assert get_bullet_template(action.template_id) is not None, (rule.id, action.template_id)

    def test_actions_preserve_meaning(self):
        assert all(a.preserve_original_meaning for r in ALL_RULES for a in r.actions)


class TestRuleScenarios:
    def test_weak_resume(self):
        analysis = PreAnalysisResult(
            uniqueness=UniquenessResult(score=35),
            impact=ImpactResult(score=30, total_bullets=6, bullets_improved=3, metric_categories=MetricCategories()),
        )
        assert matched_ids(analysis) == [
            "impact-low-score-major-transform",
            "uniqueness-low-score-find-differentiators",
            "impact-transform-weak-bullets",
            "cultural-weak-soft-skills",
            "impact-add-scale-context",
            "impact-add-percentage-metrics",
            "impact-add-time-metrics",
        ]

    def test_strong_impact_matches_no_impact_rules(self):
        analysis = PreAnalysisResult(
            impact=ImpactResult(
                score=90,
                bullets_improved=0,
                metric_categories=MetricCategories(percentage=4, time=2, scale=5),
            )
        )
        assert not [i for i in matched_ids(analysis) if i.startswith("impact-")]

    def test_unknown_company(self):
        analysis = PreAnalysisResult(
            company=CompanyContext(company_name="Zoho", is_well_known=False, industry="SaaS", size="growth")
        )
        ids = matched_ids(analysis)
        assert [i for i in ids if i.startswith("us-context-")] == [
            "us-context-unknown-company",
            "us-context-add-scale",
            "us-context-comparable-companies",
            "us-context-industry-translation",
        ]

    def test_well_known_enterprise_needs_no_context(self):
        analysis = PreAnalysisResult(
            company=CompanyContext(company_name="Google", is_well_known=True, industry="Internet", size="enterprise")
        )
        assert not [i for i in matched_ids(analysis) if i.startswith("us-context-")]

    def test_unique_candidate(self):
        analysis = PreAnalysisResult(
            uniqueness=UniquenessResult(
                score=80,
                factors=[
                    UniquenessFactor(id="f-1", type="skill_combination", title="Payments + ML", rarity="very_rare"),
                    UniquenessFactor(id="f-2", type="career_transition", title="Nurse to engineer"),
                ],
                differentiators=["Payments + ML"],
            )
        )
        ids = [i for i in matched_ids(analysis) if i.startswith("uniqueness-")]
        assert ids == [
            "uniqueness-highlight-very-rare",
            "uniqueness-lead-summary",
            "uniqueness-skill-combinations",
            "uniqueness-career-transition",
        ]

    def test_soft_skills(self):
        analysis = PreAnalysisResult(
            soft_skills=[
                SoftSkillAssessment(skill="Leadership", strength="strong"),
                SoftSkillAssessment(skill="Collaboration", strength="moderate"),
            ]
        )
        assert matched_ids(analysis) == [
            "cultural-summary-values",
            "cultural-weave-leadership",
            "cultural-weave-collaboration",
        ]

    @pytest.mark.parametrize("score,rule_id", [(40, "context-low-match-strategic-pivot"), (85, "context-excellent-match-confidence")])
    def test_context_score_rules(self, score, rule_id):
        analysis = PreAnalysisResult(context=ContextResult(score=score))
        assert rule_id in matched_ids(analysis)

    def test_keyword_and_fit_rules(self):
        analysis = PreAnalysisResult(
            context=ContextResult(
                score=65,
                keyword_coverage=KeywordCoverage(percentage=40),
                fit_assessment=FitAssessment(strengths=["Payments domain"]),
            )
        )
        ids = matched_ids(analysis)
        assert "context-inject-missing-keywords" in ids
        assert "context-tailor-summary-to-role" in ids
        assert "context-address-gaps" not in ids
