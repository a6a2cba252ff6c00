"""Tests for bullet and summary templates."""

import pytest

from services.tailoring.templates import (
    BULLET_TEMPLATES,
    SUMMARY_TEMPLATES,
    CandidateProfile,
    get_bullet_template,
    get_summary_template,
    get_templates_for_type,
    get_tone_guidance,
    suggest_summary_template,
)


def test_bullet_template_lookup():
    template = get_bullet_template("CAR_FORMAT")
    assert template.name == "CAR Format"
    assert template.examples
    assert get_bullet_template("MISSING") is None


def test_template_patterns_declare_their_variables():
    for template in BULLET_TEMPLATES:
        for variable in template.variables:
            assert "{" + variable + "}" in template.pattern, template.id
    for template in SUMMARY_TEMPLATES:
        for variable in template.variables:
            assert "{" + variable + "}" in template.structure, template.id


def test_templates_for_type():
    ids = {t.id for t in get_templates_for_type("context")}
    assert {"COMPANY_CONTEXT_STARTUP", "COMPANY_CONTEXT_COMPARABLE", "FULL_CAR_TRANSFORM"} <= ids
    assert all("soft_skills" in t.applicable_to for t in get_templates_for_type("soft_skills"))


def test_every_summary_template_covers_all_tones():
    for template in SUMMARY_TEMPLATES:
        assert set(template.tone_guidelines) == {"confident", "measured", "humble"}


def test_tone_guidance():
    assert "strategic advantage" in get_tone_guidance("CAREER_CHANGER", "confident")
    assert get_tone_guidance("NOPE", "humble") is None
    assert get_summary_template("LEADER_MANAGER").name == "Technical Leader"


@pytest.mark.parametrize(
    "profile,expected",
    [
        (CandidateProfile(is_career_changer=True, is_leader=True, years_experience=10), "CAREER_CHANGER"),
        (CandidateProfile(is_leader=True, years_experience=8), "LEADER_MANAGER"),
        (CandidateProfile(is_leader=True, years_experience=3), "EXPERIENCED_PROFESSIONAL"),
        (CandidateProfile(is_international=True, is_specialist=True), "INTERNATIONAL_CANDIDATE"),
        (CandidateProfile(is_specialist=True), "TECHNICAL_SPECIALIST"),
        (CandidateProfile(), "EXPERIENCED_PROFESSIONAL"),
    ],
)
def test_suggest_summary_template(profile, expected):
    assert suggest_summary_template(profile).id == expected
