"""Score bands for the recruiter readiness composite and its dimensions."""

from models.schemas.readiness import ReadinessLabel

SCORE_THRESHOLDS: dict[ReadinessLabel, tuple[int, int]] = {
    "exceptional": (90, 100),
    "strong": (75, 89),
    "good": (60, 74),
    "getting_there": (45, 59),
    "needs_work": (0, 44),
}

READABLE_LABELS: dict[ReadinessLabel, str] = {
    "exceptional": "Exceptional",
    "strong": "Strong",
    "good": "Good",
    "getting_there": "Getting There",
    "needs_work": "Needs Work",
}

DIMENSION_DISPLAY_NAMES = {
    "uniqueness": {
        "name": "Uniqueness",
        "description": "Standing out from other candidates",
        "issue_number": 1,
    },
    "impact": {
        "name": "Impact",
        "description": "Quantified achievements with metrics",
        "issue_number": 2,
    },
    "context_translation": {
        "name": "U.S. Context",
        "description": "Company and experience translation",
        "issue_number": 3,
    },
    "cultural_fit": {
        "name": "Cultural Fit",
        "description": "Soft skills and collaboration evidence",
        "issue_number": 4,
    },
    "customization": {
        "name": "Customization",
        "description": "Job-specific keyword and skill alignment",
        "issue_number": 5,
    },
}


def get_score_label(score: float) -> ReadinessLabel:
    for label, (low, _high) in SCORE_THRESHOLDS.items():
        if score >= low:
            return label
    return "needs_work"


def get_readable_label(label: ReadinessLabel) -> str:
    return READABLE_LABELS[label]


def get_suggestion_impact(raw: float) -> str:
    """Urgency bucket for a dimension's suggestions."""
    if raw < 50:
        return "high"
    if raw < 70:
        return "medium"
    return "low"
