import io
import re

import pdfplumber
from pydantic import BaseModel

# Bullet markers: standard + expanded unicode set
BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●")

# Quantified metrics: percentages, money, multipliers, counts of people/things
_METRICS_RE = re.compile(
    r"\d+(?:\.\d+)?\s*%|\$\s?\d|\d+(?:\.\d+)?[KMB]\b|\d+x\b"
    r"|\d+\+?\s*(?:users|clients|requests|customers|transactions|engineers|people|teams?|members?|countries)",
    re.IGNORECASE,
)
_NUMBERED_RE = re.compile(r"^\d{1,2}[.)]\s")


class ExtractedPdf(BaseModel):
    text: str
    page_count: int


def extract_text(pdf_bytes: bytes) -> ExtractedPdf:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return ExtractedPdf(text="\n".join(pages).strip(), page_count=len(pages))


def extract_bullets(text: str) -> list[str]:
    """Extract bullet-point lines from resume text."""
    bullets = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped[0] in BULLET_MARKERS:
            cleaned = stripped.lstrip("".join(BULLET_MARKERS) + " ").strip()
            if cleaned:
                bullets.append(cleaned)
        # Numbered bullets: "1.", "12.", "1)", "12)"
        elif _NUMBERED_RE.match(stripped):
            cleaned = _NUMBERED_RE.sub("", stripped).strip()
            if cleaned:
                bullets.append(cleaned)
    return bullets


def has_metrics(bullet: str) -> bool:
    return bool(_METRICS_RE.search(bullet))


def count_quantified(bullets: list[str]) -> int:
    return sum(1 for b in bullets if has_metrics(b))
