"""Parse extracted resume text into ResumeContent."""

import logging

from pydantic import ValidationError

from models.schemas.resume import ResumeContent
from services.modules.base import BaseAnalysisModule, as_list
from services.modules.errors import ResumeParseError
from services.prompt_builder import RESUME_PARSING_SYSTEM_PROMPT, build_resume_parsing_prompt

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50


def _salvage(data: dict) -> dict:
    """Keep only the sub-fields that look right, dropping the rest."""
    contact = data.get("contact") if isinstance(data.get("contact"), dict) else {}
    skills = data.get("skills") if isinstance(data.get("skills"), dict) else {}
    salvaged = {
        "contact": {
            "name": contact.get("name") if isinstance(contact.get("name"), str) else "",
            "email": contact.get("email") if isinstance(contact.get("email"), str) else "",
        },
        "experiences": as_list(data.get("experiences")),
        "education": as_list(data.get("education")),
        "skills": {
            "technical": as_list(skills.get("technical")),
            "soft": as_list(skills.get("soft")),
        },
    }
    if isinstance(data.get("summary"), str):
        salvaged["summary"] = data["summary"]
    if isinstance(data.get("projects"), list):
        salvaged["projects"] = data["projects"]
    return salvaged


def has_valid_content(resume: ResumeContent) -> bool:
    return bool(resume.experiences or resume.skills.technical or resume.education or resume.projects)


class ResumeParserModule(BaseAnalysisModule):
    name = "resume_parser"
    task = "resume_parsing"
    system_prompt = RESUME_PARSING_SYSTEM_PROMPT
    error_class = ResumeParseError

    async def parse(self, text: str) -> ResumeContent:
        self.ensure_configured()
        if not text or len(text.strip()) < MIN_TEXT_LENGTH:
            raise self.fail("Extracted text is too short to parse as a resume.", "INSUFFICIENT_CONTENT")
        return await self.run(build_resume_parsing_prompt(text))

    def normalize(self, data: dict) -> ResumeContent:
        try:
            return ResumeContent.model_validate(data)
        except ValidationError as e:
            logger.warning("Resume response failed validation, salvaging: %d errors", e.error_count())

        try:
            return ResumeContent.model_validate(_salvage(data))
        except ValidationError as e:
            raise self.fail(
                "AI response does not match expected resume format", "SCHEMA_VALIDATION_FAILED", e
            ) from e
