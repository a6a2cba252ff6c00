"""Tailoring orchestrator: pre-analysis fan-out, then rules and scoring.

Flow:
    resume + job (+ company name, soft-skill assessments)
      ├─ UniquenessModule.analyze(resume, job)    → UniquenessResult
      ├─ ImpactModule.analyze(resume, job)        → ImpactResult
      ├─ ContextModule.analyze(resume, job)       → ContextResult       (needs a job)
      └─ CompanyResearchModule.research(name)     → CompanyContext      (needs a company)
                       ↓  (concurrent, failures recorded per module)
                 PreAnalysisResult
                       ↓
      ├─ evaluate_rules(ALL enabled rules)        → instructions
      └─ calculate_recruiter_readiness()          → RecruiterReadinessScore
                       ↓
                 TailoringPlan
"""

import asyncio
import logging
from datetime import datetime, timezone

from config import Settings
from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.readiness import TailoringPlan
from models.schemas.resume import JobData, ResumeContent
from models.schemas.rules import StrategicTone, TransformationRule
from models.schemas.soft_skills import SoftSkillAssessment
from services.gemini_client import ModelClient
from services.modules.company import CompanyResearchModule, to_company_context
from services.modules.context import ContextModule
from services.modules.errors import ModuleError
from services.modules.impact import ImpactModule
from services.modules.uniqueness import UniquenessModule
from services.scoring.recruiter_readiness import calculate_recruiter_readiness
from services.tailoring.rule_engine import evaluate_rule_results, evaluate_rules
from services.tailoring.rules import get_all_enabled_rules
from services.tailoring.templates import BulletTemplate, get_bullet_template

logger = logging.getLogger(__name__)


async def _company_context(module: CompanyResearchModule, company_name: str, job: JobData | None):
    return to_company_context(await module.research(company_name, job))


async def run_pre_analysis(
    resume: ResumeContent,
    job: JobData | None,
    settings: Settings,
    client: ModelClient | None,
    company_name: str | None = None,
    soft_skills: list[SoftSkillAssessment] | None = None,
    resume_id: str | None = None,
    job_id: str | None = None,
) -> PreAnalysisResult:
    """Run the analysis modules concurrently; a failed module is left out and its code recorded."""
    company_name = company_name or (job.company_name if job is not None else "")

    tasks = {
        "uniqueness": UniquenessModule(settings, client).analyze(resume, job),
        "impact": ImpactModule(settings, client).analyze(resume, job),
    }
    if job is not None:
        tasks["context"] = ContextModule(settings, client).analyze(resume, job)
    if company_name and company_name.strip():
        tasks["company"] = _company_context(CompanyResearchModule(settings, client), company_name, job)

    logger.info("Pre-analysis starting: %s", ", ".join(tasks))
    outcomes = await asyncio.gather(*tasks.values(), return_exceptions=True)

    results = {}
    errors = {}
    for name, outcome in zip(tasks, outcomes):
        if isinstance(outcome, ModuleError):
            logger.warning("Pre-analysis module %s failed: %s (%s)", name, outcome.message, outcome.code)
            errors[name] = outcome.code
        elif isinstance(outcome, Exception):
            logger.exception("Pre-analysis module %s raised unexpectedly", name, exc_info=outcome)
            errors[name] = "UNKNOWN_ERROR"
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results[name] = outcome

    logger.info("Pre-analysis complete: %d ok, %d failed", len(results), len(errors))
    return PreAnalysisResult(
        **results,
        soft_skills=soft_skills or [],
        errors=errors,
        analyzed_at=datetime.now(timezone.utc),
        resume_id=resume_id,
        job_id=job_id,
    )


def _overall_tone(plan_tones: list[StrategicTone], readiness_label: str) -> StrategicTone:
    # Highest-priority instruction sets the tone; otherwise follow readiness
    if plan_tones:
        return plan_tones[0]
    if readiness_label in ("strong", "exceptional"):
        return "confident"
    return "measured"


def _referenced_templates(instructions) -> list[BulletTemplate]:
    templates = {}
    for instruction in instructions:
        template_id = instruction.template_id
        if template_id and template_id not in templates:
            template = get_bullet_template(template_id)
            if template is None:
                logger.warning("Rule %s references unknown template %s", instruction.rule_id, template_id)
                continue
            templates[template_id] = template
    return list(templates.values())


def plan_tailoring(
    analysis: PreAnalysisResult,
    rules: list[TransformationRule] | None = None,
) -> TailoringPlan:
    """Evaluate rules and score readiness for a pre-analysis snapshot. No AI call."""
    rules = get_all_enabled_rules() if rules is None else rules

    instructions = evaluate_rules(rules, analysis)
    applied = [r for r in evaluate_rule_results(rules, analysis) if r.matched]
    readiness = calculate_recruiter_readiness(analysis)

    logger.info(
        "Tailoring plan: %d/%d rules matched, %d instructions, readiness %d (%s)",
        len(applied), len(rules), len(instructions), readiness.composite, readiness.label,
    )
    return TailoringPlan(
        instructions=instructions,
        templates=_referenced_templates(instructions),
        applied_rules=applied,
        overall_tone=_overall_tone([i.tone for i in instructions], readiness.label),
        readiness=readiness,
        rules_evaluated=len(rules),
    )
