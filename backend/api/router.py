import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_model_client
from config import Settings, get_settings
from models.requests import (
    AnalyzeRequest,
    CompanyResearchRequest,
    ContextRequest,
    PreAnalysisRequest,
    SoftSkillContinueRequest,
    SoftSkillStartRequest,
)
from models.responses import (
    ErrorDetail,
    HealthResponse,
    ParseResponse,
    ReadinessResponse,
    RulesResponse,
    SoftSkillTurnResponse,
)
from models.schemas.company import CompanyResearchResult
from models.schemas.context import ContextResult
from models.schemas.impact import ImpactResult
from models.schemas.pre_analysis import PreAnalysisResult
from models.schemas.readiness import TailoringPlan
from models.schemas.soft_skills import ChatResponse, get_evidence_label
from models.schemas.uniqueness import UniquenessResult
from services import pdf_parser
from services.gemini_client import ModelClient
from services.modules.company import CompanyResearchModule
from services.modules.context import ContextModule
from services.modules.errors import ModuleError
from services.modules.impact import ImpactModule
from services.modules.resume_parser import ResumeParserModule, has_valid_content
from services.modules.soft_skills import SoftSkillsModule, to_assessment
from services.modules.uniqueness import UniquenessModule
from services.retry import get_user_friendly_message
from services.scoring.recruiter_readiness import (
    calculate_recruiter_readiness,
    get_most_impactful_improvement,
    get_score_summary,
)
from services.tailoring.orchestrator import plan_tailoring, run_pre_analysis
from services.tailoring.rules import get_all_enabled_rules, get_rule_stats

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

_VALIDATION_CODES = frozenset({
    "INSUFFICIENT_CONTENT",
    "INSUFFICIENT_JOB_CONTENT",
    "INVALID_INPUT",
    "INVALID_MESSAGE",
    "INVALID_SKILL",
    "BAD_REQUEST",
})
_UPSTREAM_RESPONSE_CODES = frozenset({
    "EMPTY_RESPONSE",
    "PARSE_ERROR",
    "INVALID_RESPONSE",
    "SCHEMA_VALIDATION_FAILED",
})
_STATUS_BY_CODE = {
    "AI_NOT_CONFIGURED": 503,
    "SERVICE_OVERLOADED": 503,
    "AUTH_ERROR": 401,
    "RATE_LIMIT": 429,
    "TIMEOUT": 504,
    "TIME_BUDGET_EXHAUSTED": 504,
}


def status_for_code(code: str) -> int:
    if code in _VALIDATION_CODES:
        return 400
    if code in _UPSTREAM_RESPONSE_CODES:
        return 502
    return _STATUS_BY_CODE.get(code, 500)


def error_detail(code: str, message: str) -> dict:
    return ErrorDetail(code=code, message=message, user_message=get_user_friendly_message(code)).model_dump()


def to_http_error(error: ModuleError) -> HTTPException:
    return HTTPException(status_code=status_for_code(error.code), detail=error_detail(error.code, error.message))


def _require(flag: bool, feature: str) -> None:
    if not flag:
        raise HTTPException(status_code=503, detail=error_detail("FEATURE_DISABLED", f"{feature} is disabled"))


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        status="ok",
        ai_configured=settings.is_ai_configured,
        enabled_rules=len(get_all_enabled_rules()),
    )


@router.post("/parse", response_model=ParseResponse)
@limiter.limit("10/minute")
async def parse_resume(
    request: Request,
    resume_file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    if not resume_file.filename or not resume_file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail=error_detail("INVALID_INPUT", "Only PDF files are accepted"))

    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=error_detail("INVALID_INPUT", f"File too large. Max size: {settings.max_upload_size_mb}MB"),
        )

    try:
        extracted = pdf_parser.extract_text(content)
    except Exception as e:
        logger.warning("Could not parse PDF %s: %s", resume_file.filename, e)
        raise HTTPException(status_code=400, detail=error_detail("INVALID_INPUT", "Could not parse PDF file")) from e

    if not extracted.text:
        raise HTTPException(
            status_code=400, detail=error_detail("INSUFFICIENT_CONTENT", "No text could be extracted from PDF")
        )

    try:
        resume = await ResumeParserModule(settings, client).parse(extracted.text)
    except ModuleError as e:
        raise to_http_error(e) from e

    bullets = pdf_parser.extract_bullets(extracted.text)
    return ParseResponse(
        resume=resume,
        page_count=extracted.page_count,
        has_valid_content=has_valid_content(resume),
        detected_bullets=len(bullets),
        quantified_bullets=pdf_parser.count_quantified(bullets),
    )


@router.post("/analyze/uniqueness", response_model=UniquenessResult)
@limiter.limit("10/minute")
async def analyze_uniqueness(
    request: Request,
    body: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    try:
        return await UniquenessModule(settings, client).analyze(body.resume, body.job)
    except ModuleError as e:
        raise to_http_error(e) from e


@router.post("/analyze/impact", response_model=ImpactResult)
@limiter.limit("10/minute")
async def analyze_impact(
    request: Request,
    body: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    try:
        return await ImpactModule(settings, client).analyze(body.resume, body.job)
    except ModuleError as e:
        raise to_http_error(e) from e


@router.post("/analyze/context", response_model=ContextResult)
@limiter.limit("10/minute")
async def analyze_context(
    request: Request,
    body: ContextRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    _require(settings.enable_job_match, "Job match analysis")
    try:
        return await ContextModule(settings, client).analyze(body.resume, body.job)
    except ModuleError as e:
        raise to_http_error(e) from e


@router.post("/company/research", response_model=CompanyResearchResult)
@limiter.limit("10/minute")
async def research_company(
    request: Request,
    body: CompanyResearchRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    _require(settings.enable_company_research, "Company research")
    try:
        return await CompanyResearchModule(settings, client).research(body.company_name, body.job)
    except ModuleError as e:
        raise to_http_error(e) from e


def _turn(skill: str, response: ChatResponse) -> SoftSkillTurnResponse:
    return SoftSkillTurnResponse(
        **response.model_dump(),
        evidence_label=get_evidence_label(response.evidence_score) if response.evidence_score else None,
        assessment=to_assessment(skill, response),
    )


@router.post("/soft-skills/start", response_model=SoftSkillTurnResponse)
@limiter.limit("10/minute")
async def start_soft_skill_assessment(
    request: Request,
    body: SoftSkillStartRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    try:
        response = await SoftSkillsModule(settings, client).start_assessment(body.skill)
    except ModuleError as e:
        raise to_http_error(e) from e
    return _turn(body.skill, response)


@router.post("/soft-skills/continue", response_model=SoftSkillTurnResponse)
@limiter.limit("10/minute")
async def continue_soft_skill_assessment(
    request: Request,
    body: SoftSkillContinueRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    try:
        response = await SoftSkillsModule(settings, client).continue_assessment(
            body.skill, body.conversation, body.message, body.question_number
        )
    except ModuleError as e:
        raise to_http_error(e) from e
    return _turn(body.skill, response)


@router.post("/pre-analysis", response_model=PreAnalysisResult)
@limiter.limit("10/minute")
async def pre_analysis(
    request: Request,
    body: PreAnalysisRequest,
    settings: Settings = Depends(get_settings),
    client: ModelClient | None = Depends(get_model_client),
):
    if not settings.is_ai_configured:
        raise HTTPException(
            status_code=503, detail=error_detail("AI_NOT_CONFIGURED", "AI is not configured. Please set your API key.")
        )
    job = body.job if settings.enable_job_match else None
    company_name = body.company_name if settings.enable_company_research else None
    if not settings.enable_company_research and job is not None:
        job = job.model_copy(update={"company_name": ""})

    return await run_pre_analysis(
        body.resume,
        job,
        settings,
        client,
        company_name=company_name,
        soft_skills=body.soft_skills,
        resume_id=body.resume_id,
        job_id=body.job_id,
    )


@router.post("/tailoring/plan", response_model=TailoringPlan)
async def tailoring_plan(body: PreAnalysisResult, settings: Settings = Depends(get_settings)):
    _require(settings.enable_tailoring, "Tailoring")
    return plan_tailoring(body)


@router.post("/readiness", response_model=ReadinessResponse)
async def readiness(body: PreAnalysisResult):
    score = calculate_recruiter_readiness(body)
    return ReadinessResponse(
        score=score,
        summary=get_score_summary(score),
        most_impactful_dimension=get_most_impactful_improvement(score),
    )


@router.get("/rules", response_model=RulesResponse)
async def list_rules():
    return RulesResponse(rules=get_all_enabled_rules(), stats=get_rule_stats())
