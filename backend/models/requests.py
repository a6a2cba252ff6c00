from pydantic import BaseModel, Field

from models.schemas.resume import JobData, ResumeContent
from models.schemas.soft_skills import SoftSkillAssessment, SurveyMessage


class AnalyzeRequest(BaseModel):
    resume: ResumeContent
    job: JobData | None = None


class ContextRequest(BaseModel):
    resume: ResumeContent
    job: JobData


class CompanyResearchRequest(BaseModel):
    company_name: str = Field(..., max_length=200, description="Company to research")
    job: JobData | None = None


class SoftSkillStartRequest(BaseModel):
    skill: str = Field(..., max_length=100)


class SoftSkillContinueRequest(BaseModel):
    skill: str = Field(..., max_length=100)
    conversation: list[SurveyMessage] = Field([], max_length=20)
    message: str = Field(..., max_length=5000, description="The candidate's latest answer")
    question_number: int = Field(1, ge=1, le=5)


class PreAnalysisRequest(BaseModel):
    resume: ResumeContent
    job: JobData | None = None
    company_name: str | None = Field(None, max_length=200)
    soft_skills: list[SoftSkillAssessment] = []
    resume_id: str | None = None
    job_id: str | None = None
