"""Structured resume content and target job data."""

from pydantic import BaseModel


class ContactInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    location: str | None = None


class ResumeBullet(BaseModel):
    id: str
    text: str
    is_modified: bool | None = None


class Experience(BaseModel):
    id: str
    company: str
    title: str
    location: str | None = None
    start_date: str = ""
    end_date: str | None = None  # None = present
    bullets: list[ResumeBullet] = []


class Education(BaseModel):
    id: str
    institution: str
    degree: str = ""
    field: str = ""
    graduation_date: str = ""
    gpa: str | None = None


class Skills(BaseModel):
    technical: list[str] = []
    soft: list[str] = []
    languages: list[str] | None = None
    certifications: list[str] | None = None


class Project(BaseModel):
    id: str
    name: str
    description: str = ""
    technologies: list[str] = []
    link: str | None = None


class ResumeContent(BaseModel):
    """Parsed resume, as stored by the persistence layer and fed to the modules."""
    contact: ContactInfo = ContactInfo()
    summary: str | None = None
    experiences: list[Experience] = []
    education: list[Education] = []
    skills: Skills = Skills()
    projects: list[Project] | None = None

    @property
    def bullet_count(self) -> int:
        return sum(len(exp.bullets) for exp in self.experiences)


class JobData(BaseModel):
    title: str = ""
    company_name: str = ""
    description: str = ""
    requirements: list[str] = []
    skills: list[str] = []

    @property
    def has_content(self) -> bool:
        return bool(self.description.strip() or self.requirements or self.skills)
