"""All prompt templates for the analysis modules."""

from models.schemas.company import CULTURE_DIMENSIONS
from models.schemas.resume import JobData, ResumeContent
from models.schemas.soft_skills import SurveyMessage
from services.json_recovery import JSON_OUTPUT_INSTRUCTIONS


def format_resume_for_prompt(resume: ResumeContent) -> str:
    """Render structured resume content as markdown-ish text for a prompt."""
    sections = []

    contact = [f"Name: {resume.contact.name}", f"Email: {resume.contact.email}"]
    if resume.contact.phone:
        contact.append(f"Phone: {resume.contact.phone}")
    if resume.contact.location:
        contact.append(f"Location: {resume.contact.location}")
    sections.append("## Contact\n" + "\n".join(contact))

    if resume.summary:
        sections.append(f"## Summary\n{resume.summary}")

    if resume.experiences:
        blocks = []
        for exp in resume.experiences:
            lines = [f"### {exp.title} at {exp.company} (id: {exp.id})"]
            if exp.location:
                lines.append(f"Location: {exp.location}")
            lines.append(f"{exp.start_date} - {exp.end_date or 'Present'}")
            lines.extend(f"  - {b.text}" for b in exp.bullets)
            blocks.append("\n".join(lines))
        sections.append("## Experience\n" + "\n\n".join(blocks))

    if resume.education:
        lines = []
        for edu in resume.education:
            line = f"- {edu.degree} in {edu.field}, {edu.institution} ({edu.graduation_date})"
            if edu.gpa:
                line += f" - GPA: {edu.gpa}"
            lines.append(line)
        sections.append("## Education\n" + "\n".join(lines))

    skill_lines = []
    if resume.skills.technical:
        skill_lines.append(f"Technical: {', '.join(resume.skills.technical)}")
    if resume.skills.soft:
        skill_lines.append(f"Soft: {', '.join(resume.skills.soft)}")
    if resume.skills.languages:
        skill_lines.append(f"Languages: {', '.join(resume.skills.languages)}")
    if resume.skills.certifications:
        skill_lines.append(f"Certifications: {', '.join(resume.skills.certifications)}")
    if skill_lines:
        sections.append("## Skills\n" + "\n".join(skill_lines))

    if resume.projects:
        blocks = []
        for proj in resume.projects:
            block = f"### {proj.name}\n{proj.description}\nTechnologies: {', '.join(proj.technologies)}"
            if proj.link:
                block += f"\nLink: {proj.link}"
            blocks.append(block)
        sections.append("## Projects\n" + "\n\n".join(blocks))

    return "\n\n".join(sections)


def format_job_for_prompt(job: JobData) -> str:
    sections = [f"## Target Job\n**Position:** {job.title}\n**Company:** {job.company_name or 'Not specified'}"]
    if job.description:
        sections.append(f"## Job Description\n{job.description}")
    if job.requirements:
        sections.append("## Requirements\n" + "\n".join(f"- {r}" for r in job.requirements))
    if job.skills:
        sections.append("## Required Skills\n" + "\n".join(f"- {s}" for s in job.skills))
    return "\n\n".join(sections)


# --- Uniqueness ---

UNIQUENESS_SYSTEM_PROMPT = """You are an expert career strategist and personal branding consultant. \
Your specialty is identifying what makes each candidate truly unique.

Analyze the resume and identify the candidate's differentiators: rare combinations of skills, \
experiences and achievements that set them apart from typical candidates.

Look for:
1. Skill combinations rarely found together (e.g. Data Science + UX Design)
2. Career transitions that bring a unique perspective
3. Unique experiences most candidates would not have
4. Deep domain expertise in niche areas
5. Distinctive achievement patterns

SCORING RUBRIC (0-100):
- 0-39: Low. Mostly common skills and experiences.
- 40-64: Moderate. Some differentiating factors.
- 65-84: High. Clear unique value proposition.
- 85-100: Exceptional. Truly rare combination.

Return a JSON object with this structure:
{
  "score": <integer 0-100>,
  "factors": [
    {
      "type": "skill_combination",
      "title": "Brief title",
      "description": "Why this is unique",
      "rarity": "rare",
      "evidence": ["Quote or reference from resume"],
      "suggestion": "How to emphasize this in applications"
    }
  ],
  "summary": "2-3 sentence summary of the unique value proposition",
  "differentiators": ["Key differentiator 1", "Key differentiator 2"],
  "suggestions": [{"area": "Area to improve", "recommendation": "Specific action"}]
}

Valid values for "type": "skill_combination", "career_transition", "unique_experience", \
"domain_expertise", "achievement", "education".
Valid values for "rarity": "uncommon", "rare", "very_rare".

Reference actual resume content. Do not fabricate information.
""" + JSON_OUTPUT_INSTRUCTIONS


def build_uniqueness_prompt(resume: ResumeContent, job: JobData | None = None) -> str:
    target = ""
    if job is not None and job.title:
        target = f"\nThe candidate is targeting: {job.title}" + (
            f" at {job.company_name}" if job.company_name else ""
        ) + "\n"

    return f"""Analyze this resume for unique differentiators:

{format_resume_for_prompt(resume)}
{target}
Identify rare skill combinations, career transitions, distinctive experiences, \
specialized domain expertise and notable achievement patterns.

Calculate a uniqueness score (0-100) and return your analysis as a JSON object matching the schema."""


# --- Impact ---

IMPACT_SYSTEM_PROMPT = """You are an expert resume writer who turns vague job descriptions into \
metrics-driven achievement statements.

Analyze each resume bullet and propose a quantified version.

Metric types:
1. Percentages: "Improved efficiency by 40%"
2. Monetary values: "Saved $500K annually"
3. Time: "Reduced processing time from 2 weeks to 2 days"
4. Scale: "Led team of 12 engineers", "Served 100K+ daily active users"
5. Other: rankings, awards, uptime

Guidelines: start with an action verb, add specific numbers, show the result, keep each bullet \
to 1-2 lines, follow Challenge-Action-Result. Do not fabricate metrics; estimate only where the \
resume supports it.

SCORING RUBRIC (0-100):
- 0-39: Weak. Most bullets lack metrics.
- 40-64: Moderate. Some quantification present.
- 65-84: Strong. Good use of metrics.
- 85-100: Exceptional. Excellent quantification throughout.

Return a JSON object with this structure:
{
  "score": <integer 0-100>,
  "summary": "2-3 sentence summary of the quantification level",
  "bullets": [
    {
      "experience_id": "id from resume",
      "experience_title": "job title",
      "company_name": "company name",
      "original": "original bullet text",
      "improved": "improved bullet with metrics",
      "metrics": ["metric1"],
      "improvement": "major",
      "explanation": "Why this improvement was made"
    }
  ],
  "metric_categories": {"percentage": 0, "monetary": 0, "time": 0, "scale": 0, "other": 0},
  "suggestions": [{"area": "Area", "recommendation": "Specific action"}]
}

Valid values for "improvement": "none", "minor", "major", "transformed".
If a bullet is already well quantified, use "none" and keep the original.
""" + JSON_OUTPUT_INSTRUCTIONS


def build_impact_prompt(resume: ResumeContent, job: JobData | None = None) -> str:
    bullet_lines = []
    for exp in resume.experiences:
        for bullet in exp.bullets:
            bullet_lines.append(f"- [{exp.id}] {exp.title} at {exp.company}: {bullet.text}")

    focus = ""
    if job is not None and job.title:
        focus = f"\nPrefer metrics that matter for the target role: {job.title}\n"

    return f"""Analyze these resume bullets for quantified impact:

{format_resume_for_prompt(resume)}

## Bullets To Analyze ({len(bullet_lines)} total)
{chr(10).join(bullet_lines)}
{focus}
For each bullet propose an improved version, count which metric categories the resume \
already uses, and score overall quantification (0-100). Return a JSON object matching the schema."""


# --- Context ---

CONTEXT_SYSTEM_PROMPT = """You are an expert ATS (Applicant Tracking System) analyst and career coach.

Analyze how well a resume aligns with a specific job and what the candidate can do to improve.

1. Skills matching: exact, related (e.g. "React" vs "React.js") or transferable matches, and where \
in the resume each skill came from.
2. Requirements gaps: critical (could disqualify), important, or nice_to_have.
3. Experience relevance for each position.
4. Keyword coverage for ATS optimization.

SCORING RUBRIC (0-100):
- 0-29: Poor. Major gaps, unlikely to pass ATS.
- 30-49: Weak. Significant gaps to address.
- 50-69: Moderate. Some alignment, needs optimization.
- 70-84: Good. Strong alignment with minor gaps.
- 85-100: Excellent. Exceptional match.

Return a JSON object with this structure:
{
  "score": <integer 0-100>,
  "summary": "2-3 sentence summary of the alignment",
  "matched_skills": [{"skill": "", "source": "technical", "strength": "exact", "evidence": ""}],
  "missing_requirements": [{"requirement": "", "importance": "critical", "suggestion": ""}],
  "experience_alignments": [
    {"experience_id": "", "experience_title": "", "company_name": "", "relevance": "high",
     "matched_aspects": [""], "explanation": ""}
  ],
  "keyword_coverage": {
    "matched": 10, "total": 15, "percentage": 67,
    "keywords": [{"keyword": "React", "found": true, "location": "Skills section"}]
  },
  "suggestions": [{"category": "skills", "priority": "high", "recommendation": ""}],
  "fit_assessment": {"strengths": [""], "gaps": [""], "overall_fit": ""}
}

Valid values for "source": "technical", "soft", "experience", "education".
Valid values for "strength": "exact", "related", "transferable".
Valid values for "importance": "critical", "important", "nice_to_have".
Valid values for "relevance": "high", "medium", "low".
Valid values for "category": "skills", "experience", "keywords", "tailoring".
Valid values for "priority": "high", "medium", "low".
""" + JSON_OUTPUT_INSTRUCTIONS


def build_context_prompt(resume: ResumeContent, job: JobData) -> str:
    return f"""Analyze the alignment between this resume and job opportunity:

# JOB OPPORTUNITY
{format_job_for_prompt(job)}

# CANDIDATE RESUME
{format_resume_for_prompt(resume)}

Provide the overall alignment score, matched skills, missing requirements, the relevance of \
each experience, keyword coverage, prioritized suggestions and a fit assessment. \
Return a JSON object matching the schema."""


# --- Company research ---

COMPANY_RESEARCH_SYSTEM_PROMPT = f"""You are a career research analyst with broad knowledge of \
companies, industries and hiring practices.

Produce a company research report that helps a candidate prepare an application and interviews.
Rate company culture on these dimensions (1-5): {", ".join(CULTURE_DIMENSIONS)}.
Also judge how recognizable the company is to a U.S. recruiter, its size \
("startup", "growth", "enterprise" or "unknown") and a well-known comparable company.

Return a JSON object with this structure:
{{
  "company_name": "", "industry": "", "summary": "", "founded": "", "headquarters": "",
  "employee_count": "", "website": "",
  "culture_dimensions": [{{"dimension": "Work-Life Balance", "score": 3.5, "description": ""}}],
  "culture_overview": "",
  "glassdoor_data": {{"overall_rating": 3.8, "pros": [], "cons": [], "recommend_to_friend": "75%",
                     "ceo_approval": "80%"}},
  "funding_data": {{"stage": "Series B", "total_raised": "", "valuation": "",
                   "last_round": {{"round": "", "amount": "", "date": "", "investors": []}},
                   "notable_investors": []}},
  "competitors": [{{"name": "", "relationship": ""}}],
  "interview_tips": [{{"category": "preparation", "tip": "", "priority": "high"}}],
  "common_interview_topics": [],
  "core_values": [],
  "values_alignment": [{{"value": "", "how_to_demo": ""}}],
  "key_takeaways": [],
  "recruiter_context": {{"is_well_known": false, "size": "startup", "comparable": "Stripe",
                        "context": "Series B fintech startup"}}
}}

Valid values for "category": "preparation", "technical", "behavioral", "cultural_fit", "questions_to_ask".
Valid values for "priority": "high", "medium", "low".
Scores are numbers between 1 and 5. If information is unavailable, say so rather than inventing it.
""" + JSON_OUTPUT_INSTRUCTIONS


def build_company_research_prompt(company_name: str, job: JobData | None = None) -> str:
    role = f"\n**Role applied for:** {job.title}" if job is not None and job.title else ""
    return f"""Research the following company and provide an intelligence report:

**Company:** {company_name}{role}

Cover the company overview, culture ratings, employee sentiment, funding, competitors, \
prioritized interview tips, core values with how to demonstrate them, key takeaways and \
recruiter context. Return a JSON object matching the schema."""


# --- Soft skills ---

SOFT_SKILLS_SYSTEM_PROMPT = """You are a career coach and behavioral interview specialist running \
a short conversational assessment of one soft skill.

Ask situational questions ("Tell me about a time when..."), probe for specific steps and \
outcomes, and judge the depth of the evidence.

Evidence score (1-5):
1 Developing: limited, vague examples
2 Foundational: basic examples, some detail
3 Competent: clear examples, moderate impact
4 Proficient: multiple strong examples, significant impact
5 Expert: exceptional examples, mentoring others, transformative impact

Ask at most 5 questions. After 3-5 exchanges, when you have enough evidence, complete the assessment.

Each turn, respond with:
{
  "message": "Your question or closing message",
  "is_complete": false,
  "question_number": 2,
  "evidence_score": null,
  "statement": null
}
When complete, set "is_complete" to true, give "evidence_score" 1-5 and a third-person, \
action-oriented resume "statement".
""" + JSON_OUTPUT_INSTRUCTIONS


def build_start_assessment_prompt(skill: str) -> str:
    return f"""You are starting a soft skills assessment for the skill: "{skill}"

Greet the person warmly and ask your first situational question about this skill.
Respond in JSON format as specified."""


def build_chat_prompt(skill: str, conversation: list[SurveyMessage], question_number: int) -> str:
    transcript = "\n\n".join(
        f"{'Interviewer' if m.role == 'assistant' else 'Candidate'}: {m.content}" for m in conversation
    )
    return f"""You are conducting a soft skills assessment for: "{skill}"

## Conversation So Far
{transcript}

## Current Status
- Question number: {question_number}
- You have asked {question_number - 1} questions so far

Either ask a follow-up question to gather more evidence, or complete the assessment with a \
score and statement if you have 3+ clear, consistent examples.
Respond in JSON format as specified."""


# --- Resume parsing ---

RESUME_PARSING_SYSTEM_PROMPT = """You are an expert resume parser. Extract structured information \
from raw resume text.

Guidelines:
1. Extract ALL information present; do not skip sections
2. Recognize alternative section names ("Professional Experience", "Employment History", ...)
3. Handle any date format ("Jan 2020", "01/2020", "2020")
4. Generate ids of the form "exp-1", "edu-1", "proj-1", "bullet-1"
5. Collect skills from every section that lists them
6. Use an empty array or empty string for missing sections
7. Preserve the original text of bullet points
""" + JSON_OUTPUT_INSTRUCTIONS


def build_resume_parsing_prompt(text: str) -> str:
    return f"""Parse the following resume text into structured JSON:

## Resume Text
{text}

## Required Output Schema
{{
  "contact": {{"name": "", "email": "", "phone": "", "linkedin": "", "github": "", "location": ""}},
  "summary": "",
  "experiences": [
    {{"id": "exp-1", "company": "", "title": "", "location": "", "start_date": "Jan 2020",
      "end_date": "Present", "bullets": [{{"id": "bullet-1", "text": ""}}]}}
  ],
  "education": [
    {{"id": "edu-1", "institution": "", "degree": "", "field": "", "graduation_date": "", "gpa": ""}}
  ],
  "skills": {{"technical": [], "soft": [], "languages": [], "certifications": []}},
  "projects": [{{"id": "proj-1", "name": "", "description": "", "technologies": [], "link": ""}}]
}}"""
