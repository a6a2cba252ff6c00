"""Bullet and summary templates referenced by transformation rules."""

from typing import Literal

from pydantic import BaseModel

from models.schemas.rules import StrategicTone

TemplateType = Literal["metrics", "context", "keywords", "soft_skills"]


class TemplateExample(BaseModel):
    before: str
    after: str


class BulletTemplate(BaseModel):
    id: str
    name: str
    pattern: str
    variables: list[str]
    examples: list[TemplateExample] = []
    applicable_to: list[TemplateType]


class SummaryTemplate(BaseModel):
    id: str
    name: str
    structure: str
    variables: list[str]
    tone_guidelines: dict[StrategicTone, str]


class CandidateProfile(BaseModel):
    years_experience: float = 0
    is_career_changer: bool = False
    is_leader: bool = False
    is_international: bool = False
    is_specialist: bool = False


def _bullet(id, name, pattern, variables, examples, applicable_to) -> BulletTemplate:
    return BulletTemplate(
        id=id,
        name=name,
        pattern=pattern,
        variables=variables,
        examples=[TemplateExample(before=b, after=a) for b, a in examples],
        applicable_to=applicable_to,
    )


BULLET_TEMPLATES: list[BulletTemplate] = [
    # CAR (Challenge-Action-Result)
    _bullet(
        "CAR_FORMAT",
        "CAR Format",
        "{action_verb} {what} by {how}, resulting in {metric} {improvement}",
        ["action_verb", "what", "how", "metric", "improvement"],
        [
            ("Worked on ML model for processing data",
             "Engineered ML pipeline processing 10M+ daily transactions, reducing data latency by 40%"),
            ("Helped improve website performance",
             "Optimized frontend rendering by implementing lazy loading and code splitting, "
             "improving page load time by 65%"),
        ],
        ["metrics"],
    ),
    _bullet(
        "FULL_CAR_TRANSFORM",
        "Full CAR Transformation",
        "{challenge_context}: {action_verb} {solution} resulting in {quantified_result}",
        ["challenge_context", "action_verb", "solution", "quantified_result"],
        [
            ("Managed cloud infrastructure",
             "Facing 99.5% uptime requirements: Architected fault-tolerant cloud infrastructure across "
             "3 AWS regions, achieving 99.99% uptime for 2M+ daily active users"),
        ],
        ["metrics", "context"],
    ),
    # Scale
    _bullet(
        "SCALE_ENHANCEMENT",
        "Scale Context Addition",
        "{original} ({scale_context})",
        ["original", "scale_context"],
        [
            ("Managed cloud infrastructure",
             "Managed cloud infrastructure serving 2M+ daily active users across 3 AWS regions"),
            ("Led development of mobile app",
             "Led development of mobile app with 500K+ downloads and 4.8 star rating"),
        ],
        ["metrics"],
    ),
    _bullet(
        "TEAM_SCALE",
        "Team Scale Addition",
        "{action} {responsibility} across a team of {team_size} {role_type}",
        ["action", "responsibility", "team_size", "role_type"],
        [
            ("Led frontend development",
             "Led frontend development across a team of 8 engineers, delivering 15+ features per quarter"),
        ],
        ["metrics"],
    ),
    # Percentages
    _bullet(
        "PERCENTAGE_IMPROVEMENT",
        "Percentage Improvement",
        "{action_verb} {what}, {direction} {metric} by {percentage}%",
        ["action_verb", "what", "direction", "metric", "percentage"],
        [
            ("Improved database queries",
             "Optimized database queries, reducing query latency by 75% and saving $50K annually in compute costs"),
        ],
        ["metrics"],
    ),
    _bullet(
        "BEFORE_AFTER",
        "Before/After Comparison",
        "{action_verb} {what}, improving {metric} from {before} to {after}",
        ["action_verb", "what", "metric", "before", "after"],
        [
            ("Fixed slow page loads",
             "Refactored rendering pipeline, improving page load time from 4.2s to 1.1s (74% faster)"),
        ],
        ["metrics"],
    ),
    # Time
    _bullet(
        "TIME_SAVINGS",
        "Time Savings",
        "{action_verb} {what}, saving {time_amount} {time_unit} per {period}",
        ["action_verb", "what", "time_amount", "time_unit", "period"],
        [
            ("Automated deployment process",
             "Automated CI/CD pipeline, saving 15 hours per week in manual deployment time"),
        ],
        ["metrics"],
    ),
    _bullet(
        "TIME_ACCELERATION",
        "Time Acceleration",
        "{action_verb} {process}, reducing {what} from {before} to {after}",
        ["action_verb", "process", "what", "before", "after"],
        [
            ("Sped up onboarding process",
             "Streamlined developer onboarding, reducing setup time from 2 days to 2 hours"),
        ],
        ["metrics"],
    ),
    # Company context
    _bullet(
        "COMPANY_CONTEXT_ENTERPRISE",
        "Enterprise Company Context",
        "At {company} (Fortune 500 {industry} leader), {rest_of_bullet}",
        ["company", "industry", "rest_of_bullet"],
        [
            ("Led infrastructure team",
             "At Acme Corp (Fortune 500 fintech leader), led infrastructure team supporting $2B+ in daily transactions"),
        ],
        ["context"],
    ),
    _bullet(
        "COMPANY_CONTEXT_STARTUP",
        "Startup Company Context",
        "At {company} ({funding_stage} {industry} startup), {rest_of_bullet}",
        ["company", "funding_stage", "industry", "rest_of_bullet"],
        [
            ("Built payment system",
             "At PayFlow (Series B fintech startup), built payment system processing 100K+ transactions monthly"),
        ],
        ["context"],
    ),
    _bullet(
        "COMPANY_CONTEXT_COMPARABLE",
        "Comparable Company Context",
        "At {company} (similar to early-stage {well_known_company}), {rest_of_bullet}",
        ["company", "well_known_company", "rest_of_bullet"],
        [
            ("Developed ML features",
             "At DataMind (similar to early-stage Databricks), developed ML features powering 50+ enterprise clients"),
        ],
        ["context"],
    ),
    # Soft skills
    _bullet(
        "LEADERSHIP_INTEGRATION",
        "Leadership Integration",
        "{led_verb} {team_desc} to {achievement}, {result}",
        ["led_verb", "team_desc", "achievement", "result"],
        [
            ("Worked on new feature launch",
             "Led cross-functional team of 6 to launch new feature, driving 25% increase in user engagement"),
        ],
        ["soft_skills"],
    ),
    _bullet(
        "COLLABORATION_INTEGRATION",
        "Collaboration Integration",
        "{collab_verb} with {teams} to {action}, resulting in {outcome}",
        ["collab_verb", "teams", "action", "outcome"],
        [
            ("Improved API performance",
             "Collaborated with backend and DevOps teams to optimize API performance, reducing latency by 60%"),
        ],
        ["soft_skills"],
    ),
    _bullet(
        "COMMUNICATION_INTEGRATION",
        "Communication Integration",
        "{comm_verb} {what} to {audience}, {outcome}",
        ["comm_verb", "what", "audience", "outcome"],
        [
            ("Created technical documentation",
             "Authored technical documentation and presented architecture decisions to VP-level stakeholders, "
             "securing $500K budget approval"),
        ],
        ["soft_skills"],
    ),
    # Keywords
    _bullet(
        "NATURAL_KEYWORD_INSERT",
        "Natural Keyword Insertion",
        "{original_bullet} using {keywords}",
        ["original_bullet", "keywords"],
        [
            ("Built data pipeline",
             "Built data pipeline using Apache Kafka and Spark, processing 1M+ events per second"),
        ],
        ["keywords"],
    ),
    _bullet(
        "KEYWORD_LEAD",
        "Keyword-Led Bullet",
        "Leveraging {keyword}, {action} to {result}",
        ["keyword", "action", "result"],
        [
            ("Created machine learning model",
             "Leveraging TensorFlow and PyTorch, developed ML model achieving 95% accuracy in fraud detection"),
        ],
        ["keywords"],
    ),
]

SUMMARY_TEMPLATES: list[SummaryTemplate] = [
    SummaryTemplate(
        id="EXPERIENCED_PROFESSIONAL",
        name="Experienced Professional",
        structure=(
            "{years_experience}+ years of experience in {domain} with proven expertise in {top_skills}. "
            "{unique_differentiator}. Seeking to leverage {key_strength} as {target_role} at {target_company}."
        ),
        variables=[
            "years_experience", "domain", "top_skills", "unique_differentiator",
            "key_strength", "target_role", "target_company",
        ],
        tone_guidelines={
            "confident": "Lead with 'Senior' or 'Staff-level' if applicable. Use 'delivered', 'drove', 'led'. "
                         "Position as the ideal candidate.",
            "measured": "Balance experience with continued learning. Use 'developed', 'contributed', 'grew'.",
            "humble": "Focus on eagerness and potential. Use 'passionate about', 'eager to', "
                      "'excited to contribute'.",
        },
    ),
    SummaryTemplate(
        id="CAREER_CHANGER",
        name="Career Transition",
        structure=(
            "{background_domain} professional transitioning to {target_domain}, bringing unique perspective "
            "from {unique_experience}. {transferable_value}. Seeking {target_role} where {contribution_statement}."
        ),
        variables=[
            "background_domain", "target_domain", "unique_experience", "transferable_value",
            "target_role", "contribution_statement",
        ],
        tone_guidelines={
            "confident": "Frame transition as strategic advantage. Emphasize transferable achievements.",
            "measured": "Acknowledge learning while highlighting relevant skills.",
            "humble": "Focus on enthusiasm and quick learning ability.",
        },
    ),
    SummaryTemplate(
        id="TECHNICAL_SPECIALIST",
        name="Technical Specialist",
        structure=(
            "{specialization} specialist with deep expertise in {technologies}. {quantified_achievement}. "
            "Passionate about {technical_passion} and seeking to {contribution} as {target_role}."
        ),
        variables=[
            "specialization", "technologies", "quantified_achievement", "technical_passion",
            "contribution", "target_role",
        ],
        tone_guidelines={
            "confident": "Lead with 'Expert in' or 'Specialist in'. Cite specific achievements.",
            "measured": "Use 'Strong background in'. Balance depth with breadth.",
            "humble": "Focus on continuous learning and problem-solving passion.",
        },
    ),
    SummaryTemplate(
        id="LEADER_MANAGER",
        name="Technical Leader",
        structure=(
            "{leadership_type} leader with {years} years building and scaling {team_type} teams. "
            "{leadership_achievement}. Seeking to drive {impact_area} as {target_role} at {target_company}."
        ),
        variables=[
            "leadership_type", "years", "team_type", "leadership_achievement",
            "impact_area", "target_role", "target_company",
        ],
        tone_guidelines={
            "confident": "Use 'Proven leader', 'Track record of'. Cite team sizes and outcomes.",
            "measured": "Use 'Experienced in leading'. Balance technical and people skills.",
            "humble": "Focus on servant leadership and team development.",
        },
    ),
    SummaryTemplate(
        id="INTERNATIONAL_CANDIDATE",
        name="International Background",
        structure=(
            "{domain} professional with {international_context}, bringing global perspective to "
            "{specialization}. {key_achievement}. Seeking {target_role} to apply {unique_value} at {target_company}."
        ),
        variables=[
            "domain", "international_context", "specialization", "key_achievement",
            "target_role", "unique_value", "target_company",
        ],
        tone_guidelines={
            "confident": "Position international experience as competitive advantage.",
            "measured": "Emphasize adaptability and diverse perspective.",
            "humble": "Focus on cultural awareness and learning orientation.",
        },
    ),
]

_BULLETS_BY_ID = {t.id: t for t in BULLET_TEMPLATES}
_SUMMARIES_BY_ID = {t.id: t for t in SUMMARY_TEMPLATES}


def get_bullet_template(template_id: str) -> BulletTemplate | None:
    return _BULLETS_BY_ID.get(template_id)


def get_templates_for_type(template_type: TemplateType) -> list[BulletTemplate]:
    return [t for t in BULLET_TEMPLATES if template_type in t.applicable_to]


def get_summary_template(template_id: str) -> SummaryTemplate | None:
    return _SUMMARIES_BY_ID.get(template_id)


def get_tone_guidance(template_id: str, tone: StrategicTone) -> str | None:
    template = get_summary_template(template_id)
    if template is None:
        return None
    return template.tone_guidelines.get(tone)


def suggest_summary_template(profile: CandidateProfile) -> SummaryTemplate:
    """Pick the summary template that best fits the candidate's profile."""
    if profile.is_career_changer:
        return _SUMMARIES_BY_ID["CAREER_CHANGER"]
    if profile.is_leader and profile.years_experience >= 5:
        return _SUMMARIES_BY_ID["LEADER_MANAGER"]
    if profile.is_international:
        return _SUMMARIES_BY_ID["INTERNATIONAL_CANDIDATE"]
    if profile.is_specialist:
        return _SUMMARIES_BY_ID["TECHNICAL_SPECIALIST"]
    return _SUMMARIES_BY_ID["EXPERIENCED_PROFESSIONAL"]
