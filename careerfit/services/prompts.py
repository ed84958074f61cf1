from __future__ import annotations

from typing import Any, Iterable

from careerfit.core.career_stages import CareerStageContext
from careerfit.schemas.analysis import Candidate, DocumentKind, Employer, Job

NOT_SPECIFIED = "Not specified"
COMPANY_PLACEHOLDER = "Company name not available"

EXTRACTION_PROMPTS: dict[DocumentKind, str] = {
    "cv": (
        "Extract all text content from this CV/Resume document. Focus on:\n"
        "- Personal information and contact details\n"
        "- Education background and qualifications\n"
        "- Work experience and employment history\n"
        "- Technical and soft skills\n"
        "- Certifications and achievements\n"
        "- Projects and accomplishments\n\n"
        "Return only the extracted text content in a clear, structured format."
    ),
    "cover_letter": (
        "Extract all text content from this cover letter document. Focus on:\n"
        "- Contact information and addressing\n"
        "- Opening and introduction\n"
        "- Key qualifications and experiences mentioned\n"
        "- Specific achievements and examples\n"
        "- Closing statements and call to action\n\n"
        "Return only the extracted text content maintaining the document's flow."
    ),
}


def join_or_placeholder(items: Iterable[Any] | None, separator: str = ", ") -> str:
    if not items:
        return NOT_SPECIFIED
    values = [item for item in items if isinstance(item, str) and item]
    return separator.join(values) or NOT_SPECIFIED


def _employer_name(employer: Employer | None) -> str:
    if employer is None or not employer.name:
        return COMPANY_PLACEHOLDER
    return employer.name


def build_cv_prompt(
    cv_text: str,
    candidate: Candidate,
    job: Job,
    employer: Employer | None,
    stage: CareerStageContext,
) -> str:
    stage_label = candidate.career_stage or "current"
    return f"""Analyze this CV against the job requirements considering the candidate's career stage context.

CV CONTENT:
{cv_text}

TALENT PROFILE:
- Name: {candidate.full_name or 'Not provided'}
- Career Stage: {candidate.career_stage or NOT_SPECIFIED} ({stage.description})
- Career Focus: {stage.focus}
- Profile Skills: {join_or_placeholder(candidate.skills)}
- Education: {join_or_placeholder(candidate.degrees)}

JOB REQUIREMENTS:
- Position: {job.name or NOT_SPECIFIED}
- Company: {_employer_name(employer)}
- Seniority Level: {job.seniority_level or NOT_SPECIFIED}
- Required Skills: {join_or_placeholder(job.skills)}
- Required Degrees: {join_or_placeholder(job.degrees)}
- Key Responsibilities: {job.responsibilities or 'Not detailed'}

CAREER STAGE PRIORITIES: {', '.join(stage.priorities)}
CAREER STAGE EXPECTATIONS: {stage.expectations}

Provide analysis in this JSON format with concise, actionable insights:

{{
  "overallMatchScore": 75,
  "careerStageAlignment": {{
    "score": 80,
    "isAppropriateLevel": true,
    "stageSpecificInsights": "Strong alignment for {stage_label} stage professional",
    "growthOpportunity": "Role offers good advancement potential"
  }},
  "skillsAnalysis": {{
    "matchingSkills": ["JavaScript", "React"],
    "criticalGaps": ["Docker", "AWS"],
    "transferableSkills": ["Problem Solving"],
    "matchPercentage": 70
  }},
  "experienceAlignment": {{
    "relevantExperience": "2+ years relevant experience in web development",
    "levelMatch": true,
    "industryFit": "Good technical foundation for role requirements"
  }},
  "educationMatch": {{
    "degreeAlignment": 85,
    "additionalCertifications": ["AWS Developer Associate"]
  }},
  "topStrengths": [
    "Strong technical foundation matching role requirements",
    "Education background aligns well with position needs",
    "Career stage appropriate for role level and growth path"
  ],
  "improvementAreas": [
    "Obtain AWS certification to strengthen cloud skills",
    "Gain hands-on Docker experience",
    "Build portfolio projects demonstrating industry knowledge"
  ],
  "careerStageGuidance": {{
    "recommendation": "Apply with confidence - role aligns with career stage",
    "nextSteps": [
      "Highlight transferable skills in application",
      "Emphasize learning mindset and growth potential",
      "Connect with professionals in target company"
    ],
    "timelineAdvice": "Ready to apply now while pursuing skill development"
  }},
  "applicationReadiness": 78
}}

Keep insights concise and focused on actionable guidance for this {stage_label} stage professional."""


def build_cover_letter_prompt(
    cover_letter_text: str,
    candidate: Candidate,
    job: Job,
    employer: Employer | None,
    stage: CareerStageContext,
) -> str:
    stage_label = candidate.career_stage or "current"
    return f"""Analyze this cover letter against job requirements considering the candidate's career stage.

COVER LETTER CONTENT:
{cover_letter_text}

TALENT PROFILE:
- Name: {candidate.full_name or 'Not provided'}
- Career Stage: {candidate.career_stage or NOT_SPECIFIED} ({stage.description})
- Profile Skills: {join_or_placeholder(candidate.skills)}
- Education: {join_or_placeholder(candidate.degrees)}

JOB DETAILS:
- Position: {job.name or NOT_SPECIFIED}
- Company: {_employer_name(employer)}
- Seniority Level: {job.seniority_level or NOT_SPECIFIED}
- Required Skills: {join_or_placeholder(job.skills)}
- Required Degrees: {join_or_placeholder(job.degrees)}
- Key Responsibilities: {job.responsibilities or 'Not detailed'}

CAREER STAGE CONTEXT: {stage.focus}
CAREER STAGE EXPECTATIONS: {stage.expectations}
CAREER STAGE PRIORITIES: {', '.join(stage.priorities)}

Analyze and provide feedback in this JSON format:

{{
  "overallEffectiveness": 75,
  "careerStageAppropriate": {{
    "score": 80,
    "toneAlignment": "Professional tone appropriate for {stage_label} stage",
    "contentLevel": "Content demonstrates suitable experience level",
    "growthMindset": "Shows learning orientation suitable for career stage"
  }},
  "contentQuality": {{
    "jobAlignment": 75,
    "skillsHighlighted": ["JavaScript", "Team Collaboration"],
    "companyResearch": 65,
    "personalizedElements": ["Mentioned company values", "Referenced specific role requirements"]
  }},
  "communicationEffectiveness": {{
    "clarity": 85,
    "persuasiveness": 70,
    "professionalTone": 90
  }},
  "keyStrengths": [
    "Clear articulation of relevant skills and experience",
    "Good understanding of role requirements",
    "Appropriate tone for career stage and industry"
  ],
  "improvements": [
    "Include more specific examples of achievements",
    "Better research into company recent developments",
    "Strengthen closing with clear call to action"
  ],
  "careerStageGuidance": {{
    "approach": "Emphasize growth potential and learning mindset",
    "focusAreas": [
      "Highlight relevant coursework and projects",
      "Show enthusiasm for career development",
      "Connect experience to role requirements"
    ]
  }},
  "actionItems": [
    "Add specific metrics to achievement examples",
    "Research one recent company achievement to mention",
    "Strengthen closing paragraph with next steps"
  ]
}}

Provide specific, actionable feedback for this {stage_label} professional."""
