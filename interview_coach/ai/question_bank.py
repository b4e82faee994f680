"""
Built-in questions served when ``USE_TEST_QUESTIONS`` is set, so the app can
be exercised without a Gemini key.
"""

import math

from interview_coach.ai.prompts import question_count_for
from interview_coach.utils.enums import InterviewType, QuestionCategory

TECHNICAL = [
    (
        "Describe your experience with the key technologies required for a {job_role} position.",
        [
            "Specific technologies and frameworks",
            "Years of experience with each",
            "Real-world projects where you used them",
            "Depth of knowledge demonstrated",
        ],
        (
            "Clear articulation of technical experience",
            "Demonstrates deep understanding of technologies",
            "Experience aligns with job requirements",
        ),
    ),
    (
        "Walk me through how you would approach solving a complex technical problem in this role.",
        [
            "Problem analysis and breakdown",
            "Solution design approach",
            "Consideration of trade-offs",
            "Testing and validation strategy",
        ],
        (
            "Structured and logical explanation",
            "Shows systematic problem-solving approach",
            "Practical and applicable to real scenarios",
        ),
    ),
    (
        "What are the most important best practices you follow in your development work?",
        [
            "Code quality and maintainability",
            "Testing and documentation",
            "Version control practices",
            "Security considerations",
        ],
        (
            "Well-articulated practices",
            "Understanding of why practices matter",
            "Industry-standard approaches",
        ),
    ),
]

BEHAVIORAL = [
    (
        "Tell me about a challenging project you worked on and how you overcame the obstacles.",
        [
            "Specific situation and context",
            "Challenges faced",
            "Actions taken to overcome them",
            "Results and lessons learned",
        ],
        (
            "Clear STAR format response",
            "Demonstrates problem-solving and resilience",
            "Applicable to the target role",
        ),
    ),
    (
        "Describe a time when you had to work with a difficult team member. How did you handle it?",
        [
            "Situation description",
            "Communication approach",
            "Conflict resolution strategy",
            "Outcome and relationship improvement",
        ],
        (
            "Honest and professional response",
            "Shows emotional intelligence",
            "Demonstrates teamwork skills",
        ),
    ),
    (
        "How do you prioritize tasks when you have multiple deadlines?",
        [
            "Prioritization framework",
            "Communication with stakeholders",
            "Time management techniques",
            "Handling competing priorities",
        ],
        (
            "Clear methodology explained",
            "Shows organizational skills",
            "Practical and effective approach",
        ),
    ),
]

SITUATIONAL = [
    (
        "If you were hired for this {job_role} position, what would you focus on in your first 90 days?",
        [
            "Learning and onboarding plan",
            "Relationship building",
            "Quick wins identification",
            "Long-term strategy alignment",
        ],
        (
            "Well-structured 90-day plan",
            "Shows strategic thinking",
            "Aligned with role expectations",
        ),
    ),
    (
        "How would you handle a situation where you disagree with a technical decision made by your team lead?",
        [
            "Respectful communication",
            "Data-driven arguments",
            "Willingness to understand other perspectives",
            "Team collaboration",
        ],
        (
            "Professional approach outlined",
            "Shows maturity and diplomacy",
            "Demonstrates good judgment",
        ),
    ),
]


def _as_payload(entry, category: QuestionCategory, job_role: str, difficulty: str) -> dict:
    text, key_points, (clarity, depth, relevance) = entry
    return {
        "questionText": text.format(job_role=job_role),
        "category": category.value,
        "difficulty": difficulty,
        "keyPoints": list(key_points),
        "evaluationCriteria": {
            "clarity": clarity,
            "depth": depth,
            "relevance": relevance,
        },
    }


def get_test_questions(job_role: str, interview_type: str, difficulty: str) -> list[dict]:
    """Return questions in the same shape the model is asked to produce."""
    count = question_count_for(difficulty)

    technical = [_as_payload(q, QuestionCategory.TECHNICAL, job_role, difficulty) for q in TECHNICAL]
    behavioral = [_as_payload(q, QuestionCategory.BEHAVIORAL, job_role, difficulty) for q in BEHAVIORAL]
    situational = [_as_payload(q, QuestionCategory.SITUATIONAL, job_role, difficulty) for q in SITUATIONAL]

    if interview_type == InterviewType.TECHNICAL:
        selected = technical[:count]
    elif interview_type == InterviewType.BEHAVIORAL:
        selected = behavioral[:count]
    else:
        tech_count = math.ceil(count / 2)
        selected = technical[:tech_count] + behavioral[:count - tech_count]

    # Pad with situational questions until the count is reached
    while len(selected) < count:
        selected.append(dict(situational[len(selected) % len(situational)]))

    return selected[:count]
