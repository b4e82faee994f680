"""
Prompt templates for the interview pipeline
"""

QUESTION_COUNTS = {
    "Easy": 5,
    "Medium": 6,
    "Hard": 8,
}

QUESTION_PROMPT = """
You are an expert technical interviewer. Generate {count} interview questions for the following position:

Job Role: {job_role}
Job Description: {job_description}
Interview Type: {interview_type}
Difficulty Level: {difficulty}
{candidate_context}
Generate a mix of questions based on the interview type:
- If "Technical": Focus on technical skills, problem-solving, and domain knowledge
- If "Behavioral": Focus on past experiences, soft skills, and situational responses
- If "Mixed": Include both technical and behavioral questions

For each question, provide:
1. The question text
2. Category (Technical, Behavioral, or Situational)
3. Key points that should be covered in a good answer
4. Evaluation criteria

Return ONLY valid JSON in this exact format, no additional text:
{{
  "questions": [
    {{
      "questionText": "string",
      "category": "Technical|Behavioral|Situational",
      "difficulty": "Easy|Medium|Hard",
      "keyPoints": ["point1", "point2", "point3"],
      "evaluationCriteria": {{
        "clarity": "What to look for in terms of clarity",
        "depth": "What depth of knowledge is expected",
        "relevance": "How relevant the answer should be"
      }}
    }}
  ]
}}
"""

FEEDBACK_PROMPT = """
You are an expert interview evaluator. Analyze the following interview responses and provide comprehensive feedback.

Job Role: {job_role}
Interview Type: {interview_type}

Questions and Answers:
{qa_block}

Provide a detailed evaluation in the following JSON format (ONLY JSON, no additional text):
{{
  "overallScore": <number 0-10>,
  "overallSummary": "A comprehensive summary of the interview performance",
  "technicalScore": <number 0-10 or null if no technical questions>,
  "behavioralScore": <number 0-10 or null if no behavioral questions>,
  "communicationScore": <number 0-10>,
  "strengths": ["strength1", "strength2", "strength3"],
  "improvements": ["improvement1", "improvement2", "improvement3"],
  "recommendations": ["recommendation1", "recommendation2", "recommendation3"],
  "questionAnalysis": [
    {{
      "questionIndex": 0,
      "score": <number 0-10>,
      "feedback": "Detailed feedback for this question",
      "keyPointsCovered": ["point1", "point2"]
    }}
  ],
  "metricsData": {{
    "categoryScores": {{
      "Technical": <number 0-10>,
      "Behavioral": <number 0-10>,
      "Situational": <number 0-10>
    }},
    "skillsAssessed": ["skill1", "skill2", "skill3"]
  }}
}}

Evaluation Guidelines:
- Be constructive and encouraging
- Provide specific, actionable feedback
- Consider both content quality and communication clarity
- Assess how well key points were addressed
- Evaluate the depth and relevance of answers
"""

QA_ITEM = """Q{number} [{category}]: {question}
Expected Key Points: {key_points}
Candidate's Answer: {answer}
Response Duration: {duration} seconds
"""

FOLLOW_UP_PROMPT = """
You are conducting a {interview_type} interview for a {job_role} position.

The candidate just answered: "{previous_response}"

Generate ONE insightful follow-up question that:
1. Probes deeper into their answer
2. Clarifies any ambiguous points
3. Assesses their depth of knowledge

Return ONLY the follow-up question text, nothing else.
"""


def question_count_for(difficulty: str) -> int:
    return QUESTION_COUNTS.get(difficulty, QUESTION_COUNTS["Medium"])


def build_question_prompt(
    job_role: str,
    job_description: str,
    interview_type: str,
    difficulty: str,
    question_count: int,
    industry: str | None = None,
    skills: list[str] | None = None,
) -> str:
    context_lines = []
    if industry:
        context_lines.append(f"Industry: {industry}")
    if skills:
        context_lines.append(f"Candidate Skills: {', '.join(skills)}")
    candidate_context = "\n".join(context_lines) + "\n" if context_lines else ""

    return QUESTION_PROMPT.format(
        count=question_count,
        job_role=job_role,
        job_description=job_description,
        interview_type=interview_type,
        difficulty=difficulty,
        candidate_context=candidate_context,
    )


def build_feedback_prompt(job_role: str, interview_type: str, qa_items: list[dict]) -> str:
    """``qa_items`` are dicts with question, category, key_points, answer and duration."""
    qa_block = "\n".join(
        QA_ITEM.format(
            number=i + 1,
            category=item.get("category", ""),
            question=item["question"],
            key_points=", ".join(item.get("key_points") or []),
            answer=item["answer"],
            duration=item.get("duration") or "N/A",
        )
        for i, item in enumerate(qa_items)
    )

    return FEEDBACK_PROMPT.format(
        job_role=job_role,
        interview_type=interview_type,
        qa_block=qa_block,
    )


def build_follow_up_prompt(job_role: str, interview_type: str, previous_response: str) -> str:
    return FOLLOW_UP_PROMPT.format(
        job_role=job_role,
        interview_type=interview_type,
        previous_response=previous_response,
    )
