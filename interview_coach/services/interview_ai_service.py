"""
Question and feedback generation for interview sessions
"""

from sqlalchemy.orm import Session
import structlog

from interview_coach.ai import prompts
from interview_coach.ai.extraction import extract_question_set, extract_feedback
from interview_coach.ai.question_bank import get_test_questions
from interview_coach.core.config import settings
from interview_coach.core.errors import NoResponses, NotFound, InterviewError
from interview_coach.core.logging import truncate
from interview_coach.models.feedback import InterviewFeedback
from interview_coach.models.question import InterviewQuestion
from interview_coach.models.session import InterviewSession
from interview_coach.models.user import User
from interview_coach.services import record_mapper
from interview_coach.services.session_service import get_session, update_status
from interview_coach.utils.enums import SessionStatus

logger = structlog.get_logger(__name__)


def generate_questions(
    db: Session,
    user: User,
    session_id: str,
    generator,
    use_test_questions: bool | None = None,
) -> list[InterviewQuestion]:
    session = get_session(db, user, session_id)
    count = prompts.question_count_for(session.difficulty)

    if use_test_questions is None:
        use_test_questions = settings.USE_TEST_QUESTIONS

    logger.info(
        "generating_questions",
        session_id=session.id,
        count=count,
        test_mode=use_test_questions,
    )

    if use_test_questions:
        payload = {
            "questions": get_test_questions(
                session.job_role, session.interview_type, session.difficulty
            )
        }
    else:
        prompt = prompts.build_question_prompt(
            job_role=session.job_role,
            job_description=session.job_description,
            interview_type=session.interview_type,
            difficulty=session.difficulty,
            question_count=count,
            industry=user.industry,
            skills=user.skills,
        )
        text = generator.generate(prompt)
        logger.debug("question_response_raw", session_id=session.id, text=truncate(text))
        payload = extract_question_set(text)

    return record_mapper.persist_questions(
        db, session.id, payload, default_difficulty=session.difficulty
    )


def _qa_items(session: InterviewSession) -> list[dict]:
    return [
        {
            "question": response.question.question_text,
            "category": response.question.category,
            "key_points": response.question.key_points or [],
            "answer": response.transcription,
            "duration": response.duration,
        }
        for response in session.responses
    ]


def generate_feedback(db: Session, user: User, session_id: str, generator) -> InterviewFeedback:
    session = get_session(db, user, session_id)

    if not session.responses:
        raise NoResponses("No responses found for this session")

    prompt = prompts.build_feedback_prompt(
        job_role=session.job_role,
        interview_type=session.interview_type,
        qa_items=_qa_items(session),
    )

    logger.info(
        "generating_feedback",
        session_id=session.id,
        responses=len(session.responses),
    )
    text = generator.generate(prompt)
    logger.debug("feedback_response_raw", session_id=session.id, text=truncate(text))

    payload = extract_feedback(text)
    return record_mapper.persist_feedback(db, session.id, payload)


def get_feedback(db: Session, user: User, session_id: str) -> InterviewFeedback:
    session = get_session(db, user, session_id)
    if not session.feedback:
        raise NotFound("Feedback not found for this session")
    return session.feedback


def generate_follow_up(db: Session, user: User, session_id: str, previous_response: str, generator) -> str:
    session = get_session(db, user, session_id)
    prompt = prompts.build_follow_up_prompt(
        job_role=session.job_role,
        interview_type=session.interview_type,
        previous_response=previous_response,
    )
    return generator.generate(prompt).strip()


def complete_interview(db: Session, user: User, session_id: str, generator) -> dict:
    """
    Mark the session completed and immediately ask for its feedback.

    A feedback failure does not undo the completion; it is reported in the
    result so the client can retry feedback generation on its own.
    """
    session = update_status(db, user, session_id, SessionStatus.COMPLETED)

    try:
        feedback = generate_feedback(db, user, session_id, generator)
    except InterviewError as e:
        logger.warning(
            "feedback_after_completion_failed",
            session_id=session_id,
            error=e.message,
            kind=e.kind,
        )
        return {"session": session, "feedback": None, "error": e.message}

    return {"session": session, "feedback": feedback, "error": None}
