"""
Maps validated model payloads onto database rows
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError
from uuid import uuid4
import structlog

from interview_coach.core.errors import InvalidShape, PersistenceFailure
from interview_coach.models.feedback import InterviewFeedback
from interview_coach.models.question import InterviewQuestion
from interview_coach.schemas.feedback import GeneratedFeedback
from interview_coach.schemas.question import GeneratedQuestion

logger = structlog.get_logger(__name__)


def _first_error(e: ValidationError) -> str:
    error = e.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}"


def persist_questions(
    db: Session,
    session_id: str,
    payload: dict,
    default_difficulty: str = "Medium",
) -> list[InterviewQuestion]:
    items = payload.get("questions")
    if not isinstance(items, list):
        raise InvalidShape("Question payload has no 'questions' list")

    parsed = []
    for index, item in enumerate(items):
        try:
            parsed.append(GeneratedQuestion.model_validate(item))
        except ValidationError as e:
            raise InvalidShape(f"Question {index} is invalid: {_first_error(e)}", cause=e) from e

    # order_index follows array position exactly
    questions = [
        InterviewQuestion(
            id=str(uuid4()),
            session_id=session_id,
            question_text=q.question_text,
            category=q.category,
            difficulty=q.difficulty or default_difficulty,
            order_index=index,
            key_points=list(q.key_points),
            evaluation_criteria=(
                q.evaluation_criteria.model_dump() if q.evaluation_criteria else None
            ),
        )
        for index, q in enumerate(parsed)
    ]

    db.add_all(questions)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("questions_persist_failed", session_id=session_id, error=str(e))
        raise PersistenceFailure(f"Failed to save interview questions: {e}", cause=e) from e

    for question in questions:
        db.refresh(question)

    logger.info("questions_persisted", session_id=session_id, count=len(questions))
    return questions


def persist_feedback(db: Session, session_id: str, payload: dict) -> InterviewFeedback:
    try:
        data = GeneratedFeedback.model_validate(payload)
    except ValidationError as e:
        raise InvalidShape(f"Feedback is invalid: {_first_error(e)}", cause=e) from e

    feedback = InterviewFeedback(
        id=str(uuid4()),
        session_id=session_id,
        overall_score=data.overall_score,
        technical_score=data.technical_score,
        behavioral_score=data.behavioral_score,
        communication_score=data.communication_score,
        overall_summary=data.overall_summary,
        strengths=list(data.strengths),
        improvements=list(data.improvements),
        recommendations=list(data.recommendations),
        question_analysis=[qa.model_dump(by_alias=True) for qa in data.question_analysis],
        metrics_data=data.metrics_data,
    )

    db.add(feedback)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("feedback_persist_failed", session_id=session_id, error=str(e))
        raise PersistenceFailure(f"Failed to save interview feedback: {e}", cause=e) from e
    db.refresh(feedback)

    logger.info(
        "feedback_persisted",
        session_id=session_id,
        overall_score=feedback.overall_score,
    )
    return feedback
