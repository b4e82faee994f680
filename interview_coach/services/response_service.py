from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from uuid import uuid4
import structlog

from interview_coach.core.errors import NotFound, PersistenceFailure
from interview_coach.models.question import InterviewQuestion
from interview_coach.models.response import InterviewResponse
from interview_coach.models.session import InterviewSession
from interview_coach.models.user import User
from interview_coach.schemas.response import ResponseCreate, ResponseUpdate
from interview_coach.services.session_service import get_session

logger = structlog.get_logger(__name__)


def save_response(db: Session, user: User, session_id: str, data: ResponseCreate) -> InterviewResponse:
    session = get_session(db, user, session_id)

    question = (
        db.query(InterviewQuestion)
        .filter(
            InterviewQuestion.id == data.question_id,
            InterviewQuestion.session_id == session.id,
        )
        .first()
    )
    if not question:
        raise NotFound("Question not found in this session")

    response = InterviewResponse(
        id=str(uuid4()),
        session_id=session.id,
        question_id=question.id,
        transcription=data.transcription,
        audio_url=data.audio_url,
        duration=data.duration,
        confidence=data.confidence,
    )
    db.add(response)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("response_save_failed", session_id=session.id, error=str(e))
        raise PersistenceFailure(f"Failed to save interview response: {e}", cause=e) from e
    db.refresh(response)

    logger.info(
        "response_saved",
        session_id=session.id,
        question_id=question.id,
        order_index=question.order_index,
        length=len(data.transcription),
    )
    return response


def list_responses(db: Session, user: User, session_id: str) -> list[InterviewResponse]:
    session = get_session(db, user, session_id)
    return (
        db.query(InterviewResponse)
        .filter(InterviewResponse.session_id == session.id)
        .order_by(InterviewResponse.created_at.asc())
        .all()
    )


def _get_owned_response(db: Session, user: User, response_id: str) -> InterviewResponse:
    response = (
        db.query(InterviewResponse)
        .join(InterviewSession, InterviewResponse.session_id == InterviewSession.id)
        .filter(InterviewResponse.id == response_id, InterviewSession.user_id == user.id)
        .first()
    )
    if not response:
        raise NotFound("Interview response not found")
    return response


def update_transcription(db: Session, user: User, response_id: str, data: ResponseUpdate) -> InterviewResponse:
    response = _get_owned_response(db, user, response_id)
    response.transcription = data.transcription
    response.confidence = data.confidence
    response.updated_at = datetime.utcnow()
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("response_update_failed", response_id=response_id, error=str(e))
        raise PersistenceFailure(f"Failed to update interview response: {e}", cause=e) from e
    db.refresh(response)
    return response


def delete_response(db: Session, user: User, response_id: str) -> None:
    response = _get_owned_response(db, user, response_id)
    db.delete(response)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("response_delete_failed", response_id=response_id, error=str(e))
        raise PersistenceFailure(f"Failed to delete interview response: {e}", cause=e) from e
    logger.info("response_deleted", response_id=response_id)
