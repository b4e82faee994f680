from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from uuid import uuid4
import structlog

from interview_coach.core.errors import NotFound, InvalidTransition, PersistenceFailure
from interview_coach.models.session import InterviewSession
from interview_coach.models.user import User
from interview_coach.schemas.session import SessionCreate, SessionSummary, InterviewStats
from interview_coach.utils.enums import SessionStatus

logger = structlog.get_logger(__name__)

# completed and cancelled are terminal
ALLOWED_TRANSITIONS = {
    SessionStatus.PENDING: {SessionStatus.IN_PROGRESS, SessionStatus.CANCELLED},
    SessionStatus.IN_PROGRESS: {SessionStatus.COMPLETED, SessionStatus.CANCELLED},
    SessionStatus.COMPLETED: set(),
    SessionStatus.CANCELLED: set(),
}


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[SessionStatus(current)]


def create_session(db: Session, user: User, data: SessionCreate) -> InterviewSession:
    session = InterviewSession(
        id=str(uuid4()),
        user_id=user.id,
        job_role=data.job_role,
        job_description=data.job_description,
        company_name=data.company_name,
        interview_type=data.interview_type.value,
        difficulty=data.difficulty.value,
        duration=data.duration,
        focus_areas=list(data.focus_areas),
        status=SessionStatus.PENDING.value,
    )
    db.add(session)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("session_create_failed", user_id=user.id, error=str(e))
        raise PersistenceFailure(f"Failed to create interview session: {e}", cause=e) from e
    db.refresh(session)

    logger.info(
        "session_created",
        session_id=session.id,
        user_id=user.id,
        interview_type=session.interview_type,
        difficulty=session.difficulty,
    )
    return session


def get_session(db: Session, user: User, session_id: str) -> InterviewSession:
    session = (
        db.query(InterviewSession)
        .filter(InterviewSession.id == session_id, InterviewSession.user_id == user.id)
        .first()
    )
    if not session:
        raise NotFound("Interview session not found")
    return session


def list_sessions(db: Session, user: User, limit: int = 10, offset: int = 0) -> list[SessionSummary]:
    sessions = (
        db.query(InterviewSession)
        .filter(InterviewSession.user_id == user.id)
        .order_by(InterviewSession.created_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )

    summaries = []
    for session in sessions:
        summary = SessionSummary.model_validate(session)
        summary.question_count = len(session.questions)
        summary.response_count = len(session.responses)
        summaries.append(summary)
    return summaries


def update_status(db: Session, user: User, session_id: str, status: SessionStatus) -> InterviewSession:
    session = get_session(db, user, session_id)
    current = SessionStatus(session.status)

    if not can_transition(current, status):
        raise InvalidTransition(
            f"Session cannot move from {current.value} to {status.value}"
        )

    now = datetime.utcnow()
    session.status = status.value
    session.updated_at = now
    if status == SessionStatus.IN_PROGRESS and session.started_at is None:
        session.started_at = now
    elif status == SessionStatus.COMPLETED:
        session.completed_at = now

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("session_status_update_failed", session_id=session_id, error=str(e))
        raise PersistenceFailure(f"Failed to update interview session: {e}", cause=e) from e
    db.refresh(session)

    logger.info(
        "session_status_changed",
        session_id=session.id,
        from_status=current.value,
        to_status=status.value,
    )
    return session


def enter_interview_room(db: Session, user: User, session_id: str) -> InterviewSession:
    """Start the session on its first load; later loads leave it untouched."""
    session = get_session(db, user, session_id)
    if session.status == SessionStatus.PENDING.value:
        return update_status(db, user, session_id, SessionStatus.IN_PROGRESS)
    if session.status != SessionStatus.IN_PROGRESS.value:
        raise InvalidTransition(f"Session is already {session.status}")
    return session


def delete_session(db: Session, user: User, session_id: str) -> None:
    session = get_session(db, user, session_id)
    # Questions, responses and feedback go with it
    db.delete(session)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("session_delete_failed", session_id=session_id, error=str(e))
        raise PersistenceFailure(f"Failed to delete interview session: {e}", cause=e) from e
    logger.info("session_deleted", session_id=session_id)


def get_stats(db: Session, user: User) -> InterviewStats:
    sessions = (
        db.query(InterviewSession)
        .filter(
            InterviewSession.user_id == user.id,
            InterviewSession.status == SessionStatus.COMPLETED.value,
        )
        .all()
    )

    total = len(sessions)
    if total:
        average_score = sum(
            s.feedback.overall_score if s.feedback else 0 for s in sessions
        ) / total
        average_communication = sum(
            s.feedback.communication_score if s.feedback else 0 for s in sessions
        ) / total
    else:
        average_score = 0.0
        average_communication = 0.0

    return InterviewStats(
        total_interviews=total,
        average_score=round(average_score, 2),
        average_communication_score=round(average_communication, 2),
        completed_interviews=total,
    )
