from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from interview_coach.core.auth import get_current_user
from interview_coach.core.database import get_db
from interview_coach.models.user import User
from interview_coach.schemas.session import (
    SessionCreate,
    SessionStatusUpdate,
    SessionResponse,
    SessionSummary,
    SessionDetail,
    InterviewStats,
)
from interview_coach.services.session_service import (
    create_session,
    list_sessions,
    get_session,
    update_status,
    enter_interview_room,
    delete_session,
    get_stats,
)

router = APIRouter()


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_interview_session(
    payload: SessionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return create_session(db, user, payload)


@router.get("/sessions", response_model=list[SessionSummary])
async def list_interview_sessions(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return list_sessions(db, user, limit=limit, offset=offset)


# Declared before /sessions/{session_id} so "stats" is not taken for an id
@router.get("/sessions/stats", response_model=InterviewStats)
async def get_interview_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_stats(db, user)


@router.get("/sessions/{session_id}", response_model=SessionDetail)
async def get_interview_session(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_session(db, user, session_id)


@router.patch("/sessions/{session_id}/status", response_model=SessionResponse)
async def update_interview_session_status(
    session_id: str,
    payload: SessionStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return update_status(db, user, session_id, payload.status)


@router.post("/sessions/{session_id}/room", response_model=SessionDetail)
async def enter_room(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return enter_interview_room(db, user, session_id)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_interview_session(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    delete_session(db, user, session_id)
