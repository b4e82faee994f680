from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from interview_coach.core.auth import get_current_user
from interview_coach.core.database import get_db
from interview_coach.models.user import User
from interview_coach.schemas.response import ResponseCreate, ResponseUpdate, ResponseOut
from interview_coach.services.response_service import (
    save_response,
    list_responses,
    update_transcription,
    delete_response,
)

router = APIRouter()


@router.post("/sessions/{session_id}/responses", response_model=ResponseOut, status_code=201)
async def save_interview_response(
    session_id: str,
    payload: ResponseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return save_response(db, user, session_id, payload)


@router.get("/sessions/{session_id}/responses", response_model=list[ResponseOut])
async def get_session_responses(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return list_responses(db, user, session_id)


@router.patch("/responses/{response_id}", response_model=ResponseOut)
async def update_response_transcription(
    response_id: str,
    payload: ResponseUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return update_transcription(db, user, response_id, payload)


@router.delete("/responses/{response_id}", status_code=204)
async def delete_interview_response(
    response_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    delete_response(db, user, response_id)
