from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from interview_coach.api.deps import get_generator
from interview_coach.core.auth import get_current_user
from interview_coach.core.config import settings
from interview_coach.core.database import get_db
from interview_coach.core.errors import NotFound
from interview_coach.models.question import InterviewQuestion
from interview_coach.models.user import User
from interview_coach.schemas.feedback import FeedbackOut, FeedbackWithSession
from interview_coach.schemas.question import QuestionResponse, FollowUpRequest, FollowUpResponse
from interview_coach.schemas.session import SessionResponse
from interview_coach.services import interview_ai_service
from interview_coach.services.session_service import get_session
from interview_coach.voice.assistant import create_interview_assistant

router = APIRouter()

# Endpoints that wait on the model are plain functions so FastAPI runs them
# in its thread pool.


@router.post("/sessions/{session_id}/questions", response_model=list[QuestionResponse], status_code=201)
def generate_interview_questions(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    generator=Depends(get_generator),
):
    return interview_ai_service.generate_questions(db, user, session_id, generator)


@router.get("/sessions/{session_id}/questions", response_model=list[QuestionResponse])
async def list_interview_questions(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_session(db, user, session_id).questions


@router.post("/sessions/{session_id}/feedback", response_model=FeedbackOut, status_code=201)
def generate_interview_feedback(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    generator=Depends(get_generator),
):
    return interview_ai_service.generate_feedback(db, user, session_id, generator)


@router.get("/sessions/{session_id}/feedback", response_model=FeedbackWithSession)
async def get_interview_feedback(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return interview_ai_service.get_feedback(db, user, session_id)


@router.post("/sessions/{session_id}/complete")
def complete_interview(
    session_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    generator=Depends(get_generator),
):
    result = interview_ai_service.complete_interview(db, user, session_id, generator)
    feedback = result["feedback"]
    return {
        "session": SessionResponse.model_validate(result["session"]),
        "feedback": FeedbackOut.model_validate(feedback) if feedback else None,
        "error": result["error"],
    }


@router.post("/sessions/{session_id}/follow-up", response_model=FollowUpResponse)
def generate_follow_up_question(
    session_id: str,
    payload: FollowUpRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    generator=Depends(get_generator),
):
    question = interview_ai_service.generate_follow_up(
        db, user, session_id, payload.previous_response, generator
    )
    return {"session_id": session_id, "question": question}


@router.get("/sessions/{session_id}/questions/{question_id}/assistant")
async def get_voice_assistant_config(
    session_id: str,
    question_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    session = get_session(db, user, session_id)
    question = (
        db.query(InterviewQuestion)
        .filter(InterviewQuestion.id == question_id, InterviewQuestion.session_id == session.id)
        .first()
    )
    if not question:
        raise NotFound("Question not found in this session")

    assistant = create_interview_assistant(
        question.question_text,
        {"job_role": session.job_role, "interview_type": session.interview_type},
    )
    return {"public_key": settings.VAPI_PUBLIC_KEY, "assistant": assistant}
