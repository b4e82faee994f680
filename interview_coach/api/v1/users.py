from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from interview_coach.core.auth import get_current_user
from interview_coach.core.database import get_db
from interview_coach.models.user import User
from interview_coach.schemas.user import UserOut, UserUpdate
from interview_coach.services.user_service import update_profile

router = APIRouter()


@router.get("/users/me", response_model=UserOut)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.patch("/users/me", response_model=UserOut)
async def update_me(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return update_profile(db, user, payload)
