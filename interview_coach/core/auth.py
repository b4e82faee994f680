from fastapi import Depends, Request
from sqlalchemy.orm import Session

from interview_coach.core.config import settings
from interview_coach.core.database import get_db
from interview_coach.core.errors import Unauthorized
from interview_coach.models.user import User
from interview_coach.services.user_service import get_or_create_user


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the identity provider's user id from the request header."""
    external_id = (request.headers.get(settings.USER_ID_HEADER) or "").strip()
    if not external_id:
        raise Unauthorized("Unauthorized")
    return get_or_create_user(db, external_id)
