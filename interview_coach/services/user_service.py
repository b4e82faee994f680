from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from uuid import uuid4
import structlog

from interview_coach.core.errors import PersistenceFailure
from interview_coach.models.user import User
from interview_coach.schemas.user import UserUpdate

logger = structlog.get_logger(__name__)


def get_or_create_user(db: Session, external_id: str) -> User:
    user = db.query(User).filter_by(external_id=external_id).first()
    if user:
        return user

    user = User(
        id=str(uuid4()),
        external_id=external_id,
        skills=[],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # A concurrent first request provisioned the same identity
        db.rollback()
        existing = db.query(User).filter_by(external_id=external_id).first()
        if existing:
            return existing
        logger.error("user_provision_failed", error=str(e))
        raise PersistenceFailure(f"Failed to provision user: {e}", cause=e) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("user_provision_failed", error=str(e))
        raise PersistenceFailure(f"Failed to provision user: {e}", cause=e) from e
    db.refresh(user)
    logger.info("user_provisioned", user_id=user.id)
    return user


def update_profile(db: Session, user: User, data: UserUpdate) -> User:
    if data.industry is not None:
        user.industry = data.industry
    if data.skills is not None:
        user.skills = list(data.skills)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("profile_update_failed", user_id=user.id, error=str(e))
        raise PersistenceFailure(f"Failed to update profile: {e}", cause=e) from e
    db.refresh(user)
    return user
