from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime
from interview_coach.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    # Opaque id handed over by the identity provider
    external_id = Column(String, unique=True, index=True, nullable=False)

    industry = Column(String, nullable=True)
    skills = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
