from sqlalchemy import Column, String, DateTime, Integer, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from interview_coach.core.database import Base


class InterviewSession(Base):
    __tablename__ = "interview_sessions"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)

    job_role = Column(String, nullable=False)
    job_description = Column(Text, nullable=False)
    company_name = Column(String, nullable=True)
    interview_type = Column(String, nullable=False)
    difficulty = Column(String, default="Medium")
    duration = Column(Integer, nullable=True)  # minutes
    focus_areas = Column(JSON, default=list)

    status = Column(String, default="pending")  # pending | in_progress | completed | cancelled

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    questions = relationship(
        "InterviewQuestion",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="InterviewQuestion.order_index",
    )
    responses = relationship(
        "InterviewResponse",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="InterviewResponse.created_at",
    )
    feedback = relationship(
        "InterviewFeedback",
        back_populates="session",
        cascade="all, delete-orphan",
        uselist=False,
    )
