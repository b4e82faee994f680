from sqlalchemy import Column, String, DateTime, Integer, Float, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from interview_coach.core.database import Base


class InterviewResponse(Base):
    __tablename__ = "interview_responses"

    id = Column(String, primary_key=True, index=True)
    session_id = Column(
        String,
        ForeignKey("interview_sessions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    question_id = Column(
        String,
        ForeignKey("interview_questions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    transcription = Column(Text, nullable=False)
    audio_url = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    confidence = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    session = relationship("InterviewSession", back_populates="responses")
    question = relationship("InterviewQuestion", back_populates="responses")
