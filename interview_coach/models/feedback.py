from sqlalchemy import Column, String, DateTime, Float, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from interview_coach.core.database import Base


class InterviewFeedback(Base):
    __tablename__ = "interview_feedback"

    id = Column(String, primary_key=True, index=True)
    session_id = Column(
        String,
        ForeignKey("interview_sessions.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )

    # Scores are on a 0-10 scale
    overall_score = Column(Float, nullable=False)
    technical_score = Column(Float, nullable=True)
    behavioral_score = Column(Float, nullable=True)
    communication_score = Column(Float, nullable=False)

    overall_summary = Column(Text, nullable=False)
    strengths = Column(JSON, default=list)
    improvements = Column(JSON, default=list)
    recommendations = Column(JSON, default=list)
    question_analysis = Column(JSON, default=list)
    metrics_data = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    session = relationship("InterviewSession", back_populates="feedback")
