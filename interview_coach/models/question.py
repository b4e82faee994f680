from sqlalchemy import Column, String, DateTime, Integer, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from interview_coach.core.database import Base


class InterviewQuestion(Base):
    __tablename__ = "interview_questions"
    __table_args__ = (
        UniqueConstraint("session_id", "order_index", name="uq_question_session_order"),
    )

    id = Column(String, primary_key=True, index=True)
    session_id = Column(
        String,
        ForeignKey("interview_sessions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    question_text = Column(Text, nullable=False)
    category = Column(String, nullable=False)
    difficulty = Column(String, nullable=False)
    order_index = Column(Integer, nullable=False)

    key_points = Column(JSON, default=list)
    evaluation_criteria = Column(JSON, nullable=True)  # {clarity, depth, relevance}

    created_at = Column(DateTime, default=datetime.utcnow)

    session = relationship("InterviewSession", back_populates="questions")
    responses = relationship(
        "InterviewResponse",
        back_populates="question",
        cascade="all, delete-orphan",
    )
