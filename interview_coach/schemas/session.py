from pydantic import BaseModel, Field
from datetime import datetime
from interview_coach.utils.enums import SessionStatus, InterviewType, Difficulty
from interview_coach.schemas.question import QuestionResponse
from interview_coach.schemas.response import ResponseOut
from interview_coach.schemas.feedback import FeedbackOut


class SessionCreate(BaseModel):
    job_role: str = Field(min_length=1)
    job_description: str = Field(min_length=1)
    company_name: str | None = None
    interview_type: InterviewType
    difficulty: Difficulty = Difficulty.MEDIUM
    duration: int | None = Field(default=None, gt=0)
    focus_areas: list[str] = Field(default_factory=list)


class SessionStatusUpdate(BaseModel):
    status: SessionStatus


class SessionResponse(BaseModel):
    id: str
    job_role: str
    job_description: str
    company_name: str | None
    interview_type: InterviewType
    difficulty: Difficulty
    duration: int | None
    focus_areas: list[str]
    status: SessionStatus
    created_at: datetime
    started_at: datetime | None
    completed_at: datetime | None

    class Config:
        from_attributes = True


class FeedbackScores(BaseModel):
    overall_score: float
    communication_score: float

    class Config:
        from_attributes = True


class SessionSummary(SessionResponse):
    feedback: FeedbackScores | None = None
    question_count: int = 0
    response_count: int = 0


class SessionDetail(SessionResponse):
    questions: list[QuestionResponse] = []
    responses: list[ResponseOut] = []
    feedback: FeedbackOut | None = None


class InterviewStats(BaseModel):
    total_interviews: int
    average_score: float
    average_communication_score: float
    completed_interviews: int
