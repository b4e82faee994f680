from pydantic import BaseModel, Field
from datetime import datetime


class QuestionAnalysis(BaseModel):
    question_index: int = Field(alias="questionIndex", ge=0)
    score: float = Field(ge=0, le=10)
    feedback: str
    key_points_covered: list[str] = Field(default_factory=list, alias="keyPointsCovered")

    class Config:
        populate_by_name = True


class GeneratedFeedback(BaseModel):
    """The evaluation object returned by the model."""

    overall_score: float = Field(alias="overallScore", ge=0, le=10)
    overall_summary: str = Field(alias="overallSummary")
    technical_score: float | None = Field(default=None, alias="technicalScore", ge=0, le=10)
    behavioral_score: float | None = Field(default=None, alias="behavioralScore", ge=0, le=10)
    communication_score: float = Field(alias="communicationScore", ge=0, le=10)
    strengths: list[str]
    improvements: list[str]
    recommendations: list[str]
    question_analysis: list[QuestionAnalysis] = Field(default_factory=list, alias="questionAnalysis")
    metrics_data: dict | None = Field(default=None, alias="metricsData")

    class Config:
        populate_by_name = True


class FeedbackOut(BaseModel):
    id: str
    session_id: str
    overall_score: float
    technical_score: float | None
    behavioral_score: float | None
    communication_score: float
    overall_summary: str
    strengths: list[str]
    improvements: list[str]
    recommendations: list[str]
    question_analysis: list[dict]
    metrics_data: dict | None
    created_at: datetime

    class Config:
        from_attributes = True


class SessionBrief(BaseModel):
    job_role: str
    job_description: str
    interview_type: str
    created_at: datetime

    class Config:
        from_attributes = True


class FeedbackWithSession(FeedbackOut):
    session: SessionBrief
