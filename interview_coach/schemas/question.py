from pydantic import BaseModel, Field
from datetime import datetime


class EvaluationCriteria(BaseModel):
    clarity: str
    depth: str
    relevance: str


class GeneratedQuestion(BaseModel):
    """One element of the model's ``questions`` array."""

    question_text: str = Field(alias="questionText", min_length=1)
    category: str = Field(min_length=1)
    difficulty: str | None = None
    key_points: list[str] = Field(default_factory=list, alias="keyPoints")
    evaluation_criteria: EvaluationCriteria | None = Field(default=None, alias="evaluationCriteria")

    class Config:
        populate_by_name = True


class QuestionResponse(BaseModel):
    id: str
    session_id: str
    question_text: str
    category: str
    difficulty: str
    order_index: int
    key_points: list[str]
    evaluation_criteria: EvaluationCriteria | None
    created_at: datetime

    class Config:
        from_attributes = True


class FollowUpRequest(BaseModel):
    previous_response: str = Field(min_length=1)


class FollowUpResponse(BaseModel):
    session_id: str
    question: str
