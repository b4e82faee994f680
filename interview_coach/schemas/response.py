from pydantic import BaseModel, Field
from datetime import datetime


class ResponseCreate(BaseModel):
    question_id: str
    transcription: str
    audio_url: str | None = None
    duration: int | None = Field(default=None, ge=0)
    confidence: float | None = Field(default=None, ge=0, le=1)


class ResponseUpdate(BaseModel):
    transcription: str
    confidence: float | None = Field(default=None, ge=0, le=1)


class ResponseOut(BaseModel):
    id: str
    session_id: str
    question_id: str
    transcription: str
    audio_url: str | None
    duration: int | None
    confidence: float | None
    created_at: datetime

    class Config:
        from_attributes = True
