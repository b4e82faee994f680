from pydantic import BaseModel
from datetime import datetime


class UserUpdate(BaseModel):
    industry: str | None = None
    skills: list[str] | None = None


class UserOut(BaseModel):
    id: str
    external_id: str
    industry: str | None
    skills: list[str]
    created_at: datetime

    class Config:
        from_attributes = True
