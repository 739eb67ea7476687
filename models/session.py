from pydantic import BaseModel, validator
from datetime import datetime, timezone
from enum import Enum

class SessionType(str, Enum):
    FLASHCARD = "flashcard"
    QUIZ = "quiz"
    REVIEW = "review"

def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so window comparisons never mix kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

class LearningSessionCreate(BaseModel):
    topic_id: str = ""
    type: SessionType
    score: float = 0.0
    total_questions: int = 0
    time_spent: int = 0  # seconds
    started_at: datetime
    completed_at: datetime

    @validator('time_spent', 'total_questions')
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("Must not be negative")
        return v

    @validator('started_at', 'completed_at')
    def aware_timestamps(cls, v):
        return ensure_utc(v)

class LearningSession(LearningSessionCreate):
    id: str
    user_id: str

    class Config:
        from_attributes = True
