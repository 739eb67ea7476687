from pydantic import BaseModel
from datetime import datetime
from enum import Enum

class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def from_bool(cls, is_correct: bool) -> "Outcome":
        return cls.CORRECT if is_correct else cls.INCORRECT

class ProgressRecord(BaseModel):
    user_id: str
    vocabulary_id: str
    correct_count: int = 0
    incorrect_count: int = 0
    mastery_level: int = 0
    learned: bool = False
    streak: int = 0
    last_reviewed: datetime
    next_review: datetime

    class Config:
        from_attributes = True

class AnswerCreate(BaseModel):
    correct: bool
