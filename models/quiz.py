from pydantic import BaseModel, validator
from typing import List, Optional
from datetime import datetime

from .session import ensure_utc
from .vocabulary import Vocabulary

OPTIONS_PER_QUESTION = 4

class QuizQuestion(BaseModel):
    question: Vocabulary
    options: List[str]
    correct_index: int

class QuizAnswer(BaseModel):
    vocabulary_id: str
    selected_index: Optional[int] = None
    correct_index: int

    @validator('selected_index', 'correct_index')
    def option_in_range(cls, v):
        if v is not None and not 0 <= v < OPTIONS_PER_QUESTION:
            raise ValueError(f"Option index must be between 0 and {OPTIONS_PER_QUESTION - 1}")
        return v

class QuizCompletion(BaseModel):
    topic_id: str = ""
    answers: List[QuizAnswer]
    started_at: datetime
    completed_at: Optional[datetime] = None

    @validator('started_at', 'completed_at')
    def aware_timestamps(cls, v):
        return ensure_utc(v) if v is not None else v
