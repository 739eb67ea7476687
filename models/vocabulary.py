from pydantic import BaseModel, validator
from typing import Optional
from datetime import datetime
from enum import Enum

class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

class VocabularyBase(BaseModel):
    word: str
    meaning: str
    example: Optional[str] = None
    topic_id: str
    difficulty: Difficulty = Difficulty.EASY
    pronunciation: Optional[str] = None
    image_url: Optional[str] = None
    audio_url: Optional[str] = None

    @validator('word', 'meaning')
    def not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Word and meaning are required")
        return v.strip()

class VocabularyCreate(VocabularyBase):
    pass

class VocabularyUpdate(BaseModel):
    word: Optional[str] = None
    meaning: Optional[str] = None
    example: Optional[str] = None
    topic_id: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    pronunciation: Optional[str] = None
    image_url: Optional[str] = None
    audio_url: Optional[str] = None

class Vocabulary(VocabularyBase):
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
