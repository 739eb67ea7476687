from pydantic import BaseModel, validator
from typing import Optional
from datetime import datetime

class TopicBase(BaseModel):
    name: str
    description: str = ""
    color: str = "#2563eb"
    icon_url: Optional[str] = None

    @validator('name')
    def name_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

class TopicCreate(TopicBase):
    pass

class TopicUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon_url: Optional[str] = None

    @validator('name')
    def name_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name is required")
        return v.strip() if v is not None else v

class Topic(TopicBase):
    id: str
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True
