from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from app.schemas.profile import ProfileOut

class ThreadCreate(BaseModel):
    title: str
    content: str
    course_code: Optional[str] = None
    faculty: Optional[str] = None

    @field_validator('title', 'content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title and content are required")
        return v

class ThreadOut(BaseModel):
    id: int
    title: str
    content: str
    course_code: Optional[str] = None
    faculty: Optional[str] = None
    author_id: str
    view_count: int = 0
    reply_count: int = 0
    is_pinned: bool = False
    is_locked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class ThreadDetailOut(ThreadOut):
    author: Optional[ProfileOut] = None

class ReplyIn(BaseModel):
    content: str

    @field_validator('content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Content is required")
        return v

class ReplyOut(BaseModel):
    id: int
    thread_id: int
    user_id: str
    content: str
    is_best_answer: bool = False
    created_at: Optional[datetime] = None
    author: Optional[ProfileOut] = None
    model_config = ConfigDict(from_attributes=True)

class FlagIn(BaseModel):
    value: bool = True
