from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from app.models.document import DocumentStatus
from app.schemas.profile import ProfileOut

class DocumentCreate(BaseModel):
    title: str
    description: Optional[str] = None
    faculty: str
    subject: Optional[str] = None
    category: str
    tags: List[str] = []
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    file_type: Optional[str] = None
    year: Optional[str] = None

    @field_validator('title', 'faculty', 'category')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Required field")
        return v

class DocumentOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    faculty: str
    subject: Optional[str] = None
    category: str
    tags: List[str] = []
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    uploader_id: str
    status: DocumentStatus
    download_count: int = 0
    view_count: int = 0
    average_rating: int = 0
    rating_count: int = 0
    year: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class DocumentDetailOut(DocumentOut):
    uploader_profile: Optional[ProfileOut] = None

class DownloadOut(BaseModel):
    file_url: Optional[str] = None

class RejectIn(BaseModel):
    reason: str = ""

class CommentIn(BaseModel):
    content: str

    @field_validator('content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Content is required")
        return v

class CommentOut(BaseModel):
    id: int
    document_id: int
    user_id: str
    content: str
    created_at: Optional[datetime] = None
    author: Optional[ProfileOut] = None
    model_config = ConfigDict(from_attributes=True)

class RatingIn(BaseModel):
    score: int = Field(ge=1, le=5)

class RatingOut(BaseModel):
    id: int
    document_id: int
    user_id: str
    score: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
