from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from app.models.profile import UserRole

class ProfileOut(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    faculty: Optional[str] = None
    role: UserRole
    points: int = 0
    bio: Optional[str] = None
    student_id: Optional[str] = None
    verified: bool = False
    joined_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    faculty: Optional[str] = None
    bio: Optional[str] = None
    student_id: Optional[str] = None

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not (2 <= len(v) <= 80):
            raise ValueError("Display name must be between 2 and 80 characters")
        return v

class RoleIn(BaseModel):
    role: UserRole
