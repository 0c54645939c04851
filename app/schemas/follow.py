from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Optional
from app.models.follow import FollowTarget

class FollowIn(BaseModel):
    target_type: FollowTarget
    target_value: str

    @field_validator('target_value')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Target is required")
        return v

class FollowOut(BaseModel):
    id: int
    target_type: FollowTarget
    target_value: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class FollowStatusOut(BaseModel):
    following: bool
