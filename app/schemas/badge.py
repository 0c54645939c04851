from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class BadgeOut(BaseModel):
    id: int
    name: str
    description: str
    icon: str
    color: str
    type: str
    requirement: int
    model_config = ConfigDict(from_attributes=True)

class BadgeCatalogOut(BadgeOut):
    owned: bool = False
    rarity_pct: float = 0.0

class UserBadgeOut(BaseModel):
    id: int
    badge_id: int
    earned_at: Optional[datetime] = None
    badge: BadgeOut
    model_config = ConfigDict(from_attributes=True)
