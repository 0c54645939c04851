from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from app.db import Base

class BadgeType(str, PyEnum):
    join = "join"
    upload = "upload"
    points = "points"
    rating = "rating"
    comment = "comment"
    verified = "verified"

# Evaluated from achievement counters
COUNTER_TYPES = frozenset({BadgeType.upload, BadgeType.points, BadgeType.rating, BadgeType.comment})
# Granted by an explicit event (profile creation, admin verification)
GRANTED_TYPES = frozenset({BadgeType.join, BadgeType.verified})

class Badge(Base):
    __tablename__ = "badges"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    icon = Column(String(64), nullable=False)           # lucide icon token, e.g. "Award"
    color = Column(String(16), nullable=False)          # "#f59e0b"
    type = Column(String(16), nullable=False, index=True)
    requirement = Column(Integer, nullable=False, default=0)

    __table_args__ = (CheckConstraint("requirement >= 0", name="requirement_non_negative"),)
