from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Index, func
from app.db import Base

class FollowTarget(str, PyEnum):
    faculty = "faculty"
    subject = "subject"
    user = "user"

class Follow(Base):
    __tablename__ = "follows"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), ForeignKey("user_profiles.user_id", ondelete="CASCADE"), index=True, nullable=False)
    target_type = Column(String(16), nullable=False)
    target_value = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'target_type', 'target_value', name='uq_follow_target'),
        Index('ix_follows_target', 'target_type', 'target_value'),
    )
