from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.db import Base

class UserBadge(Base):
    __tablename__ = "user_badges"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), ForeignKey("user_profiles.user_id", ondelete="CASCADE"), index=True, nullable=False)
    badge_id = Column(Integer, ForeignKey("badges.id", ondelete="CASCADE"), index=True, nullable=False)
    earned_at = Column(DateTime(timezone=True), server_default=func.now())

    badge = relationship("Badge", lazy="joined")

    __table_args__ = (UniqueConstraint('user_id', 'badge_id', name='uq_user_badge'),)
