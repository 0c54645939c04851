from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from app.db import Base

class Download(Base):
    __tablename__ = "downloads"
    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String(64), ForeignKey("user_profiles.user_id", ondelete="CASCADE"), index=True, nullable=False)
    downloaded_at = Column(DateTime(timezone=True), server_default=func.now())
