from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Enum
from sqlalchemy.sql import func
from app.db import Base

class DocumentStatus(str, PyEnum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    faculty = Column(String(255), nullable=False, index=True)
    subject = Column(String(255), nullable=True)
    category = Column(String(120), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)

    # file storage lives outside this service; only the reference is kept
    file_url = Column(String(512), nullable=True)
    file_name = Column(String(255), nullable=True)
    file_size = Column(Integer, nullable=True)
    file_type = Column(String(120), nullable=True)

    uploader_id = Column(String(64), ForeignKey("user_profiles.user_id"), index=True, nullable=False)
    status = Column(Enum(DocumentStatus, name="document_status"), nullable=False, default=DocumentStatus.pending, index=True)
    download_count = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    average_rating = Column(Integer, nullable=False, default=0)  # round(avg * 10)
    rating_count = Column(Integer, nullable=False, default=0)
    year = Column(String(16), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
