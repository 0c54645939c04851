from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Enum, CheckConstraint, false
from sqlalchemy.sql import func
from app.db import Base

class UserRole(str, PyEnum):
    student = "student"
    lecturer = "lecturer"
    alumni = "alumni"
    moderator = "moderator"
    admin = "admin"

STAFF_ROLES = {UserRole.admin, UserRole.moderator}

class Profile(Base):
    __tablename__ = "user_profiles"

    # `sub` claim of the identity provider
    user_id = Column(String(64), primary_key=True)
    display_name = Column(String(255), nullable=True)
    faculty = Column(String(255), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.student)
    points = Column(Integer, nullable=False, default=0, server_default="0")
    bio = Column(Text, nullable=True)
    student_id = Column(String(32), nullable=True)
    verified = Column(Boolean, nullable=False, default=False, server_default=false())
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (CheckConstraint("points >= 0", name="points_non_negative"),)
