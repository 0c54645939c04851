import logging
from sqlalchemy import select, delete, or_, and_
from sqlalchemy.orm import Session
from typing import List, Optional

from app.db.upsert import insert_or_ignore
from app.models.follow import Follow, FollowTarget

log = logging.getLogger("follows")

def _target(target_type: FollowTarget, target_value: str):
    return and_(Follow.target_type == target_type.value, Follow.target_value == target_value)

def get_follow(db: Session, user_id: str, target_type: FollowTarget, target_value: str) -> Optional[Follow]:
    return db.execute(
        select(Follow).where(Follow.user_id == user_id, _target(target_type, target_value))
    ).scalar_one_or_none()

def follow(db: Session, user_id: str, target_type: FollowTarget, target_value: str) -> Follow:
    """Following the same target twice keeps the original row."""
    try:
        created = insert_or_ignore(
            db, Follow,
            {"user_id": user_id, "target_type": target_type.value, "target_value": target_value},
            conflict_on=["user_id", "target_type", "target_value"],
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    if created:
        log.info("user=%s follows %s=%s", user_id, target_type.value, target_value)
    return get_follow(db, user_id, target_type, target_value)

def unfollow(db: Session, user_id: str, target_type: FollowTarget, target_value: str) -> bool:
    res = db.execute(
        delete(Follow)
        .where(Follow.user_id == user_id, _target(target_type, target_value))
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return res.rowcount > 0

def is_following(db: Session, user_id: str, target_type: FollowTarget, target_value: str) -> bool:
    return get_follow(db, user_id, target_type, target_value) is not None

def list_follows(db: Session, user_id: str) -> List[Follow]:
    return db.execute(
        select(Follow).where(Follow.user_id == user_id).order_by(Follow.created_at.desc(), Follow.id.desc())
    ).scalars().all()

def followers_of_document(db: Session, *, uploader_id: str, faculty: str,
                          subject: Optional[str] = None) -> List[str]:
    """Users following the uploader, the faculty or the subject, without the uploader."""
    targets = [_target(FollowTarget.user, uploader_id), _target(FollowTarget.faculty, faculty)]
    if subject:
        targets.append(_target(FollowTarget.subject, subject))
    return db.execute(
        select(Follow.user_id).distinct()
        .where(or_(*targets), Follow.user_id != uploader_id)
        .order_by(Follow.user_id)
    ).scalars().all()
