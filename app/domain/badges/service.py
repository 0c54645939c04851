import logging
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from typing import List

from app.db.upsert import insert_or_ignore
from app.models.profile import Profile
from app.models.badge import Badge, BadgeType, COUNTER_TYPES, GRANTED_TYPES
from app.models.user_badge import UserBadge
from app.models.document import Document, DocumentStatus
from app.models.rating import Rating
from app.models.comment import Comment
from app.models.notification import NotificationType
from app.domain.notifications.service import notify

log = logging.getLogger("badges")

def list_badges(db: Session) -> List[Badge]:
    return db.execute(select(Badge).order_by(Badge.id)).scalars().all()

def list_user_badges(db: Session, user_id: str) -> List[UserBadge]:
    return db.execute(
        select(UserBadge)
        .where(UserBadge.user_id == user_id)
        .order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
    ).scalars().all()

def owned_badge_ids(db: Session, user_id: str) -> set[int]:
    return set(db.execute(select(UserBadge.badge_id).where(UserBadge.user_id == user_id)).scalars())

def _announce(db: Session, user_id: str, badges: List[Badge]) -> None:
    for badge in badges:
        notify(db, user_id, NotificationType.badge_earned, f"New badge: {badge.name}",
               badge.description or badge.name, link="/profile", commit=False)

def award_badge(db: Session, user_id: str, badge_id: int, *, commit: bool = True) -> bool:
    """Idempotent: True if the badge was newly granted, False if it was already held."""
    created = insert_or_ignore(
        db, UserBadge,
        {"user_id": user_id, "badge_id": badge_id},
        conflict_on=["user_id", "badge_id"],
    )
    if commit:
        db.commit()
    if created:
        log.info("badge %s awarded to user=%s", badge_id, user_id)
    return created

def award_by_type(db: Session, user_id: str, badge_type: BadgeType, *, commit: bool = True) -> List[Badge]:
    """Grants every catalog badge of an externally granted type (join, verified)."""
    if badge_type not in GRANTED_TYPES:
        raise ValueError(f"{badge_type.value!r} badges are awarded by evaluate(), not granted")
    badges = db.execute(select(Badge).where(Badge.type == badge_type.value)).scalars().all()
    awarded = [b for b in badges if award_badge(db, user_id, b.id, commit=False)]
    _announce(db, user_id, awarded)
    if commit:
        db.commit()
    return awarded

# --------------------------
# Counters
# --------------------------

def _count_approved_uploads(db: Session, user_id: str) -> int:
    return int(
        db.execute(
            select(func.count(Document.id))
            .where(Document.uploader_id == user_id, Document.status == DocumentStatus.approved)
        ).scalar_one() or 0
    )

def _count_ratings_given(db: Session, user_id: str) -> int:
    return int(db.execute(select(func.count(Rating.id)).where(Rating.user_id == user_id)).scalar_one() or 0)

def _count_comments_posted(db: Session, user_id: str) -> int:
    return int(db.execute(select(func.count(Comment.id)).where(Comment.user_id == user_id)).scalar_one() or 0)

def _current_points(db: Session, user_id: str) -> int:
    return int(db.execute(select(Profile.points).where(Profile.user_id == user_id)).scalar_one_or_none() or 0)

def achievement_counters(db: Session, user_id: str) -> dict[BadgeType, int]:
    return {
        BadgeType.upload: _count_approved_uploads(db, user_id),
        BadgeType.rating: _count_ratings_given(db, user_id),
        BadgeType.comment: _count_comments_posted(db, user_id),
        BadgeType.points: _current_points(db, user_id),
    }

def evaluate(db: Session, user_id: str, *, commit: bool = True) -> List[Badge]:
    """
    Recomputes the counters and awards every counter badge whose requirement is met.
    Returns the badges newly granted by this call. Badges are never revoked.
    """
    badges = db.execute(
        select(Badge).where(Badge.type.in_([t.value for t in COUNTER_TYPES]))
    ).scalars().all()
    if not badges:
        return []

    counters = achievement_counters(db, user_id)
    owned = owned_badge_ids(db, user_id)

    awarded: List[Badge] = []
    for badge in badges:
        if badge.id in owned:
            continue
        if counters[BadgeType(badge.type)] >= int(badge.requirement or 0):
            if award_badge(db, user_id, badge.id, commit=False):
                awarded.append(badge)

    _announce(db, user_id, awarded)
    if commit:
        db.commit()
    return awarded

def evaluate_quietly(db: Session, user_id: str) -> List[Badge]:
    """For rating/comment handlers: a failed evaluation is logged, never surfaced."""
    try:
        return evaluate(db, user_id)
    except Exception:
        db.rollback()
        log.exception("badge evaluation failed for user=%s", user_id)
        return []
