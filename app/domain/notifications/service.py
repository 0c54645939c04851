import logging
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional

from app.models.notification import Notification, NotificationType
from app.domain.errors import NotificationNotFound

log = logging.getLogger("notifications")

LIST_LIMIT = 50

def notify(db: Session, user_id: str, ntype: NotificationType, title: str, message: str,
           link: Optional[str] = None, *, commit: bool = True) -> Notification:
    notification = Notification(user_id=user_id, type=ntype.value, title=title, message=message, link=link)
    db.add(notification)
    if commit:
        db.commit()
        db.refresh(notification)
    return notification

def notify_many(db: Session, user_ids: Iterable[str], ntype: NotificationType, title: str, message: str,
                link: Optional[str] = None, *, commit: bool = True) -> int:
    rows = [
        Notification(user_id=uid, type=ntype.value, title=title, message=message, link=link)
        for uid in dict.fromkeys(user_ids)
    ]
    db.add_all(rows)
    if commit:
        db.commit()
    return len(rows)

def list_notifications(db: Session, user_id: str) -> List[Notification]:
    return db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(LIST_LIMIT)
    ).scalars().all()

def unread_count(db: Session, user_id: str) -> int:
    return int(
        db.execute(
            select(func.count(Notification.id))
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        ).scalar_one() or 0
    )

def mark_read(db: Session, notification_id: int, user_id: str) -> None:
    # scoped to the owner: another user's id behaves like a missing one
    res = db.execute(
        update(Notification)
        .where(Notification.id == notification_id, Notification.user_id == user_id)
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        db.rollback()
        raise NotificationNotFound()
    db.commit()

def mark_all_read(db: Session, user_id: str) -> int:
    res = db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    log.debug("user=%s marked %d notifications read", user_id, res.rowcount)
    return res.rowcount
