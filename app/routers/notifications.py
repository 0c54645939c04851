from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps import get_current_profile
from app.models.profile import Profile
from app.schemas.notification import NotificationOut, UnreadCountOut
from app.domain.errors import NotificationNotFound
from app.domain.notifications import service as notifications

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.get("", response_model=list[NotificationOut])
def list_notifications(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return notifications.list_notifications(db, me.user_id)

@router.get("/unread-count", response_model=UnreadCountOut)
def unread_count(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return {"count": notifications.unread_count(db, me.user_id)}

@router.post("/read-all")
def read_all(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    updated = notifications.mark_all_read(db, me.user_id)
    return {"success": True, "updated": updated}

@router.post("/{notification_id}/read")
def read_one(notification_id: int, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    try:
        notifications.mark_read(db, notification_id, me.user_id)
    except NotificationNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return {"success": True}
