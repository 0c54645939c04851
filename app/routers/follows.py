from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps import get_current_profile
from app.models.follow import FollowTarget
from app.models.profile import Profile
from app.schemas.follow import FollowIn, FollowOut, FollowStatusOut
from app.domain.follows import service as follows

router = APIRouter(prefix="/follows", tags=["follows"])

@router.get("", response_model=list[FollowOut])
def my_follows(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return follows.list_follows(db, me.user_id)

@router.get("/status", response_model=FollowStatusOut)
def follow_status(target_type: FollowTarget, target_value: str, db: Session = Depends(get_db),
                  me: Profile = Depends(get_current_profile)):
    return {"following": follows.is_following(db, me.user_id, target_type, target_value.strip())}

@router.post("", response_model=FollowOut)
def follow(body: FollowIn, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return follows.follow(db, me.user_id, body.target_type, body.target_value)

@router.delete("")
def unfollow(body: FollowIn, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    # unfollowing something not followed is not an error
    removed = follows.unfollow(db, me.user_id, body.target_type, body.target_value)
    return {"success": True, "removed": removed}
