from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from app.db import get_db
from app.deps import get_current_profile
from app.models.profile import Profile, STAFF_ROLES
from app.schemas.forum import ThreadCreate, ThreadOut, ThreadDetailOut, ReplyIn, ReplyOut
from app.domain.errors import ThreadNotFound, ThreadLocked, ReplyNotFound, NotThreadAuthor
from app.domain.forum import service as forum

router = APIRouter(prefix="/forum", tags=["forum"])

@router.get("/threads", response_model=list[ThreadOut])
def list_threads(
    faculty: Optional[str] = None,
    course_code: Optional[str] = None,
    sort: Optional[str] = Query(default=None, pattern="^(newest|popular|unanswered)$"),
    db: Session = Depends(get_db),
):
    return forum.list_threads(db, faculty=faculty, course_code=course_code, sort=sort)

@router.get("/search", response_model=list[ThreadOut])
def search(q: str = "", db: Session = Depends(get_db)):
    q = q.strip()
    if len(q) < 2:
        return []
    return forum.search_threads(db, q)

@router.get("/threads/{thread_id}", response_model=ThreadDetailOut)
def get_thread(thread_id: int, db: Session = Depends(get_db)):
    try:
        thread = forum.get_thread(db, thread_id)
    except ThreadNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    forum.increment_views(db, thread_id)
    db.refresh(thread)
    return thread

@router.post("/threads", response_model=ThreadOut, status_code=201)
def create_thread(body: ThreadCreate, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return forum.create_thread(db, me.user_id, **body.model_dump())

@router.get("/threads/{thread_id}/replies", response_model=list[ReplyOut])
def list_replies(thread_id: int, db: Session = Depends(get_db)):
    return forum.list_replies(db, thread_id)

@router.post("/threads/{thread_id}/replies", response_model=ReplyOut, status_code=201)
def add_reply(thread_id: int, body: ReplyIn, db: Session = Depends(get_db),
              me: Profile = Depends(get_current_profile)):
    try:
        return forum.add_reply(db, thread_id, me.user_id, body.content)
    except ThreadNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ThreadLocked as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

@router.post("/replies/{reply_id}/best-answer", response_model=ReplyOut)
def best_answer(reply_id: int, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    try:
        return forum.mark_best_answer(db, reply_id, me.user_id, is_staff=me.role in STAFF_ROLES)
    except (ReplyNotFound, ThreadNotFound) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except NotThreadAuthor as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
