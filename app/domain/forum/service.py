import logging
from sqlalchemy import select, update, func, or_
from sqlalchemy.orm import Session
from typing import List, Optional

from app.models.forum_thread import ForumThread
from app.models.forum_reply import ForumReply
from app.domain.errors import ThreadNotFound, ThreadLocked, ReplyNotFound, NotThreadAuthor

log = logging.getLogger("forum")

LIST_LIMIT = 50

def get_thread(db: Session, thread_id: int) -> ForumThread:
    thread = db.get(ForumThread, thread_id)
    if thread is None:
        raise ThreadNotFound()
    return thread

def list_threads(db: Session, *, faculty: Optional[str] = None, course_code: Optional[str] = None,
                 sort: Optional[str] = None) -> List[ForumThread]:
    q = select(ForumThread)
    if faculty:
        q = q.where(ForumThread.faculty == faculty)
    if course_code:
        q = q.where(ForumThread.course_code == course_code)

    if sort == "popular":
        order = ForumThread.view_count.desc()
    elif sort == "unanswered":
        q = q.where(ForumThread.reply_count == 0)
        order = ForumThread.created_at.desc()
    else:
        order = ForumThread.created_at.desc()

    # pinned threads always first
    q = q.order_by(ForumThread.is_pinned.desc(), order, ForumThread.id.desc()).limit(LIST_LIMIT)
    return db.execute(q).scalars().all()

def search_threads(db: Session, term: str) -> List[ForumThread]:
    pattern = f"%{term}%"
    return db.execute(
        select(ForumThread)
        .where(or_(ForumThread.title.ilike(pattern), ForumThread.content.ilike(pattern)))
        .order_by(ForumThread.created_at.desc(), ForumThread.id.desc())
        .limit(LIST_LIMIT)
    ).scalars().all()

def create_thread(db: Session, author_id: str, *, title: str, content: str,
                  course_code: Optional[str] = None, faculty: Optional[str] = None) -> ForumThread:
    thread = ForumThread(author_id=author_id, title=title, content=content,
                         course_code=course_code, faculty=faculty)
    db.add(thread)
    db.commit()
    db.refresh(thread)
    return thread

def increment_views(db: Session, thread_id: int) -> None:
    db.execute(
        update(ForumThread).where(ForumThread.id == thread_id)
        .values(view_count=ForumThread.view_count + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()

def list_replies(db: Session, thread_id: int) -> List[ForumReply]:
    return db.execute(
        select(ForumReply).where(ForumReply.thread_id == thread_id)
        .order_by(ForumReply.created_at.asc(), ForumReply.id.asc())
    ).scalars().all()

def add_reply(db: Session, thread_id: int, user_id: str, content: str) -> ForumReply:
    thread = get_thread(db, thread_id)
    if thread.is_locked:
        raise ThreadLocked()
    try:
        reply = ForumReply(thread_id=thread.id, user_id=user_id, content=content)
        db.add(reply)
        db.execute(
            update(ForumThread).where(ForumThread.id == thread.id)
            .values(reply_count=ForumThread.reply_count + 1, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(reply)
    return reply

def mark_best_answer(db: Session, reply_id: int, user_id: str, *, is_staff: bool = False) -> ForumReply:
    """Only the thread author (or staff) may pick the best answer."""
    reply = db.get(ForumReply, reply_id)
    if reply is None:
        raise ReplyNotFound()
    thread = get_thread(db, reply.thread_id)
    if thread.author_id != user_id and not is_staff:
        raise NotThreadAuthor()
    reply.is_best_answer = True
    db.add(reply)
    db.commit()
    db.refresh(reply)
    return reply

def set_pinned(db: Session, thread_id: int, is_pinned: bool) -> ForumThread:
    thread = get_thread(db, thread_id)
    thread.is_pinned = is_pinned
    db.commit()
    db.refresh(thread)
    return thread

def set_locked(db: Session, thread_id: int, is_locked: bool) -> ForumThread:
    thread = get_thread(db, thread_id)
    thread.is_locked = is_locked
    db.commit()
    db.refresh(thread)
    log.info("thread %s locked=%s", thread_id, is_locked)
    return thread
