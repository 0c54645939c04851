import logging
from sqlalchemy import select, update, func, or_
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.settings import APPROVAL_REWARD_POINTS
from app.db.upsert import insert_or_ignore
from app.models.document import Document, DocumentStatus
from app.models.rating import Rating
from app.models.comment import Comment
from app.models.download import Download
from app.models.profile import Profile
from app.models.forum_thread import ForumThread
from app.domain.errors import DocumentNotFound, InvalidStatusTransition
from app.domain.ledger.service import credit
from app.domain.badges.service import evaluate
from app.domain.notifications.service import notify, notify_many
from app.domain.follows.service import followers_of_document
from app.models.notification import NotificationType

log = logging.getLogger("documents")

LIST_LIMIT = 50
FEED_LIMIT = 10
ADMIN_LIMIT = 100

SORTS = {
    "popular": Document.download_count.desc(),
    "rating": Document.average_rating.desc(),
    "newest": Document.created_at.desc(),
}

def get_document(db: Session, document_id: int) -> Document:
    doc = db.get(Document, document_id)
    if doc is None:
        raise DocumentNotFound()
    return doc

def create_document(db: Session, uploader_id: str, **data) -> Document:
    doc = Document(uploader_id=uploader_id, status=DocumentStatus.pending, **data)
    db.add(doc)
    db.commit()
    db.refresh(doc)
    log.info("document %s uploaded by user=%s", doc.id, uploader_id)
    return doc

# --------------------------
# Listings
# --------------------------

def list_documents(db: Session, *, faculty: Optional[str] = None, category: Optional[str] = None,
                   sort: Optional[str] = None) -> List[Document]:
    q = select(Document).where(Document.status == DocumentStatus.approved)
    if faculty:
        q = q.where(Document.faculty == faculty)
    if category:
        q = q.where(Document.category == category)
    order = SORTS.get(sort or "newest", SORTS["newest"])
    return db.execute(q.order_by(order, Document.id.desc()).limit(LIST_LIMIT)).scalars().all()

def search_documents(db: Session, term: str) -> List[Document]:
    pattern = f"%{term}%"
    q = (
        select(Document)
        .where(
            Document.status == DocumentStatus.approved,
            or_(
                Document.title.ilike(pattern),
                Document.description.ilike(pattern),
                Document.subject.ilike(pattern),
                Document.faculty.ilike(pattern),
            ),
        )
        .order_by(Document.created_at.desc(), Document.id.desc())
        .limit(LIST_LIMIT)
    )
    return db.execute(q).scalars().all()

def recent_documents(db: Session) -> List[Document]:
    return db.execute(
        select(Document).where(Document.status == DocumentStatus.approved)
        .order_by(Document.created_at.desc(), Document.id.desc()).limit(FEED_LIMIT)
    ).scalars().all()

def popular_documents(db: Session) -> List[Document]:
    return db.execute(
        select(Document).where(Document.status == DocumentStatus.approved)
        .order_by(Document.download_count.desc(), Document.id.desc()).limit(FEED_LIMIT)
    ).scalars().all()

def documents_by_uploader(db: Session, user_id: str) -> List[Document]:
    return db.execute(
        select(Document).where(Document.uploader_id == user_id)
        .order_by(Document.created_at.desc(), Document.id.desc())
    ).scalars().all()

def downloaded_documents(db: Session, user_id: str) -> List[Document]:
    last = (
        select(Download.document_id, func.max(Download.downloaded_at).label("last_at"))
        .where(Download.user_id == user_id)
        .group_by(Download.document_id)
        .subquery()
    )
    return db.execute(
        select(Document).join(last, last.c.document_id == Document.id).order_by(last.c.last_at.desc())
    ).scalars().all()

def pending_documents(db: Session) -> List[Document]:
    return db.execute(
        select(Document).where(Document.status == DocumentStatus.pending)
        .order_by(Document.created_at.asc(), Document.id.asc())
    ).scalars().all()

def all_documents(db: Session) -> List[Document]:
    return db.execute(
        select(Document).order_by(Document.created_at.desc(), Document.id.desc()).limit(ADMIN_LIMIT)
    ).scalars().all()

# --------------------------
# Moderation
# --------------------------

def _announce_approval(db: Session, doc: Document) -> None:
    link = f"/documents/{doc.id}"
    notify(db, doc.uploader_id, NotificationType.document_approved, "Document approved",
           f"\"{doc.title}\" was approved, +{APPROVAL_REWARD_POINTS} points", link=link, commit=False)
    followers = followers_of_document(db, uploader_id=doc.uploader_id, faculty=doc.faculty, subject=doc.subject)
    notify_many(db, followers, NotificationType.new_document, "New document",
                f"\"{doc.title}\" ({doc.faculty})", link=link, commit=False)

def approve_document(db: Session, document_id: int) -> tuple[Document, bool]:
    """
    pending -> approved, then credit the uploader and re-evaluate their badges,
    all in one transaction. Returns (document, applied); applied is False when the
    document was already approved, in which case nothing is credited again.
    """
    try:
        res = db.execute(
            update(Document)
            .where(Document.id == document_id, Document.status == DocumentStatus.pending)
            .values(status=DocumentStatus.approved, rejection_reason=None, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if res.rowcount == 0:
            status = db.execute(select(Document.status).where(Document.id == document_id)).scalar_one_or_none()
            if status is None:
                raise DocumentNotFound()
            if status == DocumentStatus.approved:
                db.rollback()
                return get_document(db, document_id), False
            raise InvalidStatusTransition(f"Cannot approve a document that is {status.value}")

        doc = get_document(db, document_id)
        uploader_id = doc.uploader_id
        credit(db, uploader_id, APPROVAL_REWARD_POINTS, commit=False)
        evaluate(db, uploader_id, commit=False)
        _announce_approval(db, doc)
        db.commit()
    except Exception:
        db.rollback()
        raise

    log.info("document %s approved, uploader=%s +%d", document_id, uploader_id, APPROVAL_REWARD_POINTS)
    doc = get_document(db, document_id)
    db.refresh(doc)
    return doc, True

def reject_document(db: Session, document_id: int, reason: str = "") -> Document:
    try:
        res = db.execute(
            update(Document)
            .where(Document.id == document_id, Document.status == DocumentStatus.pending)
            .values(status=DocumentStatus.rejected, rejection_reason=reason, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if res.rowcount == 0:
            status = db.execute(select(Document.status).where(Document.id == document_id)).scalar_one_or_none()
            if status is None:
                raise DocumentNotFound()
            if status != DocumentStatus.rejected:
                raise InvalidStatusTransition(f"Cannot reject a document that is {status.value}")
        else:
            doc = get_document(db, document_id)
            message = f"\"{doc.title}\" was rejected"
            if reason:
                message += f": {reason}"
            notify(db, doc.uploader_id, NotificationType.document_rejected, "Document rejected",
                   message, link=f"/documents/{doc.id}", commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    log.info("document %s rejected", document_id)
    doc = get_document(db, document_id)
    db.refresh(doc)
    return doc

# --------------------------
# Counters
# --------------------------

def increment_views(db: Session, document_id: int) -> None:
    db.execute(
        update(Document).where(Document.id == document_id)
        .values(view_count=Document.view_count + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()

def record_download(db: Session, document_id: int, user_id: str) -> Document:
    doc = get_document(db, document_id)
    try:
        db.add(Download(document_id=doc.id, user_id=user_id))
        db.execute(
            update(Document).where(Document.id == doc.id)
            .values(download_count=Document.download_count + 1)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(doc)
    return doc

# --------------------------
# Comments & ratings
# --------------------------

def list_comments(db: Session, document_id: int) -> List[Comment]:
    return db.execute(
        select(Comment).where(Comment.document_id == document_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    ).scalars().all()

def add_comment(db: Session, document_id: int, user_id: str, content: str) -> Comment:
    get_document(db, document_id)
    comment = Comment(document_id=document_id, user_id=user_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment

def get_user_rating(db: Session, document_id: int, user_id: str) -> Optional[Rating]:
    return db.execute(
        select(Rating).where(Rating.document_id == document_id, Rating.user_id == user_id)
    ).scalar_one_or_none()

def recalculate_rating(db: Session, document_id: int) -> None:
    avg, cnt = db.execute(
        select(func.avg(Rating.score), func.count(Rating.id)).where(Rating.document_id == document_id)
    ).one()
    db.execute(
        update(Document).where(Document.id == document_id)
        .values(average_rating=int(round(float(avg or 0) * 10)), rating_count=int(cnt or 0))
        .execution_options(synchronize_session=False)
    )

def rate_document(db: Session, document_id: int, user_id: str, score: int) -> Rating:
    """One rating per (document, user); rating again replaces the score."""
    get_document(db, document_id)
    try:
        created = insert_or_ignore(
            db, Rating,
            {"document_id": document_id, "user_id": user_id, "score": score},
            conflict_on=["document_id", "user_id"],
        )
        if not created:
            db.execute(
                update(Rating)
                .where(Rating.document_id == document_id, Rating.user_id == user_id)
                .values(score=score)
                .execution_options(synchronize_session=False)
            )
        recalculate_rating(db, document_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    rating = get_user_rating(db, document_id, user_id)
    db.refresh(rating)
    return rating

# --------------------------
# Stats
# --------------------------

def site_stats(db: Session) -> dict:
    total_documents = db.execute(
        select(func.count(Document.id)).where(Document.status == DocumentStatus.approved)
    ).scalar_one()
    total_downloads = db.execute(select(func.coalesce(func.sum(Document.download_count), 0))).scalar_one()
    total_users = db.execute(select(func.count(Profile.user_id))).scalar_one()
    return {
        "total_documents": int(total_documents or 0),
        "total_downloads": int(total_downloads or 0),
        "total_users": int(total_users or 0),
    }

def admin_stats(db: Session) -> dict:
    by_status = dict(
        db.execute(select(Document.status, func.count(Document.id)).group_by(Document.status)).all()
    )
    return {
        "pending": int(by_status.get(DocumentStatus.pending, 0)),
        "approved": int(by_status.get(DocumentStatus.approved, 0)),
        "rejected": int(by_status.get(DocumentStatus.rejected, 0)),
        "total_users": int(db.execute(select(func.count(Profile.user_id))).scalar_one() or 0),
        "forum_threads": int(db.execute(select(func.count(ForumThread.id))).scalar_one() or 0),
    }
