from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from app.db import get_db
from app.deps import get_current_profile
from app.models.profile import Profile
from app.schemas.document import (
    DocumentCreate, DocumentOut, DocumentDetailOut, DownloadOut,
    CommentIn, CommentOut, RatingIn, RatingOut,
)
from app.schemas.profile import ProfileOut
from app.domain.errors import DocumentNotFound
from app.domain.documents import service as documents
from app.domain.badges.service import evaluate_quietly

router = APIRouter(prefix="/documents", tags=["documents"])

MIN_QUERY_LEN = 2

def _not_found(e: DocumentNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

@router.get("", response_model=list[DocumentOut])
def list_documents(
    faculty: Optional[str] = None,
    category: Optional[str] = None,
    sort: Optional[str] = Query(default=None, pattern="^(newest|popular|rating)$"),
    db: Session = Depends(get_db),
):
    return documents.list_documents(db, faculty=faculty, category=category, sort=sort)

@router.get("/recent", response_model=list[DocumentOut])
def recent(db: Session = Depends(get_db)):
    return documents.recent_documents(db)

@router.get("/popular", response_model=list[DocumentOut])
def popular(db: Session = Depends(get_db)):
    return documents.popular_documents(db)

@router.get("/search", response_model=list[DocumentOut])
def search(q: str = "", db: Session = Depends(get_db)):
    q = q.strip()
    if len(q) < MIN_QUERY_LEN:
        return []
    return documents.search_documents(db, q)

@router.get("/{document_id}", response_model=DocumentDetailOut)
def get_document(document_id: int, db: Session = Depends(get_db)):
    try:
        doc = documents.get_document(db, document_id)
    except DocumentNotFound as e:
        raise _not_found(e)
    documents.increment_views(db, document_id)
    db.refresh(doc)
    out = DocumentDetailOut.model_validate(doc)
    uploader = db.get(Profile, doc.uploader_id)
    if uploader is not None:
        out.uploader_profile = ProfileOut.model_validate(uploader)
    return out

@router.post("", response_model=DocumentOut, status_code=201)
def upload(payload: DocumentCreate, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return documents.create_document(db, me.user_id, **payload.model_dump())

@router.post("/{document_id}/download", response_model=DownloadOut)
def download(document_id: int, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    try:
        doc = documents.record_download(db, document_id, me.user_id)
    except DocumentNotFound as e:
        raise _not_found(e)
    return {"file_url": doc.file_url}

@router.get("/{document_id}/comments", response_model=list[CommentOut])
def list_comments(document_id: int, db: Session = Depends(get_db)):
    return documents.list_comments(db, document_id)

@router.post("/{document_id}/comments", response_model=CommentOut, status_code=201)
def add_comment(document_id: int, body: CommentIn, db: Session = Depends(get_db),
                me: Profile = Depends(get_current_profile)):
    try:
        comment = documents.add_comment(db, document_id, me.user_id, body.content)
    except DocumentNotFound as e:
        raise _not_found(e)
    evaluate_quietly(db, me.user_id)
    return comment

@router.post("/{document_id}/rate", response_model=RatingOut)
def rate(document_id: int, body: RatingIn, db: Session = Depends(get_db),
         me: Profile = Depends(get_current_profile)):
    try:
        rating = documents.rate_document(db, document_id, me.user_id, body.score)
    except DocumentNotFound as e:
        raise _not_found(e)
    evaluate_quietly(db, me.user_id)
    return rating

@router.get("/{document_id}/my-rating", response_model=Optional[RatingOut])
def my_rating(document_id: int, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return documents.get_user_rating(db, document_id, me.user_id)
