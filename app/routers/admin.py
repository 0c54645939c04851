from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps import require_staff
from app.models.profile import Profile, UserRole
from app.schemas.document import DocumentOut, RejectIn
from app.schemas.profile import ProfileOut, RoleIn
from app.schemas.forum import ThreadOut, FlagIn
from app.schemas.stats import AdminStats
from app.domain.errors import DocumentNotFound, InvalidStatusTransition, ProfileNotFound, ThreadNotFound
from app.domain.documents import service as documents
from app.domain.ledger import service as ledger
from app.domain.forum import service as forum

router = APIRouter(prefix="/admin", tags=["admin"])

@router.get("/stats", response_model=AdminStats)
def stats(db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    return documents.admin_stats(db)

@router.get("/pending", response_model=list[DocumentOut])
def pending(db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    return documents.pending_documents(db)

@router.get("/all", response_model=list[DocumentOut])
def all_documents(db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    return documents.all_documents(db)

@router.post("/documents/{document_id}/approve", response_model=DocumentOut)
def approve(document_id: int, db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    # anything other than the expected business errors surfaces as a 500
    try:
        doc, _applied = documents.approve_document(db, document_id)
    except DocumentNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return doc

@router.post("/documents/{document_id}/reject", response_model=DocumentOut)
def reject(document_id: int, body: RejectIn, db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    try:
        return documents.reject_document(db, document_id, body.reason)
    except DocumentNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

@router.post("/users/{user_id}/verify", response_model=ProfileOut)
def verify_user(user_id: str, db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    try:
        return ledger.set_verified(db, user_id, True)
    except ProfileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

@router.put("/users/{user_id}/role", response_model=ProfileOut)
def set_role(user_id: str, body: RoleIn, db: Session = Depends(get_db), me: Profile = Depends(require_staff)):
    # moderators cannot hand out roles
    if me.role != UserRole.admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    try:
        return ledger.set_role(db, user_id, body.role)
    except ProfileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

@router.post("/forum/threads/{thread_id}/pin", response_model=ThreadOut)
def pin(thread_id: int, body: FlagIn, db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    try:
        return forum.set_pinned(db, thread_id, body.value)
    except ThreadNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

@router.post("/forum/threads/{thread_id}/lock", response_model=ThreadOut)
def lock(thread_id: int, body: FlagIn, db: Session = Depends(get_db), _: Profile = Depends(require_staff)):
    try:
        return forum.set_locked(db, thread_id, body.value)
    except ThreadNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
