from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps import get_current_profile
from app.models.profile import Profile
from app.schemas.profile import ProfileOut, ProfileUpdate
from app.schemas.document import DocumentOut
from app.domain.errors import ProfileNotFound
from app.domain.ledger import service as ledger
from app.domain.documents import service as documents

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=ProfileOut)
def read_me(me: Profile = Depends(get_current_profile)):
    return me

@router.put("", response_model=ProfileOut)
def update_me(payload: ProfileUpdate, db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return ledger.update_profile(db, me.user_id, **payload.model_dump(exclude_unset=True))

@router.get("/documents", response_model=list[DocumentOut])
def my_documents(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return documents.documents_by_uploader(db, me.user_id)

@router.get("/downloads", response_model=list[DocumentOut])
def my_downloads(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return documents.downloaded_documents(db, me.user_id)

@router.get("/{user_id}", response_model=ProfileOut)
def read_profile(user_id: str, db: Session = Depends(get_db)):
    try:
        return ledger.get_profile(db, user_id)
    except ProfileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
