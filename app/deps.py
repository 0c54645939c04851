from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose import JWTError
from app.db import get_db
from app.models.profile import Profile, STAFF_ROLES
from app.security import decode_access_token
from app.domain.ledger.service import get_or_create_profile

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_claims(token: str = Depends(oauth2_scheme)) -> dict:
    cred_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise cred_exc
    if not payload.get("sub"):
        raise cred_exc
    return payload

def get_current_profile(claims: dict = Depends(get_current_claims), db: Session = Depends(get_db)) -> Profile:
    # profiles are created lazily on the first authenticated request
    return get_or_create_profile(
        db, str(claims["sub"]), name=claims.get("name"), email=claims.get("email")
    )

def require_staff(me: Profile = Depends(get_current_profile)) -> Profile:
    if me.role not in STAFF_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return me

optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def get_optional_profile(
    token: Optional[str] = Depends(optional_oauth2_scheme), db: Session = Depends(get_db)
) -> Optional[Profile]:
    """Anonymous callers get None; a token that is present must still be valid."""
    if not token:
        return None
    claims = get_current_claims(token)
    return get_current_profile(claims, db)
