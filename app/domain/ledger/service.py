import logging
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.db.upsert import insert_or_ignore
from app.models.profile import Profile, UserRole
from app.models.badge import BadgeType
from app.domain.errors import ProfileNotFound, InsufficientBalance, InvalidAmount
from app.domain.badges.service import award_by_type

log = logging.getLogger("ledger")

EDITABLE_FIELDS = {"display_name", "faculty", "bio", "student_id"}

def display_name_from_claims(name: str | None, email: str | None) -> str:
    if name and name.strip():
        return name.strip()
    if email and "@" in email:
        return email.split("@", 1)[0]
    return "User"

def get_profile(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise ProfileNotFound()
    return profile

def get_or_create_profile(db: Session, user_id: str, *, name: str | None = None,
                          email: str | None = None) -> Profile:
    """
    Insert-or-fetch. Two requests racing on the first access both run the INSERT;
    the primary key lets exactly one of them win and the other just reads the row.
    The winner also receives the 'join' badges.
    """
    existing = db.get(Profile, user_id)
    if existing is not None:
        return existing

    try:
        created = insert_or_ignore(
            db, Profile,
            {
                "user_id": user_id,
                "display_name": display_name_from_claims(name, email),
                "role": UserRole.student,
                "points": 0,
                "verified": False,
            },
            conflict_on=["user_id"],
        )
        if created:
            award_by_type(db, user_id, BadgeType.join, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if created:
        log.info("profile created user=%s", user_id)
    return get_profile(db, user_id)

def credit(db: Session, user_id: str, amount: int, *, commit: bool = True) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmount()
    res = db.execute(
        update(Profile)
        .where(Profile.user_id == user_id)
        .values(points=Profile.points + amount)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        raise ProfileNotFound()
    if commit:
        db.commit()
    log.info("credit user=%s amount=%d", user_id, amount)

def debit(db: Session, user_id: str, amount: int, *, commit: bool = True) -> None:
    """
    Conditional decrement: the balance check and the write are one statement,
    so concurrent debits can never take the balance below zero.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmount()
    res = db.execute(
        update(Profile)
        .where(Profile.user_id == user_id, Profile.points >= amount)
        .values(points=Profile.points - amount)
        .execution_options(synchronize_session=False)
    )
    if res.rowcount == 0:
        balance = db.execute(select(Profile.points).where(Profile.user_id == user_id)).scalar_one_or_none()
        if balance is None:
            raise ProfileNotFound()
        raise InsufficientBalance(balance=int(balance), required=amount)
    if commit:
        db.commit()
    log.info("debit user=%s amount=%d", user_id, amount)

def balance_of(db: Session, user_id: str) -> int:
    points = db.execute(select(Profile.points).where(Profile.user_id == user_id)).scalar_one_or_none()
    if points is None:
        raise ProfileNotFound()
    return int(points)

def set_verified(db: Session, user_id: str, verified: bool = True) -> Profile:
    """Admin effect. Turning verification on grants the 'verified' badges."""
    try:
        res = db.execute(
            update(Profile)
            .where(Profile.user_id == user_id)
            .values(verified=verified)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount == 0:
            raise ProfileNotFound()
        if verified:
            award_by_type(db, user_id, BadgeType.verified, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    log.info("verified=%s user=%s", verified, user_id)
    profile = get_profile(db, user_id)
    db.refresh(profile)
    return profile

def update_profile(db: Session, user_id: str, **fields) -> Profile:
    profile = get_profile(db, user_id)
    for key, value in fields.items():
        if key in EDITABLE_FIELDS and value is not None:
            setattr(profile, key, value)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile

def set_role(db: Session, user_id: str, role: UserRole) -> Profile:
    profile = get_profile(db, user_id)
    profile.role = role
    db.add(profile)
    db.commit()
    db.refresh(profile)
    log.info("role=%s user=%s", role.value, user_id)
    return profile
