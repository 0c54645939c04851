from fastapi import APIRouter, Depends
from typing import Optional
from sqlalchemy import func, select, exists, cast, literal, Boolean
from sqlalchemy.orm import Session
from app.db import get_db
from app.models.profile import Profile
from app.models.badge import Badge
from app.models.user_badge import UserBadge
from app.schemas.badge import BadgeCatalogOut, UserBadgeOut
from app.deps import get_current_profile, get_optional_profile
from app.domain.badges.service import list_user_badges

router = APIRouter(prefix="/badges", tags=["badges"])

@router.get("", response_model=list[BadgeCatalogOut])
def list_badges(db: Session = Depends(get_db), me: Optional[Profile] = Depends(get_optional_profile)):
    """Full catalog, with whether the caller owns each badge and how rare it is. Public."""
    total_users = db.execute(select(func.count(Profile.user_id))).scalar_one() or 1

    # owners per badge
    ub_counts = (
        select(
            UserBadge.badge_id,
            func.count(func.distinct(UserBadge.user_id)).label("owners")
        )
        .group_by(UserBadge.badge_id)
        .subquery()
    )

    if me is None:
        owned_expr = literal(False).label("owned")
    else:
        owned_expr = cast(
            exists(
                select(UserBadge.id)
                .where(
                    UserBadge.user_id == me.user_id,
                    UserBadge.badge_id == Badge.id
                )
            ).correlate(Badge),
            Boolean
        ).label("owned")

    q = (
        select(
            Badge.id,
            Badge.name,
            Badge.description,
            Badge.icon,
            Badge.color,
            Badge.type,
            Badge.requirement,
            (
                (func.coalesce(ub_counts.c.owners, 0) * 100.0) / total_users
            ).label("rarity_pct"),
            owned_expr,
        )
        .join(ub_counts, ub_counts.c.badge_id == Badge.id, isouter=True)
        .order_by(Badge.id)
    )

    out = []
    for r in db.execute(q).mappings().all():
        r = dict(r)
        r["rarity_pct"] = round(float(r["rarity_pct"] or 0.0), 2)
        r["owned"] = bool(r["owned"])
        out.append(r)
    return out

@router.get("/my", response_model=list[UserBadgeOut])
def my_badges(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return list_user_badges(db, me.user_id)
