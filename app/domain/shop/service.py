import logging
from sqlalchemy import select
from sqlalchemy.orm import Session
from typing import List

from app.models.profile import Profile
from app.models.shop_item import ShopItem
from app.models.shop_purchase import ShopPurchase
from app.domain.errors import ItemNotFound, ProfileNotFound, InsufficientBalance
from app.domain.ledger.service import debit

log = logging.getLogger("shop")

def list_items(db: Session) -> List[ShopItem]:
    return db.execute(
        select(ShopItem).where(ShopItem.is_active.is_(True)).order_by(ShopItem.cost, ShopItem.id)
    ).scalars().all()

def get_active_item(db: Session, item_id: int) -> ShopItem:
    item = db.get(ShopItem, item_id)
    if item is None or not item.is_active:
        raise ItemNotFound()
    return item

def purchase(db: Session, user_id: str, item_id: int) -> ShopPurchase:
    """
    Requested -> Approved (debit + record committed together)
              -> Rejected (ItemNotFound | ProfileNotFound | InsufficientBalance, nothing written)
    """
    try:
        item = get_active_item(db, item_id)
        if db.get(Profile, user_id) is None:
            raise ProfileNotFound()

        cost = int(item.cost)
        debit(db, user_id, cost, commit=False)
        record = ShopPurchase(user_id=user_id, item_id=item.id, points_spent=cost)
        db.add(record)
        db.commit()
    except InsufficientBalance as e:
        db.rollback()
        log.info("purchase rejected user=%s item=%s: %s", user_id, item_id, e.message)
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(record)
    log.info("purchase user=%s item=%s spent=%d", user_id, item_id, record.points_spent)
    return record

def list_purchases(db: Session, user_id: str) -> List[ShopPurchase]:
    return db.execute(
        select(ShopPurchase)
        .where(ShopPurchase.user_id == user_id)
        .order_by(ShopPurchase.purchased_at.desc(), ShopPurchase.id.desc())
    ).scalars().all()
