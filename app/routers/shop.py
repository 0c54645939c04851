from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps import get_current_profile
from app.models.profile import Profile
from app.schemas.shop import ShopItemOut, PurchaseIn, PurchaseOut, PurchaseWithItemOut
from app.domain.errors import ItemNotFound, InsufficientBalance, ProfileNotFound
from app.domain.shop import service as shop

router = APIRouter(prefix="/shop", tags=["shop"])

@router.get("", response_model=list[ShopItemOut])
def list_items(db: Session = Depends(get_db)):
    return shop.list_items(db)

@router.post("/purchase", response_model=PurchaseOut)
def purchase(
    body: PurchaseIn,
    db: Session = Depends(get_db),
    me: Profile = Depends(get_current_profile),
):
    try:
        return shop.purchase(db, me.user_id, body.item_id)
    except (ItemNotFound, InsufficientBalance, ProfileNotFound) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

@router.get("/purchases", response_model=list[PurchaseWithItemOut])
def my_purchases(db: Session = Depends(get_db), me: Profile = Depends(get_current_profile)):
    return shop.list_purchases(db, me.user_id)
