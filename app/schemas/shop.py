from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class ShopItemOut(BaseModel):
    id: int
    name: str
    description: str
    cost: int
    type: str
    icon: Optional[str] = None
    is_active: bool
    model_config = ConfigDict(from_attributes=True)

class PurchaseIn(BaseModel):
    item_id: int

class PurchaseOut(BaseModel):
    id: int
    user_id: str
    item_id: int
    points_spent: int
    purchased_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class PurchaseWithItemOut(PurchaseOut):
    item: ShopItemOut
