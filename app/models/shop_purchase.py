from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.db import Base

class ShopPurchase(Base):
    __tablename__ = "shop_purchases"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), ForeignKey("user_profiles.user_id", ondelete="CASCADE"), index=True, nullable=False)
    item_id = Column(Integer, ForeignKey("shop_items.id"), index=True, nullable=False)
    # price paid at purchase time; later catalog changes do not touch it
    points_spent = Column(Integer, nullable=False)
    purchased_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    item = relationship("ShopItem", lazy="joined")
