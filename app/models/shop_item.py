from sqlalchemy import Column, Integer, String, Text, Boolean, CheckConstraint, true
from app.db import Base

class ShopItem(Base):
    __tablename__ = "shop_items"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(160), unique=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    cost = Column(Integer, nullable=False)
    type = Column(String(32), nullable=False)           # subscription | tool | template | course | cosmetic
    icon = Column(String(64), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (CheckConstraint("cost > 0", name="cost_positive"),)
