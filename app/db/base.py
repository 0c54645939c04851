# Imports every model so Base.metadata is complete (create_all, Alembic autogenerate)
from app.db import Base
from app.models.profile import Profile
from app.models.badge import Badge
from app.models.user_badge import UserBadge
from app.models.shop_item import ShopItem
from app.models.shop_purchase import ShopPurchase
from app.models.document import Document
from app.models.rating import Rating
from app.models.comment import Comment
from app.models.download import Download
from app.models.forum_thread import ForumThread
from app.models.forum_reply import ForumReply
from app.models.notification import Notification
from app.models.follow import Follow

__all__ = [
    "Base", "Profile", "Badge", "UserBadge", "ShopItem", "ShopPurchase",
    "Document", "Rating", "Comment", "Download", "ForumThread", "ForumReply",
    "Notification", "Follow",
]
