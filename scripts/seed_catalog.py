# scripts/seed_catalog.py
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy import select
from app.db import SessionLocal
from app.models.badge import Badge, BadgeType
from app.models.shop_item import ShopItem
from app.models.profile import Profile
from app.domain.badges.service import award_by_type

BADGES = [
    # name,                   description,                                  icon,            color,     type,               requirement
    ("Thanh vien moi",        "Chao mung ban den voi HUMG Share!",          "UserPlus",      "#22c55e", BadgeType.join,     0),
    ("Nguoi chia se",         "Upload tai lieu dau tien duoc duyet",        "Upload",        "#3b82f6", BadgeType.upload,   1),
    ("Coc Dong",              "Upload 5 tai lieu chat luong duoc duyet",    "Award",         "#f59e0b", BadgeType.upload,   5),
    ("Chuyen gia",            "Upload 20 tai lieu chat luong duoc duyet",   "Crown",         "#8b5cf6", BadgeType.upload,   20),
    ("Thanh vien tich cuc",   "Dat 50 diem karma",                          "Zap",           "#ef4444", BadgeType.points,   50),
    ("Nha binh luan",         "Binh luan 10 tai lieu",                      "MessageCircle", "#06b6d4", BadgeType.comment,  10),
    ("Da xac thuc",           "Tai khoan da duoc xac thuc boi admin",       "CheckCircle",   "#10b981", BadgeType.verified, 0),
    ("Nguoi dan duong",       "Dat 200 diem karma",                         "Compass",       "#ec4899", BadgeType.points,   200),
]

SHOP_ITEMS = [
    # name,                          description,                                                          cost, type,           icon
    ("Tai lieu Premium - 1 thang",   "Truy cap tat ca tai lieu premium trong 1 thang.",                     100,  "subscription", "Star"),
    ("AI Quiz Solver",               "Cong cu AI giup giai de thi va tra loi cau hoi on tap. Su dung 10 lan.", 50, "tool",         "Brain"),
    ("Template Excel Tinh toan mo",  "Bo template Excel cho cac phep tinh toan khai thac mo.",              30,   "template",     "FileSpreadsheet"),
    ("Script Python cho GIS",        "Bo script Python tich hop voi ArcGIS va QGIS.",                       40,   "tool",         "Code"),
    ("Khoa hoc Surpac nang cao",     "Khoa hoc video Surpac: mo hinh hoa 3D, thiet ke mo.",                 150,  "course",       "GraduationCap"),
    ("Danh hieu tuy chinh",          "Tuy chinh danh hieu hien thi tren profile ca nhan.",                  80,   "cosmetic",     "Palette"),
]

def upsert_badge(db, name, description, icon, color, badge_type, requirement):
    row = db.execute(select(Badge).where(Badge.name == name)).scalar_one_or_none()
    if row is None:
        row = Badge(name=name)
        db.add(row)
    row.description = description
    row.icon = icon
    row.color = color
    row.type = badge_type.value
    row.requirement = requirement

def upsert_item(db, name, description, cost, item_type, icon):
    row = db.execute(select(ShopItem).where(ShopItem.name == name)).scalar_one_or_none()
    if row is None:
        row = ShopItem(name=name)
        db.add(row)
    row.description = description
    row.cost = cost
    row.type = item_type
    row.icon = icon
    row.is_active = True

def backfill_join_badges(db) -> int:
    # profiles created before the catalog existed never received their join badges
    granted = 0
    for user_id in db.execute(select(Profile.user_id)).scalars().all():
        granted += len(award_by_type(db, user_id, BadgeType.join, commit=False))
    db.commit()
    return granted

def seed(db):
    for values in BADGES:
        upsert_badge(db, *values)
    for values in SHOP_ITEMS:
        upsert_item(db, *values)
    db.commit()
    return backfill_join_badges(db)

def main():
    db = SessionLocal()
    try:
        backfilled = seed(db)
        print(f"Catalog seed OK: {len(BADGES)} badges, {len(SHOP_ITEMS)} shop items, {backfilled} join badges backfilled")
    finally:
        db.close()

if __name__ == "__main__":
    main()
