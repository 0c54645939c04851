import logging
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from app.core.settings import CORS_ORIGINS, DEV_AUTO_CREATE, LOG_LEVEL
from app.db import engine, get_db
from app.db.base import Base
from app.schemas.stats import SiteStats
from app.domain.documents.service import site_stats

from app.routers import profile as profile_router
from app.routers import badges as badges_router
from app.routers import shop as shop_router
from app.routers import documents as documents_router
from app.routers import forum as forum_router
from app.routers import admin as admin_router
from app.routers import notifications as notifications_router
from app.routers import follows as follows_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

# Alembic owns the schema; this is only a shortcut for local runs
if DEV_AUTO_CREATE:
    Base.metadata.create_all(bind=engine)

app = FastAPI(title="HUMG Share API")

# ==== CORS ====
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==== Routers ====
app.include_router(profile_router.router)
app.include_router(badges_router.router)
app.include_router(shop_router.router)
app.include_router(documents_router.router)
app.include_router(forum_router.router)
app.include_router(admin_router.router)
app.include_router(notifications_router.router)
app.include_router(follows_router.router)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/stats", response_model=SiteStats)
def stats(db: Session = Depends(get_db)):
    return site_stats(db)
