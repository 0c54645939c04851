import os
from dotenv import load_dotenv

load_dotenv()

# === Database ===
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./humg_share.db")

# === Identity provider tokens ===
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# === HTTP ===
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()] or ["http://localhost:5173"]

# === Points ===
APPROVAL_REWARD_POINTS = int(os.getenv("APPROVAL_REWARD_POINTS", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEV_AUTO_CREATE = os.getenv("DEV_AUTO_CREATE", "0") == "1"
