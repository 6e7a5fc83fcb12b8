import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./entitlements.db")

GOOGLE_PLAY_CREDENTIALS_FILE = os.getenv("GOOGLE_PLAY_CREDENTIALS_FILE", "play-console-service.json")
GOOGLE_PLAY_PACKAGE_NAME = os.getenv("GOOGLE_PLAY_PACKAGE_NAME", "com.mistic.numerology")

CATALOG_MAX_WORKERS = int(os.getenv("CATALOG_MAX_WORKERS", "4"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

PORT = int(os.getenv("PORT", "3000"))
