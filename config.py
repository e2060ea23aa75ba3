import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def database_url():
    url = os.environ.get("DATABASE_URL")

    # Local fallback
    if not url:
        url = "sqlite:///job_board.db"

    # Fix postgres:// issue
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    return url


class Config:
    PREFERRED_URL_SCHEME = "https"
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")

    # ================= SESSION =================
    SESSION_COOKIE_NAME = "session"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.environ.get("RENDER") == "true"
    PERMANENT_SESSION_LIFETIME = timedelta(days=31)

    # ================= DATABASE =================
    SQLALCHEMY_DATABASE_URI = database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ================= FORMS =================
    # JSON and fetch clients do not carry a CSRF token
    WTF_CSRF_ENABLED = False

    # ================= RESUME UPLOAD =================
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "upload")
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
