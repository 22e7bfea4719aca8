# backend/warebnb/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/warebnb.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///warebnb.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    BCRYPT_ROUNDS = 12

    # Public base URL of the object storage bucket holding avatars and logos
    STORAGE_PUBLIC_URL = os.environ.get(
        "STORAGE_PUBLIC_URL",
        "http://localhost:54321/storage/v1/object/public/docs",
    )

    # Root test-role cookie lifetime (seconds)
    ROOT_ROLE_COOKIE_MAX_AGE = int(os.environ.get("ROOT_ROLE_COOKIE_MAX_AGE", "86400"))

    INVOICE_TAX_RATE = os.environ.get("INVOICE_TAX_RATE", "0.08")
    INVOICE_DUE_DAYS = int(os.environ.get("INVOICE_DUE_DAYS", "30"))

    CORS_ALLOWED_ORIGINS = {
        origin.strip()
        for origin in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if origin.strip()
    }

    APP_VERSION = "0.4.0"

    DEMO_SEED_ENABLED = os.environ.get("DEMO_SEED_ENABLED", "false").lower() == "true"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    BCRYPT_ROUNDS = 4
