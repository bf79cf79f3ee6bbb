# backend/stitchflow/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/stitchflow.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///stitchflow.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Every persisted slice key is "<prefix><slice>", e.g. stitchflow_orders
    STATE_KEY_PREFIX = os.environ.get("STATE_KEY_PREFIX", "stitchflow_")

    # Advisory text generation (optional; falls back to static copy when unset)
    ADVISORY_API_URL = os.environ.get(
        "ADVISORY_API_URL",
        "https://generativelanguage.googleapis.com/v1beta/models",
    )
    ADVISORY_API_KEY = os.environ.get("ADVISORY_API_KEY", "")
    ADVISORY_MODEL = os.environ.get("ADVISORY_MODEL", "gemini-3-flash-preview")
    ADVISORY_TIMEOUT_SECONDS = float(os.environ.get("ADVISORY_TIMEOUT_SECONDS", "10"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
