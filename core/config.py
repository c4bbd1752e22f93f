"""
Eitango – Configuration
========================
Plain settings object; every value can be overridden from the environment.
"""

import os
import sys
from pathlib import Path


def _default_data_dir() -> str:
    """Return a stable directory for the SQLite file and logs."""
    if getattr(sys, "frozen", False):
        # Running as a PyInstaller bundle
        base = Path(sys.executable).parent
    else:
        base = Path(__file__).resolve().parent.parent
    return str(base / "data")


class Settings:
    APP_NAME: str = "Eitango"
    APP_VERSION: str = "1.0"
    DATA_DIR: str = os.environ.get("EITANGO_DATA_DIR", _default_data_dir())
    DB_FILE: str = "eitango.db"
    LOG_DIR: str = os.environ.get("EITANGO_LOG_DIR", os.path.join(DATA_DIR, "log"))
    LOG_FILE: str = "eitango.log"

    # Remote document store (Appwrite REST API)
    APPWRITE_ENDPOINT: str = os.environ.get("APPWRITE_ENDPOINT", "https://cloud.appwrite.io/v1")
    APPWRITE_PROJECT_ID: str = os.environ.get("APPWRITE_PROJECT_ID", "")
    APPWRITE_DATABASE_ID: str = os.environ.get("APPWRITE_DATABASE_ID", "")
    APPWRITE_COLLECTION_ID: str = os.environ.get("APPWRITE_COLLECTION_ID", "vocabulary")
    FETCH_LIMIT: int = 1000
    FETCH_TIMEOUT: float = float(os.environ.get("EITANGO_FETCH_TIMEOUT", "30"))

    QUIZ_MAX_QUESTIONS: int = 10


settings = Settings()
