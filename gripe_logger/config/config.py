import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[2] / ".env")

APP_NAME = os.getenv("APP_NAME", "gripe_logger")
APP_VERSION = "0.1.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_DIR = os.getenv("STORAGE_DIR", str(Path(__file__).resolve().parents[2] / "storage"))
MAX_ATTACHMENT_BYTES = int(os.getenv("MAX_ATTACHMENT_BYTES", str(5 * 1024 * 1024)))

SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(60 * 60 * 24 * 7)))  # 7 days

# Seeded on startup when both are set
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")

# Whether an owner may still delete a complaint once an admin has picked it up
ALLOW_DELETE_AFTER_TRIAGE = os.getenv("ALLOW_DELETE_AFTER_TRIAGE", "1") == "1"

COMPLAINT_CATEGORIES = ["Infrastructure", "Academics", "Hostel", "Food", "Other"]
