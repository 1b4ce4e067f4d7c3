"""Application settings read from the environment (and an optional .env file)."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Database
# Render/Supabase style postgres:// URLs are normalised in src.core.db
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./poker_night.db")

# Admin area shared secret (no sessions, checked on every admin request)
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Game entry
DEFAULT_BUY_IN = float(os.getenv("DEFAULT_BUY_IN", "30"))
BALANCE_TOLERANCE = 0.01

# Standings
RECENT_WINDOW_DAYS = int(os.getenv("RECENT_WINDOW_DAYS", "30"))
BUST_CLUB_LIMIT = int(os.getenv("BUST_CLUB_LIMIT", "10"))

# Logging
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
