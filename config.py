"""
Configuration settings for the session store
"""
import os

from dotenv import load_dotenv

# Load environment variables from .env (if present)
load_dotenv()

# Cookie Configuration
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session_id")
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "False").lower() == "true"
COOKIE_HTTP_ONLY = os.getenv("COOKIE_HTTP_ONLY", "True").lower() == "true"
COOKIE_SAME_SITE = os.getenv("COOKIE_SAME_SITE", "Lax")  # Strict, Lax or None

# Session Lifetime
SESSION_TTL_SECONDS = float(os.getenv("SESSION_TTL_SECONDS", 3600))  # 1 hour
SESSION_CLEANUP_INTERVAL = float(os.getenv("SESSION_CLEANUP_INTERVAL", 60))  # Sweep every minute

# Identifier Configuration
SESSION_ID_BYTES = 16  # 128 bits -> 32 hex characters

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
