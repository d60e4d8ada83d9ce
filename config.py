"""
Configuration for the reseller order portal.

Values come from the environment (optionally a .env file next to the app).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
load_dotenv(override=True)

BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "reseller_portal_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Workflow Configuration
    # ==========================================================================
    # MEDIA_LIBRARY_SIZE: number of marketing media slots (refs 0..N-1)
    # ORDER_ID_PREFIX: order ids look like "<prefix>-1234"
    # ORDER_ID_RETRY_BUDGET: draws before a collision is treated as a defect
    # SEED_ORDER_HISTORY: preload demonstration orders for new resellers
    # ==========================================================================
    MEDIA_LIBRARY_SIZE = int(os.environ.get("MEDIA_LIBRARY_SIZE", "10"))
    ORDER_ID_PREFIX = os.environ.get("ORDER_ID_PREFIX", "BCF")
    ORDER_ID_DIGITS = int(os.environ.get("ORDER_ID_DIGITS", "4"))
    ORDER_ID_RETRY_BUDGET = int(os.environ.get("ORDER_ID_RETRY_BUDGET", "32"))
    SEED_ORDER_HISTORY = _env_flag("SEED_ORDER_HISTORY", "1")
    MAX_RESELLER_MARK_LENGTH = 255


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SEED_ORDER_HISTORY = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "testing-secret-key"
    SEED_ORDER_HISTORY = False
