"""Service settings read from the environment."""

import os

from shedcore.utils.logging_config import get_logger

logger = get_logger("shedcore.api")


class Settings:
    """Application configuration loaded from environment variables"""

    # Application settings
    DEBUG = os.environ.get("SHEDCORE_DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.environ.get("SHEDCORE_LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

    # Comma-separated list, "*" for any origin
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get("SHEDCORE_CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # Server
    HOST = os.environ.get("SHEDCORE_HOST", "0.0.0.0")
    PORT = int(os.environ.get("SHEDCORE_PORT", "8000"))

    @classmethod
    def validate(cls):
        """Validate critical configuration values"""
        if "*" in cls.CORS_ORIGINS and not cls.DEBUG:
            logger.warning("CORS allows any origin - restrict SHEDCORE_CORS_ORIGINS in production")

        if cls.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            logger.error("Unknown SHEDCORE_LOG_LEVEL %r, falling back to INFO", cls.LOG_LEVEL)
            cls.LOG_LEVEL = "INFO"
