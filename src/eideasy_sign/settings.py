#!/usr/bin/env python3
"""
Settings module for the eID Easy signing client.
Handles environment variable loading and validation.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://id.eideasy.com"
DEFAULT_TIMEOUT = 30.0


class Settings:
    """Configuration settings loaded from environment variables."""

    def __init__(self):
        # eID Easy Configuration
        self.EIDEASY_BASE_URL: str = os.getenv("EIDEASY_BASE_URL", DEFAULT_BASE_URL)
        self.EIDEASY_CLIENT_ID: Optional[str] = os.getenv("EIDEASY_CLIENT_ID")
        self.EIDEASY_SECRET: Optional[str] = os.getenv("EIDEASY_SECRET")
        self.EIDEASY_TIMEOUT: float = _parse_timeout(os.getenv("EIDEASY_TIMEOUT"))

        # Client Configuration
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    def get_base_url(self) -> str:
        """Get the API host without a trailing slash."""
        return self.EIDEASY_BASE_URL.strip().rstrip("/") or DEFAULT_BASE_URL

    def has_client_credentials(self) -> bool:
        """Check that both client id and secret are set."""
        required_vars = [self.EIDEASY_CLIENT_ID, self.EIDEASY_SECRET]
        return all(var is not None and var.strip() != "" for var in required_vars)


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric EIDEASY_TIMEOUT={raw!r}, using {DEFAULT_TIMEOUT}")
        return DEFAULT_TIMEOUT
    if value <= 0:
        logger.warning(f"Ignoring non-positive EIDEASY_TIMEOUT={raw!r}, using {DEFAULT_TIMEOUT}")
        return DEFAULT_TIMEOUT
    return value


# Global settings instance
settings = Settings()
