"""
MemeVote Configuration Settings

This module contains all configuration constants for the meme registry
and its operator console.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Registry and console configuration settings."""

    # Record constraints
    MAX_TITLE_LENGTH: int = 100  # Counted in characters, not bytes
    FIRST_ID: int = 1

    # Listing settings
    DEFAULT_PAGE_SIZE: int = int(os.environ.get("MEMEVOTE_PAGE_SIZE", "100"))

    # Console settings
    DEFAULT_IDENTITY: str = os.environ.get("MEMEVOTE_IDENTITY", "anonymous")

    # Event settings
    EVENT_QUEUE_SIZE: int = int(os.environ.get("MEMEVOTE_EVENT_QUEUE_SIZE", "1000"))  # 0 = unbounded

    # Logging settings
    DEBUG: bool = os.environ.get("MEMEVOTE_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("MEMEVOTE_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
