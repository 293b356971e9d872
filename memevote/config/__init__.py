"""Configuration module for MemeVote."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
