"""Configuration management for the fuzzy ranker service."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
