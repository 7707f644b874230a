"""Configuration module for the suggestion board."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
