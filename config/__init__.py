"""Configuration module for Lending Yield Tracker."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
