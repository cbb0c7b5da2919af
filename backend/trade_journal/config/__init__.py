"""Configuration package for the trade journal analytics service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
