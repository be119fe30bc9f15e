"""Configuration: environment settings, database, Redis and logging setup."""

from .settings import AppConfig, DocumentConfig

__all__ = ["AppConfig", "DocumentConfig"]
