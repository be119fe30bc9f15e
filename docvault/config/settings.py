"""
Application Settings

Environment-driven configuration. Values are read when a config object is
constructed, so tests can set environment variables (or build the objects
directly) before calling create_app().
"""

import os
from typing import Optional

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class DocumentConfig:
    """Document storage and download-link settings."""

    def __init__(self):
        self.upload_path = os.getenv("UPLOAD_PATH", "./uploads")
        self.max_file_size = int(os.getenv("MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE))
        self.download_link_expiry_minutes = int(os.getenv("DOWNLOAD_LINK_EXPIRY_MINUTES", 15))
        self.download_base_url: Optional[str] = os.getenv("DOWNLOAD_BASE_URL")


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.host = os.getenv("FLASK_HOST", "0.0.0.0")
        self.port = int(os.getenv("FLASK_PORT", 8000))
        self.debug = _get_bool("FLASK_DEBUG", "false")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        self.database_url = os.getenv("DATABASE_URL", "sqlite:///database.sqlite")
        # "sql" keeps tokens next to documents; "redis" moves them to Redis.
        self.token_store = os.getenv("TOKEN_STORE", "sql").lower()
        self.token_retention_seconds = int(os.getenv("TOKEN_RETENTION_SECONDS", 86400))

        self.documents = DocumentConfig()

    @property
    def download_base_url(self) -> str:
        """Prefix of generated download URLs."""
        if self.documents.download_base_url:
            return self.documents.download_base_url.rstrip("/")
        return f"/api/{self.api_version}/documents/download"
