"""
Application Factory

Creates and configures Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import atexit
import logging
from typing import Optional, Tuple

from flask import Flask, jsonify
from flask_cors import CORS

from docvault.application.dependency_container import DependencyContainer
from docvault.application.document_service import DocumentService
from docvault.config.database_config import close_database, database_health_check, init_database
from docvault.config.redis_config import (
    close_redis,
    get_redis_client,
    init_redis,
    redis_health_check,
)
from docvault.config.settings import AppConfig
from docvault.domain.document_management.repositories import IDocumentRepository
from docvault.domain.document_management.services import DocumentManager
from docvault.domain.download_tokens.repositories import IDownloadTokenRepository
from docvault.domain.download_tokens.services import DownloadTokenManager
from docvault.domain.file_storage.storage_repository import IFileStorageRepository
from docvault.infrastructure.local_file_storage_repository import LocalFileStorageRepository
from docvault.infrastructure.sql_document_repository import SqlDocumentRepository
from docvault.infrastructure.token_repository_factory import (
    REDIS_TOKEN_STORE,
    TokenRepositoryFactory,
)

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None,
               container: Optional[DependencyContainer] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        container: Prepared dependency container; when None the database,
            Redis (if configured) and all services are built from config

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    app = Flask(__name__)

    CORS(
        app,
        resources={
            r"/*": {
                "origins": "*",
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization"],
                "expose_headers": ["Content-Type", "Content-Disposition"],
                "max_age": 3600,
            }
        },
    )

    if container is None:
        container = build_container(config)
    app.container = container

    _register_blueprints(app, config)
    _register_health_endpoint(app, config)

    return app


def build_container(config: AppConfig) -> DependencyContainer:
    """
    Build the dependency container from configuration.

    Registers the repositories, the domain managers and DocumentService as
    singletons. The API layer resolves DocumentService only. The engine and
    the Redis pool are released at interpreter exit.
    """
    container = DependencyContainer()

    session_factory = init_database(config.database_url)
    atexit.register(close_database)
    if config.token_store == REDIS_TOKEN_STORE:
        init_redis()
        atexit.register(close_redis)

    storage_repository = LocalFileStorageRepository(config.documents.upload_path)
    document_repository = SqlDocumentRepository(session_factory)
    token_repository = TokenRepositoryFactory.create(
        config.token_store,
        session_factory,
        get_redis_client,
        retention_seconds=config.token_retention_seconds,
    )

    container.register_singleton(IFileStorageRepository, storage_repository)
    container.register_singleton(IDocumentRepository, document_repository)
    container.register_singleton(IDownloadTokenRepository, token_repository)

    document_manager = DocumentManager(
        document_repository,
        storage_repository,
        max_file_size=config.documents.max_file_size,
    )
    token_manager = DownloadTokenManager(
        token_repository,
        document_repository,
        storage_repository,
        default_ttl_minutes=config.documents.download_link_expiry_minutes,
        download_base_url=config.download_base_url,
    )
    container.register_singleton(DocumentManager, document_manager)
    container.register_singleton(DownloadTokenManager, token_manager)

    container.register_singleton(DocumentService, DocumentService(document_manager, token_manager))

    logger.info(
        f"Services initialized (uploads at {storage_repository.base_path}, "
        f"token store: {config.token_store})"
    )
    return container


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    from docvault.api.v1 import api_v1_bp

    app.register_blueprint(api_v1_bp)

    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )


def _get_health_status(config: AppConfig) -> Tuple[dict, int]:
    """
    Get health status of the database and, when used, Redis.

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "database": "unknown",
        "redis": "not_configured",
    }

    if database_health_check():
        health_status["database"] = "connected"
    else:
        health_status["database"] = "disconnected"
        health_status["status"] = "degraded"

    if config.token_store == REDIS_TOKEN_STORE:
        if redis_health_check():
            health_status["redis"] = "connected"
        else:
            health_status["redis"] = "disconnected"
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask, config: AppConfig) -> None:

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the application and its dependencies.
        """
        health_status, status_code = _get_health_status(config)
        return jsonify(health_status), status_code
