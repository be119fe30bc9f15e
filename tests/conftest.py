"""
Shared pytest fixtures and configuration for the docvault test suite.

This module provides:
- Hypothesis configuration for property-based testing
- In-memory repositories and a fixed clock
- Domain managers and the DocumentService wired to those repositories
- A Flask app and test client built around an injected container
"""

import pytest
from hypothesis import HealthCheck, Phase, settings

from docvault.app_factory import create_app
from docvault.application.dependency_container import DependencyContainer
from docvault.application.document_service import DocumentService
from docvault.config.settings import AppConfig
from docvault.domain.document_management.services import DocumentManager
from docvault.domain.download_tokens.services import DownloadTokenManager
from tests.fixtures import (
    MAX_FILE_SIZE,
    FixedClock,
    MockDocumentRepository,
    MockDownloadTokenRepository,
    MockFileStorageRepository,
)

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def document_repository():
    return MockDocumentRepository()


@pytest.fixture
def token_repository():
    return MockDownloadTokenRepository()


@pytest.fixture
def storage_repository():
    return MockFileStorageRepository()


@pytest.fixture
def clock():
    return FixedClock()


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def document_manager(document_repository, storage_repository, clock):
    return DocumentManager(
        document_repository,
        storage_repository,
        max_file_size=MAX_FILE_SIZE,
        clock=clock,
    )


@pytest.fixture
def token_manager(token_repository, document_repository, storage_repository, clock):
    return DownloadTokenManager(
        token_repository,
        document_repository,
        storage_repository,
        default_ttl_minutes=15,
        clock=clock,
    )


@pytest.fixture
def document_service(document_manager, token_manager):
    return DocumentService(document_manager, token_manager)


@pytest.fixture
def container(document_service):
    container = DependencyContainer()
    container.register_singleton(DocumentService, document_service)
    return container


@pytest.fixture
def app(container):
    app = create_app(AppConfig(), container=container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real SQLite database and filesystem)"
    )
    config.addinivalue_line(
        "markers", "contract: Contract tests (verify interface compliance)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/contracts/* -> @pytest.mark.contract
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/contracts/" in test_path or "\\contracts\\" in test_path:
            item.add_marker(pytest.mark.contract)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
