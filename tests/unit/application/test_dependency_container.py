"""
Unit tests for DependencyContainer.
"""

import pytest

from docvault.application.dependency_container import (
    DependencyContainer,
    DependencyNotFoundError,
)


class DummyService:
    """Dummy service for testing."""

    def __init__(self, value="default"):
        self.value = value


@pytest.fixture
def container():
    """Create a fresh DependencyContainer for each test."""
    return DependencyContainer()


class TestDependencyContainer:

    def test_singleton_resolves_to_same_instance(self, container):
        service = DummyService("single")
        container.register_singleton(DummyService, service)

        assert container.resolve(DummyService) is service
        assert container.resolve(DummyService) is service

    def test_transient_calls_factory_each_time(self, container):
        container.register_transient(DummyService, lambda: DummyService("fresh"))

        first = container.resolve(DummyService)
        second = container.resolve(DummyService)

        assert first is not second
        assert first.value == "fresh"

    def test_transient_factory_may_resolve_other_services(self, container):
        container.register_singleton(str, "config-value")
        container.register_transient(DummyService, lambda: DummyService(container.resolve(str)))

        assert container.resolve(DummyService).value == "config-value"

    def test_unregistered_dependency(self, container):
        with pytest.raises(DependencyNotFoundError, match="DummyService"):
            container.resolve(DummyService)

    def test_override_wins_until_cleared(self, container):
        original = DummyService("original")
        replacement = DummyService("replacement")
        container.register_singleton(DummyService, original)

        container.override(DummyService, replacement)
        assert container.resolve(DummyService) is replacement

        container.clear_overrides()
        assert container.resolve(DummyService) is original

    def test_is_registered(self, container):
        assert not container.is_registered(DummyService)
        container.register_transient(DummyService, DummyService)
        assert container.is_registered(DummyService)
