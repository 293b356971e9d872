"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import pytest

from memevote.console.parser import ConsoleParser
from memevote.console.session import ConsoleSession
from memevote.events.sinks import CollectingSink
from memevote.registry.registry import Registry


# ============================================================================
# Registry Fixtures
# ============================================================================

@pytest.fixture
def sink() -> CollectingSink:
    """Create a sink that records every emitted event."""
    return CollectingSink()


@pytest.fixture
def registry(sink: CollectingSink) -> Registry:
    """Create an empty Registry wired to the collecting sink."""
    return Registry(sink=sink)


@pytest.fixture
def populated_registry(registry: Registry) -> Registry:
    """Create a Registry holding five records (ids 1-5) by 'alice'."""
    for i in range(1, 6):
        registry.create("alice", f"Meme {i}", f"https://example.com/{i}.jpg")
    return registry


# ============================================================================
# Console Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ConsoleParser:
    """Create a ConsoleParser instance."""
    return ConsoleParser()


@pytest.fixture
def session(registry: Registry) -> ConsoleSession:
    """Create a console session acting as 'alice' with page size 10."""
    return ConsoleSession(registry, identity="alice", page_size=10)


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
