"""Pytest configuration and shared fixtures for the bbhtml test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from bs4 import BeautifulSoup
from hypothesis import Phase, Verbosity, settings

from bbhtml.registry import TagRegistry
from bbhtml.tags import BUILTIN_TAGS

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests generating random markup")
    config.addinivalue_line("markers", "security: Tests for escaping and URL validation")


@pytest.fixture
def builtin_registry() -> TagRegistry:
    """Provide a fresh registry holding the built-in tags.

    Tests that register or remove tags use this instead of the global
    registry so they do not leak state into each other.
    """
    return TagRegistry(BUILTIN_TAGS)


@pytest.fixture
def empty_registry() -> TagRegistry:
    """Provide a registry without any tags."""
    return TagRegistry()


@pytest.fixture
def soup():
    """Return a helper that parses an HTML fragment with BeautifulSoup."""

    def _parse(fragment: str) -> BeautifulSoup:
        return BeautifulSoup(fragment, "html.parser")

    return _parse
