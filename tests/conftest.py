"""Shared pytest fixtures for vue2twig tests."""

from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def components_dir(fixtures_dir: Path) -> Path:
    """Return path to component fixtures directory."""
    return fixtures_dir / "components"


@pytest.fixture
def card_component(components_dir: Path) -> Path:
    """Return a component using conditionals, loops and bindings."""
    return components_dir / "Card.vue"
