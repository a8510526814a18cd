"""Shared test fixtures."""

import sys
from dataclasses import dataclass

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from clonekit import Cloner, CloneSettings, MarkerRegistry, reset_default_cloner


@pytest.fixture
def registry():
    """Fresh MarkerRegistry, isolated from the global one."""
    return MarkerRegistry()


@pytest.fixture
def settings():
    """Default settings, independent of CLONEKIT_* environment variables."""
    return CloneSettings(
        extra_immutable_prefixes=(),
        share_frozen_records=True,
        warn_on_container_fallback=True,
    )


@pytest.fixture
def cloner(registry, settings):
    """Cloner with the built-in chain and an isolated registry."""
    return Cloner.builder().with_registry(registry).with_settings(settings).build()


@pytest.fixture(autouse=True)
def _fresh_default_cloner():
    """Make every test see a default cloner built from the current environment."""
    reset_default_cloner()
    yield
    reset_default_cloner()


@dataclass
class FixtureAddress:
    city: str


@dataclass
class FixtureUser:
    name: str
    address: FixtureAddress


@pytest.fixture
def user():
    return FixtureUser(name="Ada", address=FixtureAddress(city="Bangkok"))
