"""Shared fixtures for factsmith tests."""

import pytest

from factsmith import random_generator


@pytest.fixture
def g():
    """A seeded build-mode generator, so every run draws the same entropy."""
    return random_generator(seed=1234)
