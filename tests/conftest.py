"""Shared fixtures."""

import pytest

from params_coerce import Coercer, Resolver, reset_default_coercer
from tests.geometry import Point


@pytest.fixture(autouse=True)
def fresh_default_coercer():
    """Each test starts with an empty process-wide resolution cache."""
    reset_default_coercer()
    yield
    reset_default_coercer()


@pytest.fixture
def resolver() -> Resolver:
    return Resolver()


@pytest.fixture
def coercer(resolver: Resolver) -> Coercer:
    return Coercer(resolver)


@pytest.fixture
def point() -> Point:
    return Point(3, 4)
