"""Shared fixtures: stub backend and the bundled catalog."""

from __future__ import annotations

import pytest
from stub_backend import StubBackend

from skyprop.catalog import Catalog, default_catalog


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def catalog() -> Catalog:
    return default_catalog()
