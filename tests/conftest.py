"""Shared pytest fixtures for chainql unit and integration tests."""
from __future__ import annotations

import pytest

from chainql.compile.layout import Layout
from chainql.schema.profile import RenderProfile


@pytest.fixture(scope="session")
def pretty() -> RenderProfile:
    """Multi-line profile with tab indentation."""
    return RenderProfile.pretty_print()


@pytest.fixture(scope="session")
def compact_layout() -> Layout:
    return Layout()


@pytest.fixture(scope="session")
def pretty_layout() -> Layout:
    """Multi-line layout with a two-space indent (easier to read in asserts)."""
    return Layout(pretty=True, indent="  ")
