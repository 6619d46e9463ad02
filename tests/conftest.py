"""Pytest configuration for spheretrace tests.

Taichi must be initialized once per session before any kernel runs.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


class Material:
    """Stand-in for a shading material; only its identity matters."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Material({self.name!r})"


@pytest.fixture
def red():
    return Material("red")


@pytest.fixture
def blue():
    return Material("blue")
