"""
Shared pytest fixtures for floatwm tests.
"""

import pytest
from pubsub import pub

from floatwm.config import LayoutConfig
from floatwm.geometry import Position, Size, ViewportBounds
from floatwm.manager import WindowManager
from floatwm.objects import WindowDescriptor
from floatwm.persistence import MemoryStore, PersistenceAdapter


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O")


@pytest.fixture(autouse=True)
def reset_bus():
    """Components subscribe to the global bus; isolate every test."""
    pub.unsubAll()
    yield
    pub.unsubAll()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def adapter(store):
    return PersistenceAdapter(store)


@pytest.fixture
def standard_viewport():
    """1200x800 viewport without reserved bands."""
    return ViewportBounds(1200, 800)


@pytest.fixture
def banded_viewport():
    """1200x800 viewport with an 80px header and 40px footer."""
    return ViewportBounds(1200, 800, reserved_top=80, reserved_bottom=40)


@pytest.fixture
def config():
    return LayoutConfig(state_path=None)


@pytest.fixture
def make_descriptor():
    """Factory fixture for creating window descriptors."""

    def _make(
        window_id="scope",
        x=20,
        y=80,
        width=900,
        height=450,
        visible=True,
        min_width=200,
        min_height=150,
        content=None,
    ):
        return WindowDescriptor(
            window_id=window_id,
            title=window_id.title(),
            default_position=Position(x, y),
            default_size=Size(width, height),
            is_visible=visible,
            min_width=min_width,
            min_height=min_height,
            content=content,
        )

    return _make


@pytest.fixture
def manager(adapter, standard_viewport, config):
    return WindowManager(adapter, standard_viewport, config)

