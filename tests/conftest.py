"""Shared test fixtures for the orbital test suite."""

import pytest

from orbital.config.settings import OrbitalSettings
from orbital.config.theme import Theme
from orbital.core.camera import CameraStateManager
from orbital.core.routes import RouteTable
from orbital.core.scheduling import FrameClock
from orbital.graphics.surface import BufferSurface
from orbital.menu.anchor import FixedAnchor
from orbital.menu.radial_menu import RadialMenu, RadialMenuItem


@pytest.fixture
def clock():
    """A clock starting at t=0 ms."""
    return FrameClock()


@pytest.fixture
def camera(clock):
    """Camera at the origin with default easing."""
    return CameraStateManager(clock)


@pytest.fixture
def routes():
    """The built-in route table."""
    return RouteTable()


@pytest.fixture
def theme():
    return Theme()


@pytest.fixture
def settings():
    """Settings that ignore any local .env file."""
    return OrbitalSettings(_env_file=None)


@pytest.fixture
def surface():
    return BufferSurface(160, 120)


@pytest.fixture
def menu_items():
    """Four items whose routes all have distinct poses."""
    return [
        RadialMenuItem("/explore", "EXPLORE"),
        RadialMenuItem("/engage", "ENGAGE"),
        RadialMenuItem("/enlist", "ENLIST"),
        RadialMenuItem("/", "HOME"),
    ]


@pytest.fixture
def make_menu(clock, camera, routes):
    """Factory for menus anchored at (400, 300)."""
    def _make(items, **kwargs):
        kwargs.setdefault("anchor", FixedAnchor(400, 300))
        kwargs.setdefault("hollow_radius", 120.0)
        return RadialMenu(items, camera, routes, clock, **kwargs)
    return _make
