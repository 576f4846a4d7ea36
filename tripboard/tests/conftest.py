"""
Test fixtures and utilities for tripboard tests.

Provides reusable fixtures for surfaces, stores, sessions and tools.
"""

from unittest.mock import Mock

import numpy as np
import pytest

from tripboard.config import default_config


@pytest.fixture
def cfg():
    """Default configuration tree without environment overrides."""
    return default_config()


@pytest.fixture
def surface():
    """A mounted 200x150 surface at scale 1."""
    from tripboard.core.canvas import RasterSurface

    surface = RasterSurface(scale=1.0)
    surface.resize(200, 150)
    return surface


@pytest.fixture
def deps():
    """Dependency bag whose callbacks record their calls."""
    from tripboard.core.tools import ToolDeps

    return ToolDeps(
        commit_snapshot=Mock(),
        clear=Mock(),
        undo=Mock(return_value=True),
        redo=Mock(return_value=True),
    )


@pytest.fixture
def store():
    from tripboard.core.canvas import EntityStore

    return EntityStore()


@pytest.fixture
def scheduler():
    from tripboard.core.canvas import FrameScheduler

    return FrameScheduler(fps=60)


@pytest.fixture
def session(cfg):
    """A session mounted on a 400x300 container."""
    from tripboard.core import CanvasSession

    session = CanvasSession(cfg)
    session.mount(400, 300)
    return session


def pointer(x, y):
    from tripboard.core.tools import PointerEvent

    return PointerEvent(x, y)


def painted(buffer, background=(255, 255, 255, 255)) -> int:
    """Number of pixels that differ from the background fill."""
    return int(np.any(buffer != np.array(background, dtype=np.uint8), axis=-1).sum())


def assert_same_pixels(a, b):
    assert a.shape == b.shape, f"Shapes differ: {a.shape} != {b.shape}"
    assert np.array_equal(a, b), (
        f"Buffers differ in {int(np.any(a != b, axis=-1).sum())} pixels"
    )
