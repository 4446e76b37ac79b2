"""
Pytest fixtures and configuration for Sphere Renderer tests.

This module provides shared fixtures and utilities to reduce test code duplication
and improve test organization.
"""

import numpy as np
import pytest
from sphere_renders.core import Renderer
from sphere_renders.rendering import Sphere
from sphere_renders.vectors import Vec4


@pytest.fixture
def renderer():
    """Create a standard renderer instance (default red sphere) for tests."""
    return Renderer()


@pytest.fixture
def origin():
    """Camera origin as a homogeneous point."""
    return np.array([0.0, 0.0, 0.0, 1.0])


@pytest.fixture
def red_sphere():
    """The default scene sphere."""
    return Sphere.from_center((0.0, 0.0, -1.0), 0.5, (255, 0, 0, 255))


@pytest.fixture
def unreachable_sphere():
    """A sphere no camera ray of the default viewport can reach."""
    return Sphere.from_center((0.0, 1000.0, 0.0), 0.5, (0, 255, 0, 255))


@pytest.fixture
def forward():
    """Unit direction straight down -Z."""
    return Vec4.direction(0.0, 0.0, -1.0)


@pytest.fixture
def expected_colors():
    """Expected RGBA8 values for common test cases."""
    return {
        'red': (255, 0, 0, 255),
        'top': (25, 51, 165, 255),      # dir.y = 1 -> pure blue * 255
        'horizon': (114, 127, 184, 255), # dir.y = 0 -> halfway blend
        'bottom': (204, 204, 204, 255),  # dir.y = -1 -> pure white * 255
    }


def assert_color_equal(actual, expected, err_msg=""):
    """Assert that two RGBA8 colors match exactly, with helpful error messages."""
    np.testing.assert_array_equal(
        np.asarray(actual), np.asarray(expected),
        err_msg=f"Color mismatch: {err_msg}"
    )


def expected_background(direction_y):
    """Hand-rolled gradient formula for one direction.y."""
    t = 0.5 * (direction_y + 1.0)
    white = (0.8, 0.8, 0.8)
    blue = (0.1, 0.2, 0.65)
    rgb = [int(((1.0 - t) * w + t * b) * 255.0) for w, b in zip(white, blue)]
    return tuple(min(max(c, 0), 255) for c in rgb) + (255,)
