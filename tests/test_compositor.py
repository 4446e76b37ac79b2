import numpy as np
import pytest
from sphere_renders.rendering import (BackgroundGradient, Compositor, HitResult,
                                      HitType, Sphere)
from conftest import assert_color_equal, expected_background


def test_background_endpoints(expected_colors):
    """Test the gradient hits the white and blue constants at dir.y = -1 and 1."""
    background = BackgroundGradient()
    assert_color_equal(background.get_color(np.array([0.0, -1.0, -1.0, 0.0])), expected_colors['bottom'])
    assert_color_equal(background.get_color(np.array([0.0, 0.0, -1.0, 0.0])), expected_colors['horizon'])
    assert_color_equal(background.get_color(np.array([0.0, 1.0, -1.0, 0.0])), expected_colors['top'])


def test_background_monotonic():
    """Moving dir.y from -1 to 1 walks every channel from white toward blue."""
    background = BackgroundGradient()
    ys = np.linspace(-1.0, 1.0, 201)
    directions = np.zeros((ys.size, 4))
    directions[:, 1] = ys
    directions[:, 2] = -1.0

    colors = background.get_color(directions).astype(int)
    diffs = np.diff(colors[:, :3], axis=0)
    assert np.all(diffs <= 0), "white (0.8) is above blue (0.1, 0.2, 0.65) on every channel"
    assert np.all(colors[:, 3] == 255)


def test_background_ignores_x_and_z():
    background = BackgroundGradient()
    a = background.get_color(np.array([-2.0, 0.25, -1.0, 0.0]))
    b = background.get_color(np.array([1.5, 0.25, -9.0, 0.0]))
    assert_color_equal(a, b)


@pytest.mark.parametrize("y", [-1.0, -0.5, -0.25, 0.0, 0.3, 0.5, 1.0])
def test_background_formula(y):
    color = BackgroundGradient().get_color(np.array([0.0, y, -1.0, 0.0]))
    assert_color_equal(color, expected_background(y), err_msg=f"dir.y={y}")


def test_background_out_of_range_saturates():
    """dir.y outside [-1, 1] is not clamped before the byte conversion."""
    background = BackgroundGradient()
    below = background.get_color(np.array([0.0, -5.0, -1.0, 0.0]))
    above = background.get_color(np.array([0.0, 15.0, -1.0, 0.0]))

    # t = -2: (3*0.8 - 2*c) * 255 exceeds 255 on every channel
    assert_color_equal(below, (255, 255, 255, 255))
    # t = 8: (-7*0.8 + 8*c) * 255 is negative on every channel
    assert_color_equal(above, (0, 0, 0, 255))


def test_background_nan_direction():
    color = BackgroundGradient().get_color(np.array([np.nan, np.nan, np.nan, 0.0]))
    assert_color_equal(color, (0, 0, 0, 255))


def test_custom_background_colors():
    background = BackgroundGradient(white=(1.0, 1.0, 1.0), blue=(0.0, 0.0, 0.0))
    assert_color_equal(background.get_color(np.array([0.0, -1.0, -1.0, 0.0])), (255, 255, 255, 255))
    assert_color_equal(background.get_color(np.array([0.0, 1.0, -1.0, 0.0])), (0, 0, 0, 255))


def test_compositor_flat_colors(expected_colors):
    """Primitive hits get the flat primitive color, the rest the gradient."""
    scene = (
        Sphere.from_center((0, 0, -1), 0.5, (255, 0, 0, 255)),
        Sphere.from_center((0, 0, -3), 0.5, (0, 0, 255, 128)),
    )
    hits = HitResult(
        hit_type=np.array([HitType.PRIMITIVE.value, HitType.BACKGROUND.value, HitType.PRIMITIVE.value], dtype=object),
        primitive_index=np.array([0, -1, 1]),
    )
    directions = np.array([
        [0.0, 0.0, -1.0, 0.0],
        [0.0, 1.0, -1.0, 0.0],
        [0.0, 0.0, -1.0, 0.0],
    ])

    colors = Compositor(scene).composite(hits, directions)
    assert colors.dtype == np.uint8
    assert_color_equal(colors[0], expected_colors['red'])
    assert_color_equal(colors[1], expected_colors['top'])
    assert_color_equal(colors[2], (0, 0, 255, 128))


def test_hit_result_validation():
    with pytest.raises(ValueError, match="Invalid hit types"):
        HitResult(hit_type=np.array(["sky"], dtype=object), primitive_index=np.array([-1]))
    with pytest.raises(ValueError, match="doesn't match"):
        HitResult(hit_type=np.array([HitType.BACKGROUND.value], dtype=object), primitive_index=np.array([-1, -1]))
    with pytest.raises(ValueError, match="primitive_index -1"):
        HitResult(hit_type=np.array([HitType.BACKGROUND.value], dtype=object), primitive_index=np.array([0]))
    with pytest.raises(ValueError, match="scene index"):
        HitResult(hit_type=np.array([HitType.PRIMITIVE.value], dtype=object), primitive_index=np.array([-1]))
