import math

import numpy as np
import pytest

from mandelview.compute import escape_time
from mandelview.renderer import IterationResult, PixelBuffer, render
from mandelview.viewport import InvalidConfiguration, Viewport


@pytest.fixture
def default_view():
    return Viewport(center_real=-0.5, center_imag=0.0, zoom=1.0, max_iter=100)


@pytest.fixture
def default_buffer(default_view):
    return render(default_view, 100, 100)


def test_buffer_layout(default_view):
    buffer = render(default_view, 30, 20)

    assert isinstance(buffer, PixelBuffer)
    assert buffer.rgba.shape == (20, 30, 4)
    assert buffer.rgba.dtype == np.uint8
    assert buffer.iterations.shape == (20, 30)
    assert (buffer.width, buffer.height) == (30, 20)
    assert np.all(buffer.rgba[:, :, 3] == 255)
    assert buffer.rgb.shape == (20, 30, 3)


def test_center_pixel_is_inside(default_view, default_buffer):
    assert default_view.plane_coordinate(50, 50, 100, 100) == (-0.5, 0.0)
    assert default_buffer.iteration_at(50, 50) == IterationResult(100, False)


def test_corners_escape(default_buffer):
    for px, py in [(0, 0), (99, 0), (0, 99), (99, 99)]:
        result = default_buffer.iteration_at(px, py)
        assert result.escaped
        assert result.iteration_count < 100


def test_escaped_mask_matches_iterations(default_buffer):
    np.testing.assert_array_equal(default_buffer.escaped, default_buffer.iterations < 100)
    assert default_buffer.escaped.any()
    assert not default_buffer.escaped.all()


def test_inside_color_depends_on_colormap(default_view):
    hue = render(default_view, 100, 100)
    black = render(default_view, 100, 100, colormap='Hue / black interior')

    assert hue.pixel_at(50, 50) == (255, 0, 0, 255)
    assert black.pixel_at(50, 50) == (0, 0, 0, 255)
    np.testing.assert_array_equal(hue.iterations, black.iterations)


def test_render_is_idempotent(default_view):
    first = render(default_view, 64, 48)
    second = render(default_view, 64, 48)

    assert first.tobytes() == second.tobytes()
    np.testing.assert_array_equal(first.iterations, second.iterations)
    # Fresh buffers every time
    assert first.rgba is not second.rgba


def test_budget_of_one_full_size():
    buffer = render(Viewport(-0.5, 0.0, 1.0, 1), 800, 600)

    assert np.all(buffer.iterations == 1)
    assert not buffer.escaped.any()
    assert buffer.iteration_at(0, 0) == IterationResult(1, False)


def test_mapping_couples_axes_to_their_own_dimension():
    """
    Each axis always spans 4 / zoom plane units across its own pixel count,
    so a 200x100 image squeezes the real axis relative to the imaginary one.
    """
    view = Viewport(0.0, 0.0, 1.0, 30)
    width, height = 200, 100
    buffer = render(view, width, height)

    assert view.plane_coordinate(0, 50, width, height) == (-2.0, 0.0)
    assert view.plane_coordinate(100, 0, width, height) == (0.0, -2.0)
    for px, py in [(0, 0), (37, 81), (150, 12), (199, 99)]:
        x0, y0 = view.plane_coordinate(px, py, width, height)
        assert buffer.iteration_at(px, py).iteration_count == escape_time(x0, y0, 30)


def test_numpy_integer_sizes_are_accepted(default_view):
    buffer = render(default_view, np.int64(8), np.int32(6))
    assert buffer.rgba.shape == (6, 8, 4)


@pytest.mark.parametrize("viewport, width, height", [
    (Viewport(max_iter=0), 10, 10),
    (Viewport(max_iter=-5), 10, 10),
    (Viewport(max_iter=2.5), 10, 10),
    (Viewport(max_iter=True), 10, 10),
    (Viewport(), 0, 10),
    (Viewport(), 10, -1),
    (Viewport(), 10.0, 10),
    (Viewport(zoom=0.0), 10, 10),
    (Viewport(zoom=-1.0), 10, 10),
    (Viewport(zoom=math.nan), 10, 10),
    (Viewport(center_real=math.inf), 10, 10),
    (Viewport(center_imag=math.nan), 10, 10),
])
def test_invalid_configuration(viewport, width, height):
    with pytest.raises(InvalidConfiguration):
        render(viewport, width, height)


def test_unknown_colormap_is_invalid(default_view):
    with pytest.raises(InvalidConfiguration):
        render(default_view, 10, 10, colormap='Plasma')


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError):
        render(Viewport(max_iter=0), 10, 10)
