"""Viewport state and the pan/zoom rules that update it."""

import math
import numbers
from dataclasses import dataclass, replace
from enum import Enum

from .compute import BASE_SPAN, pixel_to_plane


DEFAULT_CENTER = (-0.5, 0.0)
DEFAULT_ZOOM = 1.0
DEFAULT_MAX_ITER = 100

# Zoom multiplier applied per scroll step
ZOOM_STEP = 1.1


class InvalidConfiguration(ValueError):
    """Raised when a render is requested with parameters that cannot produce an image."""


@dataclass(frozen=True)
class Viewport:
    """Region of the complex plane to render and the iteration budget to use."""

    center_real: float = DEFAULT_CENTER[0]
    center_imag: float = DEFAULT_CENTER[1]
    zoom: float = DEFAULT_ZOOM
    max_iter: int = DEFAULT_MAX_ITER

    def scale(self, width):
        """Plane units per pixel along the real axis for an image ``width`` pixels wide."""
        return BASE_SPAN / width / self.zoom

    def plane_coordinate(self, px, py, width, height):
        """Same mapping the render kernel uses for pixel (px, py)."""
        return pixel_to_plane(px, py, width, height,
                              self.center_real, self.center_imag, self.zoom)

    def zoomed_at(self, px, py, width, height, zoom_in):
        """Zoom by ZOOM_STEP keeping the plane point under pixel (px, py) fixed."""
        x0, y0 = self.plane_coordinate(px, py, width, height)
        zoom = self.zoom * ZOOM_STEP if zoom_in else self.zoom / ZOOM_STEP
        # Offset of the pixel from the view center at the new zoom
        off_x, off_y = pixel_to_plane(px, py, width, height, 0.0, 0.0, zoom)
        return replace(self, center_real=x0 - off_x, center_imag=y0 - off_y, zoom=zoom)

    def panned(self, dx, dy, width, height):
        """Move the view so the image follows a drag of (dx, dy) pixels."""
        return replace(
            self,
            center_real=self.center_real - dx * (BASE_SPAN / width) / self.zoom,
            center_imag=self.center_imag - dy * (BASE_SPAN / height) / self.zoom,
        )

    def with_max_iter(self, max_iter):
        return replace(self, max_iter=max_iter)


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate(viewport, width, height):
    """Raise InvalidConfiguration unless the viewport and size can be rendered."""

    if not _is_integer(viewport.max_iter):
        raise InvalidConfiguration(f"max_iter must be an integer, got {viewport.max_iter!r}")
    if viewport.max_iter < 1:
        raise InvalidConfiguration(f"max_iter must be at least 1, got {viewport.max_iter}")
    if not (_is_integer(width) and _is_integer(height)):
        raise InvalidConfiguration(f"image size must be integers, got {width!r}x{height!r}")
    if width < 1 or height < 1:
        raise InvalidConfiguration(f"image size must be positive, got {width}x{height}")
    if not math.isfinite(viewport.zoom) or viewport.zoom <= 0:
        raise InvalidConfiguration(f"zoom must be a positive finite number, got {viewport.zoom}")
    if not (math.isfinite(viewport.center_real) and math.isfinite(viewport.center_imag)):
        raise InvalidConfiguration(
            f"center must be finite, got ({viewport.center_real}, {viewport.center_imag})"
        )


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class ViewportController:
    """
    Owns the current viewport and turns pointer input into new viewports.

    Handlers return True when the viewport changed and a new render is due.
    The controller never renders; callers pass ``controller.viewport`` (an
    immutable snapshot) to ``render``.
    """

    def __init__(self, width, height, viewport=None):
        self.width = width
        self.height = height
        self.initial_viewport = viewport or Viewport()
        self.viewport = self.initial_viewport
        self.state = DragState.IDLE
        self._last_pos = None

    @property
    def dragging(self):
        return self.state is DragState.DRAGGING

    def scroll(self, px, py, delta_y):
        """Scroll up (negative delta) zooms in, anything else zooms out."""
        self.viewport = self.viewport.zoomed_at(px, py, self.width, self.height, delta_y < 0)
        return True

    def pointer_down(self, px, py):
        self.state = DragState.DRAGGING
        self._last_pos = (px, py)
        return False

    def pointer_move(self, px, py):
        if self.state is not DragState.DRAGGING:
            return False
        dx = px - self._last_pos[0]
        dy = py - self._last_pos[1]
        self._last_pos = (px, py)
        if dx == 0 and dy == 0:
            return False
        self.viewport = self.viewport.panned(dx, dy, self.width, self.height)
        return True

    def pointer_up(self):
        self.state = DragState.IDLE
        self._last_pos = None
        return False

    # Leaving the window ends a drag the same way releasing the button does
    pointer_leave = pointer_up

    def reset(self):
        self.viewport = replace(self.initial_viewport, max_iter=self.viewport.max_iter)
        return True

    def double_iterations(self):
        self.viewport = self.viewport.with_max_iter(max(self.viewport.max_iter, 1) * 2)
        return True

    def halve_iterations(self):
        self.viewport = self.viewport.with_max_iter(self.viewport.max_iter // 2)
        return True
