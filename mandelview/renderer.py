"""
Synchronous Mandelbrot renderer.

``render`` is the single entry point the display shell calls: it takes a
viewport snapshot and an output size and returns a freshly allocated
PixelBuffer. It validates its inputs before doing any pixel work, holds no
state between calls and performs no I/O.

Usage:
    buffer = render(Viewport(-0.5, 0.0, zoom=1.0, max_iter=100), 800, 600)
    surface = pygame.surfarray.make_surface(buffer.rgb.swapaxes(0, 1))
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .colormaps import COLORMAPS, DEFAULT_COLORMAP, get_colormap
from .compute import apply_colormap, compute_iterations
from .viewport import InvalidConfiguration, validate


class IterationResult(NamedTuple):
    iteration_count: int
    escaped: bool


@dataclass(frozen=True)
class PixelBuffer:
    """
    RGBA image produced by one render, plus the iteration counts behind it.

    Attributes:
        rgba: uint8 array (height, width, 4), row-major, origin top-left
        iterations: int64 array (height, width) of escape counts
        max_iter: Iteration budget the buffer was rendered with
    """

    rgba: np.ndarray
    iterations: np.ndarray
    max_iter: int

    @property
    def width(self):
        return self.rgba.shape[1]

    @property
    def height(self):
        return self.rgba.shape[0]

    @property
    def rgb(self):
        """View of the color channels without alpha."""
        return self.rgba[:, :, :3]

    @property
    def escaped(self):
        """Boolean mask, True where the point escaped before max_iter."""
        return self.iterations < self.max_iter

    def iteration_at(self, px, py):
        count = int(self.iterations[py, px])
        return IterationResult(count, count < self.max_iter)

    def pixel_at(self, px, py):
        return tuple(int(v) for v in self.rgba[py, px])

    def tobytes(self):
        return self.rgba.tobytes()


def render(viewport, width, height, colormap=DEFAULT_COLORMAP):
    """
    Render the Mandelbrot set for a viewport.

    Args:
        viewport: Center, zoom and iteration budget to render
        width, height: Output image dimensions in pixels
        colormap: Name of a colormap from COLORMAPS

    Returns:
        A new PixelBuffer; identical arguments give identical buffers.

    Raises:
        InvalidConfiguration if the viewport, size or colormap is unusable
    """
    validate(viewport, width, height)
    if colormap not in COLORMAPS:
        raise InvalidConfiguration(
            f"unknown colormap {colormap!r}, expected one of {', '.join(COLORMAPS)}"
        )

    width, height, max_iter = int(width), int(height), int(viewport.max_iter)
    palette = get_colormap(colormap, max_iter)
    iterations = compute_iterations(
        float(viewport.center_real), float(viewport.center_imag), float(viewport.zoom),
        width, height, max_iter
    )
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    apply_colormap(iterations, palette, rgba)
    return PixelBuffer(rgba=rgba, iterations=iterations, max_iter=max_iter)
