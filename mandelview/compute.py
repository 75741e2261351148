"""
Mandelbrot computation functions using Numba JIT compilation.

This module contains the performance-critical computation functions
that are JIT-compiled for speed. These functions handle:
- Mapping pixels to points of the complex plane
- Escape-time iteration of z² + c
- Colormap application into an RGBA buffer

Everything here runs serially on the calling thread. Kernels are compiled
without parallel or fastmath flags, so identical inputs always produce
identical output.
"""

import numpy as np
from numba import jit


# Width of the visible real axis at zoom 1, in plane units
BASE_SPAN = 4.0

# |z|² threshold, i.e. escape radius 2
ESCAPE_RADIUS_SQ = 4.0


@jit(nopython=True, cache=True)
def pixel_to_plane(px, py, width, height, center_real, center_imag, zoom):
    """
    Convert a pixel coordinate to a point of the complex plane.

    The real axis spans BASE_SPAN / zoom across the image width and the
    imaginary axis spans BASE_SPAN / zoom across the image height, so
    non-square images are stretched.

    Returns:
        (x0, y0): Real and imaginary parts of c
    """
    x0 = (px - width / 2) * (BASE_SPAN / width) / zoom + center_real
    y0 = (py - height / 2) * (BASE_SPAN / height) / zoom + center_imag
    return x0, y0


@jit(nopython=True, cache=True)
def escape_time(x0, y0, max_iter):
    """
    Count iterations of z² + c (z starting at 0) before |z| exceeds 2.

    Args:
        x0, y0: Real and imaginary parts of c
        max_iter: Maximum iteration count before assuming point is in set

    Returns:
        Iteration count in [0, max_iter]. max_iter means the point did
        not escape.
    """
    x = 0.0
    y = 0.0
    iteration = 0
    while x * x + y * y <= ESCAPE_RADIUS_SQ and iteration < max_iter:
        x_temp = x * x - y * y + x0
        y = 2 * x * y + y0
        x = x_temp
        iteration += 1
    return iteration


@jit(nopython=True, cache=True)
def compute_iterations(center_real, center_imag, zoom, width, height, max_iter):
    """
    Compute escape iteration counts for every pixel of a view.

    Args:
        center_real, center_imag: Plane point at the image center
        zoom: Magnification (1 shows a real-axis span of 4)
        width, height: Output image dimensions in pixels
        max_iter: Maximum iteration count

    Returns:
        2D numpy array (height, width) of int64 iteration counts,
        row-major with row 0 at the top.
    """
    result = np.zeros((height, width), dtype=np.int64)

    for py in range(height):
        for px in range(width):
            x0, y0 = pixel_to_plane(px, py, width, height,
                                    center_real, center_imag, zoom)
            result[py, px] = escape_time(x0, y0, max_iter)

    return result


@jit(nopython=True, cache=True)
def apply_colormap(data, colormap, out):
    """
    Apply a colormap to iteration data.

    Args:
        data: 2D array of iteration counts from compute_iterations
        colormap: (max_iter + 1)x3 array of RGB colors (uint8), indexed by count
        out: Output RGBA image array (modified in place)
    """
    height, width = data.shape

    for py in range(height):
        for px in range(width):
            idx = data[py, px]
            out[py, px, 0] = colormap[idx, 0]
            out[py, px, 1] = colormap[idx, 1]
            out[py, px, 2] = colormap[idx, 2]
            out[py, px, 3] = 255


def warmup_jit(colormap):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on first actual use.

    Args:
        colormap: A colormap array to use for warming up apply_colormap
    """
    max_iter = colormap.shape[0] - 1
    data = compute_iterations(-0.5, 0.0, 1.0, 10, 10, max_iter)
    dummy = np.zeros((10, 10, 4), dtype=np.uint8)
    apply_colormap(data, colormap, dummy)
