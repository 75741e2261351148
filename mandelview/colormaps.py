"""
Colormap definitions for Mandelbrot visualization.

Colors come from an HSL gradient: the escape iteration count picks the hue,
saturation is full and lightness sits in the middle. Each colormap function
returns a numpy array of shape (max_iter + 1, 3) with RGB values (uint8),
indexed directly by iteration count.

Channel values are rounded half up (floor(v * 255 + 0.5)), so 0.5 -> 128.

To add a new colormap:
1. Define a create_colormap_xxx(max_iter) function that returns the color array
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import math

import numpy as np
from numba import jit


@jit(nopython=True, cache=True)
def hue2rgb(p, q, t):
    """Evaluate one RGB channel of the piecewise-linear HSL conversion."""
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


@jit(nopython=True, cache=True)
def _to_byte(v):
    return int(math.floor(v * 255 + 0.5))


@jit(nopython=True, cache=True)
def hsl_to_rgb(h, s, l):
    """
    Convert an HSL color to RGB.

    Args:
        h: Hue in [0, 1)
        s: Saturation in [0, 1]
        l: Lightness in [0, 1]

    Returns:
        (r, g, b) tuple of ints in [0, 255]
    """
    if s == 0:
        # Achromatic
        r = l
        g = l
        b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = hue2rgb(p, q, h + 1 / 3)
        g = hue2rgb(p, q, h)
        b = hue2rgb(p, q, h - 1 / 3)

    return _to_byte(r), _to_byte(g), _to_byte(b)


@jit(nopython=True, cache=True)
def color_of(iteration_count, max_iter, black_interior=False):
    """
    Map an escape iteration count to an RGB color.

    Points that never escaped (iteration_count == max_iter) get hue 0, the
    same red the first escape band uses, unless black_interior is set.
    """
    if iteration_count == max_iter:
        if black_interior:
            return 0, 0, 0
        hue = 0.0
    else:
        hue = iteration_count / max_iter * 360.0
    return hsl_to_rgb(hue / 360.0, 1.0, 0.5)


def _create_hue_table(max_iter, black_interior):
    colors = np.zeros((max_iter + 1, 3), dtype=np.uint8)
    for i in range(max_iter + 1):
        colors[i] = color_of(i, max_iter, black_interior)
    return colors


def create_colormap_hue(max_iter):
    """
    Hue colormap: red -> yellow -> green -> cyan -> blue -> magenta.

    One full trip around the color wheel over the iteration budget. Points
    inside the set share hue 0 with the fastest escapes.
    """
    return _create_hue_table(max_iter, False)


def create_colormap_hue_black_interior(max_iter):
    """Hue colormap with the inside of the set painted black."""
    return _create_hue_table(max_iter, True)


# Registry of all available colormaps.
# Keys are display names, values are factory functions taking max_iter.
COLORMAPS = {
    'Hue': create_colormap_hue,
    'Hue / black interior': create_colormap_hue_black_interior,
}

DEFAULT_COLORMAP = 'Hue'


def get_colormap(name, max_iter):
    """
    Get a colormap by name.

    Args:
        name: Key from COLORMAPS dictionary
        max_iter: Iteration budget the table is built for

    Returns:
        Colormap array (max_iter + 1, 3) of uint8 RGB values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name](max_iter)


def get_default_colormap(max_iter):
    """Get the default colormap (Hue)."""
    return create_colormap_hue(max_iter)


def list_colormap_names():
    """Get list of available colormap names."""
    return list(COLORMAPS.keys())
