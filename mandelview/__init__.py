"""
Mandelbrot Set Viewer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled escape-time computation.

Quick Start:
    from mandelview import run
    run()

Or from command line:
    python -m mandelview

Rendering without a window:
    from mandelview import Viewport, render
    buffer = render(Viewport(-0.5, 0.0, zoom=1.0, max_iter=100), 800, 600)

Package Structure:
    - compute.py: JIT-compiled escape-time computation functions
    - colormaps.py: HSL hue gradients indexed by iteration count
    - viewport.py: Viewport value object and pan/zoom controller
    - renderer.py: render() entry point producing RGBA pixel buffers
    - app.py: Pygame window, event loop and command line

Controls:
    - Scroll: Zoom in/out at mouse position
    - Drag: Pan around
    - Up/Down: Double/halve the iteration budget
    - C: Cycle colormaps
    - S: Save the current frame as PNG
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, MandelbrotApp
from .renderer import IterationResult, PixelBuffer, render
from .viewport import InvalidConfiguration, Viewport, ViewportController
from .colormaps import COLORMAPS, get_colormap, hsl_to_rgb, color_of, list_colormap_names

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotApp",
    "render",
    "PixelBuffer",
    "IterationResult",
    "Viewport",
    "ViewportController",
    "InvalidConfiguration",
    "COLORMAPS",
    "get_colormap",
    "hsl_to_rgb",
    "color_of",
    "list_colormap_names",
]
