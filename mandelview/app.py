"""
Main application module for the Mandelbrot viewer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Forwarding mouse and keyboard input to the ViewportController
- Requesting renders and blitting the resulting pixel buffers

All fractal work happens in renderer.render; this module only moves
viewport snapshots in and pixel buffers out.
"""

import os
from argparse import ArgumentParser
from datetime import datetime

import pygame

from .colormaps import DEFAULT_COLORMAP, get_default_colormap, list_colormap_names
from .compute import warmup_jit
from .renderer import render
from .viewport import (
    DEFAULT_CENTER,
    DEFAULT_MAX_ITER,
    DEFAULT_ZOOM,
    InvalidConfiguration,
    Viewport,
    ViewportController,
)


CAPTION = "Mandelbrot Set - Scroll to zoom, drag to pan, R to reset"


class MandelbrotApp:
    """
    Main application class for the Mandelbrot viewer.

    Handles the pygame window and event loop. Renders are synchronous:
    input only marks a render as pending, and once input has been quiet
    for RENDER_DELAY_MS the latest viewport is rendered. Intermediate
    viewports are never rendered.
    """

    # Default configuration
    DEFAULT_WIDTH = 800
    DEFAULT_HEIGHT = 600
    DEFAULT_MAX_ITER = DEFAULT_MAX_ITER
    RENDER_DELAY_MS = 25  # Delay before starting render after user action

    def __init__(self, width=None, height=None, max_iter=None, viewport=None,
                 colormap=DEFAULT_COLORMAP):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default 800)
            height: Window height in pixels (default 600)
            max_iter: Iteration budget (default 100), overrides viewport.max_iter
            viewport: Initial view (default centered on -0.5 + 0i at zoom 1)
            colormap: Name of the colormap to start with
        """
        self.width = width or self.DEFAULT_WIDTH
        self.height = height or self.DEFAULT_HEIGHT

        viewport = viewport or Viewport()
        if max_iter is not None:
            viewport = viewport.with_max_iter(max_iter)
        self.controller = ViewportController(self.width, self.height, viewport)

        self.colormap_names = list_colormap_names()
        self.colormap = colormap

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Last successfully rendered frame
        self.current_surface = None

        # Render timing
        self.last_action_time = 0
        self.pending_render = False

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup_and_initial_render()

        self.running = True
        while self.running:
            current_time = pygame.time.get_ticks()

            self._handle_events(current_time)
            self._maybe_render(current_time)
            self._draw()

            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(CAPTION)
        self.clock = pygame.time.Clock()

    def _warmup_and_initial_render(self):
        """Warm up JIT and do initial render."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(get_default_colormap(10))
        self._render_now()
        pygame.display.set_caption(CAPTION)

    def _handle_events(self, current_time):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            changed = False
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEWHEEL:
                mx, my = pygame.mouse.get_pos()
                # pygame reports scroll-up as positive y
                changed = self.controller.scroll(mx, my, -event.y)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                changed = self.controller.pointer_down(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                changed = self.controller.pointer_up()
            elif event.type == pygame.MOUSEMOTION:
                changed = self.controller.pointer_move(*event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                changed = self.controller.pointer_leave()
            elif event.type == pygame.KEYDOWN:
                changed = self._handle_key(event)

            if changed:
                self.last_action_time = current_time
                self.pending_render = True

    def _handle_key(self, event):
        """Handle keyboard input. Returns True if a new render is needed."""
        if event.key == pygame.K_r:
            return self.controller.reset()
        elif event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_UP:
            return self.controller.double_iterations()
        elif event.key == pygame.K_DOWN:
            return self.controller.halve_iterations()
        elif event.key == pygame.K_c:
            idx = self.colormap_names.index(self.colormap)
            self.colormap = self.colormap_names[(idx + 1) % len(self.colormap_names)]
            return True
        elif event.key == pygame.K_s:
            self._save_image()
        return False

    def _maybe_render(self, current_time):
        """Render the latest viewport once input has settled."""
        if self.pending_render and current_time - self.last_action_time > self.RENDER_DELAY_MS:
            self.pending_render = False
            pygame.display.set_caption("Computing...")
            self._render_now()
            pygame.display.set_caption(CAPTION)

    def _render_now(self):
        viewport = self.controller.viewport
        try:
            buffer = render(viewport, self.width, self.height, self.colormap)
        except InvalidConfiguration as e:
            # Keep showing the last good frame
            print(f"Warning: render skipped: {e}")
            return
        self.current_surface = pygame.surfarray.make_surface(buffer.rgb.swapaxes(0, 1))

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()

    def _save_image(self):
        """Save the displayed frame as a PNG in the working directory."""
        if self.current_surface is None:
            return
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        pygame.image.save(self.current_surface, filename)
        pygame.display.set_caption(f"Saved: {os.path.basename(filename)} - Mandelbrot Set")
        print(f"Image saved to: {filename}")


def build_parser():
    parser = ArgumentParser(prog="mandelview", description="Interactive Mandelbrot set viewer.")

    parser.add_argument('--width', type=int, dest='width',
                        help='window width in pixels', metavar='WIDTH',
                        default=MandelbrotApp.DEFAULT_WIDTH)

    parser.add_argument('--height', type=int, dest='height',
                        help='window height in pixels', metavar='HEIGHT',
                        default=MandelbrotApp.DEFAULT_HEIGHT)

    parser.add_argument('--max-iterations', type=int, dest='max_iter',
                        help='iteration budget per pixel', metavar='MAX_ITERATIONS',
                        default=DEFAULT_MAX_ITER)

    parser.add_argument('--center-real', type=float, dest='center_real',
                        help='real part of the starting view center', metavar='X',
                        default=DEFAULT_CENTER[0])

    parser.add_argument('--center-imag', type=float, dest='center_imag',
                        help='imaginary part of the starting view center', metavar='Y',
                        default=DEFAULT_CENTER[1])

    parser.add_argument('--zoom', type=float, dest='zoom',
                        help='starting zoom; 1 shows a real-axis span of 4', metavar='ZOOM',
                        default=DEFAULT_ZOOM)

    parser.add_argument('--colormap', type=str, dest='colormap',
                        choices=list_colormap_names(), default=DEFAULT_COLORMAP,
                        help='color scheme for escape counts')

    return parser


def run(width=None, height=None, max_iter=None, viewport=None, colormap=DEFAULT_COLORMAP):
    """
    Run the Mandelbrot viewer.

    Args:
        width: Window width (default 800)
        height: Window height (default 600)
        max_iter: Iteration budget (default 100)
        viewport: Starting view (default Viewport())
        colormap: Starting colormap name
    """
    app = MandelbrotApp(width, height, max_iter, viewport, colormap)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)
    if opt.width < 1 or opt.height < 1:
        parser.error("--width and --height must be positive.")
    if opt.max_iter < 1:
        parser.error("--max-iterations must be at least 1.")
    if opt.zoom <= 0:
        parser.error("--zoom must be positive.")

    viewport = Viewport(opt.center_real, opt.center_imag, opt.zoom, opt.max_iter)
    run(opt.width, opt.height, viewport=viewport, colormap=opt.colormap)
