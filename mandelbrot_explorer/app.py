"""
Main application module for the Mandelbrot explorer.

Contains the ExplorerApp class which handles:
- Display setup and the main loop
- Draining input events into the zoom/pan controller
- Rendering a full frame every pass of the loop
- Frame pacing
"""

import logging

from .compute import warmup_jit
from .config import ExplorerConfig
from .controller import ZoomPanController
from .display import DisplayUnavailableError, PygameDisplay
from .renderer import FrameRenderer

logger = logging.getLogger(__name__)


CAPTION = "Mandelbrot - Scroll to zoom, Up/Down iterations, R to reset"


class ExplorerApp:
    """
    Main application class for the Mandelbrot explorer.

    Each pass of the loop applies every pending input event in order, then
    renders one full frame from the resulting view. Quit or Escape ends the
    loop before the next frame.
    """

    def __init__(self, config=None, display=None):
        """
        Initialize the application.

        Args:
            config: ExplorerConfig (default: built-in defaults)
            display: DisplaySurface to draw into (default: a pygame window)
        """
        self.config = (config or ExplorerConfig()).validate()
        self.display = display or PygameDisplay(
            self.config.canvas_width, self.config.canvas_height
        )
        self.controller = ZoomPanController(self.config)
        self.renderer = FrameRenderer(self.config)
        self._captioned_view = None

    @property
    def view(self):
        return self.controller.view

    def run(self):
        """Run the application main loop until quit."""
        try:
            self.display.open()
            self._warmup()
            while self.step():
                self.display.tick(self.config.frame_rate_cap)
        finally:
            self.display.close()
        logger.info("Rendered %d frames", self.renderer.frames_rendered)

    def _warmup(self):
        """Compile the kernels before the first frame."""
        self.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        logger.info("JIT warmup complete")

    def step(self):
        """
        One pass of the loop: drain events, then render a frame.

        Returns:
            False once the explorer has been asked to quit
        """
        if not self.controller.handle_events(self.display.poll_events()):
            return False

        view = self.controller.view
        self.renderer.render(self.display, view)
        self._update_caption(view)
        return True

    def _update_caption(self, view):
        if view == self._captioned_view:
            return
        self._captioned_view = view
        self.display.set_caption(
            f"{CAPTION} | zoom {view.zoom:.3g} | iterations {view.max_iterations}"
        )


def run(config=None):
    """
    Run the Mandelbrot explorer in a pygame window.

    Args:
        config: ExplorerConfig (default: built-in defaults)
    """
    app = ExplorerApp(config)
    try:
        app.run()
    except DisplayUnavailableError as e:
        logger.error("%s", e)
        raise SystemExit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
