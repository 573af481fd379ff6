"""
Frame renderer for the Mandelbrot explorer.

Every frame is recomputed in full from the current ViewState:
each pixel is mapped to its point in the complex plane, its escape time
is evaluated against view.max_iterations, the count is colorized, and the
finished frame is written to the display surface and presented.

There is no caching between frames. With parallel=True rows are spread
across threads by Numba; the output is the same as the serial path.
"""

from .colorize import colorize_frame
from .compute import escape_counts_for_view


def compute_frame(view, canvas_width, canvas_height, parallel=False, correct_aspect=False):
    """
    Compute the RGB image for a view without touching any display.

    Args:
        view: ViewState snapshot
        canvas_width, canvas_height: Canvas dimensions in pixels
        parallel: Dispatch rows across threads
        correct_aspect: Scale the vertical span by height / width

    Returns:
        (canvas_height, canvas_width, 3) uint8 array
    """
    counts = escape_counts_for_view(
        view, canvas_width, canvas_height,
        parallel=parallel, correct_aspect=correct_aspect
    )
    return colorize_frame(counts, view.max_iterations)


def render(display_surface, view, canvas_width, canvas_height, parallel=False,
           correct_aspect=False):
    """
    Render one full frame to `display_surface` and present it.

    Returns:
        The RGB array that was written
    """
    rgb = compute_frame(
        view, canvas_width, canvas_height,
        parallel=parallel, correct_aspect=correct_aspect
    )
    display_surface.put_frame(rgb)
    display_surface.present()
    return rgb


class FrameRenderer:
    """
    Renders frames for a fixed canvas and fixed options.

    Usage:
        renderer = FrameRenderer(config)
        renderer.render(display, controller.view)
    """

    def __init__(self, config):
        self.width = config.canvas_width
        self.height = config.canvas_height
        self.parallel = config.parallel
        self.correct_aspect = config.correct_aspect
        self.frames_rendered = 0

    def render(self, display_surface, view):
        rgb = render(
            display_surface, view, self.width, self.height,
            parallel=self.parallel, correct_aspect=self.correct_aspect
        )
        self.frames_rendered += 1
        return rgb
