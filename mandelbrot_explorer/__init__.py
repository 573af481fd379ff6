"""
Mandelbrot Explorer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled computation. The whole frame is recomputed every
pass of the loop from the current zoom, pan offset and iteration budget.

Quick Start:
    from mandelbrot_explorer import run
    run()

Or from command line:
    python -m mandelbrot_explorer

Package Structure:
    - compute.py: JIT-compiled escape-time and coordinate mapping
    - colorize.py: Iteration count to color
    - view.py: ViewState value type
    - events.py: Input events understood by the controller
    - controller.py: Zoom/pan state machine
    - renderer.py: Full-frame rendering
    - display.py: Pygame window and in-memory display surfaces
    - config.py: Startup configuration and settings file loading
    - app.py: Main application and event loop

Controls:
    - Scroll: Zoom in (up) / out (down) at the mouse position
    - Up / Down: Raise / lower the iteration budget
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, ExplorerApp
from .colorize import colorize, colorize_frame
from .compute import ComplexPoint, escape_time, pixel_to_complex
from .config import ConfigError, ExplorerConfig
from .controller import ZoomPanController
from .display import BufferDisplay, DisplayUnavailableError, PygameDisplay
from .renderer import FrameRenderer, compute_frame, render
from .view import ViewState

__version__ = "1.0.0"
__all__ = [
    "run",
    "ExplorerApp",
    "colorize",
    "colorize_frame",
    "ComplexPoint",
    "escape_time",
    "pixel_to_complex",
    "ConfigError",
    "ExplorerConfig",
    "ZoomPanController",
    "BufferDisplay",
    "DisplayUnavailableError",
    "PygameDisplay",
    "FrameRenderer",
    "compute_frame",
    "render",
    "ViewState",
]
