"""
Zoom/pan controller for the Mandelbrot explorer.

Owns the current ViewState and replaces it in response to input events:
- Up / Down: raise or lower the iteration budget by one step
- R: reset to the startup view
- Wheel: zoom in (wheel up) or out (wheel down), anchored at the last
  known pointer position
- Pointer motion: remember the pointer for the next zoom
- Escape / window close: stop the explorer
"""

import logging
import math
import sys
from dataclasses import replace

from .config import ANCHOR_REFERENCE
from .events import (
    KEY_DECREASE_ITERATIONS,
    KEY_ESCAPE,
    KEY_INCREASE_ITERATIONS,
    KEY_RESET,
    KeyDownEvent,
    PointerMoveEvent,
    QuitEvent,
    WheelEvent,
)
from .view import ViewState

logger = logging.getLogger(__name__)


class ZoomPanController:
    """
    State machine over a single, always-valid ViewState.

    After every transition `view.zoom > 0` and
    `view.max_iterations >= config.iteration_step`.

    Usage:
        controller = ZoomPanController(config)
        controller.handle_events(display.poll_events())
        if controller.running:
            renderer.render(display, controller.view)
    """

    def __init__(self, config):
        """
        Args:
            config: Validated ExplorerConfig
        """
        self.config = config
        self.width = config.canvas_width
        self.height = config.canvas_height
        self.defaults = ViewState.initial(
            self.width, self.height, config.initial_max_iterations
        )
        self.view = self.defaults
        self.last_pointer = (0, 0)
        self.running = True

    def handle_events(self, events):
        """
        Apply a batch of events in arrival order.

        Stops at the first quit request; later events in the batch are
        not applied.

        Returns:
            True while the explorer should keep running
        """
        for event in events:
            if not self.handle_event(event):
                break
        return self.running

    def handle_event(self, event):
        """Apply one event. Returns True while the explorer should keep running."""
        if not self.running:
            return False

        if isinstance(event, QuitEvent):
            self.quit()
        elif isinstance(event, KeyDownEvent):
            self._handle_key(event.key)
        elif isinstance(event, WheelEvent):
            self._handle_wheel(event.direction)
        elif isinstance(event, PointerMoveEvent):
            self.pointer_move(event.x, event.y)
        return self.running

    def _handle_key(self, key):
        if key == KEY_ESCAPE:
            self.quit()
        elif key == KEY_INCREASE_ITERATIONS:
            self.increase_iterations()
        elif key == KEY_DECREASE_ITERATIONS:
            self.decrease_iterations()
        elif key == KEY_RESET:
            self.reset()

    def _handle_wheel(self, direction):
        if direction > 0:
            self.zoom_in()
        elif direction < 0:
            self.zoom_out()

    # Transitions

    def increase_iterations(self):
        self._set_max_iterations(self.view.max_iterations + self.config.iteration_step)

    def decrease_iterations(self):
        self._set_max_iterations(self.view.max_iterations - self.config.iteration_step)

    def _set_max_iterations(self, value):
        value = max(value, self.config.iteration_step)
        self.view = replace(self.view, max_iterations=value)
        logger.debug("Max iterations: %d", value)

    def reset(self):
        """Restore the startup view."""
        self.view = self.defaults
        logger.debug("View reset")

    def zoom_in(self):
        """Narrow the window by one notch around the last pointer position."""
        self._zoom(1.0 / (1.0 + self.config.zoom_speed))

    def zoom_out(self):
        """Widen the window by one notch around the last pointer position."""
        self._zoom(1.0 + self.config.zoom_speed)

    def _zoom(self, zoom_factor):
        """
        Scale the view by `zoom_factor` and recenter around the pointer.

        Args:
            zoom_factor: Multiplier applied to view.zoom (< 1 zooms in)
        """
        px, py = self.last_pointer
        old = self.view
        zoom = min(max(old.zoom * zoom_factor, sys.float_info.min), sys.float_info.max)
        if zoom == old.zoom:
            return
        zoom_factor = zoom / old.zoom

        if self.config.anchor_mode == ANCHOR_REFERENCE:
            center_x, center_y = self._recenter_reference(px, py, zoom_factor, zoom)
        else:
            center_x = self._anchor_axis(px, old.center_x, self.width, old.zoom, zoom)
            center_y = self._anchor_axis(py, old.center_y, self.height, old.zoom, zoom)

        # Past the float range the view stays where it is
        if not (math.isfinite(center_x) and math.isfinite(center_y)):
            logger.debug("Zoom limit reached at %.6g", old.zoom)
            return

        self.view = replace(old, zoom=zoom, center_x=center_x, center_y=center_y)
        logger.debug(
            "Zoom %.6g at (%d, %d), center (%.3f, %.3f)",
            zoom, px, py, center_x, center_y
        )

    @staticmethod
    def _anchor_axis(pointer, center, extent, old_zoom, new_zoom):
        """
        New center offset that keeps the pointer's point fixed on one axis.

        The mapping is linear in (pointer + center - extent / 2) * zoom, so
        that product must be the same before and after the zoom.
        """
        half = extent / 2.0
        return (pointer + center - half) * old_zoom / new_zoom - pointer + half

    def _recenter_reference(self, px, py, zoom_factor, zoom):
        """Pointer normalized to [-1, 1] about the canvas center, then shifted."""
        half_w = self.width / 2.0
        half_h = self.height / 2.0
        norm_x = (px - half_w) / half_w
        norm_y = (py - half_h) / half_h
        center_x = self.view.center_x + norm_x * self.width * (1.0 - zoom_factor) / zoom
        center_y = self.view.center_y + norm_y * self.height * (1.0 - zoom_factor) / zoom
        return center_x, center_y

    def pointer_move(self, x, y):
        self.last_pointer = (x, y)

    def quit(self):
        if self.running:
            logger.info("Quit requested")
        self.running = False
