"""View state: which region of the complex plane is on screen."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ZOOM = 1.0


@dataclass(frozen=True)
class ViewState:
    """Zoom, pan offset and iteration budget for one frame.

    Instances are immutable; the controller replaces its current view on
    every transition, so any value handed to the renderer is a stable
    snapshot for the whole frame.
    """

    zoom: float
    center_x: float
    center_y: float
    max_iterations: int

    @classmethod
    def initial(cls, canvas_width: int, canvas_height: int, max_iterations: int) -> "ViewState":
        """Startup view: unit zoom, centered on the canvas half-extent."""
        return cls(
            zoom=DEFAULT_ZOOM,
            center_x=canvas_width / 2.0,
            center_y=canvas_height / 2.0,
            max_iterations=max_iterations,
        )
