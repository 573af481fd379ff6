"""
Display surfaces the renderer draws into.

A display surface receives pixel colors, presents finished frames and
delivers input events. Two implementations are provided:
- PygameDisplay: a pygame window (the interactive explorer)
- BufferDisplay: an in-memory frame buffer with scripted events
  (headless runs and tests)
"""

import logging
from collections import deque

import numpy as np
import pygame

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

logger = logging.getLogger(__name__)


class DisplayUnavailableError(RuntimeError):
    """Raised when the display surface cannot be created."""


class DisplaySurface:
    """
    Interface between the explorer and whatever shows its frames.

    Subclasses must implement put_pixel, present and poll_events.

    open, close, set_caption and tick are optional hooks that do nothing
    by default. close is called even when open raised, so it must cope
    with a surface that never opened.

    put_frame writes a whole RGB frame; the default goes pixel by pixel,
    subclasses may override it with a bulk copy.
    """

    def open(self):
        pass

    def close(self):
        pass

    def poll_events(self):
        """Return all pending input events (never blocks)."""
        raise NotImplementedError

    def put_pixel(self, x, y, color):
        raise NotImplementedError

    def put_frame(self, rgb):
        """
        Write a full frame.

        Args:
            rgb: (height, width, 3) uint8 array, row-major
        """
        height, width = rgb.shape[:2]
        for y in range(height):
            for x in range(width):
                r, g, b = rgb[y, x]
                self.put_pixel(x, y, (int(r), int(g), int(b)))

    def present(self):
        raise NotImplementedError

    def set_caption(self, text):
        pass

    def tick(self, frame_rate_cap):
        """Pace the loop; frame_rate_cap of 0 means no limit."""
        pass


# pygame key -> explorer key code
_KEY_MAP = {
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_UP: KEY_INCREASE_ITERATIONS,
    pygame.K_DOWN: KEY_DECREASE_ITERATIONS,
    pygame.K_r: KEY_RESET,
}


def translate_pygame_event(event):
    """
    Convert a pygame event to an explorer event.

    Returns:
        The explorer event, or None for anything the explorer ignores
    """
    if event.type == pygame.QUIT:
        return QuitEvent()
    if event.type == pygame.KEYDOWN:
        key = _KEY_MAP.get(event.key)
        if key is None:
            return None
        return KeyDownEvent(key)
    if event.type == pygame.MOUSEWHEEL:
        if event.y == 0:
            return None
        return WheelEvent(1 if event.y > 0 else -1)
    if event.type == pygame.MOUSEMOTION:
        x, y = event.pos
        return PointerMoveEvent(x, y)
    return None


class PygameDisplay(DisplaySurface):
    """A pygame window of fixed size."""

    def __init__(self, width, height, caption="Mandelbrot"):
        self.width = width
        self.height = height
        self.caption = caption
        self.screen = None
        self.clock = None

    def open(self):
        """Initialize pygame and create the window."""
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (self.width, self.height),
                pygame.DOUBLEBUF
            )
        except pygame.error as e:
            raise DisplayUnavailableError(f"Could not create window: {e}") from e
        pygame.display.set_caption(self.caption)
        self.clock = pygame.time.Clock()
        logger.info("Opened %dx%d window", self.width, self.height)

    def close(self):
        pygame.quit()

    def poll_events(self):
        events = []
        for event in pygame.event.get():
            translated = translate_pygame_event(event)
            if translated is not None:
                events.append(translated)
        return events

    def put_pixel(self, x, y, color):
        self.screen.set_at((x, y), color)

    def put_frame(self, rgb):
        # surfarray is indexed [x, y]
        pygame.surfarray.blit_array(self.screen, rgb.swapaxes(0, 1))

    def present(self):
        pygame.display.flip()

    def set_caption(self, text):
        pygame.display.set_caption(text)

    def tick(self, frame_rate_cap):
        self.clock.tick(frame_rate_cap)


class BufferDisplay(DisplaySurface):
    """
    In-memory display.

    Frames land in `pixels`, a (height, width, 3) uint8 array. Each call to
    poll_events returns the next scripted batch; once the script runs out,
    polling returns [] (or a single QuitEvent when quit_when_done is set).

    Attributes:
        pixels: Current frame buffer
        frames_presented: Number of present() calls
        presented: Copies of each presented frame (when keep_frames is set)
        caption: Last caption set
    """

    def __init__(self, width, height, event_batches=(), quit_when_done=True, keep_frames=False):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self.event_batches = deque(list(batch) for batch in event_batches)
        self.quit_when_done = quit_when_done
        self.keep_frames = keep_frames
        self.frames_presented = 0
        self.presented = []
        self.caption = ""

    def poll_events(self):
        if self.event_batches:
            return self.event_batches.popleft()
        if self.quit_when_done:
            return [QuitEvent()]
        return []

    def put_pixel(self, x, y, color):
        self.pixels[y, x] = color

    def put_frame(self, rgb):
        self.pixels[:] = rgb

    def present(self):
        self.frames_presented += 1
        if self.keep_frames:
            self.presented.append(self.pixels.copy())

    def set_caption(self, text):
        self.caption = text
