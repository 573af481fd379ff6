"""
Mandelbrot escape-time computation using Numba JIT compilation.

This module contains the performance-critical functions of the explorer.
They are JIT-compiled for speed and handle:
- Escape-time evaluation of a single point
- Mapping of pixel indices to points in the complex plane
- Escape counts for a whole frame (serial or parallel over rows)

Coordinate mapping (base viewport, zoom = 1):
    re = -2.0 + ((x + center_x - width / 2) / width) * 3.0 * zoom
    im = -1.5 + ((y + center_y - height / 2) / height) * 3.0 * zoom

The vertical span and origin are scaled by `aspect` (1.0 keeps the classic
stretch on non-square canvases, height / width corrects it).
"""

from collections import namedtuple

import numpy as np
from numba import jit, prange

from .colorize import colorize_frame


# Base viewport
BASE_RE = -2.0
BASE_IM = -1.5
BASE_SPAN = 3.0

# Squared escape radius (|z| < 2 without a square root)
ESCAPE_RADIUS_SQ = 4.0


ComplexPoint = namedtuple('ComplexPoint', ['re', 'im'])


@jit(nopython=True, cache=True)
def escape_time(c_re, c_im, max_iter):
    """
    Count iterations of z -> z² + c before the orbit escapes.

    Args:
        c_re, c_im: Real and imaginary parts of c
        max_iter: Iteration budget

    Returns:
        Iteration count in [0, max_iter]. A value equal to max_iter means
        the orbit stayed bounded for the whole budget.
    """
    zr = 0.0
    zi = 0.0
    iteration = 0
    while iteration < max_iter and zr * zr + zi * zi < ESCAPE_RADIUS_SQ:
        temp = zr * zr - zi * zi + c_re
        zi = 2.0 * zr * zi + c_im
        zr = temp
        iteration += 1
    return iteration


@jit(nopython=True, cache=True)
def map_pixel(x, y, width, height, zoom, center_x, center_y, aspect):
    """Map pixel (x, y) to (re, im) for the given view parameters."""
    re = BASE_RE + ((x + center_x - width * 0.5) / width) * BASE_SPAN * zoom
    im = BASE_IM * aspect + ((y + center_y - height * 0.5) / height) * BASE_SPAN * aspect * zoom
    return re, im


def aspect_scale(width, height, correct_aspect=False):
    """Vertical span multiplier: 1.0, or height / width when correcting."""
    if correct_aspect:
        return height / width
    return 1.0


def pixel_to_complex(x, y, canvas_width, canvas_height, view, correct_aspect=False):
    """
    Map a pixel index to its point in the complex plane.

    Args:
        x, y: Pixel indices
        canvas_width, canvas_height: Canvas dimensions in pixels
        view: ViewState supplying zoom and center offset
        correct_aspect: Scale the vertical span by height / width

    Returns:
        ComplexPoint(re, im)
    """
    re, im = map_pixel(
        float(x), float(y), float(canvas_width), float(canvas_height),
        float(view.zoom), float(view.center_x), float(view.center_y),
        aspect_scale(canvas_width, canvas_height, correct_aspect)
    )
    return ComplexPoint(re, im)


@jit(nopython=True, cache=True)
def compute_escape_counts(width, height, max_iter, zoom, center_x, center_y, aspect):
    """
    Compute escape counts for every pixel of a frame, row by row.

    Returns:
        2D int64 array of shape (height, width).
    """
    result = np.empty((height, width), dtype=np.int64)
    for py in range(height):
        for px in range(width):
            re, im = map_pixel(px, py, width, height, zoom, center_x, center_y, aspect)
            result[py, px] = escape_time(re, im, max_iter)
    return result


@jit(nopython=True, parallel=True, cache=True)
def compute_escape_counts_parallel(width, height, max_iter, zoom, center_x, center_y, aspect):
    """
    Same as compute_escape_counts, with rows dispatched across threads.

    Each row is written by exactly one worker and the view parameters are
    plain scalars, so the output is identical to the serial kernel.
    """
    result = np.empty((height, width), dtype=np.int64)
    for py in prange(height):
        for px in range(width):
            re, im = map_pixel(px, py, width, height, zoom, center_x, center_y, aspect)
            result[py, px] = escape_time(re, im, max_iter)
    return result


def escape_counts_for_view(view, canvas_width, canvas_height, parallel=False,
                           correct_aspect=False):
    """
    Escape counts for a whole canvas under `view`.

    Args:
        view: ViewState snapshot for this frame
        canvas_width, canvas_height: Canvas dimensions in pixels
        parallel: Dispatch rows across threads
        correct_aspect: Scale the vertical span by height / width

    Returns:
        2D int64 array of shape (canvas_height, canvas_width)
    """
    kernel = compute_escape_counts_parallel if parallel else compute_escape_counts
    return kernel(
        canvas_width, canvas_height, view.max_iterations,
        float(view.zoom), float(view.center_x), float(view.center_y),
        aspect_scale(canvas_width, canvas_height, correct_aspect)
    )


def warmup_jit():
    """
    Warm up JIT compilation with a tiny frame.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first rendered frame.
    """
    counts = compute_escape_counts(4, 4, 10, 1.0, 2.0, 2.0, 1.0)
    compute_escape_counts_parallel(4, 4, 10, 1.0, 2.0, 2.0, 1.0)
    colorize_frame(counts, 10)
