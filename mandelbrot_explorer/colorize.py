"""
Iteration-count to color mapping.

Points that never escaped (count == max_iterations) are black. Escaped
points get a red ramp proportional to their escape iteration, with green
and blue fixed at zero.
"""

import math

import numpy as np
from numba import jit, prange


BLACK = (0, 0, 0)


def colorize(iterations, max_iterations):
    """
    Color for a single escape count.

    Args:
        iterations: Escape count from escape_time
        max_iterations: Iteration budget the count was computed with

    Returns:
        (r, g, b) tuple of ints in 0..255
    """
    if iterations == max_iterations:
        return BLACK
    red = int(math.floor(iterations / max_iterations * 255.0 + 0.5))
    return (red, 0, 0)


@jit(nopython=True, parallel=True, cache=True)
def _colorize_into(counts, max_iterations, out):
    height, width = counts.shape
    for py in prange(height):
        for px in range(width):
            val = counts[py, px]
            if val == max_iterations:
                out[py, px, 0] = 0
            else:
                out[py, px, 0] = np.uint8(math.floor(val / max_iterations * 255.0 + 0.5))
            out[py, px, 1] = 0
            out[py, px, 2] = 0


def colorize_frame(counts, max_iterations, out=None):
    """
    Apply colorize() to a whole grid of escape counts.

    Args:
        counts: 2D integer array of escape counts
        max_iterations: Iteration budget the counts were computed with
        out: Optional (height, width, 3) uint8 array to fill in place

    Returns:
        RGB image array (height, width, 3) of uint8
    """
    if out is None:
        out = np.empty(counts.shape + (3,), dtype=np.uint8)
    _colorize_into(counts, max_iterations, out)
    return out
