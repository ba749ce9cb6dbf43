"""
Visual encoding of a magnitude: dot size, opacity and a purple -> orange
color ramp.
"""

import math

from projection import SQRT, radial_distance

PURPLE = "#C576F6"
ORANGE = "#FB9F16"
LOW_RGB = (197, 118, 246)  # PURPLE
HIGH_RGB = (251, 159, 22)  # ORANGE
TRANSPARENT = "rgba(0,0,0,0)"

BASE_SIZE = 1.2  # px
SIZE_SCALE = 0.5  # px per sqrt(count)
MAX_SIZE_BONUS = 2.5
BASE_OPACITY = 0.2
MAX_OPACITY = 0.95


def lerp(a, b, t):
    return a + (b - a) * t


def round_half_up(value):
    return int(math.floor(value + 0.5))


def interpolation_factor(count, max_count):
    """Square-root eased position of `count` on the color ramp, 0..1"""
    return math.sqrt(min(1, count / max(1, max_count)))


def color_for_count(count, max_count):
    if count <= 0:
        return TRANSPARENT
    t = interpolation_factor(count, max_count)
    r, g, b = (round_half_up(lerp(lo, hi, t)) for lo, hi in zip(LOW_RGB, HIGH_RGB))
    return f"rgb({r},{g},{b})"


def size_for_count(count):
    if count <= 0:
        return BASE_SIZE
    return BASE_SIZE + min(MAX_SIZE_BONUS, radial_distance(count, SIZE_SCALE, SQRT))


def opacity_for_count(count, max_count):
    """Zero stays invisible; anything else is at least BASE_OPACITY"""
    if count <= 0:
        return 0.0
    return min(MAX_OPACITY, BASE_OPACITY + count / max(3, max_count))
