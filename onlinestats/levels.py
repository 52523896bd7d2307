"""Network level from network experience.

The leveling curve is quadratic in the level, so the level for a given
amount of experience is the positive root of that quadratic.  All arithmetic
is done in single precision (each intermediate is rounded to a 32-bit float)
so the levels reported at the boundaries match the game's own rounding.
"""

import math
import struct

BASE = 10000.0
GROWTH = 2500.0


def f32(value):
    """Round a Python float to the nearest IEEE single-precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


HALF_GROWTH = f32(GROWTH * 0.5)
REVERSE_PQ_PREFIX = f32(-(BASE - 0.5 * GROWTH) / GROWTH)
REVERSE_CONST = f32(REVERSE_PQ_PREFIX * REVERSE_PQ_PREFIX)
GROWTH_DIVIDES_2 = f32(2.0 / GROWTH)


def calculate_level(exp):
    """Exact (floored) level as a single-precision float."""
    exp = f32(exp)
    if exp < 0.0:
        return 1.0
    root = f32(math.sqrt(f32(REVERSE_CONST + f32(GROWTH_DIVIDES_2 * exp))))
    return float(math.floor(f32(f32(1.0 + REVERSE_PQ_PREFIX) + root)))


def network_level(exp):
    """Integer network level; negative (unknown) experience is level 1."""
    return int(round(calculate_level(exp)))


def total_experience(level):
    """Experience at which ``level`` starts.  Inverse of network_level."""
    if level <= 1:
        return 0
    offset = level - 1 - REVERSE_PQ_PREFIX
    return int(round(HALF_GROWTH * (offset * offset - REVERSE_CONST)))


def f32_repr(value):
    """Shortest text that reads back as the same single-precision value."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    for digits in range(1, 10):
        text = f"{value:.{digits}g}"
        if f32(float(text)) == value:
            return repr(float(text))
    return repr(value)
