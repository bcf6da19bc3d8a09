"""
Transform Math Module
Pure functions for zoom/pan scale, translation and transform descriptors
"""

import math
import re
from typing import Tuple


_MATRIX_RE = re.compile(r'^\s*matrix\(([^()]*)\)\s*$')


def clamp_scale(candidate: float, min_scale: float, max_scale: float) -> float:
    """
    Clamp a scale value between min and max.

    NaN is returned unchanged so callers can still detect it.

    Args:
        candidate: Scale to clamp
        min_scale: Minimum allowed scale
        max_scale: Maximum allowed scale

    Returns:
        Clamped scale
    """
    if math.isnan(candidate):
        return candidate
    return max(min_scale, min(candidate, max_scale))


def compute_zoomed_scale(current_scale: float, delta_scale: float,
                         sensitivity: float) -> float:
    """
    Calculate the next scale for a zoom step.

    Args:
        current_scale: Current zoom level
        delta_scale: Signed step (+1 zoom in, -1 zoom out)
        sensitivity: Divisor for the step (higher = less sensitive)

    Returns:
        Unclamped new scale, NaN when sensitivity is zero
    """
    try:
        return current_scale + delta_scale / sensitivity
    except ZeroDivisionError:
        return math.nan


def is_finite_triple(a: float, b: float, c: float) -> bool:
    """Check that all three values are finite real numbers."""
    try:
        return math.isfinite(a) and math.isfinite(b) and math.isfinite(c)
    except TypeError:
        return False


def is_scale_in_range(scale: float, min_scale: float, max_scale: float) -> bool:
    """Check if a scale lies within [min_scale, max_scale]."""
    return min_scale <= scale <= max_scale


def _format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def compute_descriptor(scale: float, translate_x: float, translate_y: float) -> str:
    """
    Build the matrix transform descriptor.

    Format: matrix(scaleX, skewY, skewX, scaleY, translateX, translateY)
    For uniform zoom/pan: matrix(scale, 0, 0, scale, tx, ty)

    Args:
        scale: Zoom level
        translate_x: Horizontal translation
        translate_y: Vertical translation

    Returns:
        Descriptor string
    """
    s = _format_number(scale)
    return (f"matrix({s}, 0, 0, {s}, "
            f"{_format_number(translate_x)}, {_format_number(translate_y)})")


def parse_descriptor(descriptor: str) -> Tuple[float, float, float, float]:
    """
    Parse a matrix descriptor back into its components.

    Args:
        descriptor: Text in matrix(a, b, c, d, e, f) form

    Returns:
        Tuple of (scale_x, scale_y, translate_x, translate_y)

    Raises:
        ValueError: If the text is not a six-component matrix
    """
    match = _MATRIX_RE.match(descriptor)
    if match is None:
        raise ValueError(f"Not a matrix descriptor: {descriptor!r}")

    parts = [p.strip() for p in match.group(1).split(',')]
    if len(parts) != 6:
        raise ValueError(f"Expected 6 matrix components, got {len(parts)}")

    a, _, _, d, e, f = (float(p) for p in parts)
    return (a, d, e, f)


def compute_origin(origin_x: float, origin_y: float) -> str:
    """Format a transform-origin point as pixel text."""
    return f"{_format_number(origin_x)}px {_format_number(origin_y)}px"


def compute_transform_origin(pos: float, scale: float) -> float:
    """
    Calculate a transform-origin coordinate relative to the scaled element.

    Args:
        pos: Cursor position
        scale: Current scale

    Returns:
        Origin coordinate in element space
    """
    return pos / scale


def compute_anchored_translation(pos: float, prev_pos: float, translate: float,
                                 scale: float, min_scale: float,
                                 max_scale: float) -> float:
    """
    Compensate a translation so the point under the cursor stays fixed.

    Not used by the engine, which anchors through the transform-origin
    point instead.

    Args:
        pos: Current position
        prev_pos: Previous position
        translate: Current translation value
        scale: Current scale
        min_scale: Minimum scale
        max_scale: Maximum scale

    Returns:
        Adjusted translation, or the original one if nothing changed
    """
    if not is_scale_in_range(scale, min_scale, max_scale) or pos == prev_pos:
        return translate
    return translate + (pos - prev_pos * scale) * (1 - 1 / scale)
