"""
Input Events Module
Normalized input records and their translation into engine requests
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Optional


class MouseButton(IntEnum):
    """Mouse buttons, numbered like browser `MouseEvent.button`."""
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2
    BACK = 3
    FORWARD = 4

    @property
    def mask(self) -> int:
        """Bit of this button in a `buttons` bitmask."""
        return 1 << self.value


@dataclass(frozen=True)
class ZoomRequest:
    """Zoom by a signed step, anchored at a point."""
    target_x: float
    target_y: float
    delta_scale: float


@dataclass(frozen=True)
class PanByRequest:
    """Relative pan."""
    delta_x: float
    delta_y: float


@dataclass(frozen=True)
class PanToRequest:
    """Absolute pan with an optional new scale."""
    target_x: float
    target_y: float
    scale: Optional[float] = None


@dataclass(frozen=True)
class WheelInput:
    """A wheel event already reduced to position, vertical delta and modifiers."""
    x: float
    y: float
    delta_y: float
    ctrl: bool = False
    shift: bool = False


@dataclass(frozen=True)
class PointerInput:
    """A pointer position with the pressed-buttons bitmask and modifiers."""
    x: float
    y: float
    buttons: int = 0
    ctrl: bool = False
    shift: bool = False


def wheel_to_zoom(event: WheelInput) -> Optional[ZoomRequest]:
    """
    Turn a wheel event into a one-step zoom at the cursor.

    Scrolling down (positive delta) zooms out, scrolling up zooms in.

    Returns:
        The zoom request, or None for a zero delta
    """
    if event.delta_y > 0:
        step = -1
    elif event.delta_y < 0:
        step = 1
    else:
        return None
    return ZoomRequest(event.x, event.y, step)


def pointer_delta(previous: PointerInput, current: PointerInput) -> PanByRequest:
    """Movement between two pointer positions as a relative pan."""
    return PanByRequest(current.x - previous.x, current.y - previous.y)
