"""
Input Listener Module
Desktop mouse/keyboard input for the zoom/pan controls using pynput
"""

import logging
from typing import TYPE_CHECKING

from .input_events import MouseButton, PointerInput, WheelInput

# pynput needs a display server; without one the controls still work programmatically
try:
    from pynput import keyboard, mouse
    PYNPUT_AVAILABLE = True
except ImportError:
    PYNPUT_AVAILABLE = False

if TYPE_CHECKING:
    from .controls import ZoomPanControls


logger = logging.getLogger(__name__)

_BUTTONS_BY_NAME = {
    'left': MouseButton.LEFT,
    'middle': MouseButton.MIDDLE,
    'right': MouseButton.RIGHT,
    'x1': MouseButton.BACK,
    'x2': MouseButton.FORWARD,
}

_MODIFIERS_BY_KEY = {
    'ctrl': 'ctrl', 'ctrl_l': 'ctrl', 'ctrl_r': 'ctrl',
    'shift': 'shift', 'shift_l': 'shift', 'shift_r': 'shift',
}


class InputListener:
    """
    Feeds global mouse and keyboard events into ZoomPanControls.

    pynput delivers callbacks on its own listener threads. They all run
    under the controls' lock, the same one host calls take.
    """

    def __init__(self, controls: 'ZoomPanControls'):
        self._controls = controls
        self._lock = controls.lock
        self._mouse_listener = None
        self._keyboard_listener = None
        self._running = False

        # Input state
        self._buttons = 0
        self._ctrl = False
        self._shift = False

    @property
    def ctrl(self) -> bool:
        return self._ctrl

    @property
    def shift(self) -> bool:
        return self._shift

    def is_running(self) -> bool:
        """Check if listener is running."""
        return self._running

    def _pointer(self, x: float, y: float) -> PointerInput:
        return PointerInput(x, y, self._buttons, self._ctrl, self._shift)

    def _on_move(self, x: int, y: int, *_):
        with self._lock:
            self._controls.handle_move(self._pointer(x, y))

    def _on_click(self, x: int, y: int, button, pressed: bool, *_):
        mapped = _BUTTONS_BY_NAME.get(getattr(button, 'name', None))
        if mapped is None:
            return
        with self._lock:
            if pressed:
                self._buttons |= mapped.mask
            else:
                self._buttons &= ~mapped.mask
            self._controls.handle_button(self._pointer(x, y), mapped, pressed)

    def _on_scroll(self, x: int, y: int, dx: int, dy: int, *_):
        # pynput reports scroll-up as positive dy; wheel deltas grow downward
        with self._lock:
            self._controls.handle_wheel(WheelInput(x, y, -dy, self._ctrl, self._shift))

    def _set_modifier(self, key, down: bool):
        modifier = _MODIFIERS_BY_KEY.get(getattr(key, 'name', None))
        if modifier == 'ctrl':
            self._ctrl = down
        elif modifier == 'shift':
            self._shift = down

    def _on_press(self, key, *_):
        with self._lock:
            self._set_modifier(key, True)

    def _on_release(self, key, *_):
        with self._lock:
            self._set_modifier(key, False)

    def start(self) -> bool:
        """
        Start listening.

        Returns:
            True if running, False if pynput is not usable here
        """
        if self._running:
            return True

        if not PYNPUT_AVAILABLE:
            logger.warning("Input listener not available. Install 'pynput' "
                           "and run with a display server.")
            return False

        self._mouse_listener = mouse.Listener(
            on_move=self._on_move,
            on_click=self._on_click,
            on_scroll=self._on_scroll
        )
        self._keyboard_listener = keyboard.Listener(
            on_press=self._on_press,
            on_release=self._on_release
        )
        self._mouse_listener.start()
        self._keyboard_listener.start()
        self._running = True
        logger.debug("Input listener started")
        return True

    def stop(self):
        """Stop listening."""
        if not self._running:
            return

        self._running = False
        for listener in (self._mouse_listener, self._keyboard_listener):
            if listener is not None:
                listener.stop()
        self._mouse_listener = None
        self._keyboard_listener = None
        self._buttons = 0
        self._ctrl = False
        self._shift = False
        logger.debug("Input listener stopped")
