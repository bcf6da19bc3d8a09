"""
Controls Module
Binds wheel and drag gestures to a transformation engine
"""

import logging
import threading
from typing import Optional

from .config_manager import (
    BindingConfig,
    EngineConfig,
    HELPER_SCALE_SENSITIVITY,
    ZoomPanProfile,
)
from .engine import TransformEngine, TransformationState
from .input_events import (
    MouseButton,
    PanByRequest,
    PanToRequest,
    PointerInput,
    WheelInput,
    ZoomRequest,
    pointer_delta,
    wheel_to_zoom,
)
from .input_listener import InputListener
from .surface import Surface


logger = logging.getLogger(__name__)


class ZoomPanControls:
    """
    Gesture layer in front of a TransformEngine.

    Default bindings:
    - Ctrl + wheel: zoom at the cursor
    - Shift + left drag: pan

    Each gesture has two entry points: one taking a plain request
    record, one taking a normalized device event.

    Every public method runs under `lock`, which the input listener
    shares. Hosts that drive the engine directly while listening hold
    it too.
    """

    def __init__(self, engine_config: Optional[EngineConfig] = None,
                 bindings: Optional[BindingConfig] = None,
                 surface: Optional[Surface] = None):
        """
        Initialize controls.

        Args:
            engine_config: Engine constraints (helper default sensitivity is 50)
            bindings: Which gestures are enabled
            surface: Surface that receives descriptors
        """
        config = engine_config or EngineConfig(scale_sensitivity=HELPER_SCALE_SENSITIVITY)
        self._engine = TransformEngine(config, surface)
        self._bindings = bindings or BindingConfig()

        # Drag state
        self._is_panning = False
        self._last_pointer: Optional[PointerInput] = None

        self._listener: Optional[InputListener] = None
        self._lock = threading.RLock()

    @classmethod
    def from_profile(cls, profile: ZoomPanProfile,
                     surface: Optional[Surface] = None) -> 'ZoomPanControls':
        """Create controls from a configuration profile."""
        return cls(profile.engine, profile.bindings, surface)

    @property
    def engine(self) -> TransformEngine:
        return self._engine

    @property
    def bindings(self) -> BindingConfig:
        return self._bindings

    @property
    def lock(self) -> threading.RLock:
        """Lock serializing every call into the engine."""
        return self._lock

    @property
    def is_panning(self) -> bool:
        """Check if a drag is in progress."""
        return self._is_panning

    # ========================================
    # Programmatic API
    # ========================================

    def zoom(self, request: ZoomRequest) -> None:
        """Zoom from a plain request."""
        with self._lock:
            self._engine.zoom(request.target_x, request.target_y, request.delta_scale)

    def zoom_from_wheel(self, event: WheelInput) -> None:
        """Zoom one step at the wheel position, ignoring bindings."""
        request = wheel_to_zoom(event)
        if request is not None:
            self.zoom(request)

    def pan_by(self, request: PanByRequest) -> None:
        """Pan by a plain relative offset."""
        with self._lock:
            self._engine.pan_by(request.delta_x, request.delta_y)

    def pan_by_from_pointer(self, event: PointerInput) -> None:
        """Pan by the movement since the last tracked pointer position."""
        with self._lock:
            if self._last_pointer is not None:
                self.pan_by(pointer_delta(self._last_pointer, event))
            self._last_pointer = event

    def pan_to(self, request: PanToRequest) -> None:
        """Pan to an absolute position, optionally setting the scale."""
        with self._lock:
            self._engine.pan_to(request.target_x, request.target_y, request.scale)

    def reset(self) -> None:
        with self._lock:
            self._engine.reset()

    def get_state(self) -> TransformationState:
        with self._lock:
            return self._engine.get_state()

    # ========================================
    # Gesture handlers
    # ========================================

    def handle_wheel(self, event: WheelInput) -> bool:
        """
        Handle a wheel event.

        Returns:
            True if the event was used for zooming (host should swallow it)
        """
        if not self._bindings.enable_zoom:
            return False
        if not event.ctrl and not self._bindings.enable_mouse_wheel:
            return False

        self.zoom_from_wheel(event)
        return True

    def handle_button(self, event: PointerInput, button: MouseButton,
                      pressed: bool) -> bool:
        """
        Handle a button press or release.

        Returns:
            True if a drag started or ended
        """
        with self._lock:
            if pressed:
                if not self._bindings.enable_pan or button != MouseButton.LEFT:
                    return False
                self._is_panning = True
                self._last_pointer = event
                return True

            was_panning = self._is_panning
            self._is_panning = False
            self._last_pointer = None
            return was_panning

    def handle_move(self, event: PointerInput) -> bool:
        """
        Handle pointer movement during a drag.

        The tracked position follows the pointer even without Shift, so
        pressing Shift mid-drag does not jump the content.

        Returns:
            True if the movement panned the surface
        """
        with self._lock:
            if not self._is_panning or not self._bindings.enable_pan:
                return False

            if not event.shift:
                self._last_pointer = event
                return False

            self.pan_by_from_pointer(event)
            return True

    # ========================================
    # Lifecycle
    # ========================================

    def listen(self) -> bool:
        """
        Start feeding desktop mouse/keyboard input into these controls.

        Returns:
            True if the listener is running
        """
        with self._lock:
            if not self._engine.is_active():
                return False
            if self._listener is None:
                self._listener = InputListener(self)
            return self._listener.start()

    def destroy(self) -> None:
        """Detach input, drop drag state and destroy the engine."""
        with self._lock:
            if self._listener is not None:
                self._listener.stop()
                self._listener = None
            self._is_panning = False
            self._last_pointer = None
            self._engine.destroy()
