"""
Transformation Engine Module
Owns the zoom/pan state of one surface and emits transform descriptors
"""

import logging
import math
from enum import Enum, auto
from dataclasses import dataclass, asdict
from typing import Callable, Dict, Optional, Any

from .config_manager import EngineConfig
from .surface import Surface
from .transform_math import (
    clamp_scale,
    compute_descriptor,
    compute_origin,
    compute_zoomed_scale,
    is_finite_triple,
)


logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Lifecycle of an engine. There is no way back from DESTROYED."""
    ACTIVE = auto()
    DESTROYED = auto()


@dataclass
class TransformationState:
    """Scale, translation and last transform-origin of a surface."""
    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0

    def copy(self) -> 'TransformationState':
        return TransformationState(self.scale, self.translate_x, self.translate_y,
                                   self.origin_x, self.origin_y)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def is_valid(self) -> bool:
        """Check the values that end up in the descriptor are finite."""
        return is_finite_triple(self.scale, self.translate_x, self.translate_y)


class TransformEngine:
    """
    Zoom/pan engine for a single surface.

    Every mutation goes through a candidate state that is validated
    before it is committed: a candidate with NaN/infinite values is
    logged and dropped, leaving both the state and the surface as they
    were. Out-of-range scales are clamped, never reported.

    Not thread-safe; callers serialize access (normally the UI loop).
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 surface: Optional[Surface] = None):
        """
        Initialize the engine.

        Args:
            config: Scale constraints (defaults to EngineConfig())
            surface: Surface that receives descriptors after each change
        """
        self._config = config or EngineConfig()
        self._surface = surface
        self._state = EngineState.ACTIVE
        self._transform = TransformationState()

        # Callbacks
        self._on_transform: Optional[Callable[[str, str], None]] = None
        self._on_state_changed: Optional[Callable[[EngineState], None]] = None

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> EngineState:
        """Current lifecycle state."""
        return self._state

    @property
    def surface(self) -> Optional[Surface]:
        return self._surface

    @property
    def descriptor(self) -> str:
        """Descriptor for the current state."""
        t = self._transform
        return compute_descriptor(t.scale, t.translate_x, t.translate_y)

    def set_callbacks(self,
                      on_transform: Optional[Callable[[str, str], None]] = None,
                      on_state_changed: Optional[Callable[[EngineState], None]] = None):
        """
        Set callbacks for emissions and lifecycle changes.

        Args:
            on_transform: Called with (descriptor, origin) after each emission
            on_state_changed: Called when the lifecycle state changes
        """
        self._on_transform = on_transform
        self._on_state_changed = on_state_changed

    def is_active(self) -> bool:
        """Check if the engine still accepts mutations."""
        return self._state == EngineState.ACTIVE

    def get_state(self) -> TransformationState:
        """Get a copy of the current transformation state."""
        return self._transform.copy()

    def _ignored(self, operation: str) -> bool:
        if self._state == EngineState.ACTIVE:
            return False
        logger.debug("Ignoring %s on destroyed engine", operation)
        return True

    def _commit(self, candidate: TransformationState) -> bool:
        """Validate and store a candidate state, then emit it."""
        if not (candidate.is_valid()
                and math.isfinite(candidate.origin_x)
                and math.isfinite(candidate.origin_y)):
            logger.warning("Invalid transformation values, keeping previous state: %s",
                           candidate.to_dict())
            return False

        self._transform = candidate
        self.apply_transform(self._surface)
        return True

    def zoom(self, target_x: float, target_y: float, delta_scale: float) -> None:
        """
        Zoom in or out anchored at a point.

        The point becomes the transform-origin; translation is left
        untouched.

        Args:
            target_x: Anchor X coordinate
            target_y: Anchor Y coordinate
            delta_scale: Signed step (+1 zoom in, -1 zoom out)
        """
        if self._ignored('zoom'):
            return

        new_scale = clamp_scale(
            compute_zoomed_scale(self._transform.scale, delta_scale,
                                 self._config.scale_sensitivity),
            self._config.min_scale,
            self._config.max_scale
        )

        candidate = self._transform.copy()
        candidate.scale = new_scale
        candidate.origin_x = target_x
        candidate.origin_y = target_y
        self._commit(candidate)

    def pan_by(self, delta_x: float, delta_y: float) -> None:
        """Pan by a relative offset. Translation is unbounded."""
        if self._ignored('pan_by'):
            return

        candidate = self._transform.copy()
        candidate.translate_x += delta_x
        candidate.translate_y += delta_y
        self._commit(candidate)

    def pan_to(self, target_x: float, target_y: float,
               scale: Optional[float] = None) -> None:
        """
        Pan to absolute coordinates.

        Args:
            target_x: New horizontal translation
            target_y: New vertical translation
            scale: Optional new scale (clamped to the configured range)
        """
        if self._ignored('pan_to'):
            return

        candidate = self._transform.copy()
        if scale is not None:
            candidate.scale = clamp_scale(scale, self._config.min_scale,
                                          self._config.max_scale)
        candidate.translate_x = target_x
        candidate.translate_y = target_y
        self._commit(candidate)

    def reset(self) -> None:
        """Reset to the initial transformation."""
        if self._ignored('reset'):
            return
        self._commit(TransformationState())

    def destroy(self) -> None:
        """Stop accepting mutations. Safe to call more than once."""
        if self._state == EngineState.DESTROYED:
            return
        self._state = EngineState.DESTROYED
        logger.debug("Engine destroyed")
        if self._on_state_changed:
            self._on_state_changed(self._state)

    def apply_transform(self, surface: Optional[Surface] = None) -> Optional[str]:
        """
        Emit the current transform to a surface.

        Args:
            surface: Target surface; with None only the callback is notified

        Returns:
            The emitted descriptor, or None if the state was invalid
        """
        t = self._transform
        if not t.is_valid():
            logger.warning("Invalid transformation values: scale=%r translate=(%r, %r)",
                           t.scale, t.translate_x, t.translate_y)
            return None

        descriptor = compute_descriptor(t.scale, t.translate_x, t.translate_y)
        origin = compute_origin(t.origin_x, t.origin_y)

        if surface is not None:
            surface.set_transform(descriptor, origin)
        if self._on_transform:
            self._on_transform(descriptor, origin)
        return descriptor

    def get_state_info(self) -> Dict[str, Any]:
        """Get current state information for debugging/status."""
        info: Dict[str, Any] = {'state': self._state.name}
        info.update(self._transform.to_dict())
        info['descriptor'] = self.descriptor
        return info
