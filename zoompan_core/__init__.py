"""
Zoom/Pan - Core Module
Anchored zoom and pan transforms for an interactive surface
"""

from .transform_math import (
    clamp_scale,
    compute_zoomed_scale,
    compute_descriptor,
    parse_descriptor,
    compute_origin,
    is_finite_triple,
)
from .config_manager import (
    ConfigManager,
    ConfigError,
    Config,
    EngineConfig,
    BindingConfig,
    ZoomPanProfile,
    configure_logging,
)
from .engine import TransformEngine, EngineState, TransformationState
from .surface import Surface, StyleSurface
from .input_events import (
    MouseButton,
    ZoomRequest,
    PanByRequest,
    PanToRequest,
    WheelInput,
    PointerInput,
    wheel_to_zoom,
)
from .controls import ZoomPanControls
from .input_listener import InputListener

__all__ = [
    # Transform math
    'clamp_scale',
    'compute_zoomed_scale',
    'compute_descriptor',
    'parse_descriptor',
    'compute_origin',
    'is_finite_triple',

    # Configuration
    'ConfigManager',
    'ConfigError',
    'Config',
    'EngineConfig',
    'BindingConfig',
    'ZoomPanProfile',
    'configure_logging',

    # Engine
    'TransformEngine',
    'EngineState',
    'TransformationState',

    # Surfaces
    'Surface',
    'StyleSurface',

    # Input
    'MouseButton',
    'ZoomRequest',
    'PanByRequest',
    'PanToRequest',
    'WheelInput',
    'PointerInput',
    'wheel_to_zoom',
    'ZoomPanControls',
    'InputListener',
]

__version__ = '1.0.0'
