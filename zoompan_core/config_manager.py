"""
Config Manager Module
Engine constraints, gesture bindings and JSON-based profiles
"""

import json
import logging
import math
from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, Any
from pathlib import Path


logger = logging.getLogger(__name__)

DEFAULT_MIN_SCALE = 0.1
DEFAULT_MAX_SCALE = 30.0
# Engine-level default; the control facade uses the coarser helper default.
DEFAULT_SCALE_SENSITIVITY = 10.0
HELPER_SCALE_SENSITIVITY = 50.0


class ConfigError(ValueError):
    """Raised for configuration values the engine cannot work with."""


def _require_dict(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class EngineConfig:
    """Immutable zoom constraints for one engine."""

    min_scale: float = DEFAULT_MIN_SCALE
    max_scale: float = DEFAULT_MAX_SCALE
    scale_sensitivity: float = DEFAULT_SCALE_SENSITIVITY

    def __post_init__(self):
        for name in ('min_scale', 'max_scale', 'scale_sensitivity'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value!r}")
        if self.min_scale <= 0:
            raise ConfigError(f"min_scale must be > 0, got {self.min_scale}")
        if self.max_scale < self.min_scale:
            raise ConfigError(
                f"max_scale ({self.max_scale}) must be >= min_scale ({self.min_scale})")
        if self.scale_sensitivity <= 0:
            raise ConfigError(
                f"scale_sensitivity must be > 0, got {self.scale_sensitivity}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  default_sensitivity: float = DEFAULT_SCALE_SENSITIVITY) -> 'EngineConfig':
        """Create from dictionary."""
        return cls(
            min_scale=data.get('min_scale', DEFAULT_MIN_SCALE),
            max_scale=data.get('max_scale', DEFAULT_MAX_SCALE),
            scale_sensitivity=data.get('scale_sensitivity', default_sensitivity)
        )


@dataclass
class BindingConfig:
    """Which gestures the control facade reacts to."""

    enable_zoom: bool = True        # Ctrl + wheel
    enable_pan: bool = True         # Shift + left drag
    enable_mouse_wheel: bool = False  # Wheel without Ctrl

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BindingConfig':
        return cls(
            enable_zoom=data.get('enable_zoom', True),
            enable_pan=data.get('enable_pan', True),
            enable_mouse_wheel=data.get('enable_mouse_wheel', False)
        )


@dataclass
class ZoomPanProfile:
    """Named pairing of engine constraints and bindings."""

    name: str = "default"
    engine: EngineConfig = field(
        default_factory=lambda: EngineConfig(scale_sensitivity=HELPER_SCALE_SENSITIVITY))
    bindings: BindingConfig = field(default_factory=BindingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'engine': self.engine.to_dict(),
            'bindings': self.bindings.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "default") -> 'ZoomPanProfile':
        """Create from dictionary."""
        _require_dict(data, f"profile '{name}'")
        engine = _require_dict(data.get('engine', {}), f"profile '{name}' engine")
        bindings = _require_dict(data.get('bindings', {}), f"profile '{name}' bindings")
        return cls(
            name=name,
            engine=EngineConfig.from_dict(engine,
                                          default_sensitivity=HELPER_SCALE_SENSITIVITY),
            bindings=BindingConfig.from_dict(bindings)
        )


@dataclass
class Config:
    """Main configuration object."""

    version: str = "1.0.0"
    default_profile: str = "standard"
    profiles: Dict[str, ZoomPanProfile] = field(default_factory=dict)
    debug_logging: bool = False

    def __post_init__(self):
        # Ensure at least a default profile exists
        if not self.profiles:
            self.profiles['standard'] = ZoomPanProfile(name='standard')

    def get_profile(self, name: Optional[str] = None) -> ZoomPanProfile:
        """Get a profile by name, or the default profile."""
        if name is None:
            name = self.default_profile

        if name in self.profiles:
            return self.profiles[name]

        if self.default_profile in self.profiles:
            return self.profiles[self.default_profile]

        return next(iter(self.profiles.values()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'version': self.version,
            'default_profile': self.default_profile,
            'profiles': {name: p.to_dict() for name, p in self.profiles.items()},
            'debug_logging': self.debug_logging
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """
        Create from dictionary.

        Raises:
            ConfigError: If the data has the wrong shape or a profile holds
                invalid engine constraints
        """
        _require_dict(data, "config")
        profiles = {}
        for name, profile_data in _require_dict(data.get('profiles', {}), "profiles").items():
            profiles[name] = ZoomPanProfile.from_dict(profile_data, name)

        return cls(
            version=data.get('version', '1.0.0'),
            default_profile=data.get('default_profile', 'standard'),
            profiles=profiles,
            debug_logging=data.get('debug_logging', False)
        )


def configure_logging(debug: bool = False) -> None:
    """Set the package logger level from the debug flag."""
    logging.getLogger('zoompan_core').setLevel(logging.DEBUG if debug else logging.WARNING)


class ConfigManager:
    """
    Manages loading, saving, and accessing configuration.

    Configuration is stored in a JSON file that can be:
    - Specified explicitly
    - In the current directory
    """

    DEFAULT_FILENAME = "zoompan.json"

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config manager.

        Args:
            config_path: Explicit path to config file
        """
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = Path(config_path) if config_path else None

    @property
    def config_path(self) -> Path:
        """Path the configuration is read from and written to."""
        if self._config_path is None:
            self._config_path = Path.cwd() / self.DEFAULT_FILENAME
        return self._config_path

    def load(self) -> Config:
        """
        Load configuration from file.

        Returns:
            Config object (creates default if file doesn't exist)
        """
        config_path = self.config_path

        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = Config.from_dict(data)
            except (json.JSONDecodeError, OSError, ConfigError) as e:
                logger.error("Error loading config from %s: %s", config_path, e)
                self._config = self._create_default_config()
        else:
            self._config = self._create_default_config()
            self.save()

        configure_logging(self._config.debug_logging)
        return self._config

    def save(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if saved successfully
        """
        if self._config is None:
            return False

        config_path = self.config_path
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(self._config.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving config to %s: %s", config_path, e)
            return False

    def _create_default_config(self) -> Config:
        """Create default configuration."""
        return Config(
            profiles={
                'standard': ZoomPanProfile(name='standard'),
                'fine': ZoomPanProfile(
                    name='fine',
                    engine=EngineConfig(min_scale=0.5, max_scale=8.0,
                                        scale_sensitivity=100.0)
                ),
                'wheel': ZoomPanProfile(
                    name='wheel',
                    engine=EngineConfig(scale_sensitivity=DEFAULT_SCALE_SENSITIVITY),
                    bindings=BindingConfig(enable_mouse_wheel=True)
                )
            }
        )

    @property
    def config(self) -> Config:
        """Get current configuration (loads if not already loaded)."""
        if self._config is None:
            self.load()
        return self._config

    @property
    def current_profile(self) -> ZoomPanProfile:
        """Get the current active profile."""
        return self.config.get_profile()

    def get_profile(self, name: str) -> ZoomPanProfile:
        """Get a specific profile by name."""
        return self.config.get_profile(name)

    def set_default_profile(self, name: str) -> bool:
        """
        Set the default profile.

        Args:
            name: Profile name to set as default

        Returns:
            True if profile exists and was set
        """
        if name in self.config.profiles:
            self.config.default_profile = name
            return True
        return False

    def add_profile(self, profile: ZoomPanProfile) -> None:
        """Add or update a profile."""
        self.config.profiles[profile.name] = profile

    def remove_profile(self, name: str) -> bool:
        """
        Remove a profile.

        Returns:
            True if removed, False if not found or is the only profile
        """
        if name in self.config.profiles and len(self.config.profiles) > 1:
            del self.config.profiles[name]
            if self.config.default_profile == name:
                self.config.default_profile = next(iter(self.config.profiles))
            return True
        return False

    def list_profiles(self) -> list:
        """Get list of profile names."""
        return list(self.config.profiles.keys())
