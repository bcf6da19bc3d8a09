"""
Tests for configuration objects and the JSON config manager.

Covers:
- EngineConfig validation and immutability
- Profile lookup fallbacks
- Loading, saving and recovering from broken config files
- Debug logging switch
"""
import dataclasses
import json
import logging
import math
import pytest

from zoompan_core import (
    BindingConfig,
    Config,
    ConfigError,
    ConfigManager,
    EngineConfig,
    ZoomPanProfile,
    configure_logging,
)


@pytest.fixture(autouse=True)
def restore_package_log_level():
    package_logger = logging.getLogger('zoompan_core')
    level = package_logger.level
    yield
    package_logger.setLevel(level)


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert (config.min_scale, config.max_scale, config.scale_sensitivity) == (0.1, 30.0, 10.0)

    def test_equal_bounds_allowed(self):
        assert EngineConfig(min_scale=2, max_scale=2).max_scale == 2

    @pytest.mark.parametrize("kwargs", [
        {'min_scale': 0},
        {'min_scale': -1},
        {'min_scale': 5, 'max_scale': 1},
        {'scale_sensitivity': 0},
        {'scale_sensitivity': -10},
        {'max_scale': math.inf},
        {'min_scale': math.nan},
        {'scale_sensitivity': '10'},
        {'max_scale': True},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ConfigError):
            EngineConfig(**kwargs)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            EngineConfig(min_scale=0)

    def test_frozen(self):
        config = EngineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.min_scale = 1

    def test_from_dict_fills_defaults(self):
        config = EngineConfig.from_dict({'max_scale': 8})
        assert config == EngineConfig(min_scale=0.1, max_scale=8, scale_sensitivity=10)


class TestConfig:

    def test_default_profile_created(self):
        config = Config()
        profile = config.get_profile()
        assert profile.name == 'standard'
        assert profile.engine.scale_sensitivity == 50

    def test_unknown_profile_falls_back_to_default(self):
        config = Config()
        assert config.get_profile('missing').name == 'standard'

    def test_missing_default_falls_back_to_first(self):
        config = Config(default_profile='gone',
                        profiles={'only': ZoomPanProfile(name='only')})
        assert config.get_profile().name == 'only'

    def test_dict_round_trip(self):
        config = Config(profiles={
            'x': ZoomPanProfile(name='x', engine=EngineConfig(max_scale=4),
                                bindings=BindingConfig(enable_pan=False)),
        }, default_profile='x', debug_logging=True)

        restored = Config.from_dict(json.loads(json.dumps(config.to_dict())))

        assert restored.default_profile == 'x'
        assert restored.debug_logging
        assert restored.get_profile('x').engine.max_scale == 4
        assert not restored.get_profile('x').bindings.enable_pan


class TestConfigManager:

    def test_creates_default_file(self, tmp_path):
        path = tmp_path / "zoompan.json"
        manager = ConfigManager(str(path))

        config = manager.load()

        assert path.exists()
        assert set(config.profiles) == {'standard', 'fine', 'wheel'}
        on_disk = json.loads(path.read_text(encoding='utf-8'))
        assert on_disk['profiles']['wheel']['bindings']['enable_mouse_wheel'] is True

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "zoompan.json"
        manager = ConfigManager(str(path))
        manager.add_profile(ZoomPanProfile(name='wide', engine=EngineConfig(max_scale=100)))
        assert manager.set_default_profile('wide')
        assert manager.save()

        reloaded = ConfigManager(str(path))
        assert reloaded.current_profile.name == 'wide'
        assert reloaded.get_profile('wide').engine.max_scale == 100

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path, caplog):
        path = tmp_path / "zoompan.json"
        path.write_text("{not json", encoding='utf-8')

        with caplog.at_level(logging.ERROR, logger='zoompan_core'):
            config = ConfigManager(str(path)).load()

        assert 'standard' in config.profiles
        assert "Error loading config" in caplog.text

    @pytest.mark.parametrize("payload", [
        [],
        {'profiles': []},
        {'profiles': {'p': 'oops'}},
        {'profiles': {'p': {'engine': [1, 2]}}},
        {'profiles': {'p': {'bindings': 'none'}}},
    ])
    def test_wrong_shape_falls_back_to_defaults(self, tmp_path, caplog, payload):
        path = tmp_path / "zoompan.json"
        path.write_text(json.dumps(payload), encoding='utf-8')

        with caplog.at_level(logging.ERROR, logger='zoompan_core'):
            config = ConfigManager(str(path)).load()

        assert set(config.profiles) == {'standard', 'fine', 'wheel'}
        assert "must be an object" in caplog.text

    def test_wrong_shape_raises_config_error(self):
        with pytest.raises(ConfigError):
            Config.from_dict({'profiles': {'p': 'oops'}})

    def test_invalid_engine_values_fall_back_to_defaults(self, tmp_path, caplog):
        path = tmp_path / "zoompan.json"
        path.write_text(json.dumps({
            'profiles': {'bad': {'engine': {'min_scale': 0}}}
        }), encoding='utf-8')

        with caplog.at_level(logging.ERROR, logger='zoompan_core'):
            config = ConfigManager(str(path)).load()

        assert 'bad' not in config.profiles
        assert "min_scale" in caplog.text

    def test_remove_profile(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "zoompan.json"))
        assert manager.remove_profile('standard')
        assert 'standard' not in manager.list_profiles()
        assert manager.config.default_profile in manager.list_profiles()
        assert not manager.remove_profile('missing')

    def test_last_profile_cannot_be_removed(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "zoompan.json"))
        for name in manager.list_profiles()[1:]:
            manager.remove_profile(name)
        assert not manager.remove_profile(manager.list_profiles()[0])

    def test_debug_logging_flag(self, tmp_path):
        path = tmp_path / "zoompan.json"
        path.write_text(json.dumps({'debug_logging': True}), encoding='utf-8')
        ConfigManager(str(path)).load()
        assert logging.getLogger('zoompan_core').level == logging.DEBUG

    def test_configure_logging(self):
        configure_logging(False)
        assert logging.getLogger('zoompan_core').level == logging.WARNING
        configure_logging(True)
        assert logging.getLogger('zoompan_core').level == logging.DEBUG
