"""
Shared fixtures for zoom/pan tests.

Provides engines, controls and a recording surface.
"""
import sys
import os
import pytest

# Ensure the package root is on the path when running from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from zoompan_core import (
    BindingConfig,
    EngineConfig,
    StyleSurface,
    TransformEngine,
    ZoomPanControls,
)


@pytest.fixture
def surface():
    return StyleSurface()


@pytest.fixture
def config():
    return EngineConfig(min_scale=0.1, max_scale=10, scale_sensitivity=10)


@pytest.fixture
def engine(config, surface):
    return TransformEngine(config, surface)


@pytest.fixture
def controls(surface):
    return ZoomPanControls(EngineConfig(min_scale=0.1, max_scale=10, scale_sensitivity=10),
                           BindingConfig(), surface)
