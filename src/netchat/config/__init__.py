"""
Configuration utilities.

Usage:
    from netchat.config import NetchatSettings, load_renderer_config, apply_renderer_config

    settings = NetchatSettings()
    apply_renderer_config(registry, load_renderer_config())
"""

from netchat.config.loader import (
    RendererConfig,
    RendererOverride,
    apply_renderer_config,
    get_config_path,
    load_renderer_config,
)
from netchat.config.log_setup import setup_logging
from netchat.config.settings import NetchatSettings

__all__ = [
    "NetchatSettings",
    "RendererConfig",
    "RendererOverride",
    "apply_renderer_config",
    "get_config_path",
    "load_renderer_config",
    "setup_logging",
]
