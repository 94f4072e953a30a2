"""
Renderer configuration management.

This module loads renderer overrides from a YAML file at the project root
and applies them to a registry at startup:

    text:
      priority: 12
    tool-call:
      enabled: false
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from netchat.rendering.registry import RendererEntry, RendererRegistry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "netchat_config.yaml"


@dataclass
class RendererOverride:
    priority: int | None = None
    enabled: bool = True


@dataclass
class RendererConfig:
    renderers: dict[str, RendererOverride] = field(default_factory=dict)


def get_config_path(filename: str = DEFAULT_CONFIG_FILE) -> Path:
    """
    Get the path to the renderer configuration file.

    Looks in the current working directory (project root).
    """
    return Path(os.getcwd()) / filename


def _parse_override(key: str, raw: object) -> RendererOverride:
    if raw is None:
        return RendererOverride()
    if not isinstance(raw, dict):
        raise ValueError(f"Renderer '{key}' must be a mapping, got {type(raw).__name__}")

    priority = raw.get("priority")
    if priority is not None and (isinstance(priority, bool) or not isinstance(priority, int)):
        raise ValueError(f"Renderer '{key}': priority must be an integer")

    enabled = raw.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ValueError(f"Renderer '{key}': enabled must be true or false")

    return RendererOverride(priority=priority, enabled=enabled)


def load_renderer_config(
    path: str | Path | None = None,
    filename: str = DEFAULT_CONFIG_FILE,
) -> RendererConfig:
    """
    Load renderer overrides from YAML.

    Args:
        path: Explicit config file. When omitted, ``filename`` in the
              working directory is used if it exists.
        filename: Default file name (see NetchatSettings.config_file)

    Returns:
        Parsed overrides (empty when no default file exists)

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If an entry has the wrong shape
        RuntimeError: If the file can't be read or parsed
    """
    explicit = path is not None
    config_path = Path(path) if explicit else get_config_path(filename)
    logger.debug(f"Loading renderer config from: {config_path}")

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Renderer config not found at {config_path}")
        return RendererConfig()

    try:
        with open(config_path, "r") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"{config_path} must contain a mapping of renderer keys")

        section = raw.get("renderers", raw)
        if not isinstance(section, dict):
            raise ValueError(f"'renderers' in {config_path} must be a mapping")

        return RendererConfig(
            renderers={
                str(key): _parse_override(str(key), value) for key, value in section.items()
            }
        )
    except ValueError:
        raise
    except Exception as e:
        raise RuntimeError(f"Error loading renderer config: {e}")


def apply_renderer_config(registry: RendererRegistry, config: RendererConfig) -> None:
    """Apply priority overrides and removals to a registry."""
    for key, override in config.renderers.items():
        entry = registry.get(key)
        if entry is None:
            logger.warning(f"Renderer config names unknown renderer '{key}'")
            continue
        if not override.enabled:
            registry.unregister(key)
            logger.info(f"Renderer '{key}' disabled by config")
            continue
        if override.priority is not None and override.priority != entry.priority:
            registry.register(
                RendererEntry(
                    key=entry.key,
                    matcher=entry.matcher,
                    render=entry.render,
                    priority=override.priority,
                )
            )
            logger.debug(f"Renderer '{key}' priority set to {override.priority}")
