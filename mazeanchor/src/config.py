"""
Configuration loading for mazeanchor.

Settings come from three layers, later ones winning:
1. Dataclass defaults
2. ~/.config/mazeanchor/settings.json (or $MAZEANCHOR_CONFIG)
3. Environment variables (PORT, MAZEANCHOR_HOST, MAZEANCHOR_BACKEND_URL,
   MAZEANCHOR_BACKEND_TIMEOUT)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from mazeanchor.src.conversion.geometry.wall_compiler import GeometrySettings
from mazeanchor.src.pipeline.maze_pipeline import PipelineSettings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "settings.json"


@dataclass
class ServerSettings:
    """Maze endpoint settings."""
    host: str = "127.0.0.1"
    port: int = 8787
    # Served sizes are clamped to [min_size, max_size]
    min_size: int = 5
    max_size: int = 41
    default_size: int = 15
    cell_size_m: float = 0.3


@dataclass
class AppConfig:
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)
    server: ServerSettings = field(default_factory=ServerSettings)


def get_config_dir() -> Path:
    """
    Directory holding the settings file.

    Returns:
        Path to ~/.config/mazeanchor/ (not created)
    """
    return Path.home() / ".config" / "mazeanchor"


def get_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    override = env.get("MAZEANCHOR_CONFIG")
    if override:
        return Path(override).expanduser()
    return get_config_dir() / CONFIG_FILENAME


def _apply(target: Any, data: Dict[str, Any], section: str) -> None:
    """Copy known keys of ``data`` onto dataclass ``target``."""
    known = {f.name for f in fields(target)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %s.%s", section, key)
            continue
        setattr(target, key, value)


def _section(data: Dict[str, Any], key: str, name: str) -> Dict[str, Any]:
    """Settings section ``key`` of ``data``; anything but an object is skipped."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Ignoring setting %s: expected an object, got %s", name, type(value).__name__)
        return {}
    return dict(value)


def _config_from_dict(data: Dict[str, Any]) -> AppConfig:
    config = AppConfig()

    pipeline = _section(data, "pipeline", "pipeline")
    geometry = _section(pipeline, "geometry", "pipeline.geometry")
    pipeline.pop("geometry", None)
    _apply(config.pipeline, pipeline, "pipeline")
    _apply(config.pipeline.geometry, geometry, "pipeline.geometry")
    _apply(config.server, _section(data, "server", "server"), "server")
    return config


def _env_number(env: Mapping[str, str], key: str, cast: Callable[[str], Any]) -> Optional[Any]:
    raw = env.get(key)
    if not raw:
        return None
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a valid %s", key, raw, cast.__name__)
        return None


def _apply_env(config: AppConfig, env: Mapping[str, str]) -> None:
    port = _env_number(env, "PORT", int)
    if port is not None:
        config.server.port = port
    if env.get("MAZEANCHOR_HOST"):
        config.server.host = env["MAZEANCHOR_HOST"]
    if env.get("MAZEANCHOR_BACKEND_URL"):
        config.pipeline.backend_url = env["MAZEANCHOR_BACKEND_URL"]
    timeout = _env_number(env, "MAZEANCHOR_BACKEND_TIMEOUT", float)
    if timeout is not None:
        config.pipeline.backend_timeout = timeout


def load_config(
    path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Load settings from file and environment.

    A missing file yields defaults. An unreadable or malformed file is
    logged and ignored, as are sections that are not JSON objects and
    environment numbers that do not parse. The rest of the file still
    applies.

    Args:
        path: Settings file; defaults to get_config_path()
        env: Environment mapping; defaults to os.environ

    Returns:
        AppConfig with all layers applied
    """
    env = os.environ if env is None else env
    path = Path(path) if path is not None else get_config_path(env)

    config = AppConfig()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError("settings file must hold a JSON object")
            config = _config_from_dict(data)
        except (OSError, json.JSONDecodeError, TypeError) as e:
            logger.warning("Ignoring settings file %s: %s", path, e)

    _apply_env(config, env)
    return config


def save_config(config: AppConfig, path: Optional[Path] = None) -> Path:
    """
    Write settings as JSON.

    Returns:
        Path to the saved file

    Raises:
        IOError: If the file cannot be written
    """
    path = Path(path) if path is not None else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(config), f, indent=2)
    return path


__all__ = [
    'AppConfig',
    'ServerSettings',
    'PipelineSettings',
    'GeometrySettings',
    'get_config_dir',
    'get_config_path',
    'load_config',
    'save_config',
]
