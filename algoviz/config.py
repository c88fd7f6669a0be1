"""Runtime settings for layout and playback."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, MutableMapping, Optional, TypeVar

import logging
import math
import os

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENV_PREFIX = "ALGOVIZ_"
DEFAULT_ENV_FILE = Path.home() / ".env"


@dataclass(frozen=True)
class LayoutConfig:
    """Canvas coordinates used when positioning tree nodes."""

    root_x: float = 400
    root_y: float = 50
    horizontal_spacing: float = 200
    level_height: float = 80


@dataclass(frozen=True)
class Settings:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    default_speed: float = 1.0
    log_level: str = "WARNING"
    unicode: bool = True


def load_settings(
    env: Optional[MutableMapping[str, str]] = None,
    env_file: Optional[Path] = DEFAULT_ENV_FILE,
) -> Settings:
    """Build settings from ALGOVIZ_* variables, after reading an optional .env file."""
    if env is None:
        env = os.environ
    if env_file is not None:
        load_env_file(env_file, env)

    layout = LayoutConfig(
        root_x=_read(env, "ROOT_X", finite_float, LayoutConfig.root_x),
        root_y=_read(env, "ROOT_Y", finite_float, LayoutConfig.root_y),
        horizontal_spacing=_read(env, "SPACING", finite_float, LayoutConfig.horizontal_spacing),
        level_height=_read(env, "LEVEL_HEIGHT", finite_float, LayoutConfig.level_height),
    )
    log_level = env.get(ENV_PREFIX + "LOG_LEVEL", Settings.log_level).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning("Ignoring unknown log level %r", log_level)
        log_level = Settings.log_level

    return Settings(
        layout=layout,
        default_speed=_read(env, "SPEED", finite_float, Settings.default_speed),
        log_level=log_level,
        unicode=not _read_flag(env, "ASCII"),
    )


def load_env_file(path: Path, env: MutableMapping[str, str]) -> None:
    """Copy KEY=VALUE lines from path into env without overriding existing keys."""
    try:
        raw = path.read_text(encoding="utf-8", errors="replace")
    except (FileNotFoundError, IsADirectoryError, PermissionError):
        return
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith("export "):
            stripped = stripped[7:].lstrip()
        if "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (
            len(value) >= 2
            and value[0] == value[-1]
            and value[0] in ("'", '"')
        ):
            value = value[1:-1]
        if key not in env:
            env[key] = value


def finite_float(raw: str) -> float:
    """float() that also rejects nan and infinities."""
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {raw!r}")
    return value


def _read(
    env: MutableMapping[str, str], name: str, convert: Callable[[str], T], default: T
) -> T:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        logger.warning("Ignoring malformed %s%s=%r", ENV_PREFIX, name, raw)
        return default


def _read_flag(env: MutableMapping[str, str], name: str) -> bool:
    raw = env.get(ENV_PREFIX + name, "")
    return raw.strip().lower() in ("1", "true", "yes", "on")
