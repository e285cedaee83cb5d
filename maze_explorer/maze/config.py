from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from flask import current_app, has_app_context

from .errors import InvalidConfigError, InvalidDimensionsError

# Environment / Flask config key -> MazeConfig attribute
ENV_MAP = {
    "MAZE_WIDTH": "width",
    "MAZE_HEIGHT": "height",
    "MAZE_CELL_SIZE": "cell_size",
    "MAZE_SEED": "seed",
    "MAZE_ENABLE_METRICS": "enable_metrics",
}

_FALSY = {"0", "false", "no", "off", ""}


@dataclass
class MazeConfig:
    width: int = 10
    height: int = 10
    cell_size: float = 1.0
    seed: Optional[int] = None
    enable_metrics: bool = True

    def validate(self) -> "MazeConfig":
        for value in (self.width, self.height):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionsError(self.width, self.height)
        return self

    def with_overrides(self, **overrides) -> "MazeConfig":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown MazeConfig fields: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _coerce(attr: str, raw):
    if attr == "enable_metrics":
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() not in _FALSY
    if attr == "cell_size":
        try:
            return float(raw)
        except (TypeError, ValueError):
            raise InvalidConfigError(attr, raw) from None
    if attr in ("width", "height"):
        try:
            return int(raw)
        except (TypeError, ValueError):
            # keep the raw value so validate() reports it
            return raw
    if attr == "seed":
        if raw is None or str(raw).strip() == "":
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise InvalidConfigError(attr, raw) from None
    return raw


def load_config(base: Optional[MazeConfig] = None) -> MazeConfig:
    """Resolve a MazeConfig from defaults, environment and Flask app config.

    Precedence (lowest to highest): ``base`` / dataclass defaults, ``MAZE_*``
    environment variables, ``MAZE_*`` keys of the active Flask app config.
    """
    cfg = replace(base) if base is not None else MazeConfig()
    for key, attr in ENV_MAP.items():
        if key in os.environ:
            setattr(cfg, attr, _coerce(attr, os.environ[key]))
    if has_app_context():
        app_cfg = current_app.config
        for key, attr in ENV_MAP.items():
            if app_cfg.get(key) is not None:
                setattr(cfg, attr, _coerce(attr, app_cfg[key]))
    return cfg


__all__ = ["MazeConfig", "load_config", "ENV_MAP"]
