"""Engine configuration: calibration limits and selection defaults.

``DEFAULT_CONFIG`` is the only module-level state in the engine and it is
immutable. Overrides are read from a YAML mapping whose keys are the field
names of :class:`EngineConfig`; ``SEAMVIZ_CONFIG`` names the file when no
path is given.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from seamviz.colors import is_valid_hex
from seamviz.errors import ConfigError
from seamviz.vec import Vec3, norm

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SEAMVIZ_CONFIG"


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration shared by calibration and selection."""

    span_fraction: float = 0.4
    min_aperture: float = 0.05
    max_aperture: float = math.pi / 2
    default_aperture: float = 0.4
    default_direction: Vec3 = (0.0, 1.0, 0.0)
    color_u: str = "#00e5bc"
    color_neg_u: str = "#6366f1"

    def __post_init__(self) -> None:
        direction = self.default_direction
        if not isinstance(direction, (tuple, list)) or len(direction) != 3:
            raise ConfigError(f"default_direction must have three components: {direction!r}")
        try:
            direction = tuple(float(c) for c in direction)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"default_direction must be numeric: {self.default_direction!r}") from exc
        object.__setattr__(self, "default_direction", direction)

        for name in ("span_fraction", "min_aperture", "max_aperture", "default_aperture"):
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, float(value))
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{name} must be a number, got {value!r}") from exc

        if norm(direction) == 0.0:
            raise ConfigError("default_direction must be non-zero")
        if self.span_fraction <= 0:
            raise ConfigError(f"span_fraction must be positive, got {self.span_fraction}")
        if not 0 < self.min_aperture <= self.max_aperture <= math.pi:
            raise ConfigError(
                f"apertures must satisfy 0 < min <= max <= pi, got "
                f"min={self.min_aperture}, max={self.max_aperture}"
            )
        if self.default_aperture <= 0 or self.default_aperture > math.pi:
            raise ConfigError(f"default_aperture out of range: {self.default_aperture}")
        for name in ("color_u", "color_neg_u"):
            value = getattr(self, name)
            if not is_valid_hex(value):
                raise ConfigError(f"{name} must be a #rrggbb colour, got {value!r}")

    def replace(self, **changes: Any) -> "EngineConfig":
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        data["default_direction"] = list(self.default_direction)
        return data


DEFAULT_CONFIG = EngineConfig()

_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(EngineConfig))


def config_from_mapping(data: Dict[str, Any], base: EngineConfig = DEFAULT_CONFIG) -> EngineConfig:
    """Overlay ``data`` on ``base``; unknown keys are rejected."""

    if not isinstance(data, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {unknown}")
    return base.replace(**data)


def get_config_path() -> Optional[str]:
    """Return the configuration file named by ``SEAMVIZ_CONFIG``, if any."""

    path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return path or None


def load_config(path: Path | str | None = None) -> EngineConfig:
    """Load an :class:`EngineConfig` from YAML.

    With no ``path`` the ``SEAMVIZ_CONFIG`` environment variable is used, and
    with neither the defaults are returned.
    """

    if path is None:
        path = get_config_path()
        if path is None:
            logger.debug("no configuration file given; using defaults")
            return DEFAULT_CONFIG

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"could not parse {config_path}: {exc}") from exc

    config = config_from_mapping(data)
    logger.info("loaded configuration from %s", config_path)
    return config


__all__ = [
    "CONFIG_ENV_VAR",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "config_from_mapping",
    "get_config_path",
    "load_config",
]
