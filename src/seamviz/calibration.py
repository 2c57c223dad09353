"""Mapping between UI controls and mathematical units.

The viewport enters the engine only here, through one characteristic size
from which marker scales are derived. Nothing computed in this module feeds
back into quotient-space geometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict

from seamviz.config import DEFAULT_CONFIG, EngineConfig
from seamviz.vec import clamp

#: visible span of the unit sphere (its diameter) in intrinsic units
INTRINSIC_UNIT_SPAN = 2.0


@dataclass(frozen=True)
class ViewportDimensions:
    width: float
    height: float
    pixel_ratio: float = 1.0


@dataclass(frozen=True)
class CalibrationState:
    """Scale relating viewport pixels to intrinsic units."""

    characteristic_size_px: float
    intrinsic_unit_span: float
    pixels_per_unit: float
    viewport: ViewportDimensions


def create_calibration(viewport: ViewportDimensions,
                       config: EngineConfig = DEFAULT_CONFIG) -> CalibrationState:
    """Derive a calibration from the smaller viewport dimension."""

    size = min(viewport.width, viewport.height) * viewport.pixel_ratio
    pixels_per_unit = size / (config.span_fraction * INTRINSIC_UNIT_SPAN)
    return CalibrationState(characteristic_size_px=size,
                            intrinsic_unit_span=INTRINSIC_UNIT_SPAN,
                            pixels_per_unit=pixels_per_unit,
                            viewport=viewport)


def recalibrate(calibration: CalibrationState, viewport: ViewportDimensions,
                config: EngineConfig = DEFAULT_CONFIG) -> CalibrationState:
    return create_calibration(viewport, config)


def slider_to_aperture(slider_value: float, config: EngineConfig = DEFAULT_CONFIG) -> float:
    """Map a slider position in ``[0, 1]`` linearly onto ``[min_aperture, max_aperture]``."""

    t = clamp(slider_value, 0.0, 1.0)
    return config.min_aperture + t * (config.max_aperture - config.min_aperture)


def aperture_to_slider(aperture: float, config: EngineConfig = DEFAULT_CONFIG) -> float:
    lo, hi = config.min_aperture, config.max_aperture
    if hi == lo:
        return 0.0
    return (clamp(aperture, lo, hi) - lo) / (hi - lo)


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def format_angle(angle_rad: float) -> str:
    return f"{radians_to_degrees(angle_rad):.1f}°"


def cone_solid_angle(aperture: float) -> float:
    """Solid angle in steradians of a cone with half-angle ``aperture``."""

    return 2.0 * math.pi * (1.0 - math.cos(aperture))


def aperture_from_coverage(coverage_fraction: float) -> float:
    """Half-angle whose cone covers ``coverage_fraction`` of a hemisphere.

    A hemisphere subtends ``2 pi`` sr, so coverage is ``1 - cos(theta)``.
    """

    return math.acos(1.0 - clamp(coverage_fraction, 0.0, 1.0))


def lerp_aperture(start: float, end: float, t: float) -> float:
    return start + (end - start) * clamp(t, 0.0, 1.0)


def marker_size_for_aperture(aperture: float) -> float:
    """Marker radius in intrinsic units, ``0.15 sin(aperture)`` held to ``[0.02, 0.1]``."""

    return clamp(0.15 * math.sin(aperture), 0.02, 0.1)


def get_default_config() -> Dict[str, Any]:
    return DEFAULT_CONFIG.as_dict()


__all__ = [
    "INTRINSIC_UNIT_SPAN",
    "ViewportDimensions",
    "CalibrationState",
    "create_calibration",
    "recalibrate",
    "slider_to_aperture",
    "aperture_to_slider",
    "degrees_to_radians",
    "radians_to_degrees",
    "format_angle",
    "cone_solid_angle",
    "aperture_from_coverage",
    "lerp_aperture",
    "marker_size_for_aperture",
    "get_default_config",
]
