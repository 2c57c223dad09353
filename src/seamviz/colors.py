"""Colour helpers for antipodal colour pairs.

Colours travel through the engine as ``#rrggbb`` strings. A colour is also a
point of the RGB cube ``[0, 1]^3``; its antipodal colour is the reflection
through the cube centre, mirroring the ``u`` / ``-u`` pairing on the sphere.
"""

from __future__ import annotations

import re

from seamviz.vec import Vec3, clamp

_HEX_RE = re.compile(r"#[0-9A-Fa-f]{6}")


def is_valid_hex(value: str) -> bool:
    """``True`` only for the exact ``#rrggbb`` form (either case)."""

    return isinstance(value, str) and _HEX_RE.fullmatch(value) is not None


def require_hex(value: str) -> str:
    """Return ``value`` unchanged or raise ``ValueError`` if it is not ``#rrggbb``."""

    if not is_valid_hex(value):
        raise ValueError(f"invalid hex colour: {value!r}")
    return value


def hex_to_rgb_vec(value: str) -> Vec3:
    """Convert ``#rrggbb`` (leading ``#`` optional) into channels in ``[0, 1]``."""

    clean = value[1:] if value.startswith("#") else value
    if not re.fullmatch(r"[0-9A-Fa-f]{6}", clean):
        raise ValueError(f"invalid hex colour: {value!r}")
    return (
        int(clean[0:2], 16) / 255.0,
        int(clean[2:4], 16) / 255.0,
        int(clean[4:6], 16) / 255.0,
    )


def rgb_vec_to_hex(rgb: Vec3) -> str:
    channels = [int(round(clamp(c, 0.0, 1.0) * 255)) for c in rgb[:3]]
    return "#" + "".join(f"{c:02x}" for c in channels)


def antipodal_color(value: str) -> str:
    """Reflect a colour through the centre of the RGB cube."""

    r, g, b = hex_to_rgb_vec(value)
    return rgb_vec_to_hex((1.0 - r, 1.0 - g, 1.0 - b))


def lerp_color(start: str, end: str, t: float) -> str:
    a = hex_to_rgb_vec(start)
    b = hex_to_rgb_vec(end)
    return rgb_vec_to_hex((
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    ))


def brightness(value: str) -> float:
    """Perceptual luminance in ``[0, 1]``."""

    r, g, b = hex_to_rgb_vec(value)
    return 0.299 * r + 0.587 * g + 0.114 * b


def contrast_color(value: str) -> str:
    return "#000000" if brightness(value) > 0.5 else "#ffffff"


__all__ = [
    "is_valid_hex",
    "require_hex",
    "hex_to_rgb_vec",
    "rgb_vec_to_hex",
    "antipodal_color",
    "lerp_color",
    "brightness",
    "contrast_color",
]
