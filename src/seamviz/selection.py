"""Selection state, user intents and render directives.

The UI sends an intent, :func:`process_intent` returns the next
:class:`SelectionState`, and :func:`generate_render_directives` describes
what to draw for that state. The UI performs no geometry of its own.

State is owned by the caller and replaced, never mutated: always pass the
most recently returned state into the next call. Calls that may race must be
serialised by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from seamviz.colors import require_hex
from seamviz.config import DEFAULT_CONFIG, EngineConfig
from seamviz.quotient import (
    QuotientClass,
    class_of,
    get_both_representatives,
    point_in_quotient_cone,
    quotient_cone_weight,
)
from seamviz.vec import Vec3, angle, approx_eq, neg, normalize

logger = logging.getLogger(__name__)


## intents

@dataclass(frozen=True)
class ClickQuotient:
    """Click on the quotient sphere."""

    type: ClassVar[str] = "ClickQuotient"
    point: Vec3


@dataclass(frozen=True)
class ClickSource:
    """Click on the source object; handled exactly like :class:`ClickQuotient`."""

    type: ClassVar[str] = "ClickSource"
    point: Vec3


@dataclass(frozen=True)
class DragOrbit:
    type: ClassVar[str] = "DragOrbit"
    delta: Tuple[float, float]


@dataclass(frozen=True)
class SetAperture:
    type: ClassVar[str] = "SetAperture"
    value: float


@dataclass(frozen=True)
class Reset:
    type: ClassVar[str] = "Reset"


SelectionIntent = Union[ClickQuotient, ClickSource, DragOrbit, SetAperture, Reset]


## state

@dataclass(frozen=True)
class SelectionColors:
    """Colours of the two representatives, as ``#rrggbb``."""

    u: str
    neg_u: str

    def __post_init__(self) -> None:
        require_hex(self.u)
        require_hex(self.neg_u)


@dataclass(frozen=True)
class SelectionState:
    selected_class: QuotientClass
    aperture: float
    colors: SelectionColors


@dataclass(frozen=True)
class QuotientSelection:
    """A class together with a cone half-angle around it."""

    qclass: QuotientClass
    aperture: float


def _default_colors(config: EngineConfig) -> SelectionColors:
    return SelectionColors(u=config.color_u, neg_u=config.color_neg_u)


def create_default_selection(config: EngineConfig = DEFAULT_CONFIG) -> SelectionState:
    return SelectionState(selected_class=class_of(config.default_direction),
                          aperture=config.default_aperture,
                          colors=_default_colors(config))


def select_class(qclass: QuotientClass, aperture: Optional[float] = None,
                 config: EngineConfig = DEFAULT_CONFIG) -> SelectionState:
    """Fresh state selecting ``qclass``, with default colours."""

    if aperture is None:
        aperture = config.default_aperture
    return SelectionState(selected_class=qclass, aperture=aperture,
                          colors=_default_colors(config))


def set_colors(state: SelectionState, u_color: str, neg_u_color: str) -> SelectionState:
    """Return ``state`` with new representative colours.

    Raises ``ValueError`` unless both colours are ``#rrggbb``.
    """

    return replace(state, colors=SelectionColors(u=u_color, neg_u=neg_u_color))


def get_current_selection(state: SelectionState) -> QuotientSelection:
    return QuotientSelection(qclass=state.selected_class, aperture=state.aperture)


def process_intent(state: SelectionState, intent: SelectionIntent,
                   config: EngineConfig = DEFAULT_CONFIG) -> SelectionState:
    """Apply one user intent and return the resulting state.

    ``SetAperture`` is stored as given; clamping belongs to the caller.
    ``DragOrbit`` leaves the selection alone because camera state lives
    elsewhere. An unrecognised intent is logged and the current state is
    returned unchanged.
    """

    tag = getattr(intent, "type", None)

    if tag in (ClickQuotient.type, ClickSource.type):
        return replace(state, selected_class=class_of(intent.point))
    if tag == SetAperture.type:
        return replace(state, aperture=intent.value)
    if tag == Reset.type:
        return create_default_selection(config)
    if tag == DragOrbit.type:
        return state

    logger.warning("unknown selection intent: %r", intent)
    return state


## render directives

@dataclass(frozen=True)
class Spotlight:
    direction: Vec3
    color: str
    aperture: float


@dataclass(frozen=True)
class QuotientMarker:
    qclass: QuotientClass
    aperture: float
    colors: Tuple[str, str]


@dataclass(frozen=True)
class Highlight:
    position: Vec3
    radius: float
    color: str


@dataclass(frozen=True)
class RenderDirective:
    """What the UI should draw for one selection state."""

    spotlights: Tuple[Spotlight, Spotlight]
    quotient_markers: Tuple[QuotientMarker, ...]
    highlights: Optional[Tuple[Highlight, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain lists and dicts, ready for JSON encoding."""

        data: Dict[str, Any] = {
            "spotlights": [
                {"direction": list(s.direction), "color": s.color, "aperture": s.aperture}
                for s in self.spotlights
            ],
            "quotient_markers": [
                {
                    "class": {
                        "canonical": list(m.qclass.canonical),
                        "representatives": [list(r) for r in m.qclass.representatives],
                    },
                    "aperture": m.aperture,
                    "colors": list(m.colors),
                }
                for m in self.quotient_markers
            ],
        }
        if self.highlights is not None:
            data["highlights"] = [
                {"position": list(h.position), "radius": h.radius, "color": h.color}
                for h in self.highlights
            ]
        return data


def generate_render_directives(state: SelectionState) -> RenderDirective:
    """Two spotlights, one per representative, and one quotient marker."""

    u, neg_u = get_both_representatives(state.selected_class)
    colors = state.colors
    return RenderDirective(
        spotlights=(Spotlight(direction=u, color=colors.u, aperture=state.aperture),
                    Spotlight(direction=neg_u, color=colors.neg_u, aperture=state.aperture)),
        quotient_markers=(QuotientMarker(qclass=state.selected_class,
                                         aperture=state.aperture,
                                         colors=(colors.u, colors.neg_u)),),
    )


def process_and_render(state: SelectionState, intent: SelectionIntent,
                       config: EngineConfig = DEFAULT_CONFIG) -> Tuple[SelectionState, RenderDirective]:
    new_state = process_intent(state, intent, config)
    return new_state, generate_render_directives(new_state)


## queries

def is_point_highlighted(state: SelectionState, point: Vec3) -> bool:
    return point_in_quotient_cone(normalize(point), state.selected_class, state.aperture)


def selection_weight(state: SelectionState, point: Vec3) -> float:
    """Linear cone weight of ``point`` in ``[0, 1]``."""

    return quotient_cone_weight(normalize(point), state.selected_class, state.aperture)


def closer_representative(state: SelectionState, point: Vec3) -> str:
    """``"u"`` if ``point`` is strictly nearer ``u`` than ``-u``, else ``"neg_u"``."""

    u, neg_u = get_both_representatives(state.selected_class)
    p = normalize(point)
    return "u" if angle(p, u) < angle(p, neg_u) else "neg_u"


def validate_pairing(state: SelectionState) -> bool:
    """Check ``representatives[1] == -representatives[0]`` within ``1e-6``.

    Intended for tests and development checks; logs and returns ``False`` on
    a violation rather than raising.
    """

    u, neg_u = get_both_representatives(state.selected_class)
    expected = neg(u)
    ok = approx_eq(neg_u, expected, 1e-6)
    if not ok:
        logger.error("pairing violation: u=%s neg_u=%s expected=%s", u, neg_u, expected)
    return ok


__all__ = [
    "ClickQuotient",
    "ClickSource",
    "DragOrbit",
    "SetAperture",
    "Reset",
    "SelectionIntent",
    "SelectionColors",
    "SelectionState",
    "QuotientSelection",
    "create_default_selection",
    "select_class",
    "set_colors",
    "get_current_selection",
    "process_intent",
    "Spotlight",
    "QuotientMarker",
    "Highlight",
    "RenderDirective",
    "generate_render_directives",
    "process_and_render",
    "is_point_highlighted",
    "selection_weight",
    "closer_representative",
    "validate_pairing",
]
