"""Lifting quotient actions to symmetric effects on both representatives.

An action on a class ``[u]`` of RP^2 pulls back along the covering map
``S^2 -> RP^2`` to a pair of effects, one at ``u`` and one at ``-u``. Every
branch here builds that pair together, so no caller can end up holding an
effect on only one side of the identification.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Tuple, Union

from seamviz.errors import UnknownActionError
from seamviz.quotient import QuotientClass, get_both_representatives
from seamviz.vec import Vec3, approx_eq, neg

logger = logging.getLogger(__name__)

# Fixed per-branch colours. They duplicate the selection defaults instead of
# reading SelectionState.colors, so a recoloured selection is not reflected
# in pulled-back spotlights or traces.
SPOTLIGHT_COLOR_U = "#00e5bc"
SPOTLIGHT_COLOR_NEG_U = "#6366f1"
TRACE_COLOR_U = "#00e5bc"
TRACE_COLOR_NEG_U = "#6366f1"


## actions

@dataclass(frozen=True)
class Select:
    type: ClassVar[str] = "Select"
    qclass: QuotientClass
    aperture: float


@dataclass(frozen=True)
class Paint:
    type: ClassVar[str] = "Paint"
    qclass: QuotientClass
    radius: float
    color: str


@dataclass(frozen=True)
class Stamp:
    type: ClassVar[str] = "Stamp"
    qclass: QuotientClass
    pattern: str


@dataclass(frozen=True)
class Trace:
    """A path drawn on the sphere; its antipodal image is traced as well."""

    type: ClassVar[str] = "Trace"
    path: Tuple[Vec3, ...]


QuotientAction = Union[Select, Paint, Stamp, Trace]


## effects

@dataclass(frozen=True)
class SourceEffect:
    """An effect in source space: ``spotlight``, ``paint``, ``stamp`` or ``trace``."""

    type: str
    position: Vec3
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PullbackResult:
    action: QuotientAction
    effect_on_u: SourceEffect
    effect_on_neg_u: SourceEffect


def _pullback_select(action: Select) -> PullbackResult:
    u, neg_u = get_both_representatives(action.qclass)
    return PullbackResult(
        action=action,
        effect_on_u=SourceEffect("spotlight", u, {
            "aperture": action.aperture,
            "color": SPOTLIGHT_COLOR_U,
            "intensity": 1.0,
        }),
        effect_on_neg_u=SourceEffect("spotlight", neg_u, {
            "aperture": action.aperture,
            "color": SPOTLIGHT_COLOR_NEG_U,
            "intensity": 1.0,
        }),
    )


def _pullback_paint(action: Paint) -> PullbackResult:
    u, neg_u = get_both_representatives(action.qclass)
    params = {"radius": action.radius, "color": action.color, "blend_mode": "normal"}
    return PullbackResult(
        action=action,
        effect_on_u=SourceEffect("paint", u, dict(params)),
        effect_on_neg_u=SourceEffect("paint", neg_u, dict(params)),
    )


def _pullback_stamp(action: Stamp) -> PullbackResult:
    u, neg_u = get_both_representatives(action.qclass)
    # the -u copy is turned a half turn so the pair reads as reflections
    return PullbackResult(
        action=action,
        effect_on_u=SourceEffect("stamp", u, {
            "pattern": action.pattern,
            "rotation": 0.0,
            "scale": 1.0,
        }),
        effect_on_neg_u=SourceEffect("stamp", neg_u, {
            "pattern": action.pattern,
            "rotation": math.pi,
            "scale": 1.0,
        }),
    )


def _pullback_trace(action: Trace) -> PullbackResult:
    path_u = tuple(action.path)
    if not path_u:
        raise ValueError("trace action needs at least one point")
    path_neg_u = tuple(neg(p) for p in path_u)
    return PullbackResult(
        action=action,
        effect_on_u=SourceEffect("trace", path_u[0], {
            "path": path_u,
            "line_width": 2,
            "color": TRACE_COLOR_U,
        }),
        effect_on_neg_u=SourceEffect("trace", path_neg_u[0], {
            "path": path_neg_u,
            "line_width": 2,
            "color": TRACE_COLOR_NEG_U,
        }),
    )


_HANDLERS: Dict[str, Callable[[Any], PullbackResult]] = {
    Select.type: _pullback_select,
    Paint.type: _pullback_paint,
    Stamp.type: _pullback_stamp,
    Trace.type: _pullback_trace,
}


def pullback_action(action: QuotientAction) -> PullbackResult:
    """Lift ``action`` to its pair of source-space effects.

    Raises :class:`~seamviz.errors.UnknownActionError` for an action whose
    ``type`` tag is not one of ``Select``, ``Paint``, ``Stamp`` or ``Trace``.
    """

    handler = _HANDLERS.get(getattr(action, "type", None))
    if handler is None:
        raise UnknownActionError(action)
    return handler(action)


def validate_symmetry(result: PullbackResult) -> bool:
    """Check that the two effects match in type and sit at antipodal positions.

    Diagnostic only: a violation is logged and ``False`` returned.
    """

    on_u = result.effect_on_u
    on_neg_u = result.effect_on_neg_u

    if on_u.type != on_neg_u.type:
        logger.error("effect types do not match: %s vs %s", on_u.type, on_neg_u.type)
        return False
    if not approx_eq(on_neg_u.position, neg(on_u.position), 1e-6):
        logger.error("positions are not antipodal: %s vs %s",
                     on_u.position, on_neg_u.position)
        return False
    return True


def compose_pullbacks(results: List[PullbackResult]) -> Optional[PullbackResult]:
    """Placeholder composition: returns the last result, or ``None`` if empty.

    Effects of earlier results are not merged.
    """

    if not results:
        return None
    return results[-1]


def create_pullback_result(action: QuotientAction, effect_on_u: SourceEffect,
                           effect_on_neg_u: SourceEffect) -> PullbackResult:
    return PullbackResult(action=action, effect_on_u=effect_on_u,
                          effect_on_neg_u=effect_on_neg_u)


def get_effects(result: PullbackResult) -> Tuple[SourceEffect, SourceEffect]:
    return result.effect_on_u, result.effect_on_neg_u


def transform_effects(result: PullbackResult,
                      transform: Callable[[SourceEffect], SourceEffect]) -> PullbackResult:
    """Apply ``transform`` to both effects of ``result``."""

    return PullbackResult(action=result.action,
                          effect_on_u=transform(result.effect_on_u),
                          effect_on_neg_u=transform(result.effect_on_neg_u))


def filter_pullbacks(results: Iterable[PullbackResult],
                     predicate: Callable[[PullbackResult], bool]) -> List[PullbackResult]:
    return [r for r in results if predicate(r)]


__all__ = [
    "SPOTLIGHT_COLOR_U",
    "SPOTLIGHT_COLOR_NEG_U",
    "TRACE_COLOR_U",
    "TRACE_COLOR_NEG_U",
    "Select",
    "Paint",
    "Stamp",
    "Trace",
    "QuotientAction",
    "SourceEffect",
    "PullbackResult",
    "pullback_action",
    "validate_symmetry",
    "compose_pullbacks",
    "create_pullback_result",
    "get_effects",
    "transform_effects",
    "filter_pullbacks",
]
