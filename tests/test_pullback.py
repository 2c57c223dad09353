import math
from dataclasses import dataclass, replace
from typing import ClassVar

import pytest

from seamviz.errors import SeamVizError, UnknownActionError
from seamviz.pullback import (
    Paint,
    PullbackResult,
    Select,
    SourceEffect,
    Stamp,
    Trace,
    compose_pullbacks,
    create_pullback_result,
    filter_pullbacks,
    get_effects,
    pullback_action,
    transform_effects,
    validate_symmetry,
)
from seamviz.quotient import class_of
from seamviz.vec import approx_eq, neg


@dataclass(frozen=True)
class Erase:
    type: ClassVar[str] = "Erase"


Q = class_of((0.0, -3.0, 4.0))


def test_select_produces_spotlight_pair():
    result = pullback_action(Select(qclass=Q, aperture=0.3))
    u, neg_u = Q.representatives
    assert result.effect_on_u.type == "spotlight"
    assert result.effect_on_u.position == u
    assert result.effect_on_neg_u.position == neg_u
    assert result.effect_on_u.parameters == {"aperture": 0.3, "color": "#00e5bc", "intensity": 1.0}
    assert result.effect_on_neg_u.parameters["color"] == "#6366f1"
    assert validate_symmetry(result)


def test_paint_shares_parameters():
    result = pullback_action(Paint(qclass=Q, radius=0.2, color="#ff8800"))
    assert result.effect_on_u.parameters == result.effect_on_neg_u.parameters
    assert result.effect_on_u.parameters["blend_mode"] == "normal"
    assert validate_symmetry(result)


def test_stamp_rotates_negative_copy():
    result = pullback_action(Stamp(qclass=Q, pattern="star"))
    assert result.effect_on_u.parameters["rotation"] == 0.0
    assert math.isclose(result.effect_on_neg_u.parameters["rotation"], math.pi)
    assert result.effect_on_neg_u.parameters["pattern"] == "star"
    assert validate_symmetry(result)


def test_trace_negates_path():
    path = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
    result = pullback_action(Trace(path=path))
    assert result.effect_on_u.position == path[0]
    assert result.effect_on_neg_u.parameters["path"] == tuple(neg(p) for p in path)
    assert result.effect_on_u.parameters["line_width"] == 2
    assert validate_symmetry(result)


def test_empty_trace_is_rejected():
    with pytest.raises(ValueError):
        pullback_action(Trace(path=()))


def test_unknown_action_raises():
    with pytest.raises(UnknownActionError) as info:
        pullback_action(Erase())
    assert "Erase" in str(info.value)
    assert isinstance(info.value, SeamVizError)
    assert isinstance(info.value, ValueError)


def test_validate_symmetry_detects_violations(caplog):
    good = pullback_action(Select(qclass=Q, aperture=0.3))
    moved = replace(good, effect_on_neg_u=replace(good.effect_on_neg_u, position=good.effect_on_u.position))
    retyped = replace(good, effect_on_neg_u=replace(good.effect_on_neg_u, type="paint"))
    assert not validate_symmetry(moved)
    assert not validate_symmetry(retyped)
    assert "antipodal" in caplog.text


def test_compose_pullbacks_placeholder():
    a = pullback_action(Select(qclass=Q, aperture=0.3))
    b = pullback_action(Stamp(qclass=Q, pattern="dot"))
    assert compose_pullbacks([]) is None
    assert compose_pullbacks([a, b]) is b


def test_result_helpers():
    e1 = SourceEffect("paint", (1.0, 0.0, 0.0))
    e2 = SourceEffect("paint", (-1.0, 0.0, 0.0))
    action = Paint(qclass=class_of((1.0, 0.0, 0.0)), radius=0.1, color="#000000")
    result = create_pullback_result(action, e1, e2)
    assert isinstance(result, PullbackResult)
    assert get_effects(result) == (e1, e2)
    assert e1.parameters == {}

    scaled = transform_effects(result, lambda e: replace(e, parameters={"radius": 0.5}))
    assert scaled.effect_on_u.parameters == {"radius": 0.5}
    assert scaled.effect_on_neg_u.parameters == {"radius": 0.5}
    assert validate_symmetry(scaled)

    results = [result, pullback_action(Select(qclass=Q, aperture=0.1))]
    spot = filter_pullbacks(results, lambda r: r.effect_on_u.type == "spotlight")
    assert len(spot) == 1 and spot[0].action.aperture == 0.1


def test_positions_are_antipodal_for_all_actions():
    actions = [
        Select(qclass=Q, aperture=0.5),
        Paint(qclass=Q, radius=1.0, color="#112233"),
        Stamp(qclass=Q, pattern="x"),
        Trace(path=((0.6, 0.8, 0.0),)),
    ]
    for action in actions:
        r = pullback_action(action)
        assert r.action is action
        assert approx_eq(r.effect_on_neg_u.position, neg(r.effect_on_u.position))
