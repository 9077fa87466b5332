"""Binary fan / cofan tests.

Tests cover:
    - mk builds a fan/cofan whose legs are exactly the given morphisms
    - lift_ / desc_ return the universal morphism together with both factorisation witnesses
    - hom_ext decides equality through the two legs
    - Broken limit witnesses are detected, not trusted
"""

import pytest

from category_base import (
    CompositionError,
    Cone,
    DiscreteCategory,
    DiscreteFunctor,
    IsLimit,
    UniversalPropertyViolation,
)
from binary_fan import BinaryCofan, BinaryFan, LiftResult
from concrete_categories import finset_coproduct_cocone, finset_product_cone
from walking_pair import LEFT, RIGHT


def _two_maps(finset, sets):
    W, X, Y = sets["W"], sets["X"], sets["Y"]
    f = finset.function(W, X, {"u": 1, "v": 2}.get, name="f")
    g = finset.function(W, Y, lambda w: "b", name="g")
    return f, g


# --- construction --------------------------------------------------------------


def test_fan_mk_exposes_legs_as_fst_and_snd(finset, sets):
    f, g = _two_maps(finset, sets)
    fan = BinaryFan.mk(finset, f, g)
    assert fan.apex == sets["W"]
    assert fan.fst is f
    assert fan.snd is g
    assert fan.diagram.obj(LEFT) == sets["X"]
    assert fan.diagram.obj(RIGHT) == sets["Y"]
    assert fan.verify()


def test_fan_mk_rejects_legs_with_different_sources(finset, sets, set_morphisms):
    f, _ = _two_maps(finset, sets)
    with pytest.raises(CompositionError):
        BinaryFan.mk(finset, f, set_morphisms["f"])


def test_cofan_mk_exposes_legs_as_inl_and_inr(finset, sets):
    X, Y, W = sets["X"], sets["Y"], sets["W"]
    f = finset.function(X, W, lambda x: "u")
    g = finset.function(Y, W, lambda y: "v")
    cofan = BinaryCofan.mk(finset, f, g)
    assert cofan.apex == W
    assert cofan.inl is f
    assert cofan.inr is g
    assert cofan.verify()


def test_of_cone_rejects_non_pair_shapes(finset, sets):
    shape = DiscreteCategory(("only",))
    X = sets["X"]
    cone = Cone(DiscreteFunctor(shape, finset, {"only": X}), X, {"only": finset.identity(X)})
    with pytest.raises(CompositionError):
        BinaryFan.of_cone(cone)


# --- universal property --------------------------------------------------------


def test_lift_returns_value_with_evidence(finset, sets):
    f, g = _two_maps(finset, sets)
    limit = finset_product_cone(finset, sets["X"], sets["Y"])
    result = BinaryFan.lift_(limit.is_limit, f, g)
    assert isinstance(result, LiftResult)
    assert result.first_eq and result.second_eq and result.holds
    assert result.morphism("u") == (1, "b")
    assert result.morphism("v") == (2, "b")


def test_desc_returns_value_with_evidence(finset, sets):
    X, Y, W = sets["X"], sets["Y"], sets["W"]
    f = finset.function(X, W, {1: "u", 2: "v"}.get)
    g = finset.function(Y, W, lambda y: "u")
    colimit = finset_coproduct_cocone(finset, X, Y)
    result = BinaryCofan.desc_(colimit.is_colimit, f, g)
    assert result.holds
    assert result.morphism((LEFT, 2)) == "v"
    assert result.morphism((RIGHT, "a")) == "u"


def test_require_raises_when_a_witness_fails():
    with pytest.raises(UniversalPropertyViolation):
        LiftResult(morphism=None, first_eq=True, second_eq=False).require()
    assert LiftResult(morphism="m", first_eq=True, second_eq=True).require() == "m"


def test_hom_ext_agrees_with_equality(finset, sets):
    W, X, Y = sets["W"], sets["X"], sets["Y"]
    limit = finset_product_cone(finset, X, Y)
    apex = limit.cone.apex
    morphisms = list(finset.hom_set(W, apex))
    for u in morphisms:
        for v in morphisms:
            assert BinaryFan.hom_ext(limit.is_limit, u, v) == finset.equal(u, v)


def test_cofan_hom_ext_agrees_with_equality(finset, sets):
    X, Y, W = sets["X"], sets["Y"], sets["W"]
    colimit = finset_coproduct_cocone(finset, X, Y)
    morphisms = list(finset.hom_set(colimit.cocone.apex, W))
    for u in morphisms:
        for v in morphisms:
            assert BinaryCofan.hom_ext(colimit.is_colimit, u, v) == finset.equal(u, v)


def test_broken_limit_witness_is_reported(finset, sets):
    f, g = _two_maps(finset, sets)
    honest = finset_product_cone(finset, sets["X"], sets["Y"])
    apex = honest.cone.apex
    constant = IsLimit(honest.cone, lambda s: finset.function(s.apex, apex, lambda w: (1, "a")))
    fan = BinaryFan.mk(finset, f, g)
    assert not constant.verify_fac(fan)
    assert not BinaryFan.lift_(constant, f, g).holds
    with pytest.raises(UniversalPropertyViolation):
        constant.verify_strict(fan)


def test_verify_uniq_accepts_the_lift(finset, sets):
    f, g = _two_maps(finset, sets)
    limit = finset_product_cone(finset, sets["X"], sets["Y"])
    fan = BinaryFan.mk(finset, f, g)
    for m in finset.hom_set(sets["W"], limit.cone.apex):
        assert limit.is_limit.verify_uniq(fan, m)


def test_fan_legs_stay_distinct_on_a_square(finset, sets):
    X = sets["X"]
    limit = finset_product_cone(finset, X, X)
    fan = BinaryFan.of_cone(limit.cone)
    assert fan.fst is not fan.snd
    assert not finset.equal(fan.fst, fan.snd)
    assert fan.legs[LEFT] is fan.fst and fan.legs[RIGHT] is fan.snd
