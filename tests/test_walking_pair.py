"""WalkingPair and pair diagram tests.

Tests cover:
    - WalkingPair is a closed, ordered two-element index with swap and Bool equivalence
    - pair(X, Y) sends LEFT ↦ X, RIGHT ↦ Y and identities to identities
    - map_pair / map_pair_iso build natural maps from components
    - diagram_iso_pair normalizes any walking-pair-shaped functor
"""

import pytest

from category_base import (
    CompositionError,
    DiscreteCategory,
    DiscreteFunctor,
    Iso,
    IsoLawViolation,
)
from walking_pair import (
    LEFT,
    RIGHT,
    WALKING_PAIR,
    PairDiagram,
    WalkingPair,
    diagram_iso_pair,
    is_walking_pair_diagram,
    map_pair,
    map_pair_iso,
    pair,
)


# --- WalkingPair ---------------------------------------------------------------


def test_walking_pair_enumerates_left_then_right():
    assert list(WalkingPair) == [LEFT, RIGHT]
    assert WALKING_PAIR.objects == (LEFT, RIGHT)


def test_swap_is_an_involution_without_fixed_points():
    for tag in WalkingPair:
        assert tag.swap() is not tag
        assert tag.swap().swap() is tag


def test_bool_equivalence_round_trips():
    assert LEFT.to_bool() is True
    assert RIGHT.to_bool() is False
    for tag in WalkingPair:
        assert WalkingPair.from_bool(tag.to_bool()) is tag


def test_walking_pair_category_has_only_identities():
    arrows = list(WALKING_PAIR.arrows())
    assert len(arrows) == 2
    for u in arrows:
        assert WALKING_PAIR.source(u) == WALKING_PAIR.target(u)


# --- pair diagram --------------------------------------------------------------


def test_pair_objects_are_definitional(finset, sets):
    X, Y = sets["X"], sets["Y"]
    F = pair(finset, X, Y)
    assert F.obj(LEFT) == X
    assert F.obj(RIGHT) == Y
    assert F.left == X and F.right == Y


def test_pair_maps_identities_to_identities(finset, sets):
    X, Y = sets["X"], sets["Y"]
    F = pair(finset, X, Y)
    for tag, obj in ((LEFT, X), (RIGHT, Y)):
        assert finset.equal(F.map(WALKING_PAIR.identity(tag)), finset.identity(obj))
    F.verify_laws(WALKING_PAIR.objects)


def test_pair_on_equal_objects_keeps_tags_apart(finset, sets):
    X = sets["X"]
    F = pair(finset, X, X)
    assert F.obj(LEFT) == F.obj(RIGHT)
    assert is_walking_pair_diagram(F)


# --- map_pair / map_pair_iso ---------------------------------------------------


def test_map_pair_uses_given_components(finset, sets, set_morphisms):
    X, Y = sets["X"], sets["Y"]
    f, g = set_morphisms["f"], set_morphisms["g"]
    F, G = pair(finset, X, Y), pair(finset, Y, X)
    nat = map_pair(F, G, f, g)
    assert nat.app(LEFT) is f
    assert nat.app(RIGHT) is g
    assert nat.verify_naturality()


def test_map_pair_rejects_mismatched_component(finset, sets, set_morphisms):
    X, Y = sets["X"], sets["Y"]
    F, G = pair(finset, X, Y), pair(finset, Y, X)
    with pytest.raises(CompositionError):
        map_pair(F, G, set_morphisms["h"], set_morphisms["g"])


def test_map_pair_iso_inverse_laws_hold_componentwise(finset, sets):
    X, Y = sets["X"], sets["Y"]
    P = finset.obj({"p", "q"})
    to_p = finset.function(X, P, {1: "p", 2: "q"}.get)
    from_p = finset.function(P, X, {"p": 1, "q": 2}.get)
    iso = map_pair_iso(pair(finset, X, Y), pair(finset, P, Y), Iso(to_p, from_p), Iso.refl(finset, Y))
    assert iso.verify()
    iso.verify_strict()
    for tag in WalkingPair:
        component = iso.app(tag)
        assert finset.equal(finset.then(component.hom, component.inv), finset.identity(iso.source.obj(tag)))


def test_map_pair_iso_detects_non_inverse_components(finset, sets, set_morphisms):
    X, Y = sets["X"], sets["Y"]
    h = set_morphisms["h"]
    constant = finset.function(X, X, lambda x: 1)
    iso = map_pair_iso(pair(finset, X, Y), pair(finset, X, Y), Iso(h, constant), Iso.refl(finset, Y))
    assert not iso.verify()
    with pytest.raises(IsoLawViolation):
        iso.verify_strict()


# --- diagram_iso_pair ----------------------------------------------------------


def test_diagram_iso_pair_normalizes_ad_hoc_functor(finset, sets):
    X, Y = sets["X"], sets["Y"]
    F = DiscreteFunctor(WALKING_PAIR, finset, {LEFT: X, RIGHT: Y}, name="adhoc")
    iso = diagram_iso_pair(F)
    assert iso.source is F
    assert isinstance(iso.target, PairDiagram)
    assert iso.target.obj(LEFT) == X and iso.target.obj(RIGHT) == Y
    for tag in WalkingPair:
        component = iso.app(tag)
        obj = F.obj(tag)
        assert finset.equal(component.hom, finset.identity(obj))
        assert finset.equal(finset.then(component.hom, component.inv), finset.identity(obj))
        assert finset.equal(finset.then(component.inv, component.hom), finset.identity(obj))
    assert iso.verify()


def test_diagram_iso_pair_in_finvect(finvect, spaces):
    A, B = spaces["A"], spaces["B"]
    F = DiscreteFunctor(WALKING_PAIR, finvect, {LEFT: A, RIGHT: B})
    assert diagram_iso_pair(F).verify()


def test_diagram_iso_pair_rejects_other_shapes(finset, sets):
    shape = DiscreteCategory(("a", "b", "c"))
    F = DiscreteFunctor(shape, finset, {"a": sets["X"], "b": sets["Y"], "c": sets["Z"]})
    assert not is_walking_pair_diagram(F)
    with pytest.raises(CompositionError):
        diagram_iso_pair(F)


def test_discrete_functor_requires_every_index(finset, sets):
    with pytest.raises(KeyError):
        DiscreteFunctor(WALKING_PAIR, finset, {LEFT: sets["X"]})
