"""Coherence layer tests: braiding, associator and unitors with their laws.

Tests cover:
    - Braiding involution and the concrete FinSet example
    - Associator / unitor action on elements
    - Pentagon, triangle, hexagon and naturality over representative samples
    - Same laws for coproducts (initial object as unit) and in FinVect
    - Missing unit object and broken structures are reported
"""

import numpy as np
import pytest

from category_base import Iso, MissingCapabilityError
from concrete_categories import ZERO_SPACE, _run_demo
from monoidal_coherence import (
    CartesianStructure,
    CocartesianStructure,
    CoherenceChecker,
    CoherenceViolation,
    associator,
    braiding,
    braiding_naturality,
    braiding_symmetry,
    coprod_associator,
    coprod_braiding,
    coprod_left_unitor,
    coprod_right_unitor,
    left_unitor,
    pentagon,
    right_unitor,
    triangle,
)
from walking_pair import LEFT, RIGHT


# --- braiding ------------------------------------------------------------------


def test_braiding_example_from_finset(finset, set_products):
    X, Y = finset.obj({1, 2}), finset.obj({"a", "b"})
    beta = braiding(set_products, X, Y)
    assert beta.hom((1, "a")) == ("a", 1)
    assert braiding(set_products, Y, X).hom(beta.hom((1, "a"))) == (1, "a")


def test_braiding_is_an_involution(finset, sets, set_products, set_coproducts):
    X, Y = sets["X"], sets["Y"]
    for S in (CartesianStructure(set_products), CocartesianStructure(set_coproducts)):
        assert braiding_symmetry(S, X, Y)
        assert braiding_symmetry(S, X, X)
    assert braiding(set_products, X, Y).verify(finset)
    assert coprod_braiding(set_coproducts, X, Y).verify(finset)


def test_braiding_on_a_square_swaps_components(sets, set_products):
    X = sets["X"]
    assert braiding(set_products, X, X).hom((1, 2)) == (2, 1)


def test_coproduct_braiding_swaps_tags(sets, set_coproducts):
    X, Y = sets["X"], sets["Y"]
    beta = coprod_braiding(set_coproducts, X, Y)
    assert beta.hom((LEFT, 1)) == (RIGHT, 1)
    assert beta.hom((RIGHT, "a")) == (LEFT, "a")


# --- associator / unitors ------------------------------------------------------


def test_associator_regroups_triples(finset, sets, set_products):
    X, Y, Z = sets["X"], sets["Y"], sets["Z"]
    alpha = associator(set_products, X, Y, Z)
    assert alpha.hom(((1, "a"), "z")) == (1, ("a", "z"))
    assert alpha.inv((2, ("b", "z"))) == ((2, "b"), "z")
    assert alpha.verify(finset)


def test_coproduct_associator_regroups_tags(finset, sets, set_coproducts):
    X, Y, Z = sets["X"], sets["Y"], sets["Z"]
    alpha = coprod_associator(set_coproducts, X, Y, Z)
    assert alpha.hom((LEFT, (RIGHT, "a"))) == (RIGHT, (LEFT, "a"))
    assert alpha.hom((RIGHT, "z")) == (RIGHT, (RIGHT, "z"))
    assert alpha.hom((LEFT, (LEFT, 1))) == (LEFT, 1)
    assert alpha.verify(finset)


def test_unitors_drop_the_terminal_component(finset, sets, set_products, set_terminal):
    X = sets["X"]
    lam = left_unitor(set_products, set_terminal, X)
    rho = right_unitor(set_products, set_terminal, X)
    assert lam.hom(((), 2)) == 2
    assert lam.inv(1) == ((), 1)
    assert rho.hom((2, ())) == 2
    assert rho.inv(1) == (1, ())
    assert lam.verify(finset) and rho.verify(finset)


def test_coproduct_unitors_use_the_initial_object(finset, sets, set_coproducts, set_initial):
    X = sets["X"]
    lam = coprod_left_unitor(set_coproducts, set_initial, X)
    rho = coprod_right_unitor(set_coproducts, set_initial, X)
    assert set_coproducts.obj(set_initial.obj, X) == frozenset({(RIGHT, 1), (RIGHT, 2)})
    assert lam.hom((RIGHT, 1)) == 1
    assert rho.inv(2) == (LEFT, 2)
    assert lam.verify(finset) and rho.verify(finset)


def test_unitors_require_a_unit_object(sets, set_products):
    S = CartesianStructure(set_products)
    with pytest.raises(MissingCapabilityError):
        S.left_unitor(sets["X"])
    with pytest.raises(MissingCapabilityError):
        triangle(S, sets["X"], sets["Y"])


# --- laws ----------------------------------------------------------------------


def test_pentagon_and_triangle_in_finset(sets, set_products, set_terminal):
    S = CartesianStructure(set_products, set_terminal)
    X, Y, Z = sets["X"], sets["Y"], sets["Z"]
    assert pentagon(S, X, Y, Z, X)
    assert pentagon(S, Z, Z, Y, X)
    assert triangle(S, X, Y)


def test_cartesian_finset_is_coherent(sets, set_products, set_terminal, set_morphisms):
    S = CartesianStructure(set_products, set_terminal)
    checker = CoherenceChecker(
        S,
        [sets["X"], sets["Y"], sets["Z"]],
        [set_morphisms["f"], set_morphisms["h"], set_morphisms["k"]],
    )
    ok, violations = checker.run()
    assert ok, violations
    checker.run_strict()


def test_cocartesian_finset_is_coherent(sets, set_coproducts, set_initial, set_morphisms):
    S = CocartesianStructure(set_coproducts, set_initial)
    checker = CoherenceChecker(
        S,
        [sets["X"], sets["Z"]],
        [set_morphisms["g"], set_morphisms["h"], set_morphisms["k"]],
    )
    ok, violations = checker.run()
    assert ok, violations


def test_finvect_products_and_coproducts_are_coherent(
    spaces, vect_products, vect_coproducts, vect_terminal, vect_initial, vect_morphisms,
):
    objects = [spaces["A"], spaces["B"]]
    morphisms = [vect_morphisms["p"], vect_morphisms["q"], vect_morphisms["r"]]
    for S in (
        CartesianStructure(vect_products, vect_terminal),
        CocartesianStructure(vect_coproducts, vect_initial),
    ):
        ok, violations = CoherenceChecker(S, objects, morphisms).run()
        assert ok, violations


def test_finvect_unitor_matrices(finvect, spaces, vect_products, vect_terminal):
    B = spaces["B"]
    lam = left_unitor(vect_products, vect_terminal, B)
    assert lam.hom.source == vect_products.obj(ZERO_SPACE, B)
    np.testing.assert_array_equal(lam.hom.matrix, np.eye(2))
    assert lam.verify(finvect)


def test_checker_reports_a_broken_braiding(finset, sets, set_products, set_morphisms):
    class NonSymmetricOnSquares(CartesianStructure):
        def braiding(self, X, Y):
            if X == Y:
                identity = self.category.identity(self.tensor(X, X))
                return Iso(identity, identity)
            return super().braiding(X, Y)

    X = sets["X"]
    S = NonSymmetricOnSquares(set_products)
    h = set_morphisms["h"]
    constant = finset.function(X, X, lambda x: 1)
    assert not braiding_naturality(S, h, constant)
    checker = CoherenceChecker(S, [X], [h, constant])
    ok, violations = checker.run()
    assert not ok
    assert any(v["law"] == "braiding_naturality" for v in violations)
    with pytest.raises(CoherenceViolation):
        checker.run_strict()


# --- demo ----------------------------------------------------------------------


def test_demo_reproduces_the_worked_example():
    result = _run_demo()
    assert result["lift"] == (1, "a")
    assert result["fst"] == 1
    assert result["snd"] == "a"
    assert result["braiding"] == ("a", 1)
    assert result["braiding_roundtrip"] == (1, "a")
    assert result["coherence_ok"]
