"""Shared fixtures: FinSet and FinVect instances with their capabilities.

Invariants:
    - Every test gets fresh category and capability objects
    - Sample objects in FinSet avoid bool elements (True == 1 would merge sets)
    - FinVect samples use small integer matrices so equality is exact
"""

import numpy as np
import pytest

from concrete_categories import (
    FinSet,
    FinVect,
    Space,
    finset_binary_coproducts,
    finset_binary_products,
    finset_initial,
    finset_terminal,
    finvect_binary_coproducts,
    finvect_binary_products,
    finvect_initial,
    finvect_terminal,
)


@pytest.fixture
def finset():
    return FinSet()


@pytest.fixture
def set_products(finset):
    return finset_binary_products(finset)


@pytest.fixture
def set_coproducts(finset):
    return finset_binary_coproducts(finset)


@pytest.fixture
def set_terminal(finset):
    return finset_terminal(finset)


@pytest.fixture
def set_initial(finset):
    return finset_initial(finset)


@pytest.fixture
def sets(finset):
    """X = {1, 2}, Y = {a, b}, Z = {z}, W = {u, v}"""
    return {
        "X": finset.obj({1, 2}),
        "Y": finset.obj({"a", "b"}),
        "Z": finset.obj({"z"}),
        "W": finset.obj({"u", "v"}),
    }


@pytest.fixture
def set_morphisms(finset, sets):
    X, Y, Z = sets["X"], sets["Y"], sets["Z"]
    return {
        "f": finset.function(X, Y, {1: "a", 2: "b"}.get, name="f"),
        "g": finset.function(Y, X, lambda y: 1, name="g"),
        "h": finset.function(X, X, {1: 2, 2: 1}.get, name="h"),
        "k": finset.function(Y, Z, lambda y: "z", name="k"),
    }


@pytest.fixture
def finvect():
    return FinVect()


@pytest.fixture
def vect_products(finvect):
    return finvect_binary_products(finvect)


@pytest.fixture
def vect_coproducts(finvect):
    return finvect_binary_coproducts(finvect)


@pytest.fixture
def vect_terminal(finvect):
    return finvect_terminal(finvect)


@pytest.fixture
def vect_initial(finvect):
    return finvect_initial(finvect)


@pytest.fixture
def spaces():
    return {"A": Space("A", 1), "B": Space("B", 2), "D": Space("D", 2)}


@pytest.fixture
def vect_morphisms(finvect, spaces):
    A, B, D = spaces["A"], spaces["B"], spaces["D"]
    return {
        "p": finvect.linear(A, B, np.array([[1.0], [2.0]]), name="p"),
        "q": finvect.linear(B, D, np.array([[0.0, 1.0], [1.0, 1.0]]), name="q"),
        "r": finvect.linear(B, A, np.array([[3.0, -1.0]]), name="r"),
        "s": finvect.linear(D, B, np.array([[2.0, 0.0], [0.0, 0.0]]), name="s"),
    }
