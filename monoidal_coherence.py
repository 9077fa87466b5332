#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
积 / 余积的相干同构与相干律

相干同构（只由积/余积运算构造）:
    β(X, Y)     : X ⊗ Y ≅ Y ⊗ X                 braiding
    α(X, Y, Z)  : (X ⊗ Y) ⊗ Z ≅ X ⊗ (Y ⊗ Z)     associator
    λ(X)        : 𝟙 ⊗ X ≅ X                     left unitor
    ρ(X)        : X ⊗ 𝟙 ≅ X                     right unitor

其中 ⊗ 为 ⨯（单位为终对象）或 ⨿（单位为始对象）。

相干律（对所有对象/态射全称成立，这里在给定样本上逐条检查）:
    对称:   β(X, Y) ≫ β(Y, X) = id
    五边形: (α ⊗ 1) ≫ α ≫ (1 ⊗ α) = α ≫ α
    三角形: α(X, 𝟙, Y) ≫ (1 ⊗ λ) = ρ ⊗ 1
    六边形: α ≫ β ≫ α = (β ⊗ 1) ≫ α ≫ (1 ⊗ β)
    自然性: α, β, λ, ρ 与分量 map 交换
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from category_base import (
    CategoricalError,
    Category,
    InitialObject,
    Iso,
    MissingCapabilityError,
    TerminalObject,
)
from binary_products import HasBinaryCoproducts, HasBinaryProducts

_logger = logging.getLogger(__name__)


class CoherenceViolation(CategoricalError):
    """相干律违反异常"""
    def __init__(self, law: str, details: str):
        self.law = law
        self.details = details
        super().__init__(f"Coherence law '{law}' violated: {details}")


# ============================================================================
# Section 1: 积的相干同构
# ============================================================================

def braiding(P: HasBinaryProducts, X: Hashable, Y: Hashable) -> Iso:
    """β(X, Y): X ⨯ Y ≅ Y ⨯ X，两个方向都是 lift(snd, fst)"""
    return Iso(
        P.lift(P.snd(X, Y), P.fst(X, Y)),
        P.lift(P.snd(Y, X), P.fst(Y, X)),
        name=f"β({X!r}, {Y!r})",
    )


def associator(P: HasBinaryProducts, X: Hashable, Y: Hashable, Z: Hashable) -> Iso:
    """α(X, Y, Z): (X ⨯ Y) ⨯ Z ≅ X ⨯ (Y ⨯ Z)"""
    C = P.category
    XY, YZ = P.obj(X, Y), P.obj(Y, Z)
    hom = P.lift(
        C.then(P.fst(XY, Z), P.fst(X, Y)),
        P.lift(C.then(P.fst(XY, Z), P.snd(X, Y)), P.snd(XY, Z)),
    )
    inv = P.lift(
        P.lift(P.fst(X, YZ), C.then(P.snd(X, YZ), P.fst(Y, Z))),
        C.then(P.snd(X, YZ), P.snd(Y, Z)),
    )
    return Iso(hom, inv, name=f"α({X!r}, {Y!r}, {Z!r})")


def left_unitor(P: HasBinaryProducts, T: TerminalObject, X: Hashable) -> Iso:
    """λ(X): ⊤ ⨯ X ≅ X，正向为 snd"""
    return Iso(
        P.snd(T.obj, X),
        P.lift(T.to_terminal(X), P.category.identity(X)),
        name=f"λ({X!r})",
    )


def right_unitor(P: HasBinaryProducts, T: TerminalObject, X: Hashable) -> Iso:
    """ρ(X): X ⨯ ⊤ ≅ X，正向为 fst"""
    return Iso(
        P.fst(X, T.obj),
        P.lift(P.category.identity(X), T.to_terminal(X)),
        name=f"ρ({X!r})",
    )


# ============================================================================
# Section 2: 余积的相干同构（对偶）
# ============================================================================

def coprod_braiding(Q: HasBinaryCoproducts, X: Hashable, Y: Hashable) -> Iso:
    """X ⨿ Y ≅ Y ⨿ X，两个方向都是 desc(inr, inl)"""
    return Iso(
        Q.desc(Q.inr(Y, X), Q.inl(Y, X)),
        Q.desc(Q.inr(X, Y), Q.inl(X, Y)),
        name=f"β⨿({X!r}, {Y!r})",
    )


def coprod_associator(Q: HasBinaryCoproducts, X: Hashable, Y: Hashable, Z: Hashable) -> Iso:
    """(X ⨿ Y) ⨿ Z ≅ X ⨿ (Y ⨿ Z)"""
    C = Q.category
    XY, YZ = Q.obj(X, Y), Q.obj(Y, Z)
    hom = Q.desc(
        Q.desc(Q.inl(X, YZ), C.then(Q.inl(Y, Z), Q.inr(X, YZ))),
        C.then(Q.inr(Y, Z), Q.inr(X, YZ)),
    )
    inv = Q.desc(
        C.then(Q.inl(X, Y), Q.inl(XY, Z)),
        Q.desc(C.then(Q.inr(X, Y), Q.inl(XY, Z)), Q.inr(XY, Z)),
    )
    return Iso(hom, inv, name=f"α⨿({X!r}, {Y!r}, {Z!r})")


def coprod_left_unitor(Q: HasBinaryCoproducts, I: InitialObject, X: Hashable) -> Iso:
    """⊥ ⨿ X ≅ X，逆向为 inr"""
    return Iso(
        Q.desc(I.from_initial(X), Q.category.identity(X)),
        Q.inr(I.obj, X),
        name=f"λ⨿({X!r})",
    )


def coprod_right_unitor(Q: HasBinaryCoproducts, I: InitialObject, X: Hashable) -> Iso:
    """X ⨿ ⊥ ≅ X，逆向为 inl"""
    return Iso(
        Q.desc(Q.category.identity(X), I.from_initial(X)),
        Q.inl(X, I.obj),
        name=f"ρ⨿({X!r})",
    )


# ============================================================================
# Section 3: 统一视图（⨯ 或 ⨿）
# ============================================================================

class CartesianStructure:
    """由 HasBinaryProducts（可选终对象）给出的 ⊗ = ⨯"""

    symbol = "⨯"

    def __init__(self, products: HasBinaryProducts, terminal: Optional[TerminalObject] = None):
        self.capability = products
        self.unit_object = terminal

    @property
    def category(self) -> Category:
        return self.capability.category

    @property
    def unit(self) -> Hashable:
        return self._require_unit().obj

    def _require_unit(self) -> TerminalObject:
        if self.unit_object is None:
            raise MissingCapabilityError("unitors of binary products require a terminal object")
        return self.unit_object

    def tensor(self, X: Hashable, Y: Hashable) -> Hashable:
        return self.capability.obj(X, Y)

    def tensor_map(self, f: Any, g: Any) -> Any:
        return self.capability.map(f, g)

    def braiding(self, X: Hashable, Y: Hashable) -> Iso:
        return braiding(self.capability, X, Y)

    def associator(self, X: Hashable, Y: Hashable, Z: Hashable) -> Iso:
        return associator(self.capability, X, Y, Z)

    def left_unitor(self, X: Hashable) -> Iso:
        return left_unitor(self.capability, self._require_unit(), X)

    def right_unitor(self, X: Hashable) -> Iso:
        return right_unitor(self.capability, self._require_unit(), X)


class CocartesianStructure:
    """由 HasBinaryCoproducts（可选始对象）给出的 ⊗ = ⨿"""

    symbol = "⨿"

    def __init__(self, coproducts: HasBinaryCoproducts, initial: Optional[InitialObject] = None):
        self.capability = coproducts
        self.unit_object = initial

    @property
    def category(self) -> Category:
        return self.capability.category

    @property
    def unit(self) -> Hashable:
        return self._require_unit().obj

    def _require_unit(self) -> InitialObject:
        if self.unit_object is None:
            raise MissingCapabilityError("unitors of binary coproducts require an initial object")
        return self.unit_object

    def tensor(self, X: Hashable, Y: Hashable) -> Hashable:
        return self.capability.obj(X, Y)

    def tensor_map(self, f: Any, g: Any) -> Any:
        return self.capability.map(f, g)

    def braiding(self, X: Hashable, Y: Hashable) -> Iso:
        return coprod_braiding(self.capability, X, Y)

    def associator(self, X: Hashable, Y: Hashable, Z: Hashable) -> Iso:
        return coprod_associator(self.capability, X, Y, Z)

    def left_unitor(self, X: Hashable) -> Iso:
        return coprod_left_unitor(self.capability, self._require_unit(), X)

    def right_unitor(self, X: Hashable) -> Iso:
        return coprod_right_unitor(self.capability, self._require_unit(), X)


# ============================================================================
# Section 4: 相干律
# ============================================================================

def braiding_symmetry(S, X: Hashable, Y: Hashable) -> bool:
    """β(X, Y) ≫ β(Y, X) = id_{X ⊗ Y}"""
    C = S.category
    return C.equal(
        C.then(S.braiding(X, Y).hom, S.braiding(Y, X).hom),
        C.identity(S.tensor(X, Y)),
    )


def pentagon(S, W: Hashable, X: Hashable, Y: Hashable, Z: Hashable) -> bool:
    """(α(W,X,Y) ⊗ 1_Z) ≫ α(W, X⊗Y, Z) ≫ (1_W ⊗ α(X,Y,Z)) = α(W⊗X, Y, Z) ≫ α(W, X, Y⊗Z)"""
    C = S.category
    lhs = C.then(
        S.tensor_map(S.associator(W, X, Y).hom, C.identity(Z)),
        S.associator(W, S.tensor(X, Y), Z).hom,
        S.tensor_map(C.identity(W), S.associator(X, Y, Z).hom),
    )
    rhs = C.then(
        S.associator(S.tensor(W, X), Y, Z).hom,
        S.associator(W, X, S.tensor(Y, Z)).hom,
    )
    return C.equal(lhs, rhs)


def triangle(S, X: Hashable, Y: Hashable) -> bool:
    """α(X, 𝟙, Y) ≫ (1_X ⊗ λ(Y)) = ρ(X) ⊗ 1_Y"""
    C = S.category
    lhs = C.then(
        S.associator(X, S.unit, Y).hom,
        S.tensor_map(C.identity(X), S.left_unitor(Y).hom),
    )
    rhs = S.tensor_map(S.right_unitor(X).hom, C.identity(Y))
    return C.equal(lhs, rhs)


def hexagon(S, X: Hashable, Y: Hashable, Z: Hashable) -> bool:
    """α(X,Y,Z) ≫ β(X, Y⊗Z) ≫ α(Y,Z,X) = (β(X,Y) ⊗ 1) ≫ α(Y,X,Z) ≫ (1 ⊗ β(X,Z))"""
    C = S.category
    lhs = C.then(
        S.associator(X, Y, Z).hom,
        S.braiding(X, S.tensor(Y, Z)).hom,
        S.associator(Y, Z, X).hom,
    )
    rhs = C.then(
        S.tensor_map(S.braiding(X, Y).hom, C.identity(Z)),
        S.associator(Y, X, Z).hom,
        S.tensor_map(C.identity(Y), S.braiding(X, Z).hom),
    )
    return C.equal(lhs, rhs)


def associator_naturality(S, f: Any, g: Any, h: Any) -> bool:
    """((f ⊗ g) ⊗ h) ≫ α = α ≫ (f ⊗ (g ⊗ h))"""
    C = S.category
    lhs = C.then(
        S.tensor_map(S.tensor_map(f, g), h),
        S.associator(C.target(f), C.target(g), C.target(h)).hom,
    )
    rhs = C.then(
        S.associator(C.source(f), C.source(g), C.source(h)).hom,
        S.tensor_map(f, S.tensor_map(g, h)),
    )
    return C.equal(lhs, rhs)


def braiding_naturality(S, f: Any, g: Any) -> bool:
    """(f ⊗ g) ≫ β = β ≫ (g ⊗ f)"""
    C = S.category
    lhs = C.then(S.tensor_map(f, g), S.braiding(C.target(f), C.target(g)).hom)
    rhs = C.then(S.braiding(C.source(f), C.source(g)).hom, S.tensor_map(g, f))
    return C.equal(lhs, rhs)


def unitor_naturality(S, f: Any) -> bool:
    """(1 ⊗ f) ≫ λ = λ ≫ f 且 (f ⊗ 1) ≫ ρ = ρ ≫ f"""
    C = S.category
    unit_id = C.identity(S.unit)
    X, Y = C.source(f), C.target(f)
    left = C.equal(
        C.then(S.tensor_map(unit_id, f), S.left_unitor(Y).hom),
        C.then(S.left_unitor(X).hom, f),
    )
    right = C.equal(
        C.then(S.tensor_map(f, unit_id), S.right_unitor(Y).hom),
        C.then(S.right_unitor(X).hom, f),
    )
    return left and right


class CoherenceChecker:
    """在对象/态射样本上逐条检查相干律

    返回 (ok, violations)，violations 中每项记录律名与参与的对象或态射；
    run_strict 在首个违反处抛 CoherenceViolation。
    """

    def __init__(self, structure, objects: Sequence[Hashable], morphisms: Sequence[Any] = ()):
        self.structure = structure
        self.objects = list(objects)
        self.morphisms = list(morphisms)

    @property
    def has_unit(self) -> bool:
        return self.structure.unit_object is not None

    def _isos(self) -> List[Tuple[str, Iso]]:
        S = self.structure
        isos = []
        for X, Y in itertools.product(self.objects, repeat=2):
            isos.append(("braiding", S.braiding(X, Y)))
        for X, Y, Z in itertools.product(self.objects, repeat=3):
            isos.append(("associator", S.associator(X, Y, Z)))
        if self.has_unit:
            for X in self.objects:
                isos.append(("left_unitor", S.left_unitor(X)))
                isos.append(("right_unitor", S.right_unitor(X)))
        return isos

    def run(self) -> Tuple[bool, List[Dict[str, Any]]]:
        S = self.structure
        C = S.category
        violations: List[Dict[str, Any]] = []

        def record(law: str, args: Tuple[Any, ...]) -> None:
            violations.append({"law": law, "args": args})
            _logger.warning("Coherence law %s fails (%s) at %r", law, S.symbol, args)

        for kind, iso in self._isos():
            if not iso.verify(C):
                record(f"{kind}_iso", (iso.name,))
        for X, Y in itertools.product(self.objects, repeat=2):
            if not braiding_symmetry(S, X, Y):
                record("braiding_symmetry", (X, Y))
            if self.has_unit and not triangle(S, X, Y):
                record("triangle", (X, Y))
        for X, Y, Z in itertools.product(self.objects, repeat=3):
            if not hexagon(S, X, Y, Z):
                record("hexagon", (X, Y, Z))
        for W, X, Y, Z in itertools.product(self.objects, repeat=4):
            if not pentagon(S, W, X, Y, Z):
                record("pentagon", (W, X, Y, Z))
        for f, g in itertools.product(self.morphisms, repeat=2):
            if not braiding_naturality(S, f, g):
                record("braiding_naturality", (f, g))
        for f, g, h in itertools.product(self.morphisms, repeat=3):
            if not associator_naturality(S, f, g, h):
                record("associator_naturality", (f, g, h))
        if self.has_unit:
            for f in self.morphisms:
                if not unitor_naturality(S, f):
                    record("unitor_naturality", (f,))

        return not violations, violations

    def run_strict(self) -> None:
        ok, violations = self.run()
        if not ok:
            first = violations[0]
            raise CoherenceViolation(first["law"], f"{len(violations)} violation(s), first at {first['args']!r}")


__all__ = [
    'CoherenceViolation',
    'braiding',
    'associator',
    'left_unitor',
    'right_unitor',
    'coprod_braiding',
    'coprod_associator',
    'coprod_left_unitor',
    'coprod_right_unitor',
    'CartesianStructure',
    'CocartesianStructure',
    'braiding_symmetry',
    'pentagon',
    'triangle',
    'hexagon',
    'associator_naturality',
    'braiding_naturality',
    'unitor_naturality',
    'CoherenceChecker',
]
