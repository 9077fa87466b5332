#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Binary fan / cofan: pair 图表上的锥与余锥

    BinaryFan(X, Y):   顶点 W，腿 fst: W → X，snd: W → Y
    BinaryCofan(X, Y): 顶点 W，腿 inl: X → W，inr: Y → W

当 fan 是极限时，lift_ 返回带证据的泛态射（态射 + 两条分解等式），
而不只是态射本身；cofan 对偶地提供 desc_。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from category_base import (
    Category,
    Cocone,
    CompositionError,
    Cone,
    IsColimit,
    IsLimit,
    UniversalPropertyViolation,
)
from walking_pair import LEFT, RIGHT, WalkingPair, is_walking_pair_diagram, pair


@dataclass(frozen=True)
class LiftResult:
    """带证据的泛态射 {l // l ≫ π₁ = f ∧ l ≫ π₂ = g}

    对 cofan，first_eq/second_eq 分别对应 inl ≫ l = f 与 inr ≫ l = g。
    """
    morphism: Any
    first_eq: bool
    second_eq: bool

    @property
    def holds(self) -> bool:
        return self.first_eq and self.second_eq

    def require(self, construction: str = "lift") -> Any:
        """返回态射；证据不成立时抛 UniversalPropertyViolation"""
        if not self.first_eq:
            raise UniversalPropertyViolation(construction, "factorisation through the first leg fails")
        if not self.second_eq:
            raise UniversalPropertyViolation(construction, "factorisation through the second leg fails")
        return self.morphism


@dataclass(frozen=True, eq=False)
class BinaryFan(Cone):
    """pair(X, Y) 上的锥"""

    @classmethod
    def mk(cls, category: Category, fst: Any, snd: Any) -> "BinaryFan":
        apex = category.source(fst)
        if category.source(snd) != apex:
            raise CompositionError(
                f"BinaryFan.mk: legs have different sources {apex!r} and {category.source(snd)!r}"
            )
        diagram = pair(category, category.target(fst), category.target(snd))
        return cls(diagram, apex, {LEFT: fst, RIGHT: snd})

    @classmethod
    def of_cone(cls, cone: Cone) -> "BinaryFan":
        """把任意 WalkingPair 形锥视为 fan（腿不变）"""
        if not is_walking_pair_diagram(cone.diagram):
            raise CompositionError(f"Cone over {cone.diagram.name} is not a binary fan")
        if isinstance(cone, cls):
            return cone
        return cls(cone.diagram, cone.apex, dict(cone.legs))

    @property
    def fst(self) -> Any:
        return self.pi(LEFT)

    @property
    def snd(self) -> Any:
        return self.pi(RIGHT)

    @staticmethod
    def lift_(is_limit: IsLimit, f: Any, g: Any) -> LiftResult:
        """极限 fan 的泛分解 l: W → s.apex，附带 l ≫ fst = f 与 l ≫ snd = g"""
        C = is_limit.category
        s = is_limit.cone
        l = is_limit.lift(BinaryFan.mk(C, f, g))
        return LiftResult(
            morphism=l,
            first_eq=C.equal(C.then(l, s.pi(LEFT)), f),
            second_eq=C.equal(C.then(l, s.pi(RIGHT)), g),
        )

    @staticmethod
    def hom_ext(is_limit: IsLimit, f: Any, g: Any) -> bool:
        """f = g ⇔ f ≫ fst = g ≫ fst 且 f ≫ snd = g ≫ snd"""
        C = is_limit.category
        s = is_limit.cone
        for tag in WalkingPair:
            if not C.equal(C.then(f, s.pi(tag)), C.then(g, s.pi(tag))):
                return False
        return True


@dataclass(frozen=True, eq=False)
class BinaryCofan(Cocone):
    """pair(X, Y) 上的余锥"""

    @classmethod
    def mk(cls, category: Category, inl: Any, inr: Any) -> "BinaryCofan":
        apex = category.target(inl)
        if category.target(inr) != apex:
            raise CompositionError(
                f"BinaryCofan.mk: legs have different targets {apex!r} and {category.target(inr)!r}"
            )
        diagram = pair(category, category.source(inl), category.source(inr))
        return cls(diagram, apex, {LEFT: inl, RIGHT: inr})

    @classmethod
    def of_cocone(cls, cocone: Cocone) -> "BinaryCofan":
        if not is_walking_pair_diagram(cocone.diagram):
            raise CompositionError(f"Cocone over {cocone.diagram.name} is not a binary cofan")
        if isinstance(cocone, cls):
            return cocone
        return cls(cocone.diagram, cocone.apex, dict(cocone.legs))

    @property
    def inl(self) -> Any:
        return self.iota(LEFT)

    @property
    def inr(self) -> Any:
        return self.iota(RIGHT)

    @staticmethod
    def desc_(is_colimit: IsColimit, f: Any, g: Any) -> LiftResult:
        """余极限 cofan 的泛分解 l: s.apex → W，附带 inl ≫ l = f 与 inr ≫ l = g"""
        C = is_colimit.category
        s = is_colimit.cocone
        l = is_colimit.desc(BinaryCofan.mk(C, f, g))
        return LiftResult(
            morphism=l,
            first_eq=C.equal(C.then(s.iota(LEFT), l), f),
            second_eq=C.equal(C.then(s.iota(RIGHT), l), g),
        )

    @staticmethod
    def hom_ext(is_colimit: IsColimit, f: Any, g: Any) -> bool:
        C = is_colimit.category
        s = is_colimit.cocone
        for tag in WalkingPair:
            if not C.equal(C.then(s.iota(tag), f), C.then(s.iota(tag), g)):
                return False
        return True


__all__ = [
    'LiftResult',
    'BinaryFan',
    'BinaryCofan',
]
