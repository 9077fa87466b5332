#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Walking pair 索引与 pair 图表

数学定义:
    WalkingPair = {LEFT, RIGHT}，视为离散范畴（只有恒等态射）
    pair(X, Y): WalkingPair → C，LEFT ↦ X，RIGHT ↦ Y

规范化不变量:
    任意 WalkingPair 形函子 F 都与 pair(F(LEFT), F(RIGHT)) 典范同构，
    且该同构每个分量都是恒等（diagram_iso_pair）。
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Hashable

from category_base import (
    Category,
    CompositionError,
    DiscreteCategory,
    DiscreteFunctor,
    Functor,
    Iso,
    NatIso,
    NatTrans,
)


class WalkingPair(Enum):
    """二元索引标签；枚举顺序固定为 LEFT, RIGHT"""
    LEFT = "left"
    RIGHT = "right"

    def swap(self) -> "WalkingPair":
        return WalkingPair.RIGHT if self is WalkingPair.LEFT else WalkingPair.LEFT

    def to_bool(self) -> bool:
        """WalkingPair ≃ Bool，LEFT ↦ True"""
        return self is WalkingPair.LEFT

    @classmethod
    def from_bool(cls, b: bool) -> "WalkingPair":
        return cls.LEFT if b else cls.RIGHT

    def __repr__(self):
        return f"WalkingPair.{self.name}"


LEFT = WalkingPair.LEFT
RIGHT = WalkingPair.RIGHT

# 离散范畴 WalkingPair（全局唯一，按索引元组比较相等）
WALKING_PAIR = DiscreteCategory(tuple(WalkingPair), name="WalkingPair")


class PairDiagram(DiscreteFunctor):
    """pair(X, Y): 由对象对唯一决定的 WalkingPair 形图表"""

    def __init__(self, category: Category, left: Hashable, right: Hashable):
        super().__init__(
            WALKING_PAIR,
            category,
            {LEFT: left, RIGHT: right},
            name=f"pair({left!r}, {right!r})",
        )

    @property
    def left(self) -> Hashable:
        return self.obj(LEFT)

    @property
    def right(self) -> Hashable:
        return self.obj(RIGHT)


def pair(category: Category, left: Hashable, right: Hashable) -> PairDiagram:
    """pair(X, Y)，对任意两个对象全定义，无副作用"""
    return PairDiagram(category, left, right)


def is_walking_pair_diagram(F: Functor) -> bool:
    return F.source_category == WALKING_PAIR


def _require_walking_pair(F: Functor) -> None:
    if not is_walking_pair_diagram(F):
        raise CompositionError(f"{F.name} is not indexed by WalkingPair (got {F.source_category.name})")


def map_pair(F: Functor, G: Functor, f: Any, g: Any) -> NatTrans:
    """由分量 f: F(LEFT) → G(LEFT)，g: F(RIGHT) → G(RIGHT) 构造 F ⇒ G

    索引范畴无非恒等态射，自然性方块平凡成立。
    """
    _require_walking_pair(F)
    _require_walking_pair(G)
    C = F.target_category
    for tag, component in ((LEFT, f), (RIGHT, g)):
        if C.source(component) != F.obj(tag) or C.target(component) != G.obj(tag):
            raise CompositionError(
                f"map_pair component at {tag!r} is {C.source(component)!r} → {C.target(component)!r}, "
                f"expected {F.obj(tag)!r} → {G.obj(tag)!r}"
            )
    return NatTrans(F, G, {LEFT: f, RIGHT: g}, name=f"map_pair({F.name} ⇒ {G.name})")


def map_pair_iso(F: Functor, G: Functor, f: Iso, g: Iso) -> NatIso:
    """由分量同构构造 F ≅ G；正反向分别取分量的正反向"""
    hom = map_pair(F, G, f.hom, g.hom)
    inv = map_pair(G, F, f.inv, g.inv)
    return NatIso(hom, inv, name=f"map_pair_iso({F.name} ≅ {G.name})")


def diagram_iso_pair(F: Functor) -> NatIso:
    """F ≅ pair(F(LEFT), F(RIGHT))，每个分量都是恒等同构"""
    _require_walking_pair(F)
    C = F.target_category
    normalized = pair(C, F.obj(LEFT), F.obj(RIGHT))
    return map_pair_iso(
        F,
        normalized,
        Iso.refl(C, F.obj(LEFT)),
        Iso.refl(C, F.obj(RIGHT)),
    )


__all__ = [
    'WalkingPair',
    'LEFT',
    'RIGHT',
    'WALKING_PAIR',
    'PairDiagram',
    'pair',
    'is_walking_pair_diagram',
    'map_pair',
    'map_pair_iso',
    'diagram_iso_pair',
]
