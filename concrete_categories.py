#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
示例范畴: FinSet 与 FinVect

FinSet:
    对象 = frozenset；态射 = 有限函数（显式映射表）
    积   = 笛卡尔积，元素为 (x, y)
    余积 = 带标签不交并，元素为 (WalkingPair.LEFT, x) / (WalkingPair.RIGHT, y)
    终对象 = {()}，始对象 = ∅
    单 = 单射，满 = 满射

FinVect (实数域上的有限维向量空间):
    对象 = Space(id, dimension)；态射 = 矩阵 (target.dim × source.dim)
    复合 = 矩阵乘法
    积 = 余积 = 直和（双积），fst = [I 0]，inl = [I; 0]
    终对象 = 始对象 = 零空间
    态射相等采用相对容差 ε·max(‖A‖_F, ‖B‖_F, 1)
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Hashable, Mapping

import numpy as np

from category_base import (
    Category,
    Cocone,
    ColimitCocone,
    Cone,
    DiscreteFunctor,
    HasFiniteCoproducts,
    HasFiniteProducts,
    InitialObject,
    IsColimit,
    IsLimit,
    LimitCone,
    TerminalObject,
)
from walking_pair import LEFT, RIGHT, pair
from binary_products import HasBinaryCoproducts, HasBinaryProducts

_logger = logging.getLogger(__name__)

# ============================================================================
# Section 0: 数值常数
# ============================================================================

_MATRIX_EQ_REL_TOL = 1e-10  # 矩阵态射相等的相对容差系数


def _relative_tolerance(A: np.ndarray, B: np.ndarray, rel_tol: float = _MATRIX_EQ_REL_TOL) -> float:
    """相对容差 ε·max(‖A‖_F, ‖B‖_F, 1)"""
    norms = [np.linalg.norm(M, 'fro') for M in (A, B) if M.size]
    return rel_tol * max(norms + [1.0])


def _matrix_rank(A: np.ndarray) -> int:
    if min(A.shape) == 0:
        return 0
    return int(np.linalg.matrix_rank(A))


# ============================================================================
# Section 1: FinSet
# ============================================================================

@dataclass(frozen=True, eq=False)
class FinFunction:
    """有限集之间的函数 f: source → target

    Attributes:
        source: 定义域
        target: 陪域
        mapping: 显式映射表，键集必须恰为 source
        name: 名称（用于调试）
    """
    source: FrozenSet
    target: FrozenSet
    mapping: Mapping[Hashable, Hashable]
    name: str = ""

    def __post_init__(self):
        if set(self.mapping) != set(self.source):
            raise ValueError(f"FinFunction {self.name or ''}: mapping keys do not match the source set")
        stray = [y for y in self.mapping.values() if y not in self.target]
        if stray:
            raise ValueError(f"FinFunction {self.name or ''}: values {stray!r} fall outside the target set")

    def __call__(self, x: Hashable) -> Hashable:
        return self.mapping[x]

    def image(self) -> FrozenSet:
        return frozenset(self.mapping.values())

    def __repr__(self):
        name_str = f"'{self.name}'" if self.name else ""
        return f"FinFunction{name_str}({len(self.source)} → {len(self.target)})"


class FinSet(Category):
    """有限集范畴"""

    def __init__(self, name: str = "FinSet"):
        super().__init__(name)

    @staticmethod
    def obj(elements) -> FrozenSet:
        return frozenset(elements)

    def function(self, source, target, fn: Callable[[Hashable], Hashable], name: str = "") -> FinFunction:
        source, target = frozenset(source), frozenset(target)
        return FinFunction(source, target, {x: fn(x) for x in source}, name=name)

    def source(self, f: FinFunction) -> FrozenSet:
        return f.source

    def target(self, f: FinFunction) -> FrozenSet:
        return f.target

    def identity(self, obj: FrozenSet) -> FinFunction:
        return FinFunction(obj, obj, {x: x for x in obj}, name="id")

    def _compose(self, g: FinFunction, f: FinFunction) -> FinFunction:
        return FinFunction(
            f.source,
            g.target,
            {x: g(f(x)) for x in f.source},
            name=f"({g.name} ∘ {f.name})" if g.name and f.name else "",
        )

    def equal(self, f: FinFunction, g: FinFunction) -> bool:
        return (
            f.source == g.source
            and f.target == g.target
            and all(f(x) == g(x) for x in f.source)
        )

    def is_mono(self, f: FinFunction) -> bool:
        return len(f.image()) == len(f.source)

    def is_epi(self, f: FinFunction) -> bool:
        return f.image() == f.target

    def hom_set(self, source: FrozenSet, target: FrozenSet):
        """枚举 Hom(source, target)（仅用于小样本穷举）"""
        elements = list(source)
        for values in itertools.product(list(target), repeat=len(elements)):
            yield FinFunction(source, target, dict(zip(elements, values)))


def finset_product_cone(C: FinSet, X: FrozenSet, Y: FrozenSet) -> LimitCone:
    """笛卡尔积 X ⨯ Y 及其泛性质"""
    apex = frozenset(itertools.product(X, Y))
    cone = Cone(
        pair(C, X, Y),
        apex,
        {
            LEFT: FinFunction(apex, X, {p: p[0] for p in apex}, name="fst"),
            RIGHT: FinFunction(apex, Y, {p: p[1] for p in apex}, name="snd"),
        },
    )

    def lift(s: Cone) -> FinFunction:
        return FinFunction(s.apex, apex, {w: (s.pi(LEFT)(w), s.pi(RIGHT)(w)) for w in s.apex}, name="lift")

    return LimitCone(cone, IsLimit(cone, lift))


def finset_coproduct_cocone(C: FinSet, X: FrozenSet, Y: FrozenSet) -> ColimitCocone:
    """带标签不交并 X ⨿ Y 及其泛性质"""
    apex = frozenset([(LEFT, x) for x in X] + [(RIGHT, y) for y in Y])
    cocone = Cocone(
        pair(C, X, Y),
        apex,
        {
            LEFT: FinFunction(X, apex, {x: (LEFT, x) for x in X}, name="inl"),
            RIGHT: FinFunction(Y, apex, {y: (RIGHT, y) for y in Y}, name="inr"),
        },
    )

    def desc(s: Cocone) -> FinFunction:
        return FinFunction(apex, s.apex, {(tag, v): s.iota(tag)(v) for tag, v in apex}, name="desc")

    return ColimitCocone(cocone, IsColimit(cocone, desc))


def finset_finite_products(C: FinSet) -> HasFiniteProducts:
    """任意有限离散图表的积: 元素为按索引顺序排列的元组"""

    def choose(F: DiscreteFunctor) -> LimitCone:
        indices = F.source_category.objects
        apex = frozenset(itertools.product(*[F.obj(j) for j in indices]))
        legs = {
            j: FinFunction(apex, F.obj(j), {t: t[k] for t in apex}, name=f"π[{j!r}]")
            for k, j in enumerate(indices)
        }
        cone = Cone(F, apex, legs)

        def lift(s: Cone) -> FinFunction:
            return FinFunction(s.apex, apex, {w: tuple(s.pi(j)(w) for j in indices) for w in s.apex}, name="lift")

        return LimitCone(cone, IsLimit(cone, lift))

    return HasFiniteProducts(C, choose)


def finset_finite_coproducts(C: FinSet) -> HasFiniteCoproducts:
    """任意有限离散图表的余积: 元素为 (索引, 元素)"""

    def choose(F: DiscreteFunctor) -> ColimitCocone:
        indices = F.source_category.objects
        apex = frozenset((j, x) for j in indices for x in F.obj(j))
        legs = {
            j: FinFunction(F.obj(j), apex, {x: (j, x) for x in F.obj(j)}, name=f"ι[{j!r}]")
            for j in indices
        }
        cocone = Cocone(F, apex, legs)

        def desc(s: Cocone) -> FinFunction:
            return FinFunction(apex, s.apex, {(j, x): s.iota(j)(x) for j, x in apex}, name="desc")

        return ColimitCocone(cocone, IsColimit(cocone, desc))

    return HasFiniteCoproducts(C, choose)


def finset_binary_products(C: FinSet) -> HasBinaryProducts:
    return HasBinaryProducts.of_pair_limits(C, lambda X, Y: finset_product_cone(C, X, Y))


def finset_binary_coproducts(C: FinSet) -> HasBinaryCoproducts:
    return HasBinaryCoproducts.of_pair_colimits(C, lambda X, Y: finset_coproduct_cocone(C, X, Y))


def finset_terminal(C: FinSet) -> TerminalObject:
    unit = frozenset({()})
    return TerminalObject(C, unit, lambda X: FinFunction(X, unit, {x: () for x in X}, name="!"))


def finset_initial(C: FinSet) -> InitialObject:
    empty = frozenset()
    return InitialObject(C, empty, lambda X: FinFunction(empty, X, {}, name="¡"))


# ============================================================================
# Section 2: FinVect
# ============================================================================

@dataclass(frozen=True)
class Space:
    """有限维实向量空间 ℝ^dimension（按 id 与维度区分）"""
    id: str
    dimension: int = 1

    def __post_init__(self):
        if self.dimension < 0:
            raise ValueError(f"Space {self.id!r} has negative dimension {self.dimension}")

    def __repr__(self):
        return f"{self.id}[{self.dimension}]"


@dataclass(eq=False)
class LinearMap:
    """线性映射 f: source → target，矩阵形状为 (target.dim, source.dim)"""
    source: Space
    target: Space
    matrix: np.ndarray = field(repr=False)
    name: str = ""

    def __post_init__(self):
        self.matrix = np.asarray(self.matrix, dtype=np.float64)
        if self.matrix.shape != (self.target.dimension, self.source.dimension):
            raise ValueError(
                f"Matrix shape {self.matrix.shape} incompatible with "
                f"linear map {self.source.dimension} → {self.target.dimension}"
            )

    def __call__(self, v: np.ndarray) -> np.ndarray:
        return self.matrix @ np.asarray(v, dtype=np.float64)

    def __repr__(self):
        name_str = f"'{self.name}'" if self.name else ""
        return f"LinearMap{name_str}({self.source!r} → {self.target!r})"


class FinVect(Category):
    """有限维向量空间范畴，态射复合 = 矩阵乘法"""

    def __init__(self, name: str = "FinVect", rel_tol: float = _MATRIX_EQ_REL_TOL):
        super().__init__(name)
        self.rel_tol = rel_tol

    def linear(self, source: Space, target: Space, matrix, name: str = "") -> LinearMap:
        return LinearMap(source, target, np.asarray(matrix, dtype=np.float64), name=name)

    def source(self, f: LinearMap) -> Space:
        return f.source

    def target(self, f: LinearMap) -> Space:
        return f.target

    def identity(self, obj: Space) -> LinearMap:
        return LinearMap(obj, obj, np.eye(obj.dimension), name=f"id_{obj.id}")

    def _compose(self, g: LinearMap, f: LinearMap) -> LinearMap:
        return LinearMap(
            f.source,
            g.target,
            g.matrix @ f.matrix,
            name=f"({g.name} ∘ {f.name})" if g.name and f.name else "",
        )

    def equal(self, f: LinearMap, g: LinearMap) -> bool:
        if f.source != g.source or f.target != g.target:
            return False
        diff = np.linalg.norm(f.matrix - g.matrix, 'fro') if f.matrix.size else 0.0
        return diff <= _relative_tolerance(f.matrix, g.matrix, self.rel_tol)

    def is_mono(self, f: LinearMap) -> bool:
        return _matrix_rank(f.matrix) == f.source.dimension

    def is_epi(self, f: LinearMap) -> bool:
        return _matrix_rank(f.matrix) == f.target.dimension

    @staticmethod
    def direct_sum(X: Space, Y: Space) -> Space:
        return Space(f"({X.id}⊕{Y.id})", X.dimension + Y.dimension)


def _block_projections(X: Space, Y: Space):
    dx, dy = X.dimension, Y.dimension
    p1 = np.hstack([np.eye(dx), np.zeros((dx, dy))])
    p2 = np.hstack([np.zeros((dy, dx)), np.eye(dy)])
    return p1, p2


def finvect_product_cone(C: FinVect, X: Space, Y: Space) -> LimitCone:
    """直和 X ⊕ Y 作为积: fst = [I 0]，snd = [0 I]，lift = 纵向拼接"""
    S = C.direct_sum(X, Y)
    p1, p2 = _block_projections(X, Y)
    cone = Cone(pair(C, X, Y), S, {
        LEFT: LinearMap(S, X, p1, name="fst"),
        RIGHT: LinearMap(S, Y, p2, name="snd"),
    })

    def lift(s: Cone) -> LinearMap:
        return LinearMap(s.apex, S, np.vstack([s.pi(LEFT).matrix, s.pi(RIGHT).matrix]), name="lift")

    return LimitCone(cone, IsLimit(cone, lift))


def finvect_coproduct_cocone(C: FinVect, X: Space, Y: Space) -> ColimitCocone:
    """直和 X ⊕ Y 作为余积: inl = [I; 0]，inr = [0; I]，desc = 横向拼接"""
    S = C.direct_sum(X, Y)
    p1, p2 = _block_projections(X, Y)
    cocone = Cocone(pair(C, X, Y), S, {
        LEFT: LinearMap(X, S, p1.T, name="inl"),
        RIGHT: LinearMap(Y, S, p2.T, name="inr"),
    })

    def desc(s: Cocone) -> LinearMap:
        return LinearMap(S, s.apex, np.hstack([s.iota(LEFT).matrix, s.iota(RIGHT).matrix]), name="desc")

    return ColimitCocone(cocone, IsColimit(cocone, desc))


def finvect_binary_products(C: FinVect) -> HasBinaryProducts:
    return HasBinaryProducts.of_pair_limits(C, lambda X, Y: finvect_product_cone(C, X, Y))


def finvect_binary_coproducts(C: FinVect) -> HasBinaryCoproducts:
    return HasBinaryCoproducts.of_pair_colimits(C, lambda X, Y: finvect_coproduct_cocone(C, X, Y))


ZERO_SPACE = Space("0", 0)


def finvect_terminal(C: FinVect) -> TerminalObject:
    return TerminalObject(C, ZERO_SPACE, lambda X: LinearMap(X, ZERO_SPACE, np.zeros((0, X.dimension)), name="!"))


def finvect_initial(C: FinVect) -> InitialObject:
    return InitialObject(C, ZERO_SPACE, lambda X: LinearMap(ZERO_SPACE, X, np.zeros((X.dimension, 0)), name="¡"))


# ============================================================================
# Section 3: 演示与自检
# ============================================================================

def _configure_smoke_logging() -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    root.setLevel(logging.INFO)


def _run_demo() -> Dict[str, Any]:
    """
    FinSet 端到端示例

    场景：
        X = {1, 2}，Y = {a, b}，W = {w}
        f(w) = 1，g(w) = "a"
        lift(f, g)(w) = (1, "a")，β 交换分量，β ≫ β = id
    """
    from monoidal_coherence import braiding, CartesianStructure, CoherenceChecker

    _configure_smoke_logging()
    _logger.info("binary products demo: START")

    C = FinSet()
    P = finset_binary_products(C)
    T = finset_terminal(C)
    X, Y, W = C.obj({1, 2}), C.obj({"a", "b"}), C.obj({"w"})

    f = C.function(W, X, lambda w: 1, name="f")
    g = C.function(W, Y, lambda w: "a", name="g")
    point = P.lift(f, g)("w")
    beta = braiding(P, X, Y)
    swapped = beta.hom(point)
    restored = braiding(P, Y, X).hom(swapped)

    _logger.info("[lift] lift(f, g)(w) = %r", point)
    _logger.info("[proj] fst = %r snd = %r", P.fst(X, Y)(point), P.snd(X, Y)(point))
    _logger.info("[braiding] β(X, Y) = %r, β(Y, X) ∘ β(X, Y) = %r", swapped, restored)

    ok, violations = CoherenceChecker(CartesianStructure(P, T), [X, Y]).run()
    _logger.info("[coherence] all_passed=%s violations=%d", ok, len(violations))
    _logger.info("binary products demo: %s", "PASS" if ok else "FAIL")

    return {
        "lift": point,
        "fst": P.fst(X, Y)(point),
        "snd": P.snd(X, Y)(point),
        "braiding": swapped,
        "braiding_roundtrip": restored,
        "coherence_ok": ok,
    }


__all__ = [
    'FinFunction',
    'FinSet',
    'finset_product_cone',
    'finset_coproduct_cocone',
    'finset_finite_products',
    'finset_finite_coproducts',
    'finset_binary_products',
    'finset_binary_coproducts',
    'finset_terminal',
    'finset_initial',
    'Space',
    'LinearMap',
    'FinVect',
    'finvect_product_cone',
    'finvect_coproduct_cocone',
    'finvect_binary_products',
    'finvect_binary_coproducts',
    'finvect_terminal',
    'finvect_initial',
    'ZERO_SPACE',
]


if __name__ == "__main__":
    _run_demo()
