#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
二元积 / 余积: 存在性能力与派生运算

能力对象:
    HasBinaryProducts   - 每对 (X, Y) 选定唯一的 pair(X, Y) 极限
    HasBinaryCoproducts - 每对 (X, Y) 选定唯一的 pair(X, Y) 余极限

派生路径（二者都必须支持）:
    (a) of_finite_products   : 有限积能力限制到二元索引
    (b) of_pair_limits       : 逐对极限 → 经 diagram_iso_pair 搬运为
                               WalkingPair 形极限能力 → 再限制回 pair

工程红线:
- 禁多代表: 同一能力对同一对象对只选一次代表，之后所有 fst/lift/map 都相对它
- 禁隐式能力: 运算只作为能力对象的方法存在；跨能力混用通过 CapabilityScope 显式拒绝
- 禁折叠: X = Y 时 fst 与 snd 仍按标签区分
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from category_base import (
    Category,
    ColimitCocone,
    ConflictingCapabilityError,
    HasColimitsOfShape,
    HasFiniteCoproducts,
    HasFiniteProducts,
    HasLimitsOfShape,
    InitialObject,
    Iso,
    LimitCone,
    MissingCapabilityError,
    TerminalObject,
    UniversalPropertyViolation,
    colimit_map,
    limit_map,
    transport_colimit,
    transport_limit,
)
from binary_fan import BinaryCofan, BinaryFan, LiftResult
from walking_pair import LEFT, RIGHT, WALKING_PAIR, diagram_iso_pair, map_pair, pair

_logger = logging.getLogger(__name__)


# ============================================================================
# Section 1: 二元积
# ============================================================================

class HasBinaryProducts:
    """对每对对象选定一个 pair(X, Y) 的极限

    选定结果按 (X, Y) 缓存，一经选出不再替换；所有派生运算都相对该代表。
    """

    def __init__(self, category: Category, choose: Callable[[Hashable, Hashable], LimitCone], name: str = ""):
        self.category = category
        self._choose = choose
        self._chosen: Dict[Tuple[Hashable, Hashable], LimitCone] = {}
        self.name = name or f"HasBinaryProducts({category.name})"

    # ------------------------------------------------------------------
    # 能力构造
    # ------------------------------------------------------------------

    @classmethod
    def of_limits_of_shape(cls, lims: HasLimitsOfShape) -> "HasBinaryProducts":
        if lims.shape != WALKING_PAIR:
            raise MissingCapabilityError(f"{lims.name} is not a WalkingPair-shaped limit capability")
        C = lims.category
        return cls(C, lambda X, Y: lims.limit(pair(C, X, Y)), name=f"HasBinaryProducts({lims.name})")

    @classmethod
    def of_finite_products(cls, fp: HasFiniteProducts) -> "HasBinaryProducts":
        """路径 (a): 有限积 → 二元积"""
        _logger.debug("Deriving binary products from %s", fp.name)
        return cls.of_limits_of_shape(fp.restrict(WALKING_PAIR))

    @classmethod
    def of_pair_limits(
        cls,
        category: Category,
        choose: Callable[[Hashable, Hashable], LimitCone],
    ) -> "HasBinaryProducts":
        """路径 (b): 对每对 X, Y 有 pair(X, Y) 的极限 → 二元积"""
        _logger.debug("Deriving binary products of %s from pairwise limits", category.name)
        lims = HasLimitsOfShape(
            category,
            WALKING_PAIR,
            lambda F: transport_limit(choose(F.obj(LEFT), F.obj(RIGHT)), diagram_iso_pair(F)),
            name=f"HasLimitsOfShape(WalkingPair, {category.name})",
        )
        return cls.of_limits_of_shape(lims)

    def limits_of_shape(self) -> HasLimitsOfShape:
        """把逐对能力升级为任意 WalkingPair 形图表的极限能力"""
        return HasLimitsOfShape(
            self.category,
            WALKING_PAIR,
            lambda F: transport_limit(self.limit(F.obj(LEFT), F.obj(RIGHT)), diagram_iso_pair(F)),
            name=f"HasLimitsOfShape(WalkingPair, {self.name})",
        )

    # ------------------------------------------------------------------
    # 选定代表
    # ------------------------------------------------------------------

    def limit(self, X: Hashable, Y: Hashable) -> LimitCone:
        key = (X, Y)
        chosen = self._chosen.get(key)
        if chosen is None:
            chosen = self._choose(X, Y)
            self._chosen[key] = chosen
            _logger.debug("%s: chose %r as %r ⨯ %r", self.name, chosen.cone.apex, X, Y)
        return chosen

    def obj(self, X: Hashable, Y: Hashable) -> Hashable:
        """X ⨯ Y"""
        return self.limit(X, Y).cone.apex

    def fan(self, X: Hashable, Y: Hashable) -> BinaryFan:
        return BinaryFan.of_cone(self.limit(X, Y).cone)

    def fst(self, X: Hashable, Y: Hashable) -> Any:
        return self.limit(X, Y).cone.pi(LEFT)

    def snd(self, X: Hashable, Y: Hashable) -> Any:
        return self.limit(X, Y).cone.pi(RIGHT)

    # ------------------------------------------------------------------
    # 派生运算
    # ------------------------------------------------------------------

    def lift_with_evidence(self, f: Any, g: Any) -> LiftResult:
        C = self.category
        return BinaryFan.lift_(self.limit(C.target(f), C.target(g)).is_limit, f, g)

    def lift(self, f: Any, g: Any) -> Any:
        """lift(f, g): W → X ⨯ Y，满足 lift ≫ fst = f，lift ≫ snd = g"""
        return self.lift_with_evidence(f, g).require(f"{self.name}.lift")

    def hom_ext(self, X: Hashable, Y: Hashable, u: Any, v: Any) -> bool:
        """u, v: W → X ⨯ Y 相等 ⇔ 与 fst、snd 复合后分别相等"""
        return BinaryFan.hom_ext(self.limit(X, Y).is_limit, u, v)

    def map(self, f: Any, g: Any) -> Any:
        """f ⨯ g: W ⨯ X → Y ⨯ Z，lim 函子对 map_pair(f, g) 的作用"""
        C = self.category
        W, Y = C.source(f), C.target(f)
        X, Z = C.source(g), C.target(g)
        source, target = self.limit(W, X), self.limit(Y, Z)
        nat = map_pair(source.cone.diagram, target.cone.diagram, f, g)
        return limit_map(source, target, nat)

    def map_iso(self, i: Iso, j: Iso) -> Iso:
        """同构的积仍是同构"""
        return Iso(self.map(i.hom, j.hom), self.map(i.inv, j.inv), name=f"({i.name} ⨯ {j.name})")

    def diag(self, X: Hashable) -> Any:
        """Δ = lift(id, id): X → X ⨯ X"""
        identity = self.category.identity(X)
        return self.lift(identity, identity)

    # ------------------------------------------------------------------
    # 可检查的定律
    # ------------------------------------------------------------------

    def lift_is_mono(self, f: Any, g: Any) -> bool:
        """若 f 或 g 为单，则 lift(f, g) 为单"""
        C = self.category
        if not (C.is_mono(f) or C.is_mono(g)):
            return True
        return C.is_mono(self.lift(f, g))

    def verify_projection_laws(self, f: Any, g: Any) -> bool:
        result = self.lift_with_evidence(f, g)
        if not result.holds:
            _logger.warning("%s: lift(%r, %r) fails projection laws", self.name, f, g)
        return result.holds

    def verify_lift_fst_snd(self, X: Hashable, Y: Hashable) -> bool:
        """lift(fst, snd) = id"""
        C = self.category
        return C.equal(self.lift(self.fst(X, Y), self.snd(X, Y)), C.identity(self.obj(X, Y)))

    def verify_comp_lift(self, h: Any, f: Any, g: Any) -> bool:
        """h ≫ lift(f, g) = lift(h ≫ f, h ≫ g)"""
        C = self.category
        return C.equal(C.then(h, self.lift(f, g)), self.lift(C.then(h, f), C.then(h, g)))

    def verify_map_squares(self, f: Any, g: Any) -> bool:
        """map(f, g) ≫ fst = fst ≫ f 且 map(f, g) ≫ snd = snd ≫ g"""
        C = self.category
        m = self.map(f, g)
        W, X = C.source(f), C.source(g)
        Y, Z = C.target(f), C.target(g)
        return (
            C.equal(C.then(m, self.fst(Y, Z)), C.then(self.fst(W, X), f))
            and C.equal(C.then(m, self.snd(Y, Z)), C.then(self.snd(W, X), g))
        )

    def verify_map_functoriality(self, f1: Any, g1: Any, f2: Any, g2: Any) -> bool:
        """map(id, id) = id 且 map(f1, g1) ≫ map(f2, g2) = map(f1 ≫ f2, g1 ≫ g2)"""
        C = self.category
        W, X = C.source(f1), C.source(g1)
        preserves_id = C.equal(self.map(C.identity(W), C.identity(X)), C.identity(self.obj(W, X)))
        preserves_comp = C.equal(
            C.then(self.map(f1, g1), self.map(f2, g2)),
            self.map(C.then(f1, f2), C.then(g1, g2)),
        )
        if not (preserves_id and preserves_comp):
            _logger.warning("%s: map is not functorial on (%r, %r), (%r, %r)", self.name, f1, g1, f2, g2)
        return preserves_id and preserves_comp

    def verify_strict(self, f: Any, g: Any) -> None:
        if not self.verify_projection_laws(f, g):
            raise UniversalPropertyViolation(f"{self.name}.lift", f"projection laws fail for ({f!r}, {g!r})")

    def __repr__(self):
        return f"HasBinaryProducts('{self.name}')"


# ============================================================================
# Section 2: 二元余积（对偶）
# ============================================================================

class HasBinaryCoproducts:
    """对每对对象选定一个 pair(X, Y) 的余极限"""

    def __init__(self, category: Category, choose: Callable[[Hashable, Hashable], ColimitCocone], name: str = ""):
        self.category = category
        self._choose = choose
        self._chosen: Dict[Tuple[Hashable, Hashable], ColimitCocone] = {}
        self.name = name or f"HasBinaryCoproducts({category.name})"

    @classmethod
    def of_colimits_of_shape(cls, colims: HasColimitsOfShape) -> "HasBinaryCoproducts":
        if colims.shape != WALKING_PAIR:
            raise MissingCapabilityError(f"{colims.name} is not a WalkingPair-shaped colimit capability")
        C = colims.category
        return cls(C, lambda X, Y: colims.colimit(pair(C, X, Y)), name=f"HasBinaryCoproducts({colims.name})")

    @classmethod
    def of_finite_coproducts(cls, fc: HasFiniteCoproducts) -> "HasBinaryCoproducts":
        """路径 (a): 有限余积 → 二元余积"""
        _logger.debug("Deriving binary coproducts from %s", fc.name)
        return cls.of_colimits_of_shape(fc.restrict(WALKING_PAIR))

    @classmethod
    def of_pair_colimits(
        cls,
        category: Category,
        choose: Callable[[Hashable, Hashable], ColimitCocone],
    ) -> "HasBinaryCoproducts":
        """路径 (b): 对每对 X, Y 有 pair(X, Y) 的余极限 → 二元余积"""
        _logger.debug("Deriving binary coproducts of %s from pairwise colimits", category.name)
        colims = HasColimitsOfShape(
            category,
            WALKING_PAIR,
            lambda F: transport_colimit(choose(F.obj(LEFT), F.obj(RIGHT)), diagram_iso_pair(F)),
            name=f"HasColimitsOfShape(WalkingPair, {category.name})",
        )
        return cls.of_colimits_of_shape(colims)

    def colimits_of_shape(self) -> HasColimitsOfShape:
        return HasColimitsOfShape(
            self.category,
            WALKING_PAIR,
            lambda F: transport_colimit(self.colimit(F.obj(LEFT), F.obj(RIGHT)), diagram_iso_pair(F)),
            name=f"HasColimitsOfShape(WalkingPair, {self.name})",
        )

    def colimit(self, X: Hashable, Y: Hashable) -> ColimitCocone:
        key = (X, Y)
        chosen = self._chosen.get(key)
        if chosen is None:
            chosen = self._choose(X, Y)
            self._chosen[key] = chosen
            _logger.debug("%s: chose %r as %r ⨿ %r", self.name, chosen.cocone.apex, X, Y)
        return chosen

    def obj(self, X: Hashable, Y: Hashable) -> Hashable:
        """X ⨿ Y"""
        return self.colimit(X, Y).cocone.apex

    def cofan(self, X: Hashable, Y: Hashable) -> BinaryCofan:
        return BinaryCofan.of_cocone(self.colimit(X, Y).cocone)

    def inl(self, X: Hashable, Y: Hashable) -> Any:
        return self.colimit(X, Y).cocone.iota(LEFT)

    def inr(self, X: Hashable, Y: Hashable) -> Any:
        return self.colimit(X, Y).cocone.iota(RIGHT)

    def desc_with_evidence(self, f: Any, g: Any) -> LiftResult:
        C = self.category
        return BinaryCofan.desc_(self.colimit(C.source(f), C.source(g)).is_colimit, f, g)

    def desc(self, f: Any, g: Any) -> Any:
        """desc(f, g): X ⨿ Y → W，满足 inl ≫ desc = f，inr ≫ desc = g"""
        return self.desc_with_evidence(f, g).require(f"{self.name}.desc")

    def hom_ext(self, X: Hashable, Y: Hashable, u: Any, v: Any) -> bool:
        return BinaryCofan.hom_ext(self.colimit(X, Y).is_colimit, u, v)

    def map(self, f: Any, g: Any) -> Any:
        """f ⨿ g: W ⨿ X → Y ⨿ Z"""
        C = self.category
        W, Y = C.source(f), C.target(f)
        X, Z = C.source(g), C.target(g)
        source, target = self.colimit(W, X), self.colimit(Y, Z)
        nat = map_pair(source.cocone.diagram, target.cocone.diagram, f, g)
        return colimit_map(source, target, nat)

    def map_iso(self, i: Iso, j: Iso) -> Iso:
        return Iso(self.map(i.hom, j.hom), self.map(i.inv, j.inv), name=f"({i.name} ⨿ {j.name})")

    def codiag(self, X: Hashable) -> Any:
        """∇ = desc(id, id): X ⨿ X → X"""
        identity = self.category.identity(X)
        return self.desc(identity, identity)

    def desc_is_epi(self, f: Any, g: Any) -> bool:
        """若 f 或 g 为满，则 desc(f, g) 为满"""
        C = self.category
        if not (C.is_epi(f) or C.is_epi(g)):
            return True
        return C.is_epi(self.desc(f, g))

    def verify_injection_laws(self, f: Any, g: Any) -> bool:
        result = self.desc_with_evidence(f, g)
        if not result.holds:
            _logger.warning("%s: desc(%r, %r) fails injection laws", self.name, f, g)
        return result.holds

    def verify_desc_inl_inr(self, X: Hashable, Y: Hashable) -> bool:
        """desc(inl, inr) = id"""
        C = self.category
        return C.equal(self.desc(self.inl(X, Y), self.inr(X, Y)), C.identity(self.obj(X, Y)))

    def verify_desc_comp(self, f: Any, g: Any, h: Any) -> bool:
        """desc(f, g) ≫ h = desc(f ≫ h, g ≫ h)"""
        C = self.category
        return C.equal(C.then(self.desc(f, g), h), self.desc(C.then(f, h), C.then(g, h)))

    def verify_map_squares(self, f: Any, g: Any) -> bool:
        """inl ≫ map(f, g) = f ≫ inl 且 inr ≫ map(f, g) = g ≫ inr"""
        C = self.category
        m = self.map(f, g)
        W, X = C.source(f), C.source(g)
        Y, Z = C.target(f), C.target(g)
        return (
            C.equal(C.then(self.inl(W, X), m), C.then(f, self.inl(Y, Z)))
            and C.equal(C.then(self.inr(W, X), m), C.then(g, self.inr(Y, Z)))
        )

    def verify_map_functoriality(self, f1: Any, g1: Any, f2: Any, g2: Any) -> bool:
        C = self.category
        W, X = C.source(f1), C.source(g1)
        preserves_id = C.equal(self.map(C.identity(W), C.identity(X)), C.identity(self.obj(W, X)))
        preserves_comp = C.equal(
            C.then(self.map(f1, g1), self.map(f2, g2)),
            self.map(C.then(f1, f2), C.then(g1, g2)),
        )
        if not (preserves_id and preserves_comp):
            _logger.warning("%s: map is not functorial on (%r, %r), (%r, %r)", self.name, f1, g1, f2, g2)
        return preserves_id and preserves_comp

    def verify_strict(self, f: Any, g: Any) -> None:
        if not self.verify_injection_laws(f, g):
            raise UniversalPropertyViolation(f"{self.name}.desc", f"injection laws fail for ({f!r}, {g!r})")

    def __repr__(self):
        return f"HasBinaryCoproducts('{self.name}')"


# ============================================================================
# Section 3: 能力作用域
# ============================================================================

class CapabilityScope:
    """显式的能力上下文

    每个范畴至多登记一个积能力、一个余积能力、一个终对象、一个始对象。
    重复登记同一实例是幂等的；登记另一个实例视为配置错误。
    """

    def __init__(self, name: str = ""):
        self.name = name or "CapabilityScope"
        self._products: Dict[int, HasBinaryProducts] = {}
        self._coproducts: Dict[int, HasBinaryCoproducts] = {}
        self._terminals: Dict[int, TerminalObject] = {}
        self._initials: Dict[int, InitialObject] = {}

    def _register(self, table: Dict[int, Any], category: Category, capability: Any, kind: str) -> None:
        existing = table.get(id(category))
        if existing is not None and existing is not capability:
            raise ConflictingCapabilityError(
                f"{self.name}: {category.name} already has {kind} {existing!r}; refusing {capability!r}"
            )
        table[id(category)] = capability
        _logger.debug("%s: registered %s for %s", self.name, kind, category.name)

    def _lookup(self, table: Dict[int, Any], category: Category, kind: str) -> Any:
        capability = table.get(id(category))
        if capability is None:
            raise MissingCapabilityError(f"{self.name}: no {kind} registered for {category.name}")
        return capability

    def provide_products(self, capability: HasBinaryProducts) -> HasBinaryProducts:
        self._register(self._products, capability.category, capability, "binary products")
        return capability

    def provide_coproducts(self, capability: HasBinaryCoproducts) -> HasBinaryCoproducts:
        self._register(self._coproducts, capability.category, capability, "binary coproducts")
        return capability

    def provide_terminal(self, terminal: TerminalObject) -> TerminalObject:
        self._register(self._terminals, terminal.category, terminal, "terminal object")
        return terminal

    def provide_initial(self, initial: InitialObject) -> InitialObject:
        self._register(self._initials, initial.category, initial, "initial object")
        return initial

    def products(self, category: Category) -> HasBinaryProducts:
        return self._lookup(self._products, category, "binary products")

    def coproducts(self, category: Category) -> HasBinaryCoproducts:
        return self._lookup(self._coproducts, category, "binary coproducts")

    def terminal(self, category: Category) -> TerminalObject:
        return self._lookup(self._terminals, category, "terminal object")

    def initial(self, category: Category) -> InitialObject:
        return self._lookup(self._initials, category, "initial object")

    def find_products(self, category: Category) -> Optional[HasBinaryProducts]:
        return self._products.get(id(category))

    def find_coproducts(self, category: Category) -> Optional[HasBinaryCoproducts]:
        return self._coproducts.get(id(category))


__all__ = [
    'HasBinaryProducts',
    'HasBinaryCoproducts',
    'CapabilityScope',
]
