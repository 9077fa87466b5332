#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
范畴基础接口: Category / Functor / NatTrans / Cone / Limit

本模块只提供二元积核心所消费的窄接口（外部协作者）：
1. Category      - 对象 + 态射 + 复合 + 恒等 + 态射相等判定
2. Functor       - 严格函子律验证 F(id) = id, F(g∘f) = F(g)∘F(f)
3. NatTrans/Iso  - 分量态射 + 自然性方块 + 双边逆
4. Cone/Cocone   - 顶点 + 一族腿
5. IsLimit       - 泛性质见证: lift + 分解等式 + 唯一性
6. 终/始对象、有限积能力

工程红线:
- 禁伪函子: 函子律必须显式验证，违反即抛 FunctorLawViolation
- 禁隐式能力: 极限/余极限见证必须显式传入，禁止全局查找
- 禁近似相等: 态射相等由具体范畴的 equal() 判定，核心不做任何容差假设
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any, Callable, Dict, Hashable, Iterator, List, Mapping, Sequence, Set, Tuple
)

_logger = logging.getLogger(__name__)


# ============================================================================
# Section 0: 异常定义
# ============================================================================

class CategoricalError(Exception):
    """范畴论引擎基础异常"""
    pass


class CompositionError(CategoricalError):
    """态射不可复合（端点不匹配）"""
    pass


class FunctorLawViolation(CategoricalError):
    """函子律违反异常

    当 F(id) ≠ id 或 F(g∘f) ≠ F(g)∘F(f) 时抛出
    """
    def __init__(self, functor_name: str, law: str, details: str):
        self.functor_name = functor_name
        self.law = law  # "identity" or "composition"
        self.details = details
        super().__init__(f"Functor '{functor_name}' violates {law} law: {details}")


class NaturalityViolation(CategoricalError):
    """自然性方块不交换"""
    def __init__(self, transformation: str, details: str):
        self.transformation = transformation
        self.details = details
        super().__init__(f"Naturality square of '{transformation}' does not commute: {details}")


class IsoLawViolation(CategoricalError):
    """同构的双边逆律违反"""
    def __init__(self, name: str, side: str, details: str):
        self.name = name
        self.side = side  # "hom_inv_id" or "inv_hom_id"
        self.details = details
        super().__init__(f"Isomorphism '{name}' violates {side}: {details}")


class UniversalPropertyViolation(CategoricalError):
    """泛性质见证失效（分解或唯一性不成立）"""
    def __init__(self, construction: str, details: str):
        self.construction = construction
        self.details = details
        super().__init__(f"Universal property of '{construction}' fails: {details}")


class MissingCapabilityError(CategoricalError):
    """所需的存在性能力未提供"""
    pass


class ConflictingCapabilityError(CategoricalError):
    """同一范畴上存在两个互不相同的能力实例"""
    pass


# ============================================================================
# Section 1: Category - 抽象范畴
# ============================================================================

class Category(ABC):
    """范畴: 对象 + 态射 + 复合律

    公理:
    1. 结合律: (h ∘ g) ∘ f = h ∘ (g ∘ f)
    2. 恒等律: id_B ∘ f = f = f ∘ id_A

    对象必须可哈希（能力对象按对象对缓存选定代表）。态射是不透明值，
    只通过 source/target/compose/equal 访问。
    """

    def __init__(self, name: str = ""):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def source(self, f: Any) -> Hashable:
        """dom(f)"""

    @abstractmethod
    def target(self, f: Any) -> Hashable:
        """cod(f)"""

    @abstractmethod
    def identity(self, obj: Hashable) -> Any:
        """id_obj"""

    @abstractmethod
    def _compose(self, g: Any, f: Any) -> Any:
        """无检查的复合 g ∘ f，调用者保证可复合"""

    @abstractmethod
    def equal(self, f: Any, g: Any) -> bool:
        """态射相等判定"""

    def compose(self, g: Any, f: Any) -> Any:
        """态射复合 g ∘ f

        数学: 若 f: A → B, g: B → C, 则 g ∘ f: A → C
        """
        if self.target(f) != self.source(g):
            raise CompositionError(
                f"Cannot compose in {self.name}: target {self.target(f)!r} of {f!r} "
                f"≠ source {self.source(g)!r} of {g!r}"
            )
        return self._compose(g, f)

    def then(self, f: Any, *rest: Any) -> Any:
        """图表序复合 f ≫ g ≫ ..."""
        result = f
        for g in rest:
            result = self.compose(g, result)
        return result

    def is_mono(self, f: Any) -> bool:
        """单态射判定（可选）: 不能判定单态射的范畴保留此默认实现，调用即抛 NotImplementedError"""
        raise NotImplementedError(f"{self.name} does not decide monomorphisms")

    def is_epi(self, f: Any) -> bool:
        """满态射判定（可选）: 不能判定满态射的范畴保留此默认实现，调用即抛 NotImplementedError"""
        raise NotImplementedError(f"{self.name} does not decide epimorphisms")

    def __repr__(self):
        return f"{self.__class__.__name__}('{self.name}')"


@dataclass(frozen=True)
class Iso:
    """同构 hom: X ≅ Y, inv: Y → X

    双边逆律:
        hom ≫ inv = id_X
        inv ≫ hom = id_Y
    """
    hom: Any
    inv: Any
    name: str = ""

    @staticmethod
    def refl(category: Category, obj: Hashable) -> "Iso":
        identity = category.identity(obj)
        return Iso(identity, identity, name=f"refl({obj!r})")

    def symm(self) -> "Iso":
        return Iso(self.inv, self.hom, name=f"({self.name})⁻¹" if self.name else "")

    def trans(self, category: Category, other: "Iso") -> "Iso":
        return Iso(
            category.then(self.hom, other.hom),
            category.then(other.inv, self.inv),
            name=f"({self.name} ≪≫ {other.name})" if self.name and other.name else "",
        )

    def violations(self, category: Category) -> List[str]:
        found = []
        src, tgt = category.source(self.hom), category.target(self.hom)
        if not category.equal(category.then(self.hom, self.inv), category.identity(src)):
            found.append("hom_inv_id")
        if not category.equal(category.then(self.inv, self.hom), category.identity(tgt)):
            found.append("inv_hom_id")
        return found

    def verify(self, category: Category) -> bool:
        """检查双边逆律，失败时记录警告并返回 False"""
        found = self.violations(category)
        for side in found:
            _logger.warning("Iso %s violates %s", self.name or repr(self), side)
        return not found

    def verify_strict(self, category: Category) -> None:
        found = self.violations(category)
        if found:
            raise IsoLawViolation(self.name or repr(self), found[0], f"in category {category.name}")


# ============================================================================
# Section 2: 离散索引范畴
# ============================================================================

@dataclass(frozen=True)
class DiscreteHom:
    """离散范畴中唯一的态射: 索引 j 上的恒等箭头"""
    index: Hashable

    def __repr__(self):
        return f"𝟙({self.index!r})"


class DiscreteCategory(Category):
    """有限离散范畴: 对象为有限索引集，态射只有恒等

    索引按给定顺序枚举；自然性/锥条件的穷举验证依赖 arrows()。
    """

    def __init__(self, indices: Sequence[Hashable], name: str = ""):
        super().__init__(name or f"Discrete{tuple(indices)!r}")
        if len(set(indices)) != len(indices):
            raise ValueError(f"Duplicate indices in discrete category: {indices!r}")
        self.indices: Tuple[Hashable, ...] = tuple(indices)

    @property
    def objects(self) -> Tuple[Hashable, ...]:
        return self.indices

    def arrows(self) -> Iterator[DiscreteHom]:
        for j in self.indices:
            yield DiscreteHom(j)

    def source(self, f: DiscreteHom) -> Hashable:
        return f.index

    def target(self, f: DiscreteHom) -> Hashable:
        return f.index

    def identity(self, obj: Hashable) -> DiscreteHom:
        if obj not in self.indices:
            raise KeyError(f"Index {obj!r} not in {self.name}")
        return DiscreteHom(obj)

    def _compose(self, g: DiscreteHom, f: DiscreteHom) -> DiscreteHom:
        return f

    def equal(self, f: DiscreteHom, g: DiscreteHom) -> bool:
        return f == g

    def __eq__(self, other):
        if not isinstance(other, DiscreteCategory):
            return False
        return self.indices == other.indices

    def __hash__(self):
        return hash(self.indices)


# ============================================================================
# Section 3: Functor - 严格函子律验证
# ============================================================================

class Functor(ABC):
    """函子基类: 严格验证函子律

    函子 F: C → D 必须满足:
    1. F(id_A) = id_{F(A)}  (保持恒等)
    2. F(g ∘ f) = F(g) ∘ F(f)  (保持复合)

    任何违反都会抛出 FunctorLawViolation
    """

    def __init__(self, source_category: Category, target_category: Category, name: str = ""):
        self.source_category = source_category
        self.target_category = target_category
        self.name = name or self.__class__.__name__
        self._verified_identities: Set[Hashable] = set()

    @abstractmethod
    def obj(self, j: Hashable) -> Hashable:
        """对象映射 F: Ob(C) → Ob(D)"""

    @abstractmethod
    def map(self, u: Any) -> Any:
        """态射映射 F: Mor(C) → Mor(D)"""

    def verify_identity_law(self, j: Hashable) -> None:
        """验证 F(id_j) = id_{F(j)}"""
        if j in self._verified_identities:
            return
        D = self.target_category
        F_id = self.map(self.source_category.identity(j))
        F_j = self.obj(j)
        if D.source(F_id) != F_j or D.target(F_id) != F_j:
            raise FunctorLawViolation(self.name, "identity", f"F(id_{j!r}) has wrong source/target")
        if not D.equal(F_id, D.identity(F_j)):
            raise FunctorLawViolation(self.name, "identity", f"F(id_{j!r}) ≠ id_F({j!r})")
        self._verified_identities.add(j)

    def verify_composition_law(self, g: Any, f: Any) -> None:
        """验证 F(g ∘ f) = F(g) ∘ F(f)"""
        C, D = self.source_category, self.target_category
        F_gf = self.map(C.compose(g, f))
        F_g_F_f = D.compose(self.map(g), self.map(f))
        if not D.equal(F_gf, F_g_F_f):
            raise FunctorLawViolation(self.name, "composition", f"F({g!r} ∘ {f!r}) ≠ F({g!r}) ∘ F({f!r})")

    def verify_laws(self, objects: Sequence[Hashable], composable: Sequence[Tuple[Any, Any]] = ()) -> None:
        for j in objects:
            self.verify_identity_law(j)
        for g, f in composable:
            self.verify_composition_law(g, f)

    def __repr__(self):
        return f"Functor('{self.name}': {self.source_category.name} → {self.target_category.name})"


class DiscreteFunctor(Functor):
    """离散范畴出发的函子（离散图表）

    对象映射由字典给定；态射映射被离散性强制为恒等。
    """

    def __init__(
        self,
        shape: DiscreteCategory,
        category: Category,
        objects: Mapping[Hashable, Hashable],
        name: str = "",
    ):
        super().__init__(shape, category, name=name)
        missing = [j for j in shape.indices if j not in objects]
        if missing:
            raise KeyError(f"Discrete diagram '{self.name}' has no object at indices {missing!r}")
        self._objects: Dict[Hashable, Hashable] = {j: objects[j] for j in shape.indices}

    @property
    def shape(self) -> DiscreteCategory:
        return self.source_category

    def obj(self, j: Hashable) -> Hashable:
        try:
            return self._objects[j]
        except KeyError:
            raise KeyError(f"Index {j!r} not in diagram '{self.name}'") from None

    def map(self, u: DiscreteHom) -> Any:
        return self.target_category.identity(self.obj(u.index))


# ============================================================================
# Section 4: 自然变换 / 自然同构
# ============================================================================

class NatTrans:
    """自然变换 η: F ⇒ G

    分量 η_j: F(j) → G(j)，对索引范畴中每个箭头 u: j → k 满足
        F(u) ≫ η_k = η_j ≫ G(u)
    """

    def __init__(
        self,
        source: Functor,
        target: Functor,
        components: Mapping[Hashable, Any],
        name: str = "",
    ):
        self.source = source
        self.target = target
        self.name = name or f"{source.name} ⇒ {target.name}"
        self._components: Dict[Hashable, Any] = dict(components)

    @property
    def category(self) -> Category:
        return self.source.target_category

    def app(self, j: Hashable) -> Any:
        try:
            return self._components[j]
        except KeyError:
            raise KeyError(f"Natural transformation '{self.name}' has no component at {j!r}") from None

    def vcomp(self, other: "NatTrans") -> "NatTrans":
        """纵向复合 self ≫ other"""
        C = self.category
        return NatTrans(
            self.source,
            other.target,
            {j: C.then(self.app(j), other.app(j)) for j in self._components},
            name=f"({self.name} ≫ {other.name})",
        )

    def naturality_failures(self) -> List[Any]:
        C = self.category
        failures = []
        for u in self.source.source_category.arrows():
            j = self.source.source_category.source(u)
            k = self.source.source_category.target(u)
            lhs = C.then(self.source.map(u), self.app(k))
            rhs = C.then(self.app(j), self.target.map(u))
            if not C.equal(lhs, rhs):
                failures.append(u)
        return failures

    def verify_naturality(self) -> bool:
        failures = self.naturality_failures()
        for u in failures:
            _logger.warning("Naturality of %s fails at %r", self.name, u)
        return not failures

    def verify_naturality_strict(self) -> None:
        failures = self.naturality_failures()
        if failures:
            raise NaturalityViolation(self.name, f"square at {failures[0]!r}")

    def __repr__(self):
        return f"NatTrans('{self.name}')"


class NatIso:
    """自然同构 F ≅ G: 一对互逆的自然变换"""

    def __init__(self, hom: NatTrans, inv: NatTrans, name: str = ""):
        self.hom = hom
        self.inv = inv
        self.name = name or hom.name.replace("⇒", "≅")

    @property
    def source(self) -> Functor:
        return self.hom.source

    @property
    def target(self) -> Functor:
        return self.hom.target

    def app(self, j: Hashable) -> Iso:
        return Iso(self.hom.app(j), self.inv.app(j), name=f"{self.name}[{j!r}]")

    def symm(self) -> "NatIso":
        return NatIso(self.inv, self.hom, name=f"({self.name})⁻¹")

    def verify(self) -> bool:
        C = self.hom.category
        ok = self.hom.verify_naturality() and self.inv.verify_naturality()
        for j in self.source.source_category.objects:
            ok = self.app(j).verify(C) and ok
        return ok

    def verify_strict(self) -> None:
        C = self.hom.category
        self.hom.verify_naturality_strict()
        self.inv.verify_naturality_strict()
        for j in self.source.source_category.objects:
            self.app(j).verify_strict(C)

    def __repr__(self):
        return f"NatIso('{self.name}')"


# ============================================================================
# Section 5: 锥 / 余锥
# ============================================================================

@dataclass(frozen=True, eq=False)
class Cone:
    """图表 F 上的锥: 顶点 W 与腿 π_j: W → F(j)"""
    diagram: Functor
    apex: Hashable
    legs: Mapping[Hashable, Any]

    @property
    def category(self) -> Category:
        return self.diagram.target_category

    def pi(self, j: Hashable) -> Any:
        return self.legs[j]

    def extend(self, f: Any) -> "Cone":
        """沿 f: V → W 拉回: 腿为 f ≫ π_j"""
        C = self.category
        return Cone(self.diagram, C.source(f), {j: C.then(f, leg) for j, leg in self.legs.items()})

    def verify(self) -> bool:
        """检查腿的端点以及 π_j ≫ F(u) = π_k"""
        C, J = self.category, self.diagram.source_category
        for j in J.objects:
            leg = self.pi(j)
            if C.source(leg) != self.apex or C.target(leg) != self.diagram.obj(j):
                return False
        for u in J.arrows():
            j, k = J.source(u), J.target(u)
            if not C.equal(C.then(self.pi(j), self.diagram.map(u)), self.pi(k)):
                return False
        return True


@dataclass(frozen=True, eq=False)
class Cocone:
    """图表 F 上的余锥: 顶点 W 与腿 ι_j: F(j) → W"""
    diagram: Functor
    apex: Hashable
    legs: Mapping[Hashable, Any]

    @property
    def category(self) -> Category:
        return self.diagram.target_category

    def iota(self, j: Hashable) -> Any:
        return self.legs[j]

    def extend(self, f: Any) -> "Cocone":
        """沿 f: W → V 推出: 腿为 ι_j ≫ f"""
        C = self.category
        return Cocone(self.diagram, C.target(f), {j: C.then(leg, f) for j, leg in self.legs.items()})

    def verify(self) -> bool:
        C, J = self.category, self.diagram.source_category
        for j in J.objects:
            leg = self.iota(j)
            if C.target(leg) != self.apex or C.source(leg) != self.diagram.obj(j):
                return False
        for u in J.arrows():
            j, k = J.source(u), J.target(u)
            if not C.equal(C.then(self.diagram.map(u), self.iota(k)), self.iota(j)):
                return False
        return True


def _check_same_shape(expected: Functor, legs: Mapping[Hashable, Any], endpoint: Callable[[Any], Hashable],
                      construction: str) -> None:
    for j in expected.source_category.objects:
        if j not in legs:
            raise CompositionError(f"{construction}: missing leg at index {j!r}")
        if endpoint(legs[j]) != expected.obj(j):
            raise CompositionError(
                f"{construction}: leg at {j!r} ends at {endpoint(legs[j])!r}, "
                f"diagram has {expected.obj(j)!r}"
            )


# ============================================================================
# Section 6: 泛性质见证 IsLimit / IsColimit
# ============================================================================

class IsLimit:
    """锥 t 是极限的见证

    泛性质: 对任意锥 s，存在唯一 l = lift(s): s.apex → t.apex，
    使得对所有 j 有 l ≫ t.π_j = s.π_j。

    lift 由外部（具体范畴）提供；fac/uniq 在此处作为可检查的断言。
    """

    def __init__(self, cone: Cone, lift: Callable[[Cone], Any], name: str = ""):
        self.cone = cone
        self._lift = lift
        self.name = name or f"lim {cone.diagram.name}"

    @property
    def category(self) -> Category:
        return self.cone.category

    def lift(self, s: Cone) -> Any:
        _check_same_shape(self.cone.diagram, s.legs, self.category.target, self.name)
        return self._lift(s)

    def fac(self, s: Cone, j: Hashable) -> bool:
        C = self.category
        return C.equal(C.then(self.lift(s), self.cone.pi(j)), s.pi(j))

    def verify_fac(self, s: Cone) -> bool:
        return all(self.fac(s, j) for j in self.cone.diagram.source_category.objects)

    def verify_uniq(self, s: Cone, m: Any) -> bool:
        """若 m 经每条腿都分解 s，则 m = lift(s)"""
        C = self.category
        factors = all(
            C.equal(C.then(m, self.cone.pi(j)), s.pi(j))
            for j in self.cone.diagram.source_category.objects
        )
        return (not factors) or C.equal(m, self.lift(s))

    def verify_strict(self, s: Cone) -> None:
        if not self.verify_fac(s):
            raise UniversalPropertyViolation(self.name, f"lift does not factor the cone with apex {s.apex!r}")

    def hom_ext(self, f: Any, g: Any) -> bool:
        """f, g: W → t.apex 相等当且仅当与每条腿复合后相等"""
        C = self.category
        return all(
            C.equal(C.then(f, self.cone.pi(j)), C.then(g, self.cone.pi(j)))
            for j in self.cone.diagram.source_category.objects
        )


class IsColimit:
    """余锥 t 是余极限的见证（对偶: desc(s) 满足 t.ι_j ≫ desc(s) = s.ι_j）"""

    def __init__(self, cocone: Cocone, desc: Callable[[Cocone], Any], name: str = ""):
        self.cocone = cocone
        self._desc = desc
        self.name = name or f"colim {cocone.diagram.name}"

    @property
    def category(self) -> Category:
        return self.cocone.category

    def desc(self, s: Cocone) -> Any:
        _check_same_shape(self.cocone.diagram, s.legs, self.category.source, self.name)
        return self._desc(s)

    def fac(self, s: Cocone, j: Hashable) -> bool:
        C = self.category
        return C.equal(C.then(self.cocone.iota(j), self.desc(s)), s.iota(j))

    def verify_fac(self, s: Cocone) -> bool:
        return all(self.fac(s, j) for j in self.cocone.diagram.source_category.objects)

    def verify_uniq(self, s: Cocone, m: Any) -> bool:
        C = self.category
        factors = all(
            C.equal(C.then(self.cocone.iota(j), m), s.iota(j))
            for j in self.cocone.diagram.source_category.objects
        )
        return (not factors) or C.equal(m, self.desc(s))

    def verify_strict(self, s: Cocone) -> None:
        if not self.verify_fac(s):
            raise UniversalPropertyViolation(self.name, f"desc does not factor the cocone with apex {s.apex!r}")

    def hom_ext(self, f: Any, g: Any) -> bool:
        C = self.category
        return all(
            C.equal(C.then(self.cocone.iota(j), f), C.then(self.cocone.iota(j), g))
            for j in self.cocone.diagram.source_category.objects
        )


@dataclass(frozen=True, eq=False)
class LimitCone:
    cone: Cone
    is_limit: IsLimit


@dataclass(frozen=True, eq=False)
class ColimitCocone:
    cocone: Cocone
    is_colimit: IsColimit


def transport_limit(limit: LimitCone, iso: NatIso) -> LimitCone:
    """沿自然同构 F ≅ G 把 G 的极限搬运为 F 的极限

    新锥的腿: π_j ≫ inv_j；lift(s) = 原极限对 (s_j ≫ hom_j) 的 lift。
    """
    F, G = iso.source, iso.target
    C = F.target_category
    t = limit.cone
    cone = Cone(F, t.apex, {j: C.then(t.pi(j), iso.inv.app(j)) for j in F.source_category.objects})

    def lift(s: Cone) -> Any:
        moved = Cone(G, s.apex, {j: C.then(s.pi(j), iso.hom.app(j)) for j in F.source_category.objects})
        return limit.is_limit.lift(moved)

    return LimitCone(cone, IsLimit(cone, lift, name=f"lim {F.name}"))


def transport_colimit(colimit: ColimitCocone, iso: NatIso) -> ColimitCocone:
    """沿自然同构 F ≅ G 把 G 的余极限搬运为 F 的余极限"""
    F, G = iso.source, iso.target
    C = F.target_category
    t = colimit.cocone
    cocone = Cocone(F, t.apex, {j: C.then(iso.hom.app(j), t.iota(j)) for j in F.source_category.objects})

    def desc(s: Cocone) -> Any:
        moved = Cocone(G, s.apex, {j: C.then(iso.inv.app(j), s.iota(j)) for j in F.source_category.objects})
        return colimit.is_colimit.desc(moved)

    return ColimitCocone(cocone, IsColimit(cocone, desc, name=f"colim {F.name}"))


def limit_map(source: LimitCone, target: LimitCone, nat: NatTrans) -> Any:
    """lim 函子对自然变换 η: F ⇒ G 的作用: lim F → lim G"""
    C = nat.category
    s = Cone(target.cone.diagram, source.cone.apex,
             {j: C.then(source.cone.pi(j), nat.app(j)) for j in nat.source.source_category.objects})
    return target.is_limit.lift(s)


def colimit_map(source: ColimitCocone, target: ColimitCocone, nat: NatTrans) -> Any:
    """colim 函子对自然变换 η: F ⇒ G 的作用: colim F → colim G"""
    C = nat.category
    s = Cocone(source.cocone.diagram, target.cocone.apex,
               {j: C.then(nat.app(j), target.cocone.iota(j)) for j in nat.source.source_category.objects})
    return source.is_colimit.desc(s)


# ============================================================================
# Section 7: 终/始对象
# ============================================================================

@dataclass(frozen=True, eq=False)
class TerminalObject:
    """终对象 ⊤: 对每个 X 有唯一态射 X → ⊤"""
    category: Category
    obj: Hashable
    to_terminal: Callable[[Hashable], Any]

    def verify_unique(self, f: Any) -> bool:
        return self.category.equal(f, self.to_terminal(self.category.source(f)))


@dataclass(frozen=True, eq=False)
class InitialObject:
    """始对象 ⊥: 对每个 X 有唯一态射 ⊥ → X"""
    category: Category
    obj: Hashable
    from_initial: Callable[[Hashable], Any]

    def verify_unique(self, f: Any) -> bool:
        return self.category.equal(f, self.from_initial(self.category.target(f)))


# ============================================================================
# Section 8: 存在性能力（按形状）
# ============================================================================

class HasLimitsOfShape:
    """给定离散形状 J，对每个 J 形图表都有一个极限"""

    def __init__(self, category: Category, shape: DiscreteCategory,
                 choose: Callable[[Functor], LimitCone], name: str = ""):
        self.category = category
        self.shape = shape
        self._choose = choose
        self.name = name or f"HasLimitsOfShape({shape.name})"

    def limit(self, diagram: Functor) -> LimitCone:
        if diagram.source_category != self.shape:
            raise MissingCapabilityError(
                f"{self.name} has no limits for diagrams of shape {diagram.source_category.name}"
            )
        if diagram.target_category is not self.category:
            raise MissingCapabilityError(f"{self.name} covers {self.category.name}, not {diagram.target_category.name}")
        return self._choose(diagram)


class HasColimitsOfShape:
    """给定离散形状 J，对每个 J 形图表都有一个余极限"""

    def __init__(self, category: Category, shape: DiscreteCategory,
                 choose: Callable[[Functor], ColimitCocone], name: str = ""):
        self.category = category
        self.shape = shape
        self._choose = choose
        self.name = name or f"HasColimitsOfShape({shape.name})"

    def colimit(self, diagram: Functor) -> ColimitCocone:
        if diagram.source_category != self.shape:
            raise MissingCapabilityError(
                f"{self.name} has no colimits for diagrams of shape {diagram.source_category.name}"
            )
        if diagram.target_category is not self.category:
            raise MissingCapabilityError(f"{self.name} covers {self.category.name}, not {diagram.target_category.name}")
        return self._choose(diagram)


class HasFiniteProducts:
    """有限积能力: 任意有限离散图表都有极限（严格强于二元积）"""

    def __init__(self, category: Category, choose: Callable[[Functor], LimitCone], name: str = ""):
        self.category = category
        self._choose = choose
        self.name = name or f"HasFiniteProducts({category.name})"

    def limit(self, diagram: Functor) -> LimitCone:
        if not isinstance(diagram.source_category, DiscreteCategory):
            raise MissingCapabilityError(f"{self.name} only covers finite discrete diagrams")
        return self._choose(diagram)

    def restrict(self, shape: DiscreteCategory) -> HasLimitsOfShape:
        _logger.debug("Restricting %s to shape %s", self.name, shape.name)
        return HasLimitsOfShape(self.category, shape, self.limit, name=f"{self.name}|{shape.name}")


class HasFiniteCoproducts:
    """有限余积能力"""

    def __init__(self, category: Category, choose: Callable[[Functor], ColimitCocone], name: str = ""):
        self.category = category
        self._choose = choose
        self.name = name or f"HasFiniteCoproducts({category.name})"

    def colimit(self, diagram: Functor) -> ColimitCocone:
        if not isinstance(diagram.source_category, DiscreteCategory):
            raise MissingCapabilityError(f"{self.name} only covers finite discrete diagrams")
        return self._choose(diagram)

    def restrict(self, shape: DiscreteCategory) -> HasColimitsOfShape:
        _logger.debug("Restricting %s to shape %s", self.name, shape.name)
        return HasColimitsOfShape(self.category, shape, self.colimit, name=f"{self.name}|{shape.name}")


__all__ = [
    # 异常
    'CategoricalError',
    'CompositionError',
    'FunctorLawViolation',
    'NaturalityViolation',
    'IsoLawViolation',
    'UniversalPropertyViolation',
    'MissingCapabilityError',
    'ConflictingCapabilityError',

    # 范畴与函子
    'Category',
    'Iso',
    'DiscreteHom',
    'DiscreteCategory',
    'Functor',
    'DiscreteFunctor',
    'NatTrans',
    'NatIso',

    # 锥与泛性质
    'Cone',
    'Cocone',
    'IsLimit',
    'IsColimit',
    'LimitCone',
    'ColimitCocone',
    'transport_limit',
    'transport_colimit',
    'limit_map',
    'colimit_map',

    # 能力
    'TerminalObject',
    'InitialObject',
    'HasLimitsOfShape',
    'HasColimitsOfShape',
    'HasFiniteProducts',
    'HasFiniteCoproducts',
]
