# AreaMethod SDK - Symbolic Expressions
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""
Expression tree for the area method.

Expressions are built from integers and three geometric primitives (signed
ratio of collinear segments, signed triangle area and Pythagoras difference)
combined with sums, differences, products, fractions and negation.
Expressions are immutable: every operation returns a new tree and shares
the untouched operands.

Equality is structural. ``S(A,B,C) + S(D,E,F)`` and ``S(D,E,F) + S(A,B,C)``
are different expressions until they have been normalized.

Example:
    >>> a, b, c = FreePoint('A'), FreePoint('B'), FreePoint('C')
    >>> expr = 2 * area(a, b, c) - pythagoras(a, b, c)
    >>> expr.render()
    '((2 * S(A,B,C)) - P(A,B,C))'
    >>> sorted(p.label for p in expr.collect_points())
    ['A', 'B', 'C']
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Sequence, Tuple, Union
import logging

from .exceptions import EliminationError, MalformedExpressionError
from .points import FreePredicate, Point, is_free_point


logger = logging.getLogger(__name__)


# Rule supplied by the geometry layer: rewrites a primitive containing the
# given point into an expression over that point's defining points.
EliminationRule = Callable[['Expression', Point], 'Expression']

# Type alias for things that can be converted to expressions
ExprLike = Union['Expression', int]

# A monomial as (coefficient, atoms)
Monomial = Tuple[int, Tuple['Expression', ...]]


class Expression(ABC):
    """
    Base class for area-method expressions.

    Expressions are immutable, hashable and compared structurally.
    They can be composed with the usual Python operators.
    """

    @abstractmethod
    def collect_points(self) -> FrozenSet[Point]:
        """Return every point referenced in this expression."""
        ...

    @abstractmethod
    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        """
        Check whether every referenced point is free.

        Args:
            is_free: Classification predicate of the geometry layer.

        Returns:
            True if all points satisfy ``is_free`` (always True for numbers).
        """
        ...

    @abstractmethod
    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        """
        Eliminate ``point`` from the expression.

        Each primitive mentioning ``point`` is replaced by ``rule(primitive,
        point)``; the rest of the tree is rebuilt unchanged.

        Raises:
            EliminationError: If the rule leaves ``point`` in its result.
        """
        ...

    @abstractmethod
    def reduce_to_single_fraction(self) -> Fraction:
        """
        Rewrite as ``Fraction(numerator, denominator)`` with no nested fraction.

        Nested fractions are cleared by cross-multiplication; nothing is
        simplified on the way.
        """
        ...

    @abstractmethod
    def uniformize(self) -> Expression:
        """
        Rewrite primitives into a canonical point order.

        Uses the symmetries S(A,B,C) = S(B,C,A) = -S(A,C,B),
        P(A,B,C) = P(C,B,A) and AB = -BA, ordering points by label.
        """
        ...

    @abstractmethod
    def _monomials(self) -> List[Monomial]:
        ...

    def render(self) -> str:
        """Fully parenthesized text of the expression."""
        return repr(self)

    def __str__(self) -> str:
        return self.render()

    def equals(self, other: object) -> bool:
        """Structural equality; no arithmetic is performed."""
        return self == other

    def is_zero(self) -> bool:
        """True iff the expression is literally ``Number(0)``."""
        return isinstance(self, Number) and self.value == 0

    def to_right_associative_form(self) -> Expression:
        """
        Expand into a right-associative sum of monomials.

        The result has the shape ``m1 + (m2 + (... + mk))`` where each
        monomial is ``c * (x1 * (x2 * ... xn))`` with an integer ``c`` and
        triangle areas or Pythagoras differences ``xi``. Monomials are not
        merged and zero coefficients are kept.

        Raises:
            MalformedExpressionError: If the expression still contains a
                fraction or a ratio.
        """
        return right_associative_sum(
            [monomial(coefficient, atoms) for coefficient, atoms in self._monomials()]
        )

    # Operator overloading for natural math syntax
    def __neg__(self) -> Expression:
        return AdditiveInverse(self)

    def __add__(self, other: ExprLike) -> Expression:
        return Sum(self, _to_expr(other))

    def __radd__(self, other: ExprLike) -> Expression:
        return Sum(_to_expr(other), self)

    def __sub__(self, other: ExprLike) -> Expression:
        return Difference(self, _to_expr(other))

    def __rsub__(self, other: ExprLike) -> Expression:
        return Difference(_to_expr(other), self)

    def __mul__(self, other: ExprLike) -> Expression:
        return Product(self, _to_expr(other))

    def __rmul__(self, other: ExprLike) -> Expression:
        return Product(_to_expr(other), self)

    def __truediv__(self, other: ExprLike) -> Expression:
        return Fraction(self, _to_expr(other))

    def __rtruediv__(self, other: ExprLike) -> Expression:
        return Fraction(_to_expr(other), self)


def _to_expr(x: ExprLike) -> Expression:
    """Convert a value to an Expression."""
    if isinstance(x, Expression):
        return x
    elif isinstance(x, int) and not isinstance(x, bool):
        return Number(x)
    else:
        raise TypeError(f"Cannot convert {type(x).__name__} to Expression")


def _apply_rule(primitive: Expression, point: Point, rule: EliminationRule) -> Expression:
    result = rule(primitive, point)
    if point in result.collect_points():
        raise EliminationError(point, result)
    logger.debug("Eliminated %s: %s -> %s", point.label, primitive, result)
    return result


def _negate(monomials: List[Monomial]) -> List[Monomial]:
    return [(-coefficient, atoms) for coefficient, atoms in monomials]


@dataclass(frozen=True)
class Number(Expression):
    """An integer constant."""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Number value must be an int, got {type(self.value).__name__}")

    def collect_points(self) -> FrozenSet[Point]:
        return frozenset()

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return True

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        return self

    def reduce_to_single_fraction(self) -> Fraction:
        return Fraction(self, Number(1))

    def uniformize(self) -> Expression:
        return self

    def _monomials(self) -> List[Monomial]:
        return [(self.value, ())]

    def __repr__(self) -> str:
        return str(self.value)


# Geometric primitives

@dataclass(frozen=True)
class Ratio(Expression):
    """Signed ratio AB/CD of two collinear segments."""
    a: Point
    b: Point
    c: Point
    d: Point

    @property
    def points(self) -> Tuple[Point, Point, Point, Point]:
        return (self.a, self.b, self.c, self.d)

    def collect_points(self) -> FrozenSet[Point]:
        return frozenset(self.points)

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return all(is_free(p) for p in self.points)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        if point not in self.points:
            return self
        return _apply_rule(self, point, rule)

    def reduce_to_single_fraction(self) -> Fraction:
        return Fraction(self, Number(1))

    def uniformize(self) -> Expression:
        a, b, c, d = self.points
        negate = False
        if b.label < a.label:
            a, b = b, a
            negate = not negate
        if d.label < c.label:
            c, d = d, c
            negate = not negate
        ratio = Ratio(a, b, c, d)
        return AdditiveInverse(ratio) if negate else ratio

    def _monomials(self) -> List[Monomial]:
        raise MalformedExpressionError(
            "Ratios must be eliminated before expanding into monomials", self
        )

    def __repr__(self) -> str:
        return f"R({self.a},{self.b},{self.c},{self.d})"


@dataclass(frozen=True)
class AreaOfTriangle(Expression):
    """Signed area of the triangle ABC."""
    a: Point
    b: Point
    c: Point

    @property
    def points(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def collect_points(self) -> FrozenSet[Point]:
        return frozenset(self.points)

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return all(is_free(p) for p in self.points)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        if point not in self.points:
            return self
        return _apply_rule(self, point, rule)

    def reduce_to_single_fraction(self) -> Fraction:
        return Fraction(self, Number(1))

    def uniformize(self) -> Expression:
        points = self.points
        # Rotation keeps the sign, so lead with the smallest label
        first = min(range(3), key=lambda i: points[i].label)
        a, b, c = points[first:] + points[:first]
        if c.label < b.label:
            return AdditiveInverse(AreaOfTriangle(a, c, b))
        return AreaOfTriangle(a, b, c)

    def _monomials(self) -> List[Monomial]:
        return [(1, (self,))]

    def __repr__(self) -> str:
        return f"S({self.a},{self.b},{self.c})"


@dataclass(frozen=True)
class PythagorasDifference(Expression):
    """Pythagoras difference P_ABC = AB^2 + CB^2 - AC^2."""
    a: Point
    b: Point
    c: Point

    @property
    def points(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def collect_points(self) -> FrozenSet[Point]:
        return frozenset(self.points)

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return all(is_free(p) for p in self.points)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        if point not in self.points:
            return self
        return _apply_rule(self, point, rule)

    def reduce_to_single_fraction(self) -> Fraction:
        return Fraction(self, Number(1))

    def uniformize(self) -> Expression:
        if self.c.label < self.a.label:
            return PythagorasDifference(self.c, self.b, self.a)
        return self

    def _monomials(self) -> List[Monomial]:
        return [(1, (self,))]

    def __repr__(self) -> str:
        return f"P({self.a},{self.b},{self.c})"


# Binary operations

@dataclass(frozen=True)
class Sum(Expression):
    """Addition: term1 + term2."""
    term1: Expression
    term2: Expression

    def collect_points(self) -> FrozenSet[Point]:
        return self.term1.collect_points() | self.term2.collect_points()

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return self.term1.is_only_free_points(is_free) and self.term2.is_only_free_points(is_free)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        return Sum(self.term1.eliminate(point, rule), self.term2.eliminate(point, rule))

    def reduce_to_single_fraction(self) -> Fraction:
        f1 = self.term1.reduce_to_single_fraction()
        f2 = self.term2.reduce_to_single_fraction()
        return Fraction(
            Sum(Product(f1.numerator, f2.denominator), Product(f2.numerator, f1.denominator)),
            Product(f1.denominator, f2.denominator),
        )

    def uniformize(self) -> Expression:
        return Sum(self.term1.uniformize(), self.term2.uniformize())

    def _monomials(self) -> List[Monomial]:
        return self.term1._monomials() + self.term2._monomials()

    def __repr__(self) -> str:
        return f"({self.term1} + {self.term2})"


@dataclass(frozen=True)
class Difference(Expression):
    """Subtraction: term1 - term2."""
    term1: Expression
    term2: Expression

    def collect_points(self) -> FrozenSet[Point]:
        return self.term1.collect_points() | self.term2.collect_points()

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return self.term1.is_only_free_points(is_free) and self.term2.is_only_free_points(is_free)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        return Difference(self.term1.eliminate(point, rule), self.term2.eliminate(point, rule))

    def reduce_to_single_fraction(self) -> Fraction:
        f1 = self.term1.reduce_to_single_fraction()
        f2 = self.term2.reduce_to_single_fraction()
        return Fraction(
            Difference(Product(f1.numerator, f2.denominator), Product(f2.numerator, f1.denominator)),
            Product(f1.denominator, f2.denominator),
        )

    def uniformize(self) -> Expression:
        return Difference(self.term1.uniformize(), self.term2.uniformize())

    def _monomials(self) -> List[Monomial]:
        return self.term1._monomials() + _negate(self.term2._monomials())

    def __repr__(self) -> str:
        return f"({self.term1} - {self.term2})"


@dataclass(frozen=True)
class Product(Expression):
    """Multiplication: factor1 * factor2."""
    factor1: Expression
    factor2: Expression

    def collect_points(self) -> FrozenSet[Point]:
        return self.factor1.collect_points() | self.factor2.collect_points()

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return self.factor1.is_only_free_points(is_free) and self.factor2.is_only_free_points(is_free)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        return Product(self.factor1.eliminate(point, rule), self.factor2.eliminate(point, rule))

    def reduce_to_single_fraction(self) -> Fraction:
        f1 = self.factor1.reduce_to_single_fraction()
        f2 = self.factor2.reduce_to_single_fraction()
        return Fraction(
            Product(f1.numerator, f2.numerator),
            Product(f1.denominator, f2.denominator),
        )

    def uniformize(self) -> Expression:
        return Product(self.factor1.uniformize(), self.factor2.uniformize())

    def _monomials(self) -> List[Monomial]:
        # Distribute: every left monomial times every right monomial
        return [
            (c1 * c2, atoms1 + atoms2)
            for c1, atoms1 in self.factor1._monomials()
            for c2, atoms2 in self.factor2._monomials()
        ]

    def __repr__(self) -> str:
        return f"({self.factor1} * {self.factor2})"


@dataclass(frozen=True)
class Fraction(Expression):
    """Division: numerator / denominator."""
    numerator: Expression
    denominator: Expression

    def collect_points(self) -> FrozenSet[Point]:
        return self.numerator.collect_points() | self.denominator.collect_points()

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return (self.numerator.is_only_free_points(is_free)
                and self.denominator.is_only_free_points(is_free))

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        return Fraction(self.numerator.eliminate(point, rule), self.denominator.eliminate(point, rule))

    def reduce_to_single_fraction(self) -> Fraction:
        f1 = self.numerator.reduce_to_single_fraction()
        f2 = self.denominator.reduce_to_single_fraction()
        return Fraction(
            Product(f1.numerator, f2.denominator),
            Product(f1.denominator, f2.numerator),
        )

    def uniformize(self) -> Expression:
        return Fraction(self.numerator.uniformize(), self.denominator.uniformize())

    def _monomials(self) -> List[Monomial]:
        raise MalformedExpressionError(
            "Fractions must be cleared before expanding into monomials", self
        )

    def __repr__(self) -> str:
        return f"({self.numerator} / {self.denominator})"


# Unary operations

@dataclass(frozen=True)
class AdditiveInverse(Expression):
    """Negation: -expr."""
    expr: Expression

    def collect_points(self) -> FrozenSet[Point]:
        return self.expr.collect_points()

    def is_only_free_points(self, is_free: FreePredicate = is_free_point) -> bool:
        return self.expr.is_only_free_points(is_free)

    def eliminate(self, point: Point, rule: EliminationRule) -> Expression:
        return AdditiveInverse(self.expr.eliminate(point, rule))

    def reduce_to_single_fraction(self) -> Fraction:
        inner = self.expr.reduce_to_single_fraction()
        return Fraction(AdditiveInverse(inner.numerator), inner.denominator)

    def uniformize(self) -> Expression:
        return AdditiveInverse(self.expr.uniformize())

    def _monomials(self) -> List[Monomial]:
        return _negate(self.expr._monomials())

    def __repr__(self) -> str:
        return f"(-{self.expr})"


# Builders for the right-associative shapes

def right_associative_product(factors: Sequence[Expression]) -> Expression:
    """Build ``f1 * (f2 * (... * fn))``; an empty product is ``1``."""
    if not factors:
        return Number(1)
    result = factors[-1]
    for factor in reversed(factors[:-1]):
        result = Product(factor, result)
    return result


def right_associative_sum(terms: Sequence[Expression]) -> Expression:
    """Build ``t1 + (t2 + (... + tn))``; an empty sum is ``0``."""
    if not terms:
        return Number(0)
    result = terms[-1]
    for term in reversed(terms[:-1]):
        result = Sum(term, result)
    return result


def monomial(coefficient: int, atoms: Sequence[Expression]) -> Expression:
    """Build ``c * (x1 * (... * xn))``, or ``Number(c)`` without atoms."""
    if not atoms:
        return Number(coefficient)
    return Product(Number(coefficient), right_associative_product(atoms))


# Public constructors

def num(value: int) -> Number:
    """Create an integer constant."""
    return Number(value)


def ratio(a: Point, b: Point, c: Point, d: Point) -> Ratio:
    """Signed ratio AB/CD of collinear segments."""
    return Ratio(a, b, c, d)


def area(a: Point, b: Point, c: Point) -> AreaOfTriangle:
    """Signed area S_ABC."""
    return AreaOfTriangle(a, b, c)


def pythagoras(a: Point, b: Point, c: Point) -> PythagorasDifference:
    """Pythagoras difference P_ABC."""
    return PythagorasDifference(a, b, c)
