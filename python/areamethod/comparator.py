# AreaMethod SDK - Canonical Ordering
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""
Total order over expressions.

The order is only used to sort the operands of commutative structures
(factor lists of monomials) so that they can be compared element-wise.
It depends on nothing but the expressions themselves: the variant kind
first, then point labels, numeric values or the keys of the operands.
"""

from __future__ import annotations
from functools import cmp_to_key
from typing import Any, Iterable, List, Tuple

from .expr import (
    Expression, Number, Ratio, AreaOfTriangle, PythagorasDifference,
    AdditiveInverse, Sum, Difference, Product, Fraction,
)


# Precedence among variants
KIND_RANK = {
    Number: 0,
    Ratio: 1,
    AreaOfTriangle: 2,
    PythagorasDifference: 3,
    AdditiveInverse: 4,
    Sum: 5,
    Difference: 6,
    Product: 7,
    Fraction: 8,
}


def expression_key(expr: Expression) -> Tuple[Any, ...]:
    """Sort key for ``expr``: ``(rank, payload)``."""
    rank = KIND_RANK.get(type(expr))
    if rank is None:
        raise TypeError(f"Cannot order {type(expr).__name__}")

    if isinstance(expr, Number):
        return (rank, expr.value)
    if isinstance(expr, (Ratio, AreaOfTriangle, PythagorasDifference)):
        return (rank, tuple(p.label for p in expr.points))
    if isinstance(expr, AdditiveInverse):
        return (rank, expression_key(expr.expr))
    if isinstance(expr, (Sum, Difference)):
        return (rank, expression_key(expr.term1), expression_key(expr.term2))
    if isinstance(expr, Product):
        return (rank, expression_key(expr.factor1), expression_key(expr.factor2))
    # Fraction
    return (rank, expression_key(expr.numerator), expression_key(expr.denominator))


def compare_expressions(a: Expression, b: Expression) -> int:
    """Three-way comparison: -1, 0 or 1."""
    key_a = expression_key(a)
    key_b = expression_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_expressions(exprs: Iterable[Expression]) -> List[Expression]:
    """Return ``exprs`` sorted in canonical order."""
    return sorted(exprs, key=expression_key)


class ExpressionComparator:
    """
    Comparator object for APIs that expect one.

    Example:
        >>> comparator = ExpressionComparator()
        >>> sorted(factors, key=comparator.key)
    """

    def compare(self, a: Expression, b: Expression) -> int:
        return compare_expressions(a, b)

    def __call__(self, a: Expression, b: Expression) -> int:
        return compare_expressions(a, b)

    def key(self, expr: Expression) -> Tuple[Any, ...]:
        return expression_key(expr)

    def sort(self, exprs: Iterable[Expression]) -> List[Expression]:
        return sorted(exprs, key=cmp_to_key(self.compare))
