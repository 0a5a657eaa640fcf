# AreaMethod SDK - Symbolic Simplification
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""
Rewrite-based simplification of area-method expressions.

Simplification is a fixed rule table applied one step at a time:
``simplify_in_one_step`` advances every child by one step and then applies
the first rule matching the node. ``simplify`` repeats this until two
consecutive iterates are structurally equal.

The rules only ever fold constants, remove identities and annihilators,
move signs outwards and cancel a fraction against itself, so the loop
terminates on every finite expression.

Example:
    >>> a, b, c = FreePoint('A'), FreePoint('B'), FreePoint('C')
    >>> simplify(Product(Number(-2), area(a, b, c)))
    (-(2 * S(A,B,C)))
    >>> simplify(area(a, b, a))
    0
"""

from __future__ import annotations
from typing import Optional
import logging

from .config import Config
from .exceptions import DivisionByZeroError, SimplificationLimitError
from .expr import (
    Expression, Number, Ratio, AreaOfTriangle, PythagorasDifference,
    Sum, Difference, Product, Fraction, AdditiveInverse,
)


logger = logging.getLogger(__name__)


def simplify(expr: Expression, config: Optional[Config] = None) -> Expression:
    """
    Simplify an expression to its normal form.

    Args:
        expr: Expression to simplify.
        config: Optional iteration cap and tracing.

    Returns:
        The first iterate that one more rewrite step leaves unchanged.

    Raises:
        DivisionByZeroError: If a denominator simplifies to zero.
        SimplificationLimitError: If the expression is still changing after
            ``config.max_iterations`` rewrites. Only steps that change the
            expression count; the step confirming the fixpoint does not.
    """
    config = config or Config()

    current = expr
    steps = 0
    while True:
        following = simplify_in_one_step(current)
        if following == current:
            break
        steps += 1
        if config.max_iterations is not None and steps > config.max_iterations:
            raise SimplificationLimitError(config.max_iterations, following)
        if config.trace:
            logger.debug("step %d: %s", steps, following)
        current = following

    if config.trace:
        logger.debug("fixpoint after %d steps: %s", steps, current)
    return current


def simplify_in_one_step(expr: Expression) -> Expression:
    """
    Apply a single rewrite pass to ``expr``.

    Children are advanced by one step only, not to their normal form.

    Raises:
        DivisionByZeroError: If a fraction's denominator is zero.
    """
    if isinstance(expr, Number):
        return expr

    if isinstance(expr, Ratio):
        # AA/CD -> 0
        if expr.a is expr.b:
            return Number(0)
        return expr

    if isinstance(expr, AreaOfTriangle):
        # S_AAB -> 0, S_ABA -> 0, S_BAA -> 0
        if expr.a is expr.b or expr.a is expr.c or expr.b is expr.c:
            return Number(0)
        return expr

    if isinstance(expr, PythagorasDifference):
        # P_AAB -> 0, P_BAA -> 0; P_ABA is not zero
        if expr.a is expr.b or expr.b is expr.c:
            return Number(0)
        return expr

    if isinstance(expr, Product):
        return _simplify_product(
            simplify_in_one_step(expr.factor1),
            simplify_in_one_step(expr.factor2),
        )

    if isinstance(expr, Sum):
        t1 = simplify_in_one_step(expr.term1)
        t2 = simplify_in_one_step(expr.term2)
        # 0 + a -> a
        if t1.is_zero():
            return t2
        # a + 0 -> a
        if t2.is_zero():
            return t1
        # a + (-b) -> a - b
        if isinstance(t2, AdditiveInverse):
            return Difference(t1, t2.expr)
        # (-a) + b -> b - a
        if isinstance(t1, AdditiveInverse):
            return Difference(t2, t1.expr)
        # n + n'
        if isinstance(t1, Number) and isinstance(t2, Number):
            return Number(t1.value + t2.value)
        return Sum(t1, t2)

    if isinstance(expr, Difference):
        t1 = simplify_in_one_step(expr.term1)
        t2 = simplify_in_one_step(expr.term2)
        # a - 0 -> a
        if t2.is_zero():
            return t1
        # 0 - a -> -a
        if t1.is_zero():
            return AdditiveInverse(t2)
        # a - a -> 0
        if t1 == t2:
            return Number(0)
        # n - n'
        if isinstance(t1, Number) and isinstance(t2, Number):
            return Number(t1.value - t2.value)
        return Difference(t1, t2)

    if isinstance(expr, AdditiveInverse):
        inner = simplify_in_one_step(expr.expr)
        # --a -> a
        if isinstance(inner, AdditiveInverse):
            return inner.expr
        # -0 -> 0
        if inner.is_zero():
            return Number(0)
        return AdditiveInverse(inner)

    if isinstance(expr, Fraction):
        return _simplify_fraction(expr)

    raise TypeError(f"Cannot simplify {type(expr).__name__}")


def _simplify_product(f1: Expression, f2: Expression) -> Expression:
    if isinstance(f1, Number):
        # n * n'
        if isinstance(f2, Number):
            return Number(f1.value * f2.value)
        # 0 * a -> 0
        if f1.value == 0:
            return Number(0)
        # 1 * a -> a
        if f1.value == 1:
            return f2
        # (-n) * a -> -(n * a)
        if f1.value < 0:
            return AdditiveInverse(Product(Number(-f1.value), f2))

    if isinstance(f2, Number):
        # a * 0 -> 0
        if f2.value == 0:
            return Number(0)
        # a * 1 -> a
        if f2.value == 1:
            return f1
        # a * (-n) -> -(n * a)
        if f2.value < 0:
            return AdditiveInverse(Product(Number(-f2.value), f1))

    if isinstance(f1, AdditiveInverse):
        # (-a) * (-b) -> a * b
        if isinstance(f2, AdditiveInverse):
            return Product(f1.expr, f2.expr)
        # (-a) * b -> -(a * b)
        return AdditiveInverse(Product(f1.expr, f2))

    # a * (-b) -> -(a * b)
    if isinstance(f2, AdditiveInverse):
        return AdditiveInverse(Product(f1, f2.expr))

    # (1/a) * a -> 1
    if isinstance(f1, Fraction) and f1.numerator == Number(1) and f1.denominator == f2:
        return Number(1)

    # a * (1/a) -> 1
    if isinstance(f2, Fraction) and f2.numerator == Number(1) and f2.denominator == f1:
        return Number(1)

    return Product(f1, f2)


def _simplify_fraction(expr: Fraction) -> Expression:
    numerator = simplify_in_one_step(expr.numerator)
    denominator = simplify_in_one_step(expr.denominator)

    # 0 / a -> 0
    if numerator.is_zero():
        return Number(0)
    if denominator.is_zero():
        raise DivisionByZeroError(expr)
    # a / a -> 1
    if numerator == denominator:
        return Number(1)
    # a / 1 -> a
    if denominator == Number(1):
        return numerator

    if isinstance(numerator, AdditiveInverse):
        # (-a) / (-b) -> a / b
        if isinstance(denominator, AdditiveInverse):
            return Fraction(numerator.expr, denominator.expr)
        # (-a) / b -> -(a / b)
        return AdditiveInverse(Fraction(numerator.expr, denominator))

    # a / (-b) -> -(a / b)
    if isinstance(denominator, AdditiveInverse):
        return AdditiveInverse(Fraction(numerator, denominator.expr))

    # (a * b) / a -> b, (b * a) / a -> b
    if isinstance(numerator, Product):
        f1 = simplify_in_one_step(numerator.factor1)
        f2 = simplify_in_one_step(numerator.factor2)
        if f1 == denominator:
            return f2
        if f2 == denominator:
            return f1

    return Fraction(numerator, denominator)
