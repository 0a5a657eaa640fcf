# AreaMethod SDK - Exceptions
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""Exception hierarchy for the area-method expression engine."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .expr import Expression
    from .points import Point


class AreaMethodError(Exception):
    """Base class for all area-method exceptions."""
    pass


class ExpressionError(AreaMethodError):
    """Raised when an operation cannot be carried out on an expression."""

    def __init__(
        self,
        message: str,
        expression: Optional[Union['Expression', str]] = None,
    ):
        rendered = None
        if expression is not None:
            rendered = expression if isinstance(expression, str) else expression.render()
        full_message = message
        if rendered is not None:
            full_message += f": {rendered}"
        super().__init__(full_message)
        self.expression = rendered


class MalformedExpressionError(ExpressionError):
    """
    Raised when an expression does not have the shape an operation assumes.

    The like-term collector and the right-associative rewriting rely on
    representation conventions (sum of monomials, single leading constant,
    no fractions) which are not enforced by the types.
    """
    pass


class DivisionByZeroError(ExpressionError):
    """Raised when a fraction's denominator simplifies to zero."""

    def __init__(self, expression: Optional[Union['Expression', str]] = None):
        super().__init__("Division by zero in expression", expression)


class SimplificationLimitError(ExpressionError):
    """Raised when the simplifier exceeds its configured iteration cap."""

    def __init__(
        self,
        iterations: int,
        expression: Optional[Union['Expression', str]] = None,
    ):
        super().__init__(
            f"No fixpoint reached after {iterations} simplification steps",
            expression,
        )
        self.iterations = iterations


class EliminationError(ExpressionError):
    """Raised when an elimination rule leaves the eliminated point in place."""

    def __init__(
        self,
        point: 'Point',
        expression: Optional[Union['Expression', str]] = None,
    ):
        super().__init__(f"Point {point.label} still present after elimination", expression)
        self.point = point
