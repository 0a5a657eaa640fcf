# AreaMethod SDK
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""
AreaMethod Python SDK - Expression engine for area-method proofs.

Geometric statements are written as expressions over signed ratios,
triangle areas and Pythagoras differences. Proving a statement means
eliminating constructed points until the expression simplifies to a
numeric identity; this package provides the expressions and the
simplification machinery for that last part.

Example:
    >>> import areamethod as am
    >>> a, b, c = am.FreePoint('A'), am.FreePoint('B'), am.FreePoint('C')
    >>> am.simplify(am.area(a, b, a) + 3 * am.area(a, b, c))
    (3 * S(A,B,C))
    >>> am.canonicalize(am.area(a, b, c) - am.area(b, c, a))
    0

Key Features:
    - Immutable, structurally compared expression trees
    - Rule-based fixpoint simplifier
    - Like-term collection independent of factor order
    - Typed errors for malformed input and division by zero
"""

__version__ = "0.1.0"

# Points
from .points import (
    Point,
    FreePoint,
    ConstructedPoint,
    LabelAllocator,
    is_free_point,
)

# Core expression types and constructors
from .expr import (
    Expression,
    Number,
    Ratio,
    AreaOfTriangle,
    PythagorasDifference,
    Sum,
    Difference,
    Product,
    Fraction,
    AdditiveInverse,
    EliminationRule,
    num,
    ratio,
    area,
    pythagoras,
    monomial,
    right_associative_product,
    right_associative_sum,
)

# Canonical ordering
from .comparator import (
    ExpressionComparator,
    expression_key,
    compare_expressions,
    sort_expressions,
)

# Configuration
from .config import Config

# Simplification
from .simplify import simplify, simplify_in_one_step

# Like-term collection
from .collect import (
    factor_list,
    is_same_monomial,
    add_monomial_to_sum,
    group_like_terms,
    sort_monomials,
    canonicalize,
)

# Exceptions
from .exceptions import (
    AreaMethodError,
    ExpressionError,
    MalformedExpressionError,
    DivisionByZeroError,
    SimplificationLimitError,
    EliminationError,
)

__all__ = [
    # Version
    "__version__",
    # Points
    "Point",
    "FreePoint",
    "ConstructedPoint",
    "LabelAllocator",
    "is_free_point",
    # Expression types
    "Expression",
    "Number",
    "Ratio",
    "AreaOfTriangle",
    "PythagorasDifference",
    "Sum",
    "Difference",
    "Product",
    "Fraction",
    "AdditiveInverse",
    "EliminationRule",
    # Expression constructors
    "num",
    "ratio",
    "area",
    "pythagoras",
    "monomial",
    "right_associative_product",
    "right_associative_sum",
    # Ordering
    "ExpressionComparator",
    "expression_key",
    "compare_expressions",
    "sort_expressions",
    # Configuration
    "Config",
    # Simplification
    "simplify",
    "simplify_in_one_step",
    # Collection
    "factor_list",
    "is_same_monomial",
    "add_monomial_to_sum",
    "group_like_terms",
    "sort_monomials",
    "canonicalize",
    # Exceptions
    "AreaMethodError",
    "ExpressionError",
    "MalformedExpressionError",
    "DivisionByZeroError",
    "SimplificationLimitError",
    "EliminationError",
]
