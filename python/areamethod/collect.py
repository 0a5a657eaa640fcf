# AreaMethod SDK - Like-Term Collection
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""
Polynomial-style collection of like terms.

The functions in this module work on a right-associative sum of monomials,
as produced by ``Expression.to_right_associative_form``:

    c1*x1*...*xn + (c2*y1*...*ym + (... + ck*z1*...*zp))

Two monomials are alike when they have the same atoms (triangle areas and
Pythagoras differences) in any order. Like monomials are merged by adding
their coefficients, which gives a polynomial normal form over the atoms.

Example:
    >>> s1, s2 = area(a, b, c), area(d, e, f)
    >>> total = Sum(2 * (s1 * s2), -7 * (s2 * s1))
    >>> group_like_terms(total)
    (-5 * (S(D,E,F) * S(A,B,C)))
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import logging

from .comparator import expression_key, sort_expressions
from .config import Config
from .exceptions import MalformedExpressionError
from .expr import (
    Expression, Number, AreaOfTriangle, PythagorasDifference,
    Sum, Product, Fraction, monomial, right_associative_sum,
)
from .simplify import simplify


logger = logging.getLogger(__name__)


def _is_atom(expr: Expression) -> bool:
    return isinstance(expr, (AreaOfTriangle, PythagorasDifference))


def _split_monomial(term: Expression) -> Tuple[int, Optional[Expression]]:
    """Split a monomial into its coefficient and the product of its atoms."""
    if isinstance(term, Number):
        return term.value, None
    if isinstance(term, Product) and isinstance(term.factor1, Number):
        return term.factor1.value, term.factor2
    return 1, term


def _sum_terms(expr: Expression) -> List[Expression]:
    """Terms along the right spine of a sum."""
    terms = []
    while isinstance(expr, Sum):
        terms.append(expr.term1)
        expr = expr.term2
    terms.append(expr)
    return terms


def factor_list(term: Expression) -> List[Expression]:
    """
    List the atoms of a monomial, leaving out its coefficient.

    Args:
        term: A number, an atom, or a right-associative product of atoms
              with at most one leading number.

    Raises:
        MalformedExpressionError: If ``term`` does not have that shape.
    """
    _, rest = _split_monomial(term)
    atoms = []
    while rest is not None:
        if _is_atom(rest):
            atoms.append(rest)
            rest = None
        elif isinstance(rest, Product) and _is_atom(rest.factor1):
            atoms.append(rest.factor1)
            rest = rest.factor2
        else:
            raise MalformedExpressionError(
                "Expected a right-associative product of areas and Pythagoras "
                "differences with a single leading constant", term
            )
    return atoms


def _sorted_atoms(term: Expression) -> List[Expression]:
    """
    Atoms of a monomial in canonical order.

    Raises:
        MalformedExpressionError: If two distinct atoms order as equal,
            which happens when distinct points share a label.
    """
    atoms = sort_expressions(factor_list(term))
    for x, y in zip(atoms, atoms[1:]):
        if x != y and expression_key(x) == expression_key(y):
            raise MalformedExpressionError(
                f"Distinct points share a label in {x} and {y}", term
            )
    return atoms


def is_same_monomial(a: Expression, b: Expression) -> bool:
    """True iff ``a`` and ``b`` have the same atoms, whatever their order and coefficients."""
    factors_a = _sorted_atoms(a)
    factors_b = _sorted_atoms(b)
    if len(factors_a) != len(factors_b):
        return False
    return all(x == y for x, y in zip(factors_a, factors_b))


def _merge(existing: Expression, term: Expression) -> Expression:
    c1, rest = _split_monomial(existing)
    c2, _ = _split_monomial(term)
    if rest is None:
        return Number(c1 + c2)
    return Product(Number(c1 + c2), rest)


def add_monomial_to_sum(total: Expression, term: Expression) -> Expression:
    """
    Add a monomial to a right-associative sum of monomials.

    The first term alike ``term`` gets the two coefficients added (a zero
    result is kept as is). If no term is alike, ``term`` is appended at the
    end of the sum.

    Example:
        2*x*y + 4*z  plus  -7*y*x  gives  -5*x*y + 4*z

    Raises:
        MalformedExpressionError: If a visited term is not a monomial.
    """
    terms = _sum_terms(total)
    for index, existing in enumerate(terms):
        if is_same_monomial(existing, term):
            terms[index] = _merge(existing, term)
            logger.debug("Merged %s into %s", term, terms[index])
            return right_associative_sum(terms)
    terms.append(term)
    return right_associative_sum(terms)


def group_like_terms(expr: Expression) -> Expression:
    """
    Merge the alike monomials of a right-associative sum.

    Terms are added from right to left, so the result holds at most one
    term per distinct set of atoms.
    """
    terms = _sum_terms(expr)
    result = terms[-1]
    for term in reversed(terms[:-1]):
        result = add_monomial_to_sum(result, term)
    return result


def sort_monomials(expr: Expression) -> Expression:
    """
    Put a right-associative sum of monomials in canonical order.

    The atoms of every monomial are sorted, then the monomials are sorted
    by their atom lists. Two sums holding the same monomials come out
    structurally equal. Like terms are expected to be merged already.

    Raises:
        MalformedExpressionError: If a term is not a monomial, or if distinct
            points share a label.
    """
    keyed = []
    for term in _sum_terms(expr):
        coefficient, _ = _split_monomial(term)
        atoms = _sorted_atoms(term)
        key = tuple(expression_key(atom) for atom in atoms)
        keyed.append((key, atoms, monomial(coefficient, atoms)))
    keyed.sort(key=lambda entry: entry[0])

    for (key1, atoms1, _), (key2, atoms2, _) in zip(keyed, keyed[1:]):
        if key1 == key2 and atoms1 != atoms2:
            raise MalformedExpressionError("Distinct points share a label", expr)
    return right_associative_sum([term for _, _, term in keyed])


def canonicalize(expr: Expression, config: Optional[Config] = None) -> Expression:
    """
    Bring an expression over areas and Pythagoras differences to normal form.

    The primitives are uniformized, the expression is turned into a single
    fraction, numerator and denominator are expanded, their like terms
    merged and their monomials sorted, and the resulting fraction is
    simplified. Expressions that are equal as polynomials over the same
    atoms come out structurally equal, and one that is identically zero
    comes out as ``Number(0)``.

    Raises:
        MalformedExpressionError: If the expression still contains ratios,
            or if distinct points share a label.
        DivisionByZeroError: If the denominator vanishes.
    """
    fraction = expr.uniformize().reduce_to_single_fraction()
    numerator = sort_monomials(group_like_terms(fraction.numerator.to_right_associative_form()))
    denominator = sort_monomials(group_like_terms(fraction.denominator.to_right_associative_form()))
    logger.debug("Collected %s over %s", numerator, denominator)
    return simplify(Fraction(numerator, denominator), config)
