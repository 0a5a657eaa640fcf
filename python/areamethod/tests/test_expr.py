# Tests for expr.py - Area-method expressions

import pytest

from areamethod.expr import (
    Number, Ratio, AreaOfTriangle, PythagorasDifference,
    Sum, Difference, Product, Fraction, AdditiveInverse,
    num, area, pythagoras, ratio,
    monomial, right_associative_product, right_associative_sum,
)
from areamethod.points import FreePoint, ConstructedPoint
from areamethod.exceptions import EliminationError, MalformedExpressionError


@pytest.fixture
def pts():
    return {label: FreePoint(label) for label in "ABCDEF"}


class TestConstruction:
    """Tests for building expressions."""

    def test_number_value(self):
        assert Number(42).value == 42

    def test_number_rejects_non_int(self):
        with pytest.raises(TypeError):
            Number(1.5)
        with pytest.raises(TypeError):
            Number(True)

    def test_operator_overloading(self, pts):
        s = area(pts['A'], pts['B'], pts['C'])
        assert s + 1 == Sum(s, Number(1))
        assert 1 + s == Sum(Number(1), s)
        assert s - s == Difference(s, s)
        assert 2 * s == Product(Number(2), s)
        assert s / 3 == Fraction(s, Number(3))
        assert 1 / s == Fraction(Number(1), s)
        assert -s == AdditiveInverse(s)

    def test_cannot_convert_float(self, pts):
        s = area(pts['A'], pts['B'], pts['C'])
        with pytest.raises(TypeError):
            s + 0.5

    def test_expressions_are_immutable(self, pts):
        s = area(pts['A'], pts['B'], pts['C'])
        with pytest.raises(AttributeError):
            s.a = pts['D']


class TestRender:
    """Tests for the textual rendering."""

    def test_primitives(self, pts):
        a, b, c, d = pts['A'], pts['B'], pts['C'], pts['D']
        assert ratio(a, b, c, d).render() == "R(A,B,C,D)"
        assert area(a, b, c).render() == "S(A,B,C)"
        assert pythagoras(a, b, c).render() == "P(A,B,C)"

    def test_combinators_are_parenthesized(self, pts):
        s = area(pts['A'], pts['B'], pts['C'])
        p = pythagoras(pts['A'], pts['B'], pts['C'])
        expr = (2 * s - p) / (s + 1)
        assert expr.render() == "(((2 * S(A,B,C)) - P(A,B,C)) / (S(A,B,C) + 1))"
        assert str(expr) == expr.render()

    def test_negative_number_vs_inverse(self):
        assert Number(-3).render() == "-3"
        assert AdditiveInverse(Number(3)).render() == "(-3)"


class TestEquality:
    """Tests for structural equality."""

    def test_same_shape_is_equal(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        assert area(a, b, c) == area(a, b, c)
        assert area(a, b, c).equals(area(a, b, c))
        assert Sum(area(a, b, c), num(1)).equals(Sum(area(a, b, c), num(1)))

    def test_equality_is_not_semantic(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        y = pythagoras(pts['D'], pts['E'], pts['F'])
        assert not Sum(x, y).equals(Sum(y, x))
        assert not Product(Number(2), Number(3)).equals(Number(6))

    def test_points_compare_by_identity(self):
        first = FreePoint('A')
        second = FreePoint('A')
        b, c = FreePoint('B'), FreePoint('C')
        assert area(first, b, c) != area(second, b, c)

    def test_variant_tag_matters(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        assert area(a, b, c) != pythagoras(a, b, c)
        assert Sum(num(1), num(2)) != Difference(num(1), num(2))

    def test_equals_other_types(self):
        assert not Number(1).equals(1)

    def test_hashable(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        assert len({area(a, b, c), area(a, b, c), pythagoras(a, b, c)}) == 2

    def test_is_zero(self, pts):
        s = area(pts['A'], pts['B'], pts['C'])
        assert Number(0).is_zero()
        assert not Number(1).is_zero()
        assert not Difference(s, s).is_zero()


class TestPoints:
    """Tests for point collection and classification."""

    def test_collect_points(self, pts):
        a, b, c, d = pts['A'], pts['B'], pts['C'], pts['D']
        expr = ratio(a, b, c, d) * area(a, b, c) - pythagoras(d, d, a)
        assert expr.collect_points() == frozenset({a, b, c, d})

    def test_number_has_no_points(self):
        assert Number(7).collect_points() == frozenset()
        assert Number(7).is_only_free_points()

    def test_only_free_points(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        m = ConstructedPoint('M', (a, b))
        assert (area(a, b, c) + pythagoras(a, b, c)).is_only_free_points()
        assert not (area(a, b, c) + -pythagoras(a, m, c)).is_only_free_points()

    def test_custom_classification(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        expr = area(a, b, c) / 2
        assert not expr.is_only_free_points(lambda p: p is not c)


def _midpoint_rule(m, a, b):
    """S(M,X,Y) = (S(A,X,Y) + S(B,X,Y)) / 2 for the midpoint M of AB."""

    def substitute(primitive, point, replacement):
        return type(primitive)(*(replacement if p is point else p for p in primitive.points))

    def rule(primitive, point):
        assert point is m
        return Fraction(
            Sum(substitute(primitive, point, a), substitute(primitive, point, b)),
            Number(2),
        )

    return rule


class TestEliminate:
    """Tests for the elimination contract."""

    def test_eliminate_rebuilds_around_primitives(self, pts):
        a, b, c, d = pts['A'], pts['B'], pts['C'], pts['D']
        m = ConstructedPoint('M', (a, b))
        expr = area(m, c, d) - pythagoras(a, c, d)
        result = expr.eliminate(m, _midpoint_rule(m, a, b))

        expected = Difference(
            Fraction(Sum(area(a, c, d), area(b, c, d)), Number(2)),
            pythagoras(a, c, d),
        )
        assert result == expected
        assert m not in result.collect_points()
        assert result.is_only_free_points()

    def test_eliminate_leaves_other_primitives(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        m = ConstructedPoint('M', (a, b))
        s = area(a, b, c)

        def rule(primitive, point):
            raise AssertionError("rule must not be called")

        assert (s * 3).eliminate(m, rule) == Product(s, Number(3))

    def test_eliminate_does_not_mutate(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        m = ConstructedPoint('M', (a, b))
        expr = area(m, b, c) + 1
        expr.eliminate(m, _midpoint_rule(m, a, b))
        assert expr == Sum(area(m, b, c), Number(1))

    def test_rule_must_remove_point(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        m = ConstructedPoint('M', (a, b))
        with pytest.raises(EliminationError) as exc_info:
            area(m, b, c).eliminate(m, lambda primitive, point: primitive)
        assert exc_info.value.point is m
        assert "S(M,B,C)" in str(exc_info.value)


class TestSingleFraction:
    """Tests for reduce_to_single_fraction."""

    @staticmethod
    def _has_fraction(expr):
        if isinstance(expr, Fraction):
            return True
        children = [getattr(expr, name) for name in
                    ('term1', 'term2', 'factor1', 'factor2', 'expr')
                    if hasattr(expr, name)]
        return any(TestSingleFraction._has_fraction(child) for child in children)

    def test_leaf(self, pts):
        s = area(pts['A'], pts['B'], pts['C'])
        assert s.reduce_to_single_fraction() == Fraction(s, Number(1))

    def test_sum_of_fractions(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        y = area(pts['D'], pts['E'], pts['F'])
        result = (x / y + y / x).reduce_to_single_fraction()
        assert isinstance(result, Fraction)
        assert result.numerator == Sum(
            Product(Product(x, Number(1)), Product(Number(1), x)),
            Product(Product(y, Number(1)), Product(Number(1), y)),
        )
        assert result.denominator == Product(Product(Number(1), y), Product(Number(1), x))

    def test_nested_fractions_are_cleared(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        y = pythagoras(pts['D'], pts['E'], pts['F'])
        expr = -((x / (y / 2)) * (1 - x / y))
        result = expr.reduce_to_single_fraction()
        assert isinstance(result, Fraction)
        assert not self._has_fraction(result.numerator)
        assert not self._has_fraction(result.denominator)


class TestRightAssociativeForm:
    """Tests for to_right_associative_form."""

    def test_expands_products_over_sums(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        y = area(pts['D'], pts['E'], pts['F'])
        z = pythagoras(pts['A'], pts['B'], pts['C'])
        result = (2 * (x + y) * z - 3).to_right_associative_form()
        assert result == Sum(
            Product(Number(2), Product(x, z)),
            Sum(Product(Number(2), Product(y, z)), Number(-3)),
        )

    def test_negation_moves_into_coefficients(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        assert (-x).to_right_associative_form() == Product(Number(-1), x)

    def test_zero_coefficients_are_kept(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        assert (0 * x).to_right_associative_form() == Product(Number(0), x)

    def test_fraction_is_malformed(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        with pytest.raises(MalformedExpressionError):
            (x / 2).to_right_associative_form()

    def test_ratio_is_malformed(self, pts):
        r = ratio(pts['A'], pts['B'], pts['C'], pts['D'])
        with pytest.raises(MalformedExpressionError) as exc_info:
            (r + 1).to_right_associative_form()
        assert exc_info.value.expression == "R(A,B,C,D)"


class TestUniformize:
    """Tests for the canonical point order of primitives."""

    def test_area_rotation(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        assert area(b, c, a).uniformize() == area(a, b, c)
        assert area(c, a, b).uniformize() == area(a, b, c)

    def test_area_reflection_negates(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        assert area(a, c, b).uniformize() == AdditiveInverse(area(a, b, c))
        assert area(c, b, a).uniformize() == AdditiveInverse(area(a, b, c))

    def test_pythagoras_reversal(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        assert pythagoras(c, b, a).uniformize() == pythagoras(a, b, c)
        assert pythagoras(a, c, b).uniformize() == pythagoras(a, c, b)

    def test_ratio_segments(self, pts):
        a, b, c, d = pts['A'], pts['B'], pts['C'], pts['D']
        assert ratio(b, a, c, d).uniformize() == AdditiveInverse(ratio(a, b, c, d))
        assert ratio(b, a, d, c).uniformize() == ratio(a, b, c, d)

    def test_recurses_into_combinators(self, pts):
        a, b, c = pts['A'], pts['B'], pts['C']
        expr = area(b, c, a) * 2 + pythagoras(c, b, a)
        assert expr.uniformize() == Sum(Product(area(a, b, c), Number(2)), pythagoras(a, b, c))


class TestBuilders:
    """Tests for the right-associative builders."""

    def test_product(self, pts):
        x, y, z = (area(pts['A'], pts['B'], pts[l]) for l in "CDE")
        assert right_associative_product([x, y, z]) == Product(x, Product(y, z))
        assert right_associative_product([]) == Number(1)

    def test_sum(self):
        assert right_associative_sum([num(1), num(2), num(3)]) == Sum(num(1), Sum(num(2), num(3)))
        assert right_associative_sum([]) == Number(0)

    def test_monomial(self, pts):
        x = area(pts['A'], pts['B'], pts['C'])
        assert monomial(4, [x]) == Product(Number(4), x)
        assert monomial(4, []) == Number(4)
