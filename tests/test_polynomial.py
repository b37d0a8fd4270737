"""Tests for sparse multivariate polynomials."""

import random

import pytest

from sumcheck_toolkit.common.polynomial import (
    SparsePolynomial,
    boolean_hypercube,
    hypercube_point,
)


def test_g_evaluations(g):
    assert g.evaluate([0, 0, 0]) == 0
    assert g.evaluate([1, 0, 0]) == 2
    assert g.evaluate([1, 0, 1]) == 3
    assert g(2, 3, 5) == (16 + 10 + 15) % 71


def test_g_sums_to_twelve(g):
    assert g.sum_over_hypercube() == 12


def test_structure(g):
    assert g.num_vars == 3
    assert g.num_terms == 3
    assert g.degree == 3
    assert [g.degree_in(v) for v in range(3)] == [3, 1, 1]
    assert str(g) == "2*x0^3 + x0*x2 + x1*x2"


def test_like_terms_combine_and_cancel(field):
    p = SparsePolynomial.from_terms(field, 2, [
        (3, [(0, 1), (1, 1)]),
        (68, [(1, 1), (0, 1)]),
        (5, [(0, 1), (0, 1)]),
    ])
    assert p.num_terms == 1
    assert p == SparsePolynomial.from_terms(field, 2, [(5, [(0, 2)])])


def test_invalid_terms_rejected(field):
    with pytest.raises(ValueError):
        SparsePolynomial.from_terms(field, 2, [(1, [(2, 1)])])
    with pytest.raises(ValueError):
        SparsePolynomial.from_terms(field, 2, [(1, [(0, -1)])])


def test_evaluate_checks_dimension(g):
    with pytest.raises(ValueError):
        g.evaluate([1, 2])


class TestPartialEvaluate:

    def test_reindexes_free_variables(self, g, field):
        # g(2, y, z) = 16 + 2z + yz, with y -> x0, z -> x1
        p = g.partial_evaluate([2, None, None])
        assert p.num_vars == 2
        assert p == SparsePolynomial.from_terms(field, 2, [
            (16, []), (2, [(1, 1)]), (1, [(0, 1), (1, 1)]),
        ])

    def test_leaves_single_variable(self, g, field):
        # g(x, 1, 1) = 2x³ + x + 1
        p = g.partial_evaluate([None, 1, 1])
        assert p == SparsePolynomial.from_univariate_coefficients(field, [1, 1, 0, 2])

    def test_all_bound_gives_constant(self, g):
        p = g.partial_evaluate([1, 0, 1])
        assert p.num_vars == 0
        assert p.evaluate([]) == g.evaluate([1, 0, 1])

    def test_agrees_with_evaluate(self, field):
        rng = random.Random(5)
        p = SparsePolynomial.random(field, 4, max_degree=3, num_terms=8, rng=rng)
        point = [field.random(rng) for _ in range(4)]
        reduced = p.partial_evaluate([point[0], None, point[2], None])
        assert reduced.evaluate([point[1], point[3]]) == p.evaluate(point)

    def test_does_not_alias_source(self, g):
        before = str(g)
        p = g.partial_evaluate([None, None, 1])
        p = p + 5
        assert str(g) == before


class TestArithmetic:

    def test_add_sub_mul(self, field):
        x = SparsePolynomial.variable(field, 1, 0)
        p = (x + 1) * (x - 1)
        assert p == SparsePolynomial.from_univariate_coefficients(field, [70, 0, 1])
        assert (p - p).is_zero()
        assert 3 * x == x * 3

    def test_incompatible_polynomials(self, field):
        with pytest.raises(ValueError):
            SparsePolynomial.variable(field, 1, 0) + SparsePolynomial.variable(field, 2, 0)

    def test_coefficients(self, field):
        p = SparsePolynomial.from_univariate_coefficients(field, [1, 2, 0, 8])
        assert p.coefficients() == [1, 2, 0, 8]
        assert str(p) == "8*x0^3 + 2*x0 + 1"

    def test_coefficients_needs_one_variable(self, g):
        with pytest.raises(ValueError):
            g.coefficients()


class TestHypercube:

    def test_lexicographic_order(self):
        assert list(boolean_hypercube(2)) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_zero_variables(self):
        assert list(boolean_hypercube(0)) == [()]

    def test_point_matches_enumeration(self):
        assert [hypercube_point(i, 3) for i in range(8)] == list(boolean_hypercube(3))

    def test_point_out_of_range(self):
        with pytest.raises(ValueError):
            hypercube_point(8, 3)
