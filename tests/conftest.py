"""Shared fixtures: the Z_71 field and g(x, y, z) = 2x³ + xz + yz."""

import pytest

from sumcheck_toolkit.common import PrimeField, SeededRandomSource, SparsePolynomial


@pytest.fixture
def field():
    return PrimeField(71)


@pytest.fixture
def g(field):
    return SparsePolynomial.from_terms(field, 3, [
        (2, [(0, 3)]),
        (1, [(0, 1), (2, 1)]),
        (1, [(1, 1), (2, 1)]),
    ])


@pytest.fixture
def rng(field):
    return SeededRandomSource(field, seed=1234)
