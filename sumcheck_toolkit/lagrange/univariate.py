"""
Univariate Lagrange Interpolation over the Linear Domain {0, ..., n-1}.

A vector a = (a_0, ..., a_{n-1}) is the table of values of exactly one
polynomial of degree < n on the points 0, 1, ..., n-1. Evaluating that
polynomial anywhere else gives the low-degree extension of a.

Key Concepts:
    - Basis polynomial L_i(x) = Π_{j≠i} (x - j) / (i - j)
      L_i(i) = 1 and L_i(j) = 0 for every other domain point j
    - Interpolation: p(x) = Σ_i a_i · L_i(x)
    - Everything is exact field arithmetic. The denominators (i - j) are
      inverted in Z_p, never approximated.

Degenerate domains:
    Domain points are small integers mapped into Z_p. When n > p two of
    them collide (i ≡ j mod p), a denominator becomes zero and the basis
    does not exist. This is detected when the basis is built.

Example:
    >>> field = PrimeField(11)
    >>> interp = UnivariateInterpolation(field, [2, 1, 1])
    >>> [interp.interpolate(x).value for x in range(6)]
    [2, 1, 1, 2, 4, 7]
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Union

from ..common.errors import DegenerateBasis, InvalidDomainIndex
from ..common.field import BatchInverter, FieldElement, PrimeField

Scalar = Union[FieldElement, int]


def _basis_denominator(field: PrimeField, n: int, i: int) -> FieldElement:
    """Π_{j≠i} (i - j) in Z_p, raising DegenerateBasis if a factor vanishes."""
    denominator = field.one()
    for j in range(n):
        if j == i:
            continue
        factor = field.element(i - j)
        if factor.is_zero():
            raise DegenerateBasis(n, i, j, field.prime)
        denominator = denominator * factor
    return denominator


class UnivariateLagrangeBasis:
    """
    The Lagrange basis polynomial L_i over {0, ..., n-1}.

    The basis only stores (n, i) and the inverse of its denominator;
    evaluate() recomputes the numerator for each x.

    Attributes:
        field: The prime field
        n: Domain size
        i: The domain point where L_i is 1

    Raises:
        InvalidDomainIndex: If i is not in [0, n)
        DegenerateBasis: If two domain points collide in the field

    Example:
        >>> l_1 = UnivariateLagrangeBasis(PrimeField(11), 4, 1)
        >>> [l_1.evaluate(x).value for x in range(4)]
        [0, 1, 0, 0]
    """

    def __init__(self, field: PrimeField, n: int, i: int,
                 denominator_inverse: Optional[FieldElement] = None):
        if not 0 <= i < n:
            raise InvalidDomainIndex(n, i)
        self.field = field
        self.n = n
        self.i = i
        if denominator_inverse is None:
            denominator_inverse = _basis_denominator(field, n, i).inverse()
        self._denominator_inverse = denominator_inverse

    def evaluate(self, x: Scalar) -> FieldElement:
        """Compute L_i(x) = Π_{j≠i} (x - j) / (i - j)."""
        x = self.field.element(x)
        numerator = self.field.one()
        for j in range(self.n):
            if j != self.i:
                numerator = numerator * (x - j)
        return numerator * self._denominator_inverse

    def __repr__(self) -> str:
        return f"UnivariateLagrangeBasis(n={self.n}, i={self.i}, Z_{self.field.prime})"


class UnivariateInterpolation:
    """
    Low-degree extension of a vector of field values.

    Builds one UnivariateLagrangeBasis per entry. All n denominators are
    inverted together with Montgomery's trick (one field inversion).

    Attributes:
        field: The prime field
        values: The interpolated values a_0 .. a_{n-1}
        bases: L_0 .. L_{n-1} over {0, ..., n-1}
    """

    def __init__(self, field: PrimeField, values: Sequence[Scalar]):
        if not values:
            raise ValueError("Cannot interpolate an empty vector")
        self.field = field
        self.values: List[FieldElement] = field.elements(values)

        n = len(self.values)
        denominators = [_basis_denominator(field, n, i) for i in range(n)]
        inverses = BatchInverter(field).invert_batch(denominators)
        self.bases = [
            UnivariateLagrangeBasis(field, n, i, denominator_inverse=inv)
            for i, inv in enumerate(inverses)
        ]

    def __len__(self) -> int:
        return len(self.values)

    def interpolate(self, x: Scalar) -> FieldElement:
        """
        Value of the interpolating polynomial at x.

        For x in {0, ..., n-1} this is exactly values[x]; anywhere else it
        is the unique degree < n extension.
        """
        total = self.field.zero()
        for value, basis in zip(self.values, self.bases):
            total = total + value * basis.evaluate(x)
        return total


def evaluate_from_evaluations(field: PrimeField, evaluations: Sequence[Scalar],
                              x: Scalar) -> FieldElement:
    """
    Evaluate a polynomial given by its values at 0, 1, ..., d.

    Round polynomials are often sent as evaluations h(0), ..., h(d)
    instead of coefficients; this recovers h(x) for any challenge x.
    """
    return UnivariateInterpolation(field, evaluations).interpolate(x)
