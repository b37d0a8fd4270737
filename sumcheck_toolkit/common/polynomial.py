"""
Sparse Multivariate Polynomials for the Sum-Check Protocol.

The sum-check prover works on an explicit polynomial g(x_1, ..., x_v) over
a prime field. This module stores g as a sparse sum of monomials and gives
the two primitives the protocol is built on:

    evaluate(point)          - g at a full assignment (the verifier's oracle)
    partial_evaluate(point)  - bind some variables, keep the rest free

Key Concepts:
    - Term: coefficient × x_{k1}^{e1} × x_{k2}^{e2} × ...
    - Total degree: largest e1 + e2 + ... over all terms
    - Degree in x_k: largest exponent of x_k over all terms (this bounds
      the degree of the sum-check round polynomial for x_k)
    - Boolean hypercube {0,1}^v: the 2^v points the claim sums over

Example (the polynomial used throughout the tests):
    g(x0, x1, x2) = 2·x0³ + x0·x2 + x1·x2

    >>> field = PrimeField(71)
    >>> g = SparsePolynomial.from_terms(field, 3, [
    ...     (2, [(0, 3)]),
    ...     (1, [(0, 1), (2, 1)]),
    ...     (1, [(1, 1), (2, 1)]),
    ... ])
    >>> g.sum_over_hypercube()
    FieldElement(12, mod 71)

Partial evaluation keeps only the free variables and re-indexes them in
order, so binding x0 and x2 of g leaves a polynomial in one variable:

    >>> g.partial_evaluate([1, None, 0])   # 2 + 0 + 0 = 2, x1 vanishes
    SparsePolynomial(num_vars=1, 2)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
import random

import numpy as np

from .field import FieldElement, PrimeField

# Sorted ((variable, exponent), ...) with every exponent > 0
Monomial = Tuple[Tuple[int, int], ...]
Scalar = Union[FieldElement, int]


def boolean_hypercube(num_vars: int) -> Iterator[Tuple[int, ...]]:
    """
    Enumerate {0,1}^num_vars in lexicographic order.

    The first coordinate is the most significant bit:
        (0,0), (0,1), (1,0), (1,1)

    For num_vars == 0 this yields the single empty point ().
    """
    if num_vars < 0:
        raise ValueError(f"num_vars must be non-negative, got {num_vars}")
    return np.ndindex(*([2] * num_vars))


def hypercube_point(index: int, num_vars: int) -> Tuple[int, ...]:
    """
    The index-th point of boolean_hypercube(num_vars).

    Used to split the hypercube into contiguous index ranges.
    """
    if not 0 <= index < (1 << num_vars):
        raise ValueError(f"index {index} is outside {{0,1}}^{num_vars}")
    return tuple((index >> (num_vars - 1 - k)) & 1 for k in range(num_vars))


@dataclass(frozen=True)
class Term:
    """
    A single monomial with its coefficient.

    Attributes:
        coefficient: Non-zero field element
        powers: Sorted ((variable, exponent), ...), exponents > 0
    """
    coefficient: FieldElement
    powers: Monomial

    @property
    def degree(self) -> int:
        """Total degree of the monomial."""
        return sum(e for _, e in self.powers)

    def evaluate(self, point: Sequence[FieldElement]) -> FieldElement:
        result = self.coefficient
        for var, exp in self.powers:
            result = result * (point[var] ** exp)
        return result

    def __repr__(self) -> str:
        factors = [f"x{var}" if exp == 1 else f"x{var}^{exp}" for var, exp in self.powers]
        if not factors:
            return str(self.coefficient)
        if self.coefficient.is_one():
            return "*".join(factors)
        return f"{self.coefficient}*" + "*".join(factors)


def _normalize_monomial(powers: Iterable[Tuple[int, int]], num_vars: int) -> Monomial:
    """Merge repeated variables, drop zero exponents, sort by variable."""
    merged: Dict[int, int] = {}
    for var, exp in powers:
        if not 0 <= var < num_vars:
            raise ValueError(f"Variable x{var} out of range for {num_vars} variables")
        if exp < 0:
            raise ValueError(f"Negative exponent {exp} on x{var}")
        if exp:
            merged[var] = merged.get(var, 0) + exp
    return tuple(sorted(merged.items()))


class SparsePolynomial:
    """
    A multivariate polynomial over Z_p stored as {monomial: coefficient}.

    Instances are treated as immutable: every operation returns a new
    polynomial and no two polynomials share a term table.

    Attributes:
        field: The prime field of the coefficients
        num_vars: Number of variables x0 .. x{num_vars-1}
    """

    def __init__(self, field: PrimeField, num_vars: int,
                 terms: Optional[Dict[Monomial, Scalar]] = None):
        if num_vars < 0:
            raise ValueError(f"num_vars must be non-negative, got {num_vars}")
        self.field = field
        self.num_vars = num_vars
        self._terms: Dict[Monomial, FieldElement] = {}
        for powers, coeff in (terms or {}).items():
            self._add_term(_normalize_monomial(powers, num_vars), field.element(coeff))

    def _add_term(self, monomial: Monomial, coeff: FieldElement):
        total = self._terms.get(monomial, self.field.zero()) + coeff
        if total.is_zero():
            self._terms.pop(monomial, None)
        else:
            self._terms[monomial] = total

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_terms(cls, field: PrimeField, num_vars: int,
                   terms: Iterable[Tuple[Scalar, Iterable[Tuple[int, int]]]]) -> 'SparsePolynomial':
        """
        Build from (coefficient, [(variable, exponent), ...]) pairs.

        Like terms are combined, so the input may repeat monomials.
        """
        poly = cls(field, num_vars)
        for coeff, powers in terms:
            poly._add_term(_normalize_monomial(powers, num_vars), field.element(coeff))
        return poly

    @classmethod
    def zero(cls, field: PrimeField, num_vars: int) -> 'SparsePolynomial':
        return cls(field, num_vars)

    @classmethod
    def constant(cls, field: PrimeField, num_vars: int, value: Scalar) -> 'SparsePolynomial':
        return cls(field, num_vars, {(): value})

    @classmethod
    def variable(cls, field: PrimeField, num_vars: int, var: int) -> 'SparsePolynomial':
        """The polynomial x_var."""
        return cls(field, num_vars, {((var, 1),): 1})

    @classmethod
    def from_univariate_coefficients(cls, field: PrimeField,
                                     coefficients: Sequence[Scalar]) -> 'SparsePolynomial':
        """
        Build a one-variable polynomial from ascending coefficients.

        [1, 2, 0, 8] -> 8*x0^3 + 2*x0 + 1
        """
        return cls.from_terms(field, 1, [
            (c, [(0, k)]) for k, c in enumerate(coefficients)
        ])

    @classmethod
    def random(cls, field: PrimeField, num_vars: int, max_degree: int,
               num_terms: int, rng: Optional[random.Random] = None) -> 'SparsePolynomial':
        """
        Random polynomial with up to num_terms terms.

        Each exponent is drawn from [0, max_degree], so the degree in every
        single variable is at most max_degree.
        """
        rng = rng or random.Random()
        terms = []
        for _ in range(num_terms):
            powers = [(var, rng.randint(0, max_degree)) for var in range(num_vars)]
            terms.append((field.random(rng, exclude_zero=True), powers))
        return cls.from_terms(field, num_vars, terms)

    # =========================================================================
    # Structure
    # =========================================================================

    @property
    def terms(self) -> List[Term]:
        """Non-zero terms, ordered by degree (highest first) then by monomial."""
        ordered = sorted(self._terms.items(), key=lambda kv: (-sum(e for _, e in kv[0]), kv[0]))
        return [Term(coeff, monomial) for monomial, coeff in ordered]

    @property
    def num_terms(self) -> int:
        return len(self._terms)

    @property
    def degree(self) -> int:
        """Total degree (0 for constants and the zero polynomial)."""
        if not self._terms:
            return 0
        return max(sum(e for _, e in monomial) for monomial in self._terms)

    def degree_in(self, var: int) -> int:
        """Largest exponent of x_var across all terms."""
        if not 0 <= var < self.num_vars:
            raise ValueError(f"Variable x{var} out of range for {self.num_vars} variables")
        return max((dict(monomial).get(var, 0) for monomial in self._terms), default=0)

    def is_zero(self) -> bool:
        return not self._terms

    def coefficients(self) -> List[FieldElement]:
        """
        Dense ascending coefficients of a one-variable polynomial.

        Raises:
            ValueError: If the polynomial has more than one variable
        """
        if self.num_vars != 1:
            raise ValueError(f"coefficients() needs a univariate polynomial, got {self.num_vars} variables")
        coeffs = [self.field.zero()] * (self.degree + 1)
        for monomial, coeff in self._terms.items():
            coeffs[dict(monomial).get(0, 0)] = coeff
        return coeffs

    # =========================================================================
    # Evaluation
    # =========================================================================

    def _check_point(self, point: Sequence) -> None:
        if len(point) != self.num_vars:
            raise ValueError(f"Point dimension {len(point)} != num_vars {self.num_vars}")

    def evaluate(self, point: Sequence[Scalar]) -> FieldElement:
        """
        Evaluate at a full assignment.

        Args:
            point: num_vars field elements (ints are mapped into the field)

        Returns:
            g(point)
        """
        self._check_point(point)
        values = self.field.elements(point)
        total = self.field.zero()
        for monomial, coeff in self._terms.items():
            total = total + Term(coeff, monomial).evaluate(values)
        return total

    def __call__(self, *point: Scalar) -> FieldElement:
        return self.evaluate(point)

    def partial_evaluate(self, point: Sequence[Optional[Scalar]]) -> 'SparsePolynomial':
        """
        Bind every variable whose slot is not None.

        The result is a new polynomial over the free variables only,
        re-indexed in their original order: binding slots 0 and 2 of a
        3-variable polynomial gives a polynomial in one variable x0 that
        stands for the old x1.

        Args:
            point: num_vars entries, each a field element/int or None

        Returns:
            Reduced SparsePolynomial with num_vars == point.count(None)
        """
        self._check_point(point)
        reindex: Dict[int, int] = {}
        bound: Dict[int, FieldElement] = {}
        for var, value in enumerate(point):
            if value is None:
                reindex[var] = len(reindex)
            else:
                bound[var] = self.field.element(value)

        result = SparsePolynomial(self.field, len(reindex))
        for monomial, coeff in self._terms.items():
            remaining = []
            for var, exp in monomial:
                if var in bound:
                    coeff = coeff * (bound[var] ** exp)
                else:
                    remaining.append((reindex[var], exp))
            if not coeff.is_zero():
                result._add_term(tuple(remaining), coeff)
        return result

    def sum_over_hypercube(self) -> FieldElement:
        """
        Compute Σ g(b) for b ∈ {0,1}^v directly.

        This is the value sum-check lets a verifier check without doing
        the 2^v evaluations itself.
        """
        total = self.field.zero()
        for b in boolean_hypercube(self.num_vars):
            total = total + self.evaluate(b)
        return total

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _check_compatible(self, other: 'SparsePolynomial') -> None:
        if other.field != self.field or other.num_vars != self.num_vars:
            raise ValueError(
                f"Incompatible polynomials: {self.num_vars} vars over Z_{self.field.prime} "
                f"vs {other.num_vars} vars over Z_{other.field.prime}"
            )

    def __add__(self, other: Union['SparsePolynomial', Scalar]) -> 'SparsePolynomial':
        if not isinstance(other, SparsePolynomial):
            other = SparsePolynomial.constant(self.field, self.num_vars, other)
        self._check_compatible(other)
        result = SparsePolynomial(self.field, self.num_vars, self._terms)
        for monomial, coeff in other._terms.items():
            result._add_term(monomial, coeff)
        return result

    def __radd__(self, other: Scalar) -> 'SparsePolynomial':
        return self.__add__(other)

    def __neg__(self) -> 'SparsePolynomial':
        return SparsePolynomial(self.field, self.num_vars,
                                {m: -c for m, c in self._terms.items()})

    def __sub__(self, other: Union['SparsePolynomial', Scalar]) -> 'SparsePolynomial':
        if not isinstance(other, SparsePolynomial):
            other = SparsePolynomial.constant(self.field, self.num_vars, other)
        return self + (-other)

    def __mul__(self, other: Union['SparsePolynomial', Scalar]) -> 'SparsePolynomial':
        if not isinstance(other, SparsePolynomial):
            scalar = self.field.element(other)
            return SparsePolynomial(self.field, self.num_vars,
                                    {m: c * scalar for m, c in self._terms.items()})
        self._check_compatible(other)
        result = SparsePolynomial(self.field, self.num_vars)
        for m1, c1 in self._terms.items():
            for m2, c2 in other._terms.items():
                result._add_term(_normalize_monomial(m1 + m2, self.num_vars), c1 * c2)
        return result

    def __rmul__(self, other: Scalar) -> 'SparsePolynomial':
        return self.__mul__(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparsePolynomial):
            return NotImplemented
        return (self.field == other.field and self.num_vars == other.num_vars
                and self._terms == other._terms)

    __hash__ = None

    def __str__(self) -> str:
        if not self._terms:
            return "0"
        return " + ".join(repr(t) for t in self.terms)

    def __repr__(self) -> str:
        return f"SparsePolynomial(num_vars={self.num_vars}, {self})"
