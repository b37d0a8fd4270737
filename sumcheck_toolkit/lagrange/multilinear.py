"""
Multilinear Lagrange Interpolation over the Boolean Hypercube {0,1}^v.

Any function f: {0,1}^v → Z_p has exactly one multilinear extension: the
polynomial of degree at most 1 in each variable that agrees with f on every
boolean point. Sum-check is most often run on such extensions.

Key Concepts:
    - Equality basis for w ∈ {0,1}^v:
          eq_w(x) = Π_k (w_k·x_k + (1 - w_k)(1 - x_k))
      eq_w(w) = 1 and eq_w(b) = 0 at every other boolean point b
    - Multilinear extension:
          f̃(x) = Σ_{w ∈ {0,1}^v} f(w) · eq_w(x)
    - f̃(b) = f(b) exactly for boolean b

Cost:
    This is the reference construction. It stores 2^v bases and every
    evaluation costs O(2^v · v) field operations.

Indexing:
    The hypercube is walked in lexicographic order with x_0 as the most
    significant bit, so a flat table [f(000), f(001), f(010), ...] lines up
    with from_evaluations().

Example:
    >>> field = PrimeField(5)
    >>> mle = MultilinearExtension.from_evaluations(field, [1, 2, 1, 4])
    >>> mle.interpolate([1, 1])
    FieldElement(4, mod 5)
    >>> mle.sum_over_hypercube()
    FieldElement(3, mod 5)
"""

from __future__ import annotations
from typing import Callable, List, Mapping, Sequence, Tuple, Union

from ..common.field import FieldElement, PrimeField
from ..common.polynomial import SparsePolynomial, boolean_hypercube

Scalar = Union[FieldElement, int]
BooleanFunction = Union[Callable[[Tuple[int, ...]], Scalar], Mapping[Tuple[int, ...], Scalar]]


class EqualityBasis:
    """
    The multilinear equality polynomial eq_w.

    Defined for any w in Z_p^v, although w is normally a boolean point.

    Attributes:
        field: The prime field
        w: The v coordinates of the point where eq_w is 1
    """

    def __init__(self, field: PrimeField, w: Sequence[Scalar]):
        self.field = field
        self.w: List[FieldElement] = field.elements(w)

    @property
    def num_vars(self) -> int:
        return len(self.w)

    def evaluate(self, x: Sequence[Scalar]) -> FieldElement:
        """Compute Π_k (w_k·x_k + (1 - w_k)(1 - x_k))."""
        if len(x) != self.num_vars:
            raise ValueError(f"Point dimension {len(x)} != num_vars {self.num_vars}")
        result = self.field.one()
        for w_k, x_k in zip(self.w, self.field.elements(x)):
            result = result * (w_k * x_k + (1 - w_k) * (1 - x_k))
        return result

    def to_polynomial(self) -> SparsePolynomial:
        """Expand eq_w into a SparsePolynomial in num_vars variables."""
        v = self.num_vars
        result = SparsePolynomial.constant(self.field, v, 1)
        for k, w_k in enumerate(self.w):
            # w·x + (1-w)(1-x) = (2w - 1)·x + (1 - w)
            x_k = SparsePolynomial.variable(self.field, v, k)
            result = result * (x_k * (2 * w_k - 1) + (1 - w_k))
        return result

    def __repr__(self) -> str:
        return f"EqualityBasis(w={[e.value for e in self.w]}, Z_{self.field.prime})"


class MultilinearExtension:
    """
    The multilinear extension of f: {0,1}^v → Z_p.

    Stores one (eq_w, f(w)) pair per boolean point w.

    Args:
        field: The prime field
        f: A callable taking a tuple of bits, or a mapping keyed by bit tuples
        num_vars: v

    Example:
        >>> field = PrimeField(97)
        >>> xor = MultilinearExtension(field, lambda b: b[0] ^ b[1], 2)
        >>> xor.interpolate([0, 1]).value
        1
    """

    def __init__(self, field: PrimeField, f: BooleanFunction, num_vars: int):
        self.field = field
        self.num_vars = num_vars
        lookup = f.__getitem__ if isinstance(f, Mapping) else f
        self._pairs: List[Tuple[EqualityBasis, FieldElement]] = [
            (EqualityBasis(field, w), field.element(lookup(w)))
            for w in boolean_hypercube(num_vars)
        ]

    @classmethod
    def from_evaluations(cls, field: PrimeField,
                         values: Sequence[Scalar]) -> 'MultilinearExtension':
        """
        Build from a flat table of 2^v values in lexicographic order.

        Raises:
            ValueError: If the table size is not a power of 2
        """
        size = len(values)
        if size == 0 or (size & (size - 1)) != 0:
            raise ValueError(f"Table size must be power of 2, got {size}")
        num_vars = size.bit_length() - 1
        table = dict(zip(boolean_hypercube(num_vars), values))
        return cls(field, table, num_vars)

    @property
    def evaluations(self) -> List[FieldElement]:
        """f(w) for every w, in lexicographic order."""
        return [value for _, value in self._pairs]

    def interpolate(self, x: Sequence[Scalar]) -> FieldElement:
        """Compute Σ_w eq_w(x) · f(w)."""
        if len(x) != self.num_vars:
            raise ValueError(f"Point dimension {len(x)} != num_vars {self.num_vars}")
        total = self.field.zero()
        for basis, value in self._pairs:
            total = total + basis.evaluate(x) * value
        return total

    def sum_over_hypercube(self) -> FieldElement:
        total = self.field.zero()
        for _, value in self._pairs:
            total = total + value
        return total

    def to_polynomial(self) -> SparsePolynomial:
        """
        Expand f̃ into a SparsePolynomial.

        The result can be handed to Prover directly; its degree in every
        variable is at most 1.
        """
        result = SparsePolynomial.zero(self.field, self.num_vars)
        for basis, value in self._pairs:
            if not value.is_zero():
                result = result + basis.to_polynomial() * value
        return result

    def __repr__(self) -> str:
        return f"MultilinearExtension(num_vars={self.num_vars}, Z_{self.field.prime})"
