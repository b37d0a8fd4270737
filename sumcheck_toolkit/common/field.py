"""
Finite Field Arithmetic for the Sum-Check Protocol.

Every value the prover and verifier exchange lives in a prime field Z_p:
round polynomials have field coefficients, challenges are field elements,
and the claimed sum is a field element. Nothing in the toolkit ever leaves
exact modular arithmetic (no floats, no truncating casts).

Key Concepts:
    - All arithmetic is done modulo a prime p
    - Addition: (a + b) mod p
    - Multiplication: (a * b) mod p
    - Subtraction: (a - b + p) mod p (to keep positive)
    - Division: a * b^(-1) mod p (multiply by modular inverse)
    - Small integers map into the field by reduction mod p, so distinct
      integers i, j collide whenever i ≡ j (mod p)

Example:
    >>> field = PrimeField(71)
    >>> a = field.element(45)
    >>> b = field.element(67)
    >>> print(a + b)  # (45 + 67) mod 71 = 41
    41

Soundness Context:
    - A cheating prover is caught with probability >= 1 - (d * v) / p
    - Tiny primes (like 71) are for hand-checkable tests only
    - Real deployments use 64-bit (Goldilocks) or 255-bit primes
"""

from __future__ import annotations
from dataclasses import dataclass
from numbers import Integral
from typing import Iterable, List, Optional, Union
import random


@dataclass
class FieldElement:
    """
    An element of a prime field Z_p.

    All operations automatically reduce the result modulo p. Mixing
    elements of two different fields is an error.

    Attributes:
        value: The integer value (always in range [0, p-1])
        field: Reference to the parent PrimeField

    Example:
        >>> field = PrimeField(71)
        >>> a = FieldElement(45, field)
        >>> b = FieldElement(67, field)
        >>> a + b
        FieldElement(41, mod 71)
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        """Ensure value is an integer reduced modulo p."""
        if not isinstance(self.value, Integral):
            raise TypeError(
                f"Field elements are built from integers, got {type(self.value).__name__}"
            )
        self.value = int(self.value) % self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.value == other.value and self.field.prime == other.field.prime
        if isinstance(other, Integral):
            return self.value == (int(other) % self.field.prime)
        return False

    def __hash__(self) -> int:
        return hash((self.value, self.field.prime))

    def _coerce(self, other: Union[FieldElement, int]) -> int:
        """Raw integer value of `other`, rejecting elements of another field."""
        if isinstance(other, FieldElement):
            if other.field.prime != self.field.prime:
                raise ValueError(
                    f"Cannot combine elements of Z_{self.field.prime} and Z_{other.field.prime}"
                )
            return other.value
        if isinstance(other, Integral):
            return int(other)
        return NotImplemented

    # Arithmetic Operations

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Addition in the field: (a + b) mod p"""
        other_val = self._coerce(other)
        if other_val is NotImplemented:
            return NotImplemented
        return FieldElement(self.value + other_val, self.field)

    def __radd__(self, other: int) -> FieldElement:
        return self.__add__(other)

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Subtraction in the field: (a - b + p) mod p"""
        other_val = self._coerce(other)
        if other_val is NotImplemented:
            return NotImplemented
        return FieldElement(self.value - other_val, self.field)

    def __rsub__(self, other: int) -> FieldElement:
        other_val = self._coerce(other)
        if other_val is NotImplemented:
            return NotImplemented
        return FieldElement(other_val - self.value, self.field)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Multiplication in the field: (a * b) mod p"""
        other_val = self._coerce(other)
        if other_val is NotImplemented:
            return NotImplemented
        return FieldElement(self.value * other_val, self.field)

    def __rmul__(self, other: int) -> FieldElement:
        return self.__mul__(other)

    def __truediv__(self, other: Union[FieldElement, int]) -> FieldElement:
        """Division in the field: a * b^(-1) mod p"""
        if isinstance(other, FieldElement):
            self._coerce(other)
            return self * other.inverse()
        if isinstance(other, Integral):
            return self * self.field.element(other).inverse()
        return NotImplemented

    def __rtruediv__(self, other: int) -> FieldElement:
        if not isinstance(other, Integral):
            return NotImplemented
        return self.field.element(other) * self.inverse()

    def __neg__(self) -> FieldElement:
        """Negation: -a = p - a"""
        return FieldElement(-self.value, self.field)

    def __pow__(self, exp: int) -> FieldElement:
        """
        Exponentiation using square-and-multiply.

        Negative exponents go through the inverse: a^(-n) = (a^(-1))^n.
        """
        if exp < 0:
            return self.inverse() ** (-exp)

        result = self.field.one()
        base = FieldElement(self.value, self.field)

        while exp > 0:
            if exp & 1:
                result = result * base
            base = base * base
            exp >>= 1

        return result

    def inverse(self) -> FieldElement:
        """
        Compute modular inverse using the Extended Euclidean Algorithm.

        Finds b such that a * b ≡ 1 (mod p).

        Raises:
            ValueError: If self.value is 0 (no inverse exists), or if the
                modulus is not prime and gcd(a, p) != 1

        Returns:
            FieldElement b such that self * b = 1
        """
        if self.value == 0:
            raise ValueError("Cannot invert zero")

        # a*x + p*y = gcd(a, p) = 1  =>  x is the inverse
        old_r, r = self.value, self.field.prime
        old_s, s = 1, 0

        while r != 0:
            quotient = old_r // r
            old_r, r = r, old_r - quotient * r
            old_s, s = s, old_s - quotient * s

        if old_r != 1:
            raise ValueError(f"No inverse exists (gcd = {old_r})")

        return FieldElement(old_s, self.field)

    def is_zero(self) -> bool:
        """Check if this element is zero."""
        return self.value == 0

    def is_one(self) -> bool:
        """Check if this element is one."""
        return self.value == 1


class PrimeField:
    """
    A prime field Z_p.

    Factory for field elements. Two PrimeField objects with the same
    modulus are interchangeable.

    Attributes:
        prime: The prime modulus p

    Common Primes:
        - 71: The hand-checkable field used throughout the tests
        - 2^64 - 2^32 + 1: Goldilocks prime (fast on 64-bit CPUs)

    Example:
        >>> field = PrimeField(71)
        >>> field.element(-1)
        FieldElement(70, mod 71)
    """

    SMALL_TEST_PRIME = 71
    GOLDILOCKS_PRIME = (1 << 64) - (1 << 32) + 1  # 2^64 - 2^32 + 1

    def __init__(self, prime: int):
        """
        Initialize a prime field.

        Args:
            prime: The prime modulus. Should be prime for correct behavior.
                   (Primality is not verified)
        """
        if prime < 2:
            raise ValueError("Prime must be at least 2")
        self.prime = prime

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimeField) and other.prime == self.prime

    def __hash__(self) -> int:
        return hash(("PrimeField", self.prime))

    def element(self, value: Union[int, FieldElement]) -> FieldElement:
        """
        Create a field element from an integer (or re-home an element).

        Raises:
            TypeError: If value is neither an integer nor a FieldElement
            ValueError: If value is an element of another field
        """
        if isinstance(value, FieldElement):
            if value.field.prime != self.prime:
                raise ValueError(f"{value!r} does not belong to Z_{self.prime}")
            return value
        if not isinstance(value, Integral):
            raise TypeError(f"Cannot map {type(value).__name__} {value!r} into Z_{self.prime}")
        return FieldElement(int(value), self)

    def elements(self, values: Iterable[Union[int, FieldElement]]) -> List[FieldElement]:
        """Convert a sequence of integers into field elements."""
        return [self.element(v) for v in values]

    def zero(self) -> FieldElement:
        """Return the additive identity (0)."""
        return FieldElement(0, self)

    def one(self) -> FieldElement:
        """Return the multiplicative identity (1)."""
        return FieldElement(1, self)

    def random(self, rng: Optional[random.Random] = None,
               exclude_zero: bool = False) -> FieldElement:
        """
        Generate a random field element.

        Args:
            rng: Source of randomness. Tests pass a seeded random.Random;
                 challenge sampling goes through common.randomness instead.
            exclude_zero: If True, never returns zero

        Returns:
            A random FieldElement in [0, p-1] or [1, p-1]
        """
        rng = rng or random.Random()
        if exclude_zero:
            return FieldElement(rng.randint(1, self.prime - 1), self)
        return FieldElement(rng.randint(0, self.prime - 1), self)


class BatchInverter:
    """
    Batch modular inversion using Montgomery's trick.

    Lagrange interpolation over {0, ..., n-1} needs the inverse of every
    basis denominator. Montgomery's trick computes all n inverses with a
    single inversion plus 3(n-1) multiplications.

    Algorithm:
        1. Compute partial products: P[i] = a[0] * a[1] * ... * a[i]
        2. Invert final product: I = P[n-1]^(-1)
        3. Recover individual inverses by "peeling off" elements

    Example:
        >>> field = PrimeField(71)
        >>> inverter = BatchInverter(field)
        >>> elements = [field.element(i) for i in range(1, 11)]
        >>> inverses = inverter.invert_batch(elements)
        >>> all((e * inv).is_one() for e, inv in zip(elements, inverses))
        True
    """

    def __init__(self, field: PrimeField):
        self.field = field

    def invert_batch(self, elements: List[FieldElement]) -> List[FieldElement]:
        """
        Compute inverses of all elements in a batch.

        Args:
            elements: List of field elements to invert

        Returns:
            List of inverses in the same order

        Raises:
            ValueError: If any element is zero
        """
        if not elements:
            return []

        n = len(elements)

        for i, e in enumerate(elements):
            if e.is_zero():
                raise ValueError(f"Cannot invert zero (element {i})")

        # products[i] = elements[0] * elements[1] * ... * elements[i]
        products = [elements[0]]
        for i in range(1, n):
            products.append(products[i - 1] * elements[i])

        inv = products[n - 1].inverse()

        inverses = [self.field.zero()] * n
        for i in range(n - 1, 0, -1):
            # inv = (a[0]*...*a[i])^(-1), so inv * products[i-1] = a[i]^(-1)
            inverses[i] = inv * products[i - 1]
            inv = inv * elements[i]

        inverses[0] = inv

        return inverses

