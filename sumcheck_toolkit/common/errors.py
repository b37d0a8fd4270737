"""
Error kinds raised by the sum-check toolkit.

Three families, so callers can tell them apart:

    ConstructionError   - bad Lagrange setup, raised before any round runs
    VerificationError   - the proof is invalid (a soundness failure)
    ProtocolMisuse      - the proof was driven incorrectly (caller error)

Verification errors are never retried: re-sampling challenges does not
turn a failing proof into a valid one.
"""

from __future__ import annotations
from typing import Optional


class SumCheckError(Exception):
    """Base class for every error raised by the toolkit."""


class ConstructionError(SumCheckError):
    """Raised while building Lagrange bases or interpolators."""


class InvalidDomainIndex(ConstructionError, ValueError):
    """Basis index i is outside the domain {0, ..., n-1}."""

    def __init__(self, n: int, i: int):
        super().__init__(f"Basis index {i} is outside the domain {{0, ..., {n - 1}}}")
        self.n = n
        self.i = i


class DegenerateBasis(ConstructionError):
    """Two distinct domain points collide in the field, so a denominator (i - j) is zero."""

    def __init__(self, n: int, i: int, j: int, prime: int):
        super().__init__(
            f"Lagrange basis L_{i} over {{0, ..., {n - 1}}} is degenerate in Z_{prime}: "
            f"{i} - {j} ≡ 0 (mod {prime})"
        )
        self.n = n
        self.i = i
        self.j = j
        self.prime = prime


class VerificationError(SumCheckError):
    """
    A round polynomial failed one of the verifier's checks.

    Attributes:
        round_index: 0-based round in which the check failed
        expected: The value the verifier required (if applicable)
        actual: The value the prover's message produced (if applicable)
    """

    def __init__(self, message: str, round_index: int,
                 expected: Optional[object] = None, actual: Optional[object] = None):
        super().__init__(f"Round {round_index}: {message}")
        self.round_index = round_index
        self.expected = expected
        self.actual = actual


class ArityMismatch(VerificationError):
    """The round polynomial does not have exactly one free variable."""


class DegreeBoundExceeded(VerificationError):
    """The round polynomial's degree is larger than the agreed bound."""


class ClaimMismatch(VerificationError):
    """Round 0: h(0) + h(1) differs from the claimed sum."""


class ConsistencyMismatch(VerificationError):
    """Round i > 0: h_i(0) + h_i(1) differs from h_{i-1}(r_{i-1})."""


class FinalCheckMismatch(VerificationError):
    """Last round: h_{v-1}(r_v) differs from the oracle value g(r_1, ..., r_v)."""


class ProtocolMisuse(SumCheckError):
    """Prover or Verifier called out of order, or after the session ended."""
