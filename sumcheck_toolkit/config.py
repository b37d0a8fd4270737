"""
Protocol Configuration for Sum-Check Sessions.

A session is parameterised by the field it runs over, where its challenges
come from, and how much parallelism the prover may use.

Key Parameters:
    - prime: Field modulus. Soundness error is (d · v) / prime, so tiny
      primes are for hand-checkable examples only
    - seed: If set, challenges come from a seeded (reproducible) source;
      if None, from the operating system CSPRNG
    - num_workers: Threads used by the prover's hypercube sum
    - enforce_degree_bound: Reject round polynomials whose degree exceeds
      the polynomial's largest per-variable degree
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .common.field import PrimeField
from .common.randomness import RandomSource, SeededRandomSource, SystemRandomSource


@dataclass
class ProtocolConfig:
    """
    Configuration for one or more sum-check sessions.

    Attributes:
        name: Configuration name for identification
        prime: Field modulus
        seed: Challenge seed (None means system randomness)
        num_workers: Prover threads for the round reduction
        enforce_degree_bound: Have the verifier check round degrees

    Example:
        >>> config = ProtocolConfig(name="local", prime=71, seed=7)
        >>> config.rng().sample_uniform()
        FieldElement(..., mod 71)
    """

    name: str = "default"
    prime: int = PrimeField.GOLDILOCKS_PRIME
    seed: Optional[int] = None
    num_workers: int = 1
    enforce_degree_bound: bool = True

    def __post_init__(self):
        """Validate configuration."""
        if self.prime < 2:
            raise ValueError("prime must be at least 2")
        if self.num_workers < 1:
            raise ValueError("num_workers must be at least 1")

    def field(self) -> PrimeField:
        return PrimeField(self.prime)

    def rng(self, field: Optional[PrimeField] = None) -> RandomSource:
        """A fresh challenge source over `field` (defaults to this config's field)."""
        field = field or self.field()
        if self.seed is None:
            return SystemRandomSource(field)
        return SeededRandomSource(field, self.seed)

    def summary(self) -> str:
        """Return configuration summary string."""
        source = "system CSPRNG" if self.seed is None else f"seeded ({self.seed})"
        return (
            f"ProtocolConfig '{self.name}':\n"
            f"  Field: Z_{self.prime} ({self.prime.bit_length()} bits)\n"
            f"  Challenges: {source}\n"
            f"  Prover workers: {self.num_workers}\n"
            f"  Degree bound check: {'on' if self.enforce_degree_bound else 'off'}"
        )

    def __repr__(self) -> str:
        return (f"ProtocolConfig(name='{self.name}', prime={self.prime}, "
                f"seed={self.seed}, workers={self.num_workers})")


# =============================================================================
# PREDEFINED CONFIGURATIONS
# =============================================================================

def create_test_config(seed: int = 42) -> ProtocolConfig:
    """
    Small field, seeded challenges.

    Every value fits in two digits, so a transcript can be checked by hand.
    """
    return ProtocolConfig(
        name="test",
        prime=PrimeField.SMALL_TEST_PRIME,
        seed=seed,
    )


def create_goldilocks_config() -> ProtocolConfig:
    """Goldilocks field with system randomness."""
    return ProtocolConfig(
        name="goldilocks",
        prime=PrimeField.GOLDILOCKS_PRIME,
        seed=None,
    )


def create_parallel_config(num_workers: int = 4) -> ProtocolConfig:
    """Goldilocks field with a multi-threaded prover."""
    return ProtocolConfig(
        name=f"parallel-{num_workers}",
        prime=PrimeField.GOLDILOCKS_PRIME,
        seed=None,
        num_workers=num_workers,
    )
