"""
Challenge sources for the sum-check verifier.

The verifier never reaches for a module-level random generator: a source is
handed to it at construction. Tests inject a seeded or scripted source so a
session is reproducible; real use injects SystemRandomSource.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union
import random
import secrets

from .field import FieldElement, PrimeField


class RandomSource(ABC):
    """Samples field elements uniformly from Z_p."""

    def __init__(self, field: PrimeField):
        self.field = field

    @abstractmethod
    def sample_uniform(self) -> FieldElement:
        """Return one uniformly random field element."""


class SeededRandomSource(RandomSource):
    """
    Reproducible source backed by its own random.Random instance.

    Not suitable for real proofs: anyone who knows the seed knows every
    challenge in advance.

    Example:
        >>> rng = SeededRandomSource(PrimeField(71), seed=42)
        >>> rng.sample_uniform() == SeededRandomSource(PrimeField(71), seed=42).sample_uniform()
        True
    """

    def __init__(self, field: PrimeField, seed: Optional[int] = None):
        super().__init__(field)
        self.seed = seed
        self._rng = random.Random(seed)

    def sample_uniform(self) -> FieldElement:
        return self.field.random(self._rng)

    def __repr__(self) -> str:
        return f"SeededRandomSource(Z_{self.field.prime}, seed={self.seed})"


class SystemRandomSource(RandomSource):
    """Source backed by the operating system CSPRNG (secrets module)."""

    def sample_uniform(self) -> FieldElement:
        return self.field.element(secrets.randbelow(self.field.prime))

    def __repr__(self) -> str:
        return f"SystemRandomSource(Z_{self.field.prime})"


class ScriptedRandomSource(RandomSource):
    """
    Replays a fixed list of challenges, in order.

    Useful for walking through a session by hand ("use r = 2, 3, 6").

    Raises:
        ValueError: When more challenges are requested than were scripted
    """

    def __init__(self, field: PrimeField, challenges: Iterable[Union[int, FieldElement]]):
        super().__init__(field)
        self._challenges: List[FieldElement] = field.elements(challenges)
        self._next = 0

    def sample_uniform(self) -> FieldElement:
        if self._next >= len(self._challenges):
            raise ValueError(f"Only {len(self._challenges)} challenges were scripted")
        challenge = self._challenges[self._next]
        self._next += 1
        return challenge

    @property
    def remaining(self) -> int:
        return len(self._challenges) - self._next
