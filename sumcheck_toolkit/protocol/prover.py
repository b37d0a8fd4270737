"""
Sum-check prover.

The prover holds the full polynomial g and answers one round at a time:

    Round 0:      prove_round()        -> h_0(X)
    Round i > 0:  prove_round(r_i)     -> h_i(X), with r_i bound to x_{i-1}

After v rounds the prover is done and refuses further calls.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import logging

from ..common.errors import ProtocolMisuse
from ..common.field import FieldElement
from ..common.polynomial import SparsePolynomial
from .reducer import RoundReducer

logger = logging.getLogger(__name__)


class Prover:
    """
    Stateful honest prover.

    Attributes:
        g: The polynomial whose hypercube sum is being proven
        round: Index of the next round to prove (0 .. v)
        reducer: Computes each round polynomial

    Example:
        >>> prover = Prover(g)
        >>> h_0 = prover.prove_round()
        >>> h_1 = prover.prove_round(field.element(2))
    """

    def __init__(self, g: SparsePolynomial, reducer: Optional[RoundReducer] = None):
        if g.num_vars < 1:
            raise ValueError("Sum-check needs a polynomial in at least one variable")
        self.g = g
        self.reducer = reducer or RoundReducer()
        self.round = 0
        self._challenges: List[FieldElement] = []

    @property
    def num_vars(self) -> int:
        return self.g.num_vars

    @property
    def challenges(self) -> Tuple[FieldElement, ...]:
        """Challenges bound so far, in round order."""
        return tuple(self._challenges)

    @property
    def is_done(self) -> bool:
        return self.round >= self.num_vars

    def get_claim(self) -> FieldElement:
        """The honest claim: Σ g(b) over b ∈ {0,1}^v."""
        return self.g.sum_over_hypercube()

    def prove_round(self, challenge: Optional[FieldElement] = None) -> SparsePolynomial:
        """
        Produce the round polynomial for the current round.

        Args:
            challenge: The verifier's challenge from the previous round.
                Must be None in round 0 and present in every later round.

        Returns:
            h_round(X), a polynomial in one variable

        Raises:
            ProtocolMisuse: On a missing/unexpected challenge, or after
                the last round
        """
        if self.is_done:
            raise ProtocolMisuse(f"Prover already finished all {self.num_vars} rounds")
        if self.round == 0 and challenge is not None:
            raise ProtocolMisuse("Round 0 takes no challenge")
        bound = list(self._challenges)
        if self.round > 0:
            if challenge is None:
                raise ProtocolMisuse(f"Round {self.round} needs the challenge from round {self.round - 1}")
            bound.append(self.g.field.element(challenge))

        poly = self.reducer.reduce(self.g, self.round, bound)
        self._challenges = bound
        logger.debug("Prover round %d: h(X) = %s", self.round, poly)

        self.round += 1
        return poly

    def __repr__(self) -> str:
        return f"Prover(num_vars={self.num_vars}, round={self.round})"
