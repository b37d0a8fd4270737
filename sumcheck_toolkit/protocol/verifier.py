"""
Sum-check verifier.

The verifier knows the claim C, the number of variables v, and can query g
at a single full point (oracle access). It never sees g's terms.

Each round i it receives h_i(X) and:

    1. checks h_i has exactly one free variable
    2. checks h_i(0) + h_i(1) against C (round 0) or h_{i-1}(r_i) (later)
    3. samples a fresh challenge r_{i+1}
    4. in the last round, checks h_{v-1}(r_v) == g(r_1, ..., r_v) with one
       oracle query

Any failed check rejects the proof for good. A cheating prover survives
with probability at most (d · v) / p, where d bounds the per-round degree.
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from ..common.errors import (
    ArityMismatch,
    ClaimMismatch,
    ConsistencyMismatch,
    DegreeBoundExceeded,
    FinalCheckMismatch,
    ProtocolMisuse,
    VerificationError,
)
from ..common.field import FieldElement
from ..common.polynomial import SparsePolynomial
from ..common.randomness import RandomSource

logger = logging.getLogger(__name__)

Oracle = Callable[[Sequence[FieldElement]], FieldElement]


class VerifierState(Enum):
    ROUND = "round"
    ACCEPT = "accept"
    REJECT = "reject"


def make_oracle(g: SparsePolynomial) -> Oracle:
    """
    Black-box access to g: full assignments in, field values out.

    The returned function exposes evaluation only; it offers no way to
    reach g's terms or to partially evaluate it.
    """
    def oracle(point: Sequence[FieldElement]) -> FieldElement:
        return g.evaluate(point)
    return oracle


class Verifier:
    """
    Stateful sum-check verifier.

    Attributes:
        claim: The asserted value of Σ g(b) over {0,1}^v
        num_vars: v, the number of rounds
        round: Index of the next round to verify (0 .. v)
        state: ROUND while running, then ACCEPT or REJECT
        degree_bound: If set, round polynomials of larger degree are rejected

    Args:
        oracle: Function from a full v-length assignment to g's value
        claim: The claimed sum
        num_vars: v
        rng: Source of challenges. Always injected, never a global.
        degree_bound: Optional per-round degree bound

    Example:
        >>> verifier = Verifier(make_oracle(g), claim, g.num_vars, rng)
        >>> r_1 = verifier.verify_round(prover.prove_round())
    """

    def __init__(self, oracle: Oracle, claim: FieldElement, num_vars: int,
                 rng: RandomSource, degree_bound: Optional[int] = None):
        if num_vars < 1:
            raise ValueError("Sum-check needs a polynomial in at least one variable")
        if degree_bound is not None and degree_bound < 0:
            raise ValueError("degree_bound must be non-negative")
        self._oracle = oracle
        self.field = rng.field
        self.claim = self.field.element(claim)
        self.num_vars = num_vars
        self.degree_bound = degree_bound
        self._rng = rng

        self.round = 0
        self.state = VerifierState.ROUND
        self._challenges: List[FieldElement] = []
        self._previous_poly: Optional[SparsePolynomial] = None

    @property
    def challenges(self) -> Tuple[FieldElement, ...]:
        return tuple(self._challenges)

    @property
    def rng(self) -> RandomSource:
        """The source this verifier draws its challenges from."""
        return self._rng

    @property
    def accepted(self) -> bool:
        """True once the final round has passed every check."""
        return self.state is VerifierState.ACCEPT

    @property
    def rejected(self) -> bool:
        return self.state is VerifierState.REJECT

    def verify_round(self, poly: SparsePolynomial) -> FieldElement:
        """
        Check one round polynomial and return the next challenge.

        Args:
            poly: h_round(X) from the prover

        Returns:
            The challenge r bound to this round's variable

        Raises:
            ProtocolMisuse: If the session already ended (accepted or rejected)
            ArityMismatch, DegreeBoundExceeded, ClaimMismatch,
            ConsistencyMismatch, FinalCheckMismatch: If the proof is invalid.
                The verifier is rejected afterwards.

        Any other exception (a failing oracle or challenge source) also
        rejects the session before propagating. A round only records its
        challenge once every check has passed.
        """
        if self.state is not VerifierState.ROUND:
            raise ProtocolMisuse(f"Verifier already terminated ({self.state.value})")

        try:
            challenge = self._check_round(poly)
        except VerificationError as exc:
            self.state = VerifierState.REJECT
            logger.warning("Verifier rejected in round %d: %s", self.round, exc)
            raise
        except Exception:
            self.state = VerifierState.REJECT
            logger.warning("Verifier aborted in round %d", self.round, exc_info=True)
            raise

        self._challenges.append(challenge)
        self._previous_poly = poly
        self.round += 1
        if self.round == self.num_vars:
            self.state = VerifierState.ACCEPT
            logger.info("Verifier accepted claim %s after %d rounds", self.claim, self.num_vars)
        return challenge

    def _check_round(self, poly: SparsePolynomial) -> FieldElement:
        i = self.round

        if poly.num_vars != 1:
            raise ArityMismatch(
                f"round polynomial has {poly.num_vars} free variables, expected 1",
                i, expected=1, actual=poly.num_vars,
            )
        if self.degree_bound is not None and poly.degree > self.degree_bound:
            raise DegreeBoundExceeded(
                f"round polynomial has degree {poly.degree} > {self.degree_bound}",
                i, expected=self.degree_bound, actual=poly.degree,
            )

        s = poly.evaluate([0]) + poly.evaluate([1])
        if i == 0:
            if s != self.claim:
                raise ClaimMismatch(
                    f"h(0) + h(1) = {s} but the claim is {self.claim}",
                    i, expected=self.claim, actual=s,
                )
        else:
            expected = self._previous_poly.evaluate([self._challenges[-1]])
            if s != expected:
                raise ConsistencyMismatch(
                    f"h(0) + h(1) = {s} but the previous round gives {expected}",
                    i, expected=expected, actual=s,
                )

        r = self._rng.sample_uniform()
        logger.debug("Verifier round %d: s = %s, challenge r = %s", i, s, r)

        if i == self.num_vars - 1:
            final_value = poly.evaluate([r])
            oracle_value = self.field.element(self._oracle(list(self._challenges) + [r]))
            if final_value != oracle_value:
                raise FinalCheckMismatch(
                    f"h({r}) = {final_value} but g(r) = {oracle_value}",
                    i, expected=oracle_value, actual=final_value,
                )

        return r

    def __repr__(self) -> str:
        return (f"Verifier(num_vars={self.num_vars}, round={self.round}, "
                f"state={self.state.value})")
