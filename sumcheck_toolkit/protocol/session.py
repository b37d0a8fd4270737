"""
Driving a complete sum-check session.

setup_protocol() builds a matched Prover/Verifier pair; run_protocol()
alternates them for v rounds and records a transcript:

    claim C
    round 0: h_0(X)   h_0(0) + h_0(1) = C         → r_1
    round 1: h_1(X)   h_1(0) + h_1(1) = h_0(r_1)  → r_2
    ...
    round v-1: ... and h_{v-1}(r_v) = g(r_1, ..., r_v)

An `intercept` hook can rewrite round polynomials between prover and
verifier. It models a dishonest prover and is how the tests and demo show
rejection.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
import logging

from ..common.errors import VerificationError
from ..common.field import FieldElement
from ..common.polynomial import SparsePolynomial
from ..common.randomness import RandomSource, SystemRandomSource
from ..config import ProtocolConfig
from .prover import Prover
from .reducer import RoundReducer
from .verifier import Verifier, make_oracle

logger = logging.getLogger(__name__)

Intercept = Callable[[int, SparsePolynomial], SparsePolynomial]


@dataclass
class RoundData:
    """
    One round of a session transcript.

    Attributes:
        round_index: 0-based round
        polynomial: The round polynomial the verifier received
        round_sum: h(0) + h(1), or None if h was not univariate
        challenge: The verifier's challenge (None if the round was rejected)
    """
    round_index: int
    polynomial: SparsePolynomial
    round_sum: Optional[FieldElement] = None
    challenge: Optional[FieldElement] = None

    def __repr__(self) -> str:
        return f"RoundData(round={self.round_index}, challenge={self.challenge})"


@dataclass
class SumCheckResult:
    """
    Complete result of a sum-check session.

    Attributes:
        claim: The sum that was claimed
        round_data: Transcript, one entry per round that was played
        challenges: All challenges the verifier sampled
        accepted: Whether the verifier accepted
        error: The soundness failure that ended the session, if any
    """
    claim: FieldElement
    round_data: List[RoundData] = field(default_factory=list)
    challenges: Tuple[FieldElement, ...] = ()
    accepted: bool = False
    error: Optional[VerificationError] = None

    @property
    def num_rounds(self) -> int:
        return len(self.round_data)


def _degree_bound(g: SparsePolynomial) -> int:
    """Largest per-variable degree of g, which bounds every round polynomial."""
    return max(g.degree_in(var) for var in range(g.num_vars))


def setup_protocol(g: SparsePolynomial, claim: Optional[FieldElement] = None,
                   rng: Optional[RandomSource] = None,
                   config: Optional[ProtocolConfig] = None) -> Tuple[Prover, Verifier]:
    """
    Build a Prover and a Verifier for the same polynomial.

    The verifier only receives an oracle for g.

    Args:
        g: The polynomial
        claim: The claimed sum; defaults to the honest sum
        rng: Challenge source; defaults to config.rng() or system randomness
        config: Workers / degree-bound settings

    Raises:
        ValueError: If config's field differs from g's field
    """
    if config is not None and config.prime != g.field.prime:
        raise ValueError(f"Config field Z_{config.prime} does not match polynomial field Z_{g.field.prime}")

    num_workers = config.num_workers if config else 1
    prover = Prover(g, RoundReducer(num_workers))

    if claim is None:
        claim = prover.get_claim()
    if rng is None:
        rng = config.rng(g.field) if config else SystemRandomSource(g.field)

    enforce = config.enforce_degree_bound if config else False
    verifier = Verifier(
        make_oracle(g), claim, g.num_vars, rng,
        degree_bound=_degree_bound(g) if enforce else None,
    )
    return prover, verifier


def run_protocol(g: SparsePolynomial, claim: Optional[FieldElement] = None,
                 rng: Optional[RandomSource] = None,
                 config: Optional[ProtocolConfig] = None,
                 intercept: Optional[Intercept] = None) -> SumCheckResult:
    """
    Run all v rounds and return the transcript.

    A soundness failure ends the session early; it is recorded in
    result.error rather than raised. ProtocolMisuse is never caught.

    Args:
        g: The polynomial
        claim: The claimed sum (defaults to the honest sum)
        rng: Challenge source
        config: Session settings
        intercept: Optional (round_index, h) -> h' rewrite applied before
            each round polynomial reaches the verifier

    Returns:
        SumCheckResult
    """
    prover, verifier = setup_protocol(g, claim, rng, config)
    result = SumCheckResult(claim=verifier.claim)

    challenge: Optional[FieldElement] = None
    try:
        for i in range(g.num_vars):
            poly = prover.prove_round(challenge)
            if intercept is not None:
                poly = intercept(i, poly)

            record = RoundData(round_index=i, polynomial=poly)
            if poly.num_vars == 1:
                record.round_sum = poly.evaluate([0]) + poly.evaluate([1])
            result.round_data.append(record)

            challenge = verifier.verify_round(poly)
            record.challenge = challenge
    except VerificationError as exc:
        result.error = exc

    result.challenges = verifier.challenges
    result.accepted = verifier.accepted
    logger.debug("Session finished: accepted=%s after %d round(s)",
                 result.accepted, result.num_rounds)
    return result
