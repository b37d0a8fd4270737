"""
Sum-Check Protocol

The interactive proof that Σ_{b ∈ {0,1}^v} g(b) = C.

Key Components:
    - RoundReducer: Computes each round polynomial (optionally multi-threaded)
    - Prover: Emits one round polynomial per call
    - Verifier: Checks each round, samples challenges, runs the final
      oracle check
    - setup_protocol / run_protocol: Build a matched pair and drive a
      whole session

Usage:
    >>> from sumcheck_toolkit.protocol import Prover, Verifier, make_oracle
    >>>
    >>> prover = Prover(g)
    >>> verifier = Verifier(make_oracle(g), prover.get_claim(), g.num_vars, rng)
    >>> challenge = None
    >>> for _ in range(g.num_vars):
    ...     challenge = verifier.verify_round(prover.prove_round(challenge))
    >>> verifier.accepted
    True
"""

from .reducer import RoundReducer, reduce_to_univariate
from .prover import Prover
from .verifier import Verifier, VerifierState, make_oracle
from .session import RoundData, SumCheckResult, setup_protocol, run_protocol

__all__ = [
    "RoundReducer",
    "reduce_to_univariate",
    "Prover",
    "Verifier",
    "VerifierState",
    "make_oracle",
    "RoundData",
    "SumCheckResult",
    "setup_protocol",
    "run_protocol",
]
