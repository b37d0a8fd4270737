"""
Round reduction: the prover's per-round computation.

In round i (0-based) the prover has bound x_0 .. x_{i-1} to the challenges
r_1 .. r_i and must send

    h_i(X) = Σ_{b ∈ {0,1}^{v-i-1}} g(r_1, ..., r_i, X, b)

a polynomial in the single free variable X = x_i.

Each term of the sum is one partial evaluation of g. The terms are
independent and field addition is commutative, so the hypercube can be cut
into contiguous index ranges, summed on separate workers and combined.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence
import logging

import numpy as np

from ..common.field import FieldElement
from ..common.polynomial import SparsePolynomial, boolean_hypercube, hypercube_point

logger = logging.getLogger(__name__)


class RoundReducer:
    """
    Computes the round-i message polynomial h_i.

    Attributes:
        num_workers: Threads used to sum over the hypercube. With 1 (the
            default) everything runs in the calling thread.

    Example:
        >>> reducer = RoundReducer()
        >>> h_0 = reducer.reduce(g, 0, [])          # g = 2x³ + xz + yz over Z_71
        >>> print(h_0)
        8*x0^3 + 2*x0 + 1
    """

    def __init__(self, num_workers: int = 1):
        if num_workers < 1:
            raise ValueError("num_workers must be at least 1")
        self.num_workers = num_workers

    def reduce(self, g: SparsePolynomial, round_index: int,
               challenges: Sequence[FieldElement]) -> SparsePolynomial:
        """
        Sum partial evaluations of g over the unbound boolean variables.

        Args:
            g: The polynomial being proven, in v variables
            round_index: i, 0-based
            challenges: r_1 .. r_i, bound to x_0 .. x_{i-1}

        Returns:
            h_i as a SparsePolynomial with num_vars == 1

        Raises:
            ValueError: If round_index is not in [0, v) or the number of
                challenges is not round_index
        """
        v = g.num_vars
        if not 0 <= round_index < v:
            raise ValueError(f"Round {round_index} out of range for {v} variables")
        if len(challenges) != round_index:
            raise ValueError(
                f"Round {round_index} needs {round_index} bound challenges, got {len(challenges)}"
            )

        prefix: List[Optional[FieldElement]] = list(challenges) + [None]
        remaining = v - round_index - 1

        if remaining == 0:
            # Last round: every other variable is bound, nothing to sum over.
            logger.debug("Round %d: final partial evaluation", round_index)
            return g.partial_evaluate(prefix)

        size = 1 << remaining
        workers = min(self.num_workers, size)
        logger.debug("Round %d: summing %d partial evaluations on %d worker(s)",
                     round_index, size, workers)

        if workers == 1:
            result = SparsePolynomial.zero(g.field, 1)
            for b in boolean_hypercube(remaining):
                result = result + g.partial_evaluate(prefix + list(b))
            return result

        chunks = [c for c in np.array_split(np.arange(size), workers) if len(c)]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._reduce_range, g, prefix, remaining,
                                int(chunk[0]), int(chunk[-1]) + 1)
                for chunk in chunks
            ]
            partial_sums = [f.result() for f in futures]

        result = SparsePolynomial.zero(g.field, 1)
        for partial in partial_sums:
            result = result + partial
        return result

    @staticmethod
    def _reduce_range(g: SparsePolynomial, prefix: List[Optional[FieldElement]],
                      remaining: int, start: int, stop: int) -> SparsePolynomial:
        """Sum over hypercube indices [start, stop)."""
        acc = SparsePolynomial.zero(g.field, 1)
        for index in range(start, stop):
            acc = acc + g.partial_evaluate(prefix + list(hypercube_point(index, remaining)))
        return acc

    def __repr__(self) -> str:
        return f"RoundReducer(num_workers={self.num_workers})"


def reduce_to_univariate(g: SparsePolynomial, round_index: int,
                         challenges: Sequence[FieldElement]) -> SparsePolynomial:
    """Single-threaded RoundReducer().reduce(...)."""
    return RoundReducer().reduce(g, round_index, challenges)
